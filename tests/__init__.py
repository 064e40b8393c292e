"""Tests for the Parking Toll library"""
