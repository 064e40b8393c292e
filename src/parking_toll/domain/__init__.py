# File: src/parking_toll/domain/__init__.py
"""Domain layer: models, strategies and the parking lot aggregate"""
