# File: src/parking_toll/application/__init__.py
"""Application layer: use cases over the parking lot aggregate"""
