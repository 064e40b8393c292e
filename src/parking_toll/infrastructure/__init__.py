# File: src/parking_toll/infrastructure/__init__.py
"""Infrastructure layer: factories, configuration, logging and messaging"""
