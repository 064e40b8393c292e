# File: src/parking_toll/infrastructure/logging_config.py
"""
Logging setup for applications embedding the parking lot

The library itself only creates loggers (one per class); handlers are
installed by the application, typically once at start-up.
"""

from typing import List, Optional
import logging
import os
import sys


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Setup application logging configuration"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger("parking_toll")
