# File: src/parking_toll/__main__.py
import sys

from .main import main

sys.exit(main())
