"""Burger House ordering and table booking core"""

__version__ = "1.0.0"
