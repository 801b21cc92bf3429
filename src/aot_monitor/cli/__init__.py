"""
Command-line entry points.
"""

from .app import main

__all__ = ["main"]
