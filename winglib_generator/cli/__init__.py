"""
CLI module for the winglib generator.

Provides the ``winglib`` console script entry point.
"""

from .commands import main

__all__ = ["main"]
