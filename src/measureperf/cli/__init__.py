"""
Command-line interface for the measureperf package.
"""

from .main import main, main_cli

__all__ = [
    "main",
    "main_cli",
]
