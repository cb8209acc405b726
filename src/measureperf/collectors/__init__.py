"""
Memory readers for measurement sessions.
"""

from .rss_psutil import MemoryReader, current_memory_bytes

__all__ = [
    "MemoryReader",
    "current_memory_bytes",
]
