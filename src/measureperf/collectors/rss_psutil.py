"""
Resident memory reader using the 'psutil' library.

This module provides current_memory_bytes(), the memory collaborator used by
measurement sessions. It is a read-only query of the current process and may
be called from any thread or session without coordination.
"""

import logging
import os
import threading
from typing import Callable, Optional

import psutil

logger = logging.getLogger(__name__)

# A zero-argument callable returning resident memory in bytes.
MemoryReader = Callable[[], int]

_process: Optional[psutil.Process] = None
_process_lock = threading.Lock()


def _current_process() -> psutil.Process:
    """Return a cached psutil.Process for this process, refreshed after fork."""
    global _process
    with _process_lock:
        if _process is None or _process.pid != os.getpid():
            _process = psutil.Process(os.getpid())
            logger.debug(f"Created psutil handle for pid {_process.pid}")
        return _process


def current_memory_bytes() -> int:
    """
    Return the resident set size (RSS) of the current process in bytes.

    Raises:
        psutil.Error: If the platform query fails
    """
    return int(_current_process().memory_info().rss)
