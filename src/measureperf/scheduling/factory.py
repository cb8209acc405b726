"""
Scheduler selection.
"""

import asyncio
import logging

from ..validation import validate_enum_choice
from .asyncio_scheduler import AsyncioScheduler
from .base import Scheduler
from .thread_scheduler import ThreadScheduler

logger = logging.getLogger(__name__)


def _has_running_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def resolve_scheduler(name: str = "auto") -> Scheduler:
    """
    Create a scheduler by name.

    Args:
        name: "asyncio", "thread", or "auto". "auto" chooses asyncio when
            called with an event loop running in this thread, and a
            background thread otherwise.

    Returns:
        A new Scheduler instance

    Raises:
        ValidationError: If the name is unknown
    """
    name = validate_enum_choice(
        name, choices=["auto", "asyncio", "thread"], field_name="scheduler"
    )
    if name == "auto":
        name = "asyncio" if _has_running_loop() else "thread"
        logger.debug(f"Resolved 'auto' scheduler to '{name}'")

    if name == "asyncio":
        return AsyncioScheduler()
    return ThreadScheduler()
