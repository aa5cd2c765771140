"""
Helpers for lazy streams.
"""
from typing import Any, Optional


def known_length(stream: Any) -> Optional[int]:
    """``len(stream)`` when the stream can report it, else None."""
    try:
        return len(stream)
    except TypeError:
        return None
