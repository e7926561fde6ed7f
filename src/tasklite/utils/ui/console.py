"""Shared Rich console."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Console for all command output. Auto-highlighting is off so ids and
    timestamps print unstyled."""
    return Console(highlight=False)
