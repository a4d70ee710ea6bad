"""Blocking twins of the async reminder entry points.

The CLI and other synchronous callers use ``save_entry_sync`` and
``extract_reminder_sync``; both are built here from the coroutine
functions so the two variants cannot drift apart.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable, Coroutine
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def blocking(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Wrap coroutine function *func* so callers get its result directly.

    With no event loop running in the calling thread the coroutine runs on
    a fresh loop.  Inside a running loop (a notebook, a UI toolkit) it runs
    on a fresh loop in a one-off worker thread, since the current loop
    cannot be re-entered.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(func(*args, **kwargs))
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{func.__name__}-sync") as executor:
            return executor.submit(asyncio.run, func(*args, **kwargs)).result()

    wrapper.__name__ = f"{func.__name__}_sync"
    wrapper.__qualname__ = wrapper.__name__
    wrapper.__doc__ = f"Blocking variant of :func:`{func.__name__}` for synchronous callers."
    return wrapper
