"""Offloading of blocking calls from the event loop.

Store queries and Argon2 hashing are synchronous. Running them in the default
executor keeps one user's I/O or hashing from stalling every other request.
The caller's context is copied into the worker so log lines emitted there
keep the current request id.
"""

from __future__ import annotations

import asyncio
import contextvars
import functools
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run ``func(*args, **kwargs)`` in the default thread pool and await the result."""
    loop = asyncio.get_running_loop()
    ctx = contextvars.copy_context()
    return await loop.run_in_executor(None, functools.partial(ctx.run, func, *args, **kwargs))
