"""Tests for the blocking-call offloading helper."""

import threading

import pytest

from quotes_api.core.concurrency import run_blocking
from quotes_api.core.logging import clear_request_id, get_request_id, set_request_id


@pytest.mark.asyncio
async def test_runs_in_a_worker_thread() -> None:
    loop_thread = threading.get_ident()

    worker_thread = await run_blocking(threading.get_ident)

    assert worker_thread != loop_thread


@pytest.mark.asyncio
async def test_passes_positional_and_keyword_arguments() -> None:
    def combine(a, b, *, sep):
        return f"{a}{sep}{b}"

    assert await run_blocking(combine, "x", "y", sep="-") == "x-y"


@pytest.mark.asyncio
async def test_request_id_is_visible_in_the_worker() -> None:
    set_request_id("req-worker-1")
    try:
        assert await run_blocking(get_request_id) == "req-worker-1"
    finally:
        clear_request_id()


@pytest.mark.asyncio
async def test_exceptions_propagate() -> None:
    def boom():
        raise RuntimeError("store down")

    with pytest.raises(RuntimeError, match="store down"):
        await run_blocking(boom)
