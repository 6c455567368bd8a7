# src/composer/utils/loop_runner.py
from __future__ import annotations

import asyncio
import threading
from typing import Any, Coroutine, Optional

_MAIN_LOOP: Optional[asyncio.AbstractEventLoop] = None
_THREAD: Optional[threading.Thread] = None


def ensure_background_loop() -> None:
    """
    Ensures a persistent asyncio event loop is running on a background thread.
    If the loop is already running, this function does nothing.
    """
    global _MAIN_LOOP, _THREAD
    if _MAIN_LOOP is not None:
        return

    loop = asyncio.new_event_loop()

    def _run_loop(loop_: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop_)
        loop_.run_forever()

    # Daemon thread: the loop dies with the process
    t = threading.Thread(target=_run_loop, args=(loop,), daemon=True)
    t.start()

    _MAIN_LOOP = loop
    _THREAD = t


def run_on_main_loop(coro: Coroutine[Any, Any, Any], timeout: float | None = None) -> Any:
    """
    Executes a coroutine on the persistent background loop and waits for the result.
    Falls back to asyncio.run() if no background loop exists.

    Every conversion, browser call and baseline probe goes through this one
    loop, so Playwright objects created on it stay usable across requests.

    Args:
        coro: The coroutine to execute.
        timeout (float | None): Optional timeout in seconds to wait for the result.

    Returns:
        Any: The result of the coroutine.
    """
    if _MAIN_LOOP is not None:
        fut = asyncio.run_coroutine_threadsafe(coro, _MAIN_LOOP)
        return fut.result(timeout)
    return asyncio.run(coro)


def stop_background_loop() -> None:
    global _MAIN_LOOP, _THREAD
    if _MAIN_LOOP is None:
        return
    _MAIN_LOOP.call_soon_threadsafe(_MAIN_LOOP.stop)
    if _THREAD is not None:
        _THREAD.join(timeout=5)
    _MAIN_LOOP = None
    _THREAD = None
