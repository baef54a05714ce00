from __future__ import annotations

import time
from typing import Callable, TypeVar

T = TypeVar("T")


def sleep(ms: int) -> None:
    time.sleep(ms / 1000)


def wait_for_condition(condition: Callable[[], bool], timeout: int = 30000, interval: int = 500) -> bool:
    """Poll `condition` every `interval` ms until it holds or `timeout` ms pass."""
    deadline = time.monotonic() + timeout / 1000
    while time.monotonic() < deadline:
        if condition():
            return True
        sleep(interval)
    raise TimeoutError(f"Condition not met within {timeout}ms")


def retry(fn: Callable[[], T], max_retries: int = 3, delay: int = 1000) -> T:
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")
    for attempt in range(max_retries):
        try:
            return fn()
        except Exception:
            if attempt == max_retries - 1:
                raise
            sleep(delay)
    raise AssertionError("unreachable")
