from __future__ import annotations

import time
from typing import Callable

import pytest


def _eventually(predicate: Callable[[], bool], timeout: float = 5.0, interval: float = 0.02) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def eventually():
    """Poll a predicate until it holds; watcher threads deliver asynchronously."""
    return _eventually
