#!/usr/bin/env python3
"""
wait.py - Poll-and-wait helpers

The IDE populates its views asynchronously (tree loading, label rendering)
and exposes no callback channel, so every synchronization point is a bounded
fixed-interval poll of a read-only predicate.
"""

import time
from typing import Callable

from .robot import WaitTimeoutError


def wait_until(timeout: float, interval: float, description: str,
               predicate: Callable[[], bool]) -> None:
    """
    Block until predicate() is true.

    The predicate is evaluated immediately, then every `interval` seconds.
    It must not mutate the UI, since it may run many times.

    Args:
        timeout: Maximum seconds to wait
        interval: Seconds between evaluations
        description: Reported when the wait fails
        predicate: Read-only check of the UI state

    Raises:
        WaitTimeoutError: If predicate never became true within timeout
    """
    start = time.time()
    attempts = 0
    while True:
        attempts += 1
        if predicate():
            return
        remaining = timeout - (time.time() - start)
        if remaining <= 0:
            raise WaitTimeoutError(description, timeout, attempts)
        time.sleep(min(interval, remaining))


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0,
             interval: float = 0.2) -> bool:
    """
    Wait for a condition without raising.

    Returns:
        True if the condition became true, False if timeout
    """
    try:
        wait_until(timeout, interval, "condition", predicate)
    except WaitTimeoutError:
        return False
    return True
