#!/usr/bin/env python3
"""
presence.py - Check whether a resource is shown

is_present can match by substring, is_absent always matches exactly, so the
two are only inverses of each other in exact mode.
"""

from typing import Optional

from .robot import AssertionFailedError
from .snapshot import index_of, read_snapshot
from .wait import wait_until


class ResourcePresenceChecker:
    """
    Presence and absence of a resource's text in a container.

    Usage:
        checker = ResourcePresenceChecker(session)
        assert checker.is_present("my-pod", exact=True)
    """

    def __init__(self, session, container_kind: str = "kubernetes_tree"):
        self.session = session
        self.container = session.component(container_kind)

    def is_present(self, name: str, exact: bool = True) -> bool:
        """
        Args:
            name: Text to look for
            exact: Require equality instead of containment
        """
        return index_of(read_snapshot(self.session, self.container), name, exact) is not None

    def is_absent(self, name: str) -> bool:
        """True iff no fragment equals name exactly."""
        return index_of(read_snapshot(self.session, self.container), name, exact=True) is None

    def wait_until_present(self, name: str, exact: bool = True,
                           timeout: Optional[float] = None):
        config = self.session.config
        wait_until(config.tree_timeout if timeout is None else timeout,
                   config.poll_interval,
                   f"Resource '{name}' did not appear.",
                   lambda: self.is_present(name, exact))

    def wait_until_absent(self, name: str, timeout: Optional[float] = None):
        config = self.session.config
        wait_until(config.tree_timeout if timeout is None else timeout,
                   config.poll_interval,
                   f"Resource '{name}' did not disappear.",
                   lambda: self.is_absent(name))

    def assert_present(self, name: str, exact: bool = True, msg: str = ""):
        if not self.is_present(name, exact):
            raise AssertionFailedError(msg or f"Resource '{name}' not found")

    def assert_absent(self, name: str, msg: str = ""):
        if not self.is_absent(name):
            raise AssertionFailedError(msg or f"Resource '{name}' is still shown")
