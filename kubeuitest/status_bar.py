#!/usr/bin/env python3
"""
status_bar.py - IDE error indicator in the status bar
"""

from typing import Optional

from .robot import WaitTimeoutError
from .snapshot import find_fragment, read_snapshot


class ErrorBarInspector:
    """
    Checks and clears the status-bar error indicator.

    The indicator only exists while the IDE has unread internal errors, so a
    lookup that times out means there is nothing to report.
    """

    def __init__(self, session, timeout: Optional[float] = None):
        self.session = session
        self.timeout = session.config.locate_timeout if timeout is None else timeout

    def has_error(self) -> bool:
        try:
            self.session.locate("errors_icon", timeout=self.timeout)
        except WaitTimeoutError:
            return False
        return True

    def clear_errors(self) -> bool:
        """
        Open the errors dialog and clear all entries.

        Returns True once clearing was attempted, whether or not it took effect.
        """
        try:
            icon = self.session.locate("errors_icon", timeout=self.timeout)
        except WaitTimeoutError:
            return True
        self.session.click_component(icon)

        dialog = self.session.locate("errors_dialog")
        self.session.activate(find_fragment(read_snapshot(self.session, dialog), "Clear all"))
        return True


def has_error(session) -> bool:
    return ErrorBarInspector(session).has_error()


def clear_errors(session) -> bool:
    return ErrorBarInspector(session).clear_errors()
