#!/usr/bin/env python3
"""
notifications.py - Editor notification banners

When a resource open in an editor changes on the cluster, the plugin shows a
banner above the editor:

    Node 'minikube' changed on cluster. Pull?    Pull  Push  Diff  Ignore

Push is only offered when the local copy can be pushed. The same panel hosts
the prompt shown while local edits are not yet pushed.
"""

from typing import List, Optional

from .robot import FragmentNotFoundError
from .snapshot import Snapshot, find_fragment, read_snapshot
from .wait import wait_until

PULL_MESSAGE = "{kind} '{name}' changed on cluster. Pull?"
NOTIFICATION_ACTIONS = ("Pull", "Push", "Diff", "Ignore")


def pull_message(kind: str, name: str) -> str:
    return PULL_MESSAGE.format(kind=kind, name=name)


class EditorNotificationInspector:
    """
    Reads and drives the editor notification panel.

    Usage:
        notifications = EditorNotificationInspector(session)
        notifications.wait_for_pull_notification("Node", "minikube")
        notifications.activate_action("Pull")
    """

    def __init__(self, session):
        self.session = session
        self.panel = session.component("editor_notifications")

    def snapshot(self) -> Snapshot:
        """Fragments of the panel, empty when no banner is shown."""
        if not self.session.is_shown(self.panel.kind):
            return ()
        return read_snapshot(self.session, self.panel)

    def has_pull_notification(self, kind: str, name: str) -> bool:
        message = pull_message(kind, name)
        return any(message in fragment.text for fragment in self.snapshot())

    def wait_for_pull_notification(self, kind: str, name: str,
                                   timeout: Optional[float] = None):
        config = self.session.config
        wait_until(config.tree_timeout if timeout is None else timeout,
                   config.poll_interval,
                   f"No pull notification for {kind} '{name}'.",
                   lambda: self.has_pull_notification(kind, name))

    def available_actions(self) -> List[str]:
        """Banner actions currently offered, in display order."""
        shown = {fragment.text for fragment in self.snapshot()}
        return [action for action in NOTIFICATION_ACTIONS if action in shown]

    def activate_action(self, action: str):
        """
        Click one of the banner actions.

        Raises:
            FragmentNotFoundError: If the action is unknown or not offered
        """
        if action not in NOTIFICATION_ACTIONS:
            raise FragmentNotFoundError(f"Unknown notification action: {action}")
        self.session.activate(find_fragment(self.snapshot(), action))

    def is_push_pending(self) -> bool:
        """
        True while the panel still prompts to push local changes.

        Action labels never count: the pull banner offers its own Push.
        """
        markers = self.session.config.push_pending_markers
        return any(marker in fragment.text
                   for fragment in self.snapshot()
                   if fragment.text not in NOTIFICATION_ACTIONS
                   for marker in markers)
