#!/usr/bin/env python3
"""
tree.py - Navigate the Kubernetes resource tree

Expanding, collapsing and opening nodes all use the same double-click gesture
in the IDE. The navigator reads the state of a node from the tree as shown
before every toggle, so a node collapsed or expanded behind its back (by the
IDE, the user or another navigator) is still toggled in the intended
direction.
"""

from enum import Enum
from typing import Iterable

from .robot import FragmentNotFoundError
from .snapshot import (
    ResourceHandle, Snapshot, TextFragment, find_fragment, fragment_after, index_of, read_snapshot,
)
from .wait import wait_until


class NodeState(Enum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class TreeNavigator:
    """
    Locates, expands and opens resource nodes.

    Usage:
        navigator = TreeNavigator(session)
        navigator.open_path(["Nodes"])
        node = navigator.find_relative("Nodes", 0)
    """

    def __init__(self, session, tree_kind: str = "kubernetes_tree"):
        self.session = session
        self.tree = session.component(tree_kind)

    def snapshot(self) -> Snapshot:
        return read_snapshot(self.session, self.tree)

    def node_state(self, name: str) -> NodeState:
        """State of the node named exactly name, as the tree currently shows it."""
        return self._state_in(self.snapshot(), name)

    def _state_in(self, snapshot: Snapshot, name: str) -> NodeState:
        """
        The root is expanded iff the child marker is shown. Any other node is
        expanded iff the row right below it is indented deeper. Nodes that are
        not shown count as collapsed.
        """
        index = index_of(snapshot, name, exact=True)
        if index is None:
            return NodeState.COLLAPSED
        if index == 0:
            shown = self._cluster_shown(snapshot)
        else:
            below = index + 1
            shown = below < len(snapshot) and snapshot[below].x > snapshot[index].x
        return NodeState.EXPANDED if shown else NodeState.COLLAPSED

    # Predicates

    def is_loaded(self) -> bool:
        """True when no node is still showing the loading placeholder."""
        marker = self.session.config.loading_marker
        return not any(marker in fragment.text for fragment in self.snapshot())

    def _cluster_shown(self, snapshot: Snapshot) -> bool:
        marker = self.session.config.cluster_child_marker
        return any(marker in fragment.text for fragment in snapshot)

    def is_cluster_opened(self) -> bool:
        return self._cluster_shown(self.snapshot())

    # Navigation

    def _root(self, snapshot: Snapshot) -> TextFragment:
        if not snapshot:
            raise FragmentNotFoundError("Kubernetes tree is empty")
        return snapshot[0]

    def open_cluster(self):
        """
        Expand the cluster node so its resource categories are visible.

        Raises:
            WaitTimeoutError: If the categories do not appear in time
        """
        config = self.session.config
        snapshot = self.snapshot()
        root = self._root(snapshot)
        if not self._cluster_shown(snapshot):
            self.session.double_activate(root)
        wait_until(config.tree_timeout, config.poll_interval,
                   "Kubernetes Tree View is not available.", self.is_cluster_opened)

    def expand(self, name: str):
        """Expand one node by display name and wait for its children to load."""
        config = self.session.config
        snapshot = self.snapshot()
        if self._state_in(snapshot, name) is NodeState.COLLAPSED:
            self.session.double_activate(find_fragment(snapshot, name))
        wait_until(config.tree_timeout, config.poll_interval,
                   "Resources is not available.", self.is_loaded)

    def open_path(self, names: Iterable[str]):
        """
        Expand the cluster, then every node along names.

        After return the tree shows the path expanded and nothing is loading.
        """
        self.open_cluster()
        for name in names:
            self.expand(name)

    def collapse(self):
        """Hide the cluster content. Does nothing when it is already hidden."""
        snapshot = self.snapshot()
        root = self._root(snapshot)
        if self._cluster_shown(snapshot):
            self.session.double_activate(root)

    def find_relative(self, parent_name: str, offset: int) -> TextFragment:
        """
        The node `offset` positions below the first node containing parent_name.

        Raises:
            FragmentNotFoundError: If the parent is not shown or the offset runs past the tree
        """
        return fragment_after(self.snapshot(), parent_name, offset)

    def resolve(self, handle: ResourceHandle) -> TextFragment:
        return handle.resolve(self.snapshot())

    def open_resource(self, handle: ResourceHandle) -> TextFragment:
        """Double-click the node a handle resolves to and return it."""
        fragment = self.resolve(handle)
        self.session.double_activate(fragment)
        return fragment
