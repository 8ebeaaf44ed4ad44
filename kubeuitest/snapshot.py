#!/usr/bin/env python3
"""
snapshot.py - Read the visible text of a UI container

A snapshot is the ordered tuple of text fragments a container renders at one
instant. It is never cached: the IDE mutates its views on its own, so every
query reads a fresh snapshot.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .robot import FragmentNotFoundError


@dataclass(frozen=True)
class TextFragment:
    """One piece of rendered text and where it sits inside its container."""
    text: str
    x: int
    y: int
    locator: str


Snapshot = Tuple[TextFragment, ...]


def read_snapshot(session, component) -> Snapshot:
    """Capture the fragments of a component in on-screen order."""
    return tuple(
        TextFragment(item.get('text', ''), int(item.get('x', 0)), int(item.get('y', 0)),
                     component.locator)
        for item in session.robot.find_all_text(component.locator)
    )


def texts(snapshot: Snapshot) -> List[str]:
    return [fragment.text for fragment in snapshot]


def matches(fragment: TextFragment, text: str, exact: bool) -> bool:
    if exact:
        return fragment.text == text
    return text in fragment.text


def index_of(snapshot: Snapshot, text: str, exact: bool = False) -> Optional[int]:
    """Position of the first fragment matching text, or None."""
    for i, fragment in enumerate(snapshot):
        if matches(fragment, text, exact):
            return i
    return None


def find_fragment(snapshot: Snapshot, text: str, exact: bool = True) -> TextFragment:
    """
    First fragment matching text.

    Raises:
        FragmentNotFoundError: If no fragment matches
    """
    index = index_of(snapshot, text, exact)
    if index is None:
        raise FragmentNotFoundError(f"Text '{text}' not found among {len(snapshot)} fragments")
    return snapshot[index]


def fragment_after(snapshot: Snapshot, anchor: str, offset: int,
                   exact: bool = False) -> TextFragment:
    """
    Fragment at (anchor position + offset + 1).

    Args:
        snapshot: Fragments to search
        anchor: Text of the fragment to count from
        offset: 0 selects the fragment right after the anchor
        exact: Match the anchor by equality instead of containment

    Raises:
        FragmentNotFoundError: If the anchor is missing or the target is out of range
    """
    anchor_index = index_of(snapshot, anchor, exact)
    if anchor_index is None:
        raise FragmentNotFoundError(f"Anchor '{anchor}' not found")
    target = anchor_index + offset + 1
    if not 0 <= target < len(snapshot):
        raise FragmentNotFoundError(
            f"No fragment at offset {offset} after '{anchor}' "
            f"(index {target}, {len(snapshot)} fragments)"
        )
    return snapshot[target]


@dataclass(frozen=True)
class ResourceHandle:
    """
    Logical identifier used to re-locate a resource across snapshots.

    Either a display name, or a parent name plus offset among its children.
    """
    name: Optional[str] = None
    parent: Optional[str] = None
    offset: int = 0

    @classmethod
    def by_name(cls, name: str) -> "ResourceHandle":
        return cls(name=name)

    @classmethod
    def in_parent(cls, parent: str, offset: int = 0) -> "ResourceHandle":
        return cls(parent=parent, offset=offset)

    def resolve(self, snapshot: Snapshot) -> TextFragment:
        if self.parent is not None:
            return fragment_after(snapshot, self.parent, self.offset)
        if self.name is None:
            raise FragmentNotFoundError("Empty resource handle")
        return find_fragment(snapshot, self.name)

    def __str__(self):
        if self.parent is not None:
            return f"{self.parent}[{self.offset}]"
        return str(self.name)
