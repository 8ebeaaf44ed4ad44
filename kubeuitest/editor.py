#!/usr/bin/env python3
"""
editor.py - Edit a resource in the IDE and push it to the cluster

The workflow walks a fixed sequence of states:

    CLOSED_TREE -> TREE_OPEN -> EDITOR_OPEN -> FIELD_INSERTED
        -> SUBMITTED -> EDITOR_REOPENED -> VERIFIED

Each step can be called on its own (so a scenario can assert in between) or
all at once through run().
"""

from enum import Enum
from typing import Optional, Sequence

from .notifications import EditorNotificationInspector
from .robot import FragmentNotFoundError, UITestException
from .snapshot import ResourceHandle, fragment_after, read_snapshot
from .tree import TreeNavigator
from .wait import wait_until


class WorkflowState(Enum):
    CLOSED_TREE = "closed_tree"
    TREE_OPEN = "tree_open"
    EDITOR_OPEN = "editor_open"
    FIELD_INSERTED = "field_inserted"
    SUBMITTED = "submitted"
    EDITOR_REOPENED = "editor_reopened"
    VERIFIED = "verified"


class EditorWorkflow:
    """
    Open a resource, insert a line under a section, push and verify.

    Args:
        session: Session driving the IDE
        path: Tree nodes to expand below the cluster, e.g. ["Nodes"]
        resource: Handle of the resource to edit
        insert_text: Literal line typed into the editor
        verify_text: Substring expected in the reopened editor
        section: Editor text the new line is inserted under

    Usage:
        workflow = EditorWorkflow(session, ["Nodes"], ResourceHandle.in_parent("Nodes", 0),
                                  '    some_label: "some_label"', "some_label")
        assert workflow.run()
    """

    def __init__(self, session, path: Sequence[str], resource: ResourceHandle,
                 insert_text: str, verify_text: str, section: str = "labels"):
        self.session = session
        self.path = list(path)
        self.resource = resource
        self.insert_text = insert_text
        self.verify_text = verify_text
        self.section = section
        self.navigator = TreeNavigator(session)
        self.notifications = EditorNotificationInspector(session)
        self.state = WorkflowState.CLOSED_TREE
        self.editor_title: Optional[str] = None
        self.verified: Optional[bool] = None

    def _expect(self, state: WorkflowState):
        if self.state is not state:
            raise UITestException(
                f"Workflow is in state {self.state.value}, expected {state.value}"
            )

    def _open_editor(self, handle: ResourceHandle):
        fragment = self.navigator.open_resource(handle)
        self.session.locate("editor")
        return fragment

    def open_tree(self):
        self._expect(WorkflowState.CLOSED_TREE)
        self.navigator.open_path(self.path)
        self.state = WorkflowState.TREE_OPEN

    def open_editor(self):
        self._expect(WorkflowState.TREE_OPEN)
        self.editor_title = self._open_editor(self.resource).text
        self.state = WorkflowState.EDITOR_OPEN

    def insert_field(self):
        """
        Type insert_text on the first entry under the section.

        The editor renders a separator fragment after every token, so the
        first entry is two fragments past the section key.
        """
        self._expect(WorkflowState.EDITOR_OPEN)
        editor = self.session.component("editor")
        place = fragment_after(read_snapshot(self.session, editor), self.section, 1, exact=True)
        self.session.activate(place)
        keyboard = self.session.keyboard
        keyboard.type_text(self.insert_text)
        keyboard.press_enter()
        keyboard.press_backspace()  # undo the auto-indent of the new line
        self.state = WorkflowState.FIELD_INSERTED

    def submit(self):
        """Push the edited resource and wait until the panel stops prompting to push."""
        self._expect(WorkflowState.FIELD_INSERTED)
        config = self.session.config
        toolbar = self.session.locate("editor_toolbar")
        self.session.invoke_action(toolbar, config.push_action)
        wait_until(config.push_timeout, config.poll_interval,
                   "Push to cluster was not confirmed.",
                   lambda: not self.notifications.is_push_pending())
        self.state = WorkflowState.SUBMITTED

    def _tab(self, snapshot):
        """The tab labeled with the editor title, alone or followed by a file extension."""
        for fragment in snapshot:
            if fragment.text == self.editor_title or fragment.text.startswith(f"{self.editor_title}."):
                return fragment
        raise FragmentNotFoundError(f"No editor tab for '{self.editor_title}'")

    def close_editor(self):
        tabs = self.session.locate("editor_tabs")
        self.session.activate(self._tab(read_snapshot(self.session, tabs)))
        self.session.keyboard.shortcut("ctrl", "F4")

    def reopen(self):
        self._expect(WorkflowState.SUBMITTED)
        self.close_editor()
        self.navigator.collapse()
        self.navigator.open_path(self.path)
        self._open_editor(ResourceHandle.by_name(self.editor_title))
        self.state = WorkflowState.EDITOR_REOPENED

    def verify(self) -> bool:
        self._expect(WorkflowState.EDITOR_REOPENED)
        editor = self.session.component("editor")
        self.verified = any(self.verify_text in fragment.text
                            for fragment in read_snapshot(self.session, editor))
        self.state = WorkflowState.VERIFIED
        return self.verified

    def run(self) -> bool:
        """Run every step, close the editor and the tree, and return the verification."""
        self.open_tree()
        self.open_editor()
        self.insert_field()
        self.submit()
        self.reopen()
        result = self.verify()
        self.close_editor()
        self.navigator.collapse()
        return result
