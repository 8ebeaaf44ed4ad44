"""
Kubernetes plugin UI testing helpers

This package drives an IDE running the Kubernetes plugin through its robot
server: it browses the resource tree, edits resources in the editor and
checks what the IDE shows.

Quick Start:
    from kubeuitest import Session, TreeNavigator, ResourcePresenceChecker, run_tests

    session = Session.connect()
    navigator = TreeNavigator(session)
    checker = ResourcePresenceChecker(session)

    exit(run_tests(
        ("Nodes open", lambda: navigator.open_path(["Nodes"])),
        ("Node shown", lambda: checker.is_present("minikube")),
    ))
"""

from .robot import (
    RobotClient,
    UITestException,
    IdeNotRunningError,
    CommandFailedError,
    AssertionFailedError,
    WaitTimeoutError,
    FragmentNotFoundError,
)
from .keyboard import Keyboard, KeyboardInputError
from .session import Session, SessionConfig, Component, DEFAULT_LOCATORS
from .snapshot import TextFragment, ResourceHandle, read_snapshot
from .wait import wait_until, wait_for
from .tree import TreeNavigator, NodeState
from .presence import ResourcePresenceChecker
from .editor import EditorWorkflow, WorkflowState
from .status_bar import ErrorBarInspector, has_error, clear_errors
from .notifications import EditorNotificationInspector, pull_message
from .failure_capture import FailureCapture
from .runner import run_tests, run_interactive_tests, ScenarioContext, ensure_clean_state

__version__ = "1.0.0"
__all__ = [
    "RobotClient",
    "UITestException",
    "IdeNotRunningError",
    "CommandFailedError",
    "AssertionFailedError",
    "WaitTimeoutError",
    "FragmentNotFoundError",
    "Keyboard",
    "KeyboardInputError",
    "Session",
    "SessionConfig",
    "Component",
    "DEFAULT_LOCATORS",
    "TextFragment",
    "ResourceHandle",
    "read_snapshot",
    "wait_until",
    "wait_for",
    "TreeNavigator",
    "NodeState",
    "ResourcePresenceChecker",
    "EditorWorkflow",
    "WorkflowState",
    "ErrorBarInspector",
    "has_error",
    "clear_errors",
    "EditorNotificationInspector",
    "pull_message",
    "FailureCapture",
    "run_tests",
    "run_interactive_tests",
    "ScenarioContext",
    "ensure_clean_state",
]
