#!/usr/bin/env python3
"""
session.py - Explicit test session and configuration

A Session bundles everything an operation needs to drive the IDE: the robot
client, the keyboard and the SessionConfig. Every navigator, checker and
workflow receives a Session instead of reaching for global state.

Usage:
    from kubeuitest import Session

    session = Session.connect()
    tree = session.locate("kubernetes_tree")
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .keyboard import Keyboard
from .robot import RobotClient, UITestException
from .wait import wait_until


# XPath locators for the IDE regions the tests touch
DEFAULT_LOCATORS = {
    'kubernetes_tree': "//div[@accessiblename='Kubernetes' and @class='InternalDecoratorImpl']"
                       "//div[@class='Tree']",
    'editor': "//div[@class='EditorsSplitters']//div[@class='EditorComponentImpl']",
    'editor_tabs': "//div[@class='EditorsSplitters']//div[@class='EditorTabs']",
    'editor_toolbar': "//div[@class='EditorsSplitters']//div[@class='ActionToolbarImpl']",
    'editor_notifications': "//div[@class='EditorsSplitters']//div[@class='EditorNotificationPanel']",
    'status_bar': "//div[@class='IdeStatusBarImpl']",
    'errors_icon': "//div[@class='IdeStatusBarImpl']//div[@class='IdeErrorsIcon']",
    'errors_dialog': "//div[@class='MyDialog' and @accessiblename='IDE Internal Errors']",
}


@dataclass
class SessionConfig:
    """Timeouts, markers and locators used by a session."""
    tree_timeout: float = 15.0
    poll_interval: float = 1.0
    locate_timeout: float = 5.0
    locate_interval: float = 0.5
    push_timeout: float = 15.0
    loading_marker: str = "loading..."
    cluster_child_marker: str = "Nodes"
    push_action: str = "Push to Cluster"
    push_pending_markers: Tuple[str, ...] = ("modified locally",)
    robot_path: Optional[str] = None
    capture_dir: str = "/tmp/kubeuitest_failures"
    locators: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LOCATORS))

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "SessionConfig":
        """
        Build a config from environment variables.

        Recognized variables:
            IDE_ROBOT_PATH, KUBEUITEST_TREE_TIMEOUT,
            KUBEUITEST_POLL_INTERVAL, KUBEUITEST_CAPTURE_DIR
        """
        env = os.environ if environ is None else environ
        config = cls()
        config.robot_path = env.get('IDE_ROBOT_PATH') or None
        try:
            if 'KUBEUITEST_TREE_TIMEOUT' in env:
                config.tree_timeout = float(env['KUBEUITEST_TREE_TIMEOUT'])
            if 'KUBEUITEST_POLL_INTERVAL' in env:
                config.poll_interval = float(env['KUBEUITEST_POLL_INTERVAL'])
        except ValueError as e:
            raise UITestException(f"Invalid timing value in environment: {e}")
        if env.get('KUBEUITEST_CAPTURE_DIR'):
            config.capture_dir = env['KUBEUITEST_CAPTURE_DIR']
        return config


@dataclass(frozen=True)
class Component:
    """Handle for a named UI region."""
    kind: str
    locator: str


class Session:
    """
    Context passed to every operation.

    Args:
        robot: RobotClient (or any object with the same methods)
        keyboard: Keyboard (or any object with the same methods)
        config: SessionConfig, defaults are used when None
    """

    def __init__(self, robot, keyboard, config: Optional[SessionConfig] = None):
        self.robot = robot
        self.keyboard = keyboard
        self.config = config or SessionConfig()

    @classmethod
    def connect(cls, config: Optional[SessionConfig] = None) -> "Session":
        """Create a session talking to the running IDE."""
        config = config or SessionConfig.from_env()
        return cls(RobotClient(config.robot_path), Keyboard(), config)

    def component(self, kind: str) -> Component:
        """Resolve a region kind to its handle without checking it is shown."""
        try:
            return Component(kind, self.config.locators[kind])
        except KeyError:
            raise UITestException(f"Unknown component kind: {kind}")

    def is_shown(self, kind: str) -> bool:
        return self.robot.find(self.component(kind).locator)

    def locate(self, kind: str, timeout: Optional[float] = None) -> Component:
        """
        Wait for a region to be shown and return its handle.

        Raises:
            WaitTimeoutError: If the region does not appear within timeout
        """
        component = self.component(kind)
        wait_until(
            self.config.locate_timeout if timeout is None else timeout,
            self.config.locate_interval,
            f"{kind} is not available.",
            lambda: self.robot.find(component.locator),
        )
        return component

    def activate(self, fragment, button: str = "left", count: int = 1):
        """Simulate a pointer action on a located text fragment."""
        self.robot.click(fragment.locator, fragment.x, fragment.y,
                         button=button, count=count)

    def double_activate(self, fragment):
        self.activate(fragment, count=2)

    def click_component(self, component: Component, button: str = "left"):
        """Click the center of a whole component."""
        self.robot.click(component.locator, button=button)

    def invoke_action(self, toolbar: Component, action_name: str):
        self.robot.invoke_action(toolbar.locator, action_name)
