#!/usr/bin/env python3
"""
robot.py - Client for the IDE robot bridge

This module talks to a running IDE through the ide-robot command-line bridge,
which forwards each call to the robot server plugin inside the IDE and prints
a JSON reply. All other modules reach the IDE only through RobotClient.

Example:
    from kubeuitest.robot import RobotClient

    robot = RobotClient()
    texts = robot.find_all_text("//div[@class='Tree']")
    robot.click("//div[@class='Tree']", 10, 12, count=2)
"""

import subprocess
import json
import os
import shutil
from typing import Dict, List, Optional, Tuple, Any


class UITestException(Exception):
    """Base exception for UI testing errors."""
    pass


class IdeNotRunningError(UITestException):
    """Raised when the IDE is not running or its robot server is not responding."""
    pass


class CommandFailedError(UITestException):
    """Raised when an ide-robot command fails."""
    pass


class AssertionFailedError(UITestException):
    """Raised when an assertion fails."""
    pass


class WaitTimeoutError(UITestException):
    """Raised when a wait condition never became true."""

    def __init__(self, description: str, timeout: float = 0.0, attempts: int = 0):
        super().__init__(f"{description} (waited {timeout:.1f}s, {attempts} attempts)")
        self.description = description
        self.timeout = timeout
        self.attempts = attempts


class FragmentNotFoundError(UITestException, LookupError):
    """Raised when no on-screen text fragment matches a lookup."""
    pass


class RobotClient:
    """
    Client for the IDE robot server via the ide-robot bridge.

    Requires:
    - IDE started with the robot server plugin
    - ide-robot bridge available in PATH or given explicitly
    """

    def __init__(self, robot_path: Optional[str] = None, command_timeout: float = 30.0):
        """
        Initialize the client.

        Args:
            robot_path: Path to the ide-robot executable. If None, searches PATH.
            command_timeout: Seconds before a single bridge call is abandoned.
        """
        self.robot_path = robot_path or self._find_robot()
        self.command_timeout = command_timeout
        self._verify_robot()
        self._last_json_response = None

    def _find_robot(self) -> str:
        """Find the ide-robot executable."""
        candidates = [
            os.environ.get("IDE_ROBOT_PATH", ""),
            "ide-robot",
            "/usr/local/bin/ide-robot",
            "./bin/ide-robot",
        ]

        for candidate in candidates:
            if not candidate:
                continue
            abs_path = os.path.abspath(os.path.expanduser(candidate))
            if os.path.isfile(abs_path) and os.access(abs_path, os.X_OK):
                return abs_path
            found = shutil.which(candidate)
            if found:
                return found

        raise UITestException(
            "Cannot find ide-robot executable. "
            "Make sure it's in PATH or set IDE_ROBOT_PATH."
        )

    def _verify_robot(self):
        """Verify the bridge is available and functional."""
        try:
            result = subprocess.run(
                [self.robot_path, "help"],
                capture_output=True,
                timeout=5
            )
        except FileNotFoundError:
            raise UITestException(f"ide-robot not found at {self.robot_path}")
        except OSError as e:
            raise UITestException(f"Cannot run ide-robot at {self.robot_path}: {e}")
        except subprocess.TimeoutExpired:
            raise CommandFailedError("ide-robot help command timed out")
        if result.returncode != 0:
            raise CommandFailedError("ide-robot help command failed")

    def _run_command(self, *args: str) -> Tuple[str, str, int]:
        """
        Run an ide-robot command.

        Returns:
            Tuple of (stdout, stderr, returncode)

        Raises:
            IdeNotRunningError: If the IDE is not responding
            CommandFailedError: If command execution fails
        """
        cmd = [self.robot_path] + list(args)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.command_timeout
            )
        except subprocess.TimeoutExpired:
            raise CommandFailedError(f"ide-robot {args[0]} timed out")
        except OSError as e:
            raise CommandFailedError(f"Failed to run ide-robot: {e}")

        if "Cannot contact IDE" in result.stderr:
            raise IdeNotRunningError(
                "IDE is not running or the robot server is not responding. "
                "Start the IDE with the robot server plugin enabled."
            )

        return result.stdout, result.stderr, result.returncode

    def _extract_json(self, output: str) -> Dict[str, Any]:
        """Extract JSON from command output."""
        lines = output.split('\n')
        json_start = None

        for i, line in enumerate(lines):
            if line.strip().startswith('{'):
                json_start = i
                break

        if json_start is None:
            raise UITestException(f"No JSON found in output: {output[:200]}")

        json_text = '\n'.join(lines[json_start:])

        try:
            data = json.loads(json_text)
        except json.JSONDecodeError as e:
            raise UITestException(f"Failed to parse JSON response: {e}")
        self._last_json_response = data
        return data

    def _call(self, *args: str) -> Dict[str, Any]:
        stdout, stderr, code = self._run_command(*args)
        if code != 0:
            raise CommandFailedError(f"ide-robot {args[0]} failed: {stderr.strip()}")
        return self._extract_json(stdout)

    # Public API Methods

    def find_all_text(self, locator: str) -> List[Dict[str, Any]]:
        """
        Read every rendered text piece inside a component.

        Args:
            locator: XPath locator of the container component

        Returns:
            List of {"text": str, "x": int, "y": int} in on-screen order
        """
        return self._call("find-all-text", locator).get('texts', [])

    def find(self, locator: str) -> bool:
        """Check whether a component matching the locator is currently shown."""
        return bool(self._call("find", locator).get('found', False))

    def click(self, locator: str, x: Optional[int] = None, y: Optional[int] = None,
              button: str = "left", count: int = 1) -> Dict[str, Any]:
        """
        Click at a point relative to a component.

        Args:
            locator: XPath locator of the component
            x: X offset inside the component (None = component center)
            y: Y offset inside the component (None = component center)
            button: "left" or "right"
            count: 1 for a click, 2 for a double-click
        """
        args = ["click", locator]
        if x is not None and y is not None:
            args += [str(x), str(y)]
        args += ["--button", button, "--count", str(count)]
        return self._call(*args)

    def invoke_action(self, toolbar_locator: str, action_name: str) -> Dict[str, Any]:
        """
        Trigger a named toolbar action.

        Raises:
            CommandFailedError: If the bridge reports the action was not run
        """
        result = self._call("invoke-action", toolbar_locator, action_name)
        if not result.get('success', False):
            raise CommandFailedError(
                f"Action '{action_name}' failed: {result.get('error', 'unknown error')}"
            )
        return result

    def is_ide_running(self) -> bool:
        """Check if the IDE robot server is responding."""
        try:
            self._call("ping")
            return True
        except UITestException:
            return False

    def get_last_json_response(self) -> Dict[str, Any]:
        """Get the last JSON response from the bridge."""
        if self._last_json_response is None:
            raise UITestException("No previous query executed")
        return self._last_json_response
