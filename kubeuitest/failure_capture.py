#!/usr/bin/env python3
"""
failure_capture.py - Capture screenshots, logs, and UI text on scenario failure

When a scenario fails, this module captures:
- Screenshot of the current screen
- Visible text of the Kubernetes tree and the editor
- Scenario log/traceback

This helps debug what the IDE was showing when a wait or assertion gave up.
"""

import os
import subprocess
import traceback
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from .robot import UITestException
from .snapshot import read_snapshot, texts

CAPTURED_COMPONENTS = ("kubernetes_tree", "editor", "editor_notifications")


class FailureCapture:
    """
    Captures screenshots and logs when scenarios fail.

    Usage:
        capture = FailureCapture("/tmp/kubeuitest_failures", session=session)

        @capture.on_failure
        def test_edit_node():
            ...
    """

    def __init__(self, output_dir: str = "/tmp/kubeuitest_failures", session=None):
        """
        Args:
            output_dir: Directory to store screenshots and logs
            session: Session whose visible text is dumped into the failure log
        """
        self.output_dir = output_dir
        self.session = session
        os.makedirs(self.output_dir, exist_ok=True)
        self._test_name = "unknown"
        self._log_lines: List[str] = []

    def _timestamp(self) -> str:
        return datetime.now().strftime("%Y%m%d_%H%M%S")

    def _safe_name(self, name: str) -> str:
        return name.replace(' ', '_').replace('/', '_')

    def set_test_name(self, name: str):
        """Set the current scenario name and start a fresh log."""
        self._test_name = name
        self._log_lines = []

    @property
    def log_lines(self) -> List[str]:
        return list(self._log_lines)

    def log(self, message: str):
        """Add a log message."""
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        line = f"[{timestamp}] {message}"
        self._log_lines.append(line)
        print(line)

    def take_screenshot(self, name: Optional[str] = None) -> Optional[str]:
        """
        Take a screenshot of the current screen.

        Returns:
            Path to saved screenshot, or None if no screenshot tool worked
        """
        filename = f"{self._timestamp()}_{self._safe_name(name or self._test_name)}.png"
        filepath = os.path.join(self.output_dir, filename)

        for cmd in (["scrot", filepath], ["import", "-window", "root", filepath]):
            try:
                result = subprocess.run(cmd, capture_output=True, timeout=10)
            except (OSError, subprocess.TimeoutExpired) as e:
                self.log(f"{cmd[0]} failed: {e}")
                continue
            if result.returncode == 0:
                self.log(f"Screenshot saved: {filepath}")
                return filepath

        self.log("WARNING: Could not capture screenshot (no tool available)")
        return None

    def capture_state(self, label: str = "current") -> Dict[str, Any]:
        """
        Capture the visible text of the IDE regions the scenarios use.

        Regions that are not shown or cannot be read are recorded as None.
        """
        state = {
            'timestamp': self._timestamp(),
            'label': label,
            'test_name': self._test_name,
            'components': {},
        }
        if self.session is not None:
            for kind in CAPTURED_COMPONENTS:
                try:
                    component = self.session.component(kind)
                    if self.session.robot.find(component.locator):
                        state['components'][kind] = texts(read_snapshot(self.session, component))
                    else:
                        state['components'][kind] = None
                except UITestException as e:
                    self.log(f"Could not read {kind}: {e}")
                    state['components'][kind] = None

        self.log(f"State captured: {label}")
        return state

    def save_log(self, additional_info: str = "") -> Optional[str]:
        """
        Save the current log to a file.

        Returns:
            Path to log file
        """
        timestamp = self._timestamp()
        filename = f"{timestamp}_{self._safe_name(self._test_name)}_log.txt"
        filepath = os.path.join(self.output_dir, filename)

        state = self.capture_state("at_log_save")
        try:
            with open(filepath, 'w') as f:
                f.write(f"Test: {self._test_name}\n")
                f.write(f"Timestamp: {timestamp}\n")
                f.write("=" * 60 + "\n\n")

                f.write("LOG:\n")
                for line in self._log_lines:
                    f.write(line + "\n")
                f.write("\n")

                if additional_info:
                    f.write("ADDITIONAL INFO:\n")
                    f.write(additional_info + "\n\n")

                f.write("VISIBLE TEXT:\n")
                for kind, shown in state['components'].items():
                    f.write(f"  {kind}: {shown}\n")
        except OSError as e:
            self.log(f"Failed to save log: {e}")
            return None

        self.log(f"Log saved: {filepath}")
        return filepath

    def record_failure(self, name: str, error: BaseException):
        """Log the error and save screenshot plus log file."""
        self.log(f"Test FAILED: {name}")
        self.log(f"Error: {type(error).__name__}: {error}")
        details = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        self.take_screenshot(f"FAIL_{name}")
        self.save_log(details)
        self.log(f"Failure artifacts saved to: {self.output_dir}")

    def on_failure(self, func: Callable) -> Callable:
        """
        Decorator that captures screenshot and log on scenario failure.

        Usage:
            @capture.on_failure
            def test_something():
                assert False, "This will trigger capture"
        """
        @wraps(func)
        def wrapper(*args, **kwargs):
            self.set_test_name(func.__name__)
            self.log(f"Starting test: {func.__name__}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                self.record_failure(func.__name__, e)
                raise
            self.log(f"Test passed: {func.__name__}")
            return result

        return wrapper

