#!/usr/bin/env python3
"""
keyboard.py - Simulate user keyboard input

Uses xdotool to send real keystrokes to the focused IDE window, so the editor
reacts exactly as it would to a human typing (auto-indent included).
"""

import shutil
import subprocess
import time

from .robot import UITestException


class KeyboardInputError(UITestException):
    """Error during keyboard input simulation."""
    pass


class Keyboard:
    """
    Simulate keyboard input via xdotool.

    All methods go through the window system - no internal IDE APIs are used.
    """

    def __init__(self, key_delay: int = 50, type_delay: int = 20):
        """
        Initialize and verify xdotool is available.

        Args:
            key_delay: ms between key events
            type_delay: ms between typed characters
        """
        self._verify_xdotool()
        self.key_delay = key_delay
        self.type_delay = type_delay

    def _verify_xdotool(self):
        """Verify xdotool is installed."""
        if shutil.which("xdotool") is None:
            raise KeyboardInputError("xdotool not found. Install with: apt install xdotool")

    def _run(self, *args) -> str:
        """Run xdotool command and return output."""
        cmd = ["xdotool"] + list(args)
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=10)
        if result.returncode != 0:
            raise KeyboardInputError(f"xdotool failed: {result.stderr}")
        return result.stdout.strip()

    def key(self, keyspec: str):
        """
        Send a key or key combination.

        Args:
            keyspec: Key specification like "Return", "ctrl+F4", "ctrl+alt+p"
        """
        self._run("key", "--delay", str(self.key_delay), keyspec)
        time.sleep(0.1)  # Allow UI to process

    def type_text(self, text: str):
        """Type text as if user is typing on keyboard."""
        self._run("type", "--delay", str(self.type_delay), text)
        time.sleep(0.1)

    def shortcut(self, *keys: str):
        """
        Send a keyboard shortcut.

        Examples:
            keyboard.shortcut("ctrl", "F4")  # close editor tab
        """
        self.key("+".join(keys))

    def press_enter(self):
        """Press Enter/Return key."""
        self.key("Return")

    def press_backspace(self):
        """Press Backspace key."""
        self.key("BackSpace")

    def press_escape(self):
        """Press Escape key."""
        self.key("Escape")
