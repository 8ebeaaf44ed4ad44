#!/usr/bin/env python3
"""
runner.py - Minimal-boilerplate scenario runner

Each scenario is a (name, callable) tuple. The callable passes when it returns
anything but False, and fails when it returns False or raises.

Usage:
    from kubeuitest import Session, run_tests

    session = Session.connect()
    exit(run_tests(
        ("Cluster opens", lambda: TreeNavigator(session).open_cluster()),
        ("No IDE errors", lambda: not has_error(session)),
    ))
"""

import time
import traceback

from .robot import AssertionFailedError
from .status_bar import ErrorBarInspector


def run_tests(*tests: tuple, verbose: bool = True, stop_on_failure: bool = False,
              capture=None) -> int:
    """
    Run a list of scenarios and report results.

    Args:
        *tests: Tuples of (test_name: str, test_function: callable)
        verbose: Whether to print results (default True)
        stop_on_failure: Stop at first failing scenario (default False)
        capture: FailureCapture used to save screenshot and log on failure

    Returns:
        0 if all scenarios pass, 1 if any fail
    """
    if not tests:
        return 0

    results = []

    for test_name, test_func in tests:
        error = None
        if verbose:
            print(f"▶ Running: {test_name}", end='', flush=True)
        if capture is not None:
            capture.set_test_name(test_name)

        try:
            passed = test_func() is not False
            if verbose:
                print(f"\r{'✓' if passed else '✗'} {test_name}")
        except (AssertionFailedError, AssertionError) as e:
            passed, error = False, e
            if verbose:
                print(f"\r✗ {test_name}: {e}")
        except Exception as e:
            passed, error = False, e
            if verbose:
                print(f"\r✗ {test_name}: {type(e).__name__}: {e}")
                traceback.print_exc()

        results.append(passed)
        if passed:
            continue

        if capture is not None:
            capture.record_failure(test_name, error or AssertionFailedError("returned False"))
        if stop_on_failure:
            print(f"\n⛔ STOPPED: Test failed - {test_name}")
            if error is not None:
                print(f"   Error: {type(error).__name__}: {error}")
            break

    if verbose:
        passed = sum(results)
        total = len(tests)
        executed = len(results)
        print()
        if executed < total:
            print(f"Results: {passed}/{executed} tests passed ({total - executed} not executed)")
        else:
            print(f"Results: {passed}/{total} tests passed")
        print("Status: PASSED ✓" if all(results) else "Status: FAILED ❌")

    return 0 if all(results) else 1


def run_interactive_tests(*tests: tuple, pause_between: float = 0.5, **kwargs) -> int:
    """
    Run scenarios with a pause after each one so the IDE can be watched.

    Same as run_tests but stops on the first failure by default.
    """
    kwargs.setdefault('stop_on_failure', True)

    def make_paused_test(original_func):
        def paused():
            result = original_func()
            time.sleep(pause_between)
            return result
        return paused

    paused_tests = tuple((name, make_paused_test(func)) for name, func in tests)
    return run_tests(*paused_tests, **kwargs)


def ensure_clean_state(session) -> bool:
    """
    Dismiss leftover IDE errors so one scenario's failure does not leak into the next.

    This will:
    - Clear the errors listed behind the status-bar indicator
    - Close an errors dialog a failed scenario left open
    """
    cleared = ErrorBarInspector(session, timeout=0).clear_errors()
    if session.is_shown("errors_dialog"):
        session.keyboard.press_escape()
    return cleared


class ScenarioContext:
    """
    Context manager for scenario setup and teardown.

    Usage:
        with ScenarioContext(session, "edit node", capture) as ctx:
            assert EditorWorkflow(ctx.session, ...).run()
    """

    def __init__(self, session, name: str = "unknown", capture=None,
                 clean_before: bool = True, clean_after: bool = True):
        self.session = session
        self.name = name
        self.capture = capture
        self.clean_before = clean_before
        self.clean_after = clean_after

    def __enter__(self):
        if self.capture is not None:
            self.capture.set_test_name(self.name)
            self.capture.log(f"Starting scenario: {self.name}")
        if self.clean_before:
            ensure_clean_state(self.session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and self.capture is not None:
            self.capture.record_failure(self.name, exc_val)
        if self.clean_after and exc_type is None:
            ensure_clean_state(self.session)
        return False
