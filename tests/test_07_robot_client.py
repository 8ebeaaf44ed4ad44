#!/usr/bin/env python3
"""
Test 07: Robot Bridge Client

Verifies RobotClient against a scripted stand-in for the ide-robot bridge:
- JSON replies are parsed, with leading chatter skipped
- Command arguments are passed through
- Failures map to CommandFailedError / IdeNotRunningError
"""

import sys, os, stat, tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kubeuitest import (
    run_tests, RobotClient, Session, SessionConfig, Keyboard, read_snapshot,
    UITestException, CommandFailedError, IdeNotRunningError, KeyboardInputError,
)

BRIDGE = '''#!{python}
import json, sys
args = sys.argv[1:]
if args[0] == "help":
    sys.exit({help_code})
if {down}:
    sys.stderr.write("Cannot contact IDE at http://127.0.0.1:8082\\n")
    sys.exit(1)
if args[0] == "find-all-text":
    print("connecting to robot server...")
    print(json.dumps({{"texts": [{{"text": "my-cluster", "x": 10, "y": 10}},
                                 {{"text": "Nodes", "x": 30, "y": 30}}]}}))
elif args[0] == "find":
    print(json.dumps({{"found": args[1] == "//tree"}}))
elif args[0] == "click":
    print(json.dumps({{"success": True, "args": args[1:]}}))
elif args[0] == "invoke-action":
    print(json.dumps({{"success": args[2] == "Push to Cluster", "error": "no such action"}}))
elif args[0] == "ping":
    print(json.dumps({{"success": True}}))
elif args[0] == "garbage":
    print("not json at all")
else:
    sys.stderr.write("unknown command\\n")
    sys.exit(2)
'''

_tmpdir = tempfile.mkdtemp(prefix="kubeuitest_bridge_")


def make_bridge(name: str, down: bool = False, help_code: int = 0) -> str:
    path = os.path.join(_tmpdir, name)
    with open(path, 'w') as f:
        f.write(BRIDGE.format(python=sys.executable, down=down, help_code=help_code))
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def test_find_all_text_parses_reply():
    robot = RobotClient(make_bridge("bridge_ok"))
    texts = robot.find_all_text("//tree")
    assert [t['text'] for t in texts] == ["my-cluster", "Nodes"]
    assert robot.get_last_json_response()['texts'][1]['y'] == 30


def test_snapshot_through_bridge():
    robot = RobotClient(make_bridge("bridge_snapshot"))
    config = SessionConfig(locators={'kubernetes_tree': "//tree"})
    session = Session(robot, keyboard=None, config=config)
    snapshot = read_snapshot(session, session.component("kubernetes_tree"))
    assert snapshot[1].text == "Nodes"
    assert (snapshot[1].x, snapshot[1].y, snapshot[1].locator) == (30, 30, "//tree")


def test_find_reports_presence():
    robot = RobotClient(make_bridge("bridge_find"))
    assert robot.find("//tree") is True
    assert robot.find("//editor") is False


def test_click_passes_arguments():
    robot = RobotClient(make_bridge("bridge_click"))
    reply = robot.click("//tree", 10, 12, count=2)
    assert reply['args'] == ["//tree", "10", "12", "--button", "left", "--count", "2"]
    reply = robot.click("//icon", button="right")
    assert reply['args'] == ["//icon", "--button", "right", "--count", "1"]


def test_invoke_action():
    robot = RobotClient(make_bridge("bridge_action"))
    assert robot.invoke_action("//toolbar", "Push to Cluster")['success']
    try:
        robot.invoke_action("//toolbar", "Delete Cluster")
    except CommandFailedError as e:
        assert "Delete Cluster" in str(e)
        return
    raise AssertionError("failed action did not raise")


def test_command_failure_raises():
    robot = RobotClient(make_bridge("bridge_unknown"))
    try:
        robot._call("frobnicate")
    except CommandFailedError as e:
        assert "unknown command" in str(e)
        return
    raise AssertionError("failing command did not raise")


def test_non_json_reply_raises():
    robot = RobotClient(make_bridge("bridge_garbage"))
    try:
        robot._call("garbage")
    except UITestException as e:
        assert "No JSON" in str(e)
        return
    raise AssertionError("non-JSON reply did not raise")


def test_ide_not_running():
    robot = RobotClient(make_bridge("bridge_down", down=True))
    assert robot.is_ide_running() is False
    try:
        robot.find_all_text("//tree")
    except IdeNotRunningError:
        assert RobotClient(make_bridge("bridge_up")).is_ide_running()
        return
    raise AssertionError("unreachable IDE did not raise")


def test_broken_bridge_rejected():
    try:
        RobotClient(make_bridge("bridge_broken", help_code=3))
    except CommandFailedError:
        pass
    else:
        raise AssertionError("broken bridge accepted")
    try:
        RobotClient(os.path.join(_tmpdir, "does-not-exist"))
    except UITestException:
        return
    raise AssertionError("missing bridge accepted")


def test_session_connect_uses_config_path():
    config = SessionConfig(robot_path=make_bridge("bridge_connect"))
    try:
        session = Session.connect(config)
    except UITestException:
        # Keyboard needs xdotool, which CI machines may lack
        return
    assert isinstance(session.keyboard, Keyboard)
    assert session.robot.robot_path == config.robot_path


def test_missing_xdotool_is_a_uitest_error():
    saved_path = os.environ.get("PATH", "")
    os.environ["PATH"] = tempfile.mkdtemp(prefix="kubeuitest_empty_path_")
    try:
        Keyboard()
    except UITestException as e:
        assert isinstance(e, KeyboardInputError)
        assert "xdotool" in str(e)
        return
    finally:
        os.environ["PATH"] = saved_path
    raise AssertionError("keyboard created without xdotool")


tests = [
    ("find-all-text reply is parsed", test_find_all_text_parses_reply),
    ("Snapshot reads through the bridge", test_snapshot_through_bridge),
    ("find reports presence", test_find_reports_presence),
    ("click passes its arguments", test_click_passes_arguments),
    ("invoke-action success and failure", test_invoke_action),
    ("Failing command raises", test_command_failure_raises),
    ("Non-JSON reply raises", test_non_json_reply_raises),
    ("Unreachable IDE raises IdeNotRunningError", test_ide_not_running),
    ("Broken or missing bridge is rejected", test_broken_bridge_rejected),
    ("Session.connect uses the configured bridge", test_session_connect_uses_config_path),
    ("Missing xdotool raises a UITestException", test_missing_xdotool_is_a_uitest_error),
]

if __name__ == "__main__":
    exit(run_tests(*tests))
