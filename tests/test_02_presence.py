#!/usr/bin/env python3
"""
Test 02: Resource Presence

Verifies presence and absence checks on the Kubernetes tree:
- Exact and substring matching
- is_absent is the exact-mode inverse of is_present
- Waiting for resources to appear and disappear
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from kubeuitest import run_tests, ResourcePresenceChecker, AssertionFailedError, WaitTimeoutError
from fake_ide import FakeIde, new_session


def open_nodes():
    ide = FakeIde(loading_reads=0)
    ide.root_expanded = True
    ide.expanded.add("Nodes")
    return ide, ResourcePresenceChecker(new_session(ide))


def test_exact_match():
    ide, checker = open_nodes()
    assert checker.is_present("minikube", exact=True)
    assert not checker.is_present("mini", exact=True)


def test_substring_match():
    ide, checker = open_nodes()
    assert checker.is_present("mini", exact=False)
    assert not checker.is_present("worker", exact=False)


def test_absent_is_exact_inverse():
    ide, checker = open_nodes()
    for name in ("minikube", "mini", "Nodes", "Node", "worker-1"):
        assert checker.is_present(name, True) == (not checker.is_absent(name)), name


def test_absent_ignores_substrings():
    ide, checker = open_nodes()
    # Present by substring, yet absent by exact match
    assert checker.is_present("kube", exact=False)
    assert checker.is_absent("kube")


def test_wait_until_present():
    ide, checker = open_nodes()
    ide.expanded.discard("Nodes")
    ide.loading["Nodes"] = 2
    ide.expanded.add("Nodes")
    checker.wait_until_present("minikube")
    assert ide.tree_reads >= 3


def test_wait_until_absent_times_out():
    ide, checker = open_nodes()
    try:
        checker.wait_until_absent("minikube", timeout=0.1)
    except WaitTimeoutError as e:
        assert "minikube" in e.description
        return
    raise AssertionError("wait_until_absent did not time out")


def test_wait_until_absent_after_delete():
    ide, checker = open_nodes()
    del ide.store["Nodes"]["minikube"]
    checker.wait_until_absent("minikube")


def test_assert_helpers():
    ide, checker = open_nodes()
    checker.assert_present("minikube")
    checker.assert_absent("worker-1")
    try:
        checker.assert_present("worker-1")
    except AssertionFailedError as e:
        assert "worker-1" in str(e)
        return
    raise AssertionError("assert_present passed for a missing resource")


tests = [
    ("Exact match requires equality", test_exact_match),
    ("Substring match finds partial names", test_substring_match),
    ("is_absent is the exact inverse of is_present", test_absent_is_exact_inverse),
    ("is_absent ignores substring matches", test_absent_ignores_substrings),
    ("Waits for a resource to appear", test_wait_until_present),
    ("Absence wait times out", test_wait_until_absent_times_out),
    ("Absence wait succeeds after delete", test_wait_until_absent_after_delete),
    ("assert_present / assert_absent", test_assert_helpers),
]

if __name__ == "__main__":
    exit(run_tests(*tests))
