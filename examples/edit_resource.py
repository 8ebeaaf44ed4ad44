#!/usr/bin/env python3
"""
Edit a node, push it to the cluster and check the change survived.

Needs a running IDE with the Kubernetes plugin, a cluster whose first node can
be labeled, and the ide-robot bridge (IDE_ROBOT_PATH or PATH).
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kubeuitest import (
    Session, SessionConfig, EditorWorkflow, ResourceHandle, FailureCapture,
    ScenarioContext, has_error, run_tests,
)

config = SessionConfig.from_env()
session = Session.connect(config)
capture = FailureCapture(config.capture_dir, session)


def edit_first_node():
    with ScenarioContext(session, "edit first node", capture):
        workflow = EditorWorkflow(
            session,
            path=["Nodes"],
            resource=ResourceHandle.in_parent("Nodes", 0),
            insert_text='    some_label: "some_label"',
            verify_text="some_label",
        )
        return workflow.run()


exit(run_tests(
    ("Label added to first node survives a reload", edit_first_node),
    ("No IDE errors afterwards", lambda: not has_error(session)),
    capture=capture,
))
