#!/usr/bin/env python3
"""Open the cluster tree and check the expected resources are listed"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kubeuitest import Session, TreeNavigator, ResourcePresenceChecker, run_interactive_tests

session = Session.connect()
tree = TreeNavigator(session)
checker = ResourcePresenceChecker(session)

node = os.environ.get("KUBEUITEST_NODE", "minikube")

exit(run_interactive_tests(
    ("Cluster opens", lambda: tree.open_cluster() or tree.is_cluster_opened()),
    ("Nodes load", lambda: tree.open_path(["Nodes"]) or tree.is_loaded()),
    (f"Node {node} listed", lambda: checker.wait_until_present(node) or True),
    ("First node resolves", lambda: tree.find_relative("Nodes", 0).text == node),
    ("Tree collapses", lambda: tree.collapse() or not checker.is_present("Nodes")),
))
