"""
cycleguard demos.

These demos show a Guard breaking a reference cycle.
"""

from cycleguard.demos.tree import TreeNode, TreeDemoResult, build_tree, run_tree_demo

__all__ = [
    "TreeNode",
    "TreeDemoResult",
    "build_tree",
    "run_tree_demo",
]
