"""
Tree Demo - a parent/child cycle released by a Guard.

Every child keeps a back-reference to its parent, so no node of the tree
ever reaches a reference count of zero on its own. This demo pauses the
cycle collector, drops the tree, and counts how many nodes reference
counting alone managed to reclaim:

    - guarded:             all of them (finalize() broke every link)
    - guarded + dismissed: none
    - unguarded:           none
"""

import gc
import weakref
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterator, List, Optional

from cycleguard.core.config import GuardConfig
from cycleguard.core.guard import Guard


class TreeNode:
    """Tree node holding strong references both down and up."""

    def __init__(self, name: str, parent: Optional["TreeNode"] = None):
        self.name = name
        self.parent = parent
        self.children: List["TreeNode"] = []
        if parent is not None:
            parent.children.append(self)

    def add_child(self, name: str) -> "TreeNode":
        return TreeNode(name, parent=self)

    def walk(self) -> Iterator["TreeNode"]:
        """Depth-first, parent before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def finalize(self) -> None:
        """Break every parent/child link below (and including) this node."""
        for child in self.children:
            child.finalize()
        self.children.clear()
        self.parent = None

    def __repr__(self) -> str:
        return f"TreeNode({self.name!r}, children={len(self.children)})"


def build_tree(depth: int, width: int) -> TreeNode:
    """Build a full tree with `depth` levels below the root and `width` children per node."""
    if depth < 1 or width < 1:
        raise ValueError("depth and width must both be >= 1")

    root = TreeNode("root")
    level = [root]
    for _ in range(depth):
        level = [
            node.add_child(f"{node.name}.{i}")
            for node in level
            for i in range(width)
        ]
    return root


def count_nodes(depth: int, width: int) -> int:
    return sum(width ** d for d in range(depth + 1))


@dataclass
class TreeDemoResult:
    depth:     int
    width:     int
    guarded:   bool
    dismissed: bool
    nodes:     int
    reclaimed: int

    @property
    def leaked(self) -> int:
        return self.nodes - self.reclaimed

    @property
    def expected_reclaimed(self) -> int:
        return self.nodes if self.guarded and not self.dismissed else 0

    @property
    def as_expected(self) -> bool:
        return self.reclaimed == self.expected_reclaimed

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["leaked"] = self.leaked
        data["expected_reclaimed"] = self.expected_reclaimed
        data["as_expected"] = self.as_expected
        return data


def run_tree_demo(
    depth: int = 3,
    width: int = 2,
    use_guard: bool = True,
    dismiss: bool = False,
    config: Optional[GuardConfig] = None,
) -> TreeDemoResult:
    """
    Build a cyclic tree, drop it, and count the nodes reference counting freed.

    The cycle collector is paused for the measurement and run once
    afterwards so leaked nodes do not outlive the demo.
    """
    gc_was_enabled = gc.isenabled()
    gc.disable()
    try:
        root = build_tree(depth, width)
        refs = [weakref.ref(node) for node in root.walk()]

        if use_guard:
            guard = Guard(root, config=config)
            if dismiss:
                guard.dismiss()
            del root
            del guard
        else:
            del root

        reclaimed = sum(1 for ref in refs if ref() is None)
    finally:
        gc.collect()
        if gc_was_enabled:
            gc.enable()

    return TreeDemoResult(
        depth=depth,
        width=width,
        guarded=use_guard,
        dismissed=use_guard and dismiss,
        nodes=len(refs),
        reclaimed=reclaimed,
    )
