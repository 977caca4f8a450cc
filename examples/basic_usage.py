"""
cycleguard: Basic Usage Example

Demonstrates:
- Guarding a cyclic tree and releasing it on scope exit
- Using the guard as a stand-in for the tree
- with-block scoping
- Dismissing a guard
- The callable form
"""

from cycleguard import Guard, guard_isa, guard_state
from cycleguard.demos.tree import TreeNode, build_tree, run_tree_demo


def walk_guarded_tree():
    """The guard is a local: the tree is finalized when this function returns."""
    tree = Guard(build_tree(depth=2, width=2))

    # Forwarded to the root TreeNode
    names = [node.name for node in tree.walk()]
    print(f"  🌳 Nodes: {', '.join(names)}")
    print(f"  🔍 tree.isa(TreeNode)       -> {tree.isa(TreeNode)}")
    print(f"  🔍 guard_isa(tree, TreeNode) -> {guard_isa(tree, TreeNode)}")


def main():
    """Basic cycleguard usage."""

    print("=" * 60)
    print("cycleguard: Basic Usage Example")
    print("=" * 60)
    print()

    # 1️⃣ Scope-bound release
    print("1️⃣ Guarding a tree inside a function...")
    walk_guarded_tree()
    print("✅ Tree finalized on return")
    print()

    # 2️⃣ with-block
    print("2️⃣ Guarding a tree with a with-block...")
    with Guard(build_tree(depth=1, width=3)) as tree:
        print(f"  🌳 Root has {len(tree.children)} children")
    print(f"✅ Released: {guard_state(tree).released}")
    print()

    # 3️⃣ Dismiss
    print("3️⃣ Dismissing a guard...")
    kept = build_tree(depth=1, width=1)
    guard = Guard(kept)
    guard.dismiss()
    del guard
    print(f"✅ Tree left intact: {len(kept.children)} child still attached")
    kept.finalize()
    print()

    # 4️⃣ Callable form
    print("4️⃣ Guarding a plain callable...")
    registry = {"a": 1, "b": 2}
    guard = Guard(registry.clear)
    guard.release()
    guard.release()
    print(f"✅ Registry cleared once: {registry}")
    print()

    # 5️⃣ Measure it
    print("5️⃣ Counting reclaimed nodes with the cycle collector paused...")
    for label, kwargs in (
        ("guarded", {}),
        ("dismissed", {"dismiss": True}),
        ("unguarded", {"use_guard": False}),
    ):
        result = run_tree_demo(depth=4, width=2, **kwargs)
        print(f"  {label:<10} reclaimed {result.reclaimed:>2}/{result.nodes}")
    print()


if __name__ == "__main__":
    main()
