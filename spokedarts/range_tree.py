"""Multi-level range tree over indexed points, one level per coordinate."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from spokedarts.point_tool import Sphere


@dataclass(eq=False)
class _Node:
    """A tree node.

    A leaf holds one sphere.  An inner node holds the sphere with the largest
    coordinate on its left side, and a subtree over the next coordinate that
    contains every sphere below it.
    """

    sphere: int
    left: Optional["_Node"] = None
    right: Optional["_Node"] = None
    subtree: Optional["_OneTree"] = None

    @property
    def is_leaf(self) -> bool:
        return self.right is None


@dataclass(eq=False)
class _OneTree:
    """A binary tree ordered by coordinate ``d``."""

    d: int
    root: Optional[_Node] = None
    traversed_depth: int = 0
    current_level: int = 0


def _coordinates(point) -> Sequence[float]:
    return point.center if isinstance(point, Sphere) else point


class RangeTree:
    """Range tree over the points ``points[i]`` for the indices added to it.

    ``points`` may hold coordinate sequences or :class:`Sphere` objects and may
    grow after the tree is made; the tree stores indices only.
    """

    def __init__(self, points: Sequence, num_dim: Optional[int] = None) -> None:
        self._points = points
        if num_dim is None:
            if len(points) == 0:
                raise ValueError("cannot infer the number of dimensions from no points")
            num_dim = len(_coordinates(points[0]))
        if not isinstance(num_dim, int) or isinstance(num_dim, bool) or num_dim < 1:
            raise ValueError(f"number of dimensions must be a positive integer, got {num_dim!r}")
        self.num_dim = num_dim
        self._array: list[int] = []
        self._tree = _OneTree(0)
        self._max_depth = 0

    # ------------------------------------------------------------------
    # container interface
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._array)

    def __iter__(self) -> Iterator[int]:
        return iter(self._array)

    def __getitem__(self, i: int) -> int:
        return self._array[i]

    def _coord(self, index: int, d: int) -> float:
        return _coordinates(self._points[index])[d]

    def clear(self) -> None:
        """Remove every sphere from the tree."""
        self._tree.root = None
        self._array.clear()
        self._max_depth = 0

    # ------------------------------------------------------------------
    # insertion
    # ------------------------------------------------------------------

    def add_sphere(self, index: int) -> None:
        """Add one sphere; the tree may become unbalanced."""
        if not 0 <= index < len(self._points):
            raise IndexError(f"sphere index {index} is out of range")
        if len(_coordinates(self._points[index])) < self.num_dim:
            raise ValueError(f"sphere {index} has fewer than {self.num_dim} coordinates")
        self._array.append(index)
        self._add_to_one_tree(self._tree, index)

    def add_spheres(self, indices) -> None:
        """Add many spheres, then rebuild a balanced tree."""
        new = list(indices)
        for index in new:
            if not 0 <= index < len(self._points):
                raise IndexError(f"sphere index {index} is out of range")
        self._array.extend(new)
        self.rebalance()

    def _add_to_one_tree(self, tree: _OneTree, index: int) -> None:
        tree.traversed_depth = 0
        tree.current_level = 0
        tree.root = self._add_to_node(tree, tree.root, index)
        self._max_depth = max(self._max_depth, tree.traversed_depth)

    def _add_to_node(self, tree: _OneTree, node: Optional[_Node], index: int) -> _Node:
        tree.current_level += 1
        tree.traversed_depth = max(tree.traversed_depth, tree.current_level)
        last_dim = tree.d + 1 >= self.num_dim

        if node is None:
            node = _Node(index)
        else:
            node_coord = self._coord(node.sphere, tree.d)
            sphere_coord = self._coord(index, tree.d)

            if node.is_leaf and not last_dim:
                node.subtree = _OneTree(tree.d + 1)
                self._add_to_one_tree(node.subtree, node.sphere)

            if sphere_coord < node_coord:
                node.left = self._add_to_node(tree, node.left, index)
                if node.right is None:
                    node.right = self._add_to_node(tree, None, node.sphere)
                    node.sphere = index
            else:
                node.right = self._add_to_node(tree, node.right, index)
                if node.left is None:
                    node.left = self._add_to_node(tree, None, node.sphere)

        if node.subtree is not None:
            self._add_to_one_tree(node.subtree, index)

        tree.current_level -= 1
        return node

    # ------------------------------------------------------------------
    # balancing
    # ------------------------------------------------------------------

    def rebalance(self) -> None:
        """Rebuild the tree so every level has uniform depth."""
        self._tree.root = None
        if not self._array:
            return
        self._rebalance_tree(self._tree, self._array)
        self._max_depth = self._deepest(self._tree)

    def _rebalance_tree(self, tree: _OneTree, indices: Sequence[int]) -> None:
        ordered = sorted(indices, key=lambda i: self._coord(i, tree.d))
        tree.root = self._rebalance_node(tree, ordered)

    def _rebalance_node(self, tree: _OneTree, ordered: list[int]) -> _Node:
        mid = (len(ordered) - 1) // 2
        node = _Node(ordered[mid])
        if len(ordered) > 1:
            node.left = self._rebalance_node(tree, ordered[: mid + 1])
            node.right = self._rebalance_node(tree, ordered[mid + 1 :])
            if tree.d + 1 < self.num_dim:
                node.subtree = _OneTree(tree.d + 1)
                self._rebalance_tree(node.subtree, ordered)
        return node

    def _deepest(self, tree: _OneTree) -> int:
        deepest = 0
        stack = [(tree.root, 1)] if tree.root else []
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            if node.subtree is not None:
                deepest = max(deepest, self._deepest(node.subtree))
            if node.left is not None:
                stack.append((node.left, level + 1))
            if node.right is not None:
                stack.append((node.right, level + 1))
        return deepest

    def needs_rebalance(self) -> bool:
        """True if insertions have made the tree much deeper than a balanced one."""
        size = len(self)
        if size < 16:
            return False
        perfect_depth = size.bit_length()
        ok_depth = perfect_depth * math.ceil(math.sqrt(perfect_depth))
        return self._max_depth > ok_depth

    # ------------------------------------------------------------------
    # node counts
    # ------------------------------------------------------------------

    def num_nodes(self) -> int:
        """Nominal node count, ``2 * size * num_dim``."""
        return 2 * len(self) * self.num_dim

    def count_tree_nodes(self) -> int:
        """Actual number of nodes, summed over every one-coordinate tree."""
        return self._count(self._tree)

    def _count(self, tree: _OneTree) -> int:
        total = 0
        stack = [tree.root] if tree.root else []
        while stack:
            node = stack.pop()
            total += 1
            if node.subtree is not None:
                total += self._count(node.subtree)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return total

    # ------------------------------------------------------------------
    # text dump
    # ------------------------------------------------------------------

    def format(self, name: str = "") -> str:
        """Describe the tree structure as text."""
        lines = [f"======== Printing Range_Tree {name} ========", "", "Root"]
        tree_ids = iter(range(1, 1 << 62))
        self._format_one_tree(self._tree, next(tree_ids), tree_ids, lines, top=True)
        lines.append(f"======== Done Printing Range_Tree {name} ========")
        lines.append("")
        return "\n".join(lines)

    def _format_one_tree(self, tree, tree_id, tree_ids, lines, top=False) -> int:
        lines.append("")
        lines.append("==== TREE ====")
        if tree.root is None:
            lines.append(f"Node: NULL  tree:{tree_id} d:{tree.d}")
            lines.append("Tree had 0 nodes (0 leaves)" + (f" for {len(self)} spheres" if top else ""))
            return 0

        node_ids: dict[int, int] = {}
        order: list[tuple[_Node, int]] = []
        stack = [(tree.root, 0)]
        while stack:
            node, level = stack.pop()
            node_ids[id(node)] = len(node_ids) + 1
            order.append((node, level))
            if node.right is not None:
                stack.append((node.right, level + 1))
            if node.left is not None:
                stack.append((node.left, level + 1))

        def describe(node: _Node, level: int) -> str:
            coord = self._coord(node.sphere, tree.d)
            return (
                f"Node:{node_ids[id(node)]} level:{level} sphere:{node.sphere} "
                f"coord:{coord:g} tree:{tree_id} d:{tree.d}"
            )

        deepest = 0
        for node, level in order:
            deepest = max(deepest, level)
            if node.is_leaf:
                lines.append(describe(node, level) + "  LEAF. ")
            else:
                lines.append(
                    describe(node, level)
                    + f"  left ->{node_ids[id(node.left)]} and right->{node_ids[id(node.right)]}."
                )
        count = len(order)
        summary = f"Tree had {count} nodes ({(count + 1) // 2} leaves)"
        if top:
            summary += f" for {len(self)} spheres"
        lines.append(summary + f", and {deepest} depth (starting at 0).")

        lines.append("")
        lines.append("==== SUBTREES ====")
        for node, level in order:
            if node.subtree is None:
                lines.append(describe(node, level) + " no subtree. ")
            else:
                sub_id = next(tree_ids)
                lines.append(describe(node, level) + f" subtree-> {sub_id}")
                self._format_one_tree(node.subtree, sub_id, tree_ids, lines)
        return count