import random

import pytest

from spokedarts.point_tool import Sphere
from spokedarts.range_tree import RangeTree


def _points(n, dim, seed=7):
    rng = random.Random(seed)
    return [tuple(rng.random() for _ in range(dim)) for _ in range(n)]


def test_empty_tree():
    tree = RangeTree([], num_dim=2)
    assert len(tree) == 0
    assert list(tree) == []
    assert tree.count_tree_nodes() == 0
    assert tree.needs_rebalance() is False
    tree.rebalance()
    assert tree.count_tree_nodes() == 0


def test_num_dim_inferred_from_points():
    tree = RangeTree(_points(3, 3))
    assert tree.num_dim == 3


def test_invalid_num_dim():
    with pytest.raises(ValueError):
        RangeTree(_points(3, 2), num_dim=0)
    with pytest.raises(ValueError):
        RangeTree([])


def test_add_sphere_keeps_insertion_order():
    pts = _points(10, 2)
    tree = RangeTree(pts, 2)
    order = [4, 1, 9, 0, 7]
    for i in order:
        tree.add_sphere(i)
    assert list(tree) == order
    assert len(tree) == len(order)
    assert tree[2] == 9


def test_add_sphere_out_of_range():
    tree = RangeTree(_points(3, 2), 2)
    with pytest.raises(IndexError):
        tree.add_sphere(3)
    with pytest.raises(IndexError):
        tree.add_spheres([0, 5])


@pytest.mark.parametrize("n", [1, 2, 5, 17, 40])
def test_one_dimensional_node_count_incremental(n):
    tree = RangeTree(_points(n, 1), 1)
    for i in range(n):
        tree.add_sphere(i)
    assert tree.count_tree_nodes() == 2 * n - 1


@pytest.mark.parametrize("n", [1, 2, 5, 17, 40])
def test_one_dimensional_node_count_rebalanced(n):
    tree = RangeTree(_points(n, 1), 1)
    tree.add_spheres(range(n))
    assert tree.count_tree_nodes() == 2 * n - 1
    assert tree.num_nodes() == 2 * n


def test_two_points_two_dimensions():
    tree = RangeTree([(0.1, 0.2), (0.5, 0.3)], 2)
    tree.add_spheres([0, 1])
    # top tree of three nodes; the root holds a subtree of three nodes
    assert tree.count_tree_nodes() == 6


def test_incremental_and_rebalanced_agree_for_two_points():
    pts = [(0.7, 0.2), (0.1, 0.9)]
    a = RangeTree(pts, 2)
    a.add_sphere(0)
    a.add_sphere(1)
    b = RangeTree(pts, 2)
    b.add_spheres([0, 1])
    assert a.count_tree_nodes() == b.count_tree_nodes()


def test_sorted_insertion_needs_rebalance():
    n = 64
    pts = [(i / n,) for i in range(n)]
    tree = RangeTree(pts, 1)
    for i in range(n):
        tree.add_sphere(i)
    assert tree.needs_rebalance() is True
    tree.rebalance()
    assert tree.needs_rebalance() is False
    assert tree.count_tree_nodes() == 2 * n - 1
    assert list(tree) == list(range(n))


def test_small_tree_never_needs_rebalance():
    pts = [(i / 10.0,) for i in range(10)]
    tree = RangeTree(pts, 1)
    for i in range(10):
        tree.add_sphere(i)
    assert tree.needs_rebalance() is False


def test_spheres_as_points():
    spheres = [Sphere((0.1, 0.2), 0.05), Sphere((0.4, 0.8), 0.05), Sphere((0.9, 0.3), 0.05)]
    tree = RangeTree(spheres)
    tree.add_spheres(range(3))
    assert tree.num_dim == 2
    assert sorted(tree) == [0, 1, 2]


def test_clear():
    tree = RangeTree(_points(8, 2), 2)
    tree.add_spheres(range(8))
    tree.clear()
    assert len(tree) == 0
    assert tree.count_tree_nodes() == 0


def test_duplicate_coordinates():
    pts = [(0.5, 0.5)] * 6
    tree = RangeTree(pts, 2)
    for i in range(6):
        tree.add_sphere(i)
    assert len(tree) == 6
    tree.rebalance()
    assert sorted(tree) == list(range(6))


def test_three_dimensions_rebalance_keeps_all_indices():
    pts = _points(30, 3)
    tree = RangeTree(pts, 3)
    for i in range(15):
        tree.add_sphere(i)
    tree.add_spheres(range(15, 30))
    assert sorted(tree) == list(range(30))
    assert tree.count_tree_nodes() > 2 * 30 - 1


def test_format_reports_tree_summary():
    n = 3
    tree = RangeTree([(0.2,), (0.6,), (0.4,)], 1)
    tree.add_spheres(range(n))
    text = tree.format("demo")
    assert "Printing Range_Tree demo" in text
    assert "Done Printing Range_Tree demo" in text
    assert f"Tree had {2 * n - 1} nodes ({n} leaves) for {n} spheres" in text
    assert text.count("LEAF.") == n


def test_format_lists_subtrees_in_two_dimensions():
    tree = RangeTree([(0.1, 0.2), (0.5, 0.3)], 2)
    tree.add_spheres([0, 1])
    text = tree.format("pair")
    assert text.count("==== TREE ====") == 2
    assert "subtree->" in text
    assert "no subtree." in text