# spokedarts

Geometric building blocks for maximal Poisson-disk ("blue noise") sampling in
any number of dimensions, in the style of the spoke-dart method. Points are
plain sequences of floats (results come back as tuples); spheres are
`Sphere` objects holding a centre and a radius. The package has no
dependencies beyond the standard library.

## Modules

- `spokedarts.point_tool`
  - `Sphere(center, radius)`: a frozen dataclass; `num_dim` gives its dimension.
  - `PointTool(num_dim)`: vector arithmetic that returns new tuples
    (`multiply`, `add`, `add_scalar`, `subtract`, `axpy`, `axpby`,
    `dot_product`, `norm_squared`, `distance_squared`, `normalize`, which
    returns the unit vector and the original norm, `ray_to_coordinates`,
    `arc_to_coordinates`); ball volumes (`unit_ball_volume`,
    `absolute_volume`, `relative_volume`, `annulus_relative_volume` and the
    inverses `inverse_relative_volume`, `inverse_annulus_relative_volume`);
    periodic copies in the unit box (`closest_ghost`,
    `closest_ghost_distance_squared`, `two_closest_ghosts`); angular grids
    (`theta_to_xyz`, `next_theta`, `first_quadrant_theta`,
    `next_quadrant_theta`); boxes (`in_box`, `box_volume`); and text
    (`format_point`, `format_sphere`). Vectors of the wrong length raise
    `ValueError`.
- `spokedarts.random_source`
  - `Random(num_dim=None, seed=1391722129)`: a deterministic lagged
    subtract-with-borrow generator. `random()` gives a float in [0, 1);
    `seed(x)` restarts it. Interval picks: `random_uniform`, `random_middle`
    (mean of three uniforms), `random_by_volume`, `random_by_annulus_volume`,
    `random_by_two_annuli` (returns the radius and whether it came from the
    first annulus). Points: `sample_uniformly_from_box`,
    `sample_uniformly_from_unit_sphere`,
    `sample_uniformly_from_unit_sphere_surface`, `random_orthonormal_vector`.
    The point and volume methods need `num_dim` to be set.
  - `mean_and_deviation(data)`: mean and population standard deviation.
- `spokedarts.piercing`
  - `PiercedSegment(a, b)` collects `Piercing`s where a line enters and leaves
    spheres along `[a, b]` (`add_piercing(x, y)`) and where it leaves the
    domain (`add_domain_exit(t)`); `uncovered_segments(min_length)` lists the
    uncovered `(start, end)` pieces in order.
- `spokedarts.range_tree`
  - `RangeTree(points, num_dim=None)`: a multi-level tree over indices into
    `points` (coordinate sequences or `Sphere`s), one level per coordinate.
    `add_sphere` inserts incrementally, `add_spheres` inserts many and
    rebalances, `needs_rebalance` reports when insertions have made it too
    deep, `rebalance` rebuilds it. It behaves as a sequence of the added
    indices (`len`, iteration, indexing); `count_tree_nodes` counts real
    nodes, `num_nodes` gives the nominal count, and `format(name)` dumps the
    structure as text.
- `spokedarts.search_array`
  - `SearchArray(spheres, indices=None)`: brute-force `nearest_sphere`,
    `no_near_spheres` (returns a `Clearance`, false-valued when a sphere is
    too close) and `all_near_spheres` (returns `Neighbor`s), over all spheres
    or only the given indices.
  - `GhostSearchArray(spheres)`: the same queries in the periodic unit box,
    measuring each sphere by its periodic copy closest to the query; copies
    come back as shifted `Sphere`s.
- `spokedarts.quality`
  - `build_histogram(spheres, xmin, xmax, is_periodic=False, radius_factor=3.0)`
    bins neighbour distances into a `Histogram` (in units of the first
    sphere's radius), and lists spheres outside a periodic domain and pairs
    closer than one radius in `Histogram.errors`; `has_error` tells whether
    any were found.

## Example

```python
from spokedarts.piercing import PiercedSegment
from spokedarts.point_tool import PointTool, Sphere
from spokedarts.random_source import Random
from spokedarts.search_array import SearchArray

pt = PointTool(2)
print(pt.unit_ball_volume())          # 3.141592653589793

rng = Random(2, seed=1391722129)
centre = rng.sample_uniformly_from_box([1.0, 1.0], [0.0, 0.0])

spheres = [Sphere(centre, 0.1)]
search = SearchArray(spheres)
print(bool(search.no_near_spheres([0.5, 0.5], 1.0, 0.0)))

segment = PiercedSegment(0.0, 1.0)
segment.add_piercing(0.2, 0.4)
print(segment.uncovered_segments())   # [(0.0, 0.2), (0.4, 1.0)]
```

## What it does not do

This is a library of parts, not a sampler. It does not itself generate a
maximal Poisson-disk sample set, write sample files or plots, or run timing
studies, and it installs no command. Searches are brute force only
(`SearchArray`, `GhostSearchArray`); there is no grid or k-d tree search,
and `RangeTree` stores and balances indices but offers no range query.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```