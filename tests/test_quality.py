import math

import pytest

from spokedarts.point_tool import Sphere
from spokedarts.quality import Histogram, build_histogram

R = 0.125
UNIT_MIN = (0.0, 0.0)
UNIT_MAX = (1.0, 1.0)


def _pair(a, b, r=R):
    return [Sphere(a, r), Sphere(b, r)]


def _nonzero(hist):
    return [k for k, v in enumerate(hist.bins) if v > 0]


def test_two_spheres_land_in_one_bin():
    spheres = _pair((0.5, 0.5), (0.6875, 0.5))
    hist = build_histogram(spheres, UNIT_MIN, UNIT_MAX, False)
    assert hist.num_distances == 2
    assert hist.num_histogram_distances == 2
    assert hist.num_windowed_points == 2
    assert _nonzero(hist) == [10]
    assert hist.min_distance == pytest.approx(1.5)
    assert not hist.has_error


def test_summary_fields():
    spheres = _pair((0.5, 0.5), (0.6875, 0.5))
    hist = build_histogram(spheres, UNIT_MIN, UNIT_MAX, False)
    assert hist.rx == R
    assert hist.num_spheres == 2
    assert hist.dim == 2
    assert hist.look_periodic is False
    assert hist.maxbin == max(hist.bins)
    assert hist.bin_average == 0.0


def test_conflict_is_reported_and_counted_at_first_bin():
    spheres = _pair((0.5, 0.5), (0.55, 0.5))
    hist = build_histogram(spheres, UNIT_MIN, UNIT_MAX, False)
    assert hist.has_error
    assert len(hist.errors) == 2
    assert all(msg.startswith("Conflict distance error") for msg in hist.errors)
    assert _nonzero(hist) == [0]
    assert hist.min_distance < 1.0


def test_periodic_wraps_distances():
    spheres = _pair((0.0625, 0.5), (0.875, 0.5))
    periodic = build_histogram(spheres, UNIT_MIN, UNIT_MAX, True)
    assert periodic.min_distance == pytest.approx(1.5)
    assert periodic.num_distances == 2
    assert _nonzero(periodic) == [10]
    assert periodic.window_frame == 0.0

    flat = build_histogram(spheres, UNIT_MIN, UNIT_MAX, False)
    assert flat.num_distances == 0
    assert flat.min_distance == pytest.approx(1.0 / R)


def test_periodic_point_outside_domain_is_an_error():
    spheres = _pair((1.5, 0.5), (0.5, 0.5))
    hist = build_histogram(spheres, UNIT_MIN, UNIT_MAX, True)
    assert hist.has_error
    assert any(msg.startswith("Domain error") for msg in hist.errors)


def test_counts_never_exceed_distances():
    spheres = [Sphere((0.1 + 0.2 * i, 0.1 + 0.2 * j), 0.1) for i in range(5) for j in range(5)]
    hist = build_histogram(spheres, UNIT_MIN, UNIT_MAX, False, 2.0)
    assert hist.num_histogram_distances <= hist.num_distances
    assert hist.num_distances % 2 == 0
    assert not hist.has_error
    assert hist.min_distance == pytest.approx(2.0)
    assert all(v >= 0 for v in hist.bins)


def test_empty_spheres_rejected():
    with pytest.raises(ValueError):
        build_histogram([], UNIT_MIN, UNIT_MAX, False)


def test_mismatched_bounds_rejected():
    with pytest.raises(ValueError):
        build_histogram(_pair((0.5, 0.5), (0.7, 0.5)), (0.0, 0.0, 0.0), UNIT_MAX, False)


def test_bin_average_is_nan_without_tail_bins():
    hist = build_histogram(_pair((0.5, 0.5), (0.6875, 0.5)), UNIT_MIN, UNIT_MAX, False, 0.5)
    assert math.isnan(hist.bin_average)
    assert isinstance(hist, Histogram)
    assert hist.num_histogram_distances == 2