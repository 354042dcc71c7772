import pytest

from spokedarts.piercing import DomainTouch, PiercedSegment, Piercing


def _check_ordered_within(segments, a, b):
    for start, end in segments:
        assert a <= start < end <= b
    for (_, end), (start, _) in zip(segments, segments[1:]):
        assert end <= start


def test_no_spheres_whole_segment_uncovered():
    seg = PiercedSegment(0.0, 10.0)
    assert seg.uncovered_segments() == [(0.0, 10.0)]


def test_single_interior_sphere():
    seg = PiercedSegment(0.0, 10.0)
    assert seg.add_piercing(2.0, 4.0) is False
    assert seg.uncovered_segments() == [(0.0, 2.0), (4.0, 10.0)]


def test_sphere_covering_whole_segment():
    seg = PiercedSegment(0.0, 10.0)
    assert seg.add_piercing(-1.0, 11.0) is True
    assert seg.covered
    assert seg.uncovered_segments() == []


def test_sphere_covering_start():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(-1.0, 3.0)
    assert seg.depth_at_a == 1
    assert seg.uncovered_segments() == [(3.0, 10.0)]


def test_overlapping_spheres_merge():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(4.0, 7.0)
    seg.add_piercing(2.0, 5.0)
    assert seg.uncovered_segments() == [(0.0, 2.0), (7.0, 10.0)]


def test_sphere_covering_end():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(8.0, 12.0)
    assert seg.uncovered_segments() == [(0.0, 8.0)]


def test_min_length_discards_short_pieces():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(0.5, 9.5)
    assert seg.uncovered_segments(min_length=1.0) == []
    assert seg.uncovered_segments() == [(0.0, 0.5), (9.5, 10.0)]


def test_sphere_outside_segment_ignored():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(12.0, 15.0)
    seg.add_piercing(-5.0, -2.0)
    assert seg.piercings == []
    assert seg.uncovered_segments() == [(0.0, 10.0)]


def test_piercings_recorded_with_direction():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(2.0, 4.0)
    assert seg.piercings == [Piercing(2.0, True), Piercing(4.0, False)]


def test_reversed_piercing_rejected():
    seg = PiercedSegment(0.0, 10.0)
    with pytest.raises(ValueError):
        seg.add_piercing(5.0, 3.0)


def test_uncovered_length_plus_covered_is_total():
    seg = PiercedSegment(0.0, 10.0)
    for x, y in [(1.0, 2.0), (1.5, 3.0), (6.0, 6.5), (9.0, 11.0)]:
        seg.add_piercing(x, y)
    segments = seg.uncovered_segments()
    _check_ordered_within(segments, 0.0, 10.0)
    uncovered = sum(end - start for start, end in segments)
    covered = (3.0 - 1.0) + (6.5 - 6.0) + (10.0 - 9.0)
    assert uncovered == pytest.approx(10.0 - covered)


def test_domain_exit_inside_segment():
    seg = PiercedSegment(0.0, 10.0)
    assert seg.add_domain_exit(6.0) == DomainTouch(True, False)
    assert seg.uncovered_segments() == [(0.0, 6.0)]


def test_domain_exit_before_start_covers_everything():
    seg = PiercedSegment(1.0, 10.0)
    seg.add_piercing(3.0, 4.0)
    assert seg.add_domain_exit(0.5) == DomainTouch(True, True)
    assert seg.covered
    assert seg.piercings == []
    assert seg.uncovered_segments() == []


def test_domain_exit_beyond_end_untouched():
    seg = PiercedSegment(0.0, 10.0)
    assert seg.add_domain_exit(12.0) == DomainTouch(False, False)
    assert seg.uncovered_segments() == [(0.0, 10.0)]


def test_domain_exit_combined_with_spheres():
    seg = PiercedSegment(0.0, 10.0)
    seg.add_piercing(2.0, 4.0)
    seg.add_domain_exit(7.0)
    assert seg.uncovered_segments() == [(0.0, 2.0), (4.0, 7.0)]