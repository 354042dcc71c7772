"""Pair-distance histograms for judging the quality of a sphere packing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from spokedarts.point_tool import PointTool, Sphere
from spokedarts.search_array import GhostSearchArray, SearchArray

_MAX_REPORTED_CONFLICTS = 9


@dataclass
class Histogram:
    """Normalised histogram of neighbour distances, in units of the sphere radius.

    Bin ``k`` covers distances from ``1 + k / bins_per_rx`` to
    ``1 + (k + 1) / bins_per_rx`` radii. Counts are divided by the surface
    area factor of their shell.
    """

    bins: list[float] = field(default_factory=list)
    num_windowed_points: int = 0
    num_distances: int = 0
    num_histogram_distances: int = 0
    bins_per_rx: int = 20
    dim: int = 2
    num_spheres: int = 0
    window_frame: float = 0.0
    rx: float = 0.0
    bin_average: float = 0.0
    maxbin: float = 0.0
    min_distance: float = 1.0
    look_periodic: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def has_error(self) -> bool:
        """True if a sphere lay outside the periodic domain or two spheres conflicted."""
        return bool(self.errors) or self._conflicts > 0

    _conflicts: int = field(default=0, repr=False)


def build_histogram(
    spheres: Sequence[Sphere],
    xmin: Sequence[float],
    xmax: Sequence[float],
    is_periodic: bool = False,
    radius_factor: float = 3.0,
) -> Histogram:
    """Histogram the distances between neighbouring spheres.

    Distances from 1 to ``1 + radius_factor`` radii are reported; the radius
    is that of the first sphere. Periodic domains are taken to be the unit box.
    Problems found along the way are listed in ``Histogram.errors``.
    """
    if len(spheres) == 0:
        raise ValueError("cannot build a histogram of no spheres")
    if len(xmin) != len(xmax):
        raise ValueError("domain bounds differ in dimension")

    tool = PointTool(len(xmin))
    hist = Histogram(look_periodic=bool(is_periodic), dim=tool.num_dim, num_spheres=len(spheres))
    rx = spheres[0].radius
    if rx <= 0.0:
        raise ValueError(f"sphere radius must be positive, got {rx}")
    hist.rx = rx

    max_h = radius_factor + 1.0 / hist.bins_per_rx
    max_neighbor = (1.0 + max_h) * rx
    numbins = math.ceil(max_h * hist.bins_per_rx)
    counts = [0.0] * numbins

    if is_periodic:
        hist.window_frame = 0.0
        search = GhostSearchArray(spheres)
    else:
        hist.window_frame = min(3.0, 0.3 / rx)
        search = SearchArray(spheres)

    min_distance = 1.0
    for i, sphere in enumerate(spheres):
        p = sphere.center
        if is_periodic and not tool.in_box(p, xmax, xmin, rx * 1e-4):
            hist.errors.append(
                f"Domain error, real disk i:{i}{tool.format_point(p)} is outside the domain box: "
                f"{tool.format_point(xmin)} x {tool.format_point(xmax)}"
            )

        if not (is_periodic or tool.in_box(p, xmax, xmin, hist.window_frame)):
            continue
        hist.num_windowed_points += 1

        for neighbor in search.all_near_spheres(sphere, max_neighbor):
            h = math.sqrt(tool.distance_squared(p, neighbor.sphere.center))
            min_distance = min(min_distance, h)
            if h < rx:
                if h < rx * (1.0 - 1e-2) - 1e-7:
                    hist._conflicts += 1
                    if hist._conflicts <= _MAX_REPORTED_CONFLICTS:
                        hist.errors.append(
                            f"Conflict distance error, disks i:{i} j:{neighbor.index} at distance:{h:g}"
                            f" < rx:{rx:g}, distance = {h / rx:g} r."
                        )
                h = rx
            hist.num_distances += 1
            k = math.floor((h / rx - 1.0) * hist.bins_per_rx)
            if 0 <= k < numbins:
                counts[k] += 1
                hist.num_histogram_distances += 1

    hist.min_distance = min_distance / rx

    hist.bins = [
        count / (k + hist.bins_per_rx + 0.5) ** (tool.num_dim - 1.0)
        for k, count in enumerate(counts)
    ]
    hist.maxbin = max([0.0, *hist.bins])

    tail = hist.bins[hist.bins_per_rx + 1 :]
    hist.bin_average = sum(tail) / len(tail) if tail else math.nan
    return hist