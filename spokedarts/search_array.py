"""Exhaustive neighbour searches over a list of spheres.

:class:`SearchArray` checks every candidate sphere directly.
:class:`GhostSearchArray` does the same in the periodic unit box, measuring
each sphere by the periodic copy of it that lies closest to the query.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Sequence, Union

from spokedarts.point_tool import PointTool, Sphere

Query = Union[Sphere, Sequence[float]]

_MAX_SQUARED = sys.float_info.max
_SQRT_MAX = math.sqrt(_MAX_SQUARED)
_TOLERANCE = 1e-10


class Neighbor(NamedTuple):
    """A sphere found by a search.

    ``sphere`` is the copy that was measured: the stored sphere itself, or a
    periodic copy of it shifted by whole periods.
    """

    index: int
    sphere: Sphere


class Nearest(NamedTuple):
    """Result of a nearest-sphere search.

    When nothing lies within the threshold, ``index`` and ``sphere`` are None
    and ``distance`` is the threshold itself.
    """

    distance: float
    index: Optional[int]
    sphere: Optional[Sphere]


@dataclass(frozen=True)
class Clearance:
    """Whether a point is free of nearby spheres; false-valued if it is not."""

    clear: bool
    near_sphere: Optional[int] = None

    def __bool__(self) -> bool:
        return self.clear


def _center(p: Query) -> Sequence[float]:
    return p.center if isinstance(p, Sphere) else p


def _is_query(sphere: Sphere, p: Query) -> bool:
    """True if ``p`` is this very sphere, or its center object."""
    return sphere is p or sphere.center is p


def _squared_threshold(distance: float) -> float:
    return distance * distance if distance < _SQRT_MAX else _MAX_SQUARED


class _SphereSearch:
    """Shared storage and point arithmetic for the searches."""

    def __init__(self, spheres: Sequence[Sphere]) -> None:
        self._spheres = spheres
        self._tool: Optional[PointTool] = None

    @property
    def spheres(self) -> Sequence[Sphere]:
        return self._spheres

    def _point_tool(self, num_dim: int) -> PointTool:
        if self._tool is None or self._tool.num_dim != num_dim:
            self._tool = PointTool(num_dim)
        return self._tool

    def _reference_radius(self) -> Optional[float]:
        """Radius of the first stored sphere; all spheres are taken to share it."""
        return self._spheres[0].radius if len(self._spheres) else None


class SearchArray(_SphereSearch):
    """Brute-force searches over ``spheres``.

    If ``indices`` is None every sphere in ``spheres`` is searched, including
    spheres appended later. Otherwise only the indices held by ``indices`` are
    searched; the collection is kept by reference, so it may grow too.
    """

    def __init__(self, spheres: Sequence[Sphere], indices: Optional[Iterable[int]] = None) -> None:
        super().__init__(spheres)
        self._indices = indices

    @property
    def is_global(self) -> bool:
        return self._indices is None

    def _candidates(self) -> Iterable[int]:
        if self._indices is None:
            return range(len(self._spheres))
        return self._indices

    def nearest_sphere(self, p: Query, distance_threshold: float = math.inf) -> Nearest:
        """Closest sphere center to ``p`` no farther than ``distance_threshold``.

        ``p`` itself is skipped if it is one of the stored spheres. On ties the
        later candidate wins.
        """
        c = _center(p)
        tool = self._point_tool(len(c))
        best_sq = _squared_threshold(distance_threshold)
        found: Optional[int] = None
        for i in self._candidates():
            sphere = self._spheres[i]
            if _is_query(sphere, p):
                continue
            d2 = tool.distance_squared(c, sphere.center)
            if best_sq >= d2:
                best_sq = d2
                found = i
        if found is None:
            return Nearest(float(distance_threshold), None, None)
        return Nearest(math.sqrt(best_sq), found, self._spheres[found])

    def no_near_spheres(self, p: Query, radius_factor: float = 1.0, dist: float = 0.0) -> Clearance:
        """Check that no sphere center lies within ``dist + radius_factor * r`` of ``p``.

        ``r`` is the radius of the first stored sphere. A tiny tolerance lets
        spheres at almost exactly that distance pass.
        """
        radius = self._reference_radius()
        if radius is None:
            return Clearance(True)
        c = _center(p)
        tool = self._point_tool(len(c))
        thresh = dist + radius * radius_factor - _TOLERANCE
        thresh_sq = thresh * thresh
        for i in self._candidates():
            if tool.distance_squared(c, self._spheres[i].center) < thresh_sq:
                return Clearance(False, i)
        return Clearance(True)

    def all_near_spheres(
        self, p: Query, dist: float, subtract_radius: bool = False
    ) -> list[Neighbor]:
        """Every sphere whose center lies closer than ``dist`` to ``p``.

        With ``subtract_radius`` the reach grows by the radius of the first
        stored sphere. ``p`` itself is skipped if it is one of the stored spheres.
        """
        c = _center(p)
        tool = self._point_tool(len(c))
        thresh = dist
        if subtract_radius:
            radius = self._reference_radius()
            if radius is not None:
                thresh += radius
        thresh_sq = thresh * thresh
        found = []
        for i in self._candidates():
            sphere = self._spheres[i]
            if _is_query(sphere, p):
                continue
            if tool.distance_squared(c, sphere.center) < thresh_sq:
                found.append(Neighbor(i, sphere))
        return found


class GhostSearchArray(_SphereSearch):
    """Brute-force searches in the periodic unit box ``[0, 1)^d``.

    Each stored sphere is represented by its periodic copy closest to the
    query, so the cost stays linear in the number of spheres whatever the
    dimension. Found copies are returned as shifted :class:`Sphere` objects;
    the stored spheres are never changed.
    """

    def __init__(self, spheres: Sequence[Sphere]) -> None:
        super().__init__(spheres)

    def _ghost_of(self, tool: PointTool, c: Sequence[float], sphere: Sphere) -> tuple[Sphere, float]:
        result = tool.closest_ghost(c, sphere.center)
        copy = sphere if result.is_original else Sphere(result.ghost, sphere.radius)
        return copy, result.distance_squared

    def nearest_sphere(self, p: Query, distance_threshold: float = math.inf) -> Nearest:
        """Closest periodic copy of any sphere to ``p`` within ``distance_threshold``."""
        c = _center(p)
        tool = self._point_tool(len(c))
        best_sq = _squared_threshold(distance_threshold)
        found: Optional[int] = None
        for i, sphere in enumerate(self._spheres):
            if _is_query(sphere, p):
                continue
            d2 = tool.closest_ghost_distance_squared(c, sphere.center)
            if d2 < best_sq:
                best_sq = d2
                found = i
        if found is None:
            return Nearest(float(distance_threshold), None, None)
        copy, _ = self._ghost_of(tool, c, self._spheres[found])
        return Nearest(math.sqrt(best_sq), found, copy)

    def no_near_spheres(self, p: Query, radius_factor: float = 1.0, dist: float = 0.0) -> Clearance:
        """Check that no periodic copy lies within ``dist + radius_factor * r`` of ``p``."""
        radius = self._reference_radius()
        if radius is None:
            return Clearance(True)
        c = _center(p)
        tool = self._point_tool(len(c))
        thresh = dist + radius * radius_factor - _TOLERANCE
        thresh_sq = thresh * thresh
        for i, sphere in enumerate(self._spheres):
            if _is_query(sphere, p):
                continue
            if tool.closest_ghost_distance_squared(c, sphere.center) < thresh_sq:
                return Clearance(False, i)
        return Clearance(True)

    def all_near_spheres(
        self, p: Query, dist: float, subtract_radius: bool = False
    ) -> list[Neighbor]:
        """Every sphere whose closest periodic copy lies closer than ``dist`` to ``p``.

        With ``subtract_radius`` the squared radius of each sphere is taken off
        its squared distance before comparing.
        """
        c = _center(p)
        tool = self._point_tool(len(c))
        dist_sq = _squared_threshold(dist)
        found = []
        for i, sphere in enumerate(self._spheres):
            if _is_query(sphere, p):
                continue
            copy, d2 = self._ghost_of(tool, c, sphere)
            if subtract_radius:
                d2 -= sphere.radius * sphere.radius
            if d2 < dist_sq:
                found.append(Neighbor(i, copy))
        return found