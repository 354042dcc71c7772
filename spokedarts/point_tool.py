"""Geometric helpers for points and spheres in a fixed number of dimensions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Union

Point = tuple[float, ...]
Vector = Sequence[float]


@dataclass(frozen=True)
class Sphere:
    """A sphere given by its center and radius."""

    center: Point
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", tuple(float(x) for x in self.center))
        object.__setattr__(self, "radius", float(self.radius))

    @property
    def num_dim(self) -> int:
        return len(self.center)


class GhostResult(NamedTuple):
    """The periodic copy of a point that lies closest to a query point."""

    ghost: Point
    distance_squared: float
    is_original: bool


class TwoGhostResult(NamedTuple):
    """The closest periodic copy plus the squared distance to the second closest."""

    ghost: Point
    distance_squared: float
    is_original: bool
    second_distance_squared: float


def _c_round(x: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _wrap(dx: float, g: float) -> tuple[float, float, bool]:
    """Shift ``g`` by whole periods until ``dx`` lies in [-0.5, 0.5]."""
    moved = False
    if dx > 0.5:
        while True:
            g += 1
            dx -= 1
            if not dx > 0.5:
                break
        moved = True
    elif dx < -0.5:
        while True:
            g -= 1
            dx += 1
            if not dx < -0.5:
                break
        moved = True
    return dx, g, moved


class PointTool:
    """Vector arithmetic, periodic ghosts and ball volumes in ``num_dim`` dimensions.

    The periodic routines assume a domain of width 1 in every dimension.
    """

    def __init__(self, num_dim: int) -> None:
        self._num_dim = 0
        self._unit_ball_volume: float | None = None
        self.num_dim = num_dim

    @property
    def num_dim(self) -> int:
        return self._num_dim

    @num_dim.setter
    def num_dim(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"number of dimensions must be a positive integer, got {value!r}")
        if value != self._num_dim:
            self._num_dim = value
            self._unit_ball_volume = None

    def _check(self, *vectors: Vector) -> None:
        for v in vectors:
            if len(v) != self._num_dim:
                raise ValueError(
                    f"expected a vector of length {self._num_dim}, got length {len(v)}"
                )

    # ------------------------------------------------------------------
    # vector arithmetic
    # ------------------------------------------------------------------

    def multiply(self, p: Vector, scalar: float) -> Point:
        """Return ``scalar * p``."""
        self._check(p)
        return tuple(scalar * x for x in p)

    def add(self, p: Vector, q: Vector) -> Point:
        """Return ``p + q``."""
        self._check(p, q)
        return tuple(a + b for a, b in zip(p, q))

    def add_scalar(self, p: Vector, a: float) -> Point:
        """Return ``p`` with ``a`` added to every coordinate."""
        self._check(p)
        return tuple(x + a for x in p)

    def subtract(self, p: Vector, q: Vector) -> Point:
        """Return ``p - q``."""
        self._check(p, q)
        return tuple(a - b for a, b in zip(p, q))

    def axpy(self, a: float, x: Vector, y: Vector) -> Point:
        """Return ``a * x + y``."""
        self._check(x, y)
        return tuple(a * xi + yi for xi, yi in zip(x, y))

    def axpby(self, a: float, x: Vector, b: float, y: Vector) -> Point:
        """Return ``a * x + b * y``."""
        self._check(x, y)
        return tuple(a * xi + b * yi for xi, yi in zip(x, y))

    def dot_product(self, p: Vector, q: Vector) -> float:
        self._check(p, q)
        return sum(a * b for a, b in zip(p, q))

    def norm_squared(self, p: Vector) -> float:
        self._check(p)
        return sum(x * x for x in p)

    def distance_squared(self, p: Vector, q: Vector) -> float:
        self._check(p, q)
        return sum((a - b) * (a - b) for a, b in zip(p, q))

    def normalize(self, p: Vector) -> tuple[Point, float]:
        """Return the unit vector along ``p`` and the original norm of ``p``."""
        norm = math.sqrt(self.norm_squared(p))
        if norm == 0.0:
            raise ValueError("cannot normalize a zero vector")
        return self.multiply(p, 1.0 / norm), norm

    def ray_to_coordinates(self, c: Vector, u: Vector, a: float) -> Point:
        """Return the point ``a * u + c``."""
        return self.axpy(a, u, c)

    def arc_to_coordinates(self, u: Vector, v: Vector, a: float, b: float, r: float) -> Point:
        """Return ``r*a*u + r*b*v`` for coordinates normalised to radius 1."""
        return self.axpby(r * a, u, r * b, v)

    # ------------------------------------------------------------------
    # periodic ghosts, domain width 1
    # ------------------------------------------------------------------

    def closest_ghost(self, p: Vector, q: Vector) -> GhostResult:
        """Find the periodic copy of ``q`` closest to ``p``."""
        self._check(p, q)
        ghost = []
        dx2 = 0.0
        is_original = True
        for pd, qd in zip(p, q):
            dx, g, moved = _wrap(pd - qd, qd)
            if moved:
                is_original = False
            ghost.append(g)
            dx2 += dx * dx
        return GhostResult(tuple(ghost), dx2, is_original)

    def closest_ghost_distance_squared(self, p: Vector, q: Vector) -> float:
        """Squared distance from ``p`` to the closest periodic copy of ``q``."""
        self._check(p, q)
        total = 0.0
        for pd, qd in zip(p, q):
            dx = pd - qd
            dx -= _c_round(dx)
            total += dx * dx
        return total

    def two_closest_ghosts(self, p: Vector, q: Vector) -> TwoGhostResult:
        """Closest periodic copy of ``q`` and the squared distance to the second closest."""
        self._check(p, q)
        ghost = []
        dx2 = 0.0
        is_original = True
        best_dx = 10.0
        replace_dx = 0.0
        for pd, qd in zip(p, q):
            dx, g, moved = _wrap(pd - qd, qd)
            if moved:
                is_original = False
            ghost.append(g)
            dx2 += dx * dx
            second_dx = 1.0 - abs(dx)
            if second_dx < best_dx:
                best_dx = second_dx
                replace_dx = dx
        second = dx2 + best_dx * best_dx - replace_dx * replace_dx
        return TwoGhostResult(tuple(ghost), dx2, is_original, second)

    # ------------------------------------------------------------------
    # angular coordinates
    # ------------------------------------------------------------------

    def theta_to_xyz(self, theta: Vector) -> Point:
        """Convert angles to Cartesian coordinates on the unit sphere."""
        self._check(theta)
        d_max = self._num_dim
        p = [math.cos(theta[0])]
        for d in range(1, d_max):
            v = math.prod(math.sin(t) for t in theta[:d])
            if d < d_max - 1:
                p.append(v * math.cos(theta[d]))
            else:
                p.append(v * math.sin(theta[d - 1]))
        return tuple(p)

    def _require_angles(self, theta: Vector) -> list[float]:
        self._check(theta)
        if self._num_dim < 2:
            raise ValueError("angle iteration needs at least two dimensions")
        return [float(t) for t in theta]

    def next_theta(self, theta: Vector, increment: float) -> tuple[Point, bool]:
        """Step a uniform angular grid; return the new angles and whether the last angle is zero."""
        t = self._require_angles(theta)
        t[0] += increment
        if t[0] > 2 * math.pi:
            t[0] = 0.0
            t[1] += increment
            for d in range(1, self._num_dim - 1):
                if t[d] > math.pi:
                    t[d] = 0.0
                    t[d + 1] += increment
                else:
                    break
        return tuple(t), t[-1] == 0.0

    def first_quadrant_theta(self) -> Point:
        """Starting angles for :meth:`next_quadrant_theta`."""
        if self._num_dim < 2:
            raise ValueError("angle iteration needs at least two dimensions")
        return (math.pi / 4.0,) * (self._num_dim - 1) + (0.0,)

    def next_quadrant_theta(self, theta: Vector, increment: float) -> tuple[Point, bool]:
        """Step the angular grid over [pi/4, 3pi/4]; return new angles and whether the last is zero."""
        t = self._require_angles(theta)
        lo, hi = math.pi / 4.0, 3.0 * math.pi / 4.0
        t[0] += increment
        if t[0] > hi:
            t[0] = lo
            t[1] += increment
            for d in range(1, self._num_dim - 1):
                if t[d] > hi:
                    t[d] = lo
                    t[d + 1] += increment
                else:
                    break
        return tuple(t), t[-1] == 0.0

    # ------------------------------------------------------------------
    # volumes
    # ------------------------------------------------------------------

    def relative_volume(self, r: float) -> float:
        """Volume of a radius-``r`` ball divided by that of the unit ball."""
        return r ** self._num_dim

    def annulus_relative_volume(self, r_inner: float, r_outer: float) -> float:
        return self.relative_volume(r_outer) - self.relative_volume(r_inner)

    def inverse_relative_volume(self, t: float, r: float) -> float:
        """Radius whose ball has ``t`` times the volume of the radius-``r`` ball."""
        return (t * r ** self._num_dim) ** (1.0 / self._num_dim)

    def inverse_annulus_relative_volume(self, t: float, r_inner: float, r_outer: float) -> float:
        """Radius ``r`` where the annulus ``[r_inner, r]`` holds fraction ``t`` of ``[r_inner, r_outer]``."""
        v_inner = self.relative_volume(r_inner)
        v_outer = self.relative_volume(r_outer)
        return (t * (v_outer - v_inner) + v_inner) ** (1.0 / self._num_dim)

    def unit_ball_volume(self) -> float:
        """Volume of the unit ball, cached per dimension."""
        if self._unit_ball_volume is None:
            v = 1.0
            s = 2.0
            for i in range(1, self._num_dim + 1):
                v, s = s / i, 2 * math.pi * v
            self._unit_ball_volume = v
        return self._unit_ball_volume

    def absolute_volume(self, r: Union[float, Sphere]) -> float:
        """Volume of a ball of radius ``r``, or of the given sphere."""
        if isinstance(r, Sphere):
            r = r.radius
        return self.unit_ball_volume() * self.relative_volume(r)

    def box_volume(self, xmax: Vector, xmin: Vector, frame_size: float = 0.0) -> float:
        self._check(xmax, xmin)
        return math.prod(hi - lo + 2 * frame_size for hi, lo in zip(xmax, xmin))

    def in_box(self, p: Vector, xmax: Vector, xmin: Vector, frame_size: float = 0.0) -> bool:
        """True if ``p`` lies in the half-open box grown by ``frame_size``."""
        self._check(p, xmax, xmin)
        return all(
            lo - frame_size <= x < hi + frame_size for x, hi, lo in zip(p, xmax, xmin)
        )

    # ------------------------------------------------------------------
    # formatting
    # ------------------------------------------------------------------

    def format_point(self, p: Vector | None) -> str:
        if p is None:
            return "NULL"
        return "[ " + ", ".join(f"{x:g}" for x in p[: self._num_dim]) + " ]"

    def format_sphere(self, s: Sphere) -> str:
        return f"{self.format_point(s.center)} r:{s.radius:g}"