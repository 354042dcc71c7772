"""Lagged subtract-with-borrow random numbers and geometric sampling."""

from __future__ import annotations

import math
from typing import Sequence

from spokedarts.point_tool import Point, PointTool

DEFAULT_SEED = 1391722129

_QLEN = 1220
_LAG = 30
_TWO_53 = 9007199254740992.0
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


class Random:
    """Deterministic generator of doubles in [0, 1) plus sampling in ``num_dim`` dimensions.

    ``num_dim`` may be left unset when only scalar draws are needed; the
    geometric methods then raise ``ValueError``.
    """

    def __init__(self, num_dim: int | None = None, seed: int = DEFAULT_SEED) -> None:
        self._tool = PointTool(num_dim) if num_dim is not None else None
        self._q = [0.0] * _QLEN
        self._index = _QLEN
        self._cc = 1.0 / _TWO_53
        self._c = 0.0
        self._zc = 0.0
        self._zx = 0.0
        self._zy = 0.0
        self.seed(seed)

    @property
    def num_dim(self) -> int | None:
        return None if self._tool is None else self._tool.num_dim

    @num_dim.setter
    def num_dim(self, value: int) -> None:
        if self._tool is None:
            self._tool = PointTool(value)
        else:
            self._tool.num_dim = value

    def _point_tool(self) -> PointTool:
        if self._tool is None:
            raise ValueError("the number of dimensions has not been set")
        return self._tool

    # ------------------------------------------------------------------
    # generator
    # ------------------------------------------------------------------

    def seed(self, x: int = DEFAULT_SEED) -> None:
        """Reset the generator state from seed ``x`` (0 selects the default seed)."""
        self._cc = 1.0 / _TWO_53
        self._index = _QLEN
        self._c = 0.0
        self._zc = 0.0
        self._zx = 5212886298506819.0 / _TWO_53
        self._zy = 2020898595989513.0 / _TWO_53

        x &= _MASK64
        if x == 0:
            x = 123456789
        y = 362436069
        q = []
        for _ in range(_QLEN):
            s = 0.0
            t = 1.0
            for _ in range(52):
                t *= 0.5
                x = (69069 * x + 123) & _MASK64
                y = (y ^ (y << 13)) & _MASK32
                y = (y ^ (y >> 17)) & _MASK32
                y = (y ^ (y << 5)) & _MASK32
                if (((x + y) & _MASK64) >> 23) & 1:
                    s += t
            q.append(s)
        self._q = q

    def _refill(self) -> None:
        q = self._q
        cc = self._cc
        c = self._c
        for i in range(_QLEN):
            j = i + (_QLEN - _LAG) if i < _LAG else i - _LAG
            t = q[j] - q[i] + c
            if t > 0:
                t -= cc
                c = cc
            else:
                t = t - cc + 1.0
                c = 0.0
            q[i] = t
        self._c = c

    def random(self) -> float:
        """Return the next number, uniform in [0, 1)."""
        t = self._zx - self._zy - self._zc
        self._zx = self._zy
        if t < 0:
            self._zy = t + 1.0
            self._zc = self._cc
        else:
            self._zy = t
            self._zc = 0.0

        if self._index < _QLEN:
            t = self._q[self._index]
            self._index += 1
        else:
            self._refill()
            self._index = 1
            t = self._q[0]

        zy = self._zy
        return 1.0 + (t - zy) if t < zy else t - zy

    # ------------------------------------------------------------------
    # intervals
    # ------------------------------------------------------------------

    def random_middle(self, a: float, b: float) -> float:
        """Value in [a, b] favouring the middle (mean of three uniforms)."""
        total = self.random() + self.random() + self.random()
        return a + total * (b - a) / 3.0

    def random_uniform(self, a: float, b: float) -> float:
        return self.random() * (b - a) + a

    def random_by_volume(self, r: float) -> float:
        """Radius drawn uniformly by volume from a ball of radius ``r``."""
        pt = self._point_tool()
        return pt.inverse_relative_volume(self.random(), r)

    def random_by_annulus_volume(self, r_inner: float, r_outer: float) -> float:
        """Radius drawn uniformly by volume from the annulus ``[r_inner, r_outer]``."""
        pt = self._point_tool()
        return pt.inverse_annulus_relative_volume(self.random(), r_inner, r_outer)

    def random_by_two_annuli(
        self, r1_inner: float, r1_outer: float, r2_inner: float, r2_outer: float
    ) -> tuple[float, bool]:
        """Radius drawn by volume from two annuli; also whether it came from the first."""
        pt = self._point_tool()
        v1_in = pt.relative_volume(r1_inner)
        v_1 = pt.relative_volume(r1_outer) - v1_in
        v2_in = pt.relative_volume(r2_inner)
        v_2 = pt.relative_volume(r2_outer) - v2_in
        p = self.random() * (v_1 + v_2)
        if p < v_1:
            v = p + v1_in
            from_first = True
        else:
            v = p - v_1 + v2_in
            from_first = False
        return v ** (1.0 / pt.num_dim), from_first

    # ------------------------------------------------------------------
    # points
    # ------------------------------------------------------------------

    def sample_uniformly_from_box(self, xmax: Sequence[float], xmin: Sequence[float]) -> Point:
        """Uniform point in the box ``[xmin, xmax)``."""
        widths = self._point_tool().subtract(xmax, xmin)
        return tuple(lo + w * self.random() for lo, w in zip(xmin, widths))

    def sample_uniformly_from_unit_sphere_surface(self) -> Point:
        """Random unit vector, uniform over directions."""
        pt = self._point_tool()
        while True:
            dart = tuple(
                sum(self.random() for _ in range(12)) - 6.0 for _ in range(pt.num_dim)
            )
            norm_sq = pt.norm_squared(dart)
            if norm_sq > 0.0:
                return pt.multiply(dart, 1.0 / math.sqrt(norm_sq))

    def sample_uniformly_from_unit_sphere(self) -> Point:
        """Random point inside the unit ball, uniform by volume."""
        pt = self._point_tool()
        direction = self.sample_uniformly_from_unit_sphere_surface()
        scale = self.random() ** (1.0 / pt.num_dim)
        return pt.multiply(direction, scale)

    def random_orthonormal_vector(self, u: Sequence[float]) -> Point:
        """Random unit vector orthogonal to the unit vector ``u``."""
        pt = self._point_tool()
        if pt.num_dim < 2:
            raise ValueError("an orthogonal vector needs at least two dimensions")
        while True:
            w = self.sample_uniformly_from_unit_sphere_surface()
            dot = pt.dot_product(u, w)
            if abs(dot) <= 0.9:
                break
        v = pt.axpy(-dot, u, w)
        return pt.multiply(v, 1.0 / math.sqrt(1.0 - dot * dot))


def mean_and_deviation(data: Sequence[float]) -> tuple[float, float]:
    """Mean and population standard deviation of ``data``."""
    values = list(data)
    if not values:
        raise ValueError("cannot take statistics of an empty sequence")
    n = len(values)
    mean = sum(values) / n
    var = sum((x - mean) * (x - mean) for x in values)
    return mean, math.sqrt(var / n)