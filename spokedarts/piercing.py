"""Covered and uncovered parts of a line segment pierced by spheres."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple


@dataclass(frozen=True)
class Piercing:
    """A point where a line enters (``forward``) or leaves a covering sphere."""

    p: float
    forward: bool = True


class DomainTouch(NamedTuple):
    """Outcome of clipping a segment by the domain boundary."""

    touched: bool
    covered: bool


@dataclass
class PiercedSegment:
    """The segment from ``a`` to ``b`` along a line, and the spheres crossing it."""

    a: float
    b: float
    piercings: list[Piercing] = field(default_factory=list)
    depth_at_a: int = 0
    covered: bool = False

    def add_piercing(self, x: float, y: float) -> bool:
        """Record a sphere covering ``[x, y]`` of the line.

        Returns True if that sphere alone covers the whole segment.
        """
        if x > y:
            raise ValueError(f"piercing start {x} lies after its end {y}")
        if x < self.a < y:
            self.depth_at_a += 1
            if y > self.b:
                self.covered = True
                return True
        if self.a <= x <= self.b:
            self.piercings.append(Piercing(x, True))
        if self.a <= y <= self.b:
            self.piercings.append(Piercing(y, False))
        return False

    def add_domain_exit(self, t: float) -> DomainTouch:
        """Record that the line leaves the domain at distance ``t``."""
        if t <= self.a:
            self.piercings.clear()
            self.depth_at_a += 1
            self.covered = True
            return DomainTouch(True, True)
        if t < self.b:
            self.piercings.append(Piercing(t, True))
            return DomainTouch(True, False)
        return DomainTouch(False, False)

    def uncovered_segments(self, min_length: float = 0.0) -> list[tuple[float, float]]:
        """Uncovered sub-segments ``(start, end)`` longer than ``min_length``, in order."""
        self.piercings.sort(key=lambda piercing: piercing.p)
        depth = self.depth_at_a
        segments: list[tuple[float, float]] = []
        seg_start = self.a
        for piercing in self.piercings:
            if piercing.forward:
                depth += 1
                if depth == 1 and piercing.p - seg_start > min_length:
                    segments.append((seg_start, piercing.p))
            else:
                if depth == 0:
                    raise ValueError("a sphere is left before it was entered")
                depth -= 1
                if depth == 0:
                    seg_start = piercing.p
        if depth == 0 and self.b - seg_start > min_length:
            segments.append((seg_start, self.b))
        return segments