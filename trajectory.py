# trajectory.py
"""
Deterministic per-particle attribute generation.

Every confetti piece is described by a ParticleAttributes record derived
purely from its index and the canvas size. No random number generator is
involved: the pseudo-random scatter comes from the fractional parts of
scaled index seeds, so the same inputs always produce the same confetti.
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from constants import (
    BASE_SIZE, BURST_DELAY_SCALE, BURST_FALL_MAX, BURST_FALL_SCALE,
    BURST_INSET_X, BURST_INSET_Y, BURST_STAGGER_BUCKETS, BURST_STAGGER_STEP,
    DEFAULT_FALL_DURATION, DEFAULT_PALETTE, DELAY_BUCKETS, DELAY_STEP,
    DRIFT_FACTOR, DRIFT_SPREAD, EDGE_BOTTOM, EDGE_OFFSET,
    EDGE_RIGHT, EDGE_TOP, END_Y_MARGIN, PAPER_DRIFT_FACTOR, RIBBON_ASPECT,
    RIBBON_CORNER_RADIUS, SEED_STEP, SHAPE_RIBBON, SHAPE_ROUND, SIZE_BUCKETS,
    SPIN_BUCKETS, SPIN_FACTOR, START_X_FACTOR, START_Y,
)

Color = Tuple[int, int, int]
Point = Tuple[float, float]

# --- Data Contracts ---
#
# class TrajectoryGenerator:
#   - __init__(self, palette, fall_duration, from_all_sides):
#     - Inputs:
#       - palette: ordered sequence of RGB tuples, frozen into a tuple.
#       - fall_duration: float > 0, shared by every particle.
#       - from_all_sides: bool, selects the edge-burst trajectory.
#
#   - generate(self, index: int, width: float, height: float) -> ParticleAttributes:
#     - Outputs: an immutable attribute record.
#     - Side Effects: None.
#     - Invariants:
#       - Equal inputs always produce equal records.
#       - A zero-sized axis collapses every coordinate on that axis to 0.


def frac(value: float) -> float:
    """Fractional part of value, always in [0, 1)."""
    return value - math.floor(value)


@dataclass(frozen=True)
class ParticleAttributes:
    """Fixed visual and motion attributes of one confetti piece."""
    index: int
    color: Color
    size: float
    shape: str
    extent: Tuple[float, float]
    corner_radius: float
    rotation: float
    start_position: Point
    end_position: Point
    delay: float
    fall_duration: float
    # Burst mode only: the inward waypoint reached before the fall begins.
    burst_position: Optional[Point] = None
    burst_delay: float = 0.0
    spin: float = 0.0


class TrajectoryGenerator:
    """
    Maps a particle index and canvas size to its attributes.
    """
    def __init__(
        self,
        palette: Sequence[Color] = DEFAULT_PALETTE,
        fall_duration: float = DEFAULT_FALL_DURATION,
        from_all_sides: bool = False,
    ):
        self.palette = tuple(tuple(c) for c in palette)
        self.fall_duration = fall_duration
        self.from_all_sides = from_all_sides

    def generate(self, index: int, width: float, height: float) -> ParticleAttributes:
        width = max(0.0, float(width))
        height = max(0.0, float(height))
        seed = index * SEED_STEP

        size = float(BASE_SIZE + index % SIZE_BUCKETS)
        if index % 2 == 0:
            shape = SHAPE_RIBBON
            extent = (size, size * RIBBON_ASPECT)
            corner_radius = RIBBON_CORNER_RADIUS
        else:
            shape = SHAPE_ROUND
            extent = (size, size)
            corner_radius = size / 2

        common = dict(
            index=index,
            color=self.palette[index % len(self.palette)],
            size=size,
            shape=shape,
            extent=extent,
            corner_radius=corner_radius,
            rotation=float(index % 360),
        )
        delay = (index % DELAY_BUCKETS) * DELAY_STEP

        if self.from_all_sides:
            start, burst, end = self._edge_path(index, seed, width, height)
            return ParticleAttributes(
                start_position=start,
                end_position=end,
                delay=delay * BURST_DELAY_SCALE,
                fall_duration=min(self.fall_duration * BURST_FALL_SCALE, BURST_FALL_MAX),
                burst_position=burst,
                burst_delay=(index % BURST_STAGGER_BUCKETS) * BURST_STAGGER_STEP,
                spin=float((index * SPIN_FACTOR) % SPIN_BUCKETS),
                **common,
            )

        start_x = frac(seed * START_X_FACTOR) * width
        end_x = start_x + (frac(seed * DRIFT_FACTOR) - 0.5) * DRIFT_SPREAD
        start = (start_x, START_Y)
        end = (end_x, height + END_Y_MARGIN)
        return ParticleAttributes(
            start_position=_collapse(start, width, height),
            end_position=_collapse(end, width, height),
            delay=delay,
            fall_duration=self.fall_duration,
            **common,
        )

    def _edge_path(self, index, seed, width, height):
        """Start, burst waypoint and landing point for the all-sides mode."""
        edge = index % 4
        t = frac(seed * START_X_FACTOR)

        if edge == EDGE_TOP:
            start = (t * width, -EDGE_OFFSET)
            burst = (t * width, height * BURST_INSET_Y)
        elif edge == EDGE_RIGHT:
            start = (width + EDGE_OFFSET, t * height)
            burst = (width * (1 - BURST_INSET_X), t * height)
        elif edge == EDGE_BOTTOM:
            start = (t * width, height + EDGE_OFFSET)
            burst = (t * width, height * (1 - BURST_INSET_Y))
        else:  # left edge
            start = (-EDGE_OFFSET, t * height)
            burst = (width * BURST_INSET_X, t * height)

        end = (burst[0] + (frac(seed * PAPER_DRIFT_FACTOR) - 0.5) * DRIFT_SPREAD,
               height + END_Y_MARGIN)
        return (_collapse(start, width, height),
                _collapse(burst, width, height),
                _collapse(end, width, height))


def _collapse(point: Point, width: float, height: float) -> Point:
    # A canvas with no extent on an axis pins that axis to the origin.
    x, y = point
    return (x if width > 0 else 0.0, y if height > 0 else 0.0)
