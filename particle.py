# particle.py
"""
Manages the state of all confetti pieces.

This module defines the ParticleSystem class, which owns the effect's
configuration, its activation state and the per-particle attribute arrays.
Given the time elapsed since activation, it produces the ordered list of
descriptors a renderer needs to draw one frame.
"""
import logging
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from activation import ActivationStateMachine
from animation import eased_progress, lerp
from constants import (
    BURST_DURATION, DEFAULT_FALL_DURATION, DEFAULT_PIECE_COUNT, DEFAULT_STYLE,
    EASE_IN, EASE_OUT, FALL_PHASE_OFFSET, MIN_FALL_DURATION, STYLES,
)
from trajectory import ParticleAttributes, TrajectoryGenerator

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], width: float = 0, height: float = 0,
#              is_active: bool = False):
#     - Inputs:
#       - params: The "effect" section of config.json.
#         - "piece_count": int, clamped to >= 0
#         - "fall_duration": float seconds, clamped to > 0
#         - "style": one of constants.STYLES
#         - "from_all_sides": bool
#       - width, height: canvas size, may be 0 before layout is known.
#       - is_active: the host's activation flag at mount time.
#     - Side Effects: Generates all particles and evaluates activation once.
#     - Invariants:
#       - start_positions, end_positions, burst_positions are (N, 2) float64.
#       - delays, durations, burst_delays, rotations, spins are (N,) float64.
#       - self.particles[i].index == i for every i.
#
#   - frame(self, t: Optional[float] = None) -> List[ParticleDescriptor]:
#     - Outputs: one descriptor per particle, ordered by index.
#     - Side Effects: None.


@dataclass(frozen=True)
class ParticleDescriptor:
    """Everything a renderer needs to draw one piece for one frame."""
    index: int
    position: Tuple[float, float]
    size: Tuple[float, float]
    color: Tuple[int, int, int]
    rotation: float
    shape: str
    corner_radius: float


class ParticleSystem:
    """
    A container for all confetti pieces and the clock that drives them.
    """
    def __init__(
        self,
        params: Dict[str, Any],
        width: float = 0,
        height: float = 0,
        is_active: bool = False,
    ):
        """
        Initializes the particle system.

        Args:
            params (Dict[str, Any]): Effect parameters from config.
            width (float): Canvas width, 0 if layout is not known yet.
            height (float): Canvas height, 0 if layout is not known yet.
            is_active (bool): Host activation flag at mount time.
        """
        self.piece_count = self._normalize_piece_count(
            params.get('piece_count', DEFAULT_PIECE_COUNT)
        )
        self.fall_duration = self._normalize_fall_duration(
            params.get('fall_duration', DEFAULT_FALL_DURATION)
        )
        self.style, palette = self._resolve_style(params.get('style', DEFAULT_STYLE))
        self.from_all_sides = bool(params.get('from_all_sides', False))
        self.fall_offset = FALL_PHASE_OFFSET if self.from_all_sides else 0.0

        self.generator = TrajectoryGenerator(
            palette=palette,
            fall_duration=self.fall_duration,
            from_all_sides=self.from_all_sides,
        )

        self.width = 0.0
        self.height = 0.0
        self._generate(width, height)

        self.elapsed = 0.0
        self.is_active = bool(is_active)
        self.activation = ActivationStateMachine(self.is_active)

        logging.info(
            f"ParticleSystem initialized with {self.piece_count} pieces, "
            f"style '{self.style}', fall duration {self.fall_duration:.2f}s"
            f"{', bursting from all sides' if self.from_all_sides else ''}."
        )
        if self.activation.is_falling:
            logging.info("Effect mounted active. Confetti is falling.")

    # --- Configuration normalization ---

    @staticmethod
    def _normalize_piece_count(value: Any) -> int:
        count = int(value)
        if count < 0:
            logging.warning(f"piece_count {count} is negative. Clamping to 0.")
            return 0
        return count

    @staticmethod
    def _normalize_fall_duration(value: Any) -> float:
        duration = float(value)
        if not duration > 0:
            logging.warning(
                f"fall_duration {duration} is not positive. "
                f"Clamping to {MIN_FALL_DURATION}s."
            )
            return MIN_FALL_DURATION
        return duration

    @staticmethod
    def _resolve_style(style: Any):
        palette = STYLES.get(style)
        if palette is None:
            logging.warning(f"Unknown confetti style '{style}'. Falling back to '{DEFAULT_STYLE}'.")
            return DEFAULT_STYLE, STYLES[DEFAULT_STYLE]
        return style, palette

    # --- Generation ---

    def _generate(self, width: float, height: float) -> None:
        """(Re)computes every particle for the given canvas size."""
        self.width = max(0.0, float(width))
        self.height = max(0.0, float(height))
        self.particles: List[ParticleAttributes] = [
            self.generator.generate(i, self.width, self.height)
            for i in range(self.piece_count)
        ]

        def points(field):
            return np.array(
                [getattr(p, field) for p in self.particles], dtype=np.float64
            ).reshape(self.piece_count, 2)

        def scalars(field):
            return np.array(
                [getattr(p, field) for p in self.particles], dtype=np.float64
            ).reshape(self.piece_count)

        self.start_positions = points('start_position')
        self.end_positions = points('end_position')
        if self.from_all_sides:
            self.burst_positions = points('burst_position')
        else:
            self.burst_positions = self.start_positions.copy()
        self.delays = scalars('delay')
        self.durations = scalars('fall_duration')
        self.burst_delays = scalars('burst_delay')
        self.rotations = scalars('rotation')
        self.spins = scalars('spin')

        logging.debug(
            f"Particle arrays generated for {self.width:g}x{self.height:g}. "
            f"Start positions shape: {self.start_positions.shape}, "
            f"Delays shape: {self.delays.shape}"
        )

    # --- Host inputs ---

    def set_active(self, is_active: Optional[bool]) -> bool:
        """
        Forwards the host's activation flag.

        Returns:
            bool: True if this call started the fall.
        """
        self.is_active = bool(is_active)
        fired = self.activation.update(self.is_active)
        if fired:
            self.elapsed = 0.0
            logging.info("Confetti activated. Particles are falling.")
        return fired

    def resize(self, width: float, height: float) -> bool:
        """
        Handles a "canvas size known" or "canvas size changed" event.

        Returns:
            bool: True if the particles were regenerated.
        """
        width, height = max(0.0, float(width)), max(0.0, float(height))
        if (width, height) == (self.width, self.height):
            return False

        self._generate(width, height)
        logging.info(
            f"Canvas resized to {width:g}x{height:g}. "
            f"Regenerated {self.piece_count} particles."
        )
        if self.is_falling:
            self.elapsed = 0.0
            logging.info("Resize during fall. Animation restarted from new start positions.")
        return True

    def advance(self, dt: float) -> float:
        """Moves the shared clock forward by dt seconds while falling."""
        if self.is_falling:
            self.elapsed += max(0.0, float(dt))
        return self.elapsed

    # --- State ---

    @property
    def is_falling(self) -> bool:
        return self.activation.is_falling

    @property
    def total_duration(self) -> float:
        """Seconds from activation until the last piece has landed."""
        if self.piece_count == 0:
            return 0.0
        total = float(np.max(self.delays + self.durations)) + self.fall_offset
        if self.from_all_sides:
            total = max(total, float(np.max(self.burst_delays)) + BURST_DURATION)
        return total

    @property
    def is_finished(self) -> bool:
        return self.is_falling and self.elapsed >= self.total_duration

    # --- Frame evaluation ---

    def _fall_progress(self, t: float) -> np.ndarray:
        return eased_progress(t - self.fall_offset, self.delays, self.durations, EASE_IN)

    def positions_at(self, t: float) -> np.ndarray:
        """
        Rendered centre of every particle t seconds after activation.

        While idle, every particle sits at its start position.
        """
        if not self.is_falling:
            return self.start_positions.copy()

        fall = self._fall_progress(t)
        if not self.from_all_sides:
            return lerp(self.start_positions, self.end_positions, fall)

        # The burst and the fall compose additively, so the path stays
        # continuous even while a late burst overlaps an early fall.
        burst = eased_progress(
            t, self.burst_delays, np.full(self.piece_count, BURST_DURATION), EASE_OUT
        )
        inward = lerp(self.start_positions, self.burst_positions, burst)
        return inward + (self.end_positions - self.burst_positions) * fall[:, np.newaxis]

    def rotations_at(self, t: float) -> np.ndarray:
        if not self.is_falling or not self.from_all_sides:
            return self.rotations.copy()
        return self.rotations + self.spins * self._fall_progress(t)

    def frame(self, t: Optional[float] = None) -> List[ParticleDescriptor]:
        """
        Builds the ordered descriptor list for one frame.

        Args:
            t (Optional[float]): Seconds since activation. Defaults to the
                internal clock.
        """
        if t is None:
            t = self.elapsed
        positions = self.positions_at(t)
        rotations = self.rotations_at(t)
        return [
            ParticleDescriptor(
                index=p.index,
                position=(float(pos[0]), float(pos[1])),
                size=p.extent,
                color=p.color,
                rotation=float(rotation),
                shape=p.shape,
                corner_radius=p.corner_radius,
            )
            for p, pos, rotation in zip(self.particles, positions, rotations)
        ]
