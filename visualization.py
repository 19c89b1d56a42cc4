# visualization.py
"""
Draws confetti frames using Pygame.

The Visualizer is the host side of the effect. It reports the window size
to the ParticleSystem, forwards keyboard input as the activation flag, and
paints whatever descriptors the system hands it. It knows nothing about
trajectories or timing.
"""
import logging
import math
import pygame
from typing import Dict, List, Sequence, Tuple

from constants import BACKGROUND_COLOR, DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH, FPS
from particle import ParticleDescriptor, ParticleSystem

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, width: int, height: int, fps: int, background_color: Sequence[int]):
#     - Side Effects: Initializes Pygame and opens a resizable window.
#
#   - draw(self, system: ParticleSystem, frame: List[ParticleDescriptor]) -> bool:
#     - Inputs:
#       - system: receives activation toggles and resize events.
#       - frame: descriptors ordered by index.
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: Renders the frame, handles Pygame events, and sets
#       replay_requested when the user asks for a replay.
#
#   - tick(self) -> float:
#     - Outputs: Seconds since the previous tick, capped by the frame rate.

PieceKey = Tuple[str, Tuple[float, float], Tuple[int, int, int], float]


class Visualizer:
    """
    Renders confetti descriptors and turns window events into host inputs.
    """
    def __init__(
        self,
        width: int = DEFAULT_WINDOW_WIDTH,
        height: int = DEFAULT_WINDOW_HEIGHT,
        fps: int = FPS,
        background_color: Sequence[int] = BACKGROUND_COLOR,
    ):
        pygame.init()
        pygame.font.init()

        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Confetti")
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.background_color = pygame.Color(*background_color)

        # Unrotated piece surfaces, keyed by everything that shapes the pixels.
        self.piece_surfaces: Dict[PieceKey, pygame.Surface] = {}
        self.replay_requested = False

        self.font = pygame.font.SysFont(None, 20)
        self.text_color = (200, 200, 200)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def _piece_surface(self, piece: ParticleDescriptor) -> pygame.Surface:
        key = (piece.shape, piece.size, piece.color, piece.corner_radius)
        surface = self.piece_surfaces.get(key)
        if surface is None:
            w, h = (max(1, math.ceil(v)) for v in piece.size)
            surface = pygame.Surface((w, h), pygame.SRCALPHA)
            pygame.draw.rect(
                surface,
                piece.color,
                surface.get_rect(),
                border_radius=int(round(piece.corner_radius)),
            )
            self.piece_surfaces[key] = surface
            logging.debug(f"Pre-rendered {piece.shape} piece {w}x{h} in {piece.color}.")
        return surface

    def _handle_events(self, system: ParticleSystem) -> bool:
        # Pointer events are never consumed here; the overlay must not
        # capture input meant for whatever sits underneath it.
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                if event.key == pygame.K_SPACE:
                    system.set_active(not system.is_active)
                    logging.info(f"Activation flag set to {system.is_active} by user.")
                elif event.key == pygame.K_r:
                    self.replay_requested = True

            if event.type == pygame.VIDEORESIZE:
                system.resize(event.w, event.h)
        return True

    def draw(self, system: ParticleSystem, frame: List[ParticleDescriptor]) -> bool:
        """
        Draws one frame and handles events.

        Returns:
            bool: False if the demo should exit, True otherwise.
        """
        if not self._handle_events(system):
            return False

        self.screen.fill(self.background_color)

        for piece in frame:
            surface = self._piece_surface(piece)
            # Pygame rotates counter-clockwise; descriptors use clockwise degrees.
            rotated = pygame.transform.rotate(surface, -piece.rotation)
            x, y = piece.position
            self.screen.blit(rotated, rotated.get_rect(center=(int(x), int(y))))

        status = "falling" if system.is_falling else "idle"
        hint = f"[{status}]  SPACE toggle  R replay  ESC quit"
        self.screen.blit(self.font.render(hint, True, self.text_color), (10, 10))

        pygame.display.flip()
        return True

    def tick(self) -> float:
        return self.clock.tick(self.fps) / 1000.0

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
