# activation.py
"""
One-way activation state for the confetti effect.

The machine starts idle and moves to falling on the first rising edge of
the host's activation flag. Falling is terminal: nothing the host does
afterwards moves it back.
"""
import logging
from typing import Optional

IDLE = "idle"
FALLING = "falling"

# --- Data Contracts ---
#
# class ActivationStateMachine:
#   - __init__(self, is_active: Optional[bool] = False):
#     - Side Effects: Evaluates the initial flag once; a true value
#       transitions to FALLING before the constructor returns.
#
#   - update(self, is_active: Optional[bool]) -> bool:
#     - Outputs: True only for the call that fired the transition.
#     - Invariants:
#       - transition_count is 0 or 1, never more.
#       - Once state == FALLING it never changes.


class ActivationStateMachine:
    def __init__(self, is_active: Optional[bool] = False):
        self.state = IDLE
        self.transition_count = 0
        self._last_input = False
        self.update(is_active)

    @property
    def is_falling(self) -> bool:
        return self.state == FALLING

    def update(self, is_active: Optional[bool]) -> bool:
        """
        Feeds the latest host flag into the machine.

        Only a false -> true edge seen while idle fires the transition.
        Missing input counts as false.
        """
        active = bool(is_active)
        rising_edge = active and not self._last_input
        self._last_input = active

        if self.state == FALLING or not rising_edge:
            return False

        self.state = FALLING
        self.transition_count += 1
        logging.debug("Activation edge received. State moved to falling.")
        return True
