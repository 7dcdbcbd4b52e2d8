# Party Roulette
# Copyright (C) 2025  Party Roulette developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
Roulette view state.

This module computes which actions a roulette tab offers at any point of a
session. It has no Qt dependency so it can be tested directly.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Sequence

from partyroulette.constants import (
    MIN_PARTICIPANTS,
    MODE_RELAY,
    STATUS_RELAY_DRAWING,
    STATUS_SPINNING,
    VIEW_SETUP,
)

if TYPE_CHECKING:
    from partyroulette.controllers import RouletteController


class RoulettePhase(Enum):
    """
    Represents the current phase of a roulette tab.

    Used to determine which UI elements and actions should be available.
    """

    SETUP = auto()  # Editing the roster and rules
    READY = auto()  # Another draw is possible
    SPINNING = auto()  # The spotlight animation is running
    EXHAUSTED = auto()  # Nothing left to draw
    INTERRUPTED = auto()  # Relay chain references a removed participant


@dataclass
class RouletteViewState:
    """
    Encapsulates the computed state of a roulette tab.

    Attributes
    ----------
    mode : str
        ``"pair"`` or ``"gift"``
    phase : RoulettePhase
        Current phase of the tab
    participant_count : int
        Number of participants on the roster
    remaining_count : int
        Participants still to be drawn
    result_count : int
        Groups drawn, or relay chain length
    can_enter_roulette : bool
        Whether the roster is large enough to open the roulette
    can_spin : bool
        Whether the next draw can start
    can_reroll : bool
        Whether the latest result can be redrawn
    can_release : bool
        Whether drawn groups can be released (pairing only)
    can_reset : bool
        Whether results can be cleared
    can_edit_setup : bool
        Whether roster and rules editing is available
    """

    mode: str
    phase: RoulettePhase
    participant_count: int
    remaining_count: int
    result_count: int
    can_enter_roulette: bool
    can_spin: bool
    can_reroll: bool
    can_release: bool
    can_reset: bool
    can_edit_setup: bool

    @classmethod
    def compute(
        cls, controller: "RouletteController", spinning: bool = False
    ) -> "RouletteViewState":
        """
        Compute the current roulette state.

        Parameters
        ----------
        controller : RouletteController
            The session controller of the tab
        spinning : bool, optional
            Whether the spotlight animation is running

        Returns
        -------
        RouletteViewState
            The computed state object with all derived properties
        """
        participant_count = controller.participant_count
        can_enter = participant_count >= MIN_PARTICIPANTS
        interrupted = False

        if controller.mode == MODE_RELAY:
            state = controller.state
            remaining = len(state.remaining_participants)
            result_count = len(state.chain)
            interrupted = bool(state.stale_ids)
            drawable = can_enter and not interrupted and not state.is_complete
            can_reroll = result_count > 0 and not interrupted
            can_release = False
        else:
            state = controller.state
            remaining = len(state.available_participants)
            result_count = len(state.groups)
            drawable = remaining >= MIN_PARTICIPANTS
            can_reroll = state.latest_group is not None
            can_release = result_count > 0

        if controller.view == VIEW_SETUP:
            phase = RoulettePhase.SETUP
        elif spinning:
            phase = RoulettePhase.SPINNING
        elif interrupted:
            phase = RoulettePhase.INTERRUPTED
        elif drawable:
            phase = RoulettePhase.READY
        else:
            phase = RoulettePhase.EXHAUSTED

        idle = not spinning
        return cls(
            mode=controller.mode,
            phase=phase,
            participant_count=participant_count,
            remaining_count=remaining,
            result_count=result_count,
            can_enter_roulette=can_enter and idle,
            can_spin=drawable and idle,
            can_reroll=can_reroll and idle,
            can_release=can_release and idle,
            can_reset=result_count > 0 and idle,
            can_edit_setup=idle,
        )

    @property
    def spin_button_text(self) -> str:
        """Get the text for the spin button."""
        if self.phase == RoulettePhase.SPINNING:
            return "Spinning..."
        if self.mode == MODE_RELAY:
            if self.phase == RoulettePhase.EXHAUSTED:
                return "Relay Complete"
            if self.phase == RoulettePhase.INTERRUPTED:
                return "Relay Interrupted"
            return "Draw First Recipient" if self.result_count == 0 else "Draw Next Giver"
        if self.phase == RoulettePhase.EXHAUSTED:
            return "Everyone Is Paired"
        return "Spin"

    @property
    def counter_text(self) -> str:
        """Get the short progress text shown next to the results."""
        if self.mode == MODE_RELAY:
            return f"{self.result_count} drawn, {self.remaining_count} left"
        return f"{self.result_count} group(s), {self.remaining_count} waiting"

    @property
    def spinning_status(self) -> str:
        """Get the status line shown while a draw is spinning."""
        return STATUS_RELAY_DRAWING if self.mode == MODE_RELAY else STATUS_SPINNING


def fit_slowdown(steps: Sequence[int], budget_ms: int) -> List[int]:
    """
    Trim slowdown steps so they add up to ``budget_ms``.

    Steps are kept in order while they fit; the last kept step absorbs the
    remainder so the reveal lands exactly on the budget.
    """
    fitted: List[int] = []
    total = 0
    for step in steps:
        if total + step > budget_ms:
            break
        fitted.append(step)
        total += step
    if fitted:
        fitted[-1] += budget_ms - total
    elif budget_ms > 0:
        fitted.append(budget_ms)
    return fitted
