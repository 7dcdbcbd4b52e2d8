"""Pairing roulette session controller."""

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

from typing import Any, Dict, List, Optional

from partyroulette.constants import (
    MIN_PARTICIPANTS,
    MODE_PAIRING,
    STATUS_NEW_PAIR,
    STATUS_NEW_TRIO,
    STATUS_NOT_ENOUGH,
    STATUS_PAIR_RELEASED,
    STATUS_REROLL_PAIR,
)
from partyroulette.controllers.base import RouletteController
from partyroulette.engine import draw_next_group, release_group, reroll_last_group
from partyroulette.models import Group, PairingState, Participant
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


class PairingController(RouletteController):
    """Draws pairs (and a final trio) from the available pool."""

    mode = MODE_PAIRING
    status_key = "statusText"

    state: PairingState
    highlighted_group_id: Optional[str] = None

    def _empty_state(self) -> PairingState:
        return PairingState()

    def _state_from_dict(self, data: Dict[str, Any]) -> PairingState:
        return PairingState.from_dict(data)

    def _reset_session(self) -> None:
        self.highlighted_group_id = None

    @property
    def groups(self) -> List[Group]:
        return list(self.state.groups)

    @property
    def available_participants(self) -> List[Participant]:
        return self.state.available_participants

    @property
    def can_spin(self) -> bool:
        return len(self.state.available_participants) >= MIN_PARTICIPANTS

    def spin(self) -> Optional[Group]:
        """Draw the next group.

        Returns:
            The new group, or None if fewer than two participants are available
        """
        self.state, group = draw_next_group(self.state, self.rules, self.rng)
        if group is None:
            logger.warning("Spin requested with fewer than 2 available participants")
            self.status_text = STATUS_NOT_ENOUGH
            self._commit()
            return None

        self.highlighted_group_id = group.id
        self.status_text = STATUS_NEW_TRIO if group.is_trio else STATUS_NEW_PAIR
        logger.info(f"Drew {group}")
        self._commit()
        return group

    def release(self, group_id: str) -> bool:
        """Put the members of a group back into the pool.

        Returns:
            True if the group existed and was released
        """
        if self.state.find_group(group_id) is None:
            logger.warning(f"Group {group_id} not found; nothing released")
            return False
        self.state = release_group(self.state, group_id)
        if self.highlighted_group_id == group_id:
            self.highlighted_group_id = None
        self.status_text = STATUS_PAIR_RELEASED
        logger.info(f"Released group {group_id}")
        self._commit()
        return True

    def reroll_latest(self) -> Optional[Group]:
        """Release the most recent group and draw a replacement."""
        if self.state.latest_group is None:
            logger.warning("No group to reroll")
            return None
        self.status_text = STATUS_REROLL_PAIR
        self.state, group = reroll_last_group(self.state, self.rules, self.rng)
        if group is None:
            self._commit()
            return None
        self.highlighted_group_id = group.id
        self.status_text = STATUS_NEW_TRIO if group.is_trio else STATUS_NEW_PAIR
        logger.info(f"Rerolled latest group as {group}")
        self._commit()
        return group
