"""Gift relay session controller."""

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
    MODE_RELAY,
    STATUS_RELAY_CLEARED,
    STATUS_RELAY_COMPLETE,
    STATUS_RELAY_EXTENDED,
    STATUS_RELAY_FINISHED,
    STATUS_RELAY_INSUFFICIENT,
    STATUS_RELAY_INTERRUPTED,
    STATUS_RELAY_REROLL,
    STATUS_RELAY_STARTED,
)
from partyroulette.controllers.base import RouletteController
from partyroulette.engine import (
    RelayOutcome,
    RelayPolicy,
    RelayStatus,
    advance_relay,
    relay_handoffs,
    undo_last_link,
)
from partyroulette.models import Participant, RelayState
from partyroulette.type_hints import Handoffs
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


def describe_outcome(outcome: RelayOutcome) -> str:
    """Status line for a relay draw."""
    status = outcome.status
    if status is RelayStatus.INSUFFICIENT:
        return STATUS_RELAY_INSUFFICIENT
    if status is RelayStatus.INTERRUPTED:
        return STATUS_RELAY_INTERRUPTED
    if status is RelayStatus.ALREADY_COMPLETE:
        return STATUS_RELAY_COMPLETE
    if status is RelayStatus.STARTED:
        return STATUS_RELAY_STARTED.format(recipient=outcome.recipient.name)
    if status is RelayStatus.COMPLETED:
        return STATUS_RELAY_FINISHED.format(
            giver=outcome.giver.name, recipient=outcome.recipient.name
        )
    return STATUS_RELAY_EXTENDED.format(
        giver=outcome.giver.name,
        recipient=outcome.recipient.name,
        remaining=outcome.remaining,
    )


class RelayController(RouletteController):
    """Builds the gift relay chain one draw at a time."""

    mode = MODE_RELAY
    status_key = "giftStatusText"

    state: RelayState

    def __init__(self, *args, relay_policy: Optional[RelayPolicy] = None, **kwargs):
        """Initialize the controller.

        Args:
            relay_policy: How the chain is presented as handoffs
            *args, **kwargs: Passed to :class:`RouletteController`
        """
        super().__init__(*args, **kwargs)
        self.relay_policy = relay_policy if relay_policy is not None else RelayPolicy()
        self.last_outcome: Optional[RelayOutcome] = None

    def _empty_state(self) -> RelayState:
        return RelayState()

    def _state_from_dict(self, data: Dict[str, Any]) -> RelayState:
        return RelayState.from_dict(data)

    def _reset_session(self) -> None:
        self.last_outcome = None

    @property
    def chain_participants(self) -> List[Participant]:
        return self.state.chain_participants

    @property
    def remaining_participants(self) -> List[Participant]:
        return self.state.remaining_participants

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    @property
    def is_interrupted(self) -> bool:
        return bool(self.state.stale_ids)

    def handoffs(self) -> Handoffs:
        return relay_handoffs(self.state.participants, self.state.chain, self.relay_policy)

    def spin(self) -> RelayOutcome:
        """Draw the next relay participant.

        Returns:
            The outcome; the chain only changes when ``outcome.status.changed_chain``
        """
        outcome = advance_relay(
            self.state.participants, self.state.chain, self.rules, self.rng
        )
        return self._apply(outcome)

    def reroll_last(self) -> Optional[RelayOutcome]:
        """Undo the most recent draw and draw again.

        Returns:
            The new outcome, or None when there is nothing to reroll
        """
        if not self.state.chain:
            logger.warning("No relay draw to reroll")
            return None
        last = self.state.find_participant(self.state.chain[-1])
        if last is None:
            logger.warning("Latest relay entry is no longer on the roster")
            self.status_text = STATUS_RELAY_INTERRUPTED
            self._commit()
            return None

        self.status_text = STATUS_RELAY_REROLL.format(name=last.name)
        self.state = self.state.with_chain(undo_last_link(self.state.chain))
        logger.info(f"Rerolling relay entry {last}")
        return self.spin()

    def reset_relay(self) -> None:
        """Clear the chain but keep the roster and rules."""
        self.state = self.state.with_chain(())
        self.last_outcome = None
        self.status_text = STATUS_RELAY_CLEARED
        logger.info("Relay chain cleared")
        self._commit()

    def _apply(self, outcome: RelayOutcome) -> RelayOutcome:
        self.last_outcome = outcome
        self.status_text = describe_outcome(outcome)
        if outcome.status.changed_chain:
            self.state = self.state.with_chain(outcome.chain)
            logger.info(f"Relay {outcome.status.value}: {len(outcome.chain)} drawn")
        else:
            logger.warning(f"Relay draw did not change the chain: {outcome.status.value}")
        self._commit()
        return outcome
