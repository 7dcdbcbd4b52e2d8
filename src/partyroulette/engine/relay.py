"""Gift relay engine.

The relay builds a chain one participant at a time. The first draw picks the
first recipient; every later draw picks a giver for the current chain tail,
and that giver becomes the next recipient.

Giver selection mirrors the pairing engine with the recipient fixed:

1. preferred giver, gated by ``preferred_hit_rate``; candidates are the union
   over *every* rule whose target matches the recipient (the pairing engine
   stops at the first rule instead),
2. different-attribute giver, when ``avoid_same_attribute`` is set,
3. any remaining participant.
"""

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

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from partyroulette.constants import MIN_PARTICIPANTS
from partyroulette.engine.pairing import SelectionBranch, preference_gate_open
from partyroulette.engine.random_source import RandomSource
from partyroulette.models import Participant, RuleConfiguration
from partyroulette.type_hints import ChainIds, Handoffs
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


class RelayStatus(Enum):
    """Outcome kind of one relay draw."""

    STARTED = "started"  # first recipient chosen
    EXTENDED = "extended"  # giver appended, more to draw
    COMPLETED = "completed"  # giver appended, everyone is in the chain
    ALREADY_COMPLETE = "already_complete"  # nothing left to draw
    INSUFFICIENT = "insufficient"  # fewer than two participants
    INTERRUPTED = "interrupted"  # chain references a removed participant

    @property
    def changed_chain(self) -> bool:
        return self in (
            RelayStatus.STARTED,
            RelayStatus.EXTENDED,
            RelayStatus.COMPLETED,
        )


class ChainClosure(Enum):
    OPEN_PATH = "open"
    CLOSED_LOOP = "closed"


class HandoffDirection(Enum):
    """How consecutive chain entries are read as (giver, recipient)."""

    NEWEST_GIVES_TO_PREVIOUS = "newest_to_previous"
    APPEND_ORDER = "append_order"


@dataclass(frozen=True)
class RelayPolicy:
    """Presentation policy for turning a chain into handoffs."""

    closure: ChainClosure = ChainClosure.OPEN_PATH
    direction: HandoffDirection = HandoffDirection.NEWEST_GIVES_TO_PREVIOUS


@dataclass(frozen=True)
class RelayOutcome:
    """Result of :func:`advance_relay`.

    Attributes
    ----------
    chain : tuple of str
        The new chain (identical to the input unless ``status.changed_chain``).
    status : RelayStatus
        What happened.
    recipient : Participant or None
        The participant receiving from ``giver``; for ``STARTED`` the first
        recipient.
    giver : Participant or None
        The participant drawn as giver, if any.
    branch : SelectionBranch or None
        Which selection step picked the giver.
    remaining : int
        Participants still to be drawn after this outcome.
    """

    chain: ChainIds
    status: RelayStatus
    recipient: Optional[Participant] = None
    giver: Optional[Participant] = None
    branch: Optional[SelectionBranch] = None
    remaining: int = 0


def _pick_preferred_giver(
    recipient: Participant,
    pool: Sequence[Participant],
    config: RuleConfiguration,
    rng: RandomSource,
) -> Optional[Participant]:
    matching = [
        rule
        for rule in config.preferred_combos
        if rule.target_key == recipient.attribute_key
    ]
    if not matching:
        return None
    source_keys = {rule.source_key for rule in matching}
    candidates = [member for member in pool if member.attribute_key in source_keys]
    if not candidates:
        return None
    return rng.choice(candidates)


def _pick_different_attribute_giver(
    recipient: Participant, pool: Sequence[Participant], rng: RandomSource
) -> Optional[Participant]:
    candidates = [
        member for member in pool if member.attribute_key != recipient.attribute_key
    ]
    if not candidates:
        return None
    return rng.choice(candidates)


def select_giver(
    recipient: Participant,
    pool: Sequence[Participant],
    config: RuleConfiguration,
    rng: RandomSource,
) -> Tuple[Participant, SelectionBranch]:
    """Choose a giver for ``recipient`` from a non-empty ``pool``."""
    if preference_gate_open(config, rng):
        preferred = _pick_preferred_giver(recipient, pool, config, rng)
        if preferred is not None:
            return preferred, SelectionBranch.PREFERRED

    if config.avoid_same_attribute:
        different = _pick_different_attribute_giver(recipient, pool, rng)
        if different is not None:
            return different, SelectionBranch.DIFFERENT_ATTRIBUTE

    return rng.choice(pool), SelectionBranch.FALLBACK


def advance_relay(
    roster: Sequence[Participant],
    chain: Sequence[str],
    config: RuleConfiguration,
    rng: RandomSource,
) -> RelayOutcome:
    """Extend the relay chain by one participant, or start it.

    Parameters
    ----------
    roster : sequence of Participant
        Every participant of the session.
    chain : sequence of str
        Current chain, most recent last.
    config : RuleConfiguration
        Active rules.
    rng : RandomSource
        Source of every random decision.

    Returns
    -------
    RelayOutcome
        Never raises for well-shaped input; impossible or finished draws are
        reported through ``status`` with the chain unchanged.
    """
    chain = tuple(chain)
    by_id = {member.id: member for member in roster}

    if len(roster) < MIN_PARTICIPANTS:
        return RelayOutcome(chain, RelayStatus.INSUFFICIENT)

    if any(pid not in by_id for pid in chain):
        logger.warning("Relay chain references a removed participant; draw aborted")
        return RelayOutcome(chain, RelayStatus.INTERRUPTED)

    drawn = set(chain)
    pool = [member for member in roster if member.id not in drawn]

    if chain and not pool:
        recipient = by_id[chain[-2]] if len(chain) > 1 else None
        giver = by_id[chain[-1]] if len(chain) > 1 else None
        return RelayOutcome(
            chain, RelayStatus.ALREADY_COMPLETE, recipient=recipient, giver=giver
        )

    if not chain:
        starter = rng.choice(list(roster))
        logger.debug(f"Relay started with {starter.name}")
        return RelayOutcome(
            (starter.id,),
            RelayStatus.STARTED,
            recipient=starter,
            remaining=len(roster) - 1,
        )

    recipient = by_id[chain[-1]]
    giver, branch = select_giver(recipient, pool, config, rng)
    remaining = len(pool) - 1
    status = RelayStatus.COMPLETED if remaining == 0 else RelayStatus.EXTENDED
    logger.debug(f"{giver.name} gives to {recipient.name} ({branch.value})")
    return RelayOutcome(
        chain + (giver.id,),
        status,
        recipient=recipient,
        giver=giver,
        branch=branch,
        remaining=remaining,
    )


def undo_last_link(chain: Sequence[str]) -> ChainIds:
    """Drop the most recent chain entry."""
    return tuple(chain)[:-1]


def reroll_last_link(
    roster: Sequence[Participant],
    chain: Sequence[str],
    config: RuleConfiguration,
    rng: RandomSource,
) -> RelayOutcome:
    """Undo the most recent draw and draw again.

    An empty chain is simply advanced.
    """
    return advance_relay(roster, undo_last_link(chain), config, rng)


def relay_handoffs(
    roster: Sequence[Participant],
    chain: Sequence[str],
    policy: RelayPolicy = RelayPolicy(),
) -> Handoffs:
    """Translate a chain into ``(giver, recipient)`` handoffs.

    With ``NEWEST_GIVES_TO_PREVIOUS`` each entry gives to the one drawn just
    before it; ``APPEND_ORDER`` reads the chain the other way round. A
    ``CLOSED_LOOP`` adds, once the chain covers the whole roster, the handoff
    that lets every participant give and receive exactly once.
    """
    by_id = {member.id: member for member in roster}
    mapped: List[Participant] = [by_id[pid] for pid in chain if pid in by_id]
    if len(mapped) < 2:
        return []

    if policy.direction is HandoffDirection.NEWEST_GIVES_TO_PREVIOUS:
        handoffs = [(mapped[i], mapped[i - 1]) for i in range(1, len(mapped))]
        closing = (mapped[0], mapped[-1])
    else:
        handoffs = [(mapped[i - 1], mapped[i]) for i in range(1, len(mapped))]
        closing = (mapped[-1], mapped[0])

    complete = {member.id for member in mapped} >= set(by_id)
    if policy.closure is ChainClosure.CLOSED_LOOP and complete:
        handoffs.append(closing)
    return handoffs
