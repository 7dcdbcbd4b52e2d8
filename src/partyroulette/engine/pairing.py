"""Pairing roulette engine.

Each draw produces one group from the available pool:

* a pool of exactly three always becomes a trio, so nobody is left alone;
* otherwise an ordered fallback chain is tried, first success wins:

  1. preferred pair, gated by ``preferred_hit_rate`` (first rule that can be
     satisfied wins),
  2. different-attribute pair, when ``avoid_same_attribute`` is set,
  3. any two participants.
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

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from partyroulette.constants import MIN_PARTICIPANTS, PAIR_SIZE, TRIO_SIZE
from partyroulette.engine.random_source import RandomSource
from partyroulette.models import (
    Group,
    PairingState,
    Participant,
    PreferenceRule,
    RuleConfiguration,
)
from partyroulette.type_hints import Pool
from partyroulette.utils import normalize_attribute, setup_logger

logger = setup_logger(__name__)


class SelectionBranch(Enum):
    """Which step of the selection produced a group."""

    TRIO = "trio"
    PREFERRED = "preferred"
    DIFFERENT_ATTRIBUTE = "different_attribute"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Selection:
    """Members chosen by one draw and the branch that chose them."""

    members: Tuple[Participant, ...]
    branch: SelectionBranch

    @property
    def is_trio(self) -> bool:
        return self.branch is SelectionBranch.TRIO


def preference_gate_open(config: RuleConfiguration, rng: RandomSource) -> bool:
    """Roll the preference hit rate.

    No draw is consumed when there are no preference rules.
    """
    if not config.has_preferences:
        return False
    return rng.percent() < config.preferred_hit_rate


def _members_with_attribute(
    pool: Sequence[Participant], attribute: str
) -> List[Participant]:
    key = normalize_attribute(attribute)
    return [member for member in pool if member.attribute_key == key]


def _pick_preferred_pair(
    pool: Sequence[Participant],
    rules: Sequence[PreferenceRule],
    rng: RandomSource,
) -> Optional[List[Participant]]:
    """Try preference rules in declaration order; the first viable one wins."""
    for rule in rules:
        sources = _members_with_attribute(pool, rule.source)
        targets = _members_with_attribute(pool, rule.target)
        if not sources or not targets:
            continue
        first = rng.choice(sources)
        # A rule like A -> A must not pair someone with themselves
        candidates = [member for member in targets if member.id != first.id]
        if not candidates:
            continue
        second = rng.choice(candidates)
        logger.debug(f"Preferred pair from rule {rule}: {first.name}, {second.name}")
        return [first, second]
    return None


def _pick_different_attribute_pair(
    pool: Sequence[Participant], rng: RandomSource
) -> Optional[List[Participant]]:
    """Return the first differing pair in a shuffled pool.

    Biased toward diversity rather than uniform over all diverse pairs.
    """
    shuffled = rng.shuffle(pool)
    for i in range(len(shuffled)):
        for j in range(i + 1, len(shuffled)):
            if shuffled[i].attribute_key != shuffled[j].attribute_key:
                return [shuffled[i], shuffled[j]]
    return None


def _pick_any_pair(
    pool: Sequence[Participant], rng: RandomSource
) -> List[Participant]:
    return rng.shuffle(pool)[:PAIR_SIZE]


def select_members(
    pool: Pool,
    config: RuleConfiguration,
    rng: RandomSource,
) -> Optional[Selection]:
    """Choose the members of the next group.

    Parameters
    ----------
    pool : sequence of Participant
        Participants still available, in pool order.
    config : RuleConfiguration
        Active rules.
    rng : RandomSource
        Source of every random decision.

    Returns
    -------
    Selection or None
        ``None`` when fewer than two participants are available.
    """
    if len(pool) < MIN_PARTICIPANTS:
        return None

    if len(pool) == TRIO_SIZE:
        return Selection(tuple(rng.shuffle(pool)), SelectionBranch.TRIO)

    if preference_gate_open(config, rng):
        preferred = _pick_preferred_pair(pool, config.preferred_combos, rng)
        if preferred:
            return Selection(tuple(preferred), SelectionBranch.PREFERRED)

    if config.avoid_same_attribute:
        different = _pick_different_attribute_pair(pool, rng)
        if different:
            return Selection(tuple(different), SelectionBranch.DIFFERENT_ATTRIBUTE)

    return Selection(tuple(_pick_any_pair(pool, rng)), SelectionBranch.FALLBACK)


def select_next_group(
    pool: Pool,
    config: RuleConfiguration,
    rng: RandomSource,
) -> Optional[Group]:
    """Build the next group from ``pool`` or return ``None`` if impossible."""
    selection = select_members(pool, config, rng)
    if selection is None:
        return None
    return Group.create(selection.members, is_trio=selection.is_trio)


def draw_next_group(
    state: PairingState,
    config: RuleConfiguration,
    rng: RandomSource,
) -> Tuple[PairingState, Optional[Group]]:
    """Draw a group and apply it to the session.

    The selected members leave the pool and the group is appended.

    Returns:
        Tuple of (new state, group); the state is unchanged when the group is None
    """
    group = select_next_group(state.available_participants, config, rng)
    if group is None:
        logger.debug(
            f"Cannot draw: only {len(state.available_participants)} participant(s) available"
        )
        return state, None

    taken = set(group.member_ids)
    new_state = replace(
        state,
        groups=state.groups + (group,),
        available_ids=tuple(pid for pid in state.available_ids if pid not in taken),
    )
    return new_state, group


def release_group(state: PairingState, group_id: str) -> PairingState:
    """Dissolve a group and put its members back at the front of the pool.

    Members that were removed from the roster meanwhile are not restored.
    An unknown ``group_id`` leaves the state unchanged.
    """
    target = state.find_group(group_id)
    if target is None:
        logger.warning(f"Cannot release unknown group {group_id}")
        return state

    restored = [p.id for p in state.resolve(target.member_ids)]
    released = replace(
        state, groups=tuple(group for group in state.groups if group.id != group_id)
    )
    return released.with_ids_prepended(restored)


def reroll_last_group(
    state: PairingState,
    config: RuleConfiguration,
    rng: RandomSource,
) -> Tuple[PairingState, Optional[Group]]:
    """Release the most recent group and draw again.

    Returns the state unchanged with no group when there is nothing to reroll.
    """
    latest = state.latest_group
    if latest is None or not state.resolve(latest.member_ids):
        return state, None
    return draw_next_group(release_group(state, latest.id), config, rng)
