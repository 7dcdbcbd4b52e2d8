"""Session state snapshots for the pairing and relay roulettes.

Both states are immutable. Every operation returns a new snapshot, so the
controller owning a session can swap it atomically after an engine call.
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
from typing import Any, Dict, Iterable, List, Optional, Tuple

from partyroulette.models.group import Group
from partyroulette.models.participant import Participant
from partyroulette.type_hints import AvailableIds, ChainIds


class RemovalPolicy(Enum):
    """How removing a participant affects results that are already final."""

    LIVE = "live"  # finalized groups and chains follow the roster
    SNAPSHOT = "snapshot"  # finalized groups and chains are kept as drawn


def _unique(ids: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    ordered = []
    for entry in ids:
        if entry not in seen:
            seen.add(entry)
            ordered.append(entry)
    return tuple(ordered)


def _participants_from(data: Any) -> Tuple[Participant, ...]:
    if not isinstance(data, list):
        return ()
    return tuple(Participant.from_dict(entry) for entry in data)


def _ids_from(data: Any) -> Tuple[str, ...]:
    if not isinstance(data, list):
        return ()
    return _unique(str(entry) for entry in data)


@dataclass(frozen=True)
class RosterState:
    """Shared roster behaviour of both session states."""

    participants: Tuple[Participant, ...] = ()

    @property
    def participant_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.participants)

    def find_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def resolve(self, ids: Iterable[str]) -> List[Participant]:
        """Map ids to participants, skipping ids no longer on the roster."""
        by_id = {p.id: p for p in self.participants}
        return [by_id[entry] for entry in ids if entry in by_id]

    def _with_participants(self, participants: Iterable[Participant]):
        return replace(self, participants=tuple(participants))

    def with_participant_updated(self, updated: Participant):
        return self._with_participants(
            updated if p.id == updated.id else p for p in self.participants
        )


@dataclass(frozen=True)
class PairingState(RosterState):
    """
    State of a pairing session.

    Attributes
    ----------
    participants : tuple of Participant
        The roster, in insertion order.
    groups : tuple of Group
        Finalized groups, oldest first.
    available_ids : tuple of str
        Ids not yet placed into a group, in draw order.
    """

    groups: Tuple[Group, ...] = ()
    available_ids: AvailableIds = ()

    @property
    def available_participants(self) -> List[Participant]:
        return self.resolve(self.available_ids)

    @property
    def grouped_ids(self) -> Tuple[str, ...]:
        return tuple(pid for group in self.groups for pid in group.member_ids)

    @property
    def latest_group(self) -> Optional[Group]:
        return self.groups[-1] if self.groups else None

    def find_group(self, group_id: str) -> Optional[Group]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def with_participants_added(self, entries: Iterable[Participant]) -> "PairingState":
        """Append participants to the roster and to the end of the pool."""
        entries = list(entries)
        return replace(
            self,
            participants=self.participants + tuple(entries),
            available_ids=_unique(self.available_ids + tuple(p.id for p in entries)),
        )

    def with_ids_prepended(self, ids: Iterable[str]) -> "PairingState":
        """Put ids at the front of the pool, skipping ids already pooled."""
        fresh = tuple(pid for pid in _unique(ids) if pid not in self.available_ids)
        return replace(self, available_ids=fresh + self.available_ids)

    def without_participant(
        self, participant_id: str, policy: RemovalPolicy = RemovalPolicy.LIVE
    ) -> "PairingState":
        """Remove a participant from the roster and the pool.

        Under ``LIVE`` any finalized group containing the participant is
        dissolved and its remaining members go back to the front of the pool.
        """
        state = replace(
            self,
            participants=tuple(
                p for p in self.participants if p.id != participant_id
            ),
            available_ids=tuple(
                pid for pid in self.available_ids if pid != participant_id
            ),
        )
        if policy is RemovalPolicy.SNAPSHOT:
            return state

        kept, survivors = [], []
        for group in state.groups:
            if group.contains(participant_id):
                survivors.extend(
                    pid for pid in group.member_ids if pid != participant_id
                )
            else:
                kept.append(group)
        return replace(state, groups=tuple(kept)).with_ids_prepended(survivors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participants": [p.to_dict() for p in self.participants],
            "pairs": [group.to_dict() for group in self.groups],
            "availableIds": list(self.available_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingState":
        participants = _participants_from(data.get("participants"))
        groups_data = data.get("pairs")
        groups = (
            tuple(Group.from_dict(entry) for entry in groups_data)
            if isinstance(groups_data, list)
            else ()
        )
        known = {p.id for p in participants}
        grouped = {pid for group in groups for pid in group.member_ids}
        pooled = tuple(
            pid
            for pid in _ids_from(data.get("availableIds"))
            if pid in known and pid not in grouped
        )
        # Roster entries found neither in a group nor in the pool are drawable again
        missing = tuple(
            p.id for p in participants if p.id not in grouped and p.id not in pooled
        )
        return cls(
            participants=participants,
            groups=groups,
            available_ids=_unique(pooled + missing),
        )


@dataclass(frozen=True)
class RelayState(RosterState):
    """
    State of a gift relay session.

    Attributes
    ----------
    participants : tuple of Participant
        The roster, in insertion order.
    chain : tuple of str
        Participant ids in the order they were drawn, most recent last.
    """

    chain: ChainIds = ()

    @property
    def chain_participants(self) -> List[Participant]:
        return self.resolve(self.chain)

    @property
    def remaining_participants(self) -> List[Participant]:
        drawn = set(self.chain)
        return [p for p in self.participants if p.id not in drawn]

    @property
    def is_complete(self) -> bool:
        return bool(self.chain) and not self.remaining_participants

    @property
    def stale_ids(self) -> Tuple[str, ...]:
        """Chain entries that no longer exist on the roster."""
        known = set(self.participant_ids)
        return tuple(pid for pid in self.chain if pid not in known)

    def with_participants_added(self, entries: Iterable[Participant]) -> "RelayState":
        return replace(self, participants=self.participants + tuple(entries))

    def with_chain(self, chain: Iterable[str]) -> "RelayState":
        return replace(self, chain=tuple(chain))

    def without_participant(
        self, participant_id: str, policy: RemovalPolicy = RemovalPolicy.LIVE
    ) -> "RelayState":
        state = replace(
            self,
            participants=tuple(
                p for p in self.participants if p.id != participant_id
            ),
        )
        if policy is RemovalPolicy.SNAPSHOT:
            return state
        return state.with_chain(pid for pid in state.chain if pid != participant_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participants": [p.to_dict() for p in self.participants],
            "giftChainIds": list(self.chain),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelayState":
        return cls(
            participants=_participants_from(data.get("participants")),
            chain=_ids_from(data.get("giftChainIds")),
        )
