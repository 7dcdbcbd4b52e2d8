"""Group data class."""

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

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

from partyroulette.models.participant import Participant
from partyroulette.utils import generate_id


@dataclass(frozen=True, slots=True)
class Group:
    """A finalized pair or trio drawn by the pairing engine.

    Members are stored as participant snapshots, in draw order.

    Attributes
    ----------
    members : tuple of Participant
        Two members, or three when ``is_trio`` is set.
    is_trio : bool
        Whether the group was formed from a remainder of three.
    id : str
        Opaque group identifier.
    created_at : int
        Creation time in milliseconds since the epoch.
    """

    members: Tuple[Participant, ...]
    is_trio: bool = False
    id: str = field(default_factory=generate_id)
    created_at: int = field(default_factory=lambda: int(time.time() * 1000))

    @classmethod
    def create(cls, members: Sequence[Participant], is_trio: bool = False) -> "Group":
        return cls(members=tuple(members), is_trio=is_trio)

    @property
    def member_ids(self) -> Tuple[str, ...]:
        return tuple(member.id for member in self.members)

    def contains(self, participant_id: str) -> bool:
        return participant_id in self.member_ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize group to dictionary."""
        return {
            "id": self.id,
            "members": [member.to_dict() for member in self.members],
            "createdAt": self.created_at,
            "isTrio": self.is_trio,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Deserialize group from dictionary."""
        members = tuple(Participant.from_dict(entry) for entry in data["members"])
        return cls(
            members=members,
            is_trio=bool(data.get("isTrio", len(members) == 3)),
            id=str(data.get("id") or generate_id()),
            created_at=int(data.get("createdAt") or 0),
        )

    def __str__(self) -> str:
        return " & ".join(member.name for member in self.members)
