"""A party participant."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict

from partyroulette.utils import generate_id, normalize_attribute


@dataclass(frozen=True, slots=True)
class Participant:
    """
    A person taking part in a roulette session.

    Participants are immutable values; an edit produces a new instance with
    the same ``id``. The engines only ever compare participants by ``id`` and
    by their normalized attribute.

    Attributes
    ----------
    attribute : str
        Free-text category (team, department, table...). Compared trimmed
        and case-insensitively.
    name : str
        Display name.
    id : str
        Opaque unique identifier.

    Examples
    --------
    Creating a participant::

        alice = Participant(attribute="Sales", name="Alice")

    Renaming keeps the identity::

        renamed = alice.with_field("name", "Alicia")
        assert renamed.id == alice.id
    """

    attribute: str
    name: str
    id: str = field(default_factory=generate_id)

    @property
    def attribute_key(self) -> str:
        """Normalized attribute used for all comparisons."""
        return normalize_attribute(self.attribute)

    def with_field(self, field_name: str, value: str) -> "Participant":
        """Return a copy with ``attribute`` or ``name`` replaced."""
        return replace(self, **{field_name: value})

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "attribute": self.attribute, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        return cls(
            attribute=str(data["attribute"]),
            name=str(data["name"]),
            id=str(data.get("id") or generate_id()),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.attribute})"
