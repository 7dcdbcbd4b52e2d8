"""Rule configuration data classes."""

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
from typing import Any, Dict, Tuple

from partyroulette.constants import (
    DEFAULT_AVOID_SAME_ATTRIBUTE,
    DEFAULT_PREFERRED_HIT_RATE,
)
from partyroulette.utils import generate_id, normalize_attribute
from partyroulette.utils.validation import clamp_hit_rate


@dataclass(frozen=True, slots=True)
class PreferenceRule:
    """Attribute ``source`` prefers to be paired with (or give to) ``target``.

    Serialized as ``{"id", "from", "to"}``.
    """

    source: str
    target: str
    id: str = field(default_factory=generate_id)

    @property
    def source_key(self) -> str:
        return normalize_attribute(self.source)

    @property
    def target_key(self) -> str:
        return normalize_attribute(self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PreferenceRule":
        return cls(
            source=str(data["from"]),
            target=str(data["to"]),
            id=str(data.get("id") or generate_id()),
        )

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class RuleConfiguration:
    """Rules steering the pairing and relay engines.

    Attributes
    ----------
    avoid_same_attribute : bool
        Try a different-attribute match before falling back to any match.
    preferred_combos : tuple of PreferenceRule
        Preference rules, in declaration order.
    preferred_hit_rate : int
        Probability (0-100) that the preference step runs on a draw. Always
        clamped on construction.
    """

    avoid_same_attribute: bool = DEFAULT_AVOID_SAME_ATTRIBUTE
    preferred_combos: Tuple[PreferenceRule, ...] = ()
    preferred_hit_rate: int = DEFAULT_PREFERRED_HIT_RATE

    def __post_init__(self):
        object.__setattr__(self, "preferred_combos", tuple(self.preferred_combos))
        object.__setattr__(
            self, "preferred_hit_rate", clamp_hit_rate(self.preferred_hit_rate)
        )

    @property
    def has_preferences(self) -> bool:
        return len(self.preferred_combos) > 0

    def with_rule(self, rule: PreferenceRule) -> "RuleConfiguration":
        return replace(self, preferred_combos=self.preferred_combos + (rule,))

    def without_rule(self, rule_id: str) -> "RuleConfiguration":
        return replace(
            self,
            preferred_combos=tuple(
                rule for rule in self.preferred_combos if rule.id != rule_id
            ),
        )

    def with_hit_rate(self, value) -> "RuleConfiguration":
        return replace(self, preferred_hit_rate=clamp_hit_rate(value))

    def toggled_avoid_same(self) -> "RuleConfiguration":
        return replace(self, avoid_same_attribute=not self.avoid_same_attribute)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "avoidSameAttribute": self.avoid_same_attribute,
            "preferredCombos": [rule.to_dict() for rule in self.preferred_combos],
            "preferredHitRate": self.preferred_hit_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleConfiguration":
        """Deserialize configuration from dictionary, defaulting missing keys."""
        avoid = data.get("avoidSameAttribute")
        hit_rate = data.get("preferredHitRate")
        return cls(
            avoid_same_attribute=(
                DEFAULT_AVOID_SAME_ATTRIBUTE if avoid is None else bool(avoid)
            ),
            preferred_combos=tuple(
                PreferenceRule.from_dict(entry)
                for entry in data.get("preferredCombos") or []
            ),
            preferred_hit_rate=(
                DEFAULT_PREFERRED_HIT_RATE if hit_rate is None else hit_rate
            ),
        )
