"""Random Roster Generator (RRG) - Internal testing system for the roulettes.

Generates random rosters and rule configurations, plays complete pairing and
relay sessions through the controllers and checks every finished session with
the invariant checker.
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

import random
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from partyroulette.constants import MODE_PAIRING, MODE_RELAY
from partyroulette.controllers import PairingController, RelayController
from partyroulette.engine import RelayStatus, SelectionBranch, SystemRandomSource
from partyroulette.io import MemoryStateStore
from partyroulette.models import Participant, PreferenceRule, RuleConfiguration
from partyroulette.utils import setup_logger
from partyroulette.validation import create_invariant_checker

logger = setup_logger(__name__)

ATTRIBUTE_LABELS = [
    "Marketing",
    "Sales",
    "Design",
    "Engineering",
    "Finance",
    "Support",
    "Legal",
    "Operations",
]


@dataclass
class RRGConfig:
    """Configuration for Random Roster Generator.

    ``None`` for a rule field means it is drawn at random per session.
    """

    num_players: int
    num_attributes: int = 3
    seed: Optional[int] = None
    avoid_same_attribute: Optional[bool] = None
    max_rules: int = 2
    preferred_hit_rate: Optional[int] = None


class RandomRosterGenerator:
    """Plays random sessions and validates them."""

    def __init__(self, config: RRGConfig):
        if config.num_players < 0:
            raise ValueError("num_players must not be negative")
        if not 1 <= config.num_attributes <= len(ATTRIBUTE_LABELS):
            raise ValueError(
                f"num_attributes must be between 1 and {len(ATTRIBUTE_LABELS)}"
            )
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.checker = create_invariant_checker()

    @property
    def attributes(self) -> List[str]:
        return ATTRIBUTE_LABELS[: self.config.num_attributes]

    def create_roster(self) -> List[Participant]:
        """Create participants with randomly assigned attributes."""
        roster = [
            Participant(attribute=self.random.choice(self.attributes), name=f"Guest {i + 1}")
            for i in range(self.config.num_players)
        ]
        logger.debug(f"Created roster of {len(roster)} participant(s)")
        return roster

    def create_rules(self) -> RuleConfiguration:
        """Create a random rule configuration."""
        avoid = self.config.avoid_same_attribute
        if avoid is None:
            avoid = self.random.random() < 0.5
        hit_rate = self.config.preferred_hit_rate
        if hit_rate is None:
            hit_rate = self.random.choice([0, 25, 50, 75, 100])
        rules = tuple(
            PreferenceRule(
                source=self.random.choice(self.attributes),
                target=self.random.choice(self.attributes),
            )
            for _ in range(self.random.randint(0, self.config.max_rules))
        )
        return RuleConfiguration(
            avoid_same_attribute=avoid,
            preferred_combos=rules,
            preferred_hit_rate=hit_rate,
        )

    def _seed_controller(self, controller) -> None:
        for participant in self.create_roster():
            controller.add_participant(participant.attribute, participant.name)
        controller.rules = self.create_rules()

    def _engine_rng(self) -> SystemRandomSource:
        return SystemRandomSource(self.random.randrange(2**32))

    def play_pairing_session(self) -> Dict[str, Any]:
        """Draw groups until the pool is exhausted."""
        controller = PairingController(
            MemoryStateStore(MODE_PAIRING), rng=self._engine_rng(), autosave=False
        )
        self._seed_controller(controller)

        branches: Counter = Counter()
        while controller.can_spin:
            group = controller.spin()
            if group is None:
                break
            branches[self._pairing_branch(group, controller.rules).value] += 1

        report = self.checker.validate_pairing_session(controller.state, controller.rules)
        return {
            "mode": MODE_PAIRING,
            "players": len(controller.participants),
            "groups": len(controller.groups),
            "leftover": len(controller.available_participants),
            "branches": dict(branches),
            "report": report,
        }

    @staticmethod
    def _pairing_branch(group, rules: RuleConfiguration) -> SelectionBranch:
        # Controllers do not expose the branch; infer it for the statistics
        if group.is_trio:
            return SelectionBranch.TRIO
        first, second = group.members
        if any(
            rule.source_key == first.attribute_key
            and rule.target_key == second.attribute_key
            for rule in rules.preferred_combos
        ):
            return SelectionBranch.PREFERRED
        if first.attribute_key != second.attribute_key:
            return SelectionBranch.DIFFERENT_ATTRIBUTE
        return SelectionBranch.FALLBACK

    def play_relay_session(self) -> Dict[str, Any]:
        """Draw relay entries until the chain covers the roster."""
        controller = RelayController(
            MemoryStateStore(MODE_RELAY), rng=self._engine_rng(), autosave=False
        )
        self._seed_controller(controller)

        branches: Counter = Counter()
        outcome = controller.spin()
        while outcome.status in (RelayStatus.STARTED, RelayStatus.EXTENDED):
            if outcome.branch is not None:
                branches[outcome.branch.value] += 1
            outcome = controller.spin()
        if outcome.branch is not None:
            branches[outcome.branch.value] += 1

        report = self.checker.validate_relay_session(controller.state, controller.rules)
        return {
            "mode": MODE_RELAY,
            "players": len(controller.participants),
            "chain": len(controller.state.chain),
            "final_status": outcome.status.value,
            "branches": dict(branches),
            "report": report,
        }

    def run(self, sessions: int, mode: str = MODE_PAIRING) -> Dict[str, Any]:
        """Play ``sessions`` sessions and aggregate their reports."""
        if mode not in (MODE_PAIRING, MODE_RELAY):
            raise ValueError(f"Unsupported mode: {mode}")
        logger.info(
            "Simulating %s %s session(s) with %s players",
            sessions,
            mode,
            self.config.num_players,
        )
        play = (
            self.play_pairing_session if mode == MODE_PAIRING else self.play_relay_session
        )
        results = [play() for _ in range(sessions)]

        branches: Counter = Counter()
        failures = []
        for index, result in enumerate(results, start=1):
            branches.update(result["branches"])
            if not result["report"].is_compliant:
                failures.append(
                    {
                        "session": index,
                        "violations": [
                            v.description for v in result["report"].violations
                        ],
                    }
                )

        mean_compliance = (
            sum(r["report"].compliance_percentage for r in results) / len(results)
            if results
            else 100.0
        )
        return {
            "mode": mode,
            "sessions": sessions,
            "players": self.config.num_players,
            "attributes": self.config.num_attributes,
            "branches": dict(branches),
            "failures": failures,
            "compliance_percentage": mean_compliance,
            "results": results,
        }


def create_rrg_generator(config: RRGConfig) -> RandomRosterGenerator:
    """Create RRG generator with given configuration."""
    return RandomRosterGenerator(config)
