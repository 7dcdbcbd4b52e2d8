"""Session invariant checker.

Replays a finished pairing or relay session and checks that the draws obey
the grouping and chain rules. Used by the simulator and the test suite.
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

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from partyroulette.constants import PAIR_SIZE, TRIO_SIZE
from partyroulette.models import Participant, PairingState, RelayState, RuleConfiguration
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a single invariant check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


@dataclass
class CriterionResult:
    """Result of checking one invariant."""

    criterion: str
    status: CriterionStatus
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status is CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete invariant report for one session."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    @property
    def is_compliant(self) -> bool:
        return not self.violations


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(criterion, CriterionStatus.COMPLIANT, description)


def _violation(criterion: str, description: str, **details) -> CriterionResult:
    return CriterionResult(
        criterion, CriterionStatus.VIOLATION, description, details=dict(details)
    )


def _preferred_match(
    config: RuleConfiguration, first: Participant, second: Participant
) -> bool:
    return any(
        rule.source_key == first.attribute_key
        and rule.target_key == second.attribute_key
        for rule in config.preferred_combos
    )


def _has_diverse_pair(pool: Sequence[Participant]) -> bool:
    return len({member.attribute_key for member in pool}) > 1


class InvariantChecker:
    """Checks finished sessions against the grouping and chain rules.

    Pairing sessions are replayed under the assumption that groups were drawn
    in list order with no releases, which is how the simulator plays them.
    """

    def _report(self, results: List[CriterionResult], label: str) -> ValidationReport:
        applicable = [r for r in results if r.status is not CriterionStatus.NOT_APPLICABLE]
        violations = [r for r in applicable if r.is_violation]
        compliant = len(applicable) - len(violations)
        if violations:
            overall = CriterionStatus.VIOLATION
            summary = f"{label}: {len(violations)} violation(s)"
            logger.warning(summary)
        else:
            overall = CriterionStatus.COMPLIANT
            summary = f"{label}: all {len(applicable)} checks passed"
        return ValidationReport(
            total_criteria=len(applicable),
            compliant_count=compliant,
            violations=violations,
            overall_status=overall,
            summary=summary,
            criteria_results=results,
        )

    # ---- pairing ----------------------------------------------------------

    def check_partition(self, state: PairingState) -> CriterionResult:
        """Every participant is in exactly one group or in the pool."""
        placed = list(state.grouped_ids) + list(state.available_ids)
        duplicates = sorted({pid for pid in placed if placed.count(pid) > 1})
        if duplicates:
            return _violation(
                "partition", "Participant placed more than once", ids=duplicates
            )
        missing = set(state.participant_ids) - set(placed)
        if missing:
            return _violation(
                "partition", "Participant neither grouped nor available", ids=sorted(missing)
            )
        return _compliant("partition", "Groups and pool partition the roster")

    def check_group_sizes(self, state: PairingState) -> CriterionResult:
        """Groups are pairs, or a trio drawn from a pool of exactly three."""
        pool_size = len(state.participants)
        for group in state.groups:
            size = len(group.members)
            if group.is_trio:
                if size != TRIO_SIZE or pool_size != TRIO_SIZE:
                    return _violation(
                        "group_size",
                        f"Trio {group} drawn from a pool of {pool_size}",
                        group_id=group.id,
                    )
            elif size != PAIR_SIZE:
                return _violation(
                    "group_size", f"Group {group} has {size} members", group_id=group.id
                )
            elif pool_size == TRIO_SIZE:
                return _violation(
                    "group_size",
                    f"Pair {group} drawn from a pool of three",
                    group_id=group.id,
                )
            pool_size -= size
        return _compliant("group_size", "All group sizes valid")

    def check_attribute_avoidance(
        self, state: PairingState, config: RuleConfiguration
    ) -> CriterionResult:
        """Same-attribute pairs only when no diverse pair was possible."""
        if not config.avoid_same_attribute:
            return CriterionResult(
                "attribute_avoidance",
                CriterionStatus.NOT_APPLICABLE,
                "Same-attribute avoidance disabled",
            )
        pool = list(state.participants)
        for group in state.groups:
            members = group.members
            if not group.is_trio and members[0].attribute_key == members[1].attribute_key:
                if _has_diverse_pair(pool) and not _preferred_match(
                    config, members[0], members[1]
                ):
                    return _violation(
                        "attribute_avoidance",
                        f"Same-attribute pair {group} while a diverse pair existed",
                        group_id=group.id,
                    )
            taken = set(group.member_ids)
            pool = [member for member in pool if member.id not in taken]
        return _compliant("attribute_avoidance", "Attribute avoidance respected")

    def validate_pairing_session(
        self, state: PairingState, config: Optional[RuleConfiguration] = None
    ) -> ValidationReport:
        """Validate a pairing session played without releases."""
        config = config or RuleConfiguration()
        results = [
            self.check_partition(state),
            self.check_group_sizes(state),
            self.check_attribute_avoidance(state, config),
        ]
        return self._report(results, "Pairing session")

    # ---- relay ------------------------------------------------------------

    def check_chain_entries(self, state: RelayState) -> CriterionResult:
        """Chain entries are unique and on the roster."""
        chain = list(state.chain)
        if len(set(chain)) != len(chain):
            return _violation("chain_unique", "Participant drawn twice in the chain")
        if state.stale_ids:
            return _violation(
                "chain_unique",
                "Chain references removed participants",
                ids=list(state.stale_ids),
            )
        return _compliant("chain_unique", "Chain entries unique")

    def check_chain_permutation(self, state: RelayState) -> CriterionResult:
        """A complete chain is a permutation of the roster."""
        if state.remaining_participants:
            return CriterionResult(
                "chain_permutation",
                CriterionStatus.NOT_APPLICABLE,
                "Chain not complete",
            )
        if sorted(state.chain) != sorted(state.participant_ids):
            return _violation("chain_permutation", "Complete chain is not a permutation")
        return _compliant("chain_permutation", "Chain covers the roster exactly once")

    def check_giver_attributes(
        self, state: RelayState, config: RuleConfiguration
    ) -> CriterionResult:
        """Givers share the recipient's attribute only when nobody else was left."""
        if not config.avoid_same_attribute:
            return CriterionResult(
                "giver_attribute",
                CriterionStatus.NOT_APPLICABLE,
                "Same-attribute avoidance disabled",
            )
        chain = state.chain_participants
        for index in range(1, len(chain)):
            recipient, giver = chain[index - 1], chain[index]
            if giver.attribute_key != recipient.attribute_key:
                continue
            drawn = {member.id for member in chain[:index]}
            pool = [p for p in state.participants if p.id not in drawn]
            diverse = any(p.attribute_key != recipient.attribute_key for p in pool)
            if diverse and not _preferred_match(config, giver, recipient):
                return _violation(
                    "giver_attribute",
                    f"{giver.name} gives to {recipient.name} with the same attribute",
                    index=index,
                )
        return _compliant("giver_attribute", "Giver attributes respected")

    def validate_relay_session(
        self, state: RelayState, config: Optional[RuleConfiguration] = None
    ) -> ValidationReport:
        """Validate a relay session."""
        config = config or RuleConfiguration()
        results = [
            self.check_chain_entries(state),
            self.check_chain_permutation(state),
            self.check_giver_attributes(state, config),
        ]
        return self._report(results, "Relay session")


def create_invariant_checker() -> InvariantChecker:
    """Create invariant checker instance."""
    return InvariantChecker()
