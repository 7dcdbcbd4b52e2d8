"""Shared session controller for both roulette modes.

This module handles the setup-side commands every mode shares: roster edits,
CSV import, rule changes, view switching, reset and persistence.
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

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from partyroulette.constants import (
    CSV_ERROR_NO_ROWS,
    CSV_ERROR_UNREADABLE,
    MIN_PARTICIPANTS,
    STATUS_READY,
    STATUS_RESET,
    VIEW_ROULETTE,
    VIEW_SETUP,
    VIEWS,
)
from partyroulette.engine.random_source import RandomSource, SystemRandomSource
from partyroulette.exceptions import (
    FileLoadException,
    ParticipantNotFoundException,
    RuleNotFoundException,
)
from partyroulette.io import StateStore, load_roster_file, parse_roster_csv
from partyroulette.models import (
    Participant,
    PreferenceRule,
    RemovalPolicy,
    RosterState,
    RuleConfiguration,
)
from partyroulette.type_hints import ParticipantField, ViewMode
from partyroulette.utils import setup_logger
from partyroulette.utils.validation import (
    validate_participant_edit,
    validate_participant_fields,
    validate_preference_fields,
)

logger = setup_logger(__name__)


class RouletteController:
    """Owns the mutable session of one roulette mode.

    The controller is the only place session state changes. Engine functions
    receive immutable snapshots and the controller swaps in what they return.
    After every command the session is saved when ``autosave`` is on.

    Subclasses provide the mode specific state type and draw commands.
    """

    mode: str = ""
    status_key: str = "statusText"

    def __init__(
        self,
        store: StateStore,
        rng: Optional[RandomSource] = None,
        removal_policy: RemovalPolicy = RemovalPolicy.LIVE,
        autosave: bool = True,
    ):
        """Initialize the controller.

        Args:
            store: Where the session is persisted
            rng: Random source for every draw; a fresh system source by default
            removal_policy: Whether finalized results follow roster removals
            autosave: Save after every command
        """
        self.store = store
        self.rng = rng if rng is not None else SystemRandomSource()
        self.removal_policy = removal_policy
        self.autosave = autosave

        self.state = self._empty_state()
        self.rules = RuleConfiguration()
        self.view: ViewMode = VIEW_SETUP
        self.status_text = STATUS_READY
        self.csv_error: Optional[str] = None

    # ---- hooks ------------------------------------------------------------

    def _empty_state(self) -> RosterState:
        raise NotImplementedError

    def _state_from_dict(self, data: Dict[str, Any]) -> RosterState:
        raise NotImplementedError

    def _reset_session(self) -> None:
        """Clear mode specific, non-persisted bookkeeping."""

    # ---- roster -----------------------------------------------------------

    @property
    def participants(self) -> List[Participant]:
        return list(self.state.participants)

    @property
    def participant_count(self) -> int:
        return len(self.state.participants)

    def get_participant(self, participant_id: str) -> Participant:
        participant = self.state.find_participant(participant_id)
        if participant is None:
            raise ParticipantNotFoundException(
                f"No participant with id {participant_id}"
            )
        return participant

    def add_participant(self, attribute: str, name: str) -> Participant:
        """Add a participant to the roster.

        Raises:
            InvalidParticipantDataException: If attribute or name is blank
        """
        validate_participant_fields(attribute, name)
        participant = Participant(attribute=attribute.strip(), name=name.strip())
        self.state = self.state.with_participants_added([participant])
        logger.info(f"Added participant {participant}")
        self._commit()
        return participant

    def update_participant(
        self, participant_id: str, field_name: ParticipantField, value: str
    ) -> Participant:
        """Edit the attribute or name of a participant.

        Raises:
            ParticipantNotFoundException: If the id is unknown
            InvalidParticipantDataException: If the field is not editable or the value is blank
        """
        value = validate_participant_edit(field_name, value)
        updated = self.get_participant(participant_id).with_field(field_name, value)
        self.state = self.state.with_participant_updated(updated)
        self._commit()
        return updated

    def remove_participant(self, participant_id: str) -> Participant:
        """Remove a participant, cascading according to the removal policy.

        Raises:
            ParticipantNotFoundException: If the id is unknown
        """
        participant = self.get_participant(participant_id)
        self.state = self.state.without_participant(
            participant_id, self.removal_policy
        )
        logger.info(
            f"Removed participant {participant} ({self.removal_policy.value} policy)"
        )
        self._commit()
        return participant

    def import_csv_text(self, text: str) -> int:
        """Append the participants found in CSV text.

        Returns:
            Number of participants imported; 0 sets ``csv_error`` and changes nothing
        """
        parsed = parse_roster_csv(text)
        return self._import(parsed)

    def import_csv_file(self, path: Union[str, Path]) -> int:
        """Append the participants found in a CSV file.

        An unreadable file sets ``csv_error`` instead of raising.
        """
        try:
            parsed = load_roster_file(path)
        except FileLoadException:
            logger.exception("Error importing roster:")
            self.csv_error = CSV_ERROR_UNREADABLE
            return 0
        return self._import(parsed)

    def _import(self, parsed: List[Participant]) -> int:
        if not parsed:
            logger.warning("CSV import found no valid rows")
            self.csv_error = CSV_ERROR_NO_ROWS
            return 0
        self.csv_error = None
        self.state = self.state.with_participants_added(parsed)
        logger.info(f"Imported {len(parsed)} participant(s) from CSV")
        self._commit()
        return len(parsed)

    # ---- rules ------------------------------------------------------------

    def add_preference(self, source: str, target: str) -> PreferenceRule:
        """Append a preference rule.

        Raises:
            InvalidRuleException: If either attribute is blank
        """
        validate_preference_fields(source, target)
        rule = PreferenceRule(source=source.strip(), target=target.strip())
        self.rules = self.rules.with_rule(rule)
        logger.info(f"Added preference rule {rule}")
        self._commit()
        return rule

    def remove_preference(self, rule_id: str) -> None:
        """Remove a preference rule.

        Raises:
            RuleNotFoundException: If the id is unknown
        """
        if not any(rule.id == rule_id for rule in self.rules.preferred_combos):
            raise RuleNotFoundException(f"No preference rule with id {rule_id}")
        self.rules = self.rules.without_rule(rule_id)
        self._commit()

    def toggle_avoid_same_attribute(self) -> bool:
        self.rules = self.rules.toggled_avoid_same()
        self._commit()
        return self.rules.avoid_same_attribute

    def set_hit_rate(self, value) -> int:
        """Set the preference hit rate, clamped to 0-100."""
        self.rules = self.rules.with_hit_rate(value)
        self._commit()
        return self.rules.preferred_hit_rate

    # ---- views ------------------------------------------------------------

    @property
    def can_enter_roulette(self) -> bool:
        return self.participant_count >= MIN_PARTICIPANTS

    def go_to_roulette(self) -> bool:
        if not self.can_enter_roulette:
            logger.warning("Cannot open the roulette with fewer than 2 participants")
            return False
        self.view = VIEW_ROULETTE
        self._commit()
        return True

    def go_to_setup(self) -> None:
        self.view = VIEW_SETUP
        self._commit()

    # ---- reset & persistence ---------------------------------------------

    def reset(self) -> None:
        """Clear the whole session and the stored state."""
        self.state = self._empty_state()
        self.rules = RuleConfiguration()
        self.view = VIEW_SETUP
        self.csv_error = None
        self._reset_session()
        self.status_text = STATUS_RESET
        self.store.clear()
        logger.info(f"Reset {self.mode} session")

    def to_payload(self) -> Dict[str, Any]:
        payload = self.state.to_dict()
        payload["settings"] = self.rules.to_dict()
        payload[self.status_key] = self.status_text
        payload["view"] = self.view
        return payload

    def restore(self, payload: Dict[str, Any]) -> bool:
        """Restore a session from a stored payload.

        Malformed payloads are ignored and the current session is kept.

        Returns:
            True if the payload was applied
        """
        try:
            state = self._state_from_dict(payload)
            settings = payload.get("settings")
            rules = (
                RuleConfiguration.from_dict(settings)
                if isinstance(settings, dict)
                else RuleConfiguration()
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.exception("Ignoring malformed cached state:")
            return False

        self.state = state
        self.rules = rules
        status = payload.get(self.status_key)
        if isinstance(status, str):
            self.status_text = status
        view = payload.get("view")
        if view in VIEWS:
            self.view = view
        self._reset_session()
        return True

    def load(self) -> bool:
        """Load the stored session, if there is a usable one."""
        payload = self.store.load()
        if payload is None:
            return False
        restored = self.restore(payload)
        if restored:
            logger.info(
                f"Restored {self.mode} session with {self.participant_count} participant(s)"
            )
        return restored

    def save(self) -> None:
        """Persist the session.

        Raises:
            FileSaveException: If the store cannot be written
        """
        self.store.save(self.to_payload())

    def _commit(self) -> None:
        if self.autosave:
            self.save()
