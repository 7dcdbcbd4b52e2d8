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

"""Shared tab for both roulette modes: a setup page and a roulette page."""

from typing import Callable, List, Optional

from PyQt6 import QtWidgets
from PyQt6.QtCore import pyqtSignal

from partyroulette.constants import CSV_FILTER, VIEW_SETUP
from partyroulette.controllers import RouletteController
from partyroulette.exceptions import PartyRouletteException
from partyroulette.gui.gui_utils import confirm, show_error
from partyroulette.gui.views.roulette_state import RouletteViewState
from partyroulette.gui.widgets.header import TabHeader
from partyroulette.gui.widgets.roster_table import RosterTable
from partyroulette.gui.widgets.rules_panel import RulesPanel
from partyroulette.gui.widgets.spotlight import SpotlightLabel
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)

SETUP_PAGE = 0
ROULETTE_PAGE = 1


class RouletteView(QtWidgets.QWidget):
    """Base tab wiring a controller to the roster, rules and roulette pages."""

    status_message = pyqtSignal(str)

    title = "Roulette"
    subtitle = ""
    source_label = "From"
    target_label = "To"

    def __init__(self, controller: RouletteController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self._pending: Optional[Callable[[], Optional[str]]] = None

        layout = QtWidgets.QVBoxLayout(self)
        self.pages = QtWidgets.QStackedWidget()
        layout.addWidget(self.pages)
        self.pages.addWidget(self._build_setup_page())
        self.pages.addWidget(self._build_roulette_page())

        self.spotlight.finished.connect(self._on_spin_finished)
        self.refresh()

    # ---- construction -----------------------------------------------------

    def _build_setup_page(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        header = TabHeader(self.title, self.subtitle)
        self.btn_reset_all = header.add_action_button(
            "Reset Everything", "Clear the roster, rules and results"
        )
        self.btn_reset_all.clicked.connect(self._on_reset_all)
        self.btn_open = header.add_action_button(
            "Open Roulette", "At least two participants are needed"
        )
        self.btn_open.clicked.connect(self._on_open_roulette)
        layout.addWidget(header)

        self.csv_error_label = QtWidgets.QLabel()
        self.csv_error_label.setStyleSheet("color: #b00020;")
        self.csv_error_label.setVisible(False)
        layout.addWidget(self.csv_error_label)

        splitter = QtWidgets.QSplitter()
        self.roster_table = RosterTable()
        self.roster_table.add_requested.connect(self._on_add_participant)
        self.roster_table.edit_requested.connect(self._on_edit_participant)
        self.roster_table.remove_requested.connect(self._on_remove_participant)
        self.roster_table.import_requested.connect(self._on_import_csv)
        splitter.addWidget(self.roster_table)

        self.rules_panel = RulesPanel(self.source_label, self.target_label)
        self.rules_panel.avoid_toggled.connect(
            lambda: self._run(self.controller.toggle_avoid_same_attribute)
        )
        self.rules_panel.hit_rate_changed.connect(
            lambda value: self._run(self.controller.set_hit_rate, value)
        )
        self.rules_panel.preference_added.connect(self._on_add_preference)
        self.rules_panel.preference_removed.connect(
            lambda rule_id: self._run(self.controller.remove_preference, rule_id)
        )
        splitter.addWidget(self.rules_panel)
        layout.addWidget(splitter)
        return page

    def _build_roulette_page(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        self.roulette_header = TabHeader(self.title)
        self.btn_back = self.roulette_header.add_action_button(
            "Back to Setup", "Edit the roster and rules"
        )
        self.btn_back.clicked.connect(self._on_back_to_setup)
        layout.addWidget(self.roulette_header)

        self.spotlight = SpotlightLabel(rng=self.controller.rng)
        layout.addWidget(self.spotlight)

        self.status_label = QtWidgets.QLabel()
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        controls = QtWidgets.QHBoxLayout()
        self.btn_spin = QtWidgets.QPushButton("Spin")
        self.btn_spin.clicked.connect(self._on_spin)
        self.btn_reroll = QtWidgets.QPushButton("Reroll Latest")
        self.btn_reroll.clicked.connect(self._on_reroll)
        controls.addWidget(self.btn_reroll)
        controls.addStretch()
        self.counter_label = QtWidgets.QLabel()
        controls.addWidget(self.counter_label)
        controls.addWidget(self.btn_spin)
        layout.addLayout(controls)

        self.results_list = QtWidgets.QListWidget()
        layout.addWidget(self.results_list)

        self.result_actions = QtWidgets.QHBoxLayout()
        self.result_actions.addStretch()
        layout.addLayout(self.result_actions)
        self._build_result_actions()
        return page

    # ---- subclass hooks ---------------------------------------------------

    def _build_result_actions(self):
        """Add mode specific buttons to ``self.result_actions``."""

    def _populate_results(self):
        raise NotImplementedError

    def _update_result_actions(self, state: RouletteViewState):
        """Enable or disable mode specific buttons."""

    def _spin_names(self) -> List[str]:
        return [p.name for p in self.controller.participants]

    def _draw(self) -> Optional[str]:
        """Perform the draw; return the text to reveal."""
        raise NotImplementedError

    def _reroll(self) -> Optional[str]:
        raise NotImplementedError

    # ---- refresh ----------------------------------------------------------

    def refresh(self):
        state = RouletteViewState.compute(self.controller, self.spotlight.is_spinning)

        self.pages.setCurrentIndex(
            SETUP_PAGE if self.controller.view == VIEW_SETUP else ROULETTE_PAGE
        )
        self.roster_table.set_participants(self.controller.participants)
        self.rules_panel.set_rules(self.controller.rules)
        csv_error = self.controller.csv_error
        self.csv_error_label.setText(csv_error or "")
        self.csv_error_label.setVisible(bool(csv_error))

        self.btn_open.setEnabled(state.can_enter_roulette)
        self.btn_back.setEnabled(state.can_edit_setup)
        self.btn_reset_all.setEnabled(state.can_edit_setup)
        self.btn_spin.setEnabled(state.can_spin)
        self.btn_spin.setText(state.spin_button_text)
        self.btn_reroll.setEnabled(state.can_reroll)
        self.counter_label.setText(state.counter_text)
        self.status_label.setText(self.controller.status_text)

        self._populate_results()
        self._update_result_actions(state)

    # ---- handlers ---------------------------------------------------------

    def _run(self, command: Callable, *args) -> bool:
        """Run a controller command, reporting domain errors to the user."""
        try:
            command(*args)
        except PartyRouletteException as e:
            logger.warning(f"{command.__name__} failed: {e}")
            show_error(self, "Party Roulette", e)
            self.refresh()
            return False
        self.refresh()
        return True

    def _on_add_participant(self, attribute: str, name: str):
        if self._run(self.controller.add_participant, attribute, name):
            self.roster_table.clear_inputs()

    def _on_edit_participant(self, participant_id: str, field_name: str, value: str):
        self._run(self.controller.update_participant, participant_id, field_name, value)

    def _on_remove_participant(self, participant_id: str):
        self._run(self.controller.remove_participant, participant_id)

    def _on_import_csv(self):
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Import Roster", "", CSV_FILTER
        )
        if not path:
            return
        self._run(self.controller.import_csv_file, path)
        if not self.controller.csv_error:
            self.status_message.emit(f"Imported roster from {path}")

    def _on_add_preference(self, source: str, target: str):
        if self._run(self.controller.add_preference, source, target):
            self.rules_panel.clear_inputs()

    def _on_open_roulette(self):
        self._run(self.controller.go_to_roulette)

    def _on_back_to_setup(self):
        self._run(self.controller.go_to_setup)

    def _on_reset_all(self):
        if confirm(
            self,
            "Reset Everything",
            "This clears the roster, the rules and every result. Continue?",
        ):
            self._run(self.controller.reset)

    def _start_spin(self, action: Callable[[], Optional[str]]):
        self._pending = action
        self.spotlight.start(self._spin_names())
        self.refresh()
        state = RouletteViewState.compute(self.controller, spinning=True)
        self.status_label.setText(state.spinning_status)

    def _on_spin(self):
        self._start_spin(self._draw)

    def _on_reroll(self):
        if confirm(self, "Reroll", "Discard the latest result and draw again?"):
            self._start_spin(self._reroll)

    def _on_spin_finished(self):
        action, self._pending = self._pending, None
        revealed = None
        if action is not None:
            try:
                revealed = action()
            except PartyRouletteException as e:
                logger.warning(f"Draw failed: {e}")
                show_error(self, "Party Roulette", e)
        self.spotlight.reveal(revealed or self.controller.status_text)
        self.status_message.emit(self.controller.status_text)
        self.refresh()
