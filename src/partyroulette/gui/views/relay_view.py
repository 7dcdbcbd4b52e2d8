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

from typing import List, Optional

from PyQt6 import QtWidgets

from partyroulette.controllers import RelayController
from partyroulette.engine import RelayOutcome
from partyroulette.gui.gui_utils import confirm
from partyroulette.gui.views.roulette_state import RouletteViewState
from partyroulette.gui.views.roulette_view import RouletteView


def _reveal_text(outcome: Optional[RelayOutcome]) -> Optional[str]:
    if outcome is None or not outcome.status.changed_chain:
        return None
    if outcome.giver is None:
        return outcome.recipient.name
    return f"{outcome.giver.name} → {outcome.recipient.name}"


class RelayView(RouletteView):
    """Gift relay tab: each draw picks who hands a gift to the latest person."""

    title = "Gift Relay"
    subtitle = (
        "The first draw picks who receives first. Every next draw picks who "
        "gives to the person drawn before."
    )
    source_label = "Giver attribute"
    target_label = "Recipient attribute"

    controller: RelayController

    def _build_result_actions(self):
        self.btn_clear = QtWidgets.QPushButton("Clear Relay")
        self.btn_clear.setToolTip("Clear the handoff order but keep the roster")
        self.btn_clear.clicked.connect(self._on_clear_relay)
        self.result_actions.addWidget(self.btn_clear)

    def _populate_results(self):
        self.results_list.clear()
        chain = self.controller.chain_participants
        if len(chain) == 1:
            self.results_list.addItem(f"{chain[0].name} receives first")
        for index, (giver, recipient) in enumerate(self.controller.handoffs(), start=1):
            self.results_list.addItem(f"{index}. {giver.name} → {recipient.name}")
        remaining = self.controller.remaining_participants
        if remaining and chain:
            self.results_list.addItem(
                "Still to draw: " + ", ".join(p.name for p in remaining)
            )

    def _update_result_actions(self, state: RouletteViewState):
        self.btn_clear.setEnabled(state.can_reset)

    def _spin_names(self) -> List[str]:
        remaining = self.controller.remaining_participants
        return [p.name for p in remaining or self.controller.participants]

    def _draw(self) -> Optional[str]:
        return _reveal_text(self.controller.spin())

    def _reroll(self) -> Optional[str]:
        return _reveal_text(self.controller.reroll_last())

    def _on_clear_relay(self):
        if confirm(self, "Clear Relay", "Clear the whole handoff order?"):
            self._run(self.controller.reset_relay)
