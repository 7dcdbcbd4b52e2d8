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

from PyQt6 import QtGui, QtWidgets
from PyQt6.QtCore import Qt

from partyroulette.controllers import PairingController
from partyroulette.gui.views.roulette_state import RouletteViewState
from partyroulette.gui.views.roulette_view import RouletteView


class PairingView(RouletteView):
    """Pairing tab: draws pairs, and a trio when three are left."""

    title = "Pairing Roulette"
    subtitle = "Draw pairs one at a time. When three people are left they form a trio."
    source_label = "Attribute"
    target_label = "Pairs with attribute"

    controller: PairingController

    def _build_result_actions(self):
        self.btn_release = QtWidgets.QPushButton("Release Selected")
        self.btn_release.setToolTip("Put the selected group back into the pool")
        self.btn_release.clicked.connect(self._on_release)
        self.result_actions.addWidget(self.btn_release)

    def _populate_results(self):
        self.results_list.clear()
        highlighted = self.controller.highlighted_group_id
        for index, group in enumerate(self.controller.groups, start=1):
            label = f"{index}. {group}" + ("  (trio)" if group.is_trio else "")
            item = QtWidgets.QListWidgetItem(label)
            item.setData(Qt.ItemDataRole.UserRole, group.id)
            if group.id == highlighted:
                font = item.font()
                font.setBold(True)
                item.setFont(font)
                item.setBackground(QtGui.QColor("#fde7f3"))
            self.results_list.addItem(item)

    def _update_result_actions(self, state: RouletteViewState):
        self.btn_release.setEnabled(state.can_release)

    def _spin_names(self) -> List[str]:
        return [p.name for p in self.controller.available_participants]

    def _draw(self) -> Optional[str]:
        group = self.controller.spin()
        return str(group) if group is not None else None

    def _reroll(self) -> Optional[str]:
        group = self.controller.reroll_latest()
        return str(group) if group is not None else None

    def _on_release(self):
        item = self.results_list.currentItem()
        if item is None:
            return
        self._run(self.controller.release, item.data(Qt.ItemDataRole.UserRole))
