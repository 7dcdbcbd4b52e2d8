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

from PyQt6 import QtWidgets
from PyQt6.QtCore import Qt, pyqtSignal

from partyroulette.constants import MAX_HIT_RATE, MIN_HIT_RATE
from partyroulette.models import RuleConfiguration


class RulesPanel(QtWidgets.QGroupBox):
    """Matching rules: same-attribute avoidance, hit rate and preferences."""

    avoid_toggled = pyqtSignal()
    hit_rate_changed = pyqtSignal(int)
    preference_added = pyqtSignal(str, str)
    preference_removed = pyqtSignal(str)

    def __init__(self, source_label: str = "From", target_label: str = "To", parent=None):
        super().__init__("Rules", parent)
        layout = QtWidgets.QVBoxLayout(self)

        self.avoid_checkbox = QtWidgets.QCheckBox("Avoid matching the same attribute")
        self.avoid_checkbox.clicked.connect(lambda _checked: self.avoid_toggled.emit())
        layout.addWidget(self.avoid_checkbox)

        rate_row = QtWidgets.QHBoxLayout()
        rate_row.addWidget(QtWidgets.QLabel("Preference hit rate"))
        self.hit_rate_spin = QtWidgets.QSpinBox()
        self.hit_rate_spin.setRange(MIN_HIT_RATE, MAX_HIT_RATE)
        self.hit_rate_spin.setSuffix(" %")
        self.hit_rate_spin.editingFinished.connect(
            lambda: self.hit_rate_changed.emit(self.hit_rate_spin.value())
        )
        rate_row.addWidget(self.hit_rate_spin)
        rate_row.addStretch()
        layout.addLayout(rate_row)

        self.preference_list = QtWidgets.QListWidget()
        self.preference_list.setMaximumHeight(120)
        layout.addWidget(self.preference_list)

        add_row = QtWidgets.QHBoxLayout()
        self.source_input = QtWidgets.QLineEdit()
        self.source_input.setPlaceholderText(source_label)
        self.target_input = QtWidgets.QLineEdit()
        self.target_input.setPlaceholderText(target_label)
        self.btn_add = QtWidgets.QPushButton("Add Preference")
        self.btn_add.clicked.connect(
            lambda: self.preference_added.emit(
                self.source_input.text(), self.target_input.text()
            )
        )
        self.btn_remove = QtWidgets.QPushButton("Remove")
        self.btn_remove.clicked.connect(self._on_remove_clicked)
        add_row.addWidget(self.source_input)
        add_row.addWidget(self.target_input)
        add_row.addWidget(self.btn_add)
        add_row.addWidget(self.btn_remove)
        layout.addLayout(add_row)

    def set_rules(self, rules: RuleConfiguration):
        self.avoid_checkbox.setChecked(rules.avoid_same_attribute)
        self.hit_rate_spin.blockSignals(True)
        self.hit_rate_spin.setValue(rules.preferred_hit_rate)
        self.hit_rate_spin.blockSignals(False)
        self.preference_list.clear()
        for rule in rules.preferred_combos:
            item = QtWidgets.QListWidgetItem(f"{rule.source}  →  {rule.target}")
            item.setData(Qt.ItemDataRole.UserRole, rule.id)
            self.preference_list.addItem(item)

    def clear_inputs(self):
        self.source_input.clear()
        self.target_input.clear()

    def _on_remove_clicked(self):
        item = self.preference_list.currentItem()
        if item is not None:
            self.preference_removed.emit(item.data(Qt.ItemDataRole.UserRole))
