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

from typing import Optional, Sequence

from PyQt6 import QtWidgets
from PyQt6.QtCore import Qt, pyqtSignal

from partyroulette.models import Participant

COLUMN_FIELDS = ("attribute", "name")


class RosterTable(QtWidgets.QWidget):
    """
    Editable roster: one row per participant with attribute and name columns.

    The widget never changes the roster itself; it emits requests that the
    owning view forwards to its controller, then repopulates.
    """

    add_requested = pyqtSignal(str, str)
    edit_requested = pyqtSignal(str, str, str)
    remove_requested = pyqtSignal(str)
    import_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QtWidgets.QTableWidget(0, len(COLUMN_FIELDS))
        self.table.setHorizontalHeaderLabels(["Attribute", "Name"])
        self.table.horizontalHeader().setSectionResizeMode(
            QtWidgets.QHeaderView.ResizeMode.Stretch
        )
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(
            QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows
        )
        self.table.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self.table)

        add_row = QtWidgets.QHBoxLayout()
        self.attribute_input = QtWidgets.QLineEdit()
        self.attribute_input.setPlaceholderText("Attribute (e.g. team)")
        self.name_input = QtWidgets.QLineEdit()
        self.name_input.setPlaceholderText("Name")
        self.name_input.returnPressed.connect(self._on_add_clicked)
        self.btn_add = QtWidgets.QPushButton("Add")
        self.btn_add.clicked.connect(self._on_add_clicked)
        add_row.addWidget(self.attribute_input)
        add_row.addWidget(self.name_input)
        add_row.addWidget(self.btn_add)
        layout.addLayout(add_row)

        actions = QtWidgets.QHBoxLayout()
        self.btn_remove = QtWidgets.QPushButton("Remove Selected")
        self.btn_remove.clicked.connect(self._on_remove_clicked)
        self.btn_import = QtWidgets.QPushButton("Import CSV...")
        self.btn_import.setToolTip("Rows of attribute,name; an 'attribute' header is skipped")
        self.btn_import.clicked.connect(self.import_requested.emit)
        actions.addWidget(self.btn_remove)
        actions.addStretch()
        actions.addWidget(self.btn_import)
        layout.addLayout(actions)

    def set_participants(self, participants: Sequence[Participant]):
        self.table.blockSignals(True)
        self.table.setRowCount(len(participants))
        for row, participant in enumerate(participants):
            for column, field_name in enumerate(COLUMN_FIELDS):
                item = QtWidgets.QTableWidgetItem(getattr(participant, field_name))
                item.setData(Qt.ItemDataRole.UserRole, participant.id)
                self.table.setItem(row, column, item)
        self.table.blockSignals(False)

    def selected_participant_id(self) -> Optional[str]:
        items = self.table.selectedItems()
        if not items:
            return None
        return items[0].data(Qt.ItemDataRole.UserRole)

    def clear_inputs(self):
        self.attribute_input.clear()
        self.name_input.clear()
        self.attribute_input.setFocus()

    def _on_add_clicked(self):
        self.add_requested.emit(self.attribute_input.text(), self.name_input.text())

    def _on_remove_clicked(self):
        participant_id = self.selected_participant_id()
        if participant_id:
            self.remove_requested.emit(participant_id)

    def _on_item_changed(self, item: QtWidgets.QTableWidgetItem):
        participant_id = item.data(Qt.ItemDataRole.UserRole)
        if participant_id:
            self.edit_requested.emit(
                participant_id, COLUMN_FIELDS[item.column()], item.text()
            )
