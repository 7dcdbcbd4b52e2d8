"""Main GUI window for Party Roulette."""

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

from typing import List

from PyQt6 import QtWidgets
from PyQt6.QtGui import QAction, QCloseEvent

from partyroulette import APP_NAME, APP_VERSION
from partyroulette.controllers import PairingController, RelayController
from partyroulette.exceptions import FileSaveException
from partyroulette.gui.views.pairing_view import PairingView
from partyroulette.gui.views.relay_view import RelayView
from partyroulette.gui.views.roulette_view import RouletteView
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


# --- Main Application Window ---
class PartyRouletteMainWindow(QtWidgets.QMainWindow):
    """Main application window with one tab per roulette mode."""

    def __init__(
        self, pairing: PairingController, relay: RelayController
    ) -> None:
        super().__init__()
        self.pairing_controller = pairing
        self.relay_controller = relay
        self._setup_ui()

    def _setup_ui(self):
        self.setWindowTitle(APP_NAME)
        self.setGeometry(100, 100, 1000, 760)

        self.tabs = QtWidgets.QTabWidget()
        self.setCentralWidget(self.tabs)
        self.pairing_tab = PairingView(self.pairing_controller)
        self.relay_tab = RelayView(self.relay_controller)
        for view in self.views:
            view.status_message.connect(self.statusBar().showMessage)
        self.tabs.addTab(self.pairing_tab, "Pairing")
        self.tabs.addTab(self.relay_tab, "Gift Relay")

        self._setup_menu()
        self.statusBar().showMessage("Ready - add participants or import a CSV roster.")
        logger.info(f"{APP_NAME} v{APP_VERSION} started.")

    @property
    def views(self) -> List[RouletteView]:
        return [self.pairing_tab, self.relay_tab]

    def _setup_menu(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        self.save_action = self._create_action("&Save", self.save_all, "Ctrl+S")
        self.import_action = self._create_action(
            "&Import Roster...", self._import_into_current, "Ctrl+I"
        )
        self.reset_action = self._create_action(
            "&Reset Current Tab...", self._reset_current
        )
        self.exit_action = self._create_action("E&xit", self.close, "Ctrl+Q")
        file_menu.addActions([self.save_action, self.import_action])
        file_menu.addSeparator()
        file_menu.addAction(self.reset_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        help_menu = menu_bar.addMenu("&Help")
        help_menu.addAction(self._create_action("&About", self.show_about))

    def _create_action(self, text: str, slot, shortcut: str = "") -> QAction:
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(shortcut)
        action.triggered.connect(slot)
        return action

    def current_view(self) -> RouletteView:
        return self.views[self.tabs.currentIndex()]

    def _import_into_current(self):
        self.current_view()._on_import_csv()

    def _reset_current(self):
        self.current_view()._on_reset_all()

    def save_all(self) -> bool:
        try:
            for view in self.views:
                view.controller.save()
        except FileSaveException as e:
            logger.exception("Error saving session:")
            QtWidgets.QMessageBox.critical(
                self, "Save Error", f"Could not save the session:\n{e}"
            )
            return False
        self.statusBar().showMessage("Session saved.", 3000)
        return True

    def show_about(self):
        QtWidgets.QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"{APP_NAME} v{APP_VERSION}\n\n"
            "Draw pairs and gift relay orders for parties and team events.",
        )

    def closeEvent(self, event: QCloseEvent):
        for view in self.views:
            view.spotlight.stop()
        if self.save_all():
            event.accept()
            return
        reply = QtWidgets.QMessageBox.question(
            self,
            "Exit Without Saving?",
            "The session could not be saved. Exit anyway?",
            QtWidgets.QMessageBox.StandardButton.Yes
            | QtWidgets.QMessageBox.StandardButton.No,
            QtWidgets.QMessageBox.StandardButton.No,
        )
        if reply == QtWidgets.QMessageBox.StandardButton.Yes:
            event.accept()
        else:
            event.ignore()
