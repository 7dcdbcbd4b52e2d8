"""Launch the Party Roulette desktop application."""

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

import sys

from PyQt6 import QtWidgets

from partyroulette import APP_NAME
from partyroulette.config import AppConfig
from partyroulette.constants import MODE_PAIRING, MODE_RELAY
from partyroulette.controllers import create_controller
from partyroulette.exceptions import InvalidConfigurationException
from partyroulette.gui.mainwindow import PartyRouletteMainWindow
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


def main() -> int:
    try:
        config = AppConfig.from_env()
    except InvalidConfigurationException as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    setup_logger("partyroulette", config.log_level)

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    pairing = create_controller(MODE_PAIRING, config)
    relay = create_controller(MODE_RELAY, config)
    for controller in (pairing, relay):
        controller.load()

    window = PartyRouletteMainWindow(pairing, relay)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
