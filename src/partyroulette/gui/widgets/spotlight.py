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

from typing import List, Optional, Sequence

from PyQt6 import QtCore, QtWidgets
from PyQt6.QtCore import Qt, pyqtSignal

from partyroulette.constants import (
    FALLBACK_SPOTLIGHTS,
    REVEAL_DELAY_MS,
    SPIN_DURATION_MS,
    SPOTLIGHT_SLOWDOWN_STEPS_MS,
    SPOTLIGHT_TICK_MS,
)
from partyroulette.engine.random_source import RandomSource, SystemRandomSource
from partyroulette.gui.gui_utils import update_widget_style
from partyroulette.gui.views.roulette_state import fit_slowdown


class SpotlightLabel(QtWidgets.QLabel):
    """
    Large label that cycles through names while a draw is spinning.

    The spin runs at a fixed tick for ``SPIN_DURATION_MS``, then slows down
    through ``SPOTLIGHT_SLOWDOWN_STEPS_MS`` until ``REVEAL_DELAY_MS`` has passed
    and emits ``finished``. The owner performs the actual draw on ``finished``
    and calls :meth:`reveal`.
    """

    finished = pyqtSignal()

    def __init__(self, rng: Optional[RandomSource] = None, parent=None):
        super().__init__("Ready!", parent)
        self.rng = rng if rng is not None else SystemRandomSource()
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumHeight(96)
        font = self.font()
        font.setPointSize(26)
        font.setBold(True)
        self.setFont(font)
        self.setProperty("state", "idle")

        self._names: List[str] = []
        self._slowdown: List[int] = []
        self._spin_id = 0
        self._active = False
        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self._show_next_name)

    @property
    def is_spinning(self) -> bool:
        return self._active

    def start(self, names: Sequence[str]) -> None:
        """Start cycling through ``names``."""
        self._names = list(names) or list(FALLBACK_SPOTLIGHTS)
        self._slowdown = fit_slowdown(
            SPOTLIGHT_SLOWDOWN_STEPS_MS, REVEAL_DELAY_MS - SPIN_DURATION_MS
        )
        self._spin_id += 1
        self._active = True
        self._set_state("spinning")
        self._show_next_name()
        self._timer.start(SPOTLIGHT_TICK_MS)
        spin_id = self._spin_id
        QtCore.QTimer.singleShot(SPIN_DURATION_MS, lambda: self._begin_slowdown(spin_id))

    def stop(self) -> None:
        self._timer.stop()
        self._slowdown = []
        self._active = False
        self._set_state("idle")

    def reveal(self, text: str) -> None:
        self.setText(text)
        self._set_state("revealed")

    def _begin_slowdown(self, spin_id: int) -> None:
        if not self._active or spin_id != self._spin_id:
            return
        self._timer.stop()
        self._slow_step(spin_id)

    def _slow_step(self, spin_id: int) -> None:
        if not self._active or spin_id != self._spin_id:
            return
        if not self._slowdown:
            self._active = False
            self._set_state("idle")
            self.finished.emit()
            return
        self._show_next_name()
        QtCore.QTimer.singleShot(
            self._slowdown.pop(0), lambda: self._slow_step(spin_id)
        )

    def _show_next_name(self) -> None:
        self.setText(self.rng.choice(self._names))

    def _set_state(self, state: str) -> None:
        self.setProperty("state", state)
        update_widget_style(self)
