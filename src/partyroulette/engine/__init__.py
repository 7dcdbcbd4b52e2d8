"""Matching and ordering engines for the pairing and gift relay roulettes."""

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

from partyroulette.engine.pairing import (
    Selection,
    SelectionBranch,
    draw_next_group,
    release_group,
    reroll_last_group,
    select_members,
    select_next_group,
)
from partyroulette.engine.random_source import (
    FixedSequenceRandom,
    RandomSource,
    SystemRandomSource,
)
from partyroulette.engine.relay import (
    ChainClosure,
    HandoffDirection,
    RelayOutcome,
    RelayPolicy,
    RelayStatus,
    advance_relay,
    relay_handoffs,
    reroll_last_link,
    undo_last_link,
)

__all__ = [
    "RandomSource",
    "SystemRandomSource",
    "FixedSequenceRandom",
    "Selection",
    "SelectionBranch",
    "select_members",
    "select_next_group",
    "draw_next_group",
    "release_group",
    "reroll_last_group",
    "RelayStatus",
    "RelayOutcome",
    "RelayPolicy",
    "ChainClosure",
    "HandoffDirection",
    "advance_relay",
    "relay_handoffs",
    "undo_last_link",
    "reroll_last_link",
]
