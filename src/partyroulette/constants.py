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

# --- Modes ---
MODE_PAIRING = "pair"
MODE_RELAY = "gift"

# Storage keys, one state file per mode
STORAGE_KEYS = {
    MODE_PAIRING: "party-pairing-roulette-state",
    MODE_RELAY: "party-gift-roulette-state",
}
STATE_FILE_EXTENSION = ".json"
DEFAULT_DATA_DIR_NAME = ".partyroulette"
CSV_FILTER = "CSV Files (*.csv);;Text Files (*.txt)"

# Views
VIEW_SETUP = "setup"
VIEW_ROULETTE = "roulette"
VIEWS = (VIEW_SETUP, VIEW_ROULETTE)

# --- Rule defaults ---
DEFAULT_AVOID_SAME_ATTRIBUTE = True
DEFAULT_PREFERRED_HIT_RATE = 100
MIN_HIT_RATE = 0
MAX_HIT_RATE = 100

# Group sizes
PAIR_SIZE = 2
TRIO_SIZE = 3
MIN_PARTICIPANTS = 2

# CSV header cell that marks the first row as a header
CSV_HEADER_ATTRIBUTE = "attribute"

# Participant fields that can be edited after creation
EDITABLE_FIELDS = ("attribute", "name")

# --- Presentation timing (milliseconds) ---
SPIN_DURATION_MS = 2300
REVEAL_DELAY_MS = 3000
SPOTLIGHT_TICK_MS = 70
SPOTLIGHT_SLOWDOWN_STEPS_MS = [80, 120, 160, 210, 270, 340, 430, 540, 680, 840]
FALLBACK_SPOTLIGHTS = ["Ready", "Set", "Go"]

# --- Status messages ---
STATUS_READY = "Ready!"
STATUS_SPINNING = "Spinning..."
STATUS_NEW_PAIR = "A new pair has been drawn!"
STATUS_NEW_TRIO = "A special trio has been drawn!"
STATUS_NOT_ENOUGH = "Not enough participants left to draw."
STATUS_PAIR_RELEASED = "The selected pair has been released."
STATUS_REROLL_PAIR = "Redrawing the latest pair."
STATUS_RESET = "Everything has been reset."

STATUS_RELAY_DRAWING = "Drawing the next gift giver..."
STATUS_RELAY_CLEARED = "The relay results have been cleared."
STATUS_RELAY_INSUFFICIENT = "At least two participants are needed for a relay."
STATUS_RELAY_INTERRUPTED = (
    "The roster changed during the relay, so the draw was interrupted. "
    "Please reset the relay and draw again."
)
STATUS_RELAY_COMPLETE = (
    "The handoff order is already complete. Clear the results to draw again."
)
STATUS_RELAY_STARTED = (
    "{recipient} receives the first gift. Draw the next person to pick the giver."
)
STATUS_RELAY_EXTENDED = "{giver} hands a gift to {recipient}! {remaining} left."
STATUS_RELAY_FINISHED = (
    "{giver} hands a gift to {recipient}. The whole handoff order is decided."
)
STATUS_RELAY_REROLL = "Redrawing {name}."

CSV_ERROR_NO_ROWS = "No valid rows were found in the CSV file."
CSV_ERROR_UNREADABLE = "The CSV file could not be read."
