"""CSV roster import.

Expected format is two comma separated columns, ``attribute,name``, with an
optional header row whose first cell reads ``attribute``.
"""

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

import csv
from pathlib import Path
from typing import List, Union

from partyroulette.constants import CSV_HEADER_ATTRIBUTE
from partyroulette.exceptions import FileLoadException
from partyroulette.models import Participant
from partyroulette.utils import normalize_attribute, setup_logger

logger = setup_logger(__name__)


def _clean_cell(cell: str) -> str:
    """Trim a cell and strip one pair of surrounding double quotes."""
    cell = cell.strip()
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell.strip()


def parse_roster_csv(raw: str) -> List[Participant]:
    """Parse CSV text into new participants.

    Lines without both an attribute and a name are skipped silently.

    Args:
        raw: CSV text

    Returns:
        Parsed participants, possibly empty
    """
    lines = [line.strip() for line in raw.lstrip("\ufeff").splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return []

    # Each line is parsed on its own so a stray quote cannot swallow the rest
    rows = [[_clean_cell(cell) for cell in next(csv.reader([line]))] for line in lines]
    if rows and rows[0] and normalize_attribute(rows[0][0]) == CSV_HEADER_ATTRIBUTE:
        rows = rows[1:]

    participants = []
    for row in rows:
        if len(row) < 2:
            continue
        attribute, name = row[0], row[1]
        if not attribute or not name:
            continue
        participants.append(Participant(attribute=attribute, name=name))

    logger.debug(
        f"Parsed {len(participants)} participant(s) from {len(rows)} CSV row(s)"
    )
    return participants


def load_roster_file(path: Union[str, Path]) -> List[Participant]:
    """Read and parse a CSV roster file.

    Raises:
        FileLoadException: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileLoadException(f"Could not read roster file {path}: {e}") from e
    return parse_roster_csv(text)
