"""Local JSON state store, one file per roulette mode."""

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

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from partyroulette.constants import STATE_FILE_EXTENSION, STORAGE_KEYS
from partyroulette.exceptions import FileSaveException, InvalidConfigurationException
from partyroulette.utils import setup_logger

logger = setup_logger(__name__)


class StateStore:
    """Persists one mode's session payload as a JSON file.

    A missing file is not an error, and a corrupt one is treated as "start
    fresh": both make :meth:`load` return ``None``.

    Args:
        data_dir: Directory holding the state files
        mode: ``"pair"`` or ``"gift"``
    """

    def __init__(self, data_dir: Union[str, Path], mode: str):
        if mode not in STORAGE_KEYS:
            raise InvalidConfigurationException(f"Unknown roulette mode: {mode}")
        self.data_dir = Path(data_dir)
        self.mode = mode
        self.key = STORAGE_KEYS[mode]

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.key}{STATE_FILE_EXTENSION}"

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored payload, or None when absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.exception(f"Failed to load cached state from {self.path}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring cached state in {self.path}: not a JSON object")
            return None
        return data

    def save(self, payload: Dict[str, Any]) -> None:
        """Write the payload.

        Raises:
            FileSaveException: If the file cannot be written
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=4, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise FileSaveException(f"Could not save state to {self.path}: {e}") from e

    def clear(self) -> None:
        """Delete the stored payload, if any."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise FileSaveException(f"Could not clear {self.path}: {e}") from e
        logger.info(f"Cleared cached state {self.path.name}")


class MemoryStateStore(StateStore):
    """In-memory store, used by the simulator and when persistence is off."""

    def __init__(self, mode: str):
        super().__init__(Path("."), mode)
        self._payload: Optional[Dict[str, Any]] = None

    def exists(self) -> bool:
        return self._payload is not None

    def load(self) -> Optional[Dict[str, Any]]:
        return json.loads(json.dumps(self._payload)) if self._payload else None

    def save(self, payload: Dict[str, Any]) -> None:
        self._payload = json.loads(json.dumps(payload))

    def clear(self) -> None:
        self._payload = None
