"""Shared helpers for Party Roulette."""

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

import logging
import os
import uuid
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "PARTYROULETTE_LOG_LEVEL"

_handler: Optional[logging.Handler] = None


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger attached to the shared application handler.

    Args:
        name: Logger name, normally ``__name__``
        level: Optional level name; defaults to ``$PARTYROULETTE_LOG_LEVEL`` or INFO

    Returns:
        The configured logger
    """
    global _handler

    root = logging.getLogger("partyroulette")
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
    if level:
        root.setLevel(level.upper())

    return logging.getLogger(name)


def generate_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def normalize_attribute(value: str) -> str:
    """Normalize an attribute for comparison (trimmed, case-folded)."""
    return (value or "").strip().lower()