"""AppConfig data class."""

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
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from partyroulette.constants import DEFAULT_DATA_DIR_NAME
from partyroulette.engine.relay import ChainClosure, HandoffDirection, RelayPolicy
from partyroulette.exceptions import InvalidConfigurationException
from partyroulette.models.state import RemovalPolicy

ENV_DATA_DIR = "PARTYROULETTE_DATA_DIR"
ENV_SEED = "PARTYROULETTE_SEED"
ENV_LOG_LEVEL = "PARTYROULETTE_LOG_LEVEL"
ENV_RELAY_CLOSURE = "PARTYROULETTE_RELAY_CLOSURE"
ENV_REMOVAL_POLICY = "PARTYROULETTE_REMOVAL_POLICY"


def _default_data_dir() -> Path:
    return Path.home() / DEFAULT_DATA_DIR_NAME


@dataclass
class AppConfig:
    """Application configuration settings.

    Attributes
    ----------
    data_dir : Path
        Directory holding the per-mode state files.
    seed : int or None
        Seed for the random source; ``None`` draws a fresh seed.
    log_level : str
        Logging level name.
    relay_policy : RelayPolicy
        How relay chains are shown as handoffs.
    removal_policy : RemovalPolicy
        Whether finalized results follow roster removals.
    """

    data_dir: Path = field(default_factory=_default_data_dir)
    seed: Optional[int] = None
    log_level: str = "INFO"
    relay_policy: RelayPolicy = field(default_factory=RelayPolicy)
    removal_policy: RemovalPolicy = RemovalPolicy.LIVE

    def __post_init__(self):
        self.data_dir = Path(self.data_dir).expanduser()
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise InvalidConfigurationException(f"Unknown log level: {self.log_level}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "data_dir": str(self.data_dir),
            "seed": self.seed,
            "log_level": self.log_level,
            "relay_closure": self.relay_policy.closure.value,
            "relay_direction": self.relay_policy.direction.value,
            "removal_policy": self.removal_policy.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Deserialize configuration from dictionary."""
        try:
            relay_policy = RelayPolicy(
                closure=ChainClosure(data.get("relay_closure", "open")),
                direction=HandoffDirection(
                    data.get("relay_direction", "newest_to_previous")
                ),
            )
            removal_policy = RemovalPolicy(data.get("removal_policy", "live"))
            seed = data.get("seed")
            seed = int(seed) if seed not in (None, "") else None
        except (ValueError, TypeError) as e:
            raise InvalidConfigurationException(str(e)) from e

        return cls(
            data_dir=data.get("data_dir") or _default_data_dir(),
            seed=seed,
            log_level=data.get("log_level", "INFO"),
            relay_policy=relay_policy,
            removal_policy=removal_policy,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build a configuration from ``PARTYROULETTE_*`` environment variables."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        if environ.get(ENV_DATA_DIR):
            data["data_dir"] = environ[ENV_DATA_DIR]
        if environ.get(ENV_SEED):
            data["seed"] = environ[ENV_SEED]
        if environ.get(ENV_LOG_LEVEL):
            data["log_level"] = environ[ENV_LOG_LEVEL]
        if environ.get(ENV_RELAY_CLOSURE):
            data["relay_closure"] = environ[ENV_RELAY_CLOSURE].strip().lower()
        if environ.get(ENV_REMOVAL_POLICY):
            data["removal_policy"] = environ[ENV_REMOVAL_POLICY].strip().lower()
        return cls.from_dict(data)
