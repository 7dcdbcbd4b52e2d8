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

from typing import Optional

from partyroulette.config import AppConfig
from partyroulette.constants import MODE_PAIRING, MODE_RELAY
from partyroulette.controllers.base import RouletteController
from partyroulette.controllers.pairing import PairingController
from partyroulette.controllers.relay import RelayController
from partyroulette.engine import SystemRandomSource
from partyroulette.exceptions import InvalidConfigurationException
from partyroulette.io import StateStore
from partyroulette.type_hints import Mode


def create_controller(
    mode: Mode, config: AppConfig, store: Optional[StateStore] = None
) -> RouletteController:
    """Create the controller for ``mode`` from the application configuration.

    Args:
        mode: ``"pair"`` or ``"gift"``
        config: Application configuration
        store: State store; a file store under ``config.data_dir`` by default

    Raises:
        InvalidConfigurationException: If the mode is unknown
    """
    store = store if store is not None else StateStore(config.data_dir, mode)
    rng = SystemRandomSource(config.seed)
    if mode == MODE_PAIRING:
        return PairingController(
            store, rng=rng, removal_policy=config.removal_policy
        )
    if mode == MODE_RELAY:
        return RelayController(
            store,
            rng=rng,
            removal_policy=config.removal_policy,
            relay_policy=config.relay_policy,
        )
    raise InvalidConfigurationException(f"Unknown roulette mode: {mode}")
