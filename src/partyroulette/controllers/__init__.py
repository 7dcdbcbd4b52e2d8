from partyroulette.controllers.base import RouletteController
from partyroulette.controllers.factory import create_controller
from partyroulette.controllers.pairing import PairingController
from partyroulette.controllers.relay import RelayController, describe_outcome

__all__ = [
    "RouletteController",
    "PairingController",
    "RelayController",
    "create_controller",
    "describe_outcome",
]
