from partyroulette.models.group import Group
from partyroulette.models.participant import Participant
from partyroulette.models.rules import PreferenceRule, RuleConfiguration
from partyroulette.models.state import (
    PairingState,
    RelayState,
    RemovalPolicy,
    RosterState,
)

__all__ = [
    "Participant",
    "Group",
    "PreferenceRule",
    "RuleConfiguration",
    "RosterState",
    "PairingState",
    "RelayState",
    "RemovalPolicy",
]
