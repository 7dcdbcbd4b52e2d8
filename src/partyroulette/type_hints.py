"""Type hints used in Party Roulette."""

from typing import List, Literal, Sequence, Tuple

# Roulette modes and views
Mode = Literal["pair", "gift"]
ViewMode = Literal["setup", "roulette"]

# Participant fields editable after creation
ParticipantField = Literal["attribute", "name"]

# Opaque participant identifier
ParticipantId = str
# Ids not yet placed into a group, in draw order
AvailableIds = Tuple[ParticipantId, ...]
# Relay chain, most recently chosen last
ChainIds = Tuple[ParticipantId, ...]

# A pool of participants handed to the engines
Pool = Sequence["Participant"]
# (giver, recipient)
Handoff = Tuple["Participant", "Participant"]
Handoffs = List[Handoff]

#  LocalWords:  AvailableIds ChainIds
