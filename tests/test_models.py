import pytest

from partyroulette.models import (
    Group,
    PairingState,
    Participant,
    PreferenceRule,
    RelayState,
    RemovalPolicy,
    RuleConfiguration,
)


def _p(attribute, name):
    return Participant(attribute=attribute, name=name)


def test_participant_edit_keeps_id():
    alice = _p("Sales", "Alice")
    renamed = alice.with_field("name", "Alicia")

    assert renamed.id == alice.id
    assert renamed.name == "Alicia"
    assert alice.name == "Alice"


def test_participant_from_dict_generates_missing_id():
    participant = Participant.from_dict({"attribute": "Sales", "name": "Alice"})
    assert participant.id


def test_group_from_dict_infers_trio():
    members = [_p("A", f"P{i}").to_dict() for i in range(3)]

    group = Group.from_dict({"members": members})

    assert group.is_trio
    assert group.created_at == 0


@pytest.mark.parametrize("value, expected", [(150, 100), (-5, 0), ("abc", 0), (None, 0), (62.5, 62)])
def test_rule_configuration_clamps_hit_rate(value, expected):
    assert RuleConfiguration(preferred_hit_rate=value).preferred_hit_rate == expected


def test_rule_configuration_defaults_missing_keys():
    config = RuleConfiguration.from_dict({})

    assert config.avoid_same_attribute is True
    assert config.preferred_combos == ()
    assert config.preferred_hit_rate == 100


def test_rule_configuration_round_trip():
    config = RuleConfiguration(
        avoid_same_attribute=False,
        preferred_combos=(PreferenceRule("Sales", "Design"),),
        preferred_hit_rate=40,
    )

    assert RuleConfiguration.from_dict(config.to_dict()) == config
    assert config.to_dict()["preferredCombos"][0]["from"] == "Sales"


def test_without_rule():
    rule = PreferenceRule("A", "B")
    config = RuleConfiguration().with_rule(rule).with_rule(PreferenceRule("B", "C"))

    assert [str(r) for r in config.without_rule(rule.id).preferred_combos] == ["B -> C"]


def test_pairing_state_ignores_unknown_available_ids():
    alice = _p("Sales", "Alice")
    data = {
        "participants": [alice.to_dict()],
        "availableIds": [alice.id, "ghost", alice.id],
    }

    state = PairingState.from_dict(data)

    assert state.available_ids == (alice.id,)
    assert state.groups == ()


def test_pairing_state_restore_repairs_partition():
    a, b, c, d, e = (_p("ABCDE"[i], f"P{i}") for i in range(5))
    data = {
        "participants": [p.to_dict() for p in (a, b, c, d, e)],
        "pairs": [Group.create([a, b]).to_dict()],
        "availableIds": [a.id, c.id, d.id],
    }

    state = PairingState.from_dict(data)

    assert state.available_ids == (c.id, d.id, e.id)
    assert len(state.groups) == 1


def test_pairing_state_tolerates_missing_keys():
    state = PairingState.from_dict({"participants": "nope"})
    assert state == PairingState()


def _grouped_state():
    a, b, c, d = _p("A", "Ann"), _p("B", "Ben"), _p("C", "Cid"), _p("D", "Dee")
    group = Group.create([a, b])
    state = PairingState(participants=(a, b, c, d), groups=(group,), available_ids=(c.id, d.id))
    return state, (a, b, c, d)


def test_live_removal_dissolves_group_and_returns_survivors():
    state, (a, b, c, d) = _grouped_state()

    updated = state.without_participant(a.id, RemovalPolicy.LIVE)

    assert updated.groups == ()
    assert updated.available_ids == (b.id, c.id, d.id)


def test_snapshot_removal_keeps_group():
    state, (a, b, c, d) = _grouped_state()

    updated = state.without_participant(a.id, RemovalPolicy.SNAPSHOT)

    assert updated.groups == state.groups
    assert updated.available_ids == (c.id, d.id)
    assert a.id not in updated.participant_ids


def test_removing_pooled_participant_leaves_groups():
    state, (a, b, c, d) = _grouped_state()

    updated = state.without_participant(c.id)

    assert updated.groups == state.groups
    assert updated.available_ids == (d.id,)


def test_relay_state_removal_policies():
    a, b, c = _p("A", "Ann"), _p("B", "Ben"), _p("C", "Cid")
    state = RelayState(participants=(a, b, c), chain=(a.id, b.id))

    live = state.without_participant(a.id, RemovalPolicy.LIVE)
    snapshot = state.without_participant(a.id, RemovalPolicy.SNAPSHOT)

    assert live.chain == (b.id,)
    assert live.stale_ids == ()
    assert snapshot.chain == (a.id, b.id)
    assert snapshot.stale_ids == (a.id,)


def test_relay_state_round_trip():
    a, b = _p("A", "Ann"), _p("B", "Ben")
    state = RelayState(participants=(a, b), chain=(b.id,))

    assert RelayState.from_dict(state.to_dict()) == state
    assert state.remaining_participants == [a]
    assert not state.is_complete
