import pytest

from partyroulette.config import AppConfig
from partyroulette.constants import (
    CSV_ERROR_NO_ROWS,
    CSV_ERROR_UNREADABLE,
    MODE_PAIRING,
    MODE_RELAY,
    STATUS_NEW_PAIR,
    STATUS_NEW_TRIO,
    STATUS_NOT_ENOUGH,
    STATUS_PAIR_RELEASED,
    STATUS_RELAY_CLEARED,
    STATUS_RELAY_COMPLETE,
    STATUS_RELAY_INTERRUPTED,
    STATUS_RESET,
    VIEW_ROULETTE,
    VIEW_SETUP,
)
from partyroulette.controllers import (
    PairingController,
    RelayController,
    create_controller,
)
from partyroulette.engine import (
    ChainClosure,
    FixedSequenceRandom,
    RelayPolicy,
    RelayStatus,
)
from partyroulette.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantDataException,
    InvalidRuleException,
    ParticipantNotFoundException,
    RuleNotFoundException,
)
from partyroulette.io import MemoryStateStore
from partyroulette.models import RemovalPolicy


def _pairing(values=(), **kwargs):
    return PairingController(
        MemoryStateStore(MODE_PAIRING), rng=FixedSequenceRandom(values), **kwargs
    )


def _relay(values=(), **kwargs):
    return RelayController(
        MemoryStateStore(MODE_RELAY), rng=FixedSequenceRandom(values), **kwargs
    )


def _seed(controller, *entries):
    return [controller.add_participant(attribute, name) for attribute, name in entries]


# ---- roster and rules ------------------------------------------------------


def test_add_participant_trims_and_saves():
    controller = _pairing()

    alice = controller.add_participant("  Sales ", " Alice ")

    assert (alice.attribute, alice.name) == ("Sales", "Alice")
    assert controller.available_participants == [alice]
    assert controller.store.load()["participants"][0]["name"] == "Alice"


@pytest.mark.parametrize("attribute, name", [("", "Alice"), ("Sales", "   "), (None, "Bob")])
def test_add_participant_rejects_blank_fields(attribute, name):
    controller = _pairing()

    with pytest.raises(InvalidParticipantDataException):
        controller.add_participant(attribute, name)
    assert controller.participant_count == 0


def test_update_participant_keeps_identity():
    controller = _pairing()
    (alice,) = _seed(controller, ("Sales", "Alice"))

    updated = controller.update_participant(alice.id, "name", "Alicia")

    assert updated.id == alice.id
    assert controller.get_participant(alice.id).name == "Alicia"


def test_update_participant_trims_and_rejects_blanks():
    controller = _pairing()
    (alice,) = _seed(controller, ("Sales", "Alice"))

    updated = controller.update_participant(alice.id, "attribute", "  Design ")
    assert updated.attribute == "Design"

    with pytest.raises(InvalidParticipantDataException):
        controller.update_participant(alice.id, "name", "   ")
    assert controller.get_participant(alice.id).name == "Alice"


def test_update_rejects_unknown_participant_and_field():
    controller = _pairing()
    (alice,) = _seed(controller, ("Sales", "Alice"))

    with pytest.raises(ParticipantNotFoundException):
        controller.update_participant("missing", "name", "Bob")
    with pytest.raises(InvalidParticipantDataException):
        controller.update_participant(alice.id, "id", "other")


def test_remove_unknown_participant_raises():
    with pytest.raises(ParticipantNotFoundException):
        _pairing().remove_participant("missing")


def test_csv_import_appends_participants():
    controller = _pairing()
    _seed(controller, ("Sales", "Alice"))

    count = controller.import_csv_text("attribute,name\nDesign,Bob\nOps,Cara\n")

    assert count == 2
    assert controller.csv_error is None
    assert [p.name for p in controller.participants] == ["Alice", "Bob", "Cara"]


def test_csv_import_without_rows_sets_error():
    controller = _pairing()

    assert controller.import_csv_text("attribute,name\nonly-one-cell\n") == 0
    assert controller.csv_error == CSV_ERROR_NO_ROWS
    assert controller.participant_count == 0


def test_unreadable_csv_file_sets_error(tmp_path):
    controller = _pairing()

    assert controller.import_csv_file(tmp_path / "missing.csv") == 0
    assert controller.csv_error == CSV_ERROR_UNREADABLE


def test_preference_rules():
    controller = _pairing()

    rule = controller.add_preference(" Sales ", "Design")
    assert rule.source == "Sales"
    assert controller.rules.preferred_combos == (rule,)

    controller.remove_preference(rule.id)
    assert controller.rules.preferred_combos == ()

    with pytest.raises(RuleNotFoundException):
        controller.remove_preference(rule.id)
    with pytest.raises(InvalidRuleException):
        controller.add_preference("Sales", "")


@pytest.mark.parametrize("value, expected", [(150, 100), (-5, 0), ("42.6", 43), ("abc", 0)])
def test_hit_rate_is_clamped(value, expected):
    assert _pairing().set_hit_rate(value) == expected


def test_toggle_avoid_same_attribute():
    controller = _pairing()
    assert controller.rules.avoid_same_attribute is True
    assert controller.toggle_avoid_same_attribute() is False


def test_roulette_view_needs_two_participants():
    controller = _pairing()
    _seed(controller, ("Sales", "Alice"))

    assert controller.go_to_roulette() is False
    assert controller.view == VIEW_SETUP

    _seed(controller, ("Design", "Bob"))
    assert controller.go_to_roulette() is True
    assert controller.view == VIEW_ROULETTE

    controller.go_to_setup()
    assert controller.view == VIEW_SETUP


# ---- pairing ---------------------------------------------------------------


def test_pairing_spins_pairs_then_runs_out():
    controller = _pairing([0.99] * 4)
    alice, bob, cara, dan = _seed(
        controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan")
    )

    first = controller.spin()
    assert first.member_ids == (alice.id, bob.id)
    assert controller.status_text == STATUS_NEW_PAIR
    assert controller.highlighted_group_id == first.id

    second = controller.spin()
    assert second.member_ids == (cara.id, dan.id)

    assert controller.spin() is None
    assert controller.status_text == STATUS_NOT_ENOUGH
    assert not controller.can_spin
    assert len(controller.groups) == 2


def test_pairing_spin_forms_trio_from_last_three():
    controller = _pairing([0.99, 0.99])
    _seed(controller, ("A", "Alice"), ("A", "Bob"), ("B", "Cara"))

    group = controller.spin()

    assert group.is_trio
    assert controller.status_text == STATUS_NEW_TRIO
    assert controller.available_participants == []


def test_release_returns_group_to_pool():
    controller = _pairing([0.99] * 3)
    participants = _seed(
        controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan")
    )
    group = controller.spin()

    assert controller.release("missing") is False
    assert controller.release(group.id) is True
    assert controller.status_text == STATUS_PAIR_RELEASED
    assert controller.highlighted_group_id is None
    assert controller.groups == []
    assert controller.available_participants == participants


def test_reroll_latest_without_groups():
    controller = _pairing()
    _seed(controller, ("A", "Alice"), ("B", "Bob"))
    assert controller.reroll_latest() is None


def test_reroll_latest_replaces_group():
    controller = _pairing([0.99] * 3 + [0.0, 0.99, 0.99])
    _seed(controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan"))
    first = controller.spin()

    second = controller.reroll_latest()

    assert controller.groups == [second]
    assert second.id != first.id
    assert controller.highlighted_group_id == second.id


def test_live_removal_dissolves_group():
    controller = _pairing([0.99] * 3)
    alice, bob, cara, dan = _seed(
        controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan")
    )
    controller.spin()

    controller.remove_participant(alice.id)

    assert controller.groups == []
    assert controller.available_participants == [bob, cara, dan]


def test_snapshot_removal_keeps_group():
    controller = _pairing([0.99] * 3, removal_policy=RemovalPolicy.SNAPSHOT)
    alice, bob, cara, dan = _seed(
        controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan")
    )
    group = controller.spin()

    controller.remove_participant(alice.id)

    assert controller.groups == [group]
    assert controller.available_participants == [cara, dan]


# ---- relay -----------------------------------------------------------------


def test_relay_spins_until_complete():
    controller = _relay([0.0, 0.0, 0.0])
    alice, bob, cara = _seed(controller, ("A", "Alice"), ("B", "Bob"), ("C", "Cara"))

    assert controller.spin().status is RelayStatus.STARTED
    assert controller.status_text.startswith("Alice receives the first gift")

    assert controller.spin().status is RelayStatus.EXTENDED
    assert controller.status_text == "Bob hands a gift to Alice! 1 left."

    assert controller.spin().status is RelayStatus.COMPLETED
    assert controller.is_complete
    assert [p.name for p in controller.chain_participants] == ["Alice", "Bob", "Cara"]

    outcome = controller.spin()
    assert outcome.status is RelayStatus.ALREADY_COMPLETE
    assert controller.status_text == STATUS_RELAY_COMPLETE
    assert controller.handoffs() == [(bob, alice), (cara, bob)]


def test_relay_with_closed_loop_policy():
    controller = _relay(
        [0.0, 0.0, 0.0], relay_policy=RelayPolicy(closure=ChainClosure.CLOSED_LOOP)
    )
    alice, bob, cara = _seed(controller, ("A", "Alice"), ("B", "Bob"), ("C", "Cara"))
    for _ in range(3):
        controller.spin()

    assert controller.handoffs()[-1] == (alice, cara)


def test_relay_single_participant_is_insufficient():
    controller = _relay()
    _seed(controller, ("A", "Alice"))

    assert controller.spin().status is RelayStatus.INSUFFICIENT
    assert controller.state.chain == ()


def test_relay_reroll_last():
    controller = _relay([0.0, 0.0, 0.99])
    alice, bob, cara = _seed(controller, ("A", "Alice"), ("B", "Bob"), ("C", "Cara"))
    assert controller.reroll_last() is None

    controller.spin()
    controller.spin()
    outcome = controller.reroll_last()

    assert outcome.giver is cara
    assert controller.state.chain == (alice.id, cara.id)


def test_relay_snapshot_removal_interrupts():
    controller = _relay([0.0, 0.0], removal_policy=RemovalPolicy.SNAPSHOT)
    alice, bob, cara = _seed(controller, ("A", "Alice"), ("B", "Bob"), ("C", "Cara"))
    controller.spin()
    controller.spin()

    controller.remove_participant(bob.id)

    assert controller.is_interrupted
    assert controller.spin().status is RelayStatus.INTERRUPTED
    assert controller.status_text == STATUS_RELAY_INTERRUPTED
    assert controller.reroll_last() is None

    controller.reset_relay()
    assert controller.state.chain == ()
    assert controller.status_text == STATUS_RELAY_CLEARED
    assert controller.participant_count == 2


def test_relay_live_removal_drops_chain_entry():
    controller = _relay([0.0, 0.0])
    alice, bob, cara = _seed(controller, ("A", "Alice"), ("B", "Bob"), ("C", "Cara"))
    controller.spin()
    controller.spin()

    controller.remove_participant(alice.id)

    assert controller.state.chain == (bob.id,)
    assert not controller.is_interrupted


# ---- persistence -----------------------------------------------------------


def test_pairing_session_survives_reload():
    store = MemoryStateStore(MODE_PAIRING)
    controller = PairingController(store, rng=FixedSequenceRandom([0.99] * 4))
    _seed(controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan"))
    controller.add_preference("A", "B")
    controller.set_hit_rate(40)
    controller.go_to_roulette()
    controller.toggle_avoid_same_attribute()
    controller.set_hit_rate(0)
    controller.spin()

    reloaded = PairingController(store)

    assert reloaded.load() is True
    assert reloaded.state == controller.state
    assert reloaded.rules == controller.rules
    assert reloaded.view == VIEW_ROULETTE
    assert reloaded.status_text == STATUS_NEW_PAIR


def test_relay_payload_uses_gift_keys():
    controller = _relay([0.0])
    _seed(controller, ("A", "Alice"), ("B", "Bob"))
    controller.spin()

    payload = controller.store.load()

    assert payload["giftChainIds"] == [controller.participants[0].id]
    assert payload["giftStatusText"] == controller.status_text
    assert "statusText" not in payload


def test_malformed_payload_is_ignored():
    controller = _pairing()
    (alice,) = _seed(controller, ("A", "Alice"))

    assert controller.restore({"participants": [{"name": "No attribute"}]}) is False
    assert controller.participants == [alice]


def test_missing_payload_loads_nothing():
    assert _pairing().load() is False


def test_reset_clears_session_and_store():
    controller = _pairing([0.99] * 3)
    _seed(controller, ("A", "Alice"), ("B", "Bob"), ("A", "Cara"), ("B", "Dan"))
    controller.add_preference("A", "B")
    controller.spin()

    controller.reset()

    assert controller.participant_count == 0
    assert controller.groups == []
    assert controller.rules.preferred_combos == ()
    assert controller.highlighted_group_id is None
    assert controller.status_text == STATUS_RESET
    assert controller.store.load() is None


# ---- factory ---------------------------------------------------------------


def test_create_controller(tmp_path):
    config = AppConfig(data_dir=tmp_path, seed=7)

    pairing = create_controller(MODE_PAIRING, config)
    relay = create_controller(MODE_RELAY, config)

    assert isinstance(pairing, PairingController)
    assert isinstance(relay, RelayController)
    assert pairing.store.path.parent == tmp_path
    assert relay.relay_policy == config.relay_policy


def test_create_controller_rejects_unknown_mode(tmp_path):
    with pytest.raises(InvalidConfigurationException):
        create_controller("bingo", AppConfig(data_dir=tmp_path))
