import pytest

from bracket.chips import DOUBLE_UP, WILDCARD, apply_chip, register_chip, toggle_pick
from bracket.errors import (
    ChipAlreadyUsedError,
    ChipNotAllowedError,
    ChipRegistrationError,
    InvalidChipTargetError,
    StaleTargetError,
    StoreError,
)
from bracket.stores import ChipUsage
from conftest import GROUP_PICKS, at

BEFORE = at("2026-02-05T10:00:00")


def test_toggle_pick_is_self_inverse(mini):
    fixture = mini.fixture(1)
    assert toggle_pick(fixture, "India") == "Pakistan"
    assert toggle_pick(fixture, toggle_pick(fixture, "India")) == "India"
    assert toggle_pick(fixture, None) == "Pakistan"


def test_wildcard_flips_pick(mini, store):
    store.set_picks("asha", "group-stage", GROUP_PICKS)
    outcome = apply_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store, store, activity=store)
    assert outcome.new_pick == "Pakistan"
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"
    assert store.get_chip_usage("asha", "group-stage") == ChipUsage(wildcard=1)
    assert store.events[-1].event_type == "CHIP_ACTIVATED"


def test_double_up_records_slot_only(mini, store):
    store.set_picks("asha", "group-stage", GROUP_PICKS)
    outcome = apply_chip(mini, "group-stage", "asha", DOUBLE_UP, 2, BEFORE, store, store)
    assert outcome.doubling
    assert outcome.new_pick is None
    assert store.get_picks("asha", "group-stage") == GROUP_PICKS
    assert store.get_chip_usage("asha", "group-stage").double_up == 2


def test_both_chips_in_one_phase(mini, store):
    apply_chip(mini, "group-stage", "asha", DOUBLE_UP, 2, BEFORE, store, store)
    apply_chip(mini, "group-stage", "asha", WILDCARD, 3, BEFORE, store, store)
    assert store.get_chip_usage("asha", "group-stage") == ChipUsage(double_up=2, wildcard=3)


def test_replayed_activation_does_not_flip_twice(mini, store):
    store.set_picks("asha", "group-stage", GROUP_PICKS)
    apply_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store, store)
    again = apply_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store, store)
    assert again.already_registered
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"


def test_chip_once_per_phase(mini, store):
    apply_chip(mini, "group-stage", "asha", DOUBLE_UP, 2, BEFORE, store, store)
    with pytest.raises(ChipAlreadyUsedError):
        apply_chip(mini, "group-stage", "asha", DOUBLE_UP, 3, BEFORE, store, store)
    # a new phase has its own chips
    apply_chip(mini, "super4", "asha", DOUBLE_UP, 5, BEFORE, store, store)


def test_started_match_is_stale(mini, store):
    with pytest.raises(StaleTargetError):
        apply_chip(mini, "group-stage", "asha", WILDCARD, 1, at("2026-02-07T09:00:00"), store, store)


def test_target_outside_phase(mini, store):
    with pytest.raises(InvalidChipTargetError):
        apply_chip(mini, "group-stage", "asha", WILDCARD, 5, BEFORE, store, store)
    with pytest.raises(InvalidChipTargetError):
        apply_chip(mini, "group-stage", "asha", WILDCARD, 99, BEFORE, store, store)


def test_double_up_not_allowed_in_final(mini, store):
    with pytest.raises(ChipNotAllowedError):
        apply_chip(mini, "finals", "asha", DOUBLE_UP, 7, BEFORE, store, store)


def test_unknown_chip(mini, store):
    with pytest.raises(ChipNotAllowedError):
        apply_chip(mini, "group-stage", "asha", "tripleCaptain", 1, BEFORE, store, store)


class BrokenChipStore:
    def __init__(self, store):
        self.store = store

    def get_chip_usage(self, user, phase_id):
        return self.store.get_chip_usage(user, phase_id)

    def set_chip_usage(self, *args, **kwargs):
        raise StoreError("chips table unavailable")


def test_wildcard_partial_failure_then_register(mini, store):
    store.set_picks("asha", "group-stage", GROUP_PICKS)
    with pytest.raises(ChipRegistrationError) as info:
        apply_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store, BrokenChipStore(store))
    assert not info.value.retryable
    assert info.value.pending_registration
    assert info.value.new_pick == "Pakistan"
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"
    assert store.get_chip_usage("asha", "group-stage").wildcard is None

    # finishing the job records the slot without flipping the pick back
    assert register_chip(mini, "group-stage", "asha", WILDCARD, info.value.match, BEFORE, store)
    assert store.get_chip_usage("asha", "group-stage").wildcard == 1
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"
    assert not register_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store)


def test_failed_registration_can_be_retried_without_touching_the_pick(mini, store):
    store.set_picks("asha", "group-stage", GROUP_PICKS)
    with pytest.raises(ChipRegistrationError) as info:
        apply_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store, BrokenChipStore(store))

    with pytest.raises(StoreError) as again:
        register_chip(mini, "group-stage", "asha", WILDCARD, info.value.match, BEFORE, BrokenChipStore(store))
    assert again.value.retryable
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"

    assert register_chip(mini, "group-stage", "asha", WILDCARD, info.value.match, BEFORE, store)
    # a replayed activation after registration is a no-op
    outcome = apply_chip(mini, "group-stage", "asha", WILDCARD, 1, BEFORE, store, store)
    assert outcome.already_registered
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"
    assert store.get_chip_usage("asha", "group-stage").wildcard == 1
