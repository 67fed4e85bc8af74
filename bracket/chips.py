# bracket/chips.py
"""
Double Up and Wildcard chips.

Each chip can be used once per user per phase, on a fixture of that phase
that has not started. Double Up only records its target; the scoring engine
doubles that match. Wildcard flips the stored pick to the other team and then
records its target.

Wildcard activation is two writes (pick, then chip slot). If the second write
fails, ChipRegistrationError says so. Callers finish with `register_chip`,
never by calling `apply_chip` again, which would flip the pick back.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bracket.errors import (
    ChipAlreadyUsedError,
    ChipNotAllowedError,
    ChipRegistrationError,
    ConfigError,
    InvalidChipTargetError,
    StaleTargetError,
    StoreError,
)
from bracket.phases import has_started
from bracket.submissions import log_activity
from bracket.tournament import Fixture, TournamentConfig

logger = logging.getLogger(__name__)

DOUBLE_UP = "doubleUp"
WILDCARD = "wildcard"
CHIP_TYPES = (DOUBLE_UP, WILDCARD)
CHIP_LABELS = {DOUBLE_UP: "Double Up", WILDCARD: "Wildcard"}


@dataclass(frozen=True)
class ChipOutcome:
    chip: str
    phase_id: str
    user: str
    match: int
    new_pick: Optional[str] = None
    already_registered: bool = False

    @property
    def doubling(self) -> bool:
        return self.chip == DOUBLE_UP


def toggle_pick(fixture: Fixture, current: Optional[str]) -> str:
    """The other team; team2 when there was no (valid) pick."""
    if current == fixture.team1:
        return fixture.team2
    if current == fixture.team2:
        return fixture.team1
    return fixture.team2


def _target_fixture(config: TournamentConfig, phase_id: str, chip: str, match: int, now: datetime) -> Fixture:
    if chip not in CHIP_TYPES:
        raise ChipNotAllowedError(f"Unknown chip: {chip}")
    if not config.allows_chip(phase_id, chip):
        raise ChipNotAllowedError(f"{CHIP_LABELS[chip]} is not available in {config.phase(phase_id).name}")
    try:
        fixture = config.fixture(match)
    except ConfigError as exc:
        raise InvalidChipTargetError(str(exc)) from exc
    if fixture.phase != phase_id:
        raise InvalidChipTargetError(f"Match {match} is not part of {config.phase(phase_id).name}")
    if has_started(config, fixture, now):
        raise StaleTargetError(f"Match {match} has already started")
    return fixture


def _slot_kwargs(chip: str, match: int) -> dict:
    return {"double_up": match} if chip == DOUBLE_UP else {"wildcard": match}


def register_chip(config: TournamentConfig, phase_id: str, user: str, chip: str, target_match: int,
                  now: datetime, chip_store) -> bool:
    """
    Record the chip slot only. Returns False when the slot already holds
    this match (nothing written), True when it was written now.
    """
    _target_fixture(config, phase_id, chip, target_match, now)
    current = chip_store.get_chip_usage(user, phase_id).slot(chip)
    if current == target_match:
        return False
    if current is not None:
        raise ChipAlreadyUsedError(f"{CHIP_LABELS[chip]} already used on match {current}")
    chip_store.set_chip_usage(user, phase_id, **_slot_kwargs(chip, target_match))
    return True


def apply_chip(config: TournamentConfig, phase_id: str, user: str, chip: str, target_match: int,
               now: datetime, pick_store, chip_store, activity=None) -> ChipOutcome:
    fixture = _target_fixture(config, phase_id, chip, target_match, now)

    current = chip_store.get_chip_usage(user, phase_id).slot(chip)
    if current == target_match:
        # Replayed activation: already recorded, never flip the pick twice.
        return ChipOutcome(chip, phase_id, user, target_match, already_registered=True)
    if current is not None:
        raise ChipAlreadyUsedError(f"{CHIP_LABELS[chip]} already used on match {current}")

    new_pick = None
    if chip == WILDCARD:
        old_pick = pick_store.get_picks(user, phase_id).get(target_match)
        new_pick = toggle_pick(fixture, old_pick)
        pick_store.set_picks(user, phase_id, {target_match: new_pick})
        try:
            chip_store.set_chip_usage(user, phase_id, wildcard=target_match)
        except StoreError as exc:
            logger.error("Wildcard pick for %s match %s written, chip slot not recorded", user, target_match)
            raise ChipRegistrationError(
                "Picks updated, but failed to record wildcard usage.", target_match, new_pick
            ) from exc
        details = f"Wildcard on match {target_match}: {old_pick or '-'} -> {new_pick}"
    else:
        chip_store.set_chip_usage(user, phase_id, double_up=target_match)
        details = f"Double Up on match {target_match}"

    if activity is not None:
        log_activity(activity, now, "CHIP_ACTIVATED", user, details)
    logger.info("%s: %s", user, details)
    return ChipOutcome(chip, phase_id, user, target_match, new_pick=new_pick)
