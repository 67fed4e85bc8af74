# bracket/phases.py
"""Which phase is open right now, and which deadlines / matches have passed."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from bracket.errors import ClockError
from bracket.tournament import Fixture, Phase, TournamentConfig


def to_local(config: TournamentConfig, now: datetime) -> datetime:
    """Convert an aware instant into the tournament timezone."""
    if not isinstance(now, datetime):
        raise ClockError(f"Expected a datetime, got {type(now).__name__}")
    if now.tzinfo is None or now.tzinfo.utcoffset(now) is None:
        raise ClockError("`now` must be timezone-aware")
    try:
        return now.astimezone(config.tzinfo)
    except (OverflowError, ValueError) as exc:
        raise ClockError(f"Cannot convert {now!r} to {config.timezone}") from exc


def deadline_for(config: TournamentConfig, phase_id: str) -> datetime:
    return config.localize(config.phase(phase_id).deadline)


def all_deadlines(config: TournamentConfig) -> Dict[str, datetime]:
    return {p.id: config.localize(p.deadline) for p in config.phases}


def fixture_start(config: TournamentConfig, fixture: Fixture) -> datetime:
    return config.fixture_start(fixture)


def has_started(config: TournamentConfig, fixture: Fixture, now: datetime) -> bool:
    return to_local(config, now) >= config.fixture_start(fixture)


def open_fixtures(config: TournamentConfig, phase_id: str, now: datetime) -> List[Fixture]:
    """Fixtures of the phase that have not started yet (still open for picks and chips)."""
    return [f for f in config.fixtures_for_phase(phase_id) if not has_started(config, f, now)]


@dataclass(frozen=True)
class PhaseResolution:
    config: TournamentConfig
    now: datetime
    active_phase: Optional[Phase]

    @property
    def current_phase_id(self) -> Optional[str]:
        return self.active_phase.id if self.active_phase else None

    @property
    def tournament_closed(self) -> bool:
        return self.active_phase is None

    def is_past_deadline(self, phase_id: str) -> bool:
        return self.now > deadline_for(self.config, phase_id)

    def is_open(self, phase_id: str) -> bool:
        return not self.is_past_deadline(phase_id)

    def time_remaining(self, phase_id: str) -> timedelta:
        remaining = deadline_for(self.config, phase_id) - self.now
        return max(remaining, timedelta(0))


def resolve_phase(config: TournamentConfig, now: datetime) -> PhaseResolution:
    """
    The active phase is the first phase, in config order, whose deadline is
    still ahead of `now`. When every deadline has passed there is no active
    phase, but lateness can still be queried for any phase.
    """
    local_now = to_local(config, now)
    active = None
    for phase in config.phases:
        if local_now < config.localize(phase.deadline):
            active = phase
            break
    return PhaseResolution(config=config, now=local_now, active_phase=active)


def format_countdown(remaining: timedelta) -> str:
    total = max(int(remaining.total_seconds()), 0)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    if days:
        return f"{days}d {hours:02d}h {minutes:02d}m"
    return f"{hours:02d}h {minutes:02d}m {seconds:02d}s"
