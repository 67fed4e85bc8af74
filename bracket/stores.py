# bracket/stores.py
"""
Storage contracts used by the engine, plus a dict-backed implementation.

The engine never knows how rows are laid out in the backing store; everything
is keyed by (user, phase) and match number. `db_pg.SqlStore` is the SQL
implementation of the same contracts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from bracket.tournament import TournamentConfig


class SubmissionStatus(str, Enum):
    NONE = "NONE"
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"


@dataclass(frozen=True)
class SubmissionRecord:
    status: SubmissionStatus = SubmissionStatus.NONE
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class ChipUsage:
    double_up: Optional[int] = None
    wildcard: Optional[int] = None

    def slot(self, chip: str) -> Optional[int]:
        return self.double_up if chip == "doubleUp" else self.wildcard


@dataclass(frozen=True)
class ActivityEvent:
    timestamp: datetime
    event_type: str
    user: str
    details: str = ""


class PickStore(Protocol):
    def get_picks(self, user: str, phase_id: str) -> Dict[int, str]: ...
    def set_picks(self, user: str, phase_id: str, picks: Mapping[int, str]) -> None: ...
    def get_all_picks(self, phase_id: str) -> Dict[str, Dict[int, str]]: ...


class ResultStore(Protocol):
    def get_results(self, phase_id: str) -> Dict[int, str]: ...
    def set_result(self, match: int, winner: str) -> None: ...


class ChipStore(Protocol):
    def get_chip_usage(self, user: str, phase_id: str) -> ChipUsage: ...
    def set_chip_usage(self, user: str, phase_id: str, double_up: Optional[int] = None,
                       wildcard: Optional[int] = None) -> None: ...
    def get_all_chip_usages(self, phase_id: str) -> Dict[str, ChipUsage]: ...


class SubmissionStore(Protocol):
    def get_status(self, user: str, phase_id: str) -> SubmissionRecord: ...
    def set_status(self, user: str, phase_id: str, status: SubmissionStatus,
                   timestamp: Optional[datetime]) -> None: ...
    def list_statuses(self, phase_id: str) -> Dict[str, SubmissionRecord]: ...


class BonusStore(Protocol):
    def get_answers(self, user: str) -> Dict[str, str]: ...
    def set_answers(self, user: str, answers: Mapping[str, str]) -> None: ...
    def get_all_answers(self) -> Dict[str, Dict[str, str]]: ...
    def get_actual_answers(self) -> Dict[str, List[str]]: ...
    def set_actual_answer(self, question_id: str, answers: Sequence[str]) -> None: ...


class ActivityLog(Protocol):
    def log_event(self, timestamp: datetime, event_type: str, user: str, details: str = "") -> None: ...


class FixtureStore(Protocol):
    def list_fixture_updates(self) -> Dict[int, Dict[str, Any]]: ...
    def update_fixture(self, match: int, **fields: Any) -> None: ...


class MemoryStore:
    """All store contracts over plain dicts. Last write wins, like the SQL store."""

    def __init__(self, config: TournamentConfig):
        self.config = config
        self.picks: Dict[tuple, Dict[int, str]] = {}
        self.results: Dict[int, str] = {}
        self.chips: Dict[tuple, ChipUsage] = {}
        self.statuses: Dict[tuple, SubmissionRecord] = {}
        self.answers: Dict[str, Dict[str, str]] = {}
        self.actuals: Dict[str, List[str]] = {}
        self.events: List[ActivityEvent] = []
        self.fixture_updates: Dict[int, Dict[str, Any]] = {}
        self.users: Dict[str, datetime] = {}

    # Picks
    def get_picks(self, user, phase_id):
        return dict(self.picks.get((user, phase_id), {}))

    def set_picks(self, user, phase_id, picks):
        current = self.picks.setdefault((user, phase_id), {})
        current.update({int(m): t for m, t in picks.items()})

    def get_all_picks(self, phase_id):
        return {u: dict(p) for (u, pid), p in self.picks.items() if pid == phase_id}

    # Results
    def get_results(self, phase_id):
        rng = self.config.phase(phase_id).match_range
        return {m: w for m, w in self.results.items() if m in rng}

    def set_result(self, match, winner):
        self.results[int(match)] = winner or ""

    # Chips
    def get_chip_usage(self, user, phase_id):
        return self.chips.get((user, phase_id), ChipUsage())

    def set_chip_usage(self, user, phase_id, double_up=None, wildcard=None):
        current = self.get_chip_usage(user, phase_id)
        self.chips[(user, phase_id)] = ChipUsage(
            double_up=double_up if double_up is not None else current.double_up,
            wildcard=wildcard if wildcard is not None else current.wildcard,
        )

    def get_all_chip_usages(self, phase_id):
        return {u: c for (u, pid), c in self.chips.items() if pid == phase_id}

    # Submissions
    def get_status(self, user, phase_id):
        return self.statuses.get((user, phase_id), SubmissionRecord())

    def set_status(self, user, phase_id, status, timestamp):
        self.statuses[(user, phase_id)] = SubmissionRecord(SubmissionStatus(status), timestamp)

    def list_statuses(self, phase_id):
        return {u: r for (u, pid), r in self.statuses.items() if pid == phase_id}

    # Bonus
    def get_answers(self, user):
        return dict(self.answers.get(user, {}))

    def set_answers(self, user, answers):
        self.answers.setdefault(user, {}).update(answers)

    def get_all_answers(self):
        return {u: dict(a) for u, a in self.answers.items()}

    def get_actual_answers(self):
        return {q: list(a) for q, a in self.actuals.items()}

    def set_actual_answer(self, question_id, answers):
        self.actuals[question_id] = [a for a in answers if a and a.strip()]

    # Activity
    def log_event(self, timestamp, event_type, user, details=""):
        self.events.append(ActivityEvent(timestamp, event_type, user, details))

    def recent_activity(self, limit=50):
        return sorted(self.events, key=lambda e: e.timestamp, reverse=True)[:limit]

    # Fixtures
    def list_fixture_updates(self):
        return {m: dict(f) for m, f in self.fixture_updates.items()}

    def update_fixture(self, match, **fields):
        self.fixture_updates.setdefault(int(match), {}).update(
            {k: v for k, v in fields.items() if v is not None}
        )

    # Users
    def upsert_user(self, name, now):
        self.users.setdefault(name.strip(), now)

    def list_users(self):
        return sorted(self.users)
