# bracket/tournament.py
"""
Tournament configuration model.

A TournamentConfig is built once from a plain dict (see tournaments/*.py) and
never mutated afterwards. Every resolver / scoring call receives it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bracket.errors import ClockError, ConfigError, InvalidPhaseError

FIXED = "fixed"
POOL = "pool"
SCORING_TYPES = (FIXED, POOL)

DRAW = "DRAW"
TBA = "TBA"

LATE_DAY_POLICIES = ("ceil_24h", "calendar")
POOL_FORFEIT_POLICIES = ("forfeit", "redistribute")

FIXTURE_DATE_FORMAT = "%d %B %Y %H:%M"
FIXTURE_FIELDS = ("date", "team1", "team2", "venue", "winner")


@dataclass(frozen=True)
class MatchRange:
    start: int
    end: int

    def __contains__(self, match: int) -> bool:
        return self.start <= match <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1

    def matches(self) -> range:
        return range(self.start, self.end + 1)


@dataclass(frozen=True)
class Phase:
    id: str
    name: str
    match_range: MatchRange
    deadline: str  # ISO 8601; naive values are in the tournament timezone
    scoring_type: str
    points_per_correct: Optional[float] = None
    pool_size: Optional[float] = None
    draw_points: Optional[float] = None


@dataclass(frozen=True)
class Fixture:
    match: int
    date: str  # e.g. "7 February"; the year comes from the tournament
    team1: str
    team2: str
    venue: str = ""
    phase: str = ""
    ai_prediction: Optional[str] = None
    winner: str = ""  # "" = not decided yet, otherwise team1 / team2 / DRAW

    @property
    def teams(self) -> Tuple[str, str]:
        return (self.team1, self.team2)

    @property
    def is_decided(self) -> bool:
        return bool(self.winner)

    @property
    def label(self) -> str:
        return f"Match {self.match}: {self.team1} vs {self.team2}"


@dataclass(frozen=True)
class BonusQuestion:
    id: str
    question: str
    ai_prediction: Optional[str] = None


@dataclass(frozen=True)
class TeamStyle:
    primary: str
    secondary: str
    flag: Optional[str] = None


@dataclass(frozen=True)
class ScoringRules:
    late_penalty_per_day: float = 0
    bonus_points_cap: Optional[float] = None  # None = uncapped
    bonus_points_per_correct: float = 0
    # Phase whose page carries the bonus questions and whose final submission
    # time breaks leaderboard ties.
    bonus_phase: str = "group-stage"
    tiebreak_phase: str = "group-stage"
    late_day_policy: str = "ceil_24h"
    pool_forfeit_policy: str = "forfeit"


@dataclass(frozen=True)
class FeatureFlags:
    chips_enabled: bool = True
    bonus_questions_enabled: bool = True
    ai_predictions_enabled: bool = False
    fetch_fixtures_from_store: bool = False
    double_up_phases: Tuple[str, ...] = ()
    wildcard_phases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BonusMakeup:
    deadline: str
    question_ids: Tuple[str, ...]


@dataclass(frozen=True)
class TournamentConfig:
    id: str
    name: str
    year: int
    timezone: str
    fixture_start_time: str
    phases: Tuple[Phase, ...]
    fixtures: Tuple[Fixture, ...]
    bonus_questions: Tuple[BonusQuestion, ...] = ()
    teams: Mapping[str, TeamStyle] = field(default_factory=dict)
    scoring: ScoringRules = field(default_factory=ScoringRules)
    features: FeatureFlags = field(default_factory=FeatureFlags)
    bonus_makeup: Optional[BonusMakeup] = None

    # ----------------------------
    # Time helpers
    # ----------------------------

    @property
    def tzinfo(self) -> tzinfo:
        return load_timezone(self.timezone)

    def localize(self, value: str) -> datetime:
        """Parse an ISO string; naive values are taken in the tournament timezone."""
        try:
            dt = datetime.fromisoformat(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid ISO datetime: {value!r}") from exc
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.tzinfo)
        return dt.astimezone(self.tzinfo)

    def fixture_start(self, fixture: Fixture) -> datetime:
        raw = f"{fixture.date} {self.year} {self.fixture_start_time}"
        try:
            dt = datetime.strptime(raw, FIXTURE_DATE_FORMAT)
        except ValueError as exc:
            raise ConfigError(f"Match {fixture.match}: cannot parse start time from {raw!r}") from exc
        return dt.replace(tzinfo=self.tzinfo)

    # ----------------------------
    # Lookups
    # ----------------------------

    @property
    def phase_ids(self) -> List[str]:
        return [p.id for p in self.phases]

    def phase(self, phase_id: str) -> Phase:
        for p in self.phases:
            if p.id == phase_id:
                return p
        raise ConfigError(f"Phase not found: {phase_id}")

    def phase_for_match(self, match: int) -> Phase:
        for p in self.phases:
            if match in p.match_range:
                return p
        raise ConfigError(f"Match {match} does not belong to any phase")

    def fixture(self, match: int) -> Fixture:
        for f in self.fixtures:
            if f.match == match:
                return f
        raise ConfigError(f"Fixture not found: match {match}")

    def fixtures_for_phase(self, phase_id: str) -> List[Fixture]:
        self.phase(phase_id)
        return [f for f in self.fixtures if f.phase == phase_id]

    def matches_in_phase(self, phase_id: str) -> int:
        count = len(self.fixtures_for_phase(phase_id))
        return count or len(self.phase(phase_id).match_range)

    def team_style(self, team: str) -> Optional[TeamStyle]:
        return self.teams.get(team)

    def bonus_question(self, question_id: str) -> BonusQuestion:
        for q in self.bonus_questions:
            if q.id == question_id:
                return q
        raise ConfigError(f"Bonus question not found: {question_id}")

    def allows_chip(self, phase_id: str, chip: str) -> bool:
        self.phase(phase_id)
        if not self.features.chips_enabled:
            return False
        if chip == "doubleUp":
            return phase_id in self.features.double_up_phases
        if chip == "wildcard":
            return phase_id in self.features.wildcard_phases
        return False

    # ----------------------------
    # Copies
    # ----------------------------

    def with_fixture_updates(self, updates: Mapping[int, Mapping[str, Any]]) -> "TournamentConfig":
        """
        Return a copy with admin-maintained fixture fields applied
        (knockout teams once known, venue changes, results).
        """
        if not updates:
            return self
        updates = {int(m): fields for m, fields in updates.items()}
        known = {f.match for f in self.fixtures}
        for match in updates:
            if match not in known:
                raise ConfigError(f"Fixture not found: match {match}")

        fixtures = []
        for f in self.fixtures:
            changes = {
                k: v for k, v in (updates.get(f.match) or {}).items()
                if k in FIXTURE_FIELDS and v is not None
            }
            if changes:
                f = replace(f, **changes)
                self.fixture_start(f)
            fixtures.append(f)
        return replace(self, fixtures=tuple(fixtures))

    def with_results(self, results: Mapping[int, str]) -> "TournamentConfig":
        return self.with_fixture_updates({m: {"winner": w or ""} for m, w in results.items()})

    # ----------------------------
    # Builder
    # ----------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TournamentConfig":
        try:
            phases = tuple(_build_phase(p) for p in data["phases"])
            fixtures = tuple(_build_fixture(f) for f in data.get("fixtures", []))
            questions = tuple(
                BonusQuestion(id=q["id"], question=q["question"], ai_prediction=q.get("ai_prediction"))
                for q in data.get("bonus_questions", [])
            )
            teams = {name: TeamStyle(**style) for name, style in data.get("teams", {}).items()}
            scoring = ScoringRules(**data.get("scoring", {}))
            feature_data = dict(data.get("features", {}))
            all_ids = tuple(p.id for p in phases)
            feature_data["double_up_phases"] = tuple(feature_data.get("double_up_phases", all_ids))
            feature_data["wildcard_phases"] = tuple(feature_data.get("wildcard_phases", all_ids))
            features = FeatureFlags(**feature_data)
            makeup = None
            if data.get("bonus_makeup"):
                makeup = BonusMakeup(
                    deadline=data["bonus_makeup"]["deadline"],
                    question_ids=tuple(data["bonus_makeup"]["question_ids"]),
                )
            config = cls(
                id=data["id"],
                name=data["name"],
                year=int(data["year"]),
                timezone=data["timezone"],
                fixture_start_time=data["fixture_start_time"],
                phases=phases,
                fixtures=fixtures,
                bonus_questions=questions,
                teams=teams,
                scoring=scoring,
                features=features,
                bonus_makeup=makeup,
            )
        except KeyError as exc:
            raise ConfigError(f"Missing tournament config key: {exc.args[0]}") from exc
        except TypeError as exc:
            raise ConfigError(f"Malformed tournament config: {exc}") from exc

        config.validate()
        return config

    def validate(self) -> None:
        load_timezone(self.timezone)

        if not self.phases:
            raise ConfigError("A tournament needs at least one phase")

        ids = [p.id for p in self.phases]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ConfigError(f"Duplicate phase ids: {dupes}")

        previous = None
        for p in self.phases:
            _validate_phase_scoring(p)
            if p.match_range.start > p.match_range.end:
                raise ConfigError(f"Phase {p.id}: empty match range")
            if previous is not None:
                if p.match_range.start != previous.match_range.end + 1:
                    raise ConfigError(
                        f"Phase {p.id}: match range must start right after {previous.id} "
                        f"(expected {previous.match_range.end + 1}, got {p.match_range.start})"
                    )
                if self.localize(p.deadline) < self.localize(previous.deadline):
                    raise ConfigError(f"Phase {p.id}: deadline is earlier than {previous.id}")
            else:
                self.localize(p.deadline)
            previous = p

        matches = [f.match for f in self.fixtures]
        dupes = sorted({m for m in matches if matches.count(m) > 1})
        if dupes:
            raise ConfigError(f"Duplicate fixture match numbers: {dupes}")

        for f in self.fixtures:
            phase = self.phase(f.phase)
            if f.match not in phase.match_range:
                raise ConfigError(
                    f"Match {f.match} is outside the range of phase {phase.id} "
                    f"({phase.match_range.start}-{phase.match_range.end})"
                )
            self.fixture_start(f)

        qids = [q.id for q in self.bonus_questions]
        if len(set(qids)) != len(qids):
            raise ConfigError("Duplicate bonus question ids")

        for pid in (self.scoring.bonus_phase, self.scoring.tiebreak_phase):
            if pid not in ids:
                raise ConfigError(f"Scoring rules reference unknown phase: {pid}")
        for pid in self.features.double_up_phases + self.features.wildcard_phases:
            if pid not in ids:
                raise ConfigError(f"Feature flags reference unknown phase: {pid}")
        if self.scoring.late_day_policy not in LATE_DAY_POLICIES:
            raise ConfigError(f"Unknown late day policy: {self.scoring.late_day_policy}")
        if self.scoring.pool_forfeit_policy not in POOL_FORFEIT_POLICIES:
            raise ConfigError(f"Unknown pool forfeit policy: {self.scoring.pool_forfeit_policy}")

        if self.bonus_makeup is not None:
            self.localize(self.bonus_makeup.deadline)
            for qid in self.bonus_makeup.question_ids:
                self.bonus_question(qid)


def load_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise ClockError(f"Unknown timezone: {name!r}") from exc


def _build_phase(data: Mapping[str, Any]) -> Phase:
    rng = data["match_range"]
    return Phase(
        id=data["id"],
        name=data["name"],
        match_range=MatchRange(start=int(rng["start"]), end=int(rng["end"])),
        deadline=data["deadline"],
        scoring_type=data["scoring_type"],
        points_per_correct=data.get("points_per_correct"),
        pool_size=data.get("pool_size"),
        draw_points=data.get("draw_points"),
    )


def _build_fixture(data: Mapping[str, Any]) -> Fixture:
    return Fixture(
        match=int(data["match"]),
        date=data["date"],
        team1=data["team1"],
        team2=data["team2"],
        venue=data.get("venue", ""),
        phase=data["phase"],
        ai_prediction=data.get("ai_prediction"),
        winner=data.get("winner", "") or "",
    )


def _validate_phase_scoring(phase: Phase) -> None:
    if phase.scoring_type not in SCORING_TYPES:
        raise InvalidPhaseError(f"Phase {phase.id}: unknown scoring type {phase.scoring_type!r}")
    if phase.scoring_type == FIXED:
        if phase.points_per_correct is None:
            raise ConfigError(f"Phase {phase.id}: fixed scoring needs points_per_correct")
        if phase.pool_size is not None:
            raise ConfigError(f"Phase {phase.id}: pool_size is only valid for pool scoring")
    if phase.scoring_type == POOL:
        if phase.pool_size is None:
            raise ConfigError(f"Phase {phase.id}: pool scoring needs pool_size")
        if phase.points_per_correct is not None:
            raise ConfigError(f"Phase {phase.id}: points_per_correct is only valid for fixed scoring")


def team_names(fixtures: Iterable[Fixture]) -> List[str]:
    """Unique real team names across fixtures (TBA placeholders dropped)."""
    names = set()
    for f in fixtures:
        names.update(t for t in f.teams if t and t != TBA)
    return sorted(names)


def as_dict(picks: Mapping[Any, str]) -> Dict[int, str]:
    """Normalise a picks mapping to {int match: team}, dropping blanks."""
    return {int(m): t for m, t in picks.items() if t}
