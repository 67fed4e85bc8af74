# bracket/scoring.py
"""
Per-phase scoring.

Everything here is a pure function of (config, picks, results, chips,
submission times): no store access, safe to recompute at any time.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from bracket.errors import InvalidPhaseError
from bracket.phases import deadline_for, to_local
from bracket.stores import ChipUsage
from bracket.tournament import DRAW, FIXED, POOL, Phase, TournamentConfig, as_dict


@dataclass
class PhaseScore:
    user: str
    phase_id: str
    match_points: Dict[int, float] = field(default_factory=dict)
    correct: List[int] = field(default_factory=list)
    late_excluded: List[int] = field(default_factory=list)
    double_up_match: Optional[int] = None
    double_up_points: float = 0.0
    submitted_at: Optional[datetime] = None
    days_late: int = 0
    late_penalty: float = 0.0

    @property
    def points(self) -> float:
        """Match points including Double Up, before the late penalty."""
        return float(sum(self.match_points.values()))

    @property
    def net_points(self) -> float:
        return self.points - self.late_penalty


@dataclass
class BonusScore:
    user: str
    correct: List[str] = field(default_factory=list)
    raw_points: float = 0.0
    points: float = 0.0


def is_draw(winner: Optional[str]) -> bool:
    return bool(winner) and str(winner).strip().upper() == DRAW


# ----------------------------
# Days-late policies
# ----------------------------

def days_late_ceil_24h(deadline: datetime, submitted_at: datetime) -> int:
    """Every started 24-hour block after the deadline counts as a day."""
    # Elapsed time, not wall-clock difference.
    elapsed = submitted_at.astimezone(timezone.utc) - deadline.astimezone(timezone.utc)
    if elapsed <= timedelta(0):
        return 0
    return math.ceil(elapsed / timedelta(days=1))


def days_late_calendar(deadline: datetime, submitted_at: datetime) -> int:
    """Every calendar day (deadline's timezone) touched after the deadline counts as a day."""
    if submitted_at <= deadline:
        return 0
    return (submitted_at.date() - deadline.date()).days + 1


DAYS_LATE_POLICIES: Dict[str, Callable[[datetime, datetime], int]] = {
    "ceil_24h": days_late_ceil_24h,
    "calendar": days_late_calendar,
}


def days_late(config: TournamentConfig, phase_id: str, submitted_at: datetime) -> int:
    deadline = deadline_for(config, phase_id)
    policy = DAYS_LATE_POLICIES[config.scoring.late_day_policy]
    return policy(deadline, to_local(config, submitted_at))


# ----------------------------
# Match points
# ----------------------------

def _fixed_points(phase: Phase, decided: Mapping[int, str],
                  picks: Mapping[str, Mapping[int, str]]) -> Dict[str, Dict[int, float]]:
    out = {}
    for user, user_picks in picks.items():
        pts = {}
        for match, winner in decided.items():
            if match not in user_picks:
                continue
            if is_draw(winner):
                pts[match] = float(phase.draw_points or 0)
            elif user_picks[match] == winner:
                pts[match] = float(phase.points_per_correct)
            else:
                pts[match] = 0.0
        out[user] = pts
    return out


def _pool_points(config: TournamentConfig, phase: Phase, decided: Mapping[int, str],
                 picks: Mapping[str, Mapping[int, str]]) -> Dict[str, Dict[int, float]]:
    share = float(phase.pool_size) / config.matches_in_phase(phase.id)
    flat_draw = phase.draw_points is not None

    correct_by_match = {}
    for match, winner in decided.items():
        if is_draw(winner) and flat_draw:
            continue
        correct_by_match[match] = [u for u, p in picks.items() if p.get(match) == winner]

    budget = {m: share for m in correct_by_match}
    forfeited = [m for m, users in correct_by_match.items() if not users]
    if forfeited and config.scoring.pool_forfeit_policy == "redistribute":
        receivers = [m for m, users in correct_by_match.items() if users]
        if receivers:
            extra = share * len(forfeited) / len(receivers)
            for m in receivers:
                budget[m] += extra

    out = {}
    for user, user_picks in picks.items():
        pts = {}
        for match, winner in decided.items():
            if match not in user_picks:
                continue
            if match not in correct_by_match:
                pts[match] = float(phase.draw_points)
            elif user in correct_by_match[match]:
                pts[match] = budget[match] / len(correct_by_match[match])
            else:
                pts[match] = 0.0
        out[user] = pts
    return out


def pool_share(config: TournamentConfig, phase_id: str) -> float:
    phase = config.phase(phase_id)
    return float(phase.pool_size or 0) / config.matches_in_phase(phase_id)


def score_phase(config: TournamentConfig, phase_id: str,
                picks: Mapping[str, Mapping[int, str]],
                results: Mapping[int, str],
                chip_usages: Optional[Mapping[str, ChipUsage]] = None,
                submitted_at: Optional[Mapping[str, Optional[datetime]]] = None) -> Dict[str, PhaseScore]:
    """
    Score every user in `picks` for one phase.

    Matches without a decided winner are left out. Picks on matches that had
    already started when a late submission came in earn nothing and do not
    count as correct picks for pool splits. Double Up doubles whatever the
    target match earned.
    """
    phase = config.phase(phase_id)
    if phase.scoring_type not in (FIXED, POOL):
        raise InvalidPhaseError(f"Phase {phase_id}: unknown scoring type {phase.scoring_type!r}")

    chip_usages = chip_usages or {}
    submitted_at = submitted_at or {}
    deadline = deadline_for(config, phase_id)
    fixtures = {f.match: f for f in config.fixtures_for_phase(phase_id)}
    decided = {m: results[m] for m in fixtures if results.get(m)}

    scores: Dict[str, PhaseScore] = {}
    eligible: Dict[str, Dict[int, str]] = {}
    for user in sorted(picks):
        user_picks = {m: t for m, t in as_dict(picks[user]).items() if m in fixtures}
        score = PhaseScore(user=user, phase_id=phase_id)

        ts = submitted_at.get(user)
        if ts is not None:
            ts = to_local(config, ts)
            score.submitted_at = ts
            if ts > deadline:
                score.days_late = days_late(config, phase_id, ts)
                score.late_penalty = score.days_late * float(config.scoring.late_penalty_per_day)
                started = {m for m, f in fixtures.items() if config.fixture_start(f) <= ts}
                score.late_excluded = sorted(m for m in started if m in user_picks)
                user_picks = {m: t for m, t in user_picks.items() if m not in started}

        scores[user] = score
        eligible[user] = user_picks

    if phase.scoring_type == FIXED:
        points = _fixed_points(phase, decided, eligible)
    else:
        points = _pool_points(config, phase, decided, eligible)

    double_up_allowed = config.allows_chip(phase_id, "doubleUp")
    for user, score in scores.items():
        pts = points[user]
        score.correct = sorted(
            m for m in pts if not is_draw(decided[m]) and eligible[user].get(m) == decided[m]
        )
        usage = chip_usages.get(user)
        if double_up_allowed and usage is not None and usage.double_up in fixtures:
            score.double_up_match = usage.double_up
            if usage.double_up in pts:
                score.double_up_points = pts[usage.double_up]
                pts[usage.double_up] *= 2
        for m in score.late_excluded:
            if m in decided:
                pts[m] = 0.0
        score.match_points = pts

    return scores


# ----------------------------
# Bonus questions
# ----------------------------

def _normalize_answer(value: Optional[str]) -> str:
    return (value or "").strip().casefold()


def score_bonus(config: TournamentConfig,
                answers: Mapping[str, Mapping[str, str]],
                actuals: Mapping[str, Union[str, Sequence[str]]]) -> Dict[str, BonusScore]:
    """
    Each answer matching an accepted actual answer (trimmed, case-insensitive)
    earns bonus_points_per_correct; the total is capped at bonus_points_cap.
    Questions without an actual answer yet are skipped.
    """
    if not config.features.bonus_questions_enabled:
        return {}

    accepted = {}
    for qid, value in actuals.items():
        values = [value] if isinstance(value, str) else list(value or [])
        normalized = {_normalize_answer(v) for v in values if _normalize_answer(v)}
        if normalized:
            accepted[qid] = normalized

    rules = config.scoring
    out = {}
    for user in sorted(answers):
        correct = sorted(
            qid for qid, answer in answers[user].items()
            if qid in accepted and _normalize_answer(answer) in accepted[qid]
        )
        raw = len(correct) * float(rules.bonus_points_per_correct)
        capped = raw if rules.bonus_points_cap is None else min(raw, float(rules.bonus_points_cap))
        out[user] = BonusScore(user=user, correct=correct, raw_points=raw, points=capped)
    return out
