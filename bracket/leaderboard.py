# bracket/leaderboard.py
"""
Leaderboard: phase scores + capped bonus - late penalties, ordered by total,
then by the earlier final group-stage submission, then by name.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from bracket.chips import CHIP_LABELS, DOUBLE_UP, WILDCARD
from bracket.results import effective_config
from bracket.scoring import BonusScore, PhaseScore, score_bonus, score_phase
from bracket.stores import ChipUsage, SubmissionStatus
from bracket.tournament import TournamentConfig

BASE_COLUMNS = ["rank", "previous_rank", "user"]
TAIL_COLUMNS = ["bonus_points", "penalty", "total_points", "submitted_at", "chips_used"]


def leaderboard_columns(config: TournamentConfig) -> List[str]:
    return BASE_COLUMNS + [p.name for p in config.phases] + TAIL_COLUMNS


def aggregate(config: TournamentConfig,
              phase_scores: Mapping[str, Mapping[str, PhaseScore]],
              bonus_scores: Mapping[str, BonusScore],
              tiebreak_times: Mapping[str, Optional[datetime]],
              previous_ranks: Optional[Mapping[str, int]] = None,
              chips_used: Optional[Mapping[str, Iterable[str]]] = None) -> pd.DataFrame:
    """One row per user, already in leaderboard order."""
    previous_ranks = previous_ranks or {}
    chips_used = chips_used or {}

    users = set(bonus_scores)
    for scores in phase_scores.values():
        users.update(scores)
    if not users:
        return pd.DataFrame(columns=leaderboard_columns(config))

    rows = []
    for user in users:
        row = {"user": user}
        phase_total = 0.0
        penalty = 0.0
        for phase in config.phases:
            score = phase_scores.get(phase.id, {}).get(user)
            points = score.points if score else 0.0
            row[phase.name] = points
            phase_total += points
            penalty += score.late_penalty if score else 0.0
        bonus = bonus_scores[user].points if user in bonus_scores else 0.0
        row["bonus_points"] = bonus
        row["penalty"] = penalty
        row["total_points"] = phase_total + bonus - penalty
        ts = tiebreak_times.get(user)
        row["submitted_at"] = ts
        # float sort key; users with no tie-break submission go last
        row["_submitted"] = ts.timestamp() if ts is not None else float("nan")
        row["chips_used"] = ", ".join(chips_used.get(user, []))
        rows.append(row)

    lb = pd.DataFrame(rows)
    lb["_total"] = lb["total_points"].round(6)
    lb = lb.sort_values(
        ["_total", "_submitted", "user"], ascending=[False, True, True], na_position="last"
    ).reset_index(drop=True)

    lb["rank"] = range(1, len(lb) + 1)
    lb["previous_rank"] = lb["user"].map(previous_ranks)
    return lb[leaderboard_columns(config)]


class StandingsCache:
    """
    Keeps each phase's scores separately so an admin correction to one
    fixture only rescores that fixture's phase; `standings()` just re-sums.
    """

    def __init__(self, config: TournamentConfig):
        self.config = config
        self.phase_scores: Dict[str, Dict[str, PhaseScore]] = {}
        self.bonus_scores: Dict[str, BonusScore] = {}
        self.tiebreak_times: Dict[str, Optional[datetime]] = {}
        self.chips_used: Dict[str, List[str]] = {}

    def refresh_phase(self, phase_id, picks, results, chip_usages=None, submitted_at=None) -> Dict[str, PhaseScore]:
        scores = score_phase(self.config, phase_id, picks, results, chip_usages, submitted_at)
        self.phase_scores[phase_id] = scores
        if phase_id == self.config.scoring.tiebreak_phase:
            self.tiebreak_times = dict(submitted_at or {})
        return scores

    def refresh_bonus(self, answers, actuals) -> Dict[str, BonusScore]:
        self.bonus_scores = score_bonus(self.config, answers, actuals)
        return self.bonus_scores

    def standings(self, previous_ranks: Optional[Mapping[str, int]] = None) -> pd.DataFrame:
        return aggregate(self.config, self.phase_scores, self.bonus_scores,
                         self.tiebreak_times, previous_ranks, self.chips_used)


def chip_labels(config: TournamentConfig, usages_by_phase: Mapping[str, Mapping[str, ChipUsage]]) -> Dict[str, List[str]]:
    labels: Dict[str, List[str]] = {}
    for phase in config.phases:
        for user, usage in sorted(usages_by_phase.get(phase.id, {}).items()):
            for chip in (DOUBLE_UP, WILDCARD):
                match = usage.slot(chip)
                if match is not None:
                    labels.setdefault(user, []).append(f"{CHIP_LABELS[chip]} ({phase.name}, Match {match})")
    return labels


def build_standings(config: TournamentConfig, store) -> StandingsCache:
    """Score every phase from the stores. Only final (SUBMITTED) entries count."""
    config = effective_config(config, store)
    cache = StandingsCache(config)
    usages_by_phase = {}

    for phase in config.phases:
        submitted = {
            user: record.timestamp
            for user, record in store.list_statuses(phase.id).items()
            if record.status == SubmissionStatus.SUBMITTED
        }
        picks = {u: p for u, p in store.get_all_picks(phase.id).items() if u in submitted}
        usages = {u: c for u, c in store.get_all_chip_usages(phase.id).items() if u in submitted}
        usages_by_phase[phase.id] = usages
        cache.refresh_phase(phase.id, picks, store.get_results(phase.id), usages, submitted)

    bonus_entrants = set(cache.tiebreak_times) if config.scoring.bonus_phase == config.scoring.tiebreak_phase \
        else {u for u, r in store.list_statuses(config.scoring.bonus_phase).items()
              if r.status == SubmissionStatus.SUBMITTED}
    answers = {u: a for u, a in store.get_all_answers().items() if u in bonus_entrants}
    cache.refresh_bonus(answers, store.get_actual_answers())
    cache.chips_used = chip_labels(config, usages_by_phase)
    return cache


def overall_leaderboard(config: TournamentConfig, store,
                        previous_ranks: Optional[Mapping[str, int]] = None) -> pd.DataFrame:
    return build_standings(config, store).standings(previous_ranks)


def phase_winners(config: TournamentConfig,
                  phase_scores: Mapping[str, Mapping[str, PhaseScore]]) -> Tuple[pd.DataFrame, Dict[str, pd.DataFrame]]:
    """Returns (phase_totals, winners_by_phase). Phases without a decided match are left out."""
    rows = []
    for phase in config.phases:
        for user, score in phase_scores.get(phase.id, {}).items():
            if not score.match_points:
                continue
            rows.append({"phase_id": phase.id, "phase": phase.name, "user": user, "points": score.points})
    if not rows:
        return pd.DataFrame(), {}

    totals = pd.DataFrame(rows)
    winners_by_phase = {}
    for phase_id, sub in totals.groupby("phase_id", sort=False):
        top = round(sub["points"].max(), 6)
        winners = sub[sub["points"].round(6) == top].sort_values("user")
        winners_by_phase[phase_id] = winners.reset_index(drop=True)

    order = {p.id: i for i, p in enumerate(config.phases)}
    totals["_order"] = totals["phase_id"].map(order)
    totals = totals.sort_values(["_order", "points", "user"], ascending=[True, False, True])
    return totals.drop(columns="_order").reset_index(drop=True), winners_by_phase
