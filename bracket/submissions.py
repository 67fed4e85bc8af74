# bracket/submissions.py
"""
Draft / submit / lock rules for a participant's picks in one phase.

    NONE -> DRAFT        save_draft, before the deadline
    NONE|DRAFT -> SUBMITTED   submit (late once, with acknowledgement)
    SUBMITTED -> SUBMITTED    submit again, before the deadline
    DRAFT -> SUBMITTED   finalize_drafts, at/after the deadline

A phase is locked for a user once its deadline has passed and a final
submission exists.

Each operation is a series of independent writes (picks, bonus answers,
status, activity event). Every write is an upsert of the same value, so a
caller may replay the whole call after a storage failure.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple

from bracket.errors import (
    FeatureDisabledError,
    IncompleteSubmissionError,
    LateSubmissionNotAcknowledgedError,
    LockedSubmissionError,
    StoreError,
    SubmissionStateError,
)
from bracket.phases import deadline_for, resolve_phase, to_local
from bracket.stores import SubmissionRecord, SubmissionStatus
from bracket.tournament import TournamentConfig, as_dict

logger = logging.getLogger(__name__)

AI_MODES = ("fill", "replace")


@dataclass
class SubmitOutcome:
    phase_id: str
    user: str
    status: SubmissionStatus
    timestamp: datetime
    event_type: str
    late: bool = False
    warnings: List[str] = field(default_factory=list)


def event_prefix(phase_id: str) -> str:
    return phase_id.upper().replace("-", "_")


def is_locked(config: TournamentConfig, phase_id: str, record: SubmissionRecord, now: datetime) -> bool:
    return resolve_phase(config, now).is_past_deadline(phase_id) and record.status == SubmissionStatus.SUBMITTED


def check_picks(config: TournamentConfig, phase_id: str, picks: Mapping, complete: bool) -> Dict[int, str]:
    """
    Picks must name one of the two teams of a fixture in this phase.
    With `complete=True` every fixture of the phase needs a pick.
    """
    fixtures = {f.match: f for f in config.fixtures_for_phase(phase_id)}
    picks = as_dict(picks)
    invalid = sorted(m for m, team in picks.items() if m not in fixtures or team not in fixtures[m].teams)
    missing = sorted(m for m in fixtures if m not in picks) if complete else []
    if invalid or missing:
        parts = []
        if missing:
            parts.append(f"missing picks for matches {missing}")
        if invalid:
            parts.append(f"invalid picks for matches {invalid}")
        raise IncompleteSubmissionError("; ".join(parts).capitalize(), missing=missing, invalid=invalid)
    return picks


def missing_bonus_questions(config: TournamentConfig, answers: Mapping[str, str]) -> List[str]:
    return [q.id for q in config.bonus_questions if not (answers.get(q.id) or "").strip()]


def _check_bonus_answers(config: TournamentConfig, phase_id: str, answers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    if not answers:
        return {}
    if not config.features.bonus_questions_enabled:
        raise FeatureDisabledError("Bonus questions are not enabled for this tournament")
    if phase_id != config.scoring.bonus_phase:
        raise SubmissionStateError(f"Bonus answers can only be submitted with {config.scoring.bonus_phase}")
    for qid in answers:
        config.bonus_question(qid)
    return {qid: (value or "").strip() for qid, value in answers.items()}


def log_activity(store, timestamp: datetime, event_type: str, user: str, details: str = "") -> None:
    # The activity log is an audit trail; a failed append must not undo the
    # writes that already happened.
    try:
        store.log_event(timestamp, event_type, user, details)
    except StoreError:
        logger.exception("Could not record activity %s for %s", event_type, user)


def save_draft(config: TournamentConfig, phase_id: str, user: str, picks: Mapping, now: datetime,
               store, bonus_answers: Optional[Mapping[str, str]] = None) -> SubmitOutcome:
    resolution = resolve_phase(config, now)
    record = store.get_status(user, phase_id)

    if resolution.is_past_deadline(phase_id):
        if record.status == SubmissionStatus.SUBMITTED:
            raise LockedSubmissionError(f"{config.phase(phase_id).name} submission is locked")
        raise SubmissionStateError("Drafts cannot be saved after the deadline. Submit your picks instead.")
    if record.status == SubmissionStatus.SUBMITTED:
        raise SubmissionStateError("Picks are already submitted. Submit again to update them.")

    picks = check_picks(config, phase_id, picks, complete=False)
    answers = _check_bonus_answers(config, phase_id, bonus_answers)

    store.set_picks(user, phase_id, picks)
    if answers:
        store.set_answers(user, answers)
    store.set_status(user, phase_id, SubmissionStatus.DRAFT, resolution.now)

    event = f"{event_prefix(phase_id)}_DRAFT_SAVED"
    log_activity(store, resolution.now, event, user, f"saved their {config.phase(phase_id).name} draft")
    logger.info("%s saved a %s draft with %d picks", user, phase_id, len(picks))
    return SubmitOutcome(phase_id, user, SubmissionStatus.DRAFT, resolution.now, event)


def submit(config: TournamentConfig, phase_id: str, user: str, picks: Mapping, now: datetime, store,
           bonus_answers: Optional[Mapping[str, str]] = None, acknowledge_late: bool = False) -> SubmitOutcome:
    """
    Final submission. After the deadline a user without a final submission
    may submit once, but only with `acknowledge_late=True`; the late penalty
    is applied at scoring time from the recorded timestamp.
    """
    resolution = resolve_phase(config, now)
    phase = config.phase(phase_id)
    record = store.get_status(user, phase_id)
    late = resolution.is_past_deadline(phase_id)

    if late and record.status == SubmissionStatus.SUBMITTED:
        raise LockedSubmissionError(f"{phase.name} submission is locked. You cannot modify your submission.")
    if late and not acknowledge_late:
        raise LateSubmissionNotAcknowledgedError(
            f"The {phase.name} deadline has passed. Late submissions score no points for matches "
            f"already started and lose {config.scoring.late_penalty_per_day:g} points per day late."
        )

    picks = check_picks(config, phase_id, picks, complete=True)
    answers = _check_bonus_answers(config, phase_id, bonus_answers)

    warnings = []
    if phase_id == config.scoring.bonus_phase and config.features.bonus_questions_enabled:
        merged = {**store.get_answers(user), **answers}
        if missing_bonus_questions(config, merged):
            warnings.append("Remember to make your bonus picks. You can update them until the deadline.")

    store.set_picks(user, phase_id, picks)
    if answers:
        store.set_answers(user, answers)
    store.set_status(user, phase_id, SubmissionStatus.SUBMITTED, resolution.now)

    prefix = event_prefix(phase_id)
    if late:
        event, details = f"{prefix}_LATE_SUBMITTED", f"submitted their {phase.name} picks after the deadline"
    elif record.status == SubmissionStatus.SUBMITTED:
        event, details = f"{prefix}_UPDATED", f"updated their {phase.name} picks"
    else:
        event, details = f"{prefix}_SUBMITTED", f"submitted their {phase.name} picks"
    log_activity(store, resolution.now, event, user, details)
    logger.info("%s: %s (%d picks)", user, event, len(picks))

    return SubmitOutcome(phase_id, user, SubmissionStatus.SUBMITTED, resolution.now, event, late, warnings)


def finalize_drafts(config: TournamentConfig, phase_id: str, now: datetime, store, force: bool = False) -> List[str]:
    """
    Turn every DRAFT of the phase into a final submission. The draft's own
    timestamp is kept, so a draft saved on time is not treated as late.
    Running it twice finalizes nothing the second time.
    """
    local_now = to_local(config, now)
    if not force and local_now < deadline_for(config, phase_id):
        raise SubmissionStateError(f"Drafts for {phase_id} can only be finalized after the deadline")

    finalized = []
    for user, record in sorted(store.list_statuses(phase_id).items()):
        if record.status != SubmissionStatus.DRAFT:
            continue
        store.set_status(user, phase_id, SubmissionStatus.SUBMITTED, record.timestamp or local_now)
        log_activity(store, local_now, "DRAFT_AUTO_FINALIZED", user, f"draft auto-finalized for {phase_id}")
        finalized.append(user)

    logger.info("%d draft(s) finalized for phase %s", len(finalized), phase_id)
    return finalized


def apply_ai_predictions(config: TournamentConfig, phase_id: str, picks: Mapping,
                         mode: str = "fill") -> Tuple[Dict[int, str], int]:
    """Fill empty picks (or replace all picks) with the configured AI predictions."""
    if not config.features.ai_predictions_enabled:
        raise FeatureDisabledError("AI predictions are not enabled for this tournament")
    if mode not in AI_MODES:
        raise ValueError(f"mode must be one of {AI_MODES}")

    result = as_dict(picks)
    applied = 0
    for f in config.fixtures_for_phase(phase_id):
        if not f.ai_prediction or f.ai_prediction not in f.teams:
            continue
        if mode == "replace" or f.match not in result:
            result[f.match] = f.ai_prediction
            applied += 1
    return result, applied


def apply_ai_bonus_answers(config: TournamentConfig, answers: Mapping[str, str],
                           mode: str = "fill") -> Tuple[Dict[str, str], int]:
    if not (config.features.ai_predictions_enabled and config.features.bonus_questions_enabled):
        raise FeatureDisabledError("AI bonus predictions are not enabled for this tournament")
    if mode not in AI_MODES:
        raise ValueError(f"mode must be one of {AI_MODES}")

    result = dict(answers)
    applied = 0
    for q in config.bonus_questions:
        if not q.ai_prediction:
            continue
        if mode == "replace" or not (result.get(q.id) or "").strip():
            result[q.id] = q.ai_prediction
            applied += 1
    return result, applied


def submit_bonus_makeup(config: TournamentConfig, user: str, answers: Mapping[str, str],
                        now: datetime, store) -> Dict[str, str]:
    """
    Second chance at a subset of bonus questions (e.g. top scorer / top
    wicket-taker), open until its own deadline.
    """
    makeup = config.bonus_makeup
    if makeup is None or not config.features.bonus_questions_enabled:
        raise FeatureDisabledError("Bonus makeup is not available for this tournament")

    local_now = to_local(config, now)
    if local_now > config.localize(makeup.deadline):
        raise LockedSubmissionError("Deadline has passed for bonus makeup submissions")

    unknown = sorted(set(answers) - set(makeup.question_ids))
    if unknown:
        raise IncompleteSubmissionError(f"Not a bonus makeup question: {unknown}", invalid=unknown)
    cleaned = {qid: (answers.get(qid) or "").strip() for qid in makeup.question_ids}
    missing = [qid for qid, value in cleaned.items() if not value]
    if missing:
        raise IncompleteSubmissionError("All bonus makeup picks are required", missing=missing)

    store.set_answers(user, cleaned)
    log_activity(store, local_now, "BONUS_MAKEUP_SUBMITTED", user,
                 "submitted makeup bonus picks for " + ", ".join(config.bonus_question(q).question for q in cleaned))
    return cleaned
