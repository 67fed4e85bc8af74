import pytest

from bracket.errors import (
    FeatureDisabledError,
    IncompleteSubmissionError,
    LateSubmissionNotAcknowledgedError,
    LockedSubmissionError,
    StoreError,
    SubmissionStateError,
)
from bracket.stores import SubmissionStatus
from bracket.submissions import (
    apply_ai_bonus_answers,
    apply_ai_predictions,
    event_prefix,
    finalize_drafts,
    is_locked,
    save_draft,
    submit,
    submit_bonus_makeup,
)
from conftest import GROUP_PICKS, at

BEFORE = at("2026-02-05T10:00:00")
AFTER = at("2026-02-08T10:00:00")


def test_event_prefix():
    assert event_prefix("group-stage") == "GROUP_STAGE"
    assert event_prefix("super4") == "SUPER4"


def test_save_draft_then_submit(mini, store):
    draft = save_draft(mini, "group-stage", "asha", {1: "India"}, BEFORE, store)
    assert draft.status == SubmissionStatus.DRAFT
    assert store.get_status("asha", "group-stage").status == SubmissionStatus.DRAFT
    assert store.events[-1].event_type == "GROUP_STAGE_DRAFT_SAVED"

    outcome = submit(mini, "group-stage", "asha", GROUP_PICKS, BEFORE, store)
    assert outcome.status == SubmissionStatus.SUBMITTED
    assert not outcome.late
    assert store.get_picks("asha", "group-stage") == GROUP_PICKS
    assert store.events[-1].event_type == "GROUP_STAGE_SUBMITTED"


def test_resubmit_before_deadline_is_an_update(mini, store):
    submit(mini, "group-stage", "asha", GROUP_PICKS, BEFORE, store)
    outcome = submit(mini, "group-stage", "asha", {**GROUP_PICKS, 1: "Pakistan"}, at("2026-02-06T10:00:00"), store)
    assert outcome.event_type == "GROUP_STAGE_UPDATED"
    assert store.get_picks("asha", "group-stage")[1] == "Pakistan"
    assert store.get_status("asha", "group-stage").timestamp == at("2026-02-06T10:00:00")


def test_draft_after_submit_rejected(mini, store):
    submit(mini, "group-stage", "asha", GROUP_PICKS, BEFORE, store)
    with pytest.raises(SubmissionStateError):
        save_draft(mini, "group-stage", "asha", {1: "Pakistan"}, BEFORE, store)


def test_draft_after_deadline_rejected(mini, store):
    with pytest.raises(SubmissionStateError):
        save_draft(mini, "group-stage", "asha", {1: "India"}, AFTER, store)


def test_submit_requires_every_pick(mini, store):
    with pytest.raises(IncompleteSubmissionError) as info:
        submit(mini, "group-stage", "asha", {1: "India", 2: "England"}, BEFORE, store)
    assert info.value.missing == [3, 4]
    assert store.get_status("asha", "group-stage").status == SubmissionStatus.NONE


def test_submit_rejects_team_not_in_fixture(mini, store):
    with pytest.raises(IncompleteSubmissionError) as info:
        submit(mini, "group-stage", "asha", {**GROUP_PICKS, 2: "India"}, BEFORE, store)
    assert info.value.invalid == [2]


def test_late_submission_needs_acknowledgement(mini, store):
    with pytest.raises(LateSubmissionNotAcknowledgedError):
        submit(mini, "group-stage", "asha", GROUP_PICKS, AFTER, store)

    outcome = submit(mini, "group-stage", "asha", GROUP_PICKS, AFTER, store, acknowledge_late=True)
    assert outcome.late
    assert outcome.event_type == "GROUP_STAGE_LATE_SUBMITTED"


def test_submitted_phase_locks_after_deadline(mini, store):
    submit(mini, "group-stage", "asha", GROUP_PICKS, BEFORE, store)
    record = store.get_status("asha", "group-stage")
    assert not is_locked(mini, "group-stage", record, BEFORE)
    assert is_locked(mini, "group-stage", record, AFTER)

    with pytest.raises(LockedSubmissionError):
        submit(mini, "group-stage", "asha", GROUP_PICKS, AFTER, store, acknowledge_late=True)
    with pytest.raises(LockedSubmissionError):
        save_draft(mini, "group-stage", "asha", GROUP_PICKS, AFTER, store)


def test_late_submission_only_once(mini, store):
    submit(mini, "group-stage", "asha", GROUP_PICKS, AFTER, store, acknowledge_late=True)
    with pytest.raises(LockedSubmissionError):
        submit(mini, "group-stage", "asha", GROUP_PICKS, AFTER, store, acknowledge_late=True)


def test_bonus_answers_saved_with_group_stage(mini, store):
    answers = {"top-scorer": " Virat Kohli ", "top-wicket-taker": "Rashid Khan"}
    outcome = submit(mini, "group-stage", "asha", GROUP_PICKS, BEFORE, store, bonus_answers=answers)
    assert store.get_answers("asha") == {"top-scorer": "Virat Kohli", "top-wicket-taker": "Rashid Khan"}
    # two of four questions unanswered
    assert outcome.warnings


def test_bonus_answers_rejected_outside_bonus_phase(mini, store):
    with pytest.raises(SubmissionStateError):
        save_draft(mini, "super4", "asha", {5: "India"}, BEFORE, store, bonus_answers={"top-scorer": "X"})


def test_bonus_answers_rejected_when_disabled(store):
    from bracket.tournament import TournamentConfig
    from conftest import mini_config_dict

    data = mini_config_dict()
    data["features"]["bonus_questions_enabled"] = False
    cfg = TournamentConfig.from_dict(data)
    with pytest.raises(FeatureDisabledError):
        save_draft(cfg, "group-stage", "asha", {1: "India"}, BEFORE, store, bonus_answers={"top-scorer": "X"})


def test_finalize_drafts_keeps_draft_time(mini, store):
    save_draft(mini, "group-stage", "asha", {1: "India"}, BEFORE, store)
    submit(mini, "group-stage", "ben", GROUP_PICKS, BEFORE, store)

    with pytest.raises(SubmissionStateError):
        finalize_drafts(mini, "group-stage", BEFORE, store)

    finalized = finalize_drafts(mini, "group-stage", AFTER, store)
    assert finalized == ["asha"]
    record = store.get_status("asha", "group-stage")
    assert record.status == SubmissionStatus.SUBMITTED
    assert record.timestamp == BEFORE
    assert store.events[-1].event_type == "DRAFT_AUTO_FINALIZED"

    # idempotent
    assert finalize_drafts(mini, "group-stage", AFTER, store) == []


def test_finalize_drafts_force_before_deadline(mini, store):
    save_draft(mini, "group-stage", "asha", {1: "India"}, BEFORE, store)
    assert finalize_drafts(mini, "group-stage", BEFORE, store, force=True) == ["asha"]


def test_ai_predictions_fill_and_replace(mini):
    picks, applied = apply_ai_predictions(mini, "group-stage", {1: "Pakistan"}, mode="fill")
    assert applied == 3
    assert picks[1] == "Pakistan"
    assert picks[3] == "South Africa"

    picks, applied = apply_ai_predictions(mini, "group-stage", {1: "Pakistan"}, mode="replace")
    assert applied == 4
    assert picks[1] == "India"


def test_ai_predictions_bad_mode(mini):
    with pytest.raises(ValueError):
        apply_ai_predictions(mini, "group-stage", {}, mode="shuffle")


def test_ai_bonus_answers(mini):
    answers, applied = apply_ai_bonus_answers(mini, {"top-scorer": "Babar Azam"})
    assert applied == 1
    assert answers == {"top-scorer": "Babar Azam", "top-wicket-taker": "Rashid Khan"}


def test_bonus_makeup(mini, store):
    answers = {"top-scorer": "Travis Head", "top-wicket-taker": "Adil Rashid"}
    saved = submit_bonus_makeup(mini, "asha", answers, at("2026-02-20T10:00:00"), store)
    assert saved == answers
    assert store.events[-1].event_type == "BONUS_MAKEUP_SUBMITTED"


def test_bonus_makeup_needs_both_answers(mini, store):
    with pytest.raises(IncompleteSubmissionError) as info:
        submit_bonus_makeup(mini, "asha", {"top-scorer": "Travis Head"}, at("2026-02-20T10:00:00"), store)
    assert info.value.missing == ["top-wicket-taker"]


def test_bonus_makeup_closed_after_deadline(mini, store):
    with pytest.raises(LockedSubmissionError):
        submit_bonus_makeup(mini, "asha", {"top-scorer": "A", "top-wicket-taker": "B"},
                            at("2026-02-21T08:00:01"), store)


class FailingLog:
    def __init__(self, store):
        self.store = store

    def __getattr__(self, name):
        return getattr(self.store, name)

    def log_event(self, *args, **kwargs):
        raise StoreError("activity log unavailable")


def test_activity_log_failure_does_not_undo_submission(mini, store):
    outcome = submit(mini, "group-stage", "asha", GROUP_PICKS, BEFORE, FailingLog(store))
    assert outcome.status == SubmissionStatus.SUBMITTED
    assert store.get_status("asha", "group-stage").status == SubmissionStatus.SUBMITTED
