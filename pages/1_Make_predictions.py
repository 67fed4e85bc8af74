# pages/1_🏏_Make_Predictions.py
from datetime import datetime, timezone

import streamlit as st

import config
from bracket import db_pg as db
from bracket.chips import CHIP_LABELS, DOUBLE_UP, WILDCARD, apply_chip, register_chip
from bracket.errors import BracketError, ChipRegistrationError, LateSubmissionNotAcknowledgedError, StoreError
from bracket.phases import format_countdown, has_started, open_fixtures, resolve_phase
from bracket.results import effective_config
from bracket.stores import SubmissionStatus
from bracket.submissions import (
    apply_ai_bonus_answers,
    apply_ai_predictions,
    is_locked,
    save_draft,
    submit,
)
from bracket.tournament import TBA

st.set_page_config(page_title="Make Predictions", page_icon="🏏", layout="wide")


def pick_key(phase_id, match):
    return f"pick_{phase_id}_{match}"


def bonus_key(qid):
    return f"bonus_{qid}"


def load_into_session(tournament, phase_id, picks, answers):
    """Seed widget state once per phase so reruns keep unsaved selections."""
    marker = f"loaded_{phase_id}"
    if st.session_state.get(marker):
        return
    for f in tournament.fixtures_for_phase(phase_id):
        if picks.get(f.match) in f.teams:
            st.session_state[pick_key(phase_id, f.match)] = picks[f.match]
    for q in tournament.bonus_questions:
        st.session_state.setdefault(bonus_key(q.id), answers.get(q.id, ""))
    st.session_state[marker] = True


def collect_picks(tournament, phase_id):
    picks = {}
    for f in tournament.fixtures_for_phase(phase_id):
        value = st.session_state.get(pick_key(phase_id, f.match))
        if value:
            picks[f.match] = value
    return picks


def collect_answers(tournament):
    return {q.id: st.session_state.get(bonus_key(q.id), "").strip() for q in tournament.bonus_questions}


def ai_buttons(tournament, phase_id, with_bonus):
    c1, c2 = st.columns(2)
    mode = None
    if c1.button("🤖 Fill empty picks with AI predictions"):
        mode = "fill"
    if c2.button("🤖 Replace all picks with AI predictions"):
        mode = "replace"
    if mode is None:
        return
    picks, applied = apply_ai_predictions(tournament, phase_id, collect_picks(tournament, phase_id), mode)
    for match, team in picks.items():
        st.session_state[pick_key(phase_id, match)] = team
    if with_bonus:
        answers, bonus_applied = apply_ai_bonus_answers(tournament, collect_answers(tournament), mode)
        for qid, value in answers.items():
            st.session_state[bonus_key(qid)] = value
        applied += bonus_applied
    st.success(f"Applied {applied} AI prediction(s). Review them, then save or submit.")
    st.rerun()


def fixtures_form(tournament, phase_id, now, disabled):
    fixtures = tournament.fixtures_for_phase(phase_id)
    for f in fixtures:
        started = has_started(tournament, f, now)
        flags = " ".join(s.flag for s in map(tournament.team_style, f.teams) if s and s.flag)
        label = f"{flags} {f.label} · {f.date} · {f.venue}".strip()
        if TBA in f.teams:
            st.caption(f"{label} (teams to be announced)")
            continue
        st.radio(
            label + (" 🔒 started" if started else ""),
            options=list(f.teams),
            key=pick_key(phase_id, f.match),
            index=None,
            horizontal=True,
            disabled=disabled,
        )


def bonus_form(tournament, disabled):
    st.subheader("Bonus Questions")
    rules = tournament.scoring
    cap = f" (capped at {rules.bonus_points_cap:g})" if rules.bonus_points_cap is not None else ""
    st.caption(f"{rules.bonus_points_per_correct:g} points per correct answer{cap}.")
    for q in tournament.bonus_questions:
        st.text_input(q.question, key=bonus_key(q.id), disabled=disabled)


def reload_picks(phase_id):
    # pick widgets already rendered this run; reseed them from the store on rerun
    st.session_state.pop(f"loaded_{phase_id}", None)


def pending_key(phase_id, chip):
    return f"chip_pending_{phase_id}_{chip}"


def record_pending_chip(tournament, phase_id, user, chip, store):
    """The pick was already flipped; only the chip slot is left to write."""
    match = st.session_state[pending_key(phase_id, chip)]
    st.warning(f"Your {CHIP_LABELS[chip]} pick for match {match} was saved, but the chip was not recorded.")
    if not st.button(f"Record {CHIP_LABELS[chip]}", key=f"chip_record_{phase_id}_{chip}"):
        return
    try:
        register_chip(tournament, phase_id, user, chip, match, datetime.now(timezone.utc), store)
    except StoreError as exc:
        st.error(f"{exc} Try again in a moment.")
    except BracketError as exc:
        st.session_state.pop(pending_key(phase_id, chip), None)
        st.error(str(exc))
    else:
        st.session_state.pop(pending_key(phase_id, chip), None)
        st.success(f"{CHIP_LABELS[chip]} recorded on match {match}.")
        st.rerun()


def chips_ui(tournament, phase_id, user, now, store):
    if not tournament.features.chips_enabled:
        return
    st.subheader("Chips")
    usage = store.get_chip_usage(user, phase_id)
    upcoming = [f for f in open_fixtures(tournament, phase_id, now) if TBA not in f.teams]

    for chip in (DOUBLE_UP, WILDCARD):
        if not tournament.allows_chip(phase_id, chip):
            continue
        used_on = usage.slot(chip)
        pending = pending_key(phase_id, chip)
        if used_on is not None:
            st.session_state.pop(pending, None)
            st.write(f"**{CHIP_LABELS[chip]}:** used on match {used_on}")
            continue
        if pending in st.session_state:
            record_pending_chip(tournament, phase_id, user, chip, store)
            continue
        if not upcoming:
            st.write(f"**{CHIP_LABELS[chip]}:** no upcoming matches left in this phase")
            continue
        c1, c2 = st.columns([3, 1])
        target = c1.selectbox(
            CHIP_LABELS[chip],
            options=[f.match for f in upcoming],
            format_func=lambda m: tournament.fixture(m).label,
            key=f"chip_target_{phase_id}_{chip}",
        )
        if c2.button(f"Play {CHIP_LABELS[chip]}", key=f"chip_play_{phase_id}_{chip}"):
            try:
                outcome = apply_chip(tournament, phase_id, user, chip, target, datetime.now(timezone.utc),
                                     store, store, activity=store)
            except ChipRegistrationError as exc:
                # never replay apply_chip from here: it would flip the pick back
                st.session_state[pending] = exc.match
                reload_picks(phase_id)
                st.rerun()
            except BracketError as exc:
                st.error(str(exc))
            else:
                if outcome.new_pick:
                    reload_picks(phase_id)
                    st.success(f"Wildcard played: match {target} pick is now {outcome.new_pick}.")
                else:
                    st.success(f"{CHIP_LABELS[chip]} played on match {target}.")
                st.rerun()


def main():
    st.title("🏏 Make Predictions")

    if "name" not in st.session_state:
        st.warning("Please sign in on the Home page first.")
        st.stop()

    user = st.session_state["name"]
    store = db.SqlStore(config.load_tournament())
    tournament = effective_config(config.load_tournament(), store)
    now = datetime.now(timezone.utc)
    resolution = resolve_phase(tournament, now)

    phase_ids = tournament.phase_ids
    default = phase_ids.index(resolution.current_phase_id) if resolution.current_phase_id else len(phase_ids) - 1
    phase_id = st.selectbox(
        "Phase", phase_ids, index=default, format_func=lambda pid: tournament.phase(pid).name
    )
    phase = tournament.phase(phase_id)

    record = store.get_status(user, phase_id)
    locked = is_locked(tournament, phase_id, record, now)
    late = resolution.is_past_deadline(phase_id)
    with_bonus = phase_id == tournament.scoring.bonus_phase and tournament.features.bonus_questions_enabled

    load_into_session(tournament, phase_id, store.get_picks(user, phase_id), store.get_answers(user))

    if record.status == SubmissionStatus.SUBMITTED:
        st.success(f"Submitted {record.timestamp:%d %b %Y %H:%M %Z}.")
    elif record.status == SubmissionStatus.DRAFT:
        st.info(f"Draft saved {record.timestamp:%d %b %Y %H:%M %Z}. Remember to submit before the deadline.")

    if locked:
        st.error(f"{phase.name} is locked. The deadline has passed and your picks are final.")
    elif late:
        st.warning(
            f"The {phase.name} deadline has passed. You can still submit once, with a penalty of "
            f"{tournament.scoring.late_penalty_per_day:g} points per day late; matches already started score nothing."
        )
    else:
        st.caption(f"Deadline in {format_countdown(resolution.time_remaining(phase_id))}")

    if not locked and tournament.features.ai_predictions_enabled:
        ai_buttons(tournament, phase_id, with_bonus)

    st.subheader(f"{phase.name} Picks")
    fixtures_form(tournament, phase_id, now, disabled=locked)
    if with_bonus:
        bonus_form(tournament, disabled=locked)

    if not locked:
        acknowledge = st.checkbox("I understand this is a late submission and accept the penalty") if late else False
        c1, c2 = st.columns(2)
        answers = collect_answers(tournament) if with_bonus else None
        picks = collect_picks(tournament, phase_id)
        if not late and record.status != SubmissionStatus.SUBMITTED and c1.button("💾 Save Draft", use_container_width=True):
            try:
                save_draft(tournament, phase_id, user, picks, datetime.now(timezone.utc), store, answers)
            except BracketError as exc:
                st.error(str(exc))
            else:
                st.success("Draft saved. Drafts are auto-submitted at the deadline.")
        if c2.button("✅ Submit", type="primary", use_container_width=True):
            try:
                outcome = submit(tournament, phase_id, user, picks, datetime.now(timezone.utc), store,
                                 bonus_answers=answers, acknowledge_late=acknowledge)
            except LateSubmissionNotAcknowledgedError as exc:
                st.error(f"{exc} Tick the acknowledgement box to continue.")
            except BracketError as exc:
                st.error(str(exc))
            else:
                st.success("Submitted! " + ("(late)" if outcome.late else "You can update until the deadline."))
                for warning in outcome.warnings:
                    st.warning(warning)

    st.divider()
    chips_ui(tournament, phase_id, user, now, store)


if __name__ == "__main__":
    main()
