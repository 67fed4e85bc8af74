# pages/4_🛠️_Admin.py
import csv
import io
from datetime import datetime, timezone

import pandas as pd
import streamlit as st

import config
from bracket import db_pg as db
from bracket.errors import BracketError
from bracket.results import effective_config, parse_match_number, record_result
from bracket.submissions import finalize_drafts, log_activity

st.set_page_config(page_title="Admin", page_icon="🛠️", layout="wide")

ADMIN_ACTOR = "admin"


def require_admin():
    if st.session_state.get("is_admin"):
        return True
    with st.form("admin_login"):
        code = st.text_input("Enter Admin Code", type="password")
        submitted = st.form_submit_button("Unlock Admin")
        if submitted:
            expected = config.admin_code()
            if not expected:
                st.error("Admin code not configured. Set secret/ENV var ADMIN_CODE or config.ADMIN_CODE.")
                return False
            if code == expected:
                st.session_state["is_admin"] = True
                st.success("Admin unlocked.")
                return True
            st.error("Incorrect admin code.")
            return False
    return False


def parse_csv(file, expected_cols):
    try:
        content = file.getvalue().decode("utf-8-sig")
    except UnicodeDecodeError:
        content = file.getvalue().decode("latin-1")
    reader = csv.DictReader(io.StringIO(content))
    missing = [c for c in expected_cols if c not in (reader.fieldnames or [])]
    if missing:
        st.error(f"CSV missing columns: {missing}. Found columns: {reader.fieldnames}")
        return None
    return list(reader)


def results_ui(tournament, store):
    st.subheader("Match Results")
    st.caption('Winner must be one of the two teams, or "Draw" / "No result". Leave blank to clear.')
    decided = {}
    for phase in tournament.phases:
        decided.update(store.get_results(phase.id))

    with st.form("result_form"):
        match = st.selectbox(
            "Match", [f.match for f in tournament.fixtures], format_func=lambda m: tournament.fixture(m).label
        )
        winner = st.text_input("Winner")
        if st.form_submit_button("Save Result", type="primary"):
            try:
                phase_id = record_result(tournament, store, match, winner, ADMIN_ACTOR, datetime.now(timezone.utc))
            except (BracketError, ValueError) as exc:
                st.error(str(exc))
            else:
                st.success(f"Saved. {tournament.phase(phase_id).name} scores will be recomputed.")

    st.markdown("**Bulk import**")
    st.caption('CSV columns required: match (12 or "Match 12"), winner')
    f = st.file_uploader("results.csv", type=["csv"], key="results_upload")
    if f and st.button("Import Results"):
        rows = parse_csv(f, ["match", "winner"])
        if rows is not None:
            imported, errors = 0, []
            for r in rows:
                try:
                    record_result(tournament, store, r["match"], r["winner"], ADMIN_ACTOR, datetime.now(timezone.utc))
                    imported += 1
                except (BracketError, ValueError) as exc:
                    errors.append(f"{r['match']}: {exc}")
            st.success(f"Imported {imported} result(s).")
            for e in errors:
                st.error(e)

    table = pd.DataFrame([
        {"Match": f.match, "Phase": tournament.phase(f.phase).name, "Team 1": f.team1,
         "Team 2": f.team2, "Date": f.date, "Winner": decided.get(f.match, "")}
        for f in tournament.fixtures
    ])
    st.dataframe(table, use_container_width=True, hide_index=True)


def fixtures_ui(tournament, store):
    st.subheader("Fixture Details")
    st.caption("Set knockout teams once they are known, or correct a venue/date.")
    if not tournament.features.fetch_fixtures_from_store:
        st.info("This tournament reads fixtures from its config only.")
        return
    with st.form("fixture_form"):
        raw_match = st.text_input('Match (e.g. "Match 41")')
        c1, c2 = st.columns(2)
        team1 = c1.text_input("Team 1")
        team2 = c2.text_input("Team 2")
        venue = st.text_input("Venue")
        if st.form_submit_button("Update Fixture", type="primary"):
            try:
                match = parse_match_number(raw_match)
                fields = {"team1": team1.strip() or None, "team2": team2.strip() or None, "venue": venue.strip() or None}
                # validate before writing
                tournament.with_fixture_updates({match: fields})
                store.update_fixture(match, **fields)
            except (BracketError, ValueError) as exc:
                st.error(str(exc))
            else:
                log_activity(store, datetime.now(timezone.utc), "FIXTURE_UPDATED", ADMIN_ACTOR,
                             f"Match {match} " + ", ".join(f"{k}: {v}" for k, v in fields.items() if v))
                st.success(f"Match {match} updated.")


def finalize_ui(tournament, store):
    st.subheader("Finalize Drafts")
    st.caption("Turns every saved draft of a phase into a final submission. Runs only after the deadline.")
    phase_id = st.selectbox("Phase", tournament.phase_ids, format_func=lambda pid: tournament.phase(pid).name,
                            key="finalize_phase")
    if st.button("Finalize Drafts", type="primary"):
        try:
            users = finalize_drafts(tournament, phase_id, datetime.now(timezone.utc), store)
        except BracketError as exc:
            st.error(str(exc))
        else:
            st.success(f"Finalized {len(users)} draft(s)." + (f" ({', '.join(users)})" if users else ""))


def bonus_ui(tournament, store):
    st.subheader("Bonus Question Answers")
    if not tournament.features.bonus_questions_enabled:
        st.info("Bonus questions are disabled for this tournament.")
        return
    st.caption("One accepted answer per line; ties can have several.")
    actuals = store.get_actual_answers()
    for q in tournament.bonus_questions:
        with st.form(f"actual_{q.id}"):
            value = st.text_area(q.question, value="\n".join(actuals.get(q.id, [])), height=80)
            if st.form_submit_button("Save"):
                store.set_actual_answer(q.id, [line.strip() for line in value.splitlines()])
                st.success("Saved.")


def activity_ui(store):
    st.subheader("Recent Activity")
    events = store.recent_activity(limit=100)
    if not events:
        st.info("No activity yet.")
        return
    st.dataframe(
        pd.DataFrame([
            {"Timestamp": e.timestamp, "Event": e.event_type, "User": e.user, "Details": e.details}
            for e in events
        ]),
        use_container_width=True,
        hide_index=True,
    )


def main():
    st.title("🛠️ Admin")

    if not require_admin():
        st.stop()

    store = db.SqlStore(config.load_tournament())
    tournament = effective_config(config.load_tournament(), store)

    tabs = st.tabs(["Results", "Fixtures", "Finalize Drafts", "Bonus Answers", "Activity"])
    with tabs[0]:
        results_ui(tournament, store)
    with tabs[1]:
        fixtures_ui(tournament, store)
    with tabs[2]:
        finalize_ui(tournament, store)
    with tabs[3]:
        bonus_ui(tournament, store)
    with tabs[4]:
        activity_ui(store)


if __name__ == "__main__":
    main()
