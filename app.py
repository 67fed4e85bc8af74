# app.py
from datetime import datetime, timezone

import streamlit as st

import config
from bracket import db_pg as db
from bracket.phases import all_deadlines, format_countdown, resolve_phase

st.set_page_config(page_title=config.APP_TITLE, page_icon="🏏", layout="wide")


def sign_in(store):
    st.markdown(f"### Welcome to **{config.APP_TITLE}**")
    with st.form("signin"):
        name = st.text_input("Your Name (shown on the leaderboard)").strip()
        submitted = st.form_submit_button("Sign in")
        if submitted:
            if not name:
                st.error("Please enter your name.")
                return
            store.upsert_user(name, datetime.now(timezone.utc))
            st.session_state["name"] = name
            st.success("Signed in!")
            st.rerun()


def deadlines_table(tournament, now):
    resolution = resolve_phase(tournament, now)
    rows = []
    for phase_id, deadline in all_deadlines(tournament).items():
        phase = tournament.phase(phase_id)
        rows.append({
            "Phase": phase.name,
            "Matches": f"{phase.match_range.start}-{phase.match_range.end}",
            "Deadline": deadline.strftime("%a %d %b %Y, %H:%M %Z"),
            "Closes in": format_countdown(resolution.time_remaining(phase_id)) if resolution.is_open(phase_id) else "Closed",
        })
    st.dataframe(rows, use_container_width=True, hide_index=True)


def main():
    config.configure_logging()
    tournament = config.load_tournament()
    db.init_db()
    store = db.SqlStore(tournament)

    st.title(config.APP_TITLE)
    st.caption(f"{tournament.name} · Pick every match winner · Play your chips · Climb the leaderboard")

    # Simple session-based sign-in
    if "name" not in st.session_state:
        sign_in(store)
    else:
        st.success(f"Signed in as {st.session_state['name']}")
        st.markdown("Use the left sidebar to navigate between pages.")

    now = datetime.now(timezone.utc)
    resolution = resolve_phase(tournament, now)
    st.divider()
    if resolution.tournament_closed:
        st.info("All phases are closed. Check the leaderboard for final standings.")
    else:
        st.subheader(f"Now open: {tournament.phase(resolution.current_phase_id).name}")
    deadlines_table(tournament, now)

    st.divider()
    st.subheader("Rules")
    rules = tournament.scoring
    lines = []
    for phase in tournament.phases:
        if phase.scoring_type == "fixed":
            text = f"{phase.points_per_correct:g} points per correct pick"
        else:
            text = f"a {phase.pool_size:g}-point pool per phase, each match's share split among correct pickers"
        if phase.draw_points is not None:
            text += f", {phase.draw_points:g} for a draw or no result"
        lines.append(f"- **{phase.name}:** {text}.")
    if tournament.features.bonus_questions_enabled:
        cap = f", capped at {rules.bonus_points_cap:g}" if rules.bonus_points_cap is not None else ""
        lines.append(f"- **Bonus questions:** {rules.bonus_points_per_correct:g} points each{cap}.")
    if rules.late_penalty_per_day:
        lines.append(
            f"- **Late submissions:** {rules.late_penalty_per_day:g} points per day late, "
            "and no points for matches that started before you submitted."
        )
    if tournament.features.chips_enabled:
        lines.append(
            "- **Chips:** Double Up doubles one match's points; Wildcard flips one pick. "
            "One of each per phase, on a match that has not started."
        )
    lines.append("- Ties are broken by the earlier final group-stage submission.")
    st.markdown("\n".join(lines))


if __name__ == "__main__":
    main()
