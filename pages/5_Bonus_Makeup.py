# pages/5_🎯_Bonus_Makeup.py
from datetime import datetime, timezone

import streamlit as st

import config
from bracket import db_pg as db
from bracket.errors import BracketError
from bracket.phases import format_countdown, to_local
from bracket.submissions import submit_bonus_makeup

st.set_page_config(page_title="Bonus Makeup", page_icon="🎯", layout="wide")


def main():
    st.title("🎯 Bonus Makeup")

    tournament = config.load_tournament()
    makeup = tournament.bonus_makeup
    if makeup is None or not tournament.features.bonus_questions_enabled:
        st.info("There is no bonus makeup round for this tournament.")
        return

    if "name" not in st.session_state:
        st.warning("Please sign in on the Home page first.")
        st.stop()

    user = st.session_state["name"]
    store = db.SqlStore(tournament)
    now = to_local(tournament, datetime.now(timezone.utc))
    deadline = tournament.localize(makeup.deadline)

    if now > deadline:
        st.error("The bonus makeup deadline has passed.")
    else:
        st.caption(f"Closes in {format_countdown(deadline - now)} ({deadline:%d %b %Y %H:%M %Z}).")

    existing = store.get_answers(user)
    with st.form("bonus_makeup"):
        answers = {
            qid: st.text_input(tournament.bonus_question(qid).question, value=existing.get(qid, ""))
            for qid in makeup.question_ids
        }
        if st.form_submit_button("Submit Makeup Picks", type="primary", disabled=now > deadline):
            try:
                submit_bonus_makeup(tournament, user, answers, datetime.now(timezone.utc), store)
            except BracketError as exc:
                st.error(str(exc))
            else:
                st.success("Bonus makeup picks saved.")


if __name__ == "__main__":
    main()
