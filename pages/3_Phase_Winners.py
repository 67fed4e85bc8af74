# pages/3_🏆_Phase_Winners.py
import streamlit as st

import config
from bracket import db_pg as db
from bracket.leaderboard import build_standings, phase_winners

st.set_page_config(page_title="Phase Winners", page_icon="🏆", layout="wide")


def main():
    st.title("🏆 Phase Winners")

    tournament = config.load_tournament()
    standings = build_standings(tournament, db.SqlStore(tournament))
    phase_totals, winners_by_phase = phase_winners(standings.config, standings.phase_scores)

    if phase_totals.empty:
        st.info("No phase scores yet. Enter results to see phase standings.")
        return

    for phase in standings.config.phases:
        st.subheader(phase.name)
        winners = winners_by_phase.get(phase.id)
        if winners is None or winners.empty:
            st.write("_No completed matches in this phase yet._")
            continue

        # Winners (could be multiple ties)
        st.markdown("**Winner(s):**")
        st.dataframe(winners[["user", "points"]].round(2), use_container_width=True, hide_index=True)

        st.markdown("**All Scores:**")
        sub = phase_totals[phase_totals["phase_id"] == phase.id][["user", "points"]]
        st.dataframe(sub.round(2), use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()
