# pages/2_📊_Leaderboard.py
import streamlit as st

import config
from bracket import db_pg as db
from bracket.leaderboard import overall_leaderboard

st.set_page_config(page_title="Leaderboard", page_icon="📊", layout="wide")


def display_frame(lb):
    out = lb.rename(columns={
        "rank": "Rank",
        "previous_rank": "Previous Rank",
        "user": "Player",
        "bonus_points": "Bonus",
        "penalty": "Penalty",
        "total_points": "Total",
        "submitted_at": "Group Stage Submitted",
        "chips_used": "Chips Used",
    })
    if out["Previous Rank"].isna().all():
        out = out.drop(columns="Previous Rank")
    return out.round(2)


def main():
    st.title("📊 Overall Leaderboard")

    tournament = config.load_tournament()
    lb = overall_leaderboard(tournament, db.SqlStore(tournament))
    if lb.empty:
        st.info("No submissions yet. Once picks are submitted and results entered, scores will appear here.")
        return

    st.dataframe(
        display_frame(lb),
        use_container_width=True,
        hide_index=True,
    )

    csv = lb.to_csv(index=False).encode("utf-8")
    st.download_button("Download Leaderboard (CSV)", csv, "leaderboard.csv", "text/csv")


if __name__ == "__main__":
    main()
