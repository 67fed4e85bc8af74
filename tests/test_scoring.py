from dataclasses import replace

import pytest

import config
from bracket.errors import InvalidPhaseError
from bracket.scoring import (
    days_late,
    days_late_calendar,
    days_late_ceil_24h,
    pool_share,
    score_bonus,
    score_phase,
)
from bracket.stores import ChipUsage
from bracket.tournament import DRAW, TournamentConfig
from conftest import GROUP_PICKS, at, mini_config_dict

GROUP_DEADLINE = at("2026-02-07T00:29:00")


# ----------------------------
# Fixed scoring
# ----------------------------

def test_fixed_points_and_draw(mini):
    results = {1: "India", 2: DRAW, 3: "New Zealand"}
    scores = score_phase(mini, "group-stage", {"asha": GROUP_PICKS}, results)
    s = scores["asha"]
    assert s.match_points == {1: 10.0, 2: 5.0, 3: 0.0}
    assert s.points == 15.0
    assert s.correct == [1]


def test_draw_needs_a_pick(mini):
    scores = score_phase(mini, "group-stage", {"ben": {1: "India"}}, {2: DRAW})
    assert scores["ben"].points == 0.0


def test_undecided_matches_do_not_score(mini):
    scores = score_phase(mini, "group-stage", {"asha": GROUP_PICKS}, {1: "", 2: None})
    assert scores["asha"].match_points == {}


def test_score_phase_is_idempotent(mini):
    picks = {"asha": GROUP_PICKS, "ben": {1: "Pakistan", 2: "England", 3: "South Africa", 4: "Afghanistan"}}
    results = {1: "India", 3: "South Africa"}
    first = score_phase(mini, "group-stage", picks, results)
    second = score_phase(mini, "group-stage", picks, results)
    assert {u: s.points for u, s in first.items()} == {u: s.points for u, s in second.items()}


def test_unknown_scoring_type_raises(mini):
    broken = replace(mini, phases=(replace(mini.phases[0], scoring_type="elo"),) + mini.phases[1:])
    with pytest.raises(InvalidPhaseError):
        score_phase(broken, "group-stage", {"asha": GROUP_PICKS}, {1: "India"})


# ----------------------------
# Pool scoring
# ----------------------------

def test_super8_pool_split_between_correct_pickers(t20):
    t20 = t20.with_fixture_updates(
        {41: {"team1": "India", "team2": "Australia"}}
    )
    picks = {
        "a": {41: "India"},
        "b": {41: "India"},
        "c": {41: "Australia"},
        "d": {41: "Australia"},
        "e": {41: "Australia"},
    }
    scores = score_phase(t20, "super4", picks, {41: "India"})
    assert pool_share(t20, "super4") == pytest.approx(160 / 12)
    assert scores["a"].points == pytest.approx(6.67, abs=0.01)
    assert scores["b"].points == pytest.approx(6.67, abs=0.01)
    assert scores["c"].points == 0.0
    # the match never pays out more than its share
    assert sum(s.points for s in scores.values()) == pytest.approx(160 / 12)


def test_pool_forfeit_when_nobody_is_right(mini):
    picks = {"a": {5: "Australia", 6: "South Africa"}, "b": {5: "Australia", 6: "England"}}
    scores = score_phase(mini, "super4", picks, {5: "India", 6: "England"})
    assert scores["a"].points == 0.0
    assert scores["b"].points == pytest.approx(50.0)


def test_pool_redistribute_policy():
    data = mini_config_dict()
    data["scoring"]["pool_forfeit_policy"] = "redistribute"
    cfg = TournamentConfig.from_dict(data)
    picks = {"a": {5: "Australia", 6: "South Africa"}, "b": {5: "Australia", 6: "England"}}
    scores = score_phase(cfg, "super4", picks, {5: "India", 6: "England"})
    assert scores["b"].points == pytest.approx(100.0)
    assert sum(s.points for s in scores.values()) == pytest.approx(100.0)


def test_pool_draw_with_flat_draw_points():
    asia = config.load_tournament("asia-cup-2025")
    picks = {"a": {13: "Sri Lanka"}, "b": {13: "Bangladesh"}, "c": {14: "India"}}
    scores = score_phase(asia, "super4", picks, {13: DRAW})
    assert scores["a"].points == 5.0
    assert scores["b"].points == 5.0
    assert scores["c"].points == 0.0


def test_pool_draw_without_draw_points_is_forfeited(mini):
    scores = score_phase(mini, "super4", {"a": {5: "India"}}, {5: DRAW})
    assert scores["a"].points == 0.0


# ----------------------------
# Late submissions
# ----------------------------

def test_days_late_policies():
    assert days_late_ceil_24h(GROUP_DEADLINE, GROUP_DEADLINE) == 0
    assert days_late_ceil_24h(GROUP_DEADLINE, at("2026-02-07T01:29:00")) == 1
    assert days_late_calendar(GROUP_DEADLINE, at("2026-02-07T01:29:00")) == 1
    # 25 hours late counts as 2 days under both policies
    assert days_late_ceil_24h(GROUP_DEADLINE, at("2026-02-08T01:29:00")) == 2
    assert days_late_calendar(GROUP_DEADLINE, at("2026-02-08T01:29:00")) == 2


def test_calendar_policy_counts_touched_days():
    # 23 hours late but across midnight
    assert days_late_ceil_24h(GROUP_DEADLINE, at("2026-02-07T23:29:00")) == 1
    assert days_late_calendar(at("2026-02-06T23:00:00"), at("2026-02-07T01:00:00")) == 2


def test_ceil_policy_counts_elapsed_hours_across_dst():
    # clocks go forward on 8 March, so this is 23.5 real hours
    assert days_late_ceil_24h(at("2026-03-07T08:00:00"), at("2026-03-08T08:30:00")) == 1
    assert days_late_ceil_24h(at("2026-03-07T08:00:00"), at("2026-03-08T09:00:30")) == 2


def test_late_penalty_across_dst_switch():
    data = mini_config_dict()
    data["phases"][1]["deadline"] = "2026-03-07T08:00:00"
    cfg = TournamentConfig.from_dict(data)
    submitted = {"asha": at("2026-03-08T08:30:00")}
    s = score_phase(cfg, "super4", {"asha": {5: "India", 6: "England"}}, {}, submitted_at=submitted)["asha"]
    assert s.days_late == 1
    assert s.late_penalty == 10.0


def test_days_late_uses_configured_policy(mini):
    assert days_late(mini, "group-stage", at("2026-02-08T01:29:00")) == 2


def test_late_penalty_and_started_matches_excluded(mini):
    submitted = {"asha": at("2026-02-08T10:00:00")}
    results = {1: "India", 2: "Australia", 3: "South Africa", 4: "Sri Lanka"}
    s = score_phase(mini, "group-stage", {"asha": GROUP_PICKS}, results, submitted_at=submitted)["asha"]
    assert s.days_late == 2
    assert s.late_penalty == 20.0
    assert s.late_excluded == [1, 2, 3]
    assert s.points == 10.0
    assert s.net_points == -10.0
    assert s.correct == [4]


def test_on_time_submission_has_no_penalty(mini):
    submitted = {"asha": at("2026-02-06T10:00:00")}
    s = score_phase(mini, "group-stage", {"asha": GROUP_PICKS}, {1: "India"}, submitted_at=submitted)["asha"]
    assert s.late_penalty == 0.0
    assert s.points == 10.0


def test_late_picks_do_not_dilute_pool(mini):
    picks = {"early": {5: "India", 6: "England"}, "late": {5: "India", 6: "England"}}
    submitted = {"early": at("2026-02-20T10:00:00"), "late": at("2026-02-21T09:00:00")}
    scores = score_phase(mini, "super4", picks, {5: "India"}, submitted_at=submitted)
    assert scores["early"].points == pytest.approx(50.0)
    assert scores["late"].late_excluded == [5]
    assert scores["late"].points == 0.0


# ----------------------------
# Double Up
# ----------------------------

def test_double_up_doubles_match_points(mini):
    chips = {"asha": ChipUsage(double_up=1)}
    s = score_phase(mini, "group-stage", {"asha": GROUP_PICKS}, {1: "India"}, chip_usages=chips)["asha"]
    assert s.match_points[1] == 20.0
    assert s.double_up_match == 1
    assert s.double_up_points == 10.0


def test_double_up_on_wrong_pick_stays_zero(mini):
    chips = {"asha": ChipUsage(double_up=1)}
    s = score_phase(mini, "group-stage", {"asha": GROUP_PICKS}, {1: "Pakistan"}, chip_usages=chips)["asha"]
    assert s.points == 0.0


def test_double_up_ignored_where_not_allowed(mini):
    cfg = mini.with_fixture_updates({7: {"team1": "India", "team2": "England"}})
    chips = {"asha": ChipUsage(double_up=7)}
    s = score_phase(cfg, "finals", {"asha": {7: "India"}}, {7: "India"}, chip_usages=chips)["asha"]
    assert s.points == pytest.approx(260.0)
    assert s.double_up_match is None


# ----------------------------
# Bonus
# ----------------------------

def test_bonus_capped(mini):
    answers = {"asha": {
        "top-scorer": "virat kohli ",
        "top-wicket-taker": "Rashid Khan",
        "most-sixes": "Glenn Maxwell",
        "player-of-tournament": "Jasprit Bumrah",
    }}
    actuals = {
        "top-scorer": "Virat Kohli",
        "top-wicket-taker": ["Rashid Khan", "Adil Rashid"],
        "most-sixes": ["Glenn Maxwell"],
        "player-of-tournament": "Jasprit Bumrah",
    }
    b = score_bonus(mini, answers, actuals)["asha"]
    assert len(b.correct) == 4
    assert b.raw_points == 40.0
    assert b.points == 30.0


def test_bonus_skips_unanswered_questions(mini):
    b = score_bonus(mini, {"asha": {"top-scorer": "Virat Kohli", "most-sixes": "X"}},
                    {"top-scorer": "Virat Kohli", "most-sixes": []})["asha"]
    assert b.correct == ["top-scorer"]
    assert b.points == 10.0


def test_bonus_uncapped():
    data = mini_config_dict()
    data["scoring"]["bonus_points_cap"] = None
    cfg = TournamentConfig.from_dict(data)
    answers = {"asha": {"top-scorer": "A", "top-wicket-taker": "B", "most-sixes": "C", "player-of-tournament": "D"}}
    actuals = {"top-scorer": "A", "top-wicket-taker": "B", "most-sixes": "C", "player-of-tournament": "D"}
    assert score_bonus(cfg, answers, actuals)["asha"].points == 40.0


def test_bonus_disabled():
    data = mini_config_dict()
    data["features"]["bonus_questions_enabled"] = False
    cfg = TournamentConfig.from_dict(data)
    assert score_bonus(cfg, {"asha": {"top-scorer": "A"}}, {"top-scorer": "A"}) == {}
