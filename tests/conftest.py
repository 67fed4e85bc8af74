from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

import config
from bracket.stores import MemoryStore
from bracket.tournament import TournamentConfig

EASTERN = ZoneInfo("America/New_York")


def at(iso: str) -> datetime:
    """An aware datetime in US Eastern, the test tournament's timezone."""
    return datetime.fromisoformat(iso).replace(tzinfo=EASTERN)


def mini_config_dict(**overrides):
    data = {
        "id": "mini-cup",
        "name": "Mini Cup",
        "year": 2026,
        "timezone": "America/New_York",
        "fixture_start_time": "08:30",
        "phases": [
            {
                "id": "group-stage",
                "name": "Group Stage",
                "match_range": {"start": 1, "end": 4},
                "deadline": "2026-02-07T00:29:00",
                "scoring_type": "fixed",
                "points_per_correct": 10,
                "draw_points": 5,
            },
            {
                "id": "super4",
                "name": "Super 8s",
                "match_range": {"start": 5, "end": 6},
                "deadline": "2026-02-21T08:00:00",
                "scoring_type": "pool",
                "pool_size": 100,
            },
            {
                "id": "finals",
                "name": "Final",
                "match_range": {"start": 7, "end": 7},
                "deadline": "2026-03-08T08:00:00",
                "scoring_type": "pool",
                "pool_size": 260,
            },
        ],
        "fixtures": [
            {"match": 1, "date": "7 February", "team1": "India", "team2": "Pakistan", "venue": "Colombo", "ai_prediction": "India", "phase": "group-stage"},
            {"match": 2, "date": "7 February", "team1": "Australia", "team2": "England", "venue": "Kolkata", "ai_prediction": "Australia", "phase": "group-stage"},
            {"match": 3, "date": "8 February", "team1": "New Zealand", "team2": "South Africa", "venue": "Chennai", "ai_prediction": "South Africa", "phase": "group-stage"},
            {"match": 4, "date": "9 February", "team1": "Sri Lanka", "team2": "Afghanistan", "venue": "Pallekele", "ai_prediction": "Sri Lanka", "phase": "group-stage"},
            {"match": 5, "date": "21 February", "team1": "India", "team2": "Australia", "venue": "Ahmedabad", "phase": "super4"},
            {"match": 6, "date": "22 February", "team1": "England", "team2": "South Africa", "venue": "Mumbai", "phase": "super4"},
            {"match": 7, "date": "8 March", "team1": "TBA", "team2": "TBA", "venue": "TBA", "phase": "finals"},
        ],
        "bonus_questions": [
            {"id": "top-scorer", "question": "Tournament's Top Scorer", "ai_prediction": "Virat Kohli"},
            {"id": "top-wicket-taker", "question": "Tournament's Top Wicket-taker", "ai_prediction": "Rashid Khan"},
            {"id": "most-sixes", "question": "Most Sixes by a Player"},
            {"id": "player-of-tournament", "question": "Player of the Tournament"},
        ],
        "scoring": {
            "late_penalty_per_day": 10,
            "bonus_points_cap": 30,
            "bonus_points_per_correct": 10,
        },
        "features": {
            "chips_enabled": True,
            "bonus_questions_enabled": True,
            "ai_predictions_enabled": True,
            "fetch_fixtures_from_store": True,
            "double_up_phases": ["group-stage", "super4"],
        },
        "bonus_makeup": {
            "deadline": "2026-02-21T08:00:00",
            "question_ids": ["top-scorer", "top-wicket-taker"],
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def mini():
    return TournamentConfig.from_dict(mini_config_dict())


@pytest.fixture
def store(mini):
    return MemoryStore(mini)


@pytest.fixture
def t20():
    return config.load_tournament("t20-world-cup-2026")


GROUP_PICKS = {1: "India", 2: "Australia", 3: "South Africa", 4: "Sri Lanka"}
