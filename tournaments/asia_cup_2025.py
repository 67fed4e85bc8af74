# tournaments/asia_cup_2025.py
"""Asia Cup 2025 (UAE). Times are US Eastern."""

CONFIG = {
    "id": "asia-cup-2025",
    "name": "Asia Cup 2025",
    "year": 2025,
    "timezone": "America/New_York",
    "fixture_start_time": "18:30",

    "phases": [
        {
            "id": "group-stage",
            "name": "Group Stage",
            "match_range": {"start": 1, "end": 12},
            "deadline": "2025-09-09T10:30:00",
            "scoring_type": "fixed",
            "points_per_correct": 10,
            "draw_points": 5,
        },
        {
            "id": "super4",
            "name": "Super 4",
            "match_range": {"start": 13, "end": 18},
            "deadline": "2025-09-20T10:30:00",
            "scoring_type": "pool",
            "pool_size": 160,
            "draw_points": 5,
        },
        {
            "id": "finals",
            "name": "Finals",
            "match_range": {"start": 19, "end": 19},
            "deadline": "2025-09-28T10:30:00",
            "scoring_type": "pool",
            "pool_size": 260,
        },
    ],

    "fixtures": [
        # group-stage
        {"match": 1, "date": "9 September", "team1": "Afghanistan", "team2": "Hong Kong", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "Afghanistan", "phase": "group-stage"},
        {"match": 2, "date": "10 September", "team1": "India", "team2": "UAE", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "India", "phase": "group-stage"},
        {"match": 3, "date": "11 September", "team1": "Bangladesh", "team2": "Hong Kong", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "Bangladesh", "phase": "group-stage"},
        {"match": 4, "date": "12 September", "team1": "Oman", "team2": "Pakistan", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "Pakistan", "phase": "group-stage"},
        {"match": 5, "date": "13 September", "team1": "Bangladesh", "team2": "Sri Lanka", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "Bangladesh", "phase": "group-stage"},
        {"match": 6, "date": "14 September", "team1": "India", "team2": "Pakistan", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "India", "phase": "group-stage"},
        {"match": 7, "date": "15 September", "team1": "Hong Kong", "team2": "Sri Lanka", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "Sri Lanka", "phase": "group-stage"},
        {"match": 8, "date": "15 September", "team1": "UAE", "team2": "Oman", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "UAE", "phase": "group-stage"},
        {"match": 9, "date": "16 September", "team1": "Afghanistan", "team2": "Bangladesh", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "Afghanistan", "phase": "group-stage"},
        {"match": 10, "date": "17 September", "team1": "UAE", "team2": "Pakistan", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "Pakistan", "phase": "group-stage"},
        {"match": 11, "date": "18 September", "team1": "Afghanistan", "team2": "Sri Lanka", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "Afghanistan", "phase": "group-stage"},
        {"match": 12, "date": "19 September", "team1": "India", "team2": "Oman", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "India", "phase": "group-stage"},

        # super4
        {"match": 13, "date": "20 September", "team1": "Sri Lanka", "team2": "Bangladesh", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "Sri Lanka", "phase": "super4"},
        {"match": 14, "date": "21 September", "team1": "India", "team2": "Pakistan", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "India", "phase": "super4"},
        {"match": 15, "date": "23 September", "team1": "Pakistan", "team2": "Sri Lanka", "venue": "Sheikh Zayed Stadium, Abu Dhabi", "ai_prediction": "Pakistan", "phase": "super4"},
        {"match": 16, "date": "24 September", "team1": "India", "team2": "Bangladesh", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "India", "phase": "super4"},
        {"match": 17, "date": "25 September", "team1": "Pakistan", "team2": "Bangladesh", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "Pakistan", "phase": "super4"},
        {"match": 18, "date": "26 September", "team1": "India", "team2": "Sri Lanka", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "India", "phase": "super4"},

        # finals
        {"match": 19, "date": "28 September", "team1": "India", "team2": "Pakistan", "venue": "Dubai International Stadium, Dubai", "ai_prediction": "India", "phase": "finals"},
    ],

    "bonus_questions": [
        {"id": "top-scorer", "question": "Tournament's Top Scorer", "ai_prediction": "Shubman Gill (India)"},
        {"id": "top-wicket-taker", "question": "Tournament's Top Wicket-taker", "ai_prediction": "Rashid Khan (Afghanistan)"},
        {"id": "highest-team-score", "question": "Team with the Highest Single Match Score", "ai_prediction": "India"},
        {"id": "lowest-team-score", "question": "Team with the Lowest Single Match Score", "ai_prediction": "Hong Kong"},
        {"id": "most-sixes", "question": "Most Sixes by a Player", "ai_prediction": "Suryakumar Yadav (India)"},
        {"id": "most-centuries", "question": "Most Centuries by a Player", "ai_prediction": "Shubman Gill (India)"},
        {"id": "most-catches", "question": "Player with the Most Catches", "ai_prediction": "Suryakumar Yadav (India)"},
        {"id": "most-potm", "question": "Player with the Most Player-of-the-Match Awards", "ai_prediction": "Rashid Khan (Afghanistan)"},
        {"id": "best-economy", "question": "Best Bowling Economy (minimum 10 overs)", "ai_prediction": "Jasprit Bumrah (India)"},
        {"id": "highest-individual", "question": "Highest Individual Score", "ai_prediction": "Shubman Gill (India)"},
        {"id": "fastest-fifty", "question": "Fastest Fifty", "ai_prediction": "Abhishek Sharma (India)"},
        {"id": "fastest-century", "question": "Fastest Century", "ai_prediction": "Suryakumar Yadav (India)"},
        {"id": "player-of-tournament", "question": "Player of the Tournament", "ai_prediction": "Suryakumar Yadav (India)"},
    ],

    "teams": {
        "India": {"primary": "#FF9933", "secondary": "#138808", "flag": "🇮🇳"},
        "Bangladesh": {"primary": "#006A4E", "secondary": "#F42A41", "flag": "🇧🇩"},
        "Pakistan": {"primary": "#00684A", "secondary": "#FFFFFF", "flag": "🇵🇰"},
        "Afghanistan": {"primary": "#D32011", "secondary": "#000000", "flag": "🇦🇫"},
        "Sri Lanka": {"primary": "#FFB300", "secondary": "#0056B3", "flag": "🇱🇰"},
        "Oman": {"primary": "#EE2737", "secondary": "#009639", "flag": "🇴🇲"},
        "UAE": {"primary": "#00732F", "secondary": "#FF0000", "flag": "🇦🇪"},
        "Hong Kong": {"primary": "#DE2910", "secondary": "#FFFFFF", "flag": "🇭🇰"},
    },

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
}
