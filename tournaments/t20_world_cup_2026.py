# tournaments/t20_world_cup_2026.py
"""
ICC Men's T20 World Cup 2026.

Group stage: 40 matches (4 groups of 5), Feb 7-20
Super 8s:    12 matches (2 groups of 4), Feb 21 - Mar 1
Semi-finals: Mar 3 and 5
Final:       Mar 8

Times are US Eastern; night matches in India start 08:30 EST.
"""

CONFIG = {
    "id": "t20-world-cup-2026",
    "name": "ICC T20 World Cup 2026",
    "year": 2026,
    "timezone": "America/New_York",
    "fixture_start_time": "08:30",

    "phases": [
        {
            "id": "group-stage",
            "name": "Group Stage",
            "match_range": {"start": 1, "end": 40},
            "deadline": "2026-02-07T00:29:00",
            "scoring_type": "fixed",
            "points_per_correct": 10,
            "draw_points": 5,
        },
        {
            "id": "super4",
            "name": "Super 8s",
            "match_range": {"start": 41, "end": 52},
            "deadline": "2026-02-21T08:00:00",
            "scoring_type": "pool",
            "pool_size": 160,
        },
        {
            "id": "semifinals",
            "name": "Semi-Finals",
            "match_range": {"start": 53, "end": 54},
            "deadline": "2026-03-03T08:00:00",
            "scoring_type": "pool",
            "pool_size": 160,
        },
        {
            "id": "finals",
            "name": "Final",
            "match_range": {"start": 55, "end": 55},
            "deadline": "2026-03-08T08:00:00",
            "scoring_type": "pool",
            "pool_size": 260,
        },
    ],

    # Knockout teams stay TBA here; admins fill them in through fixture updates.
    "fixtures": [
        # group-stage
        {"match": 1, "date": "7 February", "team1": "Netherlands", "team2": "Pakistan", "venue": "Colombo (SSC)", "ai_prediction": "Pakistan", "phase": "group-stage"},
        {"match": 2, "date": "7 February", "team1": "Scotland", "team2": "West Indies", "venue": "Eden Gardens, Kolkata", "ai_prediction": "West Indies", "phase": "group-stage"},
        {"match": 3, "date": "7 February", "team1": "India", "team2": "USA", "venue": "Wankhede, Mumbai", "ai_prediction": "India", "phase": "group-stage"},
        {"match": 4, "date": "8 February", "team1": "Afghanistan", "team2": "New Zealand", "venue": "Chennai", "ai_prediction": "Afghanistan", "phase": "group-stage"},
        {"match": 5, "date": "8 February", "team1": "England", "team2": "Nepal", "venue": "Wankhede, Mumbai", "ai_prediction": "England", "phase": "group-stage"},
        {"match": 6, "date": "8 February", "team1": "Sri Lanka", "team2": "Ireland", "venue": "Colombo (RPS)", "ai_prediction": "Sri Lanka", "phase": "group-stage"},
        {"match": 7, "date": "9 February", "team1": "Italy", "team2": "Scotland", "venue": "Eden Gardens, Kolkata", "ai_prediction": "Scotland", "phase": "group-stage"},
        {"match": 8, "date": "9 February", "team1": "Oman", "team2": "Zimbabwe", "venue": "Colombo (SSC)", "ai_prediction": "Zimbabwe", "phase": "group-stage"},
        {"match": 9, "date": "9 February", "team1": "Canada", "team2": "South Africa", "venue": "Ahmedabad", "ai_prediction": "South Africa", "phase": "group-stage"},
        {"match": 10, "date": "10 February", "team1": "Namibia", "team2": "Netherlands", "venue": "Delhi", "ai_prediction": "Netherlands", "phase": "group-stage"},
        {"match": 11, "date": "10 February", "team1": "New Zealand", "team2": "UAE", "venue": "Chennai", "ai_prediction": "New Zealand", "phase": "group-stage"},
        {"match": 12, "date": "10 February", "team1": "Pakistan", "team2": "USA", "venue": "Colombo (SSC)", "ai_prediction": "Pakistan", "phase": "group-stage"},
        {"match": 13, "date": "11 February", "team1": "Afghanistan", "team2": "South Africa", "venue": "Ahmedabad", "ai_prediction": "South Africa", "phase": "group-stage"},
        {"match": 14, "date": "11 February", "team1": "Australia", "team2": "Ireland", "venue": "Colombo (RPS)", "ai_prediction": "Australia", "phase": "group-stage"},
        {"match": 15, "date": "11 February", "team1": "England", "team2": "West Indies", "venue": "Wankhede, Mumbai", "ai_prediction": "England", "phase": "group-stage"},
        {"match": 16, "date": "12 February", "team1": "Sri Lanka", "team2": "Oman", "venue": "Pallekele", "ai_prediction": "Sri Lanka", "phase": "group-stage"},
        {"match": 17, "date": "12 February", "team1": "Italy", "team2": "Nepal", "venue": "Wankhede, Mumbai", "ai_prediction": "Nepal", "phase": "group-stage"},
        {"match": 18, "date": "12 February", "team1": "India", "team2": "Namibia", "venue": "Delhi", "ai_prediction": "India", "phase": "group-stage"},
        {"match": 19, "date": "13 February", "team1": "Australia", "team2": "Zimbabwe", "venue": "Colombo (RPS)", "ai_prediction": "Australia", "phase": "group-stage"},
        {"match": 20, "date": "13 February", "team1": "Canada", "team2": "UAE", "venue": "Delhi", "ai_prediction": "Canada", "phase": "group-stage"},
        {"match": 21, "date": "13 February", "team1": "Netherlands", "team2": "USA", "venue": "Chennai", "ai_prediction": "Netherlands", "phase": "group-stage"},
        {"match": 22, "date": "14 February", "team1": "Ireland", "team2": "Oman", "venue": "Colombo (SSC)", "ai_prediction": "Ireland", "phase": "group-stage"},
        {"match": 23, "date": "14 February", "team1": "England", "team2": "Scotland", "venue": "Eden Gardens, Kolkata", "ai_prediction": "England", "phase": "group-stage"},
        {"match": 24, "date": "14 February", "team1": "New Zealand", "team2": "South Africa", "venue": "Ahmedabad", "ai_prediction": "South Africa", "phase": "group-stage"},
        {"match": 25, "date": "15 February", "team1": "Nepal", "team2": "West Indies", "venue": "Wankhede, Mumbai", "ai_prediction": "West Indies", "phase": "group-stage"},
        {"match": 26, "date": "15 February", "team1": "Namibia", "team2": "USA", "venue": "Chennai", "ai_prediction": "Namibia", "phase": "group-stage"},
        {"match": 27, "date": "15 February", "team1": "India", "team2": "Pakistan", "venue": "Colombo (RPS)", "ai_prediction": "India", "phase": "group-stage"},
        {"match": 28, "date": "16 February", "team1": "Afghanistan", "team2": "UAE", "venue": "Delhi", "ai_prediction": "Afghanistan", "phase": "group-stage"},
        {"match": 29, "date": "16 February", "team1": "England", "team2": "Italy", "venue": "Eden Gardens, Kolkata", "ai_prediction": "England", "phase": "group-stage"},
        {"match": 30, "date": "16 February", "team1": "Australia", "team2": "Sri Lanka", "venue": "Pallekele", "ai_prediction": "Australia", "phase": "group-stage"},
        {"match": 31, "date": "17 February", "team1": "Canada", "team2": "New Zealand", "venue": "Chennai", "ai_prediction": "New Zealand", "phase": "group-stage"},
        {"match": 32, "date": "17 February", "team1": "Ireland", "team2": "Zimbabwe", "venue": "Pallekele", "ai_prediction": "Ireland", "phase": "group-stage"},
        {"match": 33, "date": "17 February", "team1": "Nepal", "team2": "Scotland", "venue": "Wankhede, Mumbai", "ai_prediction": "Scotland", "phase": "group-stage"},
        {"match": 34, "date": "18 February", "team1": "South Africa", "team2": "UAE", "venue": "Delhi", "ai_prediction": "South Africa", "phase": "group-stage"},
        {"match": 35, "date": "18 February", "team1": "Namibia", "team2": "Pakistan", "venue": "Colombo (SSC)", "ai_prediction": "Pakistan", "phase": "group-stage"},
        {"match": 36, "date": "18 February", "team1": "India", "team2": "Netherlands", "venue": "Ahmedabad", "ai_prediction": "India", "phase": "group-stage"},
        {"match": 37, "date": "19 February", "team1": "Italy", "team2": "West Indies", "venue": "Eden Gardens, Kolkata", "ai_prediction": "West Indies", "phase": "group-stage"},
        {"match": 38, "date": "19 February", "team1": "Sri Lanka", "team2": "Zimbabwe", "venue": "Colombo (RPS)", "ai_prediction": "Sri Lanka", "phase": "group-stage"},
        {"match": 39, "date": "19 February", "team1": "Afghanistan", "team2": "Canada", "venue": "Chennai", "ai_prediction": "Afghanistan", "phase": "group-stage"},
        {"match": 40, "date": "20 February", "team1": "Australia", "team2": "Oman", "venue": "Pallekele", "ai_prediction": "Australia", "phase": "group-stage"},

        # super4
        {"match": 41, "date": "21 February", "team1": "TBA", "team2": "TBA", "venue": "Colombo (RPS)", "phase": "super4"},
        {"match": 42, "date": "22 February", "team1": "TBA", "team2": "TBA", "venue": "Pallekele", "phase": "super4"},
        {"match": 43, "date": "22 February", "team1": "TBA", "team2": "TBA", "venue": "Ahmedabad", "phase": "super4"},
        {"match": 44, "date": "23 February", "team1": "TBA", "team2": "TBA", "venue": "Wankhede, Mumbai", "phase": "super4"},
        {"match": 45, "date": "24 February", "team1": "TBA", "team2": "TBA", "venue": "Pallekele", "phase": "super4"},
        {"match": 46, "date": "25 February", "team1": "TBA", "team2": "TBA", "venue": "Colombo (RPS)", "phase": "super4"},
        {"match": 47, "date": "26 February", "team1": "TBA", "team2": "TBA", "venue": "Ahmedabad", "phase": "super4"},
        {"match": 48, "date": "26 February", "team1": "TBA", "team2": "TBA", "venue": "Chennai", "phase": "super4"},
        {"match": 49, "date": "27 February", "team1": "TBA", "team2": "TBA", "venue": "Colombo (RPS)", "phase": "super4"},
        {"match": 50, "date": "28 February", "team1": "TBA", "team2": "TBA", "venue": "Pallekele", "phase": "super4"},
        {"match": 51, "date": "1 March", "team1": "TBA", "team2": "TBA", "venue": "Delhi", "phase": "super4"},
        {"match": 52, "date": "1 March", "team1": "TBA", "team2": "TBA", "venue": "Eden Gardens, Kolkata", "phase": "super4"},

        # semifinals
        {"match": 53, "date": "3 March", "team1": "TBA", "team2": "TBA", "venue": "TBA", "phase": "semifinals"},
        {"match": 54, "date": "5 March", "team1": "TBA", "team2": "TBA", "venue": "Wankhede, Mumbai", "phase": "semifinals"},

        # finals
        {"match": 55, "date": "8 March", "team1": "TBA", "team2": "TBA", "venue": "TBA", "phase": "finals"},
    ],

    "bonus_questions": [
        {"id": "top-scorer", "question": "Tournament's Top Scorer", "ai_prediction": "Suryakumar Yadav"},
        {"id": "top-wicket-taker", "question": "Tournament's Top Wicket-taker", "ai_prediction": "Rashid Khan"},
        {"id": "highest-team-score", "question": "Team with the Highest Single Match Score", "ai_prediction": "India"},
        {"id": "lowest-team-score", "question": "Team with the Lowest Single Match Score", "ai_prediction": "Italy"},
        {"id": "most-sixes", "question": "Most Sixes by a Player", "ai_prediction": "Shimron Hetmyer"},
        {"id": "most-catches", "question": "Player with the Most Catches", "ai_prediction": "Suryakumar Yadav"},
        {"id": "most-potm", "question": "Player with the Most Player-of-the-Match Awards", "ai_prediction": "Jasprit Bumrah"},
        {"id": "best-economy", "question": "Best Bowling Economy (minimum 10 overs)", "ai_prediction": "Rashid Khan"},
        {"id": "highest-individual", "question": "Highest Individual Score", "ai_prediction": "Travis Head"},
        {"id": "fastest-fifty", "question": "Fastest Fifty", "ai_prediction": "Hardik Pandya"},
        {"id": "player-of-tournament", "question": "Player of the Tournament", "ai_prediction": "Jasprit Bumrah"},
    ],

    "teams": {
        # Group A
        "India": {"primary": "#FF9933", "secondary": "#138808", "flag": "🇮🇳"},
        "Pakistan": {"primary": "#00684A", "secondary": "#FFFFFF", "flag": "🇵🇰"},
        "Netherlands": {"primary": "#FF6600", "secondary": "#FFFFFF", "flag": "🇳🇱"},
        "USA": {"primary": "#002868", "secondary": "#BF0A30", "flag": "🇺🇸"},
        "Namibia": {"primary": "#003580", "secondary": "#D21034", "flag": "🇳🇦"},
        # Group B
        "Australia": {"primary": "#FFD100", "secondary": "#007749", "flag": "🇦🇺"},
        "Sri Lanka": {"primary": "#FFB300", "secondary": "#0056B3", "flag": "🇱🇰"},
        "Ireland": {"primary": "#169B62", "secondary": "#FFFFFF", "flag": "🇮🇪"},
        "Oman": {"primary": "#EE2737", "secondary": "#009639", "flag": "🇴🇲"},
        "Zimbabwe": {"primary": "#FCE300", "secondary": "#009739", "flag": "🇿🇼"},
        # Group C
        "England": {"primary": "#012169", "secondary": "#C8102E", "flag": "🏴󠁧󠁢󠁥󠁮󠁧󠁿"},
        "West Indies": {"primary": "#7B0041", "secondary": "#FFD100", "flag": "🌴"},
        "Scotland": {"primary": "#005EB8", "secondary": "#FFFFFF", "flag": "🏴󠁧󠁢󠁳󠁣󠁴󠁿"},
        "Nepal": {"primary": "#DC143C", "secondary": "#003893", "flag": "🇳🇵"},
        "Italy": {"primary": "#009246", "secondary": "#CE2B37", "flag": "🇮🇹"},
        # Group D
        "South Africa": {"primary": "#007749", "secondary": "#FFD100", "flag": "🇿🇦"},
        "New Zealand": {"primary": "#000000", "secondary": "#FFFFFF", "flag": "🇳🇿"},
        "Afghanistan": {"primary": "#D32011", "secondary": "#000000", "flag": "🇦🇫"},
        "Canada": {"primary": "#FF0000", "secondary": "#FFFFFF", "flag": "🇨🇦"},
        "UAE": {"primary": "#00732F", "secondary": "#FF0000", "flag": "🇦🇪"},
        "TBA": {"primary": "#808080", "secondary": "#FFFFFF", "flag": "❓"},
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
        "wildcard_phases": ["group-stage", "super4", "semifinals", "finals"],
    },

    # Second chance at the two player questions, open until the Super 8s lock.
    "bonus_makeup": {
        "deadline": "2026-02-21T08:00:00",
        "question_ids": ["top-scorer", "top-wicket-taker"],
    },
}
