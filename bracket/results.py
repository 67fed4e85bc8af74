# bracket/results.py
"""
Admin-side match data: recording winners (including draws and no-results)
and layering stored fixture updates over the static config.
"""

import logging
import re
from datetime import datetime

from bracket.phases import to_local
from bracket.submissions import log_activity
from bracket.tournament import DRAW, Fixture, TournamentConfig

logger = logging.getLogger(__name__)

_MATCH_PREFIX = re.compile(r"^match\s+", re.IGNORECASE)
DRAW_ALIASES = {"draw", "no result", "nr", "abandoned"}


def parse_match_number(value) -> int:
    """Accepts 12, "12" or "Match 12"."""
    text = _MATCH_PREFIX.sub("", str(value).strip())
    try:
        number = int(text)
    except ValueError:
        raise ValueError(f'Invalid match number: "{value}"') from None
    if number < 1:
        raise ValueError(f'Invalid match number: "{value}"')
    return number


def normalize_winner(fixture: Fixture, value) -> str:
    """Map admin input to "", team1, team2 or DRAW."""
    text = (value or "").strip()
    if not text:
        return ""
    if text.casefold() in DRAW_ALIASES:
        return DRAW
    for team in fixture.teams:
        if text.casefold() == team.casefold():
            return team
    raise ValueError(f"{text!r} did not play match {fixture.match} ({fixture.team1} vs {fixture.team2})")


def effective_config(config: TournamentConfig, store) -> TournamentConfig:
    """Config with admin-maintained fixture details (knockout teams, venues) applied."""
    if not config.features.fetch_fixtures_from_store:
        return config
    return config.with_fixture_updates(store.list_fixture_updates())


def record_result(config: TournamentConfig, store, match, winner, actor: str, now: datetime) -> str:
    """
    Write (or correct) a match result. Returns the phase id whose scores are
    now stale; no other phase needs recomputing.
    """
    number = parse_match_number(match)
    fixture = config.fixture(number)
    normalized = normalize_winner(fixture, winner)

    store.set_result(number, normalized)
    log_activity(store, to_local(config, now), "FIXTURE_UPDATED", actor,
                 f"Match {number} Winner: {normalized or '(cleared)'}")
    logger.info("Match %s result set to %r by %s", number, normalized, actor)
    return fixture.phase
