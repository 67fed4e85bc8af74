# config.py
import importlib
import logging
import os
from functools import lru_cache
from typing import Optional

import streamlit as st

from bracket.errors import ConfigError
from bracket.tournament import TournamentConfig

# --- IMPORTANT: EDIT THESE FOR YOUR SEASON ---
# Which tournament the app serves. Each id maps to a module under tournaments/.
TOURNAMENT_ID = os.environ.get("TOURNAMENT_ID", "t20-world-cup-2026")
TOURNAMENTS = {
    "t20-world-cup-2026": "tournaments.t20_world_cup_2026",
    "asia-cup-2025": "tournaments.asia_cup_2025",
}

ADMIN_CODE = None  # Prefer to set via environment/Secrets. Fallback can be set here (string).

# Optional: Name your competition
APP_TITLE = "Cricket Bracket Challenge"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _secret(key: str) -> Optional[str]:
    """Streamlit secret, or None when there is no secrets file / key."""
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def db_url() -> Optional[str]:
    return _secret("DB_URL") or os.environ.get("DB_URL")


def admin_code() -> Optional[str]:
    return _secret("ADMIN_CODE") or os.environ.get("ADMIN_CODE") or ADMIN_CODE


@lru_cache(maxsize=None)
def load_tournament(tournament_id: Optional[str] = None) -> TournamentConfig:
    """Build (and cache) the validated config for a tournament id."""
    tournament_id = tournament_id or TOURNAMENT_ID
    module_name = TOURNAMENTS.get(tournament_id)
    if module_name is None:
        raise ConfigError(f"Unknown tournament: {tournament_id!r} (known: {sorted(TOURNAMENTS)})")
    module = importlib.import_module(module_name)
    return TournamentConfig.from_dict(module.CONFIG)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
