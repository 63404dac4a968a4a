""" Config for the TFT roster tracker"""

import os
from typing import List, Optional

from dotenv import load_dotenv

from models import PlayerIdentity

load_dotenv()

# Credentials
RIOT_API_KEY = os.getenv("RIOT_API_KEY")
DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")

# RIOT APIS
TFT_REGION = os.getenv("TFT_REGION", "tr1")
# Account and match endpoints use regional routing values, not platforms
RIOT_ROUTING = os.getenv("RIOT_ROUTING", "europe")

RIOT_PLATFORM_URL = "https://{platform}.api.riotgames.com"
RIOT_REGIONAL_URL = "https://{routing}.api.riotgames.com"

DEFAULT_PROFILE_ICON_ID = 0

# Limiting
RATE_LIMIT_DELAY = 0.1
MATCH_DETAIL_DELAY = 0.01
CACHE_DURATION = 300
REQUEST_TIMEOUT = 10

DEFAULT_MATCH_COUNT = 20
REFRESH_INTERVAL = 60

RANKED_TFT_QUEUE = "RANKED_TFT"

# Dashboard filters
FILTER_MODES = ("today", "last10", "last20")
DEFAULT_FILTER_MODE = "last20"
FILTER_LABELS = {
	"today": "Today",
	"last10": "Last 10",
	"last20": "Last 20",
}
FILTER_SIZES = {
	"last10": 10,
	"last20": 20,
}

COMMON_MATCH_DISPLAY_LIMIT = 20

# Tracked players
DEFAULT_ROSTER = [
	"azeotrop#TR1",
	"JitanX#TR1",
	"AAykut#TR1",
	"Atìì#3233",
]


def load_roster(raw: Optional[str] = None) -> List[PlayerIdentity]:
	"""Roster from a comma separated Name#Tag list, TFT_ROSTER or the default"""
	if raw is None:
		raw = os.getenv("TFT_ROSTER", "")

	entries = [entry.strip() for entry in raw.split(",") if entry.strip()]
	if not entries:
		entries = DEFAULT_ROSTER

	return [PlayerIdentity.from_riot_id(entry) for entry in entries]
