""" Riot API Client for TFT """

import requests
import time
from typing import Dict, List, Optional
from urllib.parse import quote

from config import (
	RIOT_PLATFORM_URL, RIOT_REGIONAL_URL, RIOT_ROUTING, TFT_REGION,
	RATE_LIMIT_DELAY, CACHE_DURATION, REQUEST_TIMEOUT, DEFAULT_MATCH_COUNT
)


class RiotAPIError(Exception):
	"""Failed Riot API call"""

	def __init__(self, message: str, status: Optional[int] = None):
		super().__init__(message)
		self.status = status


class RiotAPIClient:
	def __init__(self, api_key: Optional[str], region: str = TFT_REGION, routing: str = RIOT_ROUTING):
		self.api_key = api_key
		self.region = region
		self.platform_url = RIOT_PLATFORM_URL.format(platform=region)
		self.regional_url = RIOT_REGIONAL_URL.format(routing=routing)
		self.headers = {
			"X-Riot-Token": api_key or "",
			"Accept": "application/json"
		}
		self.cache = {}
		self.rate_limit_delay = RATE_LIMIT_DELAY

	def make_request(self, url: str, params: Dict = None):
		"""API REQUEST"""
		if not self.api_key:
			raise RiotAPIError("RIOT_API_KEY not configured")

		cache_key = f"{url}_{params}"

		# Check cache
		if cache_key in self.cache:
			cached_data, timestamp = self.cache[cache_key]
			if time.time() - timestamp < CACHE_DURATION:
				return cached_data

		try:
			time.sleep(self.rate_limit_delay)
			response = requests.get(url, headers=self.headers, params=params, timeout=REQUEST_TIMEOUT)
		except requests.exceptions.RequestException as e:
			raise RiotAPIError(f"Riot API request failed: {e} for URL: {url}") from e

		if not response.ok:
			raise RiotAPIError(
				f"Riot API Failed: {response.status_code} {response.reason} for URL: {url}",
				response.status_code
			)

		try:
			data = response.json()
		except ValueError as e:
			raise RiotAPIError(f"Riot API returned invalid JSON for URL: {url}", response.status_code) from e

		# Cache result
		self.cache[cache_key] = (data, time.time())
		return data

	def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Dict:
		"""Account (puuid) for a Riot ID"""
		url = f"{self.regional_url}/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
		return self.make_request(url)

	def get_summoner_by_puuid(self, puuid: str) -> Dict:
		"""Summoner data (icon + summoner id)"""
		url = f"{self.platform_url}/lol/summoner/v4/summoners/by-puuid/{puuid}"
		return self.make_request(url)

	def get_league_entries(self, summoner_id: str) -> List[Dict]:
		"""TFT league entries for a summoner"""
		url = f"{self.platform_url}/tft/league/v1/entries/by-summoner/{summoner_id}"
		return self.make_request(url) or []

	def get_match_ids(self, puuid: str, count: int = DEFAULT_MATCH_COUNT) -> List[str]:
		"""Recent TFT match ids, newest first"""
		url = f"{self.regional_url}/tft/match/v1/matches/by-puuid/{puuid}/ids"
		params = {"start": 0, "count": count}
		return self.make_request(url, params) or []

	def get_match_details(self, match_id: str) -> Dict:
		"""Detailed match info"""
		url = f"{self.regional_url}/tft/match/v1/matches/{match_id}"
		return self.make_request(url)
