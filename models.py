""" Data models for tracked players and their TFT matches """

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

PROFILE_ICON_URL = "https://raw.communitydragon.org/latest/plugins/rcp-be-lol-game-data/global/default/v1/profile-icons/{icon_id}.jpg"

TRAIT_PREFIX = re.compile(r"^(Set|TFT|TFTSet)\d+_")
UNIT_PREFIX = re.compile(r"^TFT\d*_")


@dataclass
class PlayerIdentity:
	"""Configured Riot ID"""
	name: str
	tag: str

	@property
	def riot_id(self) -> str:
		return f"{self.name}#{self.tag}"

	@classmethod
	def from_riot_id(cls, riot_id: str) -> "PlayerIdentity":
		if '#' not in riot_id:
			raise ValueError(f"Invalid Riot ID format: {riot_id!r}. Use: PlayerName#Tag")
		name, tag = riot_id.split('#', 1)
		name, tag = name.strip(), tag.strip()
		if not name or not tag:
			raise ValueError(f"Invalid Riot ID format: {riot_id!r}. Use: PlayerName#Tag")
		return cls(name=name, tag=tag)


@dataclass
class RankedStanding:
	"""Ranked TFT standing"""
	tier: str
	rank: str
	league_points: int

	@property
	def display(self) -> str:
		return f"{self.tier} {self.rank} ({self.league_points} LP)"


@dataclass
class Trait:
	name: str
	num_units: int
	tier_current: int
	style: int  # 0=None, 1=Bronze, 2=Silver, 3=Gold, 4=Chromatic

	@property
	def is_active(self) -> bool:
		return self.tier_current > 0

	@property
	def display_name(self) -> str:
		name = TRAIT_PREFIX.sub("", self.name)
		name = re.sub(r"Unique$", "", name)
		return name.split("_")[-1] or self.name


@dataclass
class Unit:
	character_id: str
	tier: int  # Star level
	item_names: List[str] = field(default_factory=list)

	@property
	def display_name(self) -> str:
		return UNIT_PREFIX.sub("", self.character_id)


@dataclass
class GameDetail:
	game_datetime: int  # epoch millis
	game_length: float
	game_version: str


@dataclass
class MatchResult:
	"""One player's result in one match"""
	match_id: str
	placement: int
	traits: List[Trait]
	units: List[Unit]
	game_detail: GameDetail

	@property
	def timestamp(self) -> int:
		return self.game_detail.game_datetime

	@property
	def is_top4(self) -> bool:
		return self.placement <= 4

	@property
	def is_win(self) -> bool:
		return self.placement == 1

	def top_traits(self, limit: int = 2) -> List[Trait]:
		active = [trait for trait in self.traits if trait.is_active]
		return sorted(active, key=lambda t: t.style, reverse=True)[:limit]


@dataclass
class PlayerRecord:
	"""Tracked player, rebuilt on every fetch cycle"""
	name: str
	tag: str
	puuid: str
	summoner_id: Optional[str]
	profile_icon_id: Optional[int]
	rank: Optional[RankedStanding]

	# Newest first
	recent_matches: List[MatchResult] = field(default_factory=list)

	@property
	def riot_id(self) -> str:
		return f"{self.name}#{self.tag}"

	@property
	def profile_icon_url(self) -> str:
		icon_id = self.profile_icon_id if self.profile_icon_id is not None else 0
		return PROFILE_ICON_URL.format(icon_id=icon_id)


@dataclass
class CommonMatch:
	"""Match shared by two or more tracked players"""
	match_id: str
	placements: Dict[str, int]  # puuid -> placement
	timestamp: int


@dataclass
class PlayerStats:
	"""Stats for one player over the active filter window"""
	player: PlayerRecord
	total_points: int
	avg_points: str
	avg_placement: str
	top4_count: int
	top4_rate: int
	win_count: int
	win_rate: int
	all_time_avg_placement: str
	common_points: int
	common_games_count: int
	filtered_games: int
	total_games_available: int

	@property
	def solo_points(self) -> int:
		return self.total_points - self.common_points

	@property
	def solo_games(self) -> int:
		return self.filtered_games - self.common_games_count


@dataclass
class RankingEntry:
	position: int
	stats: PlayerStats
	badge: Optional[str] = None


@dataclass
class DashboardView:
	"""Everything the dashboard needs for one render"""
	filter_mode: str
	filtered_matches: Dict[str, List[MatchResult]]
	player_stats: List[PlayerStats]
	overall_ranking: List[RankingEntry]
	solo_ranking: List[RankingEntry]
	shared_ranking: Optional[List[RankingEntry]]
	common_matches: List[CommonMatch]

	@property
	def has_matches(self) -> bool:
		return any(self.filtered_matches.values())
