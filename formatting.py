"""Text helpers shared by the dashboard and the Discord bot"""

from datetime import datetime
from typing import Dict, List, Optional

from models import CommonMatch, MatchResult, PlayerRecord, PlayerStats, RankingEntry
from tft_analyzer import POINT_TABLE, find_match, get_points

BADGE_ICONS = {
	"gold": "🥇",
	"silver": "🥈",
	"bronze": "🥉",
}

RANK_COLORS = {
	"CHALLENGER": "rank-challenger",
	"GRANDMASTER": "rank-grandmaster",
	"MASTER": "rank-master",
	"DIAMOND": "rank-diamond",
	"PLATINUM": "rank-platinum",
	"GOLD": "rank-gold",
}

# Tkinter colours for the classes above
CLASS_COLORS = {
	"placement-first": "#f5c542",
	"placement-top4": "#4caf50",
	"placement-bottom": "#e05252",
	"rank-challenger": "#f4c874",
	"rank-grandmaster": "#e84057",
	"rank-master": "#9d48e0",
	"rank-diamond": "#576bce",
	"rank-platinum": "#4e9996",
	"rank-gold": "#cd8837",
	"rank-default": "#a0a0a0",
	"rank-unranked": "#6b6b6b",
}


def format_points(points: int) -> str:
	return f"+{points}" if points > 0 else str(points)


def placement_class(placement: int) -> str:
	if placement == 1:
		return "placement-first"
	if placement <= 4:
		return "placement-top4"
	return "placement-bottom"


def rank_color(tier: Optional[str]) -> str:
	if not tier:
		return "rank-unranked"
	return RANK_COLORS.get(tier.upper(), "rank-default")


def rank_text(player: PlayerRecord) -> str:
	return player.rank.display if player.rank else "Unranked"


def point_table_lines() -> List[str]:
	return [f"{placement}. {format_points(points)}" for placement, points in POINT_TABLE.items()]


def badge_prefix(entry: RankingEntry) -> str:
	return BADGE_ICONS.get(entry.badge, f"{entry.position + 1}.")


def ranking_lines(ranking: List[RankingEntry], value: str = "total") -> List[str]:
	"""One line per ranked player. value is total, solo or shared"""
	lines = []
	for entry in ranking:
		stats = entry.stats
		if value == "solo":
			detail = f"{stats.solo_points} pts | {stats.solo_games} solo games"
		elif value == "shared":
			detail = f"{stats.common_points} pts | {stats.common_games_count} shared games"
		else:
			detail = f"{stats.total_points} pts | {stats.filtered_games} games"
		lines.append(f"{badge_prefix(entry)} {stats.player.riot_id} - {detail}")
	return lines


def player_summary(stats: PlayerStats) -> str:
	"""Detail block for one player"""
	return (
		f"{stats.player.riot_id} [{rank_text(stats.player)}]\n"
		f"Games: {stats.filtered_games} (of {stats.total_games_available} available)\n"
		f"Avg points: {stats.avg_points} | Avg placement: {stats.avg_placement} "
		f"(all time {stats.all_time_avg_placement})\n"
		f"Top 4: {stats.top4_count}/{stats.filtered_games} ({stats.top4_rate}%) | "
		f"Wins: {stats.win_count}/{stats.filtered_games} ({stats.win_rate}%)"
	)


def placement_strip(window: List[MatchResult]) -> str:
	return " ".join(f"#{m.placement}" for m in window) or "-"


def common_match_line(match: CommonMatch, players: List[PlayerRecord],
                      windows: Dict[str, List[MatchResult]]) -> str:
	"""One head-to-head row, players who sat the match out shown as a dash"""
	when = datetime.fromtimestamp(match.timestamp / 1000).strftime("%d.%m %H:%M")
	cells = []
	for player in players:
		placement = match.placements.get(player.puuid)
		if placement is None:
			cells.append(f"{player.name}: —")
			continue

		cell = f"{player.name}: #{placement} ({format_points(get_points(placement))})"
		own_match = find_match(windows.get(player.puuid, []), match.match_id)
		if own_match:
			traits = [t.display_name for t in own_match.top_traits()]
			if traits:
				cell += f" [{', '.join(traits)}]"
		cells.append(cell)
	return f"{when}  " + " | ".join(cells)
