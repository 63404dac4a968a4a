"""
TFT Roster Analysis Engine
Turns fetched player records into points, shared-match stats and rankings
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional

from config import FILTER_MODES, FILTER_SIZES
from models import (
    CommonMatch, DashboardView, MatchResult, PlayerRecord, PlayerStats, RankingEntry
)

# 1st=+4, 2nd=+3, 3rd=+2, 4th=+1, 5th=-1, 6th=-2, 7th=-3, 8th=-4
POINT_TABLE = {
    1: 4, 2: 3, 3: 2, 4: 1,
    5: -1, 6: -2, 7: -3, 8: -4
}

RANK_BADGES = ("gold", "silver", "bronze")

NOT_APPLICABLE = "N/A"


def get_points(placement: int) -> int:
    """Points for a placement, 0 for anything outside 1..8"""
    return POINT_TABLE.get(placement, 0)


def _round_half_up(value: float, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def _average_placement(matches: List[MatchResult]) -> str:
    if not matches:
        return NOT_APPLICABLE
    mean = sum(m.placement for m in matches) / len(matches)
    return str(_round_half_up(mean, 2))


def _percent(count: int, total: int) -> int:
    if total == 0:
        return 0
    return int(_round_half_up(count / total * 100, 0))


def find_match(window: List[MatchResult], match_id: str) -> Optional[MatchResult]:
    """A player's copy of a match inside their window"""
    for match in window:
        if match.match_id == match_id:
            return match
    return None


def rank_players(stats: List[PlayerStats], key: Callable[[PlayerStats], int]) -> List[RankingEntry]:
    """Stable descending ranking, ties keep roster order"""
    ordered = sorted(stats, key=key, reverse=True)
    return [
        RankingEntry(
            position=index,
            stats=player_stats,
            badge=RANK_BADGES[index] if index < len(RANK_BADGES) else None
        )
        for index, player_stats in enumerate(ordered)
    ]


class RosterAnalyzer:
    """Aggregates a roster snapshot into the dashboard view"""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def filter_matches(self, player: PlayerRecord, filter_mode: str) -> List[MatchResult]:
        """Matches in the active window, newest first"""
        if filter_mode not in FILTER_MODES:
            raise ValueError(f"Unknown filter mode: {filter_mode!r}")

        if filter_mode == "today":
            now = self.clock()
            start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
            start_ms = start_of_today.timestamp() * 1000
            now_ms = now.timestamp() * 1000
            return [m for m in player.recent_matches if start_ms <= m.timestamp < now_ms]

        return player.recent_matches[:FILTER_SIZES[filter_mode]]

    def filter_roster(self, players: List[PlayerRecord], filter_mode: str) -> Dict[str, List[MatchResult]]:
        return {player.puuid: self.filter_matches(player, filter_mode) for player in players}

    def find_common_matches(self, players: List[PlayerRecord], filter_mode: str) -> List[CommonMatch]:
        """Matches played by at least two tracked players inside their windows"""
        return self._collect_common_matches(self.filter_roster(players, filter_mode))

    def _collect_common_matches(self, windows: Dict[str, List[MatchResult]]) -> List[CommonMatch]:
        if sum(1 for window in windows.values() if window) < 2:
            return []

        match_map: Dict[str, CommonMatch] = {}
        for puuid, window in windows.items():
            for match in window:
                if match.match_id not in match_map:
                    match_map[match.match_id] = CommonMatch(
                        match_id=match.match_id,
                        placements={},
                        timestamp=match.timestamp
                    )
                match_map[match.match_id].placements[puuid] = match.placement

        common = [cm for cm in match_map.values() if len(cm.placements) >= 2]
        return sorted(common, key=lambda cm: cm.timestamp, reverse=True)

    def player_stats(self, player: PlayerRecord, window: List[MatchResult],
                     common_matches: List[CommonMatch]) -> PlayerStats:
        """Windowed stats for one player"""
        games = len(window)
        total_points = sum(get_points(m.placement) for m in window)
        top4_count = sum(1 for m in window if m.is_top4)
        win_count = sum(1 for m in window if m.is_win)

        if games:
            avg_points = str(_round_half_up(total_points / games, 1))
        else:
            avg_points = "0"

        # Head-to-head: only matches where THIS player participated
        player_common = [cm for cm in common_matches if player.puuid in cm.placements]
        common_points = sum(get_points(cm.placements[player.puuid]) for cm in player_common)

        return PlayerStats(
            player=player,
            total_points=total_points,
            avg_points=avg_points,
            avg_placement=_average_placement(window),
            top4_count=top4_count,
            top4_rate=_percent(top4_count, games),
            win_count=win_count,
            win_rate=_percent(win_count, games),
            all_time_avg_placement=_average_placement(player.recent_matches),
            common_points=common_points,
            common_games_count=len(player_common),
            filtered_games=games,
            total_games_available=len(player.recent_matches)
        )

    def analyze(self, players: List[PlayerRecord], filter_mode: str) -> DashboardView:
        """Full aggregation pass over one snapshot"""
        windows = self.filter_roster(players, filter_mode)
        common_matches = self._collect_common_matches(windows)

        stats = [
            self.player_stats(player, windows[player.puuid], common_matches)
            for player in players
        ]

        shared_ranking: Optional[List[RankingEntry]] = None
        if common_matches:
            shared_ranking = rank_players(
                [s for s in stats if s.common_games_count > 0],
                key=lambda s: s.common_points
            )

        return DashboardView(
            filter_mode=filter_mode,
            filtered_matches=windows,
            player_stats=stats,
            overall_ranking=rank_players(stats, key=lambda s: s.total_points),
            solo_ranking=rank_players(stats, key=lambda s: s.solo_points),
            shared_ranking=shared_ranking,
            common_matches=common_matches
        )
