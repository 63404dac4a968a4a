"""
Roster fetcher for the TFT tracker
Builds one PlayerRecord per configured player from the Riot API
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from api_client import RiotAPIClient, RiotAPIError
from config import DEFAULT_MATCH_COUNT, MATCH_DETAIL_DELAY, RANKED_TFT_QUEUE
from models import (
    GameDetail, MatchResult, PlayerIdentity, PlayerRecord, RankedStanding, Trait, Unit
)


@dataclass
class FetchResult:
    """Outcome of fetching one player"""
    identity: PlayerIdentity
    record: Optional[PlayerRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def parse_ranked_standing(entries: List[Dict]) -> Optional[RankedStanding]:
    """Ranked TFT entry from a list of league entries"""
    for entry in entries or []:
        if entry.get('queueType') == RANKED_TFT_QUEUE:
            return RankedStanding(
                tier=entry.get('tier', ''),
                rank=entry.get('rank', ''),
                league_points=entry.get('leaguePoints', 0)
            )
    return None


def parse_match_result(match_id: str, details: Dict, puuid: str) -> Optional[MatchResult]:
    """This player's result in a match, None if the player is not a participant"""
    info = details.get('info', {})

    participant = None
    for part in info.get('participants', []):
        if part.get('puuid') == puuid:
            participant = part
            break

    if not participant:
        return None

    traits = [
        Trait(
            name=t.get('name', ''),
            num_units=t.get('num_units', 0),
            tier_current=t.get('tier_current', 0),
            style=t.get('style', 0)
        )
        for t in participant.get('traits', [])
    ]
    units = [
        Unit(
            character_id=u.get('character_id', ''),
            tier=u.get('tier', 1),
            item_names=list(u.get('itemNames', []))
        )
        for u in participant.get('units', [])
    ]

    return MatchResult(
        match_id=match_id,
        placement=participant['placement'],
        traits=traits,
        units=units,
        game_detail=GameDetail(
            game_datetime=info.get('game_datetime', 0),
            game_length=info.get('game_length', 0),
            game_version=info.get('game_version', '')
        )
    )


class RosterFetcher:
    """Fetches ranked history for a fixed roster of players"""

    def __init__(self, api_client: RiotAPIClient, roster: List[PlayerIdentity],
                 match_count: int = DEFAULT_MATCH_COUNT,
                 match_delay: float = MATCH_DETAIL_DELAY,
                 sleep: Callable[[float], None] = time.sleep):
        self.api_client = api_client
        self.roster = list(roster)
        self.match_count = match_count
        self.match_delay = match_delay
        self.sleep = sleep

    def fetch_player(self, identity: PlayerIdentity) -> PlayerRecord:
        """Fetch one player. Raises RiotAPIError if the player cannot be resolved"""
        print(f"📡 Fetching account for {identity.riot_id}...")
        account = self.api_client.get_account_by_riot_id(identity.name, identity.tag)
        puuid = account['puuid']

        summoner = self.api_client.get_summoner_by_puuid(puuid)
        summoner_id = summoner.get('id')

        rank = None
        if summoner_id:
            try:
                rank = parse_ranked_standing(self.api_client.get_league_entries(summoner_id))
            except RiotAPIError as e:
                print(f"⚠️ Failed to fetch league entries for {identity.riot_id}: {e}")
        else:
            print(f"⚠️ Summoner ID missing for {identity.riot_id}, skipping rank lookup")

        matches = self._fetch_matches(identity, puuid)

        return PlayerRecord(
            name=account.get('gameName', identity.name),
            tag=account.get('tagLine', identity.tag),
            puuid=puuid,
            summoner_id=summoner_id,
            profile_icon_id=summoner.get('profileIconId'),
            rank=rank,
            recent_matches=matches
        )

    def _fetch_matches(self, identity: PlayerIdentity, puuid: str) -> List[MatchResult]:
        match_ids = self.api_client.get_match_ids(puuid, self.match_count)

        matches = []
        seen = set()
        for match_id in match_ids:
            if len(matches) >= self.match_count:
                break
            if match_id in seen:
                continue
            seen.add(match_id)

            details = self.api_client.get_match_details(match_id)
            match = parse_match_result(match_id, details, puuid)
            if match:
                matches.append(match)
            else:
                print(f"⚠️ {identity.riot_id} not found in match {match_id}")

            # Small delay to be nice to API
            self.sleep(self.match_delay)

        print(f"✅ Fetched {len(matches)} matches for {identity.riot_id}")
        return matches

    def fetch_all(self) -> List[FetchResult]:
        """Fetch every player, one result per roster entry"""
        results = []
        for identity in self.roster:
            try:
                record = self.fetch_player(identity)
            except (RiotAPIError, KeyError, TypeError, AttributeError, ValueError) as e:
                # Malformed payloads surface as lookup or type errors while parsing
                print(f"❌ Error fetching data for {identity.riot_id}: {e}")
                results.append(FetchResult(identity=identity, error=str(e)))
                continue
            results.append(FetchResult(identity=identity, record=record))
        return results

    def fetch_roster(self) -> List[PlayerRecord]:
        """Successfully fetched players, in roster order"""
        return [result.record for result in self.fetch_all() if result.ok]
