"""Shared pytest fixtures for the TFT tracker tests."""

from datetime import datetime

import pytest

from models import GameDetail, MatchResult, PlayerRecord, Trait, Unit


def ms(dt: datetime) -> int:
    """Local datetime to epoch millis."""
    return int(dt.timestamp() * 1000)


def make_match(match_id, placement, timestamp=0, traits=None):
    return MatchResult(
        match_id=match_id,
        placement=placement,
        traits=traits or [],
        units=[Unit(character_id="TFT13_Jinx", tier=2, item_names=["TFT_Item_InfinityEdge"])],
        game_detail=GameDetail(game_datetime=timestamp, game_length=1800.5, game_version="Version 14.10"),
    )


def make_player(name, matches=None, puuid=None, rank=None):
    return PlayerRecord(
        name=name,
        tag="TR1",
        puuid=puuid or f"puuid-{name}",
        summoner_id=f"summoner-{name}",
        profile_icon_id=29,
        rank=rank,
        recent_matches=matches or [],
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 10, 12, 0, 0)


@pytest.fixture
def sample_traits():
    return [
        Trait(name="TFT13_Sniper", num_units=2, tier_current=1, style=1),
        Trait(name="Set13_Ambusher", num_units=3, tier_current=0, style=0),
        Trait(name="TFT13_Rebel", num_units=6, tier_current=2, style=3),
        Trait(name="TFTSet13_HextechUnique", num_units=1, tier_current=1, style=4),
    ]


@pytest.fixture
def roster_pair():
    """Players A and B sharing match M1."""
    player_a = make_player("A", [make_match("M1", 2, 2000), make_match("M2", 5, 1000)])
    player_b = make_player("B", [make_match("M1", 1, 2000), make_match("M3", 3, 1500)])
    return [player_a, player_b]
