"""Tests for the Discord bot's snapshot refresh and argument parsing."""

import asyncio
from unittest.mock import MagicMock

import pytest

from conftest import make_player
from tft_discord_bot import TFTTrackerBot, split_mode
from tft_analyzer import RosterAnalyzer


def make_bot(fetch_roster):
    fetcher = MagicMock()
    fetcher.fetch_roster.side_effect = fetch_roster
    return TFTTrackerBot(fetcher=fetcher, analyzer=RosterAnalyzer())


class TestSplitMode:

    @pytest.mark.parametrize("args, expected", [
        ("azeotrop#TR1", ("azeotrop#TR1", "last20")),
        ("azeotrop#TR1 last10", ("azeotrop#TR1", "last10")),
        ("azeotrop#TR1 TODAY", ("azeotrop#TR1", "today")),
        ("Some Player#EUW", ("Some Player#EUW", "last20")),
        ("Some Player#EUW today", ("Some Player#EUW", "today")),
    ])
    def test_known_modes(self, args, expected):
        assert split_mode(args) == expected

    def test_unknown_filter_is_rejected(self):
        assert split_mode("azeotrop#TR1 last5") == ("azeotrop#TR1", None)


class TestRefreshSnapshot:

    def test_successful_refresh_replaces_snapshot(self):
        async def scenario():
            bot = make_bot(lambda: [make_player("B")])
            bot.players = [make_player("A")]
            return bot, await bot.refresh_snapshot()

        bot, refreshed = asyncio.run(scenario())

        assert refreshed
        assert [p.name for p in bot.players] == ["B"]
        assert bot.last_update is not None

    def test_failed_refresh_keeps_previous_snapshot(self):
        def fail():
            raise ValueError("Expecting value")

        async def scenario():
            bot = make_bot(fail)
            bot.players = [make_player("A")]
            return bot, await bot.refresh_snapshot()

        bot, refreshed = asyncio.run(scenario())

        assert not refreshed
        assert [p.name for p in bot.players] == ["A"]
        assert bot.last_update is None

    def test_auto_refresh_survives_failed_fetch(self):
        calls = []

        def fail():
            calls.append(1)
            raise ValueError("Expecting value")

        async def scenario():
            bot = make_bot(fail)
            bot.auto_refresh.change_interval(seconds=0.01)
            bot.auto_refresh.start()
            await asyncio.sleep(0.2)
            running = bot.auto_refresh.is_running()
            bot.auto_refresh.cancel()
            return running

        assert asyncio.run(scenario())
        assert len(calls) > 1

    def test_refresh_skipped_while_another_runs(self):
        async def scenario():
            bot = make_bot(lambda: [make_player("B")])
            async with bot.refresh_lock:
                refreshed = await bot.refresh_snapshot()
            return bot, refreshed

        bot, refreshed = asyncio.run(scenario())

        assert not refreshed
        bot.fetcher.fetch_roster.assert_not_called()

    def test_wait_for_refresh_returns_after_running_refresh(self):
        async def scenario():
            bot = make_bot(lambda: [make_player("B")])
            await bot.refresh_lock.acquire()
            waiter = asyncio.create_task(bot.wait_for_refresh())
            await asyncio.sleep(0)
            pending = not waiter.done()
            bot.refresh_lock.release()
            await waiter
            return pending

        assert asyncio.run(scenario())
