"""
TFT Tracker Discord Bot
Posts the roster leaderboard to Discord
- Overall, solo and shared point rankings
- Head-to-head results for games played together
- Periodic refresh of the roster snapshot
"""

import asyncio
from datetime import datetime
from typing import List, Optional

import discord
from discord.ext import commands, tasks

from api_client import RiotAPIClient
from config import (
    DISCORD_BOT_TOKEN, RIOT_API_KEY, TFT_REGION, FILTER_MODES, FILTER_LABELS,
    DEFAULT_FILTER_MODE, REFRESH_INTERVAL, COMMON_MATCH_DISPLAY_LIMIT, load_roster
)
from formatting import (
    common_match_line, placement_strip, player_summary, point_table_lines, ranking_lines
)
from models import PlayerRecord
from roster_fetcher import RosterFetcher
from tft_analyzer import RosterAnalyzer

# Discord caps embed field values at 1024 characters
FIELD_LIMIT = 1024


def split_mode(args: str):
    """Split an optional trailing filter mode off a command argument string.

    The trailing word counts as a filter only after a complete Riot ID, so
    names with spaces still parse. An unknown filter gives None as the mode.
    """
    parts = args.strip().rsplit(" ", 1)
    if len(parts) == 2 and "#" in parts[0] and "#" not in parts[1]:
        mode = parts[1].lower()
        return parts[0].strip(), mode if mode in FILTER_MODES else None
    return args.strip(), DEFAULT_FILTER_MODE


def field_value(lines: List[str]) -> str:
    text = "\n".join(lines) or "-"
    if len(text) > FIELD_LIMIT:
        text = text[:FIELD_LIMIT - 1] + "…"
    return text


class TFTTrackerBot:
    """Discord bot for the TFT roster tracker"""

    def __init__(self, fetcher: RosterFetcher = None, analyzer: RosterAnalyzer = None):
        self.token = DISCORD_BOT_TOKEN
        self.riot_api_key = RIOT_API_KEY

        intents = discord.Intents.default()
        intents.message_content = True
        self.bot = commands.Bot(command_prefix='!', intents=intents, help_command=None)

        self.fetcher = fetcher or RosterFetcher(RiotAPIClient(self.riot_api_key, TFT_REGION), load_roster())
        self.analyzer = analyzer or RosterAnalyzer()

        # Snapshot of the last refresh, replaced wholesale
        self.players: List[PlayerRecord] = []
        self.last_update: Optional[datetime] = None
        self.refresh_lock = asyncio.Lock()

        self.auto_refresh = tasks.loop(seconds=REFRESH_INTERVAL)(self.refresh_snapshot)

        self.setup_events()
        self.setup_commands()

    async def refresh_snapshot(self) -> bool:
        """Fetch a new roster snapshot without blocking the event loop.

        Returns False when another refresh is running or the fetch fails, in
        which case the previous snapshot is kept.
        """
        if self.refresh_lock.locked():
            return False
        async with self.refresh_lock:
            try:
                players = await asyncio.to_thread(self.fetcher.fetch_roster)
            except Exception as e:
                print(f"❌ Error refreshing snapshot: {str(e)}")
                return False
            self.players = players
            self.last_update = datetime.now()
            print(f"✅ Snapshot refreshed: {len(players)} player(s)")
            return True

    async def wait_for_refresh(self):
        """Wait for a running refresh to finish"""
        async with self.refresh_lock:
            pass

    def parse_mode(self, mode: Optional[str]) -> Optional[str]:
        if mode is None:
            return DEFAULT_FILTER_MODE
        mode = mode.lower()
        return mode if mode in FILTER_MODES else None

    def no_data_message(self) -> str:
        return "❌ No player data found. Use `!refresh` to try again."

    def setup_events(self):
        """Setup Discord event handlers"""

        @self.bot.event
        async def on_ready():
            print(f'🤖 TFT Tracker is ready! Logged in as {self.bot.user}')
            print(f'📊 Connected to {len(self.bot.guilds)} server(s)')

            activity = discord.Activity(
                type=discord.ActivityType.watching,
                name="TFT standings | !help"
            )
            await self.bot.change_presence(activity=activity)

            if not self.auto_refresh.is_running():
                self.auto_refresh.start()

        @self.bot.event
        async def on_command_error(ctx, error):
            if isinstance(error, commands.CommandNotFound):
                await ctx.send("❌ Unknown command. Use `!help` to see available commands.")
            elif isinstance(error, commands.MissingRequiredArgument):
                await ctx.send(f"❌ Missing argument: {error.param}. Use `!help` for more info.")
            else:
                await ctx.send(f"❌ Error: {str(error)}")
                print(f"Error: {error}")

    def setup_commands(self):
        """Setup Discord commands"""

        @self.bot.command(name='help')
        async def help_command(ctx):
            """Display help for commands"""
            embed = discord.Embed(
                title="🤖 TFT Tracker - Commands",
                description=f"Filters: {', '.join(f'`{m}`' for m in FILTER_MODES)} (default `{DEFAULT_FILTER_MODE}`)",
                color=0x00ff00
            )
            embed.add_field(
                name="📊 Standings",
                value="""**`!leaderboard [filter]`** - Total, solo and shared rankings
**`!player <riot_id> [filter]`** - Detailed stats for one player
**`!common [filter]`** - Games played together""",
                inline=False
            )
            embed.add_field(
                name="ℹ️ Other",
                value="""**`!points`** - Point system
**`!refresh`** - Fetch fresh data now""",
                inline=False
            )
            await ctx.send(embed=embed)

        @self.bot.command(name='points')
        async def points_command(ctx):
            """Show the point system"""
            embed = discord.Embed(title="⚡ Point System", description="\n".join(point_table_lines()), color=0x3498db)
            await ctx.send(embed=embed)

        @self.bot.command(name='refresh')
        async def refresh_command(ctx):
            """Fetch fresh data now"""
            if self.refresh_lock.locked():
                status_msg = await ctx.send("⏳ A refresh is already in progress, waiting for it...")
                await self.wait_for_refresh()
            else:
                status_msg = await ctx.send("🔄 Fetching player data...")
                if not await self.refresh_snapshot() and self.players:
                    await status_msg.edit(content="⚠️ Refresh failed, showing the previous data")
                    return
            if not self.players:
                await status_msg.edit(content=self.no_data_message())
                return
            await status_msg.edit(content=f"✅ Loaded {len(self.players)} player(s)")

        @self.bot.command(name='leaderboard')
        async def leaderboard_command(ctx, mode: str = None):
            """Total, solo and shared rankings. Example: !leaderboard today"""
            filter_mode = self.parse_mode(mode)
            if filter_mode is None:
                await ctx.send(f"❌ Unknown filter `{mode}`. Use one of: {', '.join(FILTER_MODES)}")
                return
            if not self.players:
                await ctx.send(self.no_data_message())
                return

            view = self.analyzer.analyze(self.players, filter_mode)

            embed = discord.Embed(
                title=f"🏆 TFT Standings - {FILTER_LABELS[filter_mode]}",
                color=0xffd700
            )
            embed.add_field(name="Total Points", value=field_value(ranking_lines(view.overall_ranking)), inline=False)
            embed.add_field(name="Solo Points", value=field_value(ranking_lines(view.solo_ranking, "solo")), inline=False)
            if view.shared_ranking is not None:
                embed.add_field(
                    name="Shared Points",
                    value=field_value(ranking_lines(view.shared_ranking, "shared")),
                    inline=False
                )
            if self.last_update:
                embed.set_footer(text=f"Updated {self.last_update.strftime('%H:%M:%S')}")
            await ctx.send(embed=embed)

        @self.bot.command(name='player')
        async def player_command(ctx, *, args: str):
            """Stats for one player. Example: !player azeotrop#TR1 last10"""
            riot_id, filter_mode = split_mode(args)
            if filter_mode is None:
                await ctx.send(f"❌ Unknown filter. Use one of: {', '.join(FILTER_MODES)}")
                return
            if not self.players:
                await ctx.send(self.no_data_message())
                return

            view = self.analyzer.analyze(self.players, filter_mode)
            for stats in view.player_stats:
                if stats.player.riot_id.lower() == riot_id.lower():
                    embed = discord.Embed(
                        title=f"🎮 {stats.player.riot_id} - {FILTER_LABELS[filter_mode]}",
                        description=player_summary(stats),
                        color=0x0099ff
                    )
                    embed.set_thumbnail(url=stats.player.profile_icon_url)
                    embed.add_field(name="Total", value=f"{stats.total_points} pts", inline=True)
                    embed.add_field(name="Solo", value=f"{stats.solo_points} pts ({stats.solo_games} games)", inline=True)
                    embed.add_field(
                        name="Shared",
                        value=f"{stats.common_points} pts ({stats.common_games_count} games)",
                        inline=True
                    )
                    embed.add_field(
                        name="Placements",
                        value=field_value([placement_strip(view.filtered_matches[stats.player.puuid])]),
                        inline=False
                    )
                    await ctx.send(embed=embed)
                    return

            await ctx.send(f"❌ {riot_id} is not on the roster!")

        @self.bot.command(name='common')
        async def common_command(ctx, mode: str = None):
            """Games played together. Example: !common last10"""
            filter_mode = self.parse_mode(mode)
            if filter_mode is None:
                await ctx.send(f"❌ Unknown filter `{mode}`. Use one of: {', '.join(FILTER_MODES)}")
                return
            if not self.players:
                await ctx.send(self.no_data_message())
                return

            view = self.analyzer.analyze(self.players, filter_mode)
            if not view.common_matches:
                await ctx.send(f"ℹ️ No shared games in {FILTER_LABELS[filter_mode]}")
                return

            players = [entry.stats.player for entry in view.overall_ranking]
            lines = [
                common_match_line(match, players, view.filtered_matches)
                for match in view.common_matches[:COMMON_MATCH_DISPLAY_LIMIT]
            ]
            embed = discord.Embed(
                title=f"⚔️ Head to Head - {FILTER_LABELS[filter_mode]}",
                description=field_value(lines),
                color=0xe84057
            )
            await ctx.send(embed=embed)

    def run(self):
        """Run the Discord bot"""
        if not self.token:
            print("❌ DISCORD_BOT_TOKEN not found in environment variables!")
            print("Create a .env file with: DISCORD_BOT_TOKEN=your_bot_token")
            return

        print("🚀 Starting TFT Tracker Discord Bot...")
        print(f"📊 Riot API Key: {'✅ Set' if self.riot_api_key else '❌ Not set'}")
        print(f"👥 Tracking {len(self.fetcher.roster)} player(s)")
        self.bot.run(self.token)

if __name__ == "__main__":
    bot = TFTTrackerBot()
    bot.run()
