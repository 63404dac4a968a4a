"""
TFT Tracker Discord Bot Launcher
Validates dependencies, credentials and the roster before starting the bot
"""

import importlib
import os
import sys
from pathlib import Path

# Import name -> distribution name
REQUIRED_PACKAGES = {
    "discord": "discord.py",
    "requests": "requests",
    "dotenv": "python-dotenv",
}

# Setting -> (placeholder from env_example.txt, where to get it)
REQUIRED_SETTINGS = {
    "DISCORD_BOT_TOKEN": ("your_bot_token_here", "https://discord.com/developers/applications"),
    "RIOT_API_KEY": ("your_riot_api_key_here", "https://developer.riotgames.com"),
}


def missing_packages():
    missing = []
    for module, distribution in REQUIRED_PACKAGES.items():
        try:
            importlib.import_module(module)
        except ImportError:
            missing.append(distribution)
    return missing


def check_settings():
    """Load .env and make sure every credential is set to a real value"""
    if not Path(".env").exists():
        print("⚠️ No .env file, reading settings from the environment")
        print("   Create one with: cp env_example.txt .env")

    from dotenv import load_dotenv
    load_dotenv()

    ok = True
    for name, (placeholder, source) in REQUIRED_SETTINGS.items():
        value = os.getenv(name)
        if not value or value == placeholder:
            print(f"❌ {name} is not set (get one at {source})")
            ok = False
    return ok


def check_roster():
    from config import load_roster
    try:
        roster = load_roster()
    except ValueError as e:
        print(f"❌ Invalid TFT_ROSTER: {e}")
        return False
    print(f"✅ Tracking {len(roster)} player(s): {', '.join(p.riot_id for p in roster)}")
    return True


def main():
    print("🤖 TFT Tracker Discord Bot Launcher")

    missing = missing_packages()
    if missing:
        print(f"❌ Missing packages: {', '.join(missing)}")
        print("Install with: pip install -e .")
        sys.exit(1)

    if not check_settings() or not check_roster():
        sys.exit(1)

    from tft_discord_bot import TFTTrackerBot

    try:
        TFTTrackerBot().run()
    except KeyboardInterrupt:
        print("\n👋 Bot stopped by user")


if __name__ == "__main__":
    main()
