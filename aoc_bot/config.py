import json
import os
from datetime import tzinfo

import pytz
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Advent of Code settings
    AOC_SESSION = os.getenv('AOC_SESSION')
    AOC_LEADERBOARD_ID = os.getenv('AOC_LEADERBOARD_ID')
    AOC_LEADERBOARD_ROWS = int(os.getenv('AOC_LEADERBOARD_ROWS', 20))
    AOC_REPO_RULES = os.getenv('AOC_REPO_RULES', '[]')
    AOC_USERS_FILE = os.getenv('AOC_USERS_FILE', 'users.json')
    AOC_REQUEST_TIMEOUT = float(os.getenv('AOC_REQUEST_TIMEOUT', 10))

    # Timestamps in replies are shown in this zone
    LOCAL_TIMEZONE = os.getenv('LOCAL_TIMEZONE', 'UTC')

    @classmethod
    def get_local_timezone(cls) -> tzinfo:
        """Get the configured display timezone"""
        try:
            return pytz.timezone(cls.LOCAL_TIMEZONE)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"LOCAL_TIMEZONE '{cls.LOCAL_TIMEZONE}' is not a known IANA timezone")

    @classmethod
    def get_repo_rules(cls) -> list:
        """Get repository title rules as a list of (pattern, replacement) pairs"""
        try:
            rules = json.loads(cls.AOC_REPO_RULES)
        except json.JSONDecodeError:
            raise ValueError("AOC_REPO_RULES must be a JSON list of [pattern, replacement] pairs")
        if not isinstance(rules, list) or not all(
            isinstance(rule, list) and len(rule) == 2 and all(isinstance(part, str) for part in rule)
            for rule in rules
        ):
            raise ValueError("AOC_REPO_RULES must be a JSON list of [pattern, replacement] pairs")
        return [tuple(rule) for rule in rules]

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not cls.AOC_SESSION:
            raise ValueError("AOC_SESSION is required")
        if not cls.AOC_LEADERBOARD_ID:
            raise ValueError("AOC_LEADERBOARD_ID is required")
        if not 0 <= cls.AOC_LEADERBOARD_ROWS <= 200:
            raise ValueError("AOC_LEADERBOARD_ROWS must be between 0 and 200")
        cls.get_local_timezone()
        cls.get_repo_rules()
