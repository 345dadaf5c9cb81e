"""
Services package for the AoC leaderboard bot.
"""

from .aoc_client import AocClient
from .day_leaderboard import DayLeaderboardCommand, InvocationState
from .renderer import LeaderboardRenderer
from .user_directory import UserDirectory

__all__ = [
    'AocClient',
    'DayLeaderboardCommand',
    'InvocationState',
    'LeaderboardRenderer',
    'UserDirectory',
]
