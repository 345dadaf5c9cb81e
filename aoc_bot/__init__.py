"""Discord bot for Advent of Code private leaderboards."""

__version__ = "0.1.0"
