"""
Centralized error embeds for consistent error replies across the bot.
"""

import discord


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""

    @staticmethod
    def user_error(message: str) -> discord.Embed:
        """Create embed for errors the requester can fix or retry."""
        return discord.Embed(
            description=f"⚠️ {message}",
            color=discord.Color.red()
        )

    @staticmethod
    def command_error() -> discord.Embed:
        """Create embed for unexpected command failures."""
        return discord.Embed(
            title="Command Error",
            description="An unexpected error occurred. Please try again later or contact an administrator.",
            color=discord.Color.red()
        )
