import asyncio
import logging
import traceback
from typing import Optional

import aiohttp
import discord
from discord.ext import commands

from aoc_bot.config import Config
from aoc_bot.services.aoc_client import AocClient
from aoc_bot.services.user_directory import UserDirectory
from aoc_bot.utils.error_embeds import ErrorEmbeds
from aoc_bot.utils.logger import setup_logger

class AocBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.message_content = True

        super().__init__(
            command_prefix=Config.COMMAND_PREFIX,
            intents=intents,
            help_command=None
        )

        self.http_session: Optional[aiohttp.ClientSession] = None
        self.aoc_client: Optional[AocClient] = None
        self.user_directory = UserDirectory()
        self.logger = setup_logger('aoc_bot')

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up AoC Bot...")

        self.http_session = aiohttp.ClientSession()
        self.aoc_client = AocClient(
            self.http_session,
            session_cookie=Config.AOC_SESSION,
            leaderboard_id=Config.AOC_LEADERBOARD_ID,
            timeout=Config.AOC_REQUEST_TIMEOUT
        )
        self.user_directory = UserDirectory.from_file(Config.AOC_USERS_FILE)

        await self.load_extension('aoc_bot.cogs.aoc')
        self.logger.info("AoC Bot setup complete!")

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Game(name=f"Advent of Code | {Config.COMMAND_PREFIX}aoc")
        )

    async def on_command_error(self, ctx: commands.Context, error: Exception):
        """Global error handler for commands"""
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, commands.UserInputError):
            await ctx.reply(embed=ErrorEmbeds.user_error(str(error)), mention_author=False)
            return

        original = getattr(error, 'original', error)
        self.logger.error(
            f"Unexpected error in command {ctx.command}: {original}",
            exc_info=(type(original), original, original.__traceback__)
        )

        try:
            await ctx.reply(embed=ErrorEmbeds.command_error(), mention_author=False)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down AoC Bot...")

        if self.http_session:
            await self.http_session.close()

        await super().close()

async def main():
    """Main entry point"""
    Config.validate()

    bot = AocBot()

    try:
        await bot.start(Config.DISCORD_TOKEN)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await bot.close()

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
