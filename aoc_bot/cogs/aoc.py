import discord
from discord.ext import commands
import logging

from aoc_bot.config import Config
from aoc_bot.data_models.leaderboard import LeaderboardDocument
from aoc_bot.services.day_leaderboard import DayLeaderboardCommand
from aoc_bot.services.renderer import LeaderboardRenderer
from aoc_bot.utils.command_args import CommandArgs
from aoc_bot.utils.error_embeds import ErrorEmbeds
from aoc_bot.utils.exceptions import DeliveryError, DeliveryErrorKind
from aoc_bot.utils.repo_rules import RepoRules

logger = logging.getLogger(__name__)

# Discord rejects embed descriptions longer than this
EMBED_DESCRIPTION_LIMIT = 4096

# Discord JSON error codes
REQUEST_ENTITY_TOO_LARGE = 40005
INVALID_FORM_BODY = 50035

DAY_USAGE = (
    "`{prefix}aoc day [day] [year] [p=1|2|both] [rows=N] [offset=N]`\n"
    "Shows the private leaderboard for a single puzzle day. "
    "Day and year default to the current event."
)


def is_payload_too_large(error: discord.HTTPException) -> bool:
    """Whether Discord refused a message because of its size."""
    if error.status == 413 or error.code == REQUEST_ENTITY_TOO_LARGE:
        return True
    return error.code == INVALID_FORM_BODY and "or fewer in length" in (error.text or "")


class ContextTransport:
    """Delivers leaderboard documents as replies to a command message."""

    def __init__(self, ctx: commands.Context):
        self.ctx = ctx

    def build_embed(self, document: LeaderboardDocument) -> discord.Embed:
        embed = discord.Embed(
            title=document.title,
            description=document.content,
            color=discord.Color.gold()
        )
        embed.set_footer(text=document.footer)
        return embed

    async def deliver(self, document: LeaderboardDocument) -> None:
        if len(document.content) > EMBED_DESCRIPTION_LIMIT:
            raise DeliveryError(
                DeliveryErrorKind.TOO_LARGE,
                f"Leaderboard content is {len(document.content)} characters long"
            )

        try:
            await self.ctx.reply(embed=self.build_embed(document), mention_author=False)
        except discord.HTTPException as e:
            kind = DeliveryErrorKind.TOO_LARGE if is_payload_too_large(e) else DeliveryErrorKind.UNEXPECTED
            raise DeliveryError(kind, f"Discord rejected leaderboard reply: {e}") from e

    async def reply_error(self, message: str) -> None:
        await self.ctx.reply(embed=ErrorEmbeds.user_error(message), mention_author=False)


class AocCog(commands.Cog):
    """Advent of Code private leaderboard commands"""

    def __init__(self, bot):
        self.bot = bot
        renderer = LeaderboardRenderer(
            local_timezone=Config.get_local_timezone(),
            repo_rules=RepoRules(Config.get_repo_rules()),
            users=bot.user_directory
        )
        self.day_command = DayLeaderboardCommand(
            fetcher=bot.aoc_client,
            renderer=renderer,
            default_rows=Config.AOC_LEADERBOARD_ROWS
        )

    @commands.group(name='aoc', invoke_without_command=True)
    async def aoc(self, ctx: commands.Context):
        """Advent of Code commands"""
        embed = discord.Embed(
            title="🎄 Advent of Code",
            description=DAY_USAGE.format(prefix=ctx.clean_prefix),
            color=discord.Color.green()
        )
        await ctx.reply(embed=embed, mention_author=False)

    @aoc.command(name='day')
    async def day(self, ctx: commands.Context, *, arguments: str = ""):
        """Show the private leaderboard for one puzzle day"""
        args = CommandArgs.parse(arguments)
        logger.info(f"{ctx.author} requested day leaderboard with {args!r}")
        async with ctx.typing():
            await self.day_command.invoke(args, ContextTransport(ctx))

async def setup(bot):
    await bot.add_cog(AocCog(bot))
