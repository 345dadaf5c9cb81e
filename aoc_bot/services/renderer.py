"""
Leaderboard renderer for the day leaderboard command.

Turns ranked rows into a Discord-markdown table: one header line, one line
per member and a footer with the snapshot's last update time.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, List

from discord.utils import escape_markdown

from aoc_bot.data_models.leaderboard import (
    DayLeaderboardParams, LeaderboardDocument, Member, Parts, RankedRow, RenderRow
)
from aoc_bot.services.user_directory import UserDirectory
from aoc_bot.utils.aoc_day import AocDay
from aoc_bot.utils.exceptions import CompletionDataMissingError
from aoc_bot.utils.formatting import format_local, format_rank, format_timedelta, format_ymd_hms
from aoc_bot.utils.repo_rules import RepoRules

logger = logging.getLogger(__name__)

COLUMN_SEPARATOR = " | "
HEADER_COLUMNS = ("Rank", "Local Score", "Stars", "Completion", "AoC Name", "Discord User", "Repository")
EMPHASIZED_RANKS = 3

# Markdown-escaped or not, a pipe inside a cell becomes an escaped pipe
CELL_PIPE = re.compile(r"\\?\|")


@dataclass(frozen=True)
class Emphasis:
    open: str
    close: str

    def wrap(self, text: str) -> str:
        if not text:
            return text
        return f"{self.open}{text}{self.close}"


BOLD = Emphasis("**", "**")
PLAIN = Emphasis("", "")


def emphasis_for(rank: int) -> Emphasis:
    if rank <= EMPHASIZED_RANKS:
        return BOLD
    return PLAIN


def escape_cell(text: str) -> str:
    """Escape markdown in free text and keep it from splitting the column layout."""
    return CELL_PIPE.sub(r"\\|", escape_markdown(text))


class LeaderboardRenderer:
    """Renders day leaderboards with per-member lookups."""

    def __init__(self, local_timezone: tzinfo, repo_rules: RepoRules, users: UserDirectory):
        self.local_timezone = local_timezone
        self.repo_rules = repo_rules
        self.users = users

    def title(self, params: DayLeaderboardParams) -> str:
        return (
            f"Private Leaderboard (Advent of Code "
            f"{params.year}/{params.day:02d}{params.parts.title_suffix})"
        )

    def window_start(self, params: DayLeaderboardParams, member: Member) -> datetime:
        """Instant the elapsed time of ``member`` is measured from."""
        if params.parts is Parts.P2:
            completion = member.completion_day_level.get(params.day)
            if completion is None:
                raise CompletionDataMissingError(member.id, params.day)
            return completion.first.get_star_ts
        return AocDay(params.year, params.day).unlock_datetime()

    def build_row(self, params: DayLeaderboardParams, row: RankedRow) -> RenderRow:
        member = row.member
        repo = self.users.repository(member.id) or ""
        return RenderRow(
            rank=row.rank,
            local_score=member.local_score,
            stars=member.stars,
            completion=format_ymd_hms(member.last_star_ts, self.local_timezone),
            delta=format_timedelta(member.last_star_ts - self.window_start(params, member)),
            name=escape_cell(member.display_name),
            discord_user=self.users.discord_mention(member.id) or "",
            repo=repo,
            repo_title=escape_cell(self.repo_rules.title_for(repo)) if repo else "",
        )

    def format_row(self, row: RenderRow) -> str:
        m = emphasis_for(row.rank)
        repo_link = f"[{m.wrap(row.repo_title)}](<{row.repo}>)" if row.repo else ""
        columns = (
            m.wrap(format_rank(row.rank)),
            m.wrap(str(row.local_score)),
            m.wrap(str(row.stars)),
            f"{row.completion} ({m.wrap(row.delta)})",
            m.wrap(row.name),
            row.discord_user,
            repo_link,
        )
        return COLUMN_SEPARATOR.join(columns)

    def render(
        self,
        params: DayLeaderboardParams,
        rows: Iterable[RankedRow],
        last_update: datetime
    ) -> LeaderboardDocument:
        """
        Render a complete leaderboard document.

        Args:
            params: Resolved command parameters, used for the title and time windows
            rows: Ranked and paginated rows, consumed once
            last_update: Instant the snapshot was last updated

        Returns:
            The finished document; nothing is emitted before every row rendered

        Raises:
            CompletionDataMissingError: A part two row has no part one completion
        """
        lines: List[str] = [self.format_row(self.build_row(params, row)) for row in rows]
        logger.debug(f"Rendered {len(lines)} leaderboard rows for {params.year}/{params.day:02d}")

        return LeaderboardDocument(
            title=self.title(params),
            header=COLUMN_SEPARATOR.join(HEADER_COLUMNS),
            rows=lines,
            footer=f"Last update: {format_local(last_update, self.local_timezone)}",
        )
