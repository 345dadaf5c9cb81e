"""
Advent of Code private leaderboard client.

Fetches a private leaderboard over HTTP and derives the daily view used by
the day leaderboard command. Snapshots are never cached; every call hits the
API once.
"""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, List, Optional, Tuple

import aiohttp

from aoc_bot.data_models.leaderboard import LeaderboardSnapshot, Member, Parts
from aoc_bot.utils.exceptions import FetchError

logger = logging.getLogger(__name__)

BASE_URL = "https://adventofcode.com"
USER_AGENT = "aoc-leaderboard-bot (+https://github.com/aoc-leaderboard-bot)"

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

LEVELS_BY_PARTS = {
    Parts.P1: (1,),
    Parts.P2: (2,),
    Parts.BOTH: (1, 2),
}


def _parse_date_header(value: Optional[str]) -> datetime:
    if value:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring unparsable Date header: {value!r}")
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
    return datetime.now(timezone.utc)


def daily_leaderboard(snapshot: LeaderboardSnapshot, day: int, parts: Parts) -> LeaderboardSnapshot:
    """
    Recompute local scores, stars and last star times for a single day.

    For every selected star the k-th member to earn it (0-based, earliest
    first, ties by member id) scores ``N - k`` where N is the roster size.

    Args:
        snapshot: Full-event leaderboard snapshot
        day: Puzzle day
        parts: Which stars of the day count

    Returns:
        A new snapshot holding the daily figures
    """
    roster_size = len(snapshot.members)
    scores: Dict[int, int] = {member_id: 0 for member_id in snapshot.members}
    stars: Dict[int, int] = {member_id: 0 for member_id in snapshot.members}
    last_star: Dict[int, datetime] = {}

    for level in LEVELS_BY_PARTS[parts]:
        finishers: List[Tuple[datetime, int]] = []
        for member in snapshot.members.values():
            completion = member.completion_day_level.get(day)
            if completion is None:
                continue
            star = completion.first if level == 1 else completion.second
            if star is not None:
                finishers.append((star.get_star_ts, member.id))

        for position, (star_ts, member_id) in enumerate(sorted(finishers)):
            scores[member_id] += roster_size - position
            stars[member_id] += 1
            if member_id not in last_star or star_ts > last_star[member_id]:
                last_star[member_id] = star_ts

    members = {
        member_id: replace(
            member,
            local_score=scores[member_id],
            stars=stars[member_id],
            last_star_ts=last_star.get(member_id, EPOCH),
        )
        for member_id, member in snapshot.members.items()
    }
    return replace(snapshot, members=members)


class AocClient:
    """Client for the private leaderboard JSON API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        session_cookie: str,
        leaderboard_id: str,
        timeout: float = 10,
        base_url: str = BASE_URL
    ):
        """
        Initialize the client.

        Args:
            session: Shared aiohttp session owned by the bot
            session_cookie: Value of the adventofcode.com ``session`` cookie
            leaderboard_id: Id of the private leaderboard to read
            timeout: Total request timeout in seconds
            base_url: API root, overridable for tests
        """
        self.session = session
        self.session_cookie = session_cookie
        self.leaderboard_id = leaderboard_id
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

    def leaderboard_url(self, year: int) -> str:
        return f"{self.base_url}/{year}/leaderboard/private/view/{self.leaderboard_id}.json"

    async def get_private_leaderboard(self, year: int) -> LeaderboardSnapshot:
        """Fetch the full-event private leaderboard of ``year``.

        Raises:
            FetchError: UPSTREAM_STATUS for non-200 answers, UNEXPECTED for
                connection problems, timeouts and malformed payloads.
        """
        url = self.leaderboard_url(year)
        logger.debug(f"Fetching private leaderboard for {year}")

        try:
            async with self.session.get(
                url,
                headers={"User-Agent": USER_AGENT},
                cookies={"session": self.session_cookie},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                allow_redirects=False,
            ) as response:
                if response.status != 200:
                    logger.warning(f"Private leaderboard for {year} returned HTTP {response.status}")
                    raise FetchError.upstream_status(response.status, url)
                data = await response.json(content_type=None)
                last_update = _parse_date_header(response.headers.get("Date"))
        except FetchError:
            raise
        except asyncio.TimeoutError as e:
            raise FetchError.unexpected(f"Timed out fetching {url}") from e
        except aiohttp.ClientError as e:
            raise FetchError.unexpected(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError.unexpected(f"Malformed leaderboard payload from {url}: {e}") from e

        try:
            snapshot = LeaderboardSnapshot.from_api(data, last_update)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FetchError.unexpected(f"Malformed leaderboard payload from {url}: {e}") from e

        logger.debug(f"Fetched {len(snapshot.members)} members for {year}")
        return snapshot

    async def get_daily_private_leaderboard(
        self,
        year: int,
        day: int,
        parts: Parts
    ) -> Tuple[LeaderboardSnapshot, datetime]:
        """Fetch the leaderboard of ``year`` reduced to one day and its last update instant."""
        snapshot = await self.get_private_leaderboard(year)
        return daily_leaderboard(snapshot, day, parts), snapshot.last_update
