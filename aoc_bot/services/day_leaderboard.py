"""
Day leaderboard command.

Runs one invocation of ``aoc day``: resolve arguments, fetch the snapshot,
rank, render and deliver. Requester mistakes and recoverable upstream
failures end in a single error reply; anything else propagates.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol, Tuple

from aoc_bot.data_models.leaderboard import LeaderboardDocument, LeaderboardSnapshot, Parts
from aoc_bot.services.parameters import resolve_day_params
from aoc_bot.services.renderer import LeaderboardRenderer
from aoc_bot.utils.command_args import CommandArgs
from aoc_bot.utils.error_reporting import delivery_error_message, fetch_error_message
from aoc_bot.utils.exceptions import AocCommandError, DeliveryError, FetchError
from aoc_bot.utils.ranking import rank_members

logger = logging.getLogger(__name__)


class InvocationState(Enum):
    RESOLVING = "resolving"
    FETCHING = "fetching"
    RANKING = "ranking"
    RENDERING = "rendering"
    DELIVERING = "delivering"
    DONE = "done"
    USER_ERROR = "user_error"
    FAULT = "fault"


class LeaderboardFetcher(Protocol):
    async def get_daily_private_leaderboard(
        self, year: int, day: int, parts: Parts
    ) -> Tuple[LeaderboardSnapshot, datetime]:
        ...


class Transport(Protocol):
    async def deliver(self, document: LeaderboardDocument) -> None:
        """Send the document, raising DeliveryError on failure."""
        ...

    async def reply_error(self, message: str) -> None:
        ...


class DayLeaderboardCommand:
    """Stateless handler for the day leaderboard command."""

    def __init__(
        self,
        fetcher: LeaderboardFetcher,
        renderer: LeaderboardRenderer,
        default_rows: int,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.fetcher = fetcher
        self.renderer = renderer
        self.default_rows = default_rows
        self.clock = clock

    def _enter(self, state: InvocationState) -> InvocationState:
        logger.debug(f"day leaderboard: {state.value}")
        return state

    async def invoke(self, args: CommandArgs, transport: Transport) -> InvocationState:
        """
        Run the command once.

        Args:
            args: Parsed command arguments
            transport: Where the document and error replies go

        Returns:
            DONE when the leaderboard was delivered, USER_ERROR when an error
            reply was sent instead

        Raises:
            FetchError: Fetch failed without an upstream status
            DeliveryError: Delivery failed for a reason other than size
            CompletionDataMissingError: Snapshot data contradicts itself
        """
        try:
            return await self._run(args, transport)
        except Exception:
            self._enter(InvocationState.FAULT)
            raise

    async def _run(self, args: CommandArgs, transport: Transport) -> InvocationState:
        self._enter(InvocationState.RESOLVING)
        now = self.clock() if self.clock else None
        try:
            params = resolve_day_params(args, self.default_rows, now)
        except AocCommandError as e:
            logger.info(f"Rejected day leaderboard request {args!r}: {e}")
            await transport.reply_error(e.user_message)
            return self._enter(InvocationState.USER_ERROR)

        self._enter(InvocationState.FETCHING)
        try:
            snapshot, last_update = await self.fetcher.get_daily_private_leaderboard(
                params.year, params.day, params.parts
            )
        except FetchError as e:
            message = fetch_error_message(e, params.year)
            if message is None:
                raise
            logger.info(f"Leaderboard fetch failed: {e}")
            await transport.reply_error(message)
            return self._enter(InvocationState.USER_ERROR)

        self._enter(InvocationState.RANKING)
        rows = rank_members(snapshot.members.values(), params.offset, params.rows)

        self._enter(InvocationState.RENDERING)
        document = self.renderer.render(params, rows, last_update)

        self._enter(InvocationState.DELIVERING)
        try:
            await transport.deliver(document)
        except DeliveryError as e:
            message = delivery_error_message(e)
            if message is None:
                raise
            logger.info(f"Leaderboard delivery rejected: {e}")
            await transport.reply_error(message)
            return self._enter(InvocationState.USER_ERROR)

        return self._enter(InvocationState.DONE)
