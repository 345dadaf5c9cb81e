"""
Argument resolution for the day leaderboard command.
"""

import re
from datetime import datetime
from typing import Optional

from aoc_bot.data_models.leaderboard import DayLeaderboardParams, Parts
from aoc_bot.utils.aoc_day import FIRST_EVENT_YEAR, LAST_PUZZLE_DAY, AocDay
from aoc_bot.utils.command_args import CommandArgs
from aoc_bot.utils.exceptions import InvalidArgumentError, MissingArgumentError

MAX_ROWS = 200
MAX_OFFSET = 200

PARTS_BY_TOKEN = {parts.value: parts for parts in Parts}

# ASCII digits only, without separators or surrounding whitespace
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_bounded_int(value: str, field: str, low: int, high: int) -> int:
    if not INTEGER_PATTERN.fullmatch(value):
        raise InvalidArgumentError(field)
    number = int(value)
    if not low <= number <= high:
        raise InvalidArgumentError(field)
    return number


def resolve_day_params(
    args: CommandArgs,
    default_rows: int,
    now: Optional[datetime] = None
) -> DayLeaderboardParams:
    """
    Resolve and validate the arguments of a day leaderboard request.

    Args:
        args: Parsed command arguments; positionals are consumed by day, then year
        default_rows: Row count used when ``rows`` is not given
        now: Current time, defaults to the wall clock

    Returns:
        Validated parameters

    Raises:
        MissingArgumentError: No day given and no event is running
        InvalidArgumentError: An argument is unparsable or out of range
    """
    day_arg = args.get_from_kwargs_or_args("day")
    if day_arg is not None:
        day = _parse_bounded_int(day_arg, "day", 1, LAST_PUZZLE_DAY)
    else:
        current = AocDay.current(now)
        if current is None:
            raise MissingArgumentError("day")
        day = current.day

    most_recent_year = AocDay.most_recent(now).year
    year_arg = args.get_from_kwargs_or_args("year")
    if year_arg is not None:
        year = _parse_bounded_int(year_arg, "year", FIRST_EVENT_YEAR, most_recent_year)
    else:
        year = most_recent_year

    parts_arg = args.get_kwarg("p")
    if parts_arg is None:
        parts = Parts.BOTH
    elif parts_arg in PARTS_BY_TOKEN:
        parts = PARTS_BY_TOKEN[parts_arg]
    else:
        raise InvalidArgumentError("p")

    rows_arg = args.get_kwarg("rows")
    rows = default_rows if rows_arg is None else _parse_bounded_int(rows_arg, "rows", 0, MAX_ROWS)

    offset_arg = args.get_kwarg("offset")
    offset = 0 if offset_arg is None else _parse_bounded_int(offset_arg, "offset", 0, MAX_OFFSET)

    return DayLeaderboardParams(day=day, year=year, parts=parts, rows=rows, offset=offset)
