"""
Ranking utilities for private leaderboards.

Members are ranked densely by local score: tied members share a rank and the
next distinct score takes the 1-based position of its first holder, so
scores [100, 100, 90] rank as [1, 1, 3].
"""

from itertools import islice
from typing import Iterable, Iterator, List, Tuple

from aoc_bot.data_models.leaderboard import Member, RankedRow


def member_sort_key(member: Member) -> Tuple[int, float, int]:
    """Descending local score, then earliest last star, then member id."""
    return (-member.local_score, member.last_star_ts.timestamp(), member.id)


def sort_members(members: Iterable[Member]) -> List[Member]:
    return sorted(members, key=member_sort_key)


def assign_ranks(sorted_members: Iterable[Member]) -> Iterator[RankedRow]:
    """Assign ranks to members that are already in leaderboard order."""
    last_score = None
    last_rank = 0
    for position, member in enumerate(sorted_members, start=1):
        if member.local_score != last_score:
            last_score = member.local_score
            last_rank = position
        yield RankedRow(rank=last_rank, member=member)


def rank_members(members: Iterable[Member], offset: int, limit: int) -> Iterator[RankedRow]:
    """
    Rank, filter and paginate leaderboard members.

    Ranks are assigned over the whole roster before members without stars
    are dropped; offset and limit apply to what remains.

    Args:
        members: Leaderboard members in any order
        offset: Number of ranked rows to skip
        limit: Maximum number of rows to return

    Returns:
        Single-pass iterator of ranked rows
    """
    if offset < 0 or limit < 0:
        raise ValueError("offset and limit must not be negative")

    ranked = assign_ranks(sort_members(members))
    with_stars = (row for row in ranked if row.member.stars > 0)
    return islice(with_stars, offset, offset + limit)
