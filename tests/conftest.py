"""
Shared fixtures for the AoC bot tests.

Factories build leaderboard members and snapshots without touching the
network; fakes stand in for the leaderboard client and the Discord reply
transport.
"""

from datetime import datetime, timedelta, timezone

import pytest

from aoc_bot.data_models.leaderboard import (
    DayCompletion, LeaderboardSnapshot, Member, StarCompletion
)
from aoc_bot.services.renderer import LeaderboardRenderer
from aoc_bot.services.user_directory import LinkedUser, UserDirectory
from aoc_bot.utils.aoc_day import AocDay
from aoc_bot.utils.repo_rules import RepoRules

YEAR = 2023
DAY = 5
UNLOCK = AocDay(YEAR, DAY).unlock_datetime()
LAST_UPDATE = datetime(2023, 12, 5, 12, 0, 0, tzinfo=timezone.utc)


def build_member(member_id, local_score, stars=2, name=None, last_star_minutes=None,
                 first_minutes=10, second_minutes=20, day=DAY):
    """Member with a completion for ``day`` relative to that day's unlock."""
    completions = {}
    unlock = AocDay(YEAR, day).unlock_datetime()
    if stars >= 1:
        completions[day] = DayCompletion(
            first=StarCompletion(unlock + timedelta(minutes=first_minutes), star_index=member_id),
            second=StarCompletion(unlock + timedelta(minutes=second_minutes)) if stars >= 2 else None,
        )
    if last_star_minutes is None:
        last_star_minutes = second_minutes if stars >= 2 else first_minutes
    return Member(
        id=member_id,
        name=name if name is not None else f"member{member_id}",
        local_score=local_score,
        stars=stars,
        last_star_ts=unlock + timedelta(minutes=last_star_minutes),
        completion_day_level=completions,
    )


@pytest.fixture
def make_member():
    return build_member


@pytest.fixture
def make_snapshot():
    def factory(members, last_update=LAST_UPDATE):
        return LeaderboardSnapshot(
            members={member.id: member for member in members},
            owner_id=1,
            event=str(YEAR),
            last_update=last_update,
        )
    return factory


@pytest.fixture
def user_directory():
    return UserDirectory([
        LinkedUser(aoc_id=1, discord_id=1111, repo="https://github.com/alice/aoc-2023"),
        LinkedUser(aoc_id=2, repo="https://example.org/bob/advent"),
    ])


@pytest.fixture
def repo_rules():
    return RepoRules([
        (r"https://github\.com/(?P<user>[^/]+)/(?P<repo>[^/]+)", r"\g<user>/\g<repo>"),
    ])


@pytest.fixture
def renderer(repo_rules, user_directory):
    return LeaderboardRenderer(
        local_timezone=timezone.utc,
        repo_rules=repo_rules,
        users=user_directory,
    )


class FakeFetcher:
    """Leaderboard fetcher returning a fixed snapshot or raising a fixed error."""

    def __init__(self, snapshot=None, error=None):
        self.snapshot = snapshot
        self.error = error
        self.calls = []

    async def get_daily_private_leaderboard(self, year, day, parts):
        self.calls.append((year, day, parts))
        if self.error is not None:
            raise self.error
        return self.snapshot, self.snapshot.last_update


class FakeTransport:
    """Records delivered documents and error replies."""

    def __init__(self, deliver_error=None):
        self.deliver_error = deliver_error
        self.documents = []
        self.errors = []

    async def deliver(self, document):
        if self.deliver_error is not None:
            raise self.deliver_error
        self.documents.append(document)

    async def reply_error(self, message):
        self.errors.append(message)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def fake_transport():
    return FakeTransport
