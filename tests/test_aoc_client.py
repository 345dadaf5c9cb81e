"""
Tests for the private leaderboard client and its daily view.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import aiohttp
import pytest

from aoc_bot.data_models.leaderboard import LeaderboardSnapshot, Parts
from aoc_bot.services.aoc_client import EPOCH, AocClient, daily_leaderboard
from aoc_bot.utils.exceptions import FetchError, FetchErrorKind

from conftest import DAY, UNLOCK, YEAR

BASE_TS = int(UNLOCK.timestamp())


def api_member(member_id, day_levels, name="someone", local_score=0, stars=0, last_star_ts=0):
    return {
        "id": member_id,
        "name": name,
        "local_score": local_score,
        "global_score": 0,
        "stars": stars,
        "last_star_ts": last_star_ts,
        "completion_day_level": {
            str(day): {
                str(level): {"get_star_ts": BASE_TS + offset, "star_index": member_id * 10 + level}
                for level, offset in levels.items()
            }
            for day, levels in day_levels.items()
        },
    }


PAYLOAD = {
    "owner_id": 1,
    "event": str(YEAR),
    "members": {
        "1": api_member(1, {DAY: {1: 100, 2: 900}, 1: {1: 5}}, name="alice", local_score=40, stars=3),
        "2": api_member(2, {DAY: {1: 50}}, name="bob", local_score=20, stars=1),
        "3": api_member(3, {DAY: {1: 300, 2: 400}}, name=None, local_score=30, stars=2),
        "4": api_member(4, {}, name="dave"),
    },
}


class FakeResponse:

    def __init__(self, status=200, payload=None, headers=None, json_error=None):
        self.status = status
        self.payload = payload
        self.headers = headers or {}
        self.json_error = json_error

    async def json(self, content_type="application/json"):
        if self.json_error is not None:
            raise self.json_error
        return self.payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession.get."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def client_for(session):
    return AocClient(session, session_cookie="cookie", leaderboard_id="4242", timeout=5)


@pytest.mark.unit
class TestSnapshotParsing:

    @pytest.mark.asyncio
    async def test_parses_members_and_date_header(self):
        session = FakeSession(FakeResponse(
            payload=PAYLOAD,
            headers={"Date": "Tue, 05 Dec 2023 12:00:00 GMT"},
        ))

        snapshot = await client_for(session).get_private_leaderboard(YEAR)

        assert set(snapshot.members) == {1, 2, 3, 4}
        assert snapshot.last_update == datetime(2023, 12, 5, 12, 0, tzinfo=timezone.utc)
        alice = snapshot.members[1]
        assert alice.local_score == 40
        assert alice.completion_day_level[DAY].second.get_star_ts == UNLOCK + timedelta(seconds=900)
        assert snapshot.members[3].display_name == "(anonymous user #3)"
        assert snapshot.members[4].last_star_ts == EPOCH

    @pytest.mark.asyncio
    async def test_request_shape(self):
        session = FakeSession(FakeResponse(payload=PAYLOAD))

        await client_for(session).get_private_leaderboard(YEAR)

        url, kwargs = session.requests[0]
        assert url == "https://adventofcode.com/2023/leaderboard/private/view/4242.json"
        assert kwargs["cookies"] == {"session": "cookie"}
        assert kwargs["allow_redirects"] is False
        assert "User-Agent" in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_missing_date_header_uses_now(self):
        session = FakeSession(FakeResponse(payload=PAYLOAD))
        before = datetime.now(timezone.utc)

        snapshot = await client_for(session).get_private_leaderboard(YEAR)

        assert snapshot.last_update >= before - timedelta(seconds=1)


@pytest.mark.unit
class TestFetchErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [302, 404, 500])
    async def test_non_200_is_upstream_status(self, status):
        session = FakeSession(FakeResponse(status=status))

        with pytest.raises(FetchError) as exc:
            await client_for(session).get_private_leaderboard(YEAR)

        assert exc.value.kind is FetchErrorKind.UPSTREAM_STATUS
        assert exc.value.status == status

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection reset"),
        asyncio.TimeoutError(),
    ])
    async def test_transport_failures_are_unexpected(self, error):
        session = FakeSession(error=error)

        with pytest.raises(FetchError) as exc:
            await client_for(session).get_private_leaderboard(YEAR)

        assert exc.value.kind is FetchErrorKind.UNEXPECTED
        assert exc.value.status is None

    @pytest.mark.asyncio
    async def test_malformed_json_is_unexpected(self):
        session = FakeSession(FakeResponse(json_error=ValueError("not json")))

        with pytest.raises(FetchError) as exc:
            await client_for(session).get_private_leaderboard(YEAR)

        assert exc.value.kind is FetchErrorKind.UNEXPECTED

    @pytest.mark.asyncio
    async def test_malformed_payload_is_unexpected(self):
        session = FakeSession(FakeResponse(payload={"members": {"1": {"name": "no id"}}}))

        with pytest.raises(FetchError) as exc:
            await client_for(session).get_private_leaderboard(YEAR)

        assert exc.value.kind is FetchErrorKind.UNEXPECTED


@pytest.mark.unit
class TestDailyLeaderboard:

    @pytest.fixture
    def snapshot(self):
        return LeaderboardSnapshot.from_api(PAYLOAD, UNLOCK)

    def test_both_parts(self, snapshot):
        daily = daily_leaderboard(snapshot, DAY, Parts.BOTH)

        # Part 1 order: bob, alice, member 3; part 2 order: member 3, alice
        assert daily.members[1].local_score == 3 + 3
        assert daily.members[2].local_score == 4
        assert daily.members[3].local_score == 2 + 4
        assert daily.members[4].local_score == 0
        assert [daily.members[i].stars for i in (1, 2, 3, 4)] == [2, 1, 2, 0]
        assert daily.members[1].last_star_ts == UNLOCK + timedelta(seconds=900)

    def test_first_part_only(self, snapshot):
        daily = daily_leaderboard(snapshot, DAY, Parts.P1)

        assert [daily.members[i].local_score for i in (2, 1, 3)] == [4, 3, 2]
        assert daily.members[1].last_star_ts == UNLOCK + timedelta(seconds=100)

    def test_second_part_only(self, snapshot):
        daily = daily_leaderboard(snapshot, DAY, Parts.P2)

        assert daily.members[3].local_score == 4
        assert daily.members[1].local_score == 3
        assert daily.members[2].stars == 0
        assert daily.members[2].last_star_ts == EPOCH

    def test_keeps_completion_data(self, snapshot):
        daily = daily_leaderboard(snapshot, DAY, Parts.P2)

        assert daily.members[1].completion_day_level == snapshot.members[1].completion_day_level

    @pytest.mark.asyncio
    async def test_client_returns_daily_view_and_last_update(self):
        session = FakeSession(FakeResponse(
            payload=PAYLOAD,
            headers={"Date": "Tue, 05 Dec 2023 12:00:00 GMT"},
        ))

        snapshot, last_update = await client_for(session).get_daily_private_leaderboard(YEAR, DAY, Parts.BOTH)

        assert last_update == datetime(2023, 12, 5, 12, 0, tzinfo=timezone.utc)
        assert snapshot.members[2].stars == 1
