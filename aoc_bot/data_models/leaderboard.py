"""
Leaderboard data models for the Advent of Code commands.

Immutable data transfer objects for a fetched private leaderboard and the
rows derived from it while answering a single command.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class Parts(Enum):
    """Which half of a day's puzzle a leaderboard view concerns."""
    P1 = "1"
    P2 = "2"
    BOTH = "both"

    @property
    def title_suffix(self) -> str:
        if self is Parts.BOTH:
            return ""
        return f"/{self.value}"


def _from_timestamp(ts: Any) -> datetime:
    return datetime.fromtimestamp(int(ts), tz=timezone.utc)


@dataclass(frozen=True)
class StarCompletion:
    """Completion of one star."""
    get_star_ts: datetime
    star_index: int = 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "StarCompletion":
        return cls(
            get_star_ts=_from_timestamp(data["get_star_ts"]),
            star_index=int(data.get("star_index", 0)),
        )


@dataclass(frozen=True)
class DayCompletion:
    """Both stars of a day; the second one only once part two is solved."""
    first: StarCompletion
    second: Optional[StarCompletion] = None


@dataclass(frozen=True)
class Member:
    """A private leaderboard member as reported by adventofcode.com."""
    id: int
    name: Optional[str]
    local_score: int
    stars: int
    last_star_ts: datetime
    completion_day_level: Dict[int, DayCompletion] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or f"(anonymous user #{self.id})"

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Member":
        days = {}
        for day, levels in data.get("completion_day_level", {}).items():
            # A day only shows up once its first star exists
            if "1" not in levels:
                continue
            days[int(day)] = DayCompletion(
                first=StarCompletion.from_api(levels["1"]),
                second=StarCompletion.from_api(levels["2"]) if "2" in levels else None,
            )
        return cls(
            id=int(data["id"]),
            name=data.get("name"),
            local_score=int(data.get("local_score", 0)),
            stars=int(data.get("stars", 0)),
            last_star_ts=_from_timestamp(data.get("last_star_ts", 0)),
            completion_day_level=days,
        )


@dataclass(frozen=True)
class LeaderboardSnapshot:
    """Member data of a private leaderboard as of one fetch."""
    members: Dict[int, Member]
    owner_id: int
    event: str
    last_update: datetime

    @classmethod
    def from_api(cls, data: Mapping[str, Any], last_update: datetime) -> "LeaderboardSnapshot":
        members = [Member.from_api(member) for member in data.get("members", {}).values()]
        return cls(
            members={member.id: member for member in members},
            owner_id=int(data.get("owner_id", 0)),
            event=str(data.get("event", "")),
            last_update=last_update,
        )


@dataclass(frozen=True)
class DayLeaderboardParams:
    """Validated arguments of the day leaderboard command."""
    day: int
    year: int
    parts: Parts
    rows: int
    offset: int = 0


@dataclass(frozen=True)
class RankedRow:
    """A member together with its computed rank."""
    rank: int
    member: Member


@dataclass(frozen=True)
class RenderRow:
    """All display values of one leaderboard line."""
    rank: int
    local_score: int
    stars: int
    completion: str
    delta: str
    name: str
    discord_user: str
    repo: str
    repo_title: str


@dataclass(frozen=True)
class LeaderboardDocument:
    """Fully rendered leaderboard message."""
    title: str
    header: str
    rows: List[str]
    footer: str

    @property
    def content(self) -> str:
        """Header and rows, the part that goes into the message body."""
        return "\n".join([self.header, *self.rows])