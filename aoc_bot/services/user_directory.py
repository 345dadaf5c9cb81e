"""
Directory linking Advent of Code members to Discord users and repositories.

Loaded once at startup from a JSON file such as::

    [
        {"aoc": 123456, "discord": 98765432101234567, "repo": "https://github.com/alice/aoc"},
        {"aoc": 234567, "repo": "https://gitlab.com/bob/advent"}
    ]
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkedUser:
    aoc_id: int
    discord_id: Optional[int] = None
    repo: Optional[str] = None


class UserDirectory:
    """Read-only lookups keyed by Advent of Code member id."""

    def __init__(self, users: Iterable[LinkedUser] = ()):
        self.by_aoc: Dict[int, LinkedUser] = {user.aoc_id: user for user in users}

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "UserDirectory":
        path = Path(path)
        if not path.exists():
            logger.warning(f"User directory {path} not found, no members will be linked")
            return cls()

        with path.open(encoding="utf-8") as f:
            entries = json.load(f)

        if not isinstance(entries, list):
            raise ValueError(f"User directory {path} must contain a JSON list")

        users = []
        for entry in entries:
            try:
                users.append(LinkedUser(
                    aoc_id=int(entry["aoc"]),
                    discord_id=int(entry["discord"]) if entry.get("discord") is not None else None,
                    repo=entry.get("repo") or None,
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid user directory entry {entry!r}: {e}") from e

        logger.info(f"Loaded {len(users)} linked users from {path}")
        return cls(users)

    def discord_mention(self, aoc_id: int) -> Optional[str]:
        user = self.by_aoc.get(aoc_id)
        if user is None or user.discord_id is None:
            return None
        return f"<@{user.discord_id}>"

    def repository(self, aoc_id: int) -> Optional[str]:
        user = self.by_aoc.get(aoc_id)
        return user.repo if user else None

    def __len__(self) -> int:
        return len(self.by_aoc)
