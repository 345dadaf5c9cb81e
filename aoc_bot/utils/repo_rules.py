"""
Repository title rules.

Shortens repository links for display, e.g. turning
``https://github.com/alice/aoc-2023`` into ``alice/aoc-2023``.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Tuple


@dataclass(frozen=True)
class RepoMatch:
    rule_index: int
    replacement: str


@dataclass(frozen=True)
class RepoRule:
    regex: Pattern
    replacement: str


class RepoRules:
    """Ordered list of regex rules; the first one matching a url wins."""

    def __init__(self, rules: Iterable[Tuple[str, str]] = ()):
        self.rules: List[RepoRule] = []
        for pattern, replacement in rules:
            try:
                self.rules.append(RepoRule(re.compile(pattern), replacement))
            except re.error as e:
                raise ValueError(f"Invalid repository rule pattern '{pattern}': {e}") from e

    def match_and_replace(self, text: str) -> Optional[RepoMatch]:
        """Rewrite ``text`` with the first rule matching at its start."""
        if not text:
            return None
        for index, rule in enumerate(self.rules):
            match = rule.regex.match(text)
            if match:
                return RepoMatch(rule_index=index, replacement=match.expand(rule.replacement))
        return None

    def title_for(self, text: str) -> str:
        """Display title for ``text``, the text itself when no rule matches."""
        match = self.match_and_replace(text)
        return match.replacement if match else text
