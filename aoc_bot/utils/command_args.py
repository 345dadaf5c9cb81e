"""
Keyed command arguments.

Splits raw command text such as ``5 2022 p=2 rows=10`` into named and
positional arguments. Named arguments win over positionals; positionals are
handed out in order to whichever lookup asks first.
"""

import shlex
from typing import Dict, Iterable, List, Optional


class CommandArgs:
    """Named and positional arguments of one command invocation."""

    def __init__(self, kwargs: Optional[Dict[str, str]] = None, args: Optional[Iterable[str]] = None):
        self.kwargs: Dict[str, str] = dict(kwargs or {})
        self.args: List[str] = list(args or [])

    @classmethod
    def parse(cls, text: str) -> "CommandArgs":
        """Tokenize shell-style, treating ``key=value`` tokens as named."""
        try:
            tokens = shlex.split(text)
        except ValueError:
            # Unbalanced quotes, fall back to plain whitespace splitting
            tokens = text.split()
        return cls.from_tokens(tokens)

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "CommandArgs":
        kwargs = {}
        args = []
        for token in tokens:
            key, sep, value = token.partition("=")
            if sep and key:
                kwargs[key.lower()] = value
            else:
                args.append(token)
        return cls(kwargs, args)

    def get_kwarg(self, name: str) -> Optional[str]:
        return self.kwargs.get(name)

    def get_from_kwargs_or_args(self, name: str) -> Optional[str]:
        """Named argument ``name``, else the next unused positional."""
        if name in self.kwargs:
            return self.kwargs[name]
        if self.args:
            return self.args.pop(0)
        return None

    def __repr__(self) -> str:
        return f"CommandArgs(kwargs={self.kwargs!r}, args={self.args!r})"
