"""Read-only view of one tokenized configuration line."""

from __future__ import annotations

from dataclasses import dataclass
import shlex
from typing import Iterable


@dataclass(frozen=True, slots=True)
class TokenLine:
    """Token 0 is the directive name, tokens 1..N are its arguments.

    ``block`` holds the entries of a ``{ ... }`` value block that followed the
    directive, when the reader found one.
    """

    tokens: tuple[str, ...] = ()
    block: tuple[str, ...] | None = None
    lineno: int | None = None
    source: str | None = None

    @classmethod
    def of(cls, *tokens: str, block: Iterable[str] | None = None, lineno: int | None = None) -> TokenLine:
        return cls(
            tokens=tuple(tokens),
            block=tuple(block) if block is not None else None,
            lineno=lineno,
        )

    @classmethod
    def parse(cls, text: str, *, lineno: int | None = None, source: str | None = None) -> TokenLine:
        return cls(tokens=tuple(shlex.split(text, comments=False)), lineno=lineno, source=source)

    @property
    def directive(self) -> str:
        return self.tokens[0] if self.tokens else ""

    @property
    def args(self) -> tuple[str, ...]:
        return self.tokens[1:]

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.directive)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]

    def has_args(self, count: int) -> bool:
        return len(self.tokens) - 1 >= count

    def arg(self, index: int, default: str | None = None) -> str | None:
        """Return argument ``index`` (1-based, as token positions are)."""
        if 0 < index < len(self.tokens):
            return self.tokens[index]
        return default
