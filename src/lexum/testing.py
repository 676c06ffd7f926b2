"""Test utilities for lexum.

Probes for observing how combinators call their parts. These are not
lexers for real grammars; they exist to check the short-circuit and
no-call guarantees of ``map`` and ``or_`` from the outside.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from lexum._lexer import Lexer

if TYPE_CHECKING:
    from lexum._types import Mapper


@dataclass(frozen=True, slots=True)
class RecordingLexer[T](Lexer[T]):
    """Delegate to ``inner`` and record every input it is asked to match.

    >>> from lexum import from_regex
    >>> from lexum.testing import RecordingLexer
    >>> probe = RecordingLexer(from_regex(r"([a-z]+)"))
    >>> from_regex(r"(\\d+)").or_(probe).try_match("42")
    '42'
    >>> probe.calls
    []
    """

    inner: Lexer[T]
    calls: list[str] = field(default_factory=list, compare=False)

    def try_match(self, text: str, /) -> T | None:
        self.calls.append(text)
        return self.inner.try_match(text)


@dataclass(slots=True)
class CountingMapper[T, U]:
    """Wrap a mapper and count how many times it is invoked."""

    fn: Mapper[T, U]
    count: int = 0
    seen: list[Any] = field(default_factory=list)

    def __call__(self, value: T) -> U | None:
        self.count += 1
        self.seen.append(value)
        return self.fn(value)
