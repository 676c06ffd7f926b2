"""Lexer: single-token matching with map and alternation combinators.

A lexer takes one input string and either produces a typed token or
``None``. Leaves are built from a regular expression with exactly one
capturing group; everything else is composition:

- ``PatternLexer``: full-string match, returns the capture group
- ``Mapped``: transforms a successful result
- ``Alternative``: left-biased, first success wins
- ``Empty``: never matches

Every variant is a frozen dataclass. Combinators build new lexers and never
mutate the ones they were built from, so a lexer can be shared freely
between threads.

INV: construction errors are raised at build time, never on first match.
INV: a non-match is ``None``, never an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import re2

from lexum._types import CompiledPattern

if TYPE_CHECKING:
    from lexum._types import Mapper

logger = logging.getLogger(__name__)


class LexerError(Exception):
    """Errors from lexer construction."""


class InvalidPatternError(LexerError):
    """A pattern does not have exactly one capturing group."""

    def __init__(self, pattern: str, groups: int) -> None:
        self.pattern = pattern
        self.groups = groups
        super().__init__(
            f"pattern {pattern!r} must have exactly one capturing group, got {groups}"
        )


class InvalidRegexError(LexerError):
    """A regex string could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"invalid regex pattern {pattern!r}: {reason}")


class Lexer[T]:
    """Base of every lexer variant.

    Subclasses implement ``try_match``; the combinators live here so they
    are available on any lexer regardless of how it was built.
    """

    __slots__ = ()

    def try_match(self, text: str, /) -> T | None:
        """Return the token recognized in ``text``, or None."""
        raise NotImplementedError

    def map[U](self, mapper: Mapper[T, U]) -> Lexer[U]:
        """Transform the token produced by this lexer.

        The mapper is only called on success. A mapper returning None turns
        the success into a non-match.
        """
        return Mapped(self, mapper)

    def or_(self, other: Lexer[T]) -> Lexer[T]:
        """Try this lexer first and fall back to ``other`` on a non-match.

        ``other`` is not consulted when this lexer succeeds.
        """
        return Alternative(self, other)

    def with_(self, regex: str, mapper: Mapper[str, T]) -> Lexer[T]:
        """Shorthand for ``self.or_(from_regex(regex).map(mapper))``.

        Each call nests the chain one level deeper, and matching recurses
        once per level. Chains of several hundred rules approach the
        interpreter recursion limit.
        """
        return self.or_(from_regex(regex).map(mapper))


@dataclass(frozen=True, slots=True)
class Empty[T](Lexer[T]):
    """Never matches. Still rejects a missing input."""

    def try_match(self, text: str, /) -> T | None:
        _require_text(text)
        return None


@dataclass(frozen=True, slots=True)
class PatternLexer(Lexer[str]):
    """Full-string match returning the single capture group.

    The group count is checked at construction time. Matching uses
    ``fullmatch``: input that only contains a match as a substring is
    rejected.

    Raises:
        InvalidPatternError: If the pattern does not have exactly one group.
    """

    pattern: CompiledPattern

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, CompiledPattern):
            msg = f"expected a compiled pattern, got {type(self.pattern).__name__}"
            raise TypeError(msg)
        if isinstance(self.pattern.pattern, bytes):
            msg = "bytes patterns cannot match str input"
            raise TypeError(msg)
        groups = self.pattern.groups
        if groups != 1:
            raise InvalidPatternError(str(self.pattern.pattern), groups)

    def try_match(self, text: str, /) -> str | None:
        _require_text(text)
        try:
            match = self.pattern.fullmatch(text)
        except UnicodeEncodeError:
            # re2 matches UTF-8; lone surrogates cannot be encoded.
            return None
        if match is None:
            return None
        # None when the group is optional and did not participate.
        return match.group(1)


@dataclass(frozen=True, slots=True)
class Mapped[T, U](Lexer[U]):
    """Applies ``mapper`` to the token of ``lexer`` on success."""

    lexer: Lexer[T]
    mapper: Mapper[T, U]

    def __post_init__(self) -> None:
        if not callable(self.mapper):
            msg = f"mapper must be callable, got {type(self.mapper).__name__}"
            raise TypeError(msg)

    def try_match(self, text: str, /) -> U | None:
        value = self.lexer.try_match(text)
        if value is None:
            return None
        return self.mapper(value)


@dataclass(frozen=True, slots=True)
class Alternative[T](Lexer[T]):
    """Left-biased choice between two lexers.

    INV: first-success-wins, ``second`` is never consulted when ``first``
    produces a token.
    """

    first: Lexer[T]
    second: Lexer[T]

    def __post_init__(self) -> None:
        if not isinstance(self.second, Lexer):
            msg = f"alternative must be a Lexer, got {type(self.second).__name__}"
            raise TypeError(msg)

    def try_match(self, text: str, /) -> T | None:
        value = self.first.try_match(text)
        if value is not None:
            return value
        return self.second.try_match(text)


def empty[T]() -> Lexer[T]:
    """Create a lexer that never produces a token."""
    return Empty()


def from_pattern(pattern: CompiledPattern) -> Lexer[str]:
    """Create a string lexer from a compiled pattern.

    Accepts ``re2`` and standard-library ``re`` patterns alike.

    Raises:
        InvalidPatternError: If the pattern does not have exactly one group.
    """
    return PatternLexer(pattern)


def from_regex(regex: str) -> Lexer[str]:
    """Compile ``regex`` with re2 and create a string lexer from it.

    re2 guarantees linear-time matching and therefore rejects
    backreferences and lookaround.

    Raises:
        InvalidRegexError: If the regex does not compile.
        InvalidPatternError: If the regex does not have exactly one group.
    """
    if not isinstance(regex, str):
        msg = f"regex must be a string, got {type(regex).__name__}"
        raise TypeError(msg)
    try:
        compiled = re2.compile(regex)
    except re2.error as e:
        raise InvalidRegexError(regex, str(e)) from e
    logger.debug("compiled lexer regex %r", regex)
    return PatternLexer(compiled)


def alternatives[T](lexer: Lexer[T]) -> tuple[Lexer[T], ...]:
    """Flatten nested alternations into the branches tried, in order."""
    match lexer:
        case Alternative(first=first, second=second):
            return alternatives(first) + alternatives(second)
        case _:
            return (lexer,)


def lexer_depth(lexer: Lexer[Any]) -> int:
    """Calculate the nesting depth of a lexer tree."""
    match lexer:
        case Mapped(lexer=inner):
            return 1 + lexer_depth(inner)
        case Alternative(first=first, second=second):
            return 1 + max(lexer_depth(first), lexer_depth(second))
        case _:
            return 1


def _require_text(text: Any) -> None:
    if not isinstance(text, str):
        msg = f"input must be a string, got {type(text).__name__}"
        raise TypeError(msg)
