"""Core protocols and type aliases for lexum.

- CompiledPattern is the regex-engine port (re2 and stdlib ``re`` both fit)
- Mapper is the transform applied by Lexer.map
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CompiledPattern(Protocol):
    """A compiled regular expression usable as a lexer rule.

    Only the three members lexum consumes are required: the source text
    (for error messages), the capturing group count (checked once at
    construction), and full-string matching.
    """

    @property
    def pattern(self) -> Any: ...

    @property
    def groups(self) -> int: ...

    def fullmatch(self, text: str, /) -> Any: ...


type Mapper[T, U] = Callable[[T], U | None]
