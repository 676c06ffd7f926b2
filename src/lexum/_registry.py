"""Converter registry for config-driven lexer construction.

The registry turns a LexerConfig into a runtime Lexer without hand-written
build code:

- RegistryBuilder → .build() → Registry (immutable)
- Converters are plain callables: (token: str) → value
- load_lexer() compiles each rule and chains them with ``or_``

Example::

    builder = register_core_converters(RegistryBuilder())
    builder.converter("hex", lambda s: int(s, 16))
    registry = builder.build()

    config = parse_lexer_config({"rules": [{"regex": "0x([0-9a-f]+)", "convert": "hex"}]})
    lexer = registry.load_lexer(config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lexum._lexer import Lexer, LexerError, empty, from_regex

if TYPE_CHECKING:
    from collections.abc import Callable

    from lexum._config import LexerConfig, RuleConfig

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_RULES = 256
MAX_REGEX_PATTERN_LENGTH = 4096

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnknownConverterError(LexerError):
    """A rule names a converter that was not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown converter: {name!r} (registered: {registered})"
        else:
            msg = f"unknown converter: {name!r} (no converters are registered)"
        super().__init__(msg)


class InvalidConfigError(LexerError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyRulesError(LexerError):
    """Config has too many rules (width-based limit)."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many rules: {count} exceeds maximum {max_}")


class PatternTooLongError(LexerError):
    """A rule regex exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type Converter = Callable[[str], Any]


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register converters by name, then call build() to produce an immutable
    Registry. Registering a name twice keeps the last converter.
    """

    def __init__(self) -> None:
        self._converters: dict[str, Converter] = {}

    def converter(self, name: str, fn: Converter) -> RegistryBuilder:
        """Register a token converter under ``name``."""
        if not callable(fn):
            msg = f"converter {name!r} must be callable, got {type(fn).__name__}"
            raise TypeError(msg)
        self._converters[name] = fn
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(_converters=MappingProxyType(dict(self._converters)))


def register_core_converters(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the built-in converters: str, int, float, lower, upper."""
    return (
        builder.converter("str", str)
        .converter("int", int)
        .converter("float", float)
        .converter("lower", str.lower)
        .converter("upper", str.upper)
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of token converters.

    Constructed via RegistryBuilder. Use load_lexer() to compile config into
    a runtime Lexer.
    """

    _converters: MappingProxyType[str, Converter] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_lexer(self, config: LexerConfig) -> Lexer[Any]:
        """Load a Lexer from configuration.

        Rules become alternatives in config order. An empty rule list loads
        a lexer that never matches.

        Raises:
            TooManyRulesError: too many rules
            PatternTooLongError: a regex exceeds the length limit
            UnknownConverterError: a converter name is not registered
            InvalidConfigError: a regex failed to compile or has the wrong
                number of capturing groups
        """
        if len(config.rules) > MAX_RULES:
            raise TooManyRulesError(len(config.rules), MAX_RULES)

        lexer: Lexer[Any] | None = None
        for rule in config.rules:
            rule_lexer = self._load_rule(rule)
            lexer = rule_lexer if lexer is None else lexer.or_(rule_lexer)

        logger.debug("loaded lexer with %d rules", len(config.rules))
        return lexer if lexer is not None else empty()

    @property
    def converter_count(self) -> int:
        """Number of registered converters."""
        return len(self._converters)

    def contains_converter(self, name: str) -> bool:
        """Check if a converter name is registered."""
        return name in self._converters

    def converter_names(self) -> list[str]:
        """Return all registered converter names (sorted)."""
        return sorted(self._converters.keys())

    def _load_rule(self, rule: RuleConfig) -> Lexer[Any]:
        if len(rule.regex) > MAX_REGEX_PATTERN_LENGTH:
            raise PatternTooLongError(len(rule.regex), MAX_REGEX_PATTERN_LENGTH)

        converter = self._converters.get(rule.convert)
        if converter is None:
            raise UnknownConverterError(rule.convert, list(self._converters.keys()))

        try:
            return from_regex(rule.regex).map(converter)
        except LexerError as e:
            raise InvalidConfigError(str(e)) from e
