"""lexum: single-token lexer combinators over regular expressions.

All public types are exported from this module for flat imports:

    from lexum import Lexer, from_regex, empty
"""

import logging

__version__ = "0.1.0"

# Config types, see lexum._config for details
from lexum._config import (
    ConfigParseError,
    LexerConfig,
    RuleConfig,
    parse_lexer_config,
)

# Lexer and combinators
from lexum._lexer import (
    Alternative,
    Empty,
    InvalidPatternError,
    InvalidRegexError,
    Lexer,
    LexerError,
    Mapped,
    PatternLexer,
    alternatives,
    empty,
    from_pattern,
    from_regex,
    lexer_depth,
)

# Registry, see lexum._registry for details
from lexum._registry import (
    MAX_REGEX_PATTERN_LENGTH,
    MAX_RULES,
    InvalidConfigError,
    PatternTooLongError,
    Registry,
    RegistryBuilder,
    TooManyRulesError,
    UnknownConverterError,
    register_core_converters,
)
from lexum._types import CompiledPattern, Mapper

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Protocols
    "CompiledPattern",
    "Mapper",
    # Lexer
    "Lexer",
    "Empty",
    "PatternLexer",
    "Mapped",
    "Alternative",
    "empty",
    "from_pattern",
    "from_regex",
    "alternatives",
    "lexer_depth",
    # Errors
    "LexerError",
    "InvalidPatternError",
    "InvalidRegexError",
    # Config types
    "RuleConfig",
    "LexerConfig",
    "ConfigParseError",
    "parse_lexer_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "register_core_converters",
    "UnknownConverterError",
    "InvalidConfigError",
    "TooManyRulesError",
    "PatternTooLongError",
    "MAX_RULES",
    "MAX_REGEX_PATTERN_LENGTH",
]
