"""Config types for building a lexer from plain data.

Config-driven construction path:
  dict → parse_lexer_config() → LexerConfig → Registry.load_lexer() → Lexer

Expected shape (JSON or YAML)::

    rules:
      - regex: "(\\d+)"
        convert: int
      - regex: "([a-z]+)"

Rules are tried in order; ``convert`` names a converter registered with the
RegistryBuilder and defaults to ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lexum._lexer import LexerError

DEFAULT_CONVERTER = "str"


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """One alternative: a one-group regex plus the converter for its token."""

    regex: str
    convert: str = DEFAULT_CONVERTER


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Configuration for a Lexer.

    Loaded into a runtime Lexer via Registry.load_lexer().
    """

    rules: tuple[RuleConfig, ...]


class ConfigParseError(LexerError):
    """Error parsing a config dict into config types."""


def parse_lexer_config(data: dict[str, Any]) -> LexerConfig:
    """Parse a dict into a LexerConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_rules = data.get("rules")
    if raw_rules is None:
        msg = "missing required field 'rules'"
        raise ConfigParseError(msg)
    if not isinstance(raw_rules, list):
        msg = f"'rules' must be a list, got {type(raw_rules).__name__}"
        raise ConfigParseError(msg)

    return LexerConfig(rules=tuple(_parse_rule(r) for r in raw_rules))


def _parse_rule(data: dict[str, Any]) -> RuleConfig:
    if not isinstance(data, dict):
        msg = f"rule must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "regex" not in data:
        msg = "rule missing required field 'regex'"
        raise ConfigParseError(msg)
    regex = data["regex"]
    if not isinstance(regex, str):
        msg = f"rule regex must be a string, got {type(regex).__name__}"
        raise ConfigParseError(msg)

    convert = data.get("convert", DEFAULT_CONVERTER)
    if not isinstance(convert, str):
        msg = f"rule convert must be a string, got {type(convert).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - {"regex", "convert"})
    if unknown:
        msg = f"rule has unknown fields: {unknown}"
        raise ConfigParseError(msg)

    return RuleConfig(regex=regex, convert=convert)
