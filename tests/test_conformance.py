"""Conformance tests: YAML fixtures through both construction paths.

Loads YAML fixtures from tests/fixtures/ and runs every case through the
programmatic API (``with_`` chaining) and the config path
(``parse_lexer_config`` + ``Registry.load_lexer``).

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from lexum import (
    Lexer,
    RegistryBuilder,
    empty,
    parse_lexer_config,
    register_core_converters,
)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

# Mirrors register_core_converters() for the programmatic path.
CONVERTERS: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "lower": str.lower,
    "upper": str.upper,
}


@dataclass
class FixtureCase:
    """A single input/expectation pair from a conformance fixture."""

    fixture_name: str
    case_name: str
    config: dict[str, Any]
    input: str
    expect: Any


def _build_lexer(rules: list[dict[str, Any]]) -> Lexer[Any]:
    """Build a lexer from fixture rules with the combinator API."""
    lexer: Lexer[Any] = empty()
    for rule in rules:
        lexer = lexer.with_(rule["regex"], CONVERTERS[rule.get("convert", "str")])
    return lexer


def _load_fixtures() -> list[FixtureCase]:
    """Load every case of every fixture file, in file order."""
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                for case in doc["cases"]:
                    cases.append(
                        FixtureCase(
                            fixture_name=doc["name"],
                            case_name=case["name"],
                            config={"rules": doc["rules"]},
                            input=str(case["input"]),
                            expect=case["expect"],
                        )
                    )
    return cases


def _fixture_id(case: FixtureCase) -> str:
    return f"{case.fixture_name}::{case.case_name}"


_cases = _load_fixtures()
_ids = [_fixture_id(c) for c in _cases]


@pytest.mark.parametrize("case", _cases, ids=_ids)
def test_combinator_path(case: FixtureCase) -> None:
    lexer = _build_lexer(case.config["rules"])
    actual = lexer.try_match(case.input)
    assert actual == case.expect, (
        f"Fixture '{case.fixture_name}' case '{case.case_name}': "
        f"expected {case.expect!r}, got {actual!r}"
    )


@pytest.mark.parametrize("case", _cases, ids=_ids)
def test_config_path(case: FixtureCase) -> None:
    registry = register_core_converters(RegistryBuilder()).build()
    lexer = registry.load_lexer(parse_lexer_config(case.config))
    actual = lexer.try_match(case.input)
    assert actual == case.expect, (
        f"Fixture '{case.fixture_name}' case '{case.case_name}': "
        f"expected {case.expect!r}, got {actual!r}"
    )


def test_fixtures_are_present() -> None:
    assert len(_cases) > 0
