"""Shared fixtures for tinta tests."""

from pathlib import Path

import pytest

from tinta import reset_segment_config
from tinta.grammar import Grammar, GrammarTable, load_bundled_grammars

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def grammars() -> GrammarTable:
    """The bundled grammar table."""
    return load_bundled_grammars()


@pytest.fixture(scope="session")
def c_grammar(grammars: GrammarTable) -> Grammar:
    return grammars.get("c")


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the literate C and JavaScript sample programs."""
    return FIXTURES


@pytest.fixture(autouse=True)
def _reset_config():
    """Leave the default SegmentConfig in place for the next test."""
    yield
    reset_segment_config()
