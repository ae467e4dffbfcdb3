"""Pytest fixtures for prerequisite minimization tests."""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path so the scripts and `prereqs` import without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ["ENV"] = "test"

from prereqs.database import ImplicationDatabase
from prereqs.formula import Formula
from prereqs.models import Course
from prereqs.symbols import SymbolTable


def numbered_table(count):
    """A table where symbol i is course 'C{i}'."""
    table = SymbolTable()
    for i in range(count):
        table.intern(Course(course=f"C{i}"))
    return table


@pytest.fixture
def make_database():
    """Build a database from {symbol: [[symbols of clause], ...]}."""

    def build(entries, count=None):
        if count is None:
            mentioned = set(entries)
            for clauses in entries.values():
                for clause in clauses:
                    mentioned.update(clause)
            count = max(mentioned, default=-1) + 1
        database = ImplicationDatabase(numbered_table(count))
        for symbol, clauses in entries.items():
            database.add(symbol, Formula(clauses), code=f"C{symbol}")
        return database

    return build


@pytest.fixture
def monkeypatch_env(monkeypatch):
    """Monkeypatch environment so settings come only from the test."""
    for name in ("MINIMIZE_MAX_ROUNDS", "RANK_EXAM_SCORES", "EQUIVALENTS_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ENV", "test")
    return monkeypatch
