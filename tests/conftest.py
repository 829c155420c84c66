# Common pytest fixtures for all test modules
from pathlib import Path

import pytest
from skos2jskos.accumulator import EntityAccumulator
from skos2jskos.sparql import RdfSource


@pytest.fixture(scope="session")
def datadir():
    """DATADIR as a LocalPath"""
    return Path(__file__).resolve().parent / "data"


@pytest.fixture
def accumulator():
    return EntityAccumulator(default_language="en")


@pytest.fixture
def simple_source(datadir):
    return RdfSource.from_files([datadir / "simple.ttl"])


@pytest.fixture
def full_source(datadir):
    return RdfSource.from_files([datadir / "full.ttl"])


class FakeSource:
    """Stands in for RdfSource by returning canned rows for each query."""

    def __init__(self, *results):
        self.results = list(results)
        self.queries = []

    def run_query(self, pattern):
        self.queries.append(pattern)
        return self.results.pop(0) if self.results else []


@pytest.fixture
def fake_source():
    return FakeSource
