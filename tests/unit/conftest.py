"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (memory backend, no files, no network)
- Deterministic (same result every time)
"""

import time

import pytest

from errors import EnrichmentError
from repositories import MemoryBackend, RecordStore
from service import ProjectService
from summarizer import StaticSummarizer, Summarizer


class FailingSummarizer(Summarizer):
    def summarize(self, record):
        raise EnrichmentError("upstream unavailable")


class SlowSummarizer(Summarizer):
    def __init__(self, delay: float):
        self.delay = delay

    def summarize(self, record):
        time.sleep(self.delay)
        return "too late"


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    """Empty store over a memory backend."""
    return RecordStore(backend)


@pytest.fixture
def summarizer():
    return StaticSummarizer("A short summary.")


@pytest.fixture
def service(store, directory, summarizer):
    svc = ProjectService(store, directory, summarizer, default_institution_id=1, summary_timeout=1.0)
    yield svc
    svc.close()


@pytest.fixture
def bare_service(store, directory):
    """Service without a summarizer."""
    svc = ProjectService(store, directory, default_institution_id=1)
    yield svc
    svc.close()


@pytest.fixture
def failing_summarizer():
    return FailingSummarizer()


@pytest.fixture
def slow_summarizer():
    return SlowSummarizer(delay=0.5)
