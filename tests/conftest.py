"""Shared fixtures for filing finder tests."""

import json
from pathlib import Path

import httpx
import pytest

from filing_finder.client import SubmissionsClient, parse_submissions
from filing_finder.directory import TickerDirectory

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def tickers_path():
    return FIXTURES_DIR / "company_tickers.json"


@pytest.fixture
def companies_data(tickers_path):
    """Load company tickers fixture."""
    with open(tickers_path) as f:
        return json.load(f)


@pytest.fixture
def submissions_data():
    """Load submissions fixture (Apple, CIK 320193)."""
    with open(FIXTURES_DIR / "submissions_sample.json") as f:
        return json.load(f)


@pytest.fixture
def directory(companies_data):
    return TickerDirectory.from_company_tickers(companies_data)


@pytest.fixture
def history(submissions_data):
    return parse_submissions(submissions_data, "0000320193")


@pytest.fixture
def make_client():
    """
    Factory for a SubmissionsClient whose requests never leave the process.

    Every request is recorded in the returned list.
    """

    def factory(payload=None, status_code=200, content=None):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=payload)

        client = SubmissionsClient(
            user_agent="tests (tests@example.com)",
            transport=httpx.MockTransport(handler),
        )
        return client, requests

    return factory
