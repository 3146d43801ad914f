"""Tests for the ticker directory."""

import asyncio
import logging

import httpx
import pytest

from filing_finder.directory import (
    COMPANY_TICKERS_URL,
    TickerDirectory,
    fetch_ticker_directory,
    load_ticker_directory,
)
from filing_finder.errors import MalformedResponseError, NotFoundError, NotLoadedError, RetrievalError
from filing_finder.identifiers import to_canonical_form
from filing_finder.models import TickerRecord


class TestResolve:
    """Test TickerDirectory.resolve()."""

    def test_valid_ticker(self, directory):
        assert directory.resolve("MSFT") == 789019

    def test_case_insensitive(self, directory):
        """Test that lookup uppercases its input."""
        assert directory.resolve("msft") == directory.resolve("MSFT") == directory.resolve("MsFt")

    def test_surrounding_blanks_ignored(self, directory):
        assert directory.resolve("  msft ") == 789019

    def test_unknown_ticker_raises_not_found(self, directory):
        with pytest.raises(NotFoundError, match="not found") as excinfo:
            directory.resolve("INVALID")
        assert excinfo.value.ticker == "INVALID"

    def test_not_found_is_lookup_error(self, directory):
        with pytest.raises(LookupError):
            directory.resolve("ZZZZ")

    def test_not_loaded(self):
        """Test that an unloaded directory refuses lookups."""
        directory = TickerDirectory()
        assert not directory.loaded
        with pytest.raises(NotLoadedError):
            directory.resolve("AAPL")

    def test_empty_dataset_is_loaded(self):
        directory = TickerDirectory([])
        assert directory.loaded
        with pytest.raises(NotFoundError):
            directory.resolve("AAPL")

    def test_duplicate_ticker_first_match_wins(self, directory):
        """Test that the first record in dataset order decides a duplicated ticker."""
        assert directory.resolve("AAPL") == 320193

    def test_lowercase_dataset_ticker(self, directory):
        assert directory.resolve("BRK-B") == 1067983

    def test_string_cik(self, directory):
        assert directory.resolve("GOOGL") == 1652044

    def test_every_unique_ticker_resolves(self, companies_data, directory):
        counts = {}
        for entry in companies_data.values():
            ticker = entry["ticker"].upper()
            counts[ticker] = counts.get(ticker, 0) + 1

        for entry in companies_data.values():
            ticker = entry["ticker"].upper()
            if counts[ticker] == 1:
                assert directory.resolve(ticker) == int(entry["cik_str"])

    def test_scenario_lowercase_to_canonical(self):
        """Test lookup of 'abc' followed by canonical formatting."""
        directory = TickerDirectory.from_company_tickers({"0": {"ticker": "ABC", "cik_str": 320193}})
        identifier = directory.resolve("abc")
        assert identifier == 320193
        assert to_canonical_form(identifier) == "0000320193"


class TestFromCompanyTickers:
    """Test building a directory from the dataset document."""

    def test_length(self, directory, companies_data):
        assert len(directory) == len(companies_data)

    def test_accepts_list_of_values(self, companies_data):
        directory = TickerDirectory.from_company_tickers(list(companies_data.values()))
        assert directory.resolve("NVDA") == 1045810

    def test_records_constructor(self):
        directory = TickerDirectory([TickerRecord(ticker="XYZ", identifier=42)])
        assert directory.resolve("xyz") == 42

    def test_unusable_entries_skipped(self, caplog):
        """Test that a bad entry is logged and skipped while the rest still resolve."""
        raw = {
            "0": {"cik_str": 320193, "ticker": "AAPL"},
            "1": {"cik_str": 5, "ticker": None},
            "2": {"ticker": "NOCIK"},
            "3": {"cik_str": 789019, "ticker": "MSFT"},
        }

        with caplog.at_level(logging.WARNING, logger="filing_finder.directory"):
            directory = TickerDirectory.from_company_tickers(raw)

        assert directory.resolve("AAPL") == 320193
        assert directory.resolve("MSFT") == 789019
        assert len(directory) == 2
        assert "#1" in caplog.text
        assert "#2" in caplog.text
        with pytest.raises(NotFoundError):
            directory.resolve("NOCIK")

    def test_not_a_mapping_rejected(self):
        with pytest.raises(MalformedResponseError):
            TickerDirectory.from_company_tickers("AAPL")


class TestLoadTickerDirectory:
    """Test load_ticker_directory()."""

    def test_load_fixture(self, tickers_path):
        directory = load_ticker_directory(tickers_path)
        assert directory.loaded
        assert directory.resolve("aapl") == 320193

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "company_tickers.json"
        path.write_text("{not json")
        with pytest.raises(MalformedResponseError, match="not valid JSON"):
            load_ticker_directory(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "company_tickers.json"
        path.write_bytes(b'{"0": {"cik_str": 1, "ticker": "A\xff"}}')
        with pytest.raises(MalformedResponseError):
            load_ticker_directory(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_ticker_directory(tmp_path / "missing.json")


class TestFetchTickerDirectory:
    """Test fetch_ticker_directory()."""

    def test_download(self, companies_data):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=companies_data)

        directory = asyncio.run(
            fetch_ticker_directory(user_agent="tests (tests@example.com)", transport=httpx.MockTransport(handler))
        )

        assert directory.resolve("MSFT") == 789019
        assert len(requests) == 1
        assert str(requests[0].url) == COMPANY_TICKERS_URL
        assert requests[0].headers["User-Agent"] == "tests (tests@example.com)"

    def test_http_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(403))
        with pytest.raises(RetrievalError, match="ticker data: HTTP 403") as excinfo:
            asyncio.run(fetch_ticker_directory(transport=transport))
        assert excinfo.value.status_code == 403

    def test_body_not_json(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html></html>"))
        with pytest.raises(MalformedResponseError):
            asyncio.run(fetch_ticker_directory(transport=transport))

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RetrievalError, match="connection refused"):
            asyncio.run(fetch_ticker_directory(transport=httpx.MockTransport(handler)))

