"""Ticker to CIK lookup over the SEC company_tickers.json dataset."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import httpx
from pydantic import ValidationError

from filing_finder.client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, describe_validation_error, sec_headers
from filing_finder.errors import MalformedResponseError, NotFoundError, NotLoadedError, RetrievalError
from filing_finder.models import TickerRecord

logger = logging.getLogger(__name__)

COMPANY_TICKERS_URL = "https://www.sec.gov/files/company_tickers.json"


class TickerDirectory:
    """
    Read-only ticker -> CIK lookup.

    The dataset is loaded once and never mutated, so a single directory can be
    shared by any number of concurrent lookups. When a ticker occurs more than
    once, the first record in dataset order wins.
    """

    def __init__(self, records: Iterable[TickerRecord] | None = None) -> None:
        self._records: tuple[TickerRecord, ...] | None = None
        self._index: dict[str, int] = {}

        if records is not None:
            self._records = tuple(records)
            for record in self._records:
                self._index.setdefault(record.ticker, record.identifier)

    @classmethod
    def from_company_tickers(cls, raw: dict | list) -> "TickerDirectory":
        """
        Build a directory from the company_tickers.json document.

        Args:
            raw: Mapping of arbitrary keys to {"ticker", "cik_str", ...} objects,
                or a list of those objects

        Entries without a usable ticker or cik_str are skipped with a warning.

        Raises:
            MalformedResponseError: If the document is not a mapping or a list
        """
        if not isinstance(raw, (dict, list)):
            raise MalformedResponseError(f"expected a ticker mapping, got {type(raw).__name__}")

        values = raw.values() if isinstance(raw, dict) else raw
        records = []
        for position, entry in enumerate(values):
            try:
                records.append(TickerRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping ticker entry #%d: %s", position, describe_validation_error(e))

        return cls(records)

    @property
    def loaded(self) -> bool:
        return self._records is not None

    def __len__(self) -> int:
        return len(self._records or ())

    def resolve(self, ticker: str) -> int:
        """
        Find the CIK for a ticker.

        Args:
            ticker: Stock ticker symbol (case-insensitive)

        Returns:
            The numeric CIK of the first matching record

        Raises:
            NotLoadedError: If no dataset has been loaded
            NotFoundError: If no record carries the ticker
        """
        if self._records is None:
            raise NotLoadedError()

        ticker_upper = ticker.strip().upper()
        identifier = self._index.get(ticker_upper)
        if identifier is None:
            raise NotFoundError(ticker)

        return identifier


def load_ticker_directory(path: Path | str) -> TickerDirectory:
    """Load the ticker directory from a local company_tickers.json file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(f"{path} is not valid JSON: {e}") from e

    directory = TickerDirectory.from_company_tickers(raw)
    logger.info("Loaded %d tickers from %s", len(directory), path)
    return directory


async def fetch_ticker_directory(
    user_agent: str = DEFAULT_USER_AGENT,
    url: str = COMPANY_TICKERS_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TickerDirectory:
    """
    Download company_tickers.json from sec.gov and build the directory.

    Raises:
        RetrievalError: If the download fails
        MalformedResponseError: If the document is not a ticker dataset
    """
    logger.debug("GET %s", url)
    try:
        async with httpx.AsyncClient(
            transport=transport,
            follow_redirects=True,
            timeout=DEFAULT_TIMEOUT,
            headers=sec_headers(user_agent),
        ) as client:
            response = await client.get(url)
    except httpx.RequestError as e:
        raise RetrievalError(None, detail=str(e), source="ticker data") from e

    if not response.is_success:
        raise RetrievalError(None, status_code=response.status_code, source="ticker data")

    try:
        raw = response.json()
    except ValueError as e:
        raise MalformedResponseError("ticker data is not valid JSON") from e

    directory = TickerDirectory.from_company_tickers(raw)
    logger.info("Loaded %d tickers from %s", len(directory), url)
    return directory
