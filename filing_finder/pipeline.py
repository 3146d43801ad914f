"""Ticker -> CIK -> recent filings pipeline."""

import logging
from collections.abc import Callable

from filing_finder.client import SubmissionsClient
from filing_finder.directory import TickerDirectory
from filing_finder.errors import EmptyInputError
from filing_finder.identifiers import to_canonical_form
from filing_finder.models import FilingSelection, PipelineResult
from filing_finder.selector import select_with

logger = logging.getLogger(__name__)

ChartNotifier = Callable[[str], None]


class FilingPipeline:
    """
    Resolves a ticker and selects its most recent filings.

    Two outputs per run: the filing result, which is required, and a chart
    notification with the ticker symbol, which is best effort. A failing
    chart notifier is logged and never fails the run.
    """

    def __init__(
        self,
        directory: TickerDirectory,
        client: SubmissionsClient,
        selection: FilingSelection | None = None,
        chart_notifier: ChartNotifier | None = None,
    ) -> None:
        self._directory = directory
        self._client = client
        self._selection = selection or FilingSelection()
        self._chart_notifier = chart_notifier

    async def run(self, raw_ticker: str) -> PipelineResult:
        """
        Run the pipeline for one ticker.

        Args:
            raw_ticker: Ticker as typed by the user; surrounding blanks and case are ignored

        Returns:
            PipelineResult with the canonical CIK and the selected filings

        Raises:
            FilingFinderError: The first failure of any step; nothing partial is returned
        """
        ticker = raw_ticker.strip().upper()
        if not ticker:
            raise EmptyInputError()

        identifier = to_canonical_form(self._directory.resolve(ticker))
        logger.info("Resolved %s to CIK %s", ticker, identifier)

        self._notify_chart(ticker)

        history = await self._client.fetch_history(identifier)
        filings = select_with(history, self._selection)
        logger.info("Selected %d of %d filings for %s", len(filings), len(history), ticker)

        return PipelineResult(ticker=ticker, identifier=identifier, filings=filings)

    def _notify_chart(self, ticker: str) -> None:
        if self._chart_notifier is None:
            return
        try:
            self._chart_notifier(ticker)
        except Exception:
            logger.warning("Chart update for %s failed", ticker, exc_info=True)
