"""Client for the SEC EDGAR submissions registry."""

import logging

import httpx
from pydantic import ValidationError

from filing_finder.errors import MalformedResponseError, RetrievalError
from filing_finder.models import RawFilingEntry, SubmissionsResponse

logger = logging.getLogger(__name__)

SUBMISSIONS_URL = "https://data.sec.gov/submissions"
DEFAULT_USER_AGENT = "filing-finder/0.1.0 (contact@example.com)"
DEFAULT_TIMEOUT = 30.0


def sec_headers(user_agent: str) -> dict[str, str]:
    """Headers for sec.gov requests. SEC rejects requests without a User-Agent."""
    return {
        "User-Agent": user_agent,
        "Accept-Encoding": "gzip, deflate",
    }


def describe_validation_error(error: ValidationError) -> str:
    """
    Summarize a pydantic ValidationError on one line.

    Args:
        error: The validation error

    Returns:
        "location: message" pairs joined with "; "
    """
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'document'}: {err['msg']}"
        for err in error.errors()
    )


def parse_submissions(payload, identifier: str) -> list[RawFilingEntry]:
    """
    Shape a submissions document into filing entries.

    Args:
        payload: Decoded submissions JSON
        identifier: 10-digit CIK the document was requested for

    Returns:
        One RawFilingEntry per index of the ``filings.recent`` arrays, in registry order.
        An entry whose filing date does not parse is skipped with a warning.

    Raises:
        MalformedResponseError: If the arrays are missing or differ in length
    """
    try:
        recent = SubmissionsResponse.model_validate(payload).filings.recent
    except ValidationError as e:
        raise MalformedResponseError(describe_validation_error(e), identifier) from e

    entries = []
    rows = zip(
        recent.form_types,
        recent.filing_dates,
        recent.accession_numbers,
        recent.primary_documents,
    )
    for form_type, filing_date, accession_number, primary_document in rows:
        try:
            entry = RawFilingEntry(
                form_type=form_type,
                filing_date=filing_date,
                accession_number=accession_number,
                primary_document=primary_document,
            )
        except ValidationError:
            logger.warning(
                "CIK %s: skipping %s with invalid filing date %r", identifier, accession_number, filing_date
            )
            continue
        entries.append(entry)

    return entries


class SubmissionsClient:
    """Fetches a filer's recent filing history from data.sec.gov."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        base_url: str = SUBMISSIONS_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            user_agent: User-Agent sent to sec.gov (should name a contact)
            base_url: Submissions endpoint root
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the network
        """
        self._user_agent = user_agent
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def submissions_url(self, normalized_identifier: str) -> str:
        """Submissions document URL for a 10-digit CIK."""
        return f"{self._base_url}/CIK{normalized_identifier}.json"

    async def fetch_history(self, normalized_identifier: str) -> list[RawFilingEntry]:
        """
        Fetch every recent filing listed for a CIK.

        Args:
            normalized_identifier: 10-digit zero-padded CIK

        Returns:
            Filing entries in the order the registry lists them

        Raises:
            RetrievalError: If the registry responds with a non-success status or is unreachable
            MalformedResponseError: If the response is not a valid submissions document
        """
        url = self.submissions_url(normalized_identifier)
        logger.debug("GET %s", url)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                follow_redirects=True,
                timeout=self._timeout,
                headers=sec_headers(self._user_agent),
            ) as client:
                response = await client.get(url)
        except httpx.RequestError as e:
            raise RetrievalError(normalized_identifier, detail=str(e)) from e

        if not response.is_success:
            raise RetrievalError(normalized_identifier, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError("response body is not JSON", normalized_identifier) from e

        entries = parse_submissions(payload, normalized_identifier)
        logger.debug("CIK %s lists %d recent filings", normalized_identifier, len(entries))
        return entries
