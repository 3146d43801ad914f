"""Exceptions raised by the filing finder.

Every error derives from :class:`FilingFinderError`; its message is what the
command line prints to the user.
"""


class FilingFinderError(Exception):
    """Base class for all filing finder failures."""


class NotLoadedError(FilingFinderError):
    """The ticker directory has no dataset loaded."""

    def __init__(self) -> None:
        super().__init__("Ticker data is not loaded yet")


class NotFoundError(FilingFinderError, LookupError):
    """No dataset record matches the requested ticker."""

    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(f"Ticker '{ticker}' not found")


class InvalidIdentifierError(FilingFinderError, ValueError):
    """An identifier cannot be represented in the registry's 10-digit form."""

    def __init__(self, identifier, reason: str) -> None:
        self.identifier = identifier
        super().__init__(f"Invalid CIK {identifier!r}: {reason}")


class RetrievalError(FilingFinderError):
    """The registry answered with a non-success status or could not be reached."""

    def __init__(
        self,
        identifier: str | None,
        status_code: int | None = None,
        detail: str | None = None,
        source: str | None = None,
    ) -> None:
        self.identifier = identifier
        self.status_code = status_code
        message = f"Failed to fetch {source or f'filings for CIK {identifier}'}"
        if status_code is not None:
            message += f": HTTP {status_code}"
        elif detail:
            message += f": {detail}"
        super().__init__(message)


class MalformedResponseError(FilingFinderError):
    """A registry or dataset document does not have the expected shape."""

    def __init__(self, detail: str, identifier: str | None = None) -> None:
        self.identifier = identifier
        self.detail = detail
        if identifier is None:
            super().__init__(f"Malformed data: {detail}")
        else:
            super().__init__(f"Unexpected response for CIK {identifier}: {detail}")


class EmptyInputError(FilingFinderError, ValueError):
    """The ticker input was blank."""

    def __init__(self) -> None:
        super().__init__("Please enter a ticker.")
