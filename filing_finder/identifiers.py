"""CIK and accession number formatting for SEC EDGAR URLs."""

from filing_finder.errors import InvalidIdentifierError

CIK_WIDTH = 10
MAX_CIK = 10**CIK_WIDTH - 1
ARCHIVES_URL = "https://www.sec.gov/Archives/edgar/data"


def to_canonical_form(identifier: int) -> str:
    """
    Render a CIK in the registry's zero-padded form.

    Args:
        identifier: Numeric CIK

    Returns:
        The CIK as exactly 10 characters, e.g. 320193 -> "0000320193"

    Raises:
        InvalidIdentifierError: If the CIK is negative or wider than 10 digits
    """
    if isinstance(identifier, bool) or not isinstance(identifier, int):
        raise InvalidIdentifierError(identifier, "not an integer")
    if identifier < 0:
        raise InvalidIdentifierError(identifier, "must not be negative")
    if identifier > MAX_CIK:
        raise InvalidIdentifierError(identifier, f"exceeds {CIK_WIDTH} digits")

    return str(identifier).zfill(CIK_WIDTH)


def from_canonical_form(canonical: str) -> int:
    """Parse a (possibly zero-padded) CIK string back to its integer value."""
    digits = canonical.strip()
    if not digits.isdigit():
        raise InvalidIdentifierError(canonical, "not a decimal number")
    return int(digits.lstrip("0") or "0")


def strip_separators(accession_number: str) -> str:
    """Drop the dashes: "0000320193-23-000077" -> "000032019323000077"."""
    return accession_number.replace("-", "")


def document_url(identifier: int | str, accession_number: str, primary_document: str) -> str:
    """
    Build the EDGAR archive link for a filing's primary document.

    The archive path uses the plain numeric CIK, without padding.
    """
    if isinstance(identifier, str):
        identifier = from_canonical_form(identifier)
    return f"{ARCHIVES_URL}/{identifier}/{strip_separators(accession_number)}/{primary_document}"
