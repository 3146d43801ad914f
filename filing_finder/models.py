"""Data models for the filing finder."""

from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from filing_finder.identifiers import document_url

DEFAULT_CATEGORIES = ("10-K", "10-Q", "8-K")
DEFAULT_PER_CATEGORY_LIMIT = 5


class TickerRecord(BaseModel):
    """One entry of the ticker dataset."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    identifier: int = Field(ge=0, validation_alias=AliasChoices("identifier", "cik_str"))

    @field_validator("ticker")
    @classmethod
    def _uppercase_ticker(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("identifier", mode="before")
    @classmethod
    def _parse_identifier(cls, value):
        # The dataset ships cik_str as a number, some mirrors as a padded string
        if isinstance(value, str):
            return int(value.strip())
        return value


class RawFilingEntry(BaseModel):
    """A filing as returned by the submissions registry."""

    model_config = ConfigDict(frozen=True)

    form_type: str
    filing_date: date
    accession_number: str
    primary_document: str


class SelectedFiling(RawFilingEntry):
    """A filing that made it into the ranked, per-category result."""


class FilingSelection(BaseModel):
    """Selection criteria applied to a filer's history."""

    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    per_category_limit: int = Field(default=DEFAULT_PER_CATEGORY_LIMIT, ge=0)
    date_from: date | None = None
    date_to: date | None = None


class RecentFilings(BaseModel):
    """The parallel arrays under ``filings.recent`` of a submissions document."""

    form_types: list[str] = Field(alias="form")
    filing_dates: list[str] = Field(alias="filingDate")
    accession_numbers: list[str] = Field(alias="accessionNumber")
    primary_documents: list[str] = Field(alias="primaryDocument")

    @model_validator(mode="after")
    def _check_parallel_lengths(self) -> "RecentFilings":
        lengths = {
            "form": len(self.form_types),
            "filingDate": len(self.filing_dates),
            "accessionNumber": len(self.accession_numbers),
            "primaryDocument": len(self.primary_documents),
        }
        if len(set(lengths.values())) > 1:
            raise ValueError(f"recent filing arrays differ in length: {lengths}")
        return self


class FilingsSection(BaseModel):
    recent: RecentFilings


class SubmissionsResponse(BaseModel):
    """Subset of the submissions JSON this package reads."""

    filings: FilingsSection


class PipelineResult(BaseModel):
    """Outcome of a successful pipeline run."""

    ticker: str
    identifier: str
    filings: list[SelectedFiling]

    @property
    def is_empty(self) -> bool:
        return not self.filings

    def document_url(self, filing: RawFilingEntry) -> str:
        """Link to the primary document of ``filing``."""
        return document_url(self.identifier, filing.accession_number, filing.primary_document)
