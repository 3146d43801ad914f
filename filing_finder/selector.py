"""Per-category ranking of a filer's filing history."""

import logging
from collections.abc import Iterable, Sequence

from filing_finder.models import (
    DEFAULT_CATEGORIES,
    DEFAULT_PER_CATEGORY_LIMIT,
    FilingSelection,
    RawFilingEntry,
    SelectedFiling,
)

logger = logging.getLogger(__name__)


def select_top_filings(
    entries: Sequence[RawFilingEntry],
    categories: Iterable[str] = DEFAULT_CATEGORIES,
    per_category_limit: int = DEFAULT_PER_CATEGORY_LIMIT,
) -> list[SelectedFiling]:
    """
    Pick the most recent filings of each category.

    - Keep entries whose form type equals the category exactly
    - Sort by filing date descending (ties keep registry order)
    - Take at most ``per_category_limit`` per category
    - Concatenate the buckets in category order

    Args:
        entries: Filing history in registry order
        categories: Form types to keep, in output order
        per_category_limit: Maximum filings per category

    Returns:
        Filings grouped by category, newest first within each group.
        Empty when nothing matches; that is not an error.
    """
    if per_category_limit <= 0:
        return []

    selected: list[SelectedFiling] = []
    seen = set()

    for category in categories:
        if category in seen:
            continue
        seen.add(category)

        subset = [entry for entry in entries if entry.form_type == category]
        # sorted() is stable, including with reverse=True
        subset = sorted(subset, key=lambda entry: entry.filing_date, reverse=True)

        selected.extend(
            SelectedFiling(**entry.model_dump()) for entry in subset[:per_category_limit]
        )
        logger.debug("%s: %d of %d kept", category, min(len(subset), per_category_limit), len(subset))

    return selected


def select_with(entries: Sequence[RawFilingEntry], selection: FilingSelection) -> list[SelectedFiling]:
    """Apply the optional date window of ``selection``, then rank per category."""
    if selection.date_from is not None:
        entries = [entry for entry in entries if entry.filing_date >= selection.date_from]

    if selection.date_to is not None:
        entries = [entry for entry in entries if entry.filing_date <= selection.date_to]

    return select_top_filings(entries, selection.categories, selection.per_category_limit)
