"""Label counting over normalized list entries"""
from collections import Counter
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from mal_wrapped.models.entry import ListEntry

LabelExtractor = Callable[[ListEntry], Sequence[str]]

# Month -> season. December, January and February are Winter of the finish date's year.
SEASONS_BY_MONTH = {
    1: "Winter", 2: "Winter", 3: "Spring",
    4: "Spring", 5: "Spring", 6: "Summer",
    7: "Summer", 8: "Summer", 9: "Fall",
    10: "Fall", 11: "Fall", 12: "Winter",
}


def genres_of(entry: ListEntry) -> Sequence[str]:
    return entry.genres


def studios_of(entry: ListEntry) -> Sequence[str]:
    return entry.studios


def authors_of(entry: ListEntry) -> Sequence[str]:
    return entry.authors


def season_label(finish_date: Optional[date], years: range) -> Optional[str]:
    """'Spring 2025' style bucket for a finish date, or None outside `years`."""
    if finish_date is None or finish_date.year not in years:
        return None
    return f"{SEASONS_BY_MONTH[finish_date.month]} {finish_date.year}"


def count_labels(entries: Iterable[ListEntry], extractor: LabelExtractor) -> Counter:
    """
    Count every label attached to every entry.

    An entry with three genres adds one to each of the three counters. Labels are
    compared as exact strings and the Counter keeps first-seen insertion order,
    which the ranking step relies on for ties.
    """
    counts: Counter = Counter()
    for entry in entries:
        for label in extractor(entry):
            counts[label] += 1
    return counts


def count_season_buckets(entries: Iterable[ListEntry], years: range) -> Counter:
    """Count entries finished inside `years` by their season bucket."""
    counts: Counter = Counter()
    for entry in entries:
        label = season_label(entry.finish_date, years)
        if label is not None:
            counts[label] += 1
    return counts


def count_statuses(entries: Iterable[ListEntry]) -> Counter:
    counts: Counter = Counter()
    for entry in entries:
        if entry.status is not None:
            counts[entry.status.value] += 1
    return counts
