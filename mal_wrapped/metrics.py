"""Single-purpose derived metrics over normalized list entries"""
import math
from typing import Iterable, Optional, Sequence

from mal_wrapped.aggregation import count_season_buckets, season_label
from mal_wrapped.models.entry import ListEntry
from mal_wrapped.models.stats import SeasonalHighlight


def total_watch_minutes(entries: Iterable[ListEntry]) -> int:
    """Sum of units consumed times unit length, regardless of status."""
    return sum(entry.watch_minutes for entry in entries)


def total_units(entries: Iterable[ListEntry]) -> int:
    return sum(entry.units_consumed for entry in entries)


def seasonal_highlight(entries: Sequence[ListEntry], years: range) -> Optional[SeasonalHighlight]:
    """
    Pick the busiest season bucket and its representative entry.

    Buckets tie on first seen; the representative is the entry with the highest
    community mean, unknown means ranking lowest and ties going to the first seen.
    """
    buckets = count_season_buckets(entries, years)
    if not buckets:
        return None

    best_label = max(buckets, key=lambda label: buckets[label])
    bucket_entries = [entry for entry in entries if season_label(entry.finish_date, years) == best_label]
    representative = max(
        bucket_entries,
        key=lambda entry: entry.community_mean if entry.community_mean is not None else -1.0,
    )
    return SeasonalHighlight(label=best_label, count=buckets[best_label], entry=representative)


def community_agreement_percent(entries: Iterable[ListEntry], tolerance: float) -> Optional[int]:
    """
    Share of comparable entries whose user score is within `tolerance` of the community mean.

    Returns None when no entry has both a user score and a community mean.
    """
    considered = 0
    agreeing = 0
    for entry in entries:
        if not entry.is_rated or not entry.community_mean:
            continue
        considered += 1
        if abs(entry.user_score - entry.community_mean) <= tolerance:
            agreeing += 1

    if considered == 0:
        return None
    # Round half up
    return int(math.floor(agreeing * 100 / considered + 0.5))
