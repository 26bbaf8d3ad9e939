"""Ordering of counts and entries into ranked, tie-broken lists"""
import math
from typing import Iterable, Mapping, Sequence, Tuple

from mal_wrapped.models.entry import ListEntry
from mal_wrapped.models.stats import LabelCount, StatsOptions


def rank_labels(counts: Mapping[str, int], top_n: int) -> Tuple[LabelCount, ...]:
    """
    Rank labels by count, highest first.

    Equal counts keep the mapping's iteration order (first seen), since sorted() is
    stable. An empty mapping gives an empty tuple.
    """
    if top_n <= 0:
        return ()
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return tuple(LabelCount(label=label, count=count) for label, count in ranked[:top_n])


def rank_top_rated(entries: Iterable[ListEntry], top_n: int) -> Tuple[ListEntry, ...]:
    """Rated entries by user score, highest first, ties in list order."""
    if top_n <= 0:
        return ()
    rated = [entry for entry in entries if entry.is_rated]
    rated.sort(key=lambda entry: -entry.user_score)
    return tuple(rated[:top_n])


def is_hidden_gem(entry: ListEntry, options: StatsOptions) -> bool:
    if entry.user_score < options.gem_score_threshold:
        return False
    if not entry.has_known_popularity:
        return not options.gem_requires_known_popularity
    return entry.community_popularity < options.gem_popularity_threshold


def rank_hidden_gems(entries: Iterable[ListEntry], options: StatsOptions) -> Tuple[ListEntry, ...]:
    """Highly rated, little known entries: score descending, then smallest audience first."""
    gems: Sequence[ListEntry] = [entry for entry in entries if is_hidden_gem(entry, options)]

    def sort_key(entry: ListEntry):
        # Unknown popularity only gets here when allowed, and ranks as least hidden
        popularity = entry.community_popularity if entry.has_known_popularity else math.inf
        return (-entry.user_score, popularity)

    return tuple(sorted(gems, key=sort_key)[:options.top_n])
