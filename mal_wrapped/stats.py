"""Statistics pipeline: normalized entries in, one immutable Stats snapshot out"""
import logging
from typing import Sequence

from mal_wrapped.aggregation import authors_of, count_labels, count_statuses, genres_of, studios_of
from mal_wrapped.metrics import (
    community_agreement_percent,
    seasonal_highlight,
    total_units,
    total_watch_minutes,
)
from mal_wrapped.models.entry import ListEntry
from mal_wrapped.models.stats import Stats, StatsOptions
from mal_wrapped.ranking import rank_hidden_gems, rank_labels, rank_top_rated

logger = logging.getLogger(__name__)


def compute_stats(entries: Sequence[ListEntry], options: StatsOptions) -> Stats:
    """
    Derive every summary fact for one list.

    Pure and total: the same entries and options always give the same Stats, and an
    empty list gives empty rankings, zero totals and undefined highlight/agreement.
    Nothing outside `options` (clock, settings) influences the result.
    """
    entries = list(entries)
    status_counts = count_statuses(entries)

    stats = Stats(
        total_entries=len(entries),
        top_genres=rank_labels(count_labels(entries, genres_of), options.top_n),
        top_studios=rank_labels(count_labels(entries, studios_of), options.top_n),
        top_authors=rank_labels(count_labels(entries, authors_of), options.top_n),
        top_rated=rank_top_rated(entries, options.top_n),
        hidden_gems=rank_hidden_gems(entries, options),
        seasonal_highlight=seasonal_highlight(entries, options.season_years),
        total_watch_time_minutes=total_watch_minutes(entries),
        total_units_consumed=total_units(entries),
        community_agreement_percent=community_agreement_percent(entries, options.agreement_tolerance_score),
        status_counts=rank_labels(status_counts, len(status_counts)),
    )
    logger.debug(f"Computed stats over {len(entries)} entries: {stats.total_watch_time_minutes} minutes, "
                 f"{len(stats.top_rated)} top rated, {len(stats.hidden_gems)} hidden gems")
    return stats
