"""Statistics snapshot and computation options"""
from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from mal_wrapped.models.entry import ListEntry


class StatsOptions(BaseModel):
    """Every threshold and temporal input of the statistics pipeline"""
    model_config = ConfigDict(frozen=True)

    target_year: int = Field(..., ge=1, description="Year the review covers")
    top_n: int = Field(5, ge=1, description="Length of every ranked list")
    lookback_years: int = Field(0, ge=0, description="Extra years before target_year included in seasonal buckets")
    gem_popularity_threshold: int = Field(100_000, gt=0, description="Entries with this many list users or more are not hidden")
    gem_score_threshold: int = Field(8, ge=1, le=10, description="Minimum user score for a hidden gem")
    gem_requires_known_popularity: bool = Field(True, description="Exclude entries without popularity data from hidden gems")
    agreement_tolerance_score: float = Field(1.5, ge=0, description="Max distance between user score and community mean that counts as agreement")

    @property
    def season_years(self) -> range:
        return range(self.target_year - self.lookback_years, self.target_year + 1)


@dataclass(frozen=True)
class LabelCount:
    """A label (genre, studio, author, season) and how many entries carry it"""
    label: str
    count: int


@dataclass(frozen=True)
class SeasonalHighlight:
    """The busiest season bucket and its best-regarded entry"""
    label: str
    count: int
    entry: ListEntry


@dataclass(frozen=True)
class Stats:
    """Immutable aggregate over one complete list"""
    total_entries: int = 0
    top_genres: Tuple[LabelCount, ...] = ()
    top_studios: Tuple[LabelCount, ...] = ()
    top_authors: Tuple[LabelCount, ...] = ()
    top_rated: Tuple[ListEntry, ...] = ()
    hidden_gems: Tuple[ListEntry, ...] = ()
    seasonal_highlight: Optional[SeasonalHighlight] = None
    total_watch_time_minutes: int = 0
    total_units_consumed: int = 0
    community_agreement_percent: Optional[int] = None
    status_counts: Tuple[LabelCount, ...] = ()

    @property
    def total_watch_time_hours(self) -> int:
        return self.total_watch_time_minutes // 60

    def top_label(self, kind: str) -> Tuple[LabelCount, ...]:
        """Ranked labels for 'genre', 'studio' or 'author'"""
        rankings = {
            "genre": self.top_genres,
            "studio": self.top_studios,
            "author": self.top_authors,
        }
        if kind not in rankings:
            raise ValueError(f"Unknown label kind '{kind}'. Expected one of {sorted(rankings)}")
        return rankings[kind]

    def status_count(self, status: str) -> int:
        for item in self.status_counts:
            if item.label == status:
                return item.count
        return 0
