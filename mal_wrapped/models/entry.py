"""Domain models for normalized MyAnimeList list entries"""
import enum
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

DEFAULT_EPISODE_MINUTES = 24
DEFAULT_CHAPTER_MINUTES = 5


class MediaType(str, enum.Enum):
    ANIME = "anime"
    MANGA = "manga"


class EntryStatus(str, enum.Enum):
    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"


@dataclass(frozen=True)
class ListEntry:
    """One title a user has logged, with every optional field resolved to a default"""
    id: int
    title: str
    media_type: MediaType = MediaType.ANIME
    genres: Tuple[str, ...] = ()
    studios: Tuple[str, ...] = ()
    authors: Tuple[str, ...] = ()
    user_score: int = 0
    community_mean: Optional[float] = None
    community_popularity: Optional[int] = None
    status: Optional[EntryStatus] = None
    finish_date: Optional[date] = None
    units_consumed: int = 0
    unit_length_minutes: float = DEFAULT_EPISODE_MINUTES
    picture: Optional[str] = None

    @property
    def is_rated(self) -> bool:
        return self.user_score > 0

    @property
    def has_known_popularity(self) -> bool:
        return self.community_popularity is not None and self.community_popularity > 0

    @property
    def watch_minutes(self) -> int:
        """Whole minutes spent on this entry (floored per entry)"""
        # Products such as 100 * 20.15 land just below the whole minute
        return math.floor(round(self.units_consumed * self.unit_length_minutes, 6))
