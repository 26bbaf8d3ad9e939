"""Application configuration and environment settings"""
from datetime import datetime, timezone
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mal_wrapped.models.stats import StatsOptions


def _current_year() -> int:
    return datetime.now(timezone.utc).year


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Credentials, issued by the OAuth flow outside this package
    MAL_ACCESS_TOKEN: Optional[str] = Field(None, description="MyAnimeList OAuth access token")
    MAL_API_URL: str = Field("https://api.myanimelist.net/v2", description="MyAnimeList API base URL")

    # Fetching
    PAGE_LIMIT: int = Field(100, gt=0, le=1000, description="Entries requested per list page")
    MAX_PAGES: Optional[int] = Field(None, gt=0, description="Optional cap on list pages fetched per run")
    REQUEST_TIMEOUT_SECONDS: float = Field(15.0, gt=0, description="Timeout for a single API request")
    INCLUDE_MANGA: bool = Field(True, description="Also fetch and summarize the manga list")

    # Statistics
    TARGET_YEAR: int = Field(default_factory=_current_year, description="Year the review covers")
    LOOKBACK_YEARS: int = Field(0, ge=0, description="Extra years before TARGET_YEAR counted for seasons")
    TOP_N: int = Field(5, ge=1, description="Length of ranked lists")
    GEM_POPULARITY_THRESHOLD: int = Field(100_000, gt=0, description="List users at or above which an entry is not hidden")
    GEM_SCORE_THRESHOLD: int = Field(8, ge=1, le=10, description="Minimum user score for a hidden gem")
    GEM_REQUIRES_KNOWN_POPULARITY: bool = Field(True, description="Exclude entries without popularity data from hidden gems")
    AGREEMENT_TOLERANCE_SCORE: float = Field(1.5, ge=0, description="Max user/community score distance that counts as agreement")
    DEFAULT_EPISODE_MINUTES: float = Field(24, gt=0, description="Episode length used when MAL has none")
    DEFAULT_CHAPTER_MINUTES: float = Field(5, gt=0, description="Reading time assumed per manga chapter")

    # Output directory with default
    OUTPUT_DIR: str = Field("/output", description="Directory for output files")

    @property
    def stats_options(self) -> StatsOptions:
        """Statistics thresholds as an explicit options object"""
        return StatsOptions(
            target_year=self.TARGET_YEAR,
            top_n=self.TOP_N,
            lookback_years=self.LOOKBACK_YEARS,
            gem_popularity_threshold=self.GEM_POPULARITY_THRESHOLD,
            gem_score_threshold=self.GEM_SCORE_THRESHOLD,
            gem_requires_known_popularity=self.GEM_REQUIRES_KNOWN_POPULARITY,
            agreement_tolerance_score=self.AGREEMENT_TOLERANCE_SCORE,
        )

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore'
    )

settings = Settings()
