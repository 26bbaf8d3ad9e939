"""Year-in-review generation for a MyAnimeList user"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from mal_wrapped.collector import CollectionResult, FetchPage, collect_pages
from mal_wrapped.config import Settings
from mal_wrapped.models.entry import ListEntry, MediaType
from mal_wrapped.models.report import WrappedReport
from mal_wrapped.models.stats import Stats
from mal_wrapped.normalizer import EntryNormalizer
from mal_wrapped.services.mal import MALClient
from mal_wrapped.stats import compute_stats
from mal_wrapped.utils.json_encoder import to_jsonable

logger = logging.getLogger(__name__)

REPORT_VERSION = '1.0.0'

# (media type, entries loaded so far)
WrappedProgress = Callable[[str, int], None]


def stats_to_dict(stats: Stats) -> Dict[str, Any]:
    """Stats as plain JSON values, including derived display fields"""
    data = to_jsonable(stats)
    data['total_watch_time_hours'] = stats.total_watch_time_hours
    return data


class Wrapped:
    """Fetches a user's lists and turns them into a WrappedReport"""

    def __init__(self, settings: Settings, client: Optional[MALClient] = None):
        """Initialize with settings; the client is built from MAL_ACCESS_TOKEN unless injected"""
        if client is None:
            if not settings.MAL_ACCESS_TOKEN:
                raise ValueError("MAL_ACCESS_TOKEN is required")
            client = MALClient(
                token=settings.MAL_ACCESS_TOKEN,
                base_url=settings.MAL_API_URL,
                timeout=settings.REQUEST_TIMEOUT_SECONDS
            )
        self.settings = settings
        self.client = client
        self.options = settings.stats_options

    def generate(self, on_progress: Optional[WrappedProgress] = None) -> WrappedReport:
        """Generate the report. Failures are logged and returned as an invalid report."""
        try:
            # --- Stage 1: Profile ---
            user_info = self.client.get_user_info()

            # --- Stage 2: Anime list ---
            anime_entries, anime_result, anime_normalizer = self._collect_entries(
                MediaType.ANIME, self.client.fetch_anime_page,
                self.settings.DEFAULT_EPISODE_MINUTES, on_progress
            )
            anime_stats = compute_stats(anime_entries, self.options)
            logger.info(f"Anime stats: {anime_stats.total_entries} entries, "
                        f"{anime_stats.total_watch_time_hours} hours watched")

            attributes: Dict[str, Any] = {
                'anime_entries': len(anime_entries),
                'anime_records_skipped': anime_normalizer.skipped,
                'anime_duplicates': anime_normalizer.duplicates,
                'anime_complete': anime_result.complete,
                'anime_pages': anime_result.pages_fetched,
            }

            # --- Stage 3: Manga list, only when MAL reports one ---
            manga_stats: Optional[Stats] = None
            manga_statistics = user_info.get('manga_statistics')
            num_manga = manga_statistics.get('num_items', 0) if isinstance(manga_statistics, dict) else 0
            if self.settings.INCLUDE_MANGA and isinstance(num_manga, int) and num_manga > 0:
                manga_entries, manga_result, manga_normalizer = self._collect_entries(
                    MediaType.MANGA, self.client.fetch_manga_page,
                    self.settings.DEFAULT_CHAPTER_MINUTES, on_progress
                )
                manga_stats = compute_stats(manga_entries, self.options)
                attributes.update({
                    'manga_entries': len(manga_entries),
                    'manga_records_skipped': manga_normalizer.skipped,
                    'manga_duplicates': manga_normalizer.duplicates,
                    'manga_complete': manga_result.complete,
                    'manga_pages': manga_result.pages_fetched,
                })
            else:
                logger.info("No manga list to summarize. Skipping manga stats.")

            # --- Stage 4: Report ---
            profile_statistics = user_info.get('anime_statistics')
            report = WrappedReport(
                valid=True,
                username=user_info.get('name'),
                picture=user_info.get('picture'),
                target_year=self.options.target_year,
                anime=stats_to_dict(anime_stats),
                manga=stats_to_dict(manga_stats) if manga_stats is not None else None,
                profile_statistics=profile_statistics if isinstance(profile_statistics, dict) else {},
                attributes=attributes,
                metadata={
                    'version': REPORT_VERSION,
                    'generated_at': datetime.now(timezone.utc).isoformat(timespec='seconds'),
                    'options': self.options.model_dump(),
                }
            )
            logger.info("Wrapped generation successful.")
            return report

        except Exception as e:
            logger.exception(f"Critical error during wrapped generation: {e}")
            return WrappedReport(
                valid=False,
                target_year=self.options.target_year,
                attributes={'error': str(e)},
                metadata={'version': REPORT_VERSION}
            )

    def _collect_entries(self, media_type: MediaType, fetch_page: FetchPage,
                         default_unit_minutes: float,
                         on_progress: Optional[WrappedProgress]) -> Tuple[List[ListEntry], CollectionResult, EntryNormalizer]:
        """Collect every page of one list and normalize it"""
        logger.info(f"Loading {media_type.value} list...")

        def report_progress(loaded: int, pages: int) -> None:
            logger.info(f"Loaded {loaded} {media_type.value} records ({pages} pages)...")
            if on_progress is not None:
                on_progress(media_type.value, loaded)

        result = collect_pages(
            fetch_page,
            limit=self.settings.PAGE_LIMIT,
            max_pages=self.settings.MAX_PAGES,
            on_progress=report_progress
        )
        if result.error is not None:
            if not result.items:
                # Nothing to summarize: the upstream failure is terminal for this run
                result.raise_for_error()
            logger.warning(f"{media_type.value} list is partial after upstream error: {result.error}")

        normalizer = EntryNormalizer(media_type=media_type, default_unit_minutes=default_unit_minutes)
        entries = normalizer.normalize_all(result.items)
        return entries, result, normalizer
