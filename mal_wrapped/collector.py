"""Sequential collection of paged list sources"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# (offset, limit) -> (page of raw records, has_next)
FetchPage = Callable[[int, int], Tuple[List[Any], bool]]
ProgressCallback = Callable[[int, int], None]

DEFAULT_PAGE_LIMIT = 100


@dataclass
class CollectionResult:
    """Everything gathered from a paged source, and whether the source was exhausted"""
    items: List[Any] = field(default_factory=list)
    complete: bool = False
    pages_fetched: int = 0
    error: Optional[BaseException] = None

    def raise_for_error(self) -> None:
        """Re-raise the upstream failure that stopped collection, if any."""
        if self.error is not None:
            raise self.error


def collect_pages(fetch_page: FetchPage,
                  limit: int = DEFAULT_PAGE_LIMIT,
                  max_pages: Optional[int] = None,
                  on_progress: Optional[ProgressCallback] = None) -> CollectionResult:
    """
    Fetch pages one at a time until the source reports no next page.

    Never raises: a failing fetch or a malformed page ends collection with whatever
    was gathered, flagged incomplete, and a failure is kept on `error`. An empty page
    ends collection even when the source claims more pages, so inconsistent paging
    metadata cannot loop forever.

    Args:
        fetch_page: Called with (offset, limit); returns (records, has_next)
        limit: Page size requested from the source
        max_pages: Optional cap on the number of requests
        on_progress: Called with (items loaded so far, pages fetched) after each page
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    result = CollectionResult()
    offset = 0

    while True:
        if max_pages is not None and result.pages_fetched >= max_pages:
            logger.warning(f"Stopping collection after {result.pages_fetched} pages (max_pages reached).")
            break

        logger.info(f"Fetching page {result.pages_fetched + 1} (offset={offset}, limit={limit})...")
        try:
            response = fetch_page(offset, limit)
        except Exception as e:
            logger.error(f"Failed to fetch page at offset {offset}: {e}")
            result.error = e
            break
        result.pages_fetched += 1

        if not (isinstance(response, tuple) and len(response) == 2):
            logger.warning(f"Malformed page response at offset {offset}: {response!r}. Stopping.")
            break
        page, has_next = response
        if not isinstance(page, list):
            logger.warning(f"Malformed page at offset {offset}: expected a list, got {type(page).__name__}. Stopping.")
            break

        if not page:
            if has_next:
                logger.info(f"Empty page at offset {offset} despite has_next. Treating as exhausted.")
            result.complete = True
            break

        result.items.extend(page)
        logger.info(f"Page {result.pages_fetched}: {len(page)} records, {len(result.items)} total.")
        if on_progress is not None:
            on_progress(len(result.items), result.pages_fetched)

        if not has_next:
            result.complete = True
            break
        offset += limit

    logger.info(f"Collection finished: {len(result.items)} records in {result.pages_fetched} pages "
                f"(complete={result.complete}).")
    return result
