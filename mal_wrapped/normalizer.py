"""Conversion of raw MyAnimeList list records into ListEntry values"""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from mal_wrapped.models.entry import (
    DEFAULT_CHAPTER_MINUTES,
    DEFAULT_EPISODE_MINUTES,
    EntryStatus,
    ListEntry,
    MediaType,
)

logger = logging.getLogger(__name__)

# MAL manga statuses folded onto the shared status set
_STATUS_ALIASES = {
    "reading": EntryStatus.WATCHING,
    "plan_to_read": EntryStatus.PLAN_TO_WATCH,
}


# --- Field helpers ---
def _get_dict(value: Any) -> Dict[str, Any]:
    """Returns the value if it is a dict, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def _get_int(value: Any) -> Optional[int]:
    """Accepts ints (not bools) and integral floats."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _get_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _get_labels(items: Any) -> Tuple[str, ...]:
    """Extracts label names from MAL's [{'name': ...}] lists, accepting plain strings too."""
    if not isinstance(items, list):
        return ()
    labels = []
    for item in items:
        name = item.get("name") if isinstance(item, dict) else item
        if isinstance(name, str) and name.strip():
            labels.append(name.strip())
    return tuple(labels)


def _get_authors(items: Any) -> Tuple[str, ...]:
    """Builds 'First Last' names from MAL's manga authors list."""
    if not isinstance(items, list):
        return ()
    names = []
    for item in items:
        person = _get_dict(_get_dict(item).get("node"))
        parts = [person.get("first_name"), person.get("last_name")]
        name = " ".join(p.strip() for p in parts if isinstance(p, str) and p.strip())
        if name:
            names.append(name)
    return tuple(names)


def _get_picture(main_picture: Any) -> Optional[str]:
    pictures = _get_dict(main_picture)
    for key in ("medium", "large"):
        url = pictures.get(key)
        if isinstance(url, str) and url:
            return url
    return None


def parse_mal_date(value: Any) -> Optional[date]:
    """Parse MAL's YYYY-MM-DD or YYYY-MM date strings. Year-only dates carry no season."""
    if not isinstance(value, str) or not value.strip():
        return None
    parts = value.strip().split("-")
    if len(parts) not in (2, 3):
        return None
    try:
        year, month = int(parts[0]), int(parts[1])
        day = int(parts[2]) if len(parts) == 3 else 1
        return date(year, month, day)
    except ValueError:
        logger.warning(f"Could not parse date value: {value}")
        return None


def _get_status(value: Any) -> Optional[EntryStatus]:
    if not isinstance(value, str):
        return None
    if value in _STATUS_ALIASES:
        return _STATUS_ALIASES[value]
    try:
        return EntryStatus(value)
    except ValueError:
        return None
# --- End field helpers ---


class EntryNormalizer:
    """Maps raw list records to ListEntry values and keeps count of the ones it drops"""

    def __init__(self,
                 media_type: MediaType = MediaType.ANIME,
                 default_unit_minutes: Optional[float] = None):
        self.media_type = media_type
        if default_unit_minutes is None:
            default_unit_minutes = (DEFAULT_CHAPTER_MINUTES if media_type == MediaType.MANGA
                                    else DEFAULT_EPISODE_MINUTES)
        if default_unit_minutes <= 0:
            raise ValueError("default_unit_minutes must be positive")
        self.default_unit_minutes = default_unit_minutes
        self.skipped = 0
        self.duplicates = 0

    def normalize(self, record: Any) -> Optional[ListEntry]:
        """
        Normalize one raw record.

        Accepts both the list shape ({'node': {...}, 'list_status': {...}}) and a bare node.
        Returns None, and counts the record as skipped, when the id or title is missing.
        """
        if not isinstance(record, dict):
            self.skipped += 1
            logger.warning(f"Skipping non-object list record: {record!r}")
            return None

        node = _get_dict(record.get("node")) if "node" in record else record
        list_status = _get_dict(record.get("list_status"))

        entry_id = _get_int(node.get("id"))
        title = node.get("title")
        if entry_id is None or not isinstance(title, str) or not title.strip():
            self.skipped += 1
            logger.warning(f"Skipping list record without id/title: {record!r}")
            return None

        score = _get_int(list_status.get("score"))
        mean = _get_float(node.get("mean"))
        popularity = _get_int(node.get("num_list_users"))

        return ListEntry(
            id=entry_id,
            title=title.strip(),
            media_type=self.media_type,
            genres=_get_labels(node.get("genres")),
            studios=_get_labels(node.get("studios")),
            authors=_get_authors(node.get("authors")),
            user_score=score if score is not None and 0 < score <= 10 else 0,
            community_mean=mean if mean is not None and 0 < mean <= 10 else None,
            community_popularity=popularity if popularity is not None and popularity > 0 else None,
            status=_get_status(list_status.get("status")),
            finish_date=parse_mal_date(list_status.get("finish_date")),
            units_consumed=self._units_consumed(list_status),
            unit_length_minutes=self._unit_length(node),
            picture=_get_picture(node.get("main_picture")),
        )

    def normalize_all(self, records: Iterable[Any]) -> List[ListEntry]:
        """Normalize records in order, dropping undecodable ones and repeated ids (first seen wins)."""
        entries: List[ListEntry] = []
        seen_ids = set()
        for record in records:
            entry = self.normalize(record)
            if entry is None:
                continue
            if entry.id in seen_ids:
                self.duplicates += 1
                logger.debug(f"Dropping duplicate entry id {entry.id}")
                continue
            seen_ids.add(entry.id)
            entries.append(entry)

        if self.skipped:
            logger.warning(f"Skipped {self.skipped} undecodable {self.media_type.value} records")
        logger.info(f"Normalized {len(entries)} {self.media_type.value} entries "
                    f"(skipped={self.skipped}, duplicates={self.duplicates})")
        return entries

    def _units_consumed(self, list_status: Dict[str, Any]) -> int:
        key = "num_chapters_read" if self.media_type == MediaType.MANGA else "num_episodes_watched"
        units = _get_int(list_status.get(key))
        return units if units is not None and units > 0 else 0

    def _unit_length(self, node: Dict[str, Any]) -> float:
        # MAL reports average_episode_duration in seconds
        seconds = _get_float(node.get("average_episode_duration"))
        if self.media_type == MediaType.ANIME and seconds is not None and seconds > 0:
            return seconds / 60
        return self.default_unit_minutes
