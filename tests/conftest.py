"""Shared fixtures: raw MAL records and normalized entries."""
from datetime import date
from typing import Any, Dict, Optional

import pytest

from mal_wrapped.models.entry import EntryStatus, ListEntry
from mal_wrapped.models.stats import StatsOptions


def make_entry(entry_id: int, **fields: Any) -> ListEntry:
    """ListEntry with a generated title and any overridden fields."""
    fields.setdefault("title", f"Title {entry_id}")
    return ListEntry(id=entry_id, **fields)


def make_raw_anime(entry_id: Optional[int] = 1, title: Optional[str] = "Frieren", **overrides: Any) -> Dict[str, Any]:
    """Raw record in the shape of MAL's /users/@me/animelist response."""
    node: Dict[str, Any] = {
        "id": entry_id,
        "title": title,
        "main_picture": {"medium": "https://cdn.myanimelist.net/images/anime/1/medium.jpg",
                         "large": "https://cdn.myanimelist.net/images/anime/1/large.jpg"},
        "genres": [{"id": 1, "name": "Adventure"}, {"id": 8, "name": "Drama"}],
        "studios": [{"id": 11, "name": "Madhouse"}],
        "mean": 9.3,
        "num_list_users": 850000,
        "average_episode_duration": 1470,
        "num_episodes": 28,
    }
    list_status: Dict[str, Any] = {
        "status": "completed",
        "score": 10,
        "num_episodes_watched": 28,
        "finish_date": "2025-03-22",
    }
    node.update(overrides.pop("node", {}))
    list_status.update(overrides.pop("list_status", {}))
    return {"node": node, "list_status": list_status}


@pytest.fixture
def options() -> StatsOptions:
    return StatsOptions(target_year=2025)


@pytest.fixture
def scenario_entries():
    """Two-entry list: one rated spring finish, one unrated summer finish."""
    return [
        make_entry(1, genres=("Action", "Drama"), user_score=9, finish_date=date(2025, 4, 1),
                   units_consumed=12, unit_length_minutes=24, status=EntryStatus.COMPLETED),
        make_entry(2, genres=("Action",), user_score=0, finish_date=date(2025, 7, 10),
                   units_consumed=24, unit_length_minutes=24, status=EntryStatus.COMPLETED),
    ]
