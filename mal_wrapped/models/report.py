"""WrappedReport model definition"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class WrappedReport(BaseModel):
    """
    Represents one generated year-in-review, ready for the presentation layer.

    Attributes:
        valid: False when generation failed; attributes['error'] then holds the reason
        username: MAL display name
        picture: Profile picture URL
        target_year: Year the review covers
        anime: Anime Stats snapshot as plain JSON values
        manga: Manga Stats snapshot, when the user has a manga list
        profile_statistics: MAL's own anime_statistics block (days watched, episodes...)
        attributes: Collection facts (entries loaded, skipped, completeness)
        metadata: Report version and generation time
    """
    valid: bool = False
    username: Optional[str] = None
    picture: Optional[str] = None
    target_year: Optional[int] = None
    anime: Optional[Dict[str, Any]] = None
    manga: Optional[Dict[str, Any]] = None
    profile_statistics: Dict[str, Any] = Field(default_factory=dict)
    attributes: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
