"""Models for Photo Frame."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Records owned by the Library API, passed through as parsed JSON.
# https://developers.google.com/photos/library/reference/rest/v1/mediaItems
MediaItem = Dict[str, Any]
Album = Dict[str, Any]
SearchParameters = Dict[str, Any]
ErrorShape = Dict[str, Any]


@dataclass
class SearchResult:
    """Photos accumulated by a media item search."""
    photos: List[MediaItem] = field(default_factory=list)
    parameters: SearchParameters = field(default_factory=dict)
    error: Optional[ErrorShape] = None


@dataclass
class AlbumListResult:
    """Albums accumulated by an album listing."""
    albums: List[Album] = field(default_factory=list)
    error: Optional[ErrorShape] = None


class PhotoFrameError(Exception):
    """Base exception for Photo Frame operations."""


class AuthenticationError(PhotoFrameError):
    """Raised when authentication fails."""
