"""Paged queries against the Google Photos Library API."""

import json
import logging
from typing import Any, List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from photo_frame.config import ApiConfig
from photo_frame.models import (
    Album,
    AlbumListResult,
    ErrorShape,
    MediaItem,
    SearchParameters,
    SearchResult,
)
from photo_frame.utils.auth import build_photos_service

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger(__name__)


def is_image_item(item: Optional[MediaItem]) -> bool:
    """Check that a media item is present and has an image mime type."""
    if not item:
        return False
    mime_type = item.get("mimeType")
    return isinstance(mime_type, str) and mime_type.startswith("image/")


def _decode_payload(content: Any) -> Any:
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        return json.loads(content)
    except (TypeError, ValueError):
        return None


def normalize_error(err: Exception) -> ErrorShape:
    """Convert a failed request into a {name, code, message} error.

    An HttpError whose body carries a structured ``error`` object already
    has the right shape and is returned as is, also when the body wraps it
    in a list. Anything else is built from the exception itself.

    Args:
        err: Exception raised while executing a request

    Returns:
        Error dictionary
    """
    if isinstance(err, HttpError):
        payload = _decode_payload(err.content)
        if isinstance(payload, list) and len(payload) == 1:
            payload = payload[0]
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict) and payload["error"]:
            return payload["error"]
        return {"name": type(err).__name__, "code": err.resp.status, "message": err.reason}

    return {
        "name": type(err).__name__,
        "code": getattr(err, "status_code", None),
        "message": str(err),
    }


class PhotoApi:
    """Loads media items and albums page by page from the Library API."""

    def __init__(
        self,
        service: Resource,
        config: Optional[ApiConfig] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            service: Authorized photoslibrary v1 service
            config: Page sizes and search threshold
            log: Logger for request tracing, defaults to this module's logger
        """
        self.service = service
        self.config = config or ApiConfig()
        self.logger = log or logger

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        config: Optional[ApiConfig] = None,
        log: Optional[logging.Logger] = None,
    ) -> "PhotoApi":
        """Build a client whose requests are authorized with the given credentials."""
        config = config or ApiConfig()
        return cls(build_photos_service(credentials, config), config=config, log=log)

    def library_api_search(self, parameters: SearchParameters) -> SearchResult:
        """Search the library or an album for images.

        Requests are repeated until at least ``config.photos_to_load`` images
        were found or there are no more pages. Whole pages are kept, so the
        result may hold more photos than the threshold.

        Args:
            parameters: Search request body, updated in place with the
                page size and the token of the next page

        Returns:
            SearchResult with the photos loaded so far, the parameters of the
            last request and the error that stopped the search, if any
        """
        photos: List[MediaItem] = []
        error: Optional[ErrorShape] = None

        parameters["pageSize"] = self.config.search_page_size

        try:
            while True:
                self.logger.info("Submitting search with parameters: %s", json.dumps(parameters))

                result = self.service.mediaItems().search(body=parameters).execute() or {}

                self.logger.debug("Response: %s", result)

                # Pages can be sparse, and an album search can't be restricted
                # to photos on the server side.
                items = [item for item in result.get("mediaItems") or [] if is_image_item(item)]
                photos.extend(items)

                parameters["pageToken"] = result.get("nextPageToken")

                self.logger.log(
                    VERBOSE,
                    "Found %d images in this request. Total images: %d",
                    len(items),
                    len(photos),
                )

                if len(photos) >= self.config.photos_to_load or parameters["pageToken"] is None:
                    break

        except Exception as e:
            error = normalize_error(e)
            self.logger.error("Search failed: %s", error)

        self.logger.info("Search complete.")
        return SearchResult(photos=photos, parameters=parameters, error=error)

    def list_albums(self) -> AlbumListResult:
        """Load all albums owned by the user.

        Returns:
            AlbumListResult with every album, or the albums loaded before a
            request failed together with the error
        """
        albums: List[Album] = []
        error: Optional[ErrorShape] = None
        page_token = None

        try:
            while True:
                self.logger.info("Loading albums (page token: %s)", page_token)

                result = (
                    self.service.albums()
                    .list(pageSize=self.config.album_page_size, pageToken=page_token)
                    .execute()
                    or {}
                )

                self.logger.debug("Response: %s", result)

                items = [album for album in result.get("albums") or [] if album]
                albums.extend(items)

                page_token = result.get("nextPageToken")

                self.logger.log(
                    VERBOSE,
                    "Found %d albums in this request. Total albums: %d",
                    len(items),
                    len(albums),
                )

                if page_token is None:
                    break

        except Exception as e:
            error = normalize_error(e)
            self.logger.error("Album listing failed: %s", error)

        self.logger.info("Albums loaded.")
        return AlbumListResult(albums=albums, error=error)
