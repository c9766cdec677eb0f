"""Configuration for Photo Frame."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "PHOTO_FRAME_"


def _positive_int(name: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


@dataclass
class ApiConfig:
    """Settings for talking to the Google Photos Library API.

    Attributes:
        api_endpoint: Base endpoint of the Library API
        search_page_size: Page size sent with each media item search
        album_page_size: Page size sent with each album listing
        photos_to_load: Minimum number of photos a search tries to load
    """
    api_endpoint: str = "https://photoslibrary.googleapis.com/"
    search_page_size: int = 100
    album_page_size: int = 50
    photos_to_load: int = 150

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ApiConfig":
        """Build a config from PHOTO_FRAME_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Config with defaults for any variable that is not set

        Raises:
            ValueError: If a size or threshold is not a positive integer
        """
        if environ is None:
            environ = os.environ
        config = cls()

        endpoint = environ.get(f"{ENV_PREFIX}API_ENDPOINT")
        if endpoint:
            config.api_endpoint = endpoint

        for attr in ("search_page_size", "album_page_size", "photos_to_load"):
            name = f"{ENV_PREFIX}{attr.upper()}"
            if environ.get(name):
                setattr(config, attr, _positive_int(name, environ[name]))

        return config
