"""Test configuration for pytest."""

import json
from typing import Any, Callable, Dict, List
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from photo_frame.config import ApiConfig


def _make_http_error(status: int, body: Any = None, reason: str = "Error") -> HttpError:
    """Build an HttpError as raised by a discovery request."""
    resp = httplib2.Response({"status": status})
    resp.reason = reason
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    else:
        content = json.dumps(body).encode("utf-8")
    return HttpError(resp, content)


@pytest.fixture
def http_error() -> Callable[..., HttpError]:
    """Factory for HttpError instances."""
    return _make_http_error


@pytest.fixture
def api_config() -> ApiConfig:
    """Small page sizes to exercise pagination."""
    return ApiConfig(search_page_size=3, album_page_size=5, photos_to_load=5)


@pytest.fixture
def mock_service() -> MagicMock:
    """Create a mock photoslibrary service."""
    return MagicMock()


@pytest.fixture
def search_bodies(mock_service) -> Callable[[List[Any]], List[Dict[str, Any]]]:
    """Queue search responses and record a copy of each request body.

    Each response is either a page dict or an exception to raise.
    """

    def _queue(responses: List[Any]) -> List[Dict[str, Any]]:
        bodies: List[Dict[str, Any]] = []
        pending = list(responses)

        def _search(body):
            bodies.append(dict(body))
            request = MagicMock()
            response = pending.pop(0)
            if isinstance(response, Exception):
                request.execute.side_effect = response
            else:
                request.execute.return_value = response
            return request

        mock_service.mediaItems.return_value.search.side_effect = _search
        return bodies

    return _queue
