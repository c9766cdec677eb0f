"""Utility functions for Photo Frame."""

from .auth import authenticate_google_photos, get_credentials
from .filters import build_album_parameters, build_search_parameters, construct_date, parse_date

__all__ = [
    "authenticate_google_photos",
    "get_credentials",
    "build_album_parameters",
    "build_search_parameters",
    "construct_date",
    "parse_date",
]
