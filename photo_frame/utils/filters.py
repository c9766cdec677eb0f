"""Search request builders for the mediaItems:search endpoint."""

import logging
import re
from typing import Any, Dict, Iterable, Optional, Union

from photo_frame.models import SearchParameters

logger = logging.getLogger(__name__)

DatePart = Optional[Union[int, str]]

_DATE_PATTERN = re.compile(r"^(\d{4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$")


def construct_date(year: DatePart = None, month: DatePart = None, day: DatePart = None) -> Dict[str, int]:
    """Build a Library API Date, leaving out the parts that are not set.

    A zero or missing part acts as a wildcard on the server, e.g. a date
    with only a month and day matches that day in every year.

    Args:
        year: Year of the date
        month: Month of the year, 1-12
        day: Day of the month, 1-31

    Returns:
        Date dictionary with integer parts
    """
    date = {}
    for key, value in (("year", year), ("month", month), ("day", day)):
        if value is not None and value != "":
            date[key] = int(value)
    return date


def parse_date(text: str) -> Dict[str, int]:
    """Parse YYYY, YYYY-MM or YYYY-MM-DD into a Library API Date.

    Raises:
        ValueError: If the text is not in one of those forms, or the month
            or day is out of range
    """
    match = _DATE_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Invalid date {text!r}, expected YYYY, YYYY-MM or YYYY-MM-DD")
    year, month, day = match.groups()
    date = construct_date(year, month, day)
    if not 1 <= date.get("month", 1) <= 12:
        raise ValueError(f"Invalid month in {text!r}, expected 1-12")
    if not 1 <= date.get("day", 1) <= 31:
        raise ValueError(f"Invalid day in {text!r}, expected 1-31")
    return date


def _categories(values: Optional[Iterable[str]]) -> list:
    return [value.strip().upper() for value in values or [] if value and value.strip()]


def build_search_parameters(
    included_categories: Optional[Iterable[str]] = None,
    excluded_categories: Optional[Iterable[str]] = None,
    date: Optional[Dict[str, int]] = None,
    start_date: Optional[Dict[str, int]] = None,
    end_date: Optional[Dict[str, int]] = None,
    include_archived: bool = False,
    favorites_only: bool = False,
) -> SearchParameters:
    """Build the body of a library search restricted to photos.

    Args:
        included_categories: Content categories the photos must match
        excluded_categories: Content categories the photos must not match
        date: Exact date, see construct_date
        start_date: First date of a range, inclusive
        end_date: Last date of a range, inclusive
        include_archived: Also return archived media
        favorites_only: Only return photos marked as favorites

    Returns:
        Search parameters with a ``filters`` object

    Raises:
        ValueError: If an exact date is combined with a range, or a range
            is missing one of its ends
    """
    if date and (start_date or end_date):
        raise ValueError("Use either an exact date or a date range, not both")
    if bool(start_date) != bool(end_date):
        raise ValueError("A date range needs both a start and an end date")

    filters: Dict[str, Any] = {}

    content_filter = {}
    included = _categories(included_categories)
    excluded = _categories(excluded_categories)
    if included:
        content_filter["includedContentCategories"] = included
    if excluded:
        content_filter["excludedContentCategories"] = excluded
    if content_filter:
        filters["contentFilter"] = content_filter

    if date:
        filters["dateFilter"] = {"dates": [date]}
    elif start_date and end_date:
        filters["dateFilter"] = {"ranges": [{"startDate": start_date, "endDate": end_date}]}

    filters["mediaTypeFilter"] = {"mediaTypes": ["PHOTO"]}

    if favorites_only:
        filters["featureFilter"] = {"includedFeatures": ["FAVORITES"]}

    filters["includeArchivedMedia"] = include_archived

    logger.debug("Built search filters: %s", filters)
    return {"filters": filters}


def build_album_parameters(album_id: str) -> SearchParameters:
    """Build the body of a search listing the contents of one album.

    Filters can't be combined with an album id, so the result may contain
    videos that have to be dropped after loading.

    Raises:
        ValueError: If album_id is empty
    """
    if not album_id:
        raise ValueError("An album id is required")
    return {"albumId": album_id}
