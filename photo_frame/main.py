"""Main module for Photo Frame."""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from tabulate import tabulate

from photo_frame.config import ApiConfig
from photo_frame.models import Album, AuthenticationError, ErrorShape, MediaItem
from photo_frame.photo_api import VERBOSE, PhotoApi
from photo_frame.utils.auth import authenticate_google_photos
from photo_frame.utils.filters import build_album_parameters, build_search_parameters, parse_date

logger = logging.getLogger(__name__)


def format_error(error: ErrorShape) -> str:
    """Render an API error on one line."""
    name = error.get("name") or error.get("status") or "Error"
    code = error.get("code")
    message = error.get("message", "")
    return f"{name} ({code}): {message}" if code is not None else f"{name}: {message}"


def print_albums(albums: List[Album]) -> None:
    """Print albums as a table."""
    rows = [
        [album.get("id"), album.get("title", "Untitled Album"), album.get("mediaItemsCount", "")]
        for album in albums
    ]
    print(tabulate(rows, headers=["Id", "Title", "Items"], tablefmt="grid"))
    print(f"Total albums: {len(albums)}")


def print_photos(photos: List[MediaItem]) -> None:
    """Print media items as a table."""
    rows = [
        [
            photo.get("id"),
            photo.get("filename"),
            photo.get("mimeType"),
            photo.get("mediaMetadata", {}).get("creationTime", ""),
        ]
        for photo in photos
    ]
    print(tabulate(rows, headers=["Id", "Filename", "Type", "Created"], tablefmt="grid"))
    print(f"Total photos: {len(photos)}")


def run_albums(api: PhotoApi) -> int:
    """List every album of the user."""
    result = api.list_albums()
    print_albums(result.albums)
    if result.error:
        print(f"Error loading albums: {format_error(result.error)}")
        return 1
    return 0


def run_search(api: PhotoApi, args: argparse.Namespace) -> int:
    """Search the library, or one album, for photos."""
    try:
        if args.album_id:
            parameters = build_album_parameters(args.album_id)
        else:
            parameters = build_search_parameters(
                included_categories=args.category,
                excluded_categories=args.exclude_category,
                date=parse_date(args.date) if args.date else None,
                start_date=parse_date(args.start_date) if args.start_date else None,
                end_date=parse_date(args.end_date) if args.end_date else None,
                include_archived=args.include_archived,
                favorites_only=args.favorites,
            )
    except ValueError as e:
        print(f"Invalid search: {e}")
        return 2

    result = api.library_api_search(parameters)
    print_photos(result.photos)
    if result.error:
        print(f"Error searching photos: {format_error(result.error)}")
        return 1
    return 0


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Photo Frame")

    # Global arguments
    parser.add_argument("--token-path", type=str, default="token.json", help="Cached OAuth token")
    parser.add_argument(
        "--credentials-path",
        type=str,
        default="client_secret.json",
        help="OAuth client secret file",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log output")

    # Add subparsers for different commands
    subparsers = parser.add_subparsers(dest="command", help="Commands", required=True)

    # Albums command
    subparsers.add_parser("albums", help="List all albums")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search photos")
    search_parser.add_argument("--album-id", help="Load photos from this album instead of searching")
    search_parser.add_argument(
        "--category", action="append", help="Content category to include (repeatable)"
    )
    search_parser.add_argument(
        "--exclude-category", action="append", help="Content category to exclude (repeatable)"
    )
    search_parser.add_argument("--date", help="Exact date: YYYY, YYYY-MM or YYYY-MM-DD")
    search_parser.add_argument("--start-date", help="Start of a date range")
    search_parser.add_argument("--end-date", help="End of a date range")
    search_parser.add_argument("--favorites", action="store_true", help="Only favorite photos")
    search_parser.add_argument(
        "--include-archived", action="store_true", help="Include archived photos"
    )

    return parser.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    """Configure the root logger for the CLI."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = VERBOSE
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Photo Frame CLI."""
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    # PHOTO_FRAME_* settings can also live in a .env file
    load_dotenv()

    try:
        config = ApiConfig.from_env()
        service = authenticate_google_photos(args.token_path, args.credentials_path, config)
    except (ValueError, AuthenticationError) as e:
        logger.error("Startup failed: %s", e)
        print(f"Error: {e}")
        return 1

    api = PhotoApi(service, config=config)

    if args.command == "albums":
        return run_albums(api)
    return run_search(api, args)


if __name__ == "__main__":
    sys.exit(main())
