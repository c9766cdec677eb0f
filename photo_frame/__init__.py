"""Photo Frame: paged Google Photos Library API queries."""
