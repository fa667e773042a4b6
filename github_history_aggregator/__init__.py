"""Aggregate a repository's history into one text file.

Writes the local commit list followed by every pull request's title, body and
comments, walking GitHub's paginated REST API one request at a time.
"""

from .pipeline import aggregate
from .cli import main
from .client import HistoryClient
from .fetch_pull_requests import fetch_pull_requests
from .models import ApiResponse

__all__ = ["main", "aggregate", "fetch_pull_requests", "HistoryClient", "ApiResponse"]

if __name__ == "__main__":
    main()
