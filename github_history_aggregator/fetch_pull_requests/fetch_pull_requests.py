"""Walk the pull request list page by page and write it to the history file."""

import sys
import threading

from ..client import HistoryClient
from ..errors import CrawlCancelled, HistoryError, RemoteError
from ..links import next_url
from ..models import decode_pull_requests
from ..records import format_comment, format_comment_count, format_pull_request
from ..sink import HistorySink
from .fetch_comments import fetch_comments


def _log(msg: str):
    sys.stderr.write(f"\033[2K\r[history] {msg}\n")
    sys.stderr.flush()


def _check_cancel(cancel: threading.Event | None, url: str):
    if cancel is not None and cancel.is_set():
        raise CrawlCancelled("Crawl cancelled", url=url, stage="page")


def fetch_pull_requests(
    url: str,
    sink: HistorySink,
    client: HistoryClient,
    cancel: threading.Event | None = None,
) -> dict:
    """Follow the rel="next" chain from ``url`` until the last page.

    Pull requests are written in server order. Each one's comments are
    fetched and written before the next pull request starts, so everything
    about a pull request stays together in the output.

    Any fetch or decode failure aborts the crawl; lines already written stay.

    Returns dict with counts: pages, pull_requests, comments.
    """
    stats = {"pages": 0, "pull_requests": 0, "comments": 0}
    seen: set[str] = set()

    while url:
        _check_cancel(cancel, url)
        if url in seen:
            raise RemoteError("Pagination loops back to an earlier page", url=url, stage="page")
        seen.add(url)

        print(f"Working on: {url}", flush=True)
        try:
            response = client.get(url)
            pull_requests = decode_pull_requests(response)
        except HistoryError as e:
            e.stage = e.stage or "page"
            raise

        for pr in pull_requests:
            _check_cancel(cancel, url)
            print(f"Pull Request: {pr.number}", flush=True)
            sink.append(format_pull_request(pr))

            try:
                comments = fetch_comments(pr, client)
            except HistoryError as e:
                e.stage = e.stage or "comments"
                _log(f"Comments for pull request {pr.number} failed: {e}")
                raise

            sink.append(format_comment_count(pr, len(comments)))
            for comment in comments:
                sink.append(format_comment(comment))

            stats["pull_requests"] += 1
            stats["comments"] += len(comments)

        stats["pages"] += 1
        url = next_url(response.link)

    return stats
