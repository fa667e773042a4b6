"""Full history run: reset the output, dump the commit list, crawl pull requests."""

import re
import threading
from pathlib import Path

from .client import HistoryClient
from .fetch_pull_requests import fetch_pull_requests
from .revisions import read_rev_list
from .sink import HistorySink, reset_sink

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100

_REPO_ID_RE = re.compile(r"^[\w.-]+/[\w.-]+$")


def pulls_url(repo_id: str, api_url: str = DEFAULT_API_URL, per_page: int = PER_PAGE) -> str:
    """First page of every pull request (open and closed) for owner/name."""
    if not _REPO_ID_RE.match(repo_id):
        raise ValueError(f"Repository must look like owner/name, got {repo_id!r}")
    return f"{api_url.rstrip('/')}/repos/{repo_id}/pulls?state=all&per_page={per_page}"


def aggregate(
    repo_id: str,
    repo_dir: Path | None,
    output: Path,
    client: HistoryClient,
    api_url: str = DEFAULT_API_URL,
    cancel: threading.Event | None = None,
) -> dict:
    """Run each stage to completion before starting the next.

    The first failing stage stops the run; its error propagates and whatever
    was already written stays in the output file.
    """
    start_url = pulls_url(repo_id, api_url)
    stats: dict = {}

    def empty_output():
        reset_sink(output, repo_id)

    def dump_revisions():
        if repo_dir is None:
            print("  no repository folder given, skipping", flush=True)
            return
        text = read_rev_list(repo_dir)
        with HistorySink(output) as sink:
            sink.append_block(text)

    def crawl():
        with HistorySink(output) as sink:
            stats.update(fetch_pull_requests(start_url, sink, client, cancel=cancel))

    stages = [
        ("Emptying log file...", empty_output),
        ("Processing GIT Rev List", dump_revisions),
        ("Processing Pull Request List", crawl),
    ]
    for label, stage in stages:
        print(label, flush=True)
        stage()

    return stats
