"""CLI commands for history aggregation."""

import argparse
import sys
from pathlib import Path


def _add_auth_args(parser):
    parser.add_argument(
        "--username",
        default=None,
        help="GitHub username (default: GITHUB_USERNAME, else prompt)",
    )
    parser.add_argument(
        "--cache",
        action="store_true",
        help="Cache successful responses on disk (see CACHE_DIR, CACHE_DAYS)",
    )
    parser.add_argument(
        "--skip-cache",
        action="store_true",
        help="Skip reading from cache (still writes to cache, requires --cache)",
    )


def _client(args):
    from .client import make_client
    from .credentials import get_credentials

    creds = get_credentials(username=args.username)
    return make_client(creds.authorization, use_cache=args.cache, skip_cache=args.skip_cache)


def _print_stats(stats: dict):
    print(
        f"\nDone: {stats.get('pages', 0)} pages, {stats.get('pull_requests', 0)} pull requests, "
        f"{stats.get('comments', 0)} comments"
    )


def main():
    parser = argparse.ArgumentParser(
        description="Write a repository's commit list and pull request discussion to one text file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("output") / "output.txt",
        help="History file (default: output/output.txt)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # aggregate subcommand
    aggregate_parser = subparsers.add_parser(
        "aggregate",
        help="Reset the history file, then write the commit list and all pull requests",
    )
    aggregate_parser.add_argument(
        "repo_id",
        help="GitHub repository (e.g., owner/repo)",
    )
    aggregate_parser.add_argument(
        "--repo-dir",
        type=Path,
        default=None,
        help="Local clone to read the commit list from (omit to skip)",
    )
    _add_auth_args(aggregate_parser)

    # pulls subcommand
    pulls_parser = subparsers.add_parser(
        "pulls",
        help="Append pull requests and comments to an existing history file",
    )
    pulls_parser.add_argument(
        "repo_id",
        help="GitHub repository (e.g., owner/repo)",
    )
    _add_auth_args(pulls_parser)

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make one authenticated GET and print the raw body",
    )
    api_parser.add_argument(
        "url",
        help="Absolute API URL",
    )
    _add_auth_args(api_parser)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from .errors import HistoryError
    from .settings import get_settings

    settings = get_settings()
    try:
        if args.command == "aggregate":
            from .pipeline import aggregate

            with _client(args) as client:
                stats = aggregate(
                    args.repo_id,
                    args.repo_dir,
                    args.output,
                    client,
                    api_url=settings.github_api_url,
                )
            _print_stats(stats)
        elif args.command == "pulls":
            from .pipeline import pulls_url
            from .fetch_pull_requests import fetch_pull_requests
            from .sink import HistorySink

            url = pulls_url(args.repo_id, settings.github_api_url)
            with _client(args) as client, HistorySink(args.output) as sink:
                stats = fetch_pull_requests(url, sink, client)
            _print_stats(stats)
        elif args.command == "api":
            from .links import next_url

            with _client(args) as client:
                resp = client.get(args.url)
            sys.stdout.write(resp.body)
            sys.stdout.write("\n")
            nxt = next_url(resp.link)
            if nxt:
                sys.stderr.write(f"next: {nxt}\n")
    except HistoryError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(1)
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(2)
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted\n")
        sys.exit(130)


if __name__ == "__main__":
    main()
