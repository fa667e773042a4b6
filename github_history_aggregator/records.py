"""Single-line record formats for the history file."""

import re

from .models import Comment, PullRequest

NEWLINE_PLACEHOLDER = " <nl> "

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")


def flatten(text: str | None) -> str:
    """Replace every line break (\\r\\n, \\n or \\r) with the <nl> placeholder."""
    if not text:
        return ""
    return _LINE_BREAK_RE.sub(NEWLINE_PLACEHOLDER, text)


def format_pull_request(pr: PullRequest) -> str:
    return f"PR: {pr.number}| Title + Body: {flatten(pr.title)} {flatten(pr.body)}"


def format_comment_count(pr: PullRequest, count: int) -> str:
    return f"PR: {pr.number}| {count} comments follow"


def format_comment(comment: Comment) -> str:
    ident = "" if comment.id is None else f" {comment.id}"
    return f"\t PR: {comment.pull_request}| Comment{ident}: {flatten(comment.body)}"
