"""Link header pagination.

GitHub paginates with an RFC 5988 ``link`` header:

    <https://api.github.com/...?page=2>; rel="next", <https://...?page=9>; rel="last"

Only the ``next`` relation matters. The URL is returned untouched; whether it
resolves is the next request's problem.
"""

import re

_URL_RE = re.compile(r"\s*<([^>]*)>")
# one ;-separated param; quoted values may contain , ; and <
_PARAM_RE = re.compile(r'\s*;\s*([^\s=;,]+)\s*(?:=\s*(?:"((?:[^"\\]|\\.)*)"|([^\s;,"]*)))?')


def parse_link_header(link_header: str | None) -> list[tuple[str, set[str]]]:
    """Split a link header into (url, relation types) pairs, in header order.

    Relation types are kept as sent; only the first ``rel`` param of an entry
    counts.
    """
    if not link_header:
        return []
    entries = []
    pos = 0
    while True:
        match = _URL_RE.search(link_header, pos)
        if not match:
            break
        url = match.group(1).strip()
        pos = match.end()
        rels: set[str] | None = None
        while True:
            param = _PARAM_RE.match(link_header, pos)
            if not param:
                break
            pos = param.end()
            if rels is None and param.group(1).lower() == "rel":
                value = param.group(2) if param.group(2) is not None else (param.group(3) or "")
                rels = set(value.split())
        entries.append((url, rels or set()))
    return entries


def next_url(link_header: str | None) -> str | None:
    """Return the rel="next" URL, or None when this is the last page."""
    for url, rels in parse_link_header(link_header):
        if "next" in rels:
            return url
    return None
