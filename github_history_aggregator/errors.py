"""Error taxonomy for history aggregation.

Every error is fatal to a crawl. The kinds stay distinct so the operator can
tell a dead network from a rejected credential from a bad payload.
"""


class HistoryError(Exception):
    """Base class for all aggregation failures."""

    def __init__(self, message: str, url: str | None = None, stage: str | None = None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.stage = stage

    def __str__(self) -> str:
        parts = []
        if self.stage:
            parts.append(f"[{self.stage}]")
        parts.append(self.message)
        if self.url:
            parts.append(f"({self.url})")
        return " ".join(parts)


class TransportError(HistoryError):
    """Network unreachable, connection dropped or timed out."""


class AuthError(HistoryError):
    """Credential missing or rejected by the remote."""


class RemoteError(HistoryError):
    """Any other non-success response, including rate-limit rejection."""

    def __init__(self, message: str, url: str | None = None, stage: str | None = None, status: int | None = None):
        super().__init__(message, url=url, stage=stage)
        self.status = status


class MalformedResponse(HistoryError):
    """Response body is not the expected JSON structure."""


class RevisionError(HistoryError):
    """git rev-list could not be run."""


class CrawlCancelled(HistoryError):
    """Cancel event observed between pull requests."""
