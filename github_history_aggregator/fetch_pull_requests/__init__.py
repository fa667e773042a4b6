from .fetch_comments import fetch_comments
from .fetch_pull_requests import fetch_pull_requests

__all__ = ["fetch_comments", "fetch_pull_requests"]
