"""Data models for pull request history."""

import json
from dataclasses import dataclass

from .errors import MalformedResponse


@dataclass
class ApiResponse:
    """Raw response from the REST client, body and link header verbatim."""

    url: str
    status: int
    body: str
    link: str | None = None


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    body: str
    comments_url: str

    @classmethod
    def from_json(cls, data, url: str | None = None) -> "PullRequest":
        if not isinstance(data, dict):
            raise MalformedResponse("Pull request entry is not an object", url=url)
        number = data.get("number")
        comments_url = data.get("comments_url")
        # bool is an int subclass; reject it explicitly
        if not isinstance(number, int) or isinstance(number, bool):
            raise MalformedResponse("Pull request entry has no integer 'number'", url=url)
        if not isinstance(comments_url, str):
            raise MalformedResponse(f"Pull request {number} has no 'comments_url'", url=url)
        return cls(
            number=number,
            title=str(data.get("title") or ""),
            body=str(data.get("body") or ""),
            comments_url=comments_url,
        )


@dataclass(frozen=True)
class Comment:
    pull_request: int
    id: int | None
    body: str

    @classmethod
    def from_json(cls, data, pull_request: int, url: str | None = None) -> "Comment":
        if not isinstance(data, dict):
            raise MalformedResponse(f"Comment on pull request {pull_request} is not an object", url=url)
        return cls(pull_request=pull_request, id=data.get("id"), body=str(data.get("body") or ""))


def decode_array(response: ApiResponse) -> list:
    """Parse a response body that must be a JSON array."""
    try:
        data = json.loads(response.body)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedResponse(f"Body is not valid JSON: {e}", url=response.url) from e
    if not isinstance(data, list):
        raise MalformedResponse(f"Expected a JSON array, got {type(data).__name__}", url=response.url)
    return data


def decode_pull_requests(response: ApiResponse) -> list[PullRequest]:
    """Decode one page of pull requests, preserving server order."""
    return [PullRequest.from_json(item, url=response.url) for item in decode_array(response)]


def decode_comments(response: ApiResponse, pull_request: int) -> list[Comment]:
    """Decode a comments array, preserving server order."""
    return [Comment.from_json(item, pull_request, url=response.url) for item in decode_array(response)]
