from ..client import HistoryClient
from ..models import Comment, PullRequest, decode_comments


def fetch_comments(pr: PullRequest, client: HistoryClient) -> list[Comment]:
    """Fetch all comments for one pull request in a single request.

    Comments are not paginated here; whatever the first page holds is the
    full set.
    """
    response = client.get(pr.comments_url)
    return decode_comments(response, pr.number)
