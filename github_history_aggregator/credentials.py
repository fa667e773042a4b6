"""Basic-auth credential acquisition."""

import base64
import getpass
from dataclasses import dataclass

from .errors import AuthError
from .settings import get_settings


@dataclass(frozen=True)
class Credentials:
    username: str
    secret: str

    @property
    def authorization(self) -> str:
        """Value for the Authorization header."""
        raw = f"{self.username}:{self.secret}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, secret='***')"


def get_credentials(username: str | None = None, secret: str | None = None, interactive: bool = True) -> Credentials:
    """Resolve credentials from arguments, then settings, then prompts.

    The secret is a personal access token (or password, where GitHub still
    accepts one) and becomes the Basic-auth password.
    """
    settings = get_settings()
    username = username or settings.github_username
    secret = secret or settings.github_token

    if interactive:
        if not username:
            username = input("Username: ").strip()
        if not secret:
            secret = getpass.getpass("Token: ")

    if not username:
        raise AuthError("GitHub username is not set (GITHUB_USERNAME)")
    if not secret:
        raise AuthError("GitHub token is not set (GITHUB_TOKEN)")
    return Credentials(username=username, secret=secret)
