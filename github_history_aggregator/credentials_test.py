"""Unit tests for credential acquisition."""

import base64
from unittest.mock import MagicMock, patch

import pytest

from .credentials import Credentials, get_credentials
from .errors import AuthError


def _settings(username=None, token=None):
    return MagicMock(github_username=username, github_token=token)


def describe_Credentials():
    def it_builds_a_basic_auth_header():
        creds = Credentials(username="octocat", secret="s3cret")
        encoded = creds.authorization.removeprefix("Basic ")
        assert creds.authorization.startswith("Basic ")
        assert base64.b64decode(encoded).decode() == "octocat:s3cret"

    def it_hides_the_secret_in_repr():
        assert "s3cret" not in repr(Credentials(username="octocat", secret="s3cret"))

    def it_is_immutable():
        creds = Credentials(username="a", secret="b")
        with pytest.raises(Exception):
            creds.secret = "c"


def describe_get_credentials():
    def it_prefers_explicit_arguments():
        with patch("github_history_aggregator.credentials.get_settings", return_value=_settings("env", "envtok")):
            creds = get_credentials(username="arg", secret="argtok")
        assert creds == Credentials(username="arg", secret="argtok")

    def it_falls_back_to_settings():
        with patch("github_history_aggregator.credentials.get_settings", return_value=_settings("env", "envtok")):
            creds = get_credentials()
        assert creds == Credentials(username="env", secret="envtok")

    def it_prompts_for_missing_values():
        with (
            patch("github_history_aggregator.credentials.get_settings", return_value=_settings()),
            patch("builtins.input", return_value=" typed "),
            patch("github_history_aggregator.credentials.getpass.getpass", return_value="hidden"),
        ):
            creds = get_credentials()
        assert creds == Credentials(username="typed", secret="hidden")

    def it_raises_when_not_interactive_and_missing():
        with patch("github_history_aggregator.credentials.get_settings", return_value=_settings("env", None)):
            with pytest.raises(AuthError, match="GITHUB_TOKEN"):
                get_credentials(interactive=False)
