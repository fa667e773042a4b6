"""Tests for the github-history CLI."""

import json
from unittest.mock import MagicMock, patch

import pytest

from github_history_aggregator.credentials import Credentials
from github_history_aggregator.errors import AuthError
from github_history_aggregator.models import ApiResponse


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.__enter__.return_value = client
    return client


@pytest.fixture
def patched(mock_client):
    settings = MagicMock(github_api_url="https://api.github.com")
    with (
        patch("github_history_aggregator.settings.get_settings", return_value=settings),
        patch(
            "github_history_aggregator.credentials.get_credentials",
            return_value=Credentials(username="u", secret="t"),
        ) as creds,
        patch("github_history_aggregator.client.make_client", return_value=mock_client) as make,
    ):
        yield creds, make


def _run(*argv):
    from github_history_aggregator.cli import main

    with patch("sys.argv", ["github-history", *argv]):
        main()


class TestAggregate:
    def test_runs_pipeline(self, patched, mock_client, tmp_path, capsys):
        creds, make = patched
        output = tmp_path / "out.txt"
        stats = {"pages": 2, "pull_requests": 3, "comments": 4}

        with patch("github_history_aggregator.pipeline.aggregate", return_value=stats) as agg:
            _run("--output", str(output), "aggregate", "owner/repo", "--repo-dir", str(tmp_path), "--username", "me")

        agg.assert_called_once_with(
            "owner/repo", tmp_path, output, mock_client, api_url="https://api.github.com"
        )
        creds.assert_called_once_with(username="me")
        make.assert_called_once_with(Credentials(username="u", secret="t").authorization, use_cache=False, skip_cache=False)
        assert "Done: 2 pages, 3 pull requests, 4 comments" in capsys.readouterr().out

    def test_cache_flags(self, patched, mock_client, tmp_path):
        _, make = patched
        with patch("github_history_aggregator.pipeline.aggregate", return_value={}):
            _run("--output", str(tmp_path / "o.txt"), "aggregate", "o/r", "--cache", "--skip-cache")
        assert make.call_args.kwargs == {"use_cache": True, "skip_cache": True}

    def test_history_error_exits_1(self, patched, tmp_path, capsys):
        err = AuthError("GitHub rejected the credentials (401)", url="https://x", stage="page")
        with patch("github_history_aggregator.pipeline.aggregate", side_effect=err):
            with pytest.raises(SystemExit) as exc:
                _run("--output", str(tmp_path / "o.txt"), "aggregate", "o/r")

        assert exc.value.code == 1
        assert "Error: [page] GitHub rejected the credentials (401) (https://x)" in capsys.readouterr().err

    def test_bad_repo_id_exits_2(self, patched, tmp_path):
        with pytest.raises(SystemExit) as exc:
            _run("--output", str(tmp_path / "o.txt"), "aggregate", "nope")
        assert exc.value.code == 2


class TestPulls:
    def test_appends_without_reset(self, patched, mock_client, tmp_path):
        output = tmp_path / "out.txt"
        output.write_text("existing\n")
        mock_client.get.side_effect = [
            ApiResponse(url="p1", status=200, body=json.dumps([{"number": 1, "title": "t", "body": "b", "comments_url": "c1"}])),
            ApiResponse(url="c1", status=200, body="[]"),
        ]

        _run("--output", str(output), "pulls", "o/r")

        assert mock_client.get.call_args_list[0].args[0] == "https://api.github.com/repos/o/r/pulls?state=all&per_page=100"
        assert output.read_text().splitlines() == ["existing", "PR: 1| Title + Body: t b", "PR: 1| 0 comments follow"]


class TestApi:
    def test_prints_body_and_next(self, patched, mock_client, capsys):
        mock_client.get.return_value = ApiResponse(
            url="https://x/p1", status=200, body='[{"id": 1}]', link='<https://x/p2>; rel="next"'
        )

        _run("api", "https://x/p1")

        captured = capsys.readouterr()
        assert json.loads(captured.out) == [{"id": 1}]
        assert "next: https://x/p2" in captured.err


def test_no_command_prints_help(capsys):
    _run()
    assert "usage" in capsys.readouterr().out
