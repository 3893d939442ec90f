"""Tests for the `github-rest` CLI."""

import io
import json
from unittest.mock import MagicMock, patch

import pytest

from github_rest_core.cli import main
from github_rest_core.errors import NotFound
from github_rest_core.models import ApiResponse


@pytest.fixture
def mock_client():
    with patch("github_rest_core.client.get_client") as mock_get:
        client = MagicMock()
        mock_get.return_value = client
        client.mock_get = mock_get
        yield client


class TestApiSubcommand:
    def test_rest_call(self, mock_client, capsys):
        body = {"full_name": "owner/repo"}
        mock_client.invoke.return_value = body

        main(["api", "repos/owner/repo"])

        out = capsys.readouterr().out
        assert json.loads(out) == body

    def test_params_and_body(self, mock_client):
        mock_client.invoke.return_value = {}

        main([
            "api", "repos/o/r/issues",
            "--method", "POST",
            "--param", "per_page=100",
            "--body", '{"title": "x"}',
        ])

        mock_client.invoke.assert_called_once_with(
            "repos/o/r/issues",
            method="POST",
            params=[("per_page", "100")],
            body={"title": "x"},
            accept=None,
        )

    def test_all_pages(self, mock_client, capsys):
        mock_client.invoke_multiple.return_value = [1, 2, 3]

        main(["api", "repos/o/r/issues", "--all-pages"])

        assert json.loads(capsys.readouterr().out) == [1, 2, 3]

    def test_extended(self, mock_client, capsys):
        mock_client.invoke.return_value = ApiResponse(status=404, body=None, headers={"x": "y"})

        main(["api", "gists/abc/star", "--extended"])

        assert json.loads(capsys.readouterr().out) == {"status": 404, "headers": {"x": "y"}, "body": None}
        assert mock_client.invoke.call_args.kwargs["extended"] is True

    def test_skip_cache_flag(self, mock_client):
        mock_client.invoke.return_value = {}

        main(["api", "repos/o/r", "--skip-cache"])

        mock_client.mock_get.assert_called_once_with(skip_cache=True)

    def test_bad_param(self, mock_client):
        with pytest.raises(SystemExit):
            main(["api", "repos/o/r", "--param", "novalue"])

    def test_bad_body(self, mock_client):
        with pytest.raises(SystemExit):
            main(["api", "repos/o/r", "--body", "{not json"])

    def test_all_pages_and_extended_are_exclusive(self, mock_client):
        with pytest.raises(SystemExit):
            main(["api", "repos/o/r/issues", "--all-pages", "--extended"])
        mock_client.invoke.assert_not_called()
        mock_client.invoke_multiple.assert_not_called()

    def test_api_errors_exit_nonzero(self, mock_client, capsys):
        mock_client.invoke.side_effect = NotFound(404, "Not Found")

        with pytest.raises(SystemExit) as exc_info:
            main(["api", "repos/gone/repo"])

        assert exc_info.value.code == 1
        assert "NotFound (404): Not Found" in capsys.readouterr().err


class TestResourceSubcommands:
    def test_gist_starred(self, mock_client, capsys):
        with patch("github_rest_core.resources.gists.is_gist_starred", return_value=True) as starred:
            main(["gist-starred", "abc"])

        starred.assert_called_once_with("abc", client=mock_client)
        assert capsys.readouterr().out.strip() == "true"

    def test_list_issues_accepts_urls(self, mock_client, capsys):
        with patch("github_rest_core.resources.issues.list_issues", return_value=[{"number": 1}]) as list_issues:
            main(["list-issues", "https://github.com/octo/hello", "--state", "closed"])

        list_issues.assert_called_once_with(state="closed", client=mock_client, uri="https://github.com/octo/hello")
        assert json.loads(capsys.readouterr().out) == [{"number": 1}]

    def test_set_secret_reads_stdin(self, mock_client):
        with patch("github_rest_core.resources.secrets.set_secret") as set_secret, \
                patch("sys.stdin", io.StringIO("s3cret\n")):
            main(["set-secret", "octo/hello", "DEPLOY_KEY"])

        set_secret.assert_called_once_with("DEPLOY_KEY", "s3cret", client=mock_client, repo="octo/hello")

    def test_no_command_prints_help(self, capsys):
        main([])
        assert "usage" in capsys.readouterr().out
