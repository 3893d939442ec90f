"""Integration tests for the REST client against a fake GitHub server.

The fake server is an ``httpx.MockTransport``: requests go through the real
httpx client stack, only the network is replaced.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from github_rest_core.client import GitHubRestClient
from github_rest_core.errors import (
    GitHubError,
    NotFound,
    RateLimited,
    TransportError,
    ValidationFailed,
)
from github_rest_core.settings import Settings

API = "https://api.github.com"


@pytest.fixture(autouse=True)
def _no_sleep():
    """Patch out time.sleep in the client to avoid real waits in retry tests."""
    with patch("github_rest_core.client.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def settings():
    return Settings(_env_file=None, github_token="test-token", github_cache_dir=None)


class FakeGitHub:
    """Records requests and answers them with a handler function."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self, settings, **kwargs) -> GitHubRestClient:
        return GitHubRestClient(settings=settings, transport=httpx.MockTransport(self), **kwargs)


def _paged_handler(pages=3, per_page=2):
    def handler(request):
        page = int(request.url.params.get("page", "1"))
        items = [{"id": (page - 1) * per_page + i} for i in range(1, per_page + 1)]
        headers = {}
        if page < pages:
            headers["Link"] = (
                f'<{API}/repositories/1/issues?state=all&page={page + 1}>; rel="next", '
                f'<{API}/repositories/1/issues?state=all&page={pages}>; rel="last"'
            )
        return httpx.Response(200, json=items, headers=headers)

    return handler


class TestPagination:
    def test_concatenates_pages_in_order(self, settings):
        server = FakeGitHub(_paged_handler())
        client = server.client(settings)

        items = client.invoke_multiple("repos/o/r/issues", params={"state": "all"})

        assert [i["id"] for i in items] == [1, 2, 3, 4, 5, 6]
        assert len(server.requests) == 3

    def test_matches_an_unpaginated_response(self, settings):
        paged = FakeGitHub(_paged_handler()).client(settings).invoke_multiple("repos/o/r/issues")
        single = FakeGitHub(_paged_handler(pages=1, per_page=6)).client(settings).invoke_multiple("repos/o/r/issues")

        assert paged == single

    def test_follow_ups_reuse_auth_and_accept(self, settings):
        server = FakeGitHub(_paged_handler())
        client = server.client(settings)

        client.invoke_multiple(
            "repos/o/r/issues/1/reactions",
            accept="application/vnd.github.squirrel-girl-preview+json",
        )

        for req in server.requests:
            assert req.headers["Authorization"] == "token test-token"
            assert req.headers["Accept"] == "application/vnd.github.squirrel-girl-preview+json"
        assert server.requests[1].url.params["page"] == "2"
        assert server.requests[1].url.params["state"] == "all"

    def test_is_lazy(self, settings):
        server = FakeGitHub(_paged_handler())
        client = server.client(settings)

        pages = client.paginate("repos/o/r/issues")
        assert server.requests == []

        assert next(pages) == {"id": 1}
        assert len(server.requests) == 1

    def test_retries_per_page(self, settings):
        failures = {"left": 1}
        paged = _paged_handler()

        def handler(request):
            if request.url.params.get("page") == "2" and failures["left"]:
                failures["left"] -= 1
                raise httpx.ConnectError("connection reset", request=request)
            return paged(request)

        server = FakeGitHub(handler)
        items = server.client(settings).invoke_multiple("repos/o/r/issues")

        assert [i["id"] for i in items] == [1, 2, 3, 4, 5, 6]
        first_page_fetches = [r for r in server.requests if "page" not in r.url.params]
        assert len(first_page_fetches) == 1

    def test_fails_as_a_whole_when_a_page_fails(self, settings):
        paged = _paged_handler()

        def handler(request):
            if request.url.params.get("page") == "3":
                return httpx.Response(404, json={"message": "Not Found"})
            return paged(request)

        client = FakeGitHub(handler).client(settings)

        with pytest.raises(NotFound):
            client.invoke_multiple("repos/o/r/issues")

    def test_yields_non_list_bodies_whole(self, settings):
        def handler(request):
            return httpx.Response(200, json={"total_count": 1, "secrets": [{"name": "A"}]})

        client = FakeGitHub(handler).client(settings)

        assert client.invoke_multiple("repos/o/r/actions/secrets") == [
            {"total_count": 1, "secrets": [{"name": "A"}]}
        ]

    def test_refuses_links_to_other_hosts(self, settings):
        def handler(request):
            return httpx.Response(200, json=[1], headers={"Link": '<https://evil.example/x?page=2>; rel="next"'})

        client = FakeGitHub(handler).client(settings)

        with pytest.raises(GitHubError, match="another host"):
            client.invoke_multiple("repos/o/r/issues")

    def test_detects_link_loops(self, settings):
        def handler(request):
            return httpx.Response(200, json=[1], headers={"Link": f'<{API}/repos/o/r/issues?page=2>; rel="next"'})

        client = FakeGitHub(handler).client(settings)

        with pytest.raises(GitHubError, match="loop"):
            client.invoke_multiple("repos/o/r/issues")


class TestRateLimit:
    def test_waits_until_reset_then_succeeds(self, settings, _no_sleep):
        now = 1_700_000_000.0
        responses = iter([
            httpx.Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": str(int(now) + 2)},
            ),
            httpx.Response(200, json={"ok": True}),
        ])
        server = FakeGitHub(lambda request: next(responses))

        with patch("github_rest_core.client.time.time", return_value=now):
            result = server.client(settings).invoke("repos/o/r")

        assert result == {"ok": True}
        assert len(server.requests) == 2
        (waited,), _ = _no_sleep.call_args
        assert waited >= 2

    def test_second_rate_limit_raises_with_reset_time(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(
            429,
            json={"message": "secondary rate limit"},
            headers={"Retry-After": "1", "X-RateLimit-Reset": "1700000060"},
        ))

        with pytest.raises(RateLimited) as exc_info:
            server.client(settings).invoke("repos/o/r")

        assert exc_info.value.reset_at.timestamp() == 1700000060
        assert len(server.requests) == 2


class TestExtendedResult:
    def test_404_is_reported_in_extended_mode(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(404, json={"message": "Not Found"}))
        client = server.client(settings)

        resp = client.invoke("gists/abc/star", extended=True)
        assert resp.status == 404
        assert resp.body is None

        with pytest.raises(NotFound):
            client.invoke("gists/abc/star")

        assert server.requests[0].url == server.requests[1].url
        assert server.requests[0].headers == server.requests[1].headers

    def test_transport_failures_still_raise(self, settings):
        def handler(request):
            raise httpx.ConnectError("no route", request=request)

        client = FakeGitHub(handler).client(settings)

        with pytest.raises(TransportError):
            client.invoke("gists/abc/star", extended=True)

    def test_envelope_carries_headers(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(204, headers={"X-RateLimit-Remaining": "4999"}))

        resp = server.client(settings).invoke("gists/abc/star", extended=True)

        assert resp.status == 204
        assert resp.body is None
        assert resp.headers["x-ratelimit-remaining"] == "4999"


class TestRequestsAndBodies:
    def test_get_is_idempotent(self, settings):
        body = {"id": 1, "labels": [{"name": "b"}, {"name": "a"}], "title": "Ünïcode"}
        server = FakeGitHub(lambda request: httpx.Response(200, json=body))
        client = server.client(settings)

        first = client.invoke("repos/o/r/issues/1")
        second = client.invoke("repos/o/r/issues/1")

        assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)

    def test_body_round_trips(self, settings):
        body = {"title": "t", "labels": ["z", "a"], "nested": {"list": [1, {"k": None}]}}
        server = FakeGitHub(lambda request: httpx.Response(201, json={"number": 1}))

        server.client(settings).invoke("repos/o/r/issues", method="POST", body=body)

        sent = server.requests[0]
        assert json.loads(sent.content) == body
        assert sent.headers["Content-Type"].startswith("application/json")

    def test_query_values_are_escaped(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(200, json={"items": []}))

        server.client(settings).invoke("/search/issues/", params={"q": "is:open label:\"help wanted\" & more"})

        sent = server.requests[0]
        assert sent.url.path == "/search/issues"
        assert sent.url.params["q"] == "is:open label:\"help wanted\" & more"

    def test_unauthenticated_calls(self):
        settings = Settings(_env_file=None, github_token=None)
        server = FakeGitHub(lambda request: httpx.Response(200, json={}))

        server.client(settings).invoke("rate_limit")

        assert "Authorization" not in server.requests[0].headers

    def test_custom_host(self):
        settings = Settings(_env_file=None, github_token="t", github_api_host="ghe.example.com/api/v3")
        server = FakeGitHub(lambda request: httpx.Response(200, json={}))

        server.client(settings).invoke("repos/o/r")

        assert str(server.requests[0].url) == "https://ghe.example.com/api/v3/repos/o/r"


class TestErrorClassification:
    def test_validation_failed_keeps_field_errors(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(
            422,
            json={"message": "Validation Failed", "errors": [{"field": "name", "code": "missing"}]},
        ))

        with pytest.raises(ValidationFailed) as exc_info:
            server.client(settings).invoke("repos/o/r/labels", method="POST", body={})

        assert exc_info.value.message == "Validation Failed"
        assert exc_info.value.field_errors == [{"field": "name", "code": "missing"}]


class TestDownload:
    def test_streams_to_disk(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(200, content=b"PK\x03\x04zip"))

        target = server.client(settings).download("repos/o/r/zipball/main", tmp_path / "out" / "main.zip")

        assert target.read_bytes() == b"PK\x03\x04zip"

    def test_errors_are_classified(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(404, json={"message": "Not Found"}))

        with pytest.raises(NotFound):
            server.client(settings).download("repos/o/r/zipball/nope", tmp_path / "x.zip")
        assert not (tmp_path / "x.zip").exists()


class TestCache:
    def test_get_responses_are_cached(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(200, json={"full_name": "o/r"}))
        client = server.client(settings, cache_dir=tmp_path / "cache")

        assert client.invoke("repos/o/r") == {"full_name": "o/r"}
        assert client.invoke("repos/o/r") == {"full_name": "o/r"}

        assert len(server.requests) == 1
        assert list((tmp_path / "cache").glob("*.json"))

    def test_errors_are_not_cached(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(404, json={"message": "Not Found"}))
        client = server.client(settings, cache_dir=tmp_path / "cache")

        for _ in range(2):
            with pytest.raises(NotFound):
                client.invoke("repos/gone/repo")

        assert len(server.requests) == 2

    def test_writes_are_never_cached(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(201, json={"id": 1}))
        client = server.client(settings, cache_dir=tmp_path / "cache")

        client.invoke("repos/o/r/issues", method="POST", body={"title": "x"})
        client.invoke("repos/o/r/issues", method="POST", body={"title": "x"})

        assert len(server.requests) == 2

    def test_skip_cache_still_fetches(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(200, json={"n": len(server.requests)}))
        client = server.client(settings, cache_dir=tmp_path / "cache")

        client.invoke("repos/o/r")
        fresh = client.invoke("repos/o/r", skip_cache=True)

        assert fresh == {"n": 2}


class TestCallerTimeout:
    def test_bounds_the_in_flight_request(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(200, json={}))

        server.client(settings).invoke("repos/o/r", timeout=0.5)

        assert server.requests[0].extensions["timeout"]["read"] <= 0.5

    def test_bounds_every_page(self, settings):
        server = FakeGitHub(_paged_handler())

        server.client(settings).invoke_multiple("repos/o/r/issues", timeout=0.5)

        assert len(server.requests) == 3
        assert all(r.extensions["timeout"]["read"] <= 0.5 for r in server.requests)

    def test_bounds_downloads(self, settings, tmp_path):
        server = FakeGitHub(lambda request: httpx.Response(200, content=b"data"))

        server.client(settings).download("repos/o/r/tarball/main", tmp_path / "main.tgz", timeout=0.5)

        assert server.requests[0].extensions["timeout"]["read"] <= 0.5

    def test_timed_out_fetch_is_a_transport_error(self, settings):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        server = FakeGitHub(handler)

        with pytest.raises(TransportError):
            server.client(settings).invoke("repos/o/r", timeout=0.5)
        assert len(server.requests) == 1

    def test_no_timeout_uses_the_configured_one(self, settings):
        server = FakeGitHub(lambda request: httpx.Response(200, json={}))

        server.client(settings).invoke("repos/o/r")

        assert server.requests[0].extensions["timeout"]["read"] == settings.github_request_timeout
