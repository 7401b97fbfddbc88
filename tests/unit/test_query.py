"""Tests for ReleaseQuery — JSON API parsing, constraints and latest-N."""

from __future__ import annotations

import httpx
import pytest

from pypimirror.core.errors import QueryError
from pypimirror.core.query import DEFAULT_QUERY_URL, ReleaseQuery

RELEASES = {
    "releases": {
        "1.0": [],
        "1.2": [],
        "1.10": [],
        "2.0rc1": [],
        "2.0": [],
        "not-a-version!": [],
    }
}


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _json_handler(payload, status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=payload)

    return handler


@pytest.fixture
def query() -> ReleaseQuery:
    return ReleaseQuery(client=_client(_json_handler(RELEASES)))


class TestVersions:
    def test_all_newest_first(self, query):
        assert query.versions("foo") == ["2.0", "2.0rc1", "1.10", "1.2", "1.0"]

    def test_constraints(self, query):
        assert query.versions("foo", constraints=">=1.2,<2.0") == ["1.10", "1.2"]

    def test_latest(self, query):
        assert query.versions("foo", latest=2) == ["2.0", "2.0rc1"]

    def test_latest_with_constraints(self, query):
        assert query.versions("foo", constraints="<2", latest=1) == ["1.10"]

    def test_invalid_constraint(self, query):
        with pytest.raises(QueryError, match="invalid version constraint"):
            query.versions("foo", constraints="~~1")

    def test_requests_templated_url(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"releases": {}})

        q = ReleaseQuery("https://index.example/pypi/{name}/json", client=_client(handler))
        assert q.versions("Foo-Bar") == []
        assert seen == ["https://index.example/pypi/Foo-Bar/json"]


class TestFailures:
    def test_http_status(self):
        q = ReleaseQuery(client=_client(_json_handler({}, status=404)))
        with pytest.raises(QueryError, match="HTTP code: 404"):
            q.versions("missing")

    def test_missing_releases_key(self):
        q = ReleaseQuery(client=_client(_json_handler({"info": {}})))
        with pytest.raises(QueryError, match="releases"):
            q.versions("foo")

    def test_not_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        q = ReleaseQuery(client=_client(handler))
        with pytest.raises(QueryError, match="failed to parse"):
            q.versions("foo")

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        q = ReleaseQuery(client=_client(handler))
        with pytest.raises(QueryError, match="failed to get"):
            q.versions("foo")

    def test_empty_url(self):
        with pytest.raises(QueryError):
            ReleaseQuery("")


class TestLifecycle:
    def test_default_url(self):
        with ReleaseQuery() as q:
            assert q.url_for("foo") == "https://pypi.org/pypi/foo/json"
            assert q.url_template == DEFAULT_QUERY_URL

    def test_injected_client_left_open(self):
        client = _client(_json_handler(RELEASES))
        with ReleaseQuery(client=client):
            pass
        assert not client.is_closed
        client.close()
