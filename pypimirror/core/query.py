"""Release lookup against a package index JSON API.

Used to decide what to download: fetches the release list of one project,
filters it with a PEP 440 specifier and keeps the newest versions.
"""

from __future__ import annotations

import logging

import httpx
from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from pypimirror.core.errors import QueryError

logger = logging.getLogger(__name__)

DEFAULT_QUERY_URL = "https://pypi.org/pypi/{name}/json"


class ReleaseQuery:
    """Lists the released versions of a project.

    Parameters
    ----------
    url_template:
        URL of the project's JSON document; ``{name}`` is replaced by the
        project name.
    client:
        HTTP client.  A new ``httpx.Client`` is created when omitted.
    timeout:
        Request timeout in seconds for the default client.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_QUERY_URL,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not url_template:
            raise QueryError("empty URL")
        self.url_template = url_template
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def url_for(self, name: str) -> str:
        try:
            return self.url_template.format(name=name)
        except (KeyError, IndexError, ValueError) as exc:
            raise QueryError(f"invalid URL template {self.url_template!r}: {exc}") from exc

    def versions(
        self, name: str, *, constraints: str = "", latest: int = 0
    ) -> list[str]:
        """Versions of *name* matching *constraints*, newest first.

        With *latest* > 0 only that many versions are returned.
        """
        try:
            specifier = SpecifierSet(constraints)
        except InvalidSpecifier as exc:
            raise QueryError(f"invalid version constraint {constraints!r}: {exc}") from exc

        releases = self._fetch_releases(name)
        matching: list[tuple[Version, str]] = []
        for raw in releases:
            try:
                version = Version(raw)
            except InvalidVersion:
                logger.debug("Ignoring unparsable version %r of %s", raw, name)
                continue
            if not constraints or specifier.contains(version):
                matching.append((version, raw))

        matching.sort(key=lambda pair: pair[0])
        if latest > 0:
            matching = matching[-latest:]
        return [raw for _, raw in reversed(matching)]

    def _fetch_releases(self, name: str) -> dict:
        url = self.url_for(name)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise QueryError(f"failed to get {url!r}: {exc}") from exc
        if response.status_code != 200:
            raise QueryError(f"failed to get {url!r}, HTTP code: {response.status_code}")
        try:
            info = response.json()
        except ValueError as exc:
            raise QueryError(f"failed to parse response: {exc}") from exc
        releases = info.get("releases") if isinstance(info, dict) else None
        if not isinstance(releases, dict):
            raise QueryError("failed to parse response, missing or invalid key: 'releases'")
        return releases

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ReleaseQuery:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
