"""httpx backed implementation of :class:`~forgekit.core.protocols.TagProvider`.

This module is the **only** place in the codebase that imports ``httpx``.
All httpx exceptions are caught here and re-raised as typed
:class:`~forgekit.exceptions.ForgeKitError` subclasses — nothing raw
escapes the infrastructure boundary.

Each lookup is a single GET; nothing is retried.
"""

from __future__ import annotations

from typing import Any

import httpx

from forgekit.exceptions import (
    NoTagsFoundError,
    RepositoryNotSetError,
    TagFetchError,
    UnexpectedContentTypeError,
    UnexpectedStatusError,
)

RELEASE_TIMEOUT_SECONDS: float = 10.0
"""Client-side timeout for the ``/releases/latest`` lookup."""

JSON_MEDIA_TYPE: str = "application/json"


class HttpTagProvider:
    """Concrete :class:`TagProvider` talking to a Git forge over HTTP.

    Usage::

        provider = HttpTagProvider()
        tag = provider.latest_tag("https://github.com/org/app")

    Parameters
    ----------
    client:
        Optional pre-configured :class:`httpx.Client` (tests pass one
        built on :class:`httpx.MockTransport`).  When ``None`` a
        short-lived client is opened per request.
    release_timeout:
        Timeout in seconds for :meth:`latest_release`.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        release_timeout: float = RELEASE_TIMEOUT_SECONDS,
    ) -> None:
        self._client: httpx.Client | None = client
        self._release_timeout: float = release_timeout

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def latest_tag(self, repo_url: str) -> str:
        """Return the first tag name listed under ``<repo_url>/tags``.

        Raises
        ------
        RepositoryNotSetError
            When *repo_url* is empty.
        UnexpectedStatusError
            When the endpoint does not answer 200.
        UnexpectedContentTypeError
            When the answer is not ``application/json``.
        NoTagsFoundError
            When the tag list is empty.
        TagFetchError
            For transport failures and malformed payloads.
        """
        url = f"{self._require_url(repo_url)}/tags"
        response = self._get(url)

        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatusError(
                f"Failed to fetch tags: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                hint=f"URL: {url}",
            )

        content_type = response.headers.get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        if media_type != JSON_MEDIA_TYPE:
            raise UnexpectedContentTypeError(
                f"Expected {JSON_MEDIA_TYPE}, got {content_type or 'no content type'}",
                hint=f"URL: {url}",
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise TagFetchError(f"Tag list from {url} is not valid JSON.") from exc

        if not isinstance(payload, list):
            raise TagFetchError(f"Tag list from {url} is not a JSON array.")
        if not payload:
            raise NoTagsFoundError("No tags found", hint=f"URL: {url}")

        first = payload[0]
        name = first.get("name") if isinstance(first, dict) else None
        if not isinstance(name, str) or not name:
            raise TagFetchError(f"First tag from {url} has no name.")
        return name

    def latest_release(self, repo_url: str) -> str:
        """Return the tag that ``<repo_url>/releases/latest`` redirects to.

        Raises
        ------
        RepositoryNotSetError
            When *repo_url* is empty.
        UnexpectedStatusError
            When the final response is not 200.
        TagFetchError
            For transport failures, or when no redirect to a tag happened.
        """
        url = f"{self._require_url(repo_url)}/releases/latest"
        response = self._get(
            url, follow_redirects=True, timeout=self._release_timeout,
        )

        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatusError(
                f"Error fetching latest version: {response.status_code} "
                f"{response.reason_phrase}",
                status_code=response.status_code,
                hint=f"URL: {url}",
            )

        segments = [part for part in response.url.path.split("/") if part]
        if not segments or segments[-1] in ("latest", "releases"):
            raise TagFetchError(
                f"{url} did not redirect to a release tag.",
                hint="The repository may not have any published release.",
            )
        return segments[-1]

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    @staticmethod
    def _require_url(repo_url: str) -> str:
        stripped = repo_url.strip().rstrip("/")
        if not stripped:
            raise RepositoryNotSetError(
                "Repository URL is not set.",
                hint="Add a 'repository' entry to the manifest.",
            )
        return stripped

    def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one GET and map transport failures to :class:`TagFetchError`."""
        try:
            if self._client is not None:
                return self._client.get(url, **kwargs)
            with httpx.Client() as client:
                return client.get(url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TagFetchError(f"Request to {url} failed: {exc}") from exc
