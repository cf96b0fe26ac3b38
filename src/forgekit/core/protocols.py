"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.

The logger-ownership capability lives beside the facade that consumes
it, in :class:`forgekit.utils.logger.HasLogger`.
"""

from __future__ import annotations

from typing import Protocol


class TagProvider(Protocol):
    """Contract for remote "latest version" backends.

    Any object that implements both methods with the correct signatures
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def latest_tag(self, repo_url: str) -> str:
        """Return the name of the first tag listed under ``<repo_url>/tags``.

        *repo_url* has already had any trailing ``.git`` stripped.

        Raises
        ------
        TagFetchError
            Or one of its subclasses, for every transport, status,
            content-type or payload failure.
        """
        ...  # pragma: no cover

    def latest_release(self, repo_url: str) -> str:
        """Return the tag that ``<repo_url>/releases/latest`` redirects to.

        Raises
        ------
        TagFetchError
            Or one of its subclasses, when the release page cannot be
            resolved.
        """
        ...  # pragma: no cover
