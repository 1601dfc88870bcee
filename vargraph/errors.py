"""Exception hierarchy shared by every vargraph component.

CatalogIntegrityError -- raised while loading catalogs, never mid-request.
StoreUnavailableError -- the backing graph store could not answer a query.
InvalidRequestError   -- malformed requested-variable input.
"""

from __future__ import annotations


class VarGraphError(Exception):
    """Base class for all vargraph errors."""


class CatalogIntegrityError(VarGraphError):
    """A catalog definition is malformed (e.g. an edge names a missing variable)."""

    def __init__(self, collection_id: str, reason: str) -> None:
        super().__init__(f"Catalog '{collection_id}' is invalid: {reason}")
        self.collection_id = collection_id
        self.reason = reason


class StoreUnavailableError(VarGraphError):
    """The graph store was unreachable or a query did not complete."""

    def __init__(self, backend: str, cause: Exception | str) -> None:
        super().__init__(f"Graph store '{backend}' unavailable: {cause}")
        self.backend = backend
        self.cause = cause


class InvalidRequestError(VarGraphError):
    """Requested-variable input is malformed."""
