# apps/api/errors.py
from __future__ import annotations

from typing import Dict, Type


class RecoError(Exception):
    """Base class for every error the API reports to clients."""

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail


class NotFound(RecoError):
    pass


class BadRequest(RecoError):
    pass


class InvalidReference(RecoError):
    """A link names a user or item that does not exist."""

    def __init__(self, *, user_id: str = "", item_id: str = ""):
        missing = []
        if user_id:
            missing.append(f"user {user_id}")
        if item_id:
            missing.append(f"item {item_id}")
        super().__init__("Unknown " + " and ".join(missing) if missing else "Unknown link endpoint")
        self.user_id = user_id
        self.item_id = item_id


class StoreError(RecoError):
    """The graph store failed; the driver exception is kept as __cause__."""


ERROR_STATUS: Dict[Type[RecoError], int] = {
    NotFound: 404,
    BadRequest: 400,
    InvalidReference: 422,
    StoreError: 503,
}


def status_for(exc: RecoError) -> int:
    for kind, code in ERROR_STATUS.items():
        if isinstance(exc, kind):
            return code
    raise TypeError(f"unmapped error kind: {type(exc).__name__}")
