"""Rejection reasons and store failures."""

from __future__ import annotations

from enum import StrEnum


class RejectReason(StrEnum):
    INVALID_REQUEST = "invalid_request"
    DUPLICATE_REQUEST = "duplicate_request"
    GRAPH_TOO_DISTANT = "graph_too_distant"
    UNKNOWN_USER = "unknown_user"


REJECT_MESSAGES: dict[RejectReason, str] = {
    RejectReason.INVALID_REQUEST: "You cannot connect with yourself",
    RejectReason.DUPLICATE_REQUEST: (
        "A connection or request already exists between you and {target}"
    ),
    RejectReason.GRAPH_TOO_DISTANT: (
        "You must be within {hops} connection levels to add {target} "
        "once you have more than {threshold} connections"
    ),
    RejectReason.UNKNOWN_USER: "User does not exist: {target}",
}


class StoreUnavailable(Exception):
    """The underlying database could not serve a read or write."""


class DuplicateEdgeError(Exception):
    """An edge already exists for the unordered pair being inserted."""

    def __init__(self, owner_id: str, peer_id: str) -> None:
        super().__init__(f"Edge already exists between {owner_id} and {peer_id}")
        self.owner_id = owner_id
        self.peer_id = peer_id
