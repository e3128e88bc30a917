"""Result values returned by the request lifecycle."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from profnet.errors import RejectReason
from profnet.models.edge import Edge

Action = Literal["request", "accept", "deny"]


class RequestResult(BaseModel):
    """Outcome of a lifecycle operation.

    Attributes:
        ok: False only for business-rule rejections.
        action: Which lifecycle operation produced the result.
        reason: Rejection reason when ``ok`` is False.
        message: Human-readable explanation for the client layer.
        edge: The edge as persisted after a successful mutation.
        changed: Whether a row was written. Accept and deny on a request that
            is missing or already decided are successful no-ops.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    action: Action
    reason: RejectReason | None = None
    message: str = ""
    edge: Edge | None = None
    changed: bool = False

    @classmethod
    def success(cls, action: Action, edge: Edge | None, *, changed: bool = True) -> RequestResult:
        return cls(ok=True, action=action, edge=edge, changed=changed)

    @classmethod
    def rejected(cls, action: Action, reason: RejectReason, message: str) -> RequestResult:
        return cls(ok=False, action=action, reason=reason, message=message)

    def to_response(self) -> dict[str, Any]:
        data: dict[str, Any] = {"_v": "1.0", "ok": self.ok, "action": self.action}
        if self.reason is not None:
            data["reason"] = self.reason.value
            data["message"] = self.message
        if self.edge is not None:
            data["edge"] = self.edge.to_response()
        if self.ok and self.action != "request":
            data["changed"] = self.changed
        return data
