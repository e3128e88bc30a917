"""Request lifecycle: create, accept and deny connection requests.

Per unordered pair of users::

    (no edge) --request--> pending --accept (by target)--> accepted
                                   \\--deny (by target)--> denied

Accepted and denied are terminal. Whether a request may be created is
decided by ``decide_request``, a pure function of facts read from the store;
``RequestLifecycle`` reads those facts, applies the decision and performs the
single edge mutation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from profnet.core.queries import ConnectionQueries
from profnet.core.reachability import DEFAULT_MAX_HOPS, ReachabilityEngine
from profnet.errors import REJECT_MESSAGES, DuplicateEdgeError, RejectReason
from profnet.events.bus import EventBus
from profnet.events.types import EventType, RequestEvent
from profnet.models.edge import Edge, EdgeStatus
from profnet.models.result import Action, RequestResult
from profnet.storage.base import EdgeStore

logger = logging.getLogger(__name__)

DEFAULT_GROWTH_THRESHOLD = 5


@dataclass(frozen=True)
class RequestDecision:
    """Outcome of ``decide_request``: allowed, or rejected with a reason."""

    allowed: bool
    reason: RejectReason | None = None

    @classmethod
    def allow(cls) -> RequestDecision:
        return cls(allowed=True)

    @classmethod
    def reject(cls, reason: RejectReason) -> RequestDecision:
        return cls(allowed=False, reason=reason)


def decide_request(
    requester: str,
    target: str,
    *,
    exists: bool,
    accepted_count: int,
    within_hops: bool | None,
    target_known: bool = True,
    growth_threshold: int = DEFAULT_GROWTH_THRESHOLD,
) -> RequestDecision:
    """Decide whether ``requester`` may send a connection request to ``target``.

    ``within_hops`` may be None when ``accepted_count`` does not exceed
    ``growth_threshold``, since the hop bound does not apply then.
    """
    if requester == target:
        return RequestDecision.reject(RejectReason.INVALID_REQUEST)
    if exists:
        return RequestDecision.reject(RejectReason.DUPLICATE_REQUEST)
    if accepted_count > growth_threshold:
        if within_hops is None:
            raise ValueError("within_hops is required once accepted_count exceeds the threshold")
        if not within_hops:
            return RequestDecision.reject(RejectReason.GRAPH_TOO_DISTANT)
    if not target_known:
        return RequestDecision.reject(RejectReason.UNKNOWN_USER)
    return RequestDecision.allow()


class RequestLifecycle:
    """Connection request workflow over an edge store."""

    def __init__(
        self,
        store: EdgeStore,
        event_bus: EventBus,
        *,
        queries: ConnectionQueries | None = None,
        reachability: ReachabilityEngine | None = None,
        hop_bound: int = DEFAULT_MAX_HOPS,
        growth_threshold: int = DEFAULT_GROWTH_THRESHOLD,
        require_known_users: bool = True,
    ) -> None:
        self.store = store
        self.bus = event_bus
        self.queries = queries or ConnectionQueries(store)
        self.reachability = reachability or ReachabilityEngine(store)
        self.hop_bound = hop_bound
        self.growth_threshold = growth_threshold
        self.require_known_users = require_known_users

    async def request_connection(self, requester: str, target: str) -> RequestResult:
        """Create a pending edge requester -> target if the rules allow it."""
        exists = False
        accepted_count = 0
        within: bool | None = None
        target_known = True

        if requester != target:
            exists = await self.queries.connection_exists(requester, target)
            accepted_count = await self.queries.accepted_connection_count(requester)
            if not exists and accepted_count > self.growth_threshold:
                within = await self.reachability.within_hops(requester, target, self.hop_bound)
            if self.require_known_users:
                target_known = await self.store.user_exists(target)

        decision = decide_request(
            requester,
            target,
            exists=exists,
            accepted_count=accepted_count,
            within_hops=within,
            target_known=target_known,
            growth_threshold=self.growth_threshold,
        )
        if decision.reason is not None:
            return await self._rejected(requester, target, decision.reason)

        edge = Edge(owner_id=requester, peer_id=target, status=EdgeStatus.PENDING)
        try:
            await self.store.insert_edge(edge)
        except DuplicateEdgeError:
            # Lost a race with a concurrent request for the same pair.
            return await self._rejected(requester, target, RejectReason.DUPLICATE_REQUEST)

        logger.info("Connection request %s -> %s created", requester, target)
        await self.bus.emit(
            EventType.REQUEST_CREATED, RequestEvent(owner_id=requester, peer_id=target)
        )
        return RequestResult.success("request", edge)

    async def accept_request(self, target: str, requester: str) -> RequestResult:
        """Accept the pending request ``requester`` sent to ``target``."""
        return await self._resolve("accept", target, requester, EdgeStatus.ACCEPTED)

    async def deny_request(self, target: str, requester: str) -> RequestResult:
        """Deny the pending request ``requester`` sent to ``target``."""
        return await self._resolve("deny", target, requester, EdgeStatus.DENIED)

    async def _resolve(
        self, action: Action, target: str, requester: str, new_status: EdgeStatus
    ) -> RequestResult:
        # Only the receiving side may decide: the predicate is (owner=requester, peer=target).
        edge = await self.store.update_edge_status(
            requester, target, EdgeStatus.PENDING, new_status
        )
        if edge is None:
            logger.debug("No pending request %s -> %s to %s", requester, target, action)
            return RequestResult.success(action, None, changed=False)

        logger.info("Connection request %s -> %s %s", requester, target, new_status.value)
        event = (
            EventType.REQUEST_ACCEPTED
            if new_status is EdgeStatus.ACCEPTED
            else EventType.REQUEST_DENIED
        )
        await self.bus.emit(event, RequestEvent(owner_id=requester, peer_id=target))
        return RequestResult.success(action, edge)

    async def _rejected(self, requester: str, target: str, reason: RejectReason) -> RequestResult:
        message = REJECT_MESSAGES[reason].format(
            target=target, hops=self.hop_bound, threshold=self.growth_threshold
        )
        logger.info("Connection request %s -> %s rejected: %s", requester, target, reason.value)
        await self.bus.emit(
            EventType.REQUEST_REJECTED,
            RequestEvent(owner_id=requester, peer_id=target, reason=reason),
        )
        return RequestResult.rejected("request", reason, message)
