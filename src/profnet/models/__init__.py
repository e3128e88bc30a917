"""Profnet data models."""

from profnet.models.edge import Edge, EdgeFilter, EdgeStatus
from profnet.models.result import RequestResult
from profnet.models.user import User

__all__ = ["Edge", "EdgeFilter", "EdgeStatus", "RequestResult", "User"]
