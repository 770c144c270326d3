"""Capability checks performed before any bridge call.

The permission policy itself belongs to the panel. Routes ask the
configured Authorizer whether the caller may perform an ability on a
server (or node) and refuse with 403 otherwise. The default allows
everything, matching a panel that has already authorized the request
before forwarding it.
"""

from __future__ import annotations

__all__ = [
    "Ability",
    "AllowAllAuthorizer",
    "Authorizer",
]

from enum import Enum
from typing import Protocol

from fastapi import Request


class Ability(str, Enum):
    """Abilities routes check before calling the bridge."""

    VIEW_STATUS = "view-status"
    LIST_FILES = "list-files"
    READ_FILES = "read-files"
    SAVE_FILES = "save-files"
    VIEW_NODE = "view-node"


class Authorizer(Protocol):
    """Decides whether a request may perform an ability on a target."""

    async def authorize(self, request: Request, ability: Ability, target: str) -> bool:
        """Return True to allow, False to refuse with 403."""
        ...


class AllowAllAuthorizer:
    """Authorizer for deployments where the panel authorizes before forwarding."""

    async def authorize(self, request: Request, ability: Ability, target: str) -> bool:
        return True
