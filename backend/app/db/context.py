"""Request context for tenancy enforcement."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the authenticated user's identity.

    Used to enforce tenancy boundaries in all database operations.
    """

    user_id: UUID
    email: str | None = None
