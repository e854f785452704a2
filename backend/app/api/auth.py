"""Bearer-token auth dependency.

Credentials are validated by an IdentityVerifier:
- SupabaseIdentityVerifier calls the identity service's ``/auth/v1/user``
  endpoint when ``identity_url`` is configured.
- DevTokenVerifier accepts ``Bearer <user_uuid>`` for local development and tests.
"""

import logging
import uuid
from typing import Annotated, Protocol

import httpx
from fastapi import Depends, Header, HTTPException, status

from backend.app.config import Settings, get_settings
from backend.app.db.context import RequestContext

logger = logging.getLogger(__name__)


class InvalidCredential(Exception):
    """Bearer credential was rejected by the identity service."""

    pass


class IdentityVerifier(Protocol):
    """Resolves a bearer token to a user identity."""

    async def verify(self, token: str) -> RequestContext:
        """Validate token.

        Raises:
            InvalidCredential: If the token is not accepted
        """
        ...


class DevTokenVerifier:
    """Accepts a bare user UUID as the token (no signature check)."""

    async def verify(self, token: str) -> RequestContext:
        try:
            return RequestContext(user_id=uuid.UUID(token))
        except ValueError as e:
            raise InvalidCredential("Invalid token format (expected user_id)") from e


class SupabaseIdentityVerifier:
    """Validates tokens against a Supabase-compatible auth service."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_s: float = 4.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize verifier.

        Args:
            base_url: Identity service base URL
            api_key: Project API key sent as ``apikey``
            timeout_s: Request timeout
            client: Optional httpx client (for testing with mocks)
        """
        self._url = f"{base_url.rstrip('/')}/auth/v1/user"
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._client = client

    async def verify(self, token: str) -> RequestContext:
        headers = {"Authorization": f"Bearer {token}", "apikey": self._api_key}

        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        try:
            response = await client.get(self._url, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Identity service unreachable: {e}")
            raise InvalidCredential("Identity service unavailable") from e
        finally:
            if close_client:
                await client.aclose()

        if response.status_code != 200:
            raise InvalidCredential("Unauthorized")

        try:
            data = response.json()
            return RequestContext(user_id=uuid.UUID(str(data["id"])), email=data.get("email"))
        except (ValueError, KeyError, TypeError) as e:
            raise InvalidCredential("Identity service returned no user") from e


def get_identity_verifier(
    settings: Annotated[Settings, Depends(get_settings)],
) -> IdentityVerifier:
    """Pick the verifier for the configured identity service."""
    if settings.identity_url:
        return SupabaseIdentityVerifier(
            settings.identity_url,
            settings.identity_api_key,
            timeout_s=settings.identity_timeout_s,
        )
    return DevTokenVerifier()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_context(
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    Args:
        verifier: Identity verifier
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        RequestContext for the authenticated user

    Raises:
        HTTPException: 401 if the header is missing or the credential is invalid
    """
    if not authorization:
        raise _unauthorized("No authorization header")

    if not authorization.startswith("Bearer "):
        raise _unauthorized("Invalid authorization header format")

    token = authorization[7:].strip()  # Strip "Bearer "
    if not token:
        raise _unauthorized("Missing bearer token")

    try:
        return await verifier.verify(token)
    except InvalidCredential as e:
        raise _unauthorized(str(e)) from e
