"""Response generator backed by the remote travel agent endpoint."""

import logging

import httpx
from pydantic import ValidationError

from backend.app.models.itinerary import ItineraryDocument
from backend.app.models.messages import AgentRequest, AgentResponse
from backend.app.roadmap.errors import RemoteGenerationError
from backend.app.roadmap.generator import GenerationResult, is_bootstrap

logger = logging.getLogger(__name__)


class RemoteResponseGenerator:
    """Calls ``POST /ai-travel-agent`` and returns its reply and roadmap."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        trip_id: str | None = None,
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize remote generator.

        Args:
            base_url: Backend base URL (e.g. http://localhost:8000)
            token: Bearer credential for the identity service
            trip_id: Optional trip to persist the exchange under
            timeout_s: Request timeout
            client: Optional httpx client (for testing with mocks)
        """
        self._url = f"{base_url.rstrip('/')}/ai-travel-agent"
        self._token = token
        self._trip_id = trip_id
        self._timeout_s = timeout_s
        self._client = client

    async def generate(
        self, text: str, itinerary: ItineraryDocument | None
    ) -> GenerationResult:
        """Generate via the remote endpoint."""
        body = AgentRequest(message=text, trip_id=self._trip_id, trip_context=itinerary)
        payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        headers = {"Authorization": f"Bearer {self._token}"}

        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        try:
            response = await client.post(self._url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise RemoteGenerationError(f"Travel agent unreachable: {e}") from e
        finally:
            if close_client:
                await client.aclose()

        if response.status_code != 200:
            detail = _error_detail(response)
            raise RemoteGenerationError(
                f"Travel agent returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        try:
            data = AgentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RemoteGenerationError("Travel agent returned an unreadable response") from e

        return GenerationResult(
            reply_text=data.message,
            itinerary=data.updated_roadmap,
            mode="bootstrap" if is_bootstrap(itinerary) else "follow_up",
        )


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("error") or body)
    return str(body)
