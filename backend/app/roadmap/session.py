"""Roadmap session - owns one conversation's transcript and itinerary.

State machine: ``idle -> generating -> idle``. A submit while generating is
rejected with SessionBusy, so at most one generation is in flight and replies
arrive in the order their user messages were accepted.
"""

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from enum import Enum

from backend.app.models.common import Role
from backend.app.models.itinerary import ItineraryDocument
from backend.app.models.messages import Message
from backend.app.roadmap.clock import Clock, Delay, SystemClock, no_delay
from backend.app.roadmap.errors import GenerationTimeout, InvalidInput, SessionBusy
from backend.app.roadmap.generator import GenerationResult, ResponseGenerator, is_bootstrap
from backend.app.roadmap.templates import ERROR_REPLY, TIMEOUT_REPLY
from backend.app.utils.logging import StructuredGenerationLogger
from backend.app.utils.metrics import GenerationMetrics

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class SessionState(str, Enum):
    """Session generation state."""

    idle = "idle"
    generating = "generating"


def preserves_days(before: ItineraryDocument | None, after: ItineraryDocument) -> bool:
    """True when ``after`` keeps every day of ``before`` in the same order."""
    if before is None:
        return True
    return after.days[: len(before.days)] == before.days


class RoadmapSession:
    """One planning conversation.

    Listeners are called synchronously: ``on_generation_start`` when a submit
    is accepted, ``on_generation_complete`` after the itinerary is updated and
    the session is idle again.
    """

    def __init__(
        self,
        generator: ResponseGenerator,
        *,
        session_id: str | None = None,
        clock: Clock | None = None,
        delay: Delay | None = None,
        timeout_s: float | None = None,
        on_generation_start: Listener | None = None,
        on_generation_complete: Listener | None = None,
        metrics: GenerationMetrics | None = None,
        gen_logger: StructuredGenerationLogger | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._generator = generator
        self._clock = clock or SystemClock()
        self._delay = delay or no_delay
        self._timeout_s = timeout_s
        self._on_start = on_generation_start
        self._on_complete = on_generation_complete
        self._metrics = metrics or GenerationMetrics()
        self._gen_logger = gen_logger or StructuredGenerationLogger()

        self._state = SessionState.idle
        self._transcript: list[Message] = []
        self._itinerary: ItineraryDocument | None = None
        self._next_id = 1

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_generating(self) -> bool:
        return self._state is SessionState.generating

    def current_itinerary(self) -> ItineraryDocument | None:
        """Copy of the current itinerary, or None before the first generation."""
        if self._itinerary is None:
            return None
        return self._itinerary.model_copy(deep=True)

    def current_transcript(self) -> list[Message]:
        """Transcript in creation order."""
        return list(self._transcript)

    async def start(self, initial_prompt: str | None = None) -> Message | None:
        """Start the conversation, submitting ``initial_prompt`` when non-empty."""
        if initial_prompt and initial_prompt.strip():
            return await self.submit(initial_prompt)
        return None

    async def submit(self, text: str) -> Message:
        """Submit a user message and wait for the assistant reply.

        Args:
            text: User message

        Returns:
            The assistant Message appended for this submit

        Raises:
            InvalidInput: If text is empty or whitespace-only
            SessionBusy: If a generation is already in flight
        """
        # Checks run before the first await so concurrent submits cannot interleave
        if not text or not text.strip():
            self._reject("invalid_input")
            raise InvalidInput("Message text must not be empty")
        if self._state is SessionState.generating:
            self._reject("busy")
            raise SessionBusy("A reply is still being generated for this session")

        self._append(Role.user, text)
        self._state = SessionState.generating
        self._notify(self._on_start, "on_generation_start")

        snapshot = self.current_itinerary()
        mode = "bootstrap" if is_bootstrap(snapshot) else "follow_up"
        started = time.perf_counter()
        outcome = "success"
        error_reason: str | None = None

        try:
            try:
                result = await self._generate(text, snapshot)
                if not preserves_days(snapshot, result.itinerary):
                    raise ValueError("generator dropped or reordered existing days")
            except GenerationTimeout:
                outcome = "timeout"
                reply = self._append(Role.assistant, TIMEOUT_REPLY)
            except Exception as e:
                logger.exception(f"Generation failed for session {self.session_id}")
                outcome = "error"
                error_reason = type(e).__name__
                reply = self._append(Role.assistant, ERROR_REPLY)
            else:
                self._itinerary = result.itinerary
                reply = self._append(Role.assistant, result.reply_text)
        finally:
            self._state = SessionState.idle

        latency_ms = (time.perf_counter() - started) * 1000
        self._metrics.record_latency(mode, outcome, latency_ms)
        self._gen_logger.log_generation(
            self.session_id,
            mode,
            outcome,
            latency_ms,
            day_count=len(self._itinerary.days) if self._itinerary else None,
            error_reason=error_reason,
        )
        self._notify(self._on_complete, "on_generation_complete")
        return reply

    async def _generate(
        self, text: str, snapshot: ItineraryDocument | None
    ) -> GenerationResult:
        async def _run() -> GenerationResult:
            await self._delay()
            return await self._generator.generate(text, snapshot)

        if self._timeout_s is None:
            return await _run()
        try:
            return await asyncio.wait_for(_run(), timeout=self._timeout_s)
        except TimeoutError as e:
            raise GenerationTimeout(
                f"Generation exceeded {self._timeout_s}s for session {self.session_id}"
            ) from e

    def _append(self, role: Role, content: str) -> Message:
        now = self._clock.now()
        # Keep timestamps non-decreasing so id and time orderings agree
        if self._transcript and now < self._transcript[-1].created_at:
            now = self._transcript[-1].created_at
        message = Message(id=self._next_id, content=content, role=role, created_at=now)
        self._next_id += 1
        self._transcript.append(message)
        return message

    def _reject(self, reason: str) -> None:
        self._metrics.inc_rejected(reason)
        self._gen_logger.log_rejection(self.session_id, reason)

    def _notify(self, listener: Listener | None, name: str) -> None:
        if listener is None:
            return
        try:
            listener()
        except Exception:
            logger.exception(f"Listener {name} failed for session {self.session_id}")


SessionFactory = Callable[[str], RoadmapSession]


class SessionRegistry:
    """Independent sessions keyed by id; sessions share no state."""

    def __init__(self, factory: SessionFactory) -> None:
        self._factory = factory
        self._sessions: dict[str, tuple[RoadmapSession, uuid.UUID | None]] = {}

    def create(self, owner_id: uuid.UUID | None = None) -> RoadmapSession:
        """Create and register a new session, optionally owned by a user."""
        session = self._factory(uuid.uuid4().hex)
        self._sessions[session.session_id] = (session, owner_id)
        return session

    def get(self, session_id: str, owner_id: uuid.UUID | None = None) -> RoadmapSession | None:
        """Get a session; sessions owned by someone else are not visible."""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        session, owner = entry
        if owner is not None and owner != owner_id:
            return None
        return session

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
