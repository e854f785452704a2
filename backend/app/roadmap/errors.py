"""Error taxonomy for roadmap sessions and generators."""


class RoadmapError(Exception):
    """Base class for roadmap errors."""

    pass


class InvalidInput(RoadmapError):
    """Message text is empty or whitespace-only."""

    pass


class SessionBusy(RoadmapError):
    """A generation is already in flight for this session."""

    pass


class GenerationTimeout(RoadmapError):
    """Generator did not complete within the configured timeout."""

    pass


class RemoteGenerationError(RoadmapError):
    """Remote travel agent returned an error or an unreadable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
