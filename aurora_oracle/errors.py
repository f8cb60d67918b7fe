class AuroraError(Exception):
    """Base class for failures surfaced to callers."""


class ProviderError(AuroraError):
    """The generative model could not be reached or refused the request."""


class SessionNotFound(AuroraError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Unknown chat session: {session_id}")
        self.session_id = session_id
