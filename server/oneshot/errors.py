"""Error types raised by the deck services."""


class DeckError(Exception):
    """Base class for OneShot Deck errors."""


class UnknownTheme(DeckError, KeyError):
    """Theme identifier is not one of the fixed registry entries."""

    def __init__(self, theme_id: str):
        super().__init__(theme_id)
        self.theme_id = theme_id

    def __str__(self) -> str:
        return f"Unknown theme: {self.theme_id}"


class InvalidSubmission(DeckError):
    """Generation request the session cannot accept.

    Raised for an empty (after trimming) keyword, a closed session, a step
    other than input, or a generation already in flight.
    """


class SessionNotFound(DeckError, KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"


class SessionLimitReached(DeckError):
    pass
