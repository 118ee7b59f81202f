"""In-memory registry of live deck sessions.

Each entry pairs a DeckSession with the renderer holding its preview tab.
Nothing here is persisted; closing a session (or shutting the app down)
cancels any pending generation and drops the entry.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

from oneshot.config import settings
from oneshot.errors import SessionLimitReached, SessionNotFound
from oneshot.schemas.view import SessionView
from oneshot.services.deck_session import DeckSession, EmitCallback
from oneshot.services.preview_renderer import SlidePreviewRenderer

logger = logging.getLogger(__name__)

EmitterFactory = Callable[[str], EmitCallback]


@dataclass
class ActiveSession:
    session: DeckSession
    renderer: SlidePreviewRenderer = field(default_factory=SlidePreviewRenderer)
    created_at: float = field(default_factory=time.time)

    @property
    def id(self) -> str:
        return self.session.session_id

    async def reset(self) -> None:
        """Reset the session; the preview tabs go back to the grid."""
        await self.session.reset()
        self.renderer.reset()

    def view(self) -> SessionView:
        return self.renderer.render(self.session.snapshot())


class SessionRegistry:
    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions
        self._sessions: dict[str, ActiveSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create_session(
        self,
        theme_id: Optional[str] = None,
        emitter_factory: Optional[EmitterFactory] = None,
        delay_secs: Optional[float] = None,
    ) -> ActiveSession:
        """Start a new session in the input step. Raises UnknownTheme for a bad theme_id."""
        limit = self.max_sessions if self.max_sessions is not None else settings.max_sessions
        if len(self._sessions) >= limit:
            raise SessionLimitReached(f"Session limit of {limit} reached")

        session_id = str(uuid.uuid4())
        session = DeckSession(
            session_id,
            theme_id=theme_id,
            delay_secs=delay_secs,
            emit_callback=emitter_factory(session_id) if emitter_factory else None,
        )
        active = ActiveSession(session=session)
        self._sessions[session_id] = active
        logger.info(f"Session {session_id}: created (theme={session.theme_id})")
        return active

    def get_session(self, session_id: str) -> ActiveSession:
        active = self._sessions.get(session_id)
        if active is None:
            raise SessionNotFound(session_id)
        return active

    async def close_session(self, session_id: str) -> bool:
        """Tear a session down. Returns True if it existed."""
        active = self._sessions.pop(session_id, None)
        if active is None:
            return False
        await active.session.close()
        return True

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            try:
                await self.close_session(session_id)
            except Exception as e:
                logger.warning(f"Session {session_id}: error during shutdown: {e}")
        logger.info("All deck sessions closed")


registry = SessionRegistry()
