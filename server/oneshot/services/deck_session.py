"""Deck generation session: the input -> generating -> preview state machine.

One ``DeckSession`` backs one UI instance. All mutations happen on the event
loop in response to discrete user events, plus the single delayed completion
scheduled by ``submit``. That completion is tracked as an asyncio task so that
``reset`` and ``close`` can cancel it; a completion that belongs to a cancelled
round never touches state.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from oneshot.config import settings
from oneshot.errors import InvalidSubmission
from oneshot.schemas.websocket import DownloadAcknowledgedEvent
from oneshot.services.reference_deck import Slide, reference_deck
from oneshot.services.theme_registry import get_theme

logger = logging.getLogger(__name__)

DOWNLOAD_MESSAGE = "スライドをダウンロードしています..."

EmitCallback = Callable[[str, dict], Awaitable[None]]


class DeckStep(str, Enum):
    INPUT = "input"
    GENERATING = "generating"
    PREVIEW = "preview"


@dataclass(frozen=True)
class GenerationRequest:
    """Keyword and theme captured when a generation round is accepted."""
    keyword: str
    theme_id: str
    requested_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "keyword": self.keyword,
            "theme_id": self.theme_id,
            "requested_at": self.requested_at,
        }


@dataclass(frozen=True)
class SessionSnapshot:
    session_id: str
    step: DeckStep
    keyword: str
    theme_id: str
    slides: tuple[Slide, ...] = ()
    busy: bool = False
    can_submit: bool = False
    request: Optional[GenerationRequest] = None

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "step": self.step.value,
            "keyword": self.keyword,
            "theme_id": self.theme_id,
            "slides": [s.to_dict() for s in self.slides],
            "busy": self.busy,
            "can_submit": self.can_submit,
            "request": self.request.to_dict() if self.request else None,
        }


class DeckSession:
    """Owns step, keyword, theme selection and the current slide batch."""

    def __init__(
        self,
        session_id: str,
        theme_id: Optional[str] = None,
        delay_secs: Optional[float] = None,
        emit_callback: Optional[EmitCallback] = None,
        deck_factory: Callable[[], tuple[Slide, ...]] = reference_deck,
    ):
        self.session_id = session_id
        self.delay_secs = (
            settings.generation_delay_secs if delay_secs is None else delay_secs
        )
        self.emit = emit_callback
        self._deck_factory = deck_factory

        self.theme_id = get_theme(theme_id or settings.default_theme).id
        self.step = DeckStep.INPUT
        self.keyword = ""
        self.slides: tuple[Slide, ...] = ()
        self.busy = False
        self.request: Optional[GenerationRequest] = None
        self.closed = False

        # Pending Generating -> Preview completion
        self._generation_task: Optional[asyncio.Task] = None

    @property
    def can_submit(self) -> bool:
        return (
            not self.closed
            and self.step is DeckStep.INPUT
            and not self.busy
            and bool(self.keyword.strip())
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            step=self.step,
            keyword=self.keyword,
            theme_id=self.theme_id,
            slides=self.slides,
            busy=self.busy,
            can_submit=self.can_submit,
            request=self.request,
        )

    # --- Input step ---

    async def set_keyword(self, text: str) -> bool:
        """Replace the keyword text. Only applies while in the input step."""
        if self.closed or self.step is not DeckStep.INPUT:
            logger.debug(
                f"Session {self.session_id}: keyword change ignored in step {self.step.value}"
            )
            return False
        self.keyword = text
        await self._emit_state()
        return True

    async def select_theme(self, theme_id: str) -> bool:
        """Select one of the fixed themes. Unknown ids raise UnknownTheme."""
        theme = get_theme(theme_id)
        if self.closed or self.step is not DeckStep.INPUT:
            logger.debug(
                f"Session {self.session_id}: theme change ignored in step {self.step.value}"
            )
            return False
        self.theme_id = theme.id
        await self._emit_state()
        return True

    def _check_submittable(self) -> None:
        if self.closed:
            raise InvalidSubmission("session is closed")
        if self.step is not DeckStep.INPUT:
            raise InvalidSubmission(f"cannot submit in step {self.step.value}")
        if self.busy:
            raise InvalidSubmission("generation already in flight")
        if not self.keyword.strip():
            raise InvalidSubmission("keyword is empty")

    async def submit(self) -> bool:
        """Start a generation round.

        Returns False (and changes nothing) when the keyword is blank or the
        session is not accepting submissions. On success the session is in
        the generating step before this coroutine first yields.
        """
        try:
            self._check_submittable()
        except InvalidSubmission as e:
            logger.debug(f"Session {self.session_id}: submit rejected: {e}")
            return False

        request = GenerationRequest(keyword=self.keyword, theme_id=self.theme_id)
        self.request = request
        self.busy = True
        self.step = DeckStep.GENERATING
        self._generation_task = asyncio.create_task(
            self._complete_generation(request)
        )
        logger.info(
            f"Session {self.session_id}: generating deck for keyword "
            f"{request.keyword!r} (theme={request.theme_id}, delay={self.delay_secs}s)"
        )
        await self._emit_state()
        return True

    async def _complete_generation(self, request: GenerationRequest) -> None:
        try:
            await asyncio.sleep(self.delay_secs)
        except asyncio.CancelledError:
            logger.info(f"Session {self.session_id}: pending generation cancelled")
            return

        if (
            self.closed
            or self.request is not request
            or self.step is not DeckStep.GENERATING
        ):
            logger.debug(f"Session {self.session_id}: stale generation completion dropped")
            return

        self.slides = tuple(self._deck_factory())
        self.busy = False
        self.step = DeckStep.PREVIEW
        self._generation_task = None
        logger.info(
            f"Session {self.session_id}: deck ready ({len(self.slides)} slides)"
        )
        await self._emit_state()

    def _cancel_generation(self) -> Optional[asyncio.Task]:
        task = self._generation_task
        self._generation_task = None
        if task and not task.done():
            task.cancel()
            return task
        return None

    async def wait_until_ready(self) -> bool:
        """Wait for a pending generation to finish. Returns True if in preview."""
        task = self._generation_task
        if task is not None:
            await asyncio.wait([task])
        return self.step is DeckStep.PREVIEW

    # --- Preview step ---

    async def reset(self) -> bool:
        """Return to the input step with an empty keyword and no slides.

        Applies from preview, and from generating where the pending completion
        is cancelled so it cannot overwrite the fresh input state. Ignored in
        the input step so a typed keyword survives. The theme selection is kept.
        """
        if self.closed or self.step is DeckStep.INPUT:
            logger.debug(f"Session {self.session_id}: reset ignored in step {self.step.value}")
            return False
        self._cancel_generation()
        previous = self.step
        self.keyword = ""
        self.slides = ()
        self.busy = False
        self.request = None
        self.step = DeckStep.INPUT
        logger.info(f"Session {self.session_id}: reset from {previous.value}")
        await self._emit_state()
        return True

    async def download(self) -> Optional[str]:
        """Acknowledge a download request. No artifact is produced."""
        if self.closed or self.step is not DeckStep.PREVIEW:
            logger.debug(
                f"Session {self.session_id}: download ignored in step {self.step.value}"
            )
            return None
        logger.info(
            f"Session {self.session_id}: download acknowledged ({len(self.slides)} slides)"
        )
        event = DownloadAcknowledgedEvent(
            message=DOWNLOAD_MESSAGE, slide_count=len(self.slides)
        )
        await self._emit("download_acknowledged", event.model_dump())
        return DOWNLOAD_MESSAGE

    # --- Lifecycle ---

    async def close(self) -> None:
        """Tear the session down. A pending completion is cancelled and awaited."""
        if self.closed:
            return
        self.closed = True
        task = self._cancel_generation()
        if task is not None:
            await asyncio.wait([task])
        logger.info(f"Session {self.session_id}: closed")

    # --- Emission ---

    async def _emit_state(self) -> None:
        await self._emit("session_state", self.snapshot().to_dict())

    async def _emit(self, event: str, data: dict) -> None:
        if not self.emit:
            return
        try:
            await self.emit(event, data)
        except Exception as e:
            logger.warning(f"Session {self.session_id}: error emitting {event}: {e}")
