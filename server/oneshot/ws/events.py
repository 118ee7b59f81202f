import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from oneshot.config import settings
from oneshot.errors import SessionNotFound, UnknownTheme
from oneshot.schemas.websocket import (
    ErrorEvent,
    SelectThemeEvent,
    SetKeywordEvent,
    SwitchTabEvent,
)
from oneshot.services.deck_session import EmitCallback
from oneshot.services.session_registry import ActiveSession, registry
from oneshot.ws.handler import sio

logger = logging.getLogger(__name__)

# In-memory socket bookkeeping per session
session_sids: dict[str, set[str]] = {}  # session_id -> connected sids
session_release_tasks: dict[str, asyncio.Task] = {}  # session_id -> pending close


def _room(session_id: str) -> str:
    return f"session_{session_id}"


def room_emitter(session_id: str) -> EmitCallback:
    """Emit callback that broadcasts session events to every socket in the session room."""

    async def emit_callback(event: str, data: dict):
        await sio.emit(event, data, room=_room(session_id))

    return emit_callback


def _lookup(session_id: str) -> Optional[ActiveSession]:
    try:
        return registry.get_session(session_id)
    except SessionNotFound:
        logger.warning(f"Session {session_id}: event for unknown or closed session")
        return None


async def _emit_error(sid: str, message: str) -> None:
    await sio.emit("error", ErrorEvent(message=message).model_dump(), to=sid)


async def handle_connect(session_id: str, sid: str) -> bool:
    """Join the session room and send the current state. False rejects the socket."""
    active = _lookup(session_id)
    if not active:
        return False
    _cancel_release(session_id)
    session_sids.setdefault(session_id, set()).add(sid)
    await sio.enter_room(sid, _room(session_id))
    await sio.emit("session_state", active.session.snapshot().to_dict(), to=sid)
    return True


async def handle_disconnect(session_id: str, sid: str):
    """Forget the socket; once the last one is gone, close the session after a grace period."""
    sids = session_sids.get(session_id)
    if sids:
        sids.discard(sid)
        if sids:
            return
    session_sids.pop(session_id, None)

    _cancel_release(session_id)
    session_release_tasks[session_id] = asyncio.create_task(
        _release_after_grace(session_id)
    )
    logger.info(
        f"Session {session_id}: no clients left, closing in "
        f"{settings.session_disconnect_grace_secs}s unless one reconnects"
    )


async def _release_after_grace(session_id: str) -> None:
    try:
        await asyncio.sleep(settings.session_disconnect_grace_secs)
    except asyncio.CancelledError:
        return
    session_release_tasks.pop(session_id, None)
    if await registry.close_session(session_id):
        logger.info(f"Session {session_id}: released after last client disconnected")


def _cancel_release(session_id: str) -> None:
    task = session_release_tasks.pop(session_id, None)
    if task and not task.done():
        task.cancel()
        logger.info(f"Session {session_id}: client reconnected, release cancelled")


async def handle_set_keyword(session_id: str, sid: str, data: dict):
    active = _lookup(session_id)
    if not active:
        return
    try:
        event = SetKeywordEvent.model_validate(data or {})
    except ValidationError:
        await _emit_error(sid, "Invalid keyword payload")
        return
    await active.session.set_keyword(event.keyword)


async def handle_select_theme(session_id: str, sid: str, data: dict):
    active = _lookup(session_id)
    if not active:
        return
    try:
        event = SelectThemeEvent.model_validate(data or {})
        await active.session.select_theme(event.theme_id)
    except ValidationError:
        await _emit_error(sid, "Invalid theme payload")
    except UnknownTheme as e:
        logger.warning(f"Session {session_id}: {e}")
        await _emit_error(sid, str(e))


async def handle_generate(session_id: str, sid: str):
    active = _lookup(session_id)
    if active:
        await active.session.submit()


async def handle_reset(session_id: str, sid: str):
    active = _lookup(session_id)
    if active:
        await active.reset()


async def handle_download(session_id: str, sid: str):
    active = _lookup(session_id)
    if active:
        await active.session.download()


async def handle_switch_tab(session_id: str, sid: str, data: dict):
    """Switch the preview tab and send the re-rendered view back to the caller."""
    active = _lookup(session_id)
    if not active:
        return
    try:
        event = SwitchTabEvent.model_validate(data or {})
        active.renderer.switch_tab(event.tab)
    except (ValidationError, ValueError):
        await _emit_error(sid, "Invalid preview tab")
        return
    await sio.emit("session_view", active.view().model_dump(), to=sid)
