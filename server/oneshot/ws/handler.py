import logging

import socketio

from oneshot.config import settings

logger = logging.getLogger(__name__)

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=settings.cors_origins,
    logger=False,
    engineio_logger=False,
)

# Store active session mappings: sid -> session_id
active_sessions: dict[str, str] = {}


@sio.event
async def connect(sid, environ, auth):
    from oneshot.ws.events import handle_connect

    session_id = None
    if auth and isinstance(auth, dict):
        session_id = auth.get("sessionId")

    if not session_id:
        logger.info(f"Client {sid} rejected: no session ID")
        return False

    if not await handle_connect(session_id, sid):
        return False
    active_sessions[sid] = session_id
    logger.info(f"Client {sid} connected to session {session_id}")


@sio.event
async def disconnect(sid):
    session_id = active_sessions.pop(sid, None)
    if session_id:
        logger.info(f"Client {sid} disconnected from session {session_id}")

        from oneshot.ws.events import handle_disconnect
        await handle_disconnect(session_id, sid)


@sio.event
async def set_keyword(sid, data):
    from oneshot.ws.events import handle_set_keyword
    session_id = active_sessions.get(sid)
    if session_id:
        await handle_set_keyword(session_id, sid, data)


@sio.event
async def select_theme(sid, data):
    from oneshot.ws.events import handle_select_theme
    session_id = active_sessions.get(sid)
    if session_id:
        await handle_select_theme(session_id, sid, data)


@sio.event
async def generate(sid, data=None):
    from oneshot.ws.events import handle_generate
    session_id = active_sessions.get(sid)
    if session_id:
        await handle_generate(session_id, sid)


@sio.event
async def reset(sid, data=None):
    from oneshot.ws.events import handle_reset
    session_id = active_sessions.get(sid)
    if session_id:
        await handle_reset(session_id, sid)


@sio.event
async def download(sid, data=None):
    from oneshot.ws.events import handle_download
    session_id = active_sessions.get(sid)
    if session_id:
        await handle_download(session_id, sid)


@sio.event
async def switch_tab(sid, data):
    from oneshot.ws.events import handle_switch_tab
    session_id = active_sessions.get(sid)
    if session_id:
        await handle_switch_tab(session_id, sid, data)
