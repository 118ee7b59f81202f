import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Response

from oneshot.errors import SessionLimitReached, SessionNotFound, UnknownTheme
from oneshot.schemas.session import (
    DownloadResponse,
    GenerateResponse,
    KeywordUpdate,
    SessionCreate,
    SessionResponse,
    ThemeSelect,
)
from oneshot.schemas.view import SessionView
from oneshot.services.preview_renderer import PreviewTab
from oneshot.services.session_registry import ActiveSession, registry

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_active(session_id: str) -> ActiveSession:
    try:
        return registry.get_session(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")


def _to_response(active: ActiveSession) -> SessionResponse:
    data = active.session.snapshot().to_dict()
    data["id"] = data.pop("session_id")
    return SessionResponse(**data)


@router.post("/", response_model=SessionResponse, status_code=201)
async def create_session(payload: Optional[SessionCreate] = None):
    from oneshot.ws.events import room_emitter

    theme_id = payload.theme_id if payload else None
    try:
        active = registry.create_session(theme_id=theme_id, emitter_factory=room_emitter)
    except UnknownTheme as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionLimitReached as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _to_response(active)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return _to_response(_get_active(session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str):
    if not await registry.close_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.put("/{session_id}/keyword", response_model=SessionResponse)
async def update_keyword(session_id: str, payload: KeywordUpdate):
    active = _get_active(session_id)
    await active.session.set_keyword(payload.keyword)
    return _to_response(active)


@router.put("/{session_id}/theme", response_model=SessionResponse)
async def select_theme(session_id: str, payload: ThemeSelect):
    active = _get_active(session_id)
    try:
        await active.session.select_theme(payload.theme_id)
    except UnknownTheme as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(active)


@router.post("/{session_id}/generate", response_model=GenerateResponse, status_code=202)
async def generate(session_id: str, response: Response):
    active = _get_active(session_id)
    accepted = await active.session.submit()
    if not accepted:
        response.status_code = 200
    return GenerateResponse(accepted=accepted, session=_to_response(active))


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset(session_id: str):
    active = _get_active(session_id)
    await active.reset()
    return _to_response(active)


@router.post("/{session_id}/download", response_model=DownloadResponse)
async def download(session_id: str):
    active = _get_active(session_id)
    message = await active.session.download()
    return DownloadResponse(acknowledged=message is not None, message=message)


@router.get("/{session_id}/view", response_model=SessionView)
async def get_view(session_id: str, tab: Optional[PreviewTab] = None):
    active = _get_active(session_id)
    if tab is not None:
        active.renderer.switch_tab(tab)
    return active.view()
