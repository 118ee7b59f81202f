from typing import Optional

from pydantic import BaseModel


class SessionCreate(BaseModel):
    theme_id: Optional[str] = None


class KeywordUpdate(BaseModel):
    keyword: str


class ThemeSelect(BaseModel):
    theme_id: str


class SlideData(BaseModel):
    id: int
    title: str
    content: str
    type: str  # "title", "content", "image", "conclusion"
    image_url: Optional[str] = None
    icon: Optional[str] = None


class GenerationRequestData(BaseModel):
    keyword: str
    theme_id: str
    requested_at: float


class SessionResponse(BaseModel):
    id: str
    step: str  # "input", "generating", "preview"
    keyword: str
    theme_id: str
    slides: list[SlideData]
    busy: bool
    can_submit: bool
    request: Optional[GenerationRequestData] = None


class GenerateResponse(BaseModel):
    accepted: bool
    session: SessionResponse


class DownloadResponse(BaseModel):
    acknowledged: bool
    message: Optional[str] = None
