from fastapi import APIRouter, HTTPException

from oneshot.errors import UnknownTheme
from oneshot.schemas.theme import ThemeResponse
from oneshot.services.theme_registry import get_theme, list_themes

router = APIRouter()


@router.get("/", response_model=list[ThemeResponse])
async def get_themes():
    return [ThemeResponse.model_validate(t) for t in list_themes()]


@router.get("/{theme_id}", response_model=ThemeResponse)
async def get_theme_by_id(theme_id: str):
    try:
        theme = get_theme(theme_id)
    except UnknownTheme:
        raise HTTPException(status_code=404, detail="Theme not found")
    return ThemeResponse.model_validate(theme)
