from pydantic import BaseModel, Field


class SetKeywordEvent(BaseModel):
    keyword: str = ""


class SelectThemeEvent(BaseModel):
    theme_id: str = Field(alias="themeId")

    model_config = {"populate_by_name": True}


class SwitchTabEvent(BaseModel):
    tab: str  # "grid" or "single"


class DownloadAcknowledgedEvent(BaseModel):
    message: str
    slide_count: int


class ErrorEvent(BaseModel):
    message: str
