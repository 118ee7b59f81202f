from typing import Optional

from pydantic import BaseModel


class ThemeOption(BaseModel):
    id: str
    name: str
    primary: str
    secondary: str
    accent: str
    description: str
    selected: bool = False


class SlideCard(BaseModel):
    id: int
    badge: str  # "スライド {id}"
    title: str
    lines: list[str]
    type: str
    surface: str  # theme primary token behind the image / title block
    image_url: Optional[str] = None
    icon: Optional[str] = None
    show_image: bool = False


class IndicatorDot(BaseModel):
    index: int
    active: bool = False


class ProgressStep(BaseModel):
    label: str
    active: bool = False


class GridView(BaseModel):
    cards: list[SlideCard]


class SingleView(BaseModel):
    slide: SlideCard
    dots: list[IndicatorDot]


class InputView(BaseModel):
    headline: str
    lead: str
    keyword: str
    placeholder: str
    hint: str
    themes: list[ThemeOption]
    selected_theme: str
    can_submit: bool
    busy: bool
    submit_label: str


class GeneratingView(BaseModel):
    headline: str
    lead: str
    keyword: str
    progress: list[ProgressStep]


class PreviewView(BaseModel):
    headline: str
    summary: str
    theme: ThemeOption
    tab: str  # "grid" or "single"
    slide_count: int
    grid: Optional[GridView] = None
    single: Optional[SingleView] = None


class SessionView(BaseModel):
    """Render-ready description of a session; exactly one step view is set."""

    session_id: str
    step: str
    input: Optional[InputView] = None
    generating: Optional[GeneratingView] = None
    preview: Optional[PreviewView] = None
