"""Projects a session snapshot into the view the presentation layer draws.

``render_view`` is a pure function of (snapshot, tab). The only state kept
anywhere in this module is the active preview tab on ``SlidePreviewRenderer``.
"""

import logging
from enum import Enum
from typing import Union

from oneshot.schemas.view import (
    GeneratingView,
    GridView,
    IndicatorDot,
    InputView,
    PreviewView,
    ProgressStep,
    SessionView,
    SingleView,
    SlideCard,
    ThemeOption,
)
from oneshot.services.deck_session import DeckStep, SessionSnapshot
from oneshot.services.reference_deck import Slide
from oneshot.services.theme_registry import Theme, get_theme, list_themes

logger = logging.getLogger(__name__)


class PreviewTab(str, Enum):
    GRID = "grid"
    SINGLE = "single"


INPUT_HEADLINE = "キーワードを入力してスライドを生成"
INPUT_LEAD = (
    "プレゼンテーションのテーマやキーワードを入力するだけで、"
    " AIが自動的に6枚のスライドを作成します"
)
KEYWORD_PLACEHOLDER = "例: 新商品発表、プロジェクト提案、研究発表..."
KEYWORD_HINT = "具体的なキーワードを入力すると、より適切なスライドが生成されます"
SUBMIT_LABEL = "スライドを生成する"
SUBMIT_LABEL_BUSY = "生成中..."

GENERATING_HEADLINE = "スライドを生成中..."
GENERATING_LEAD = "AIがあなたのキーワードを分析して、最適なスライドを作成しています"
# (label template, pulsing)
PROGRESS_STEPS = (
    ("キーワード「{keyword}」を分析中...", True),
    ("スライド構成を生成中...", True),
    ("画像とアイコンを選択中...", False),
    ("デザインを適用中...", False),
)

PREVIEW_HEADLINE = "生成されたスライド"


def _theme_option(theme: Theme, selected_id: str) -> ThemeOption:
    return ThemeOption(**theme.to_dict(), selected=theme.id == selected_id)


def _slide_card(slide: Slide, theme: Theme) -> SlideCard:
    return SlideCard(
        id=slide.id,
        badge=f"スライド {slide.id}",
        title=slide.title,
        lines=slide.lines,
        type=slide.type.value,
        surface=theme.primary,
        image_url=slide.image_url,
        icon=slide.icon,
        show_image=slide.has_image,
    )


def _render_input(state: SessionSnapshot) -> InputView:
    return InputView(
        headline=INPUT_HEADLINE,
        lead=INPUT_LEAD,
        keyword=state.keyword,
        placeholder=KEYWORD_PLACEHOLDER,
        hint=KEYWORD_HINT,
        themes=[_theme_option(t, state.theme_id) for t in list_themes()],
        selected_theme=state.theme_id,
        can_submit=state.can_submit,
        busy=state.busy,
        submit_label=SUBMIT_LABEL_BUSY if state.busy else SUBMIT_LABEL,
    )


def _render_generating(state: SessionSnapshot) -> GeneratingView:
    return GeneratingView(
        headline=GENERATING_HEADLINE,
        lead=GENERATING_LEAD,
        keyword=state.keyword,
        progress=[
            ProgressStep(label=label.format(keyword=state.keyword), active=active)
            for label, active in PROGRESS_STEPS
        ],
    )


def _render_preview(state: SessionSnapshot, theme: Theme, tab: PreviewTab) -> PreviewView:
    view = PreviewView(
        headline=PREVIEW_HEADLINE,
        summary=f"キーワード: 「{state.keyword}」 | テーマ: {theme.name}",
        theme=_theme_option(theme, state.theme_id),
        tab=tab.value,
        slide_count=len(state.slides),
    )
    if tab is PreviewTab.GRID:
        view.grid = GridView(cards=[_slide_card(s, theme) for s in state.slides])
    elif state.slides:
        # Only the first slide is shown; the first dot stays highlighted.
        view.single = SingleView(
            slide=_slide_card(state.slides[0], theme),
            dots=[IndicatorDot(index=i, active=i == 0) for i in range(len(state.slides))],
        )
    return view


def render_view(
    state: SessionSnapshot, tab: Union[PreviewTab, str] = PreviewTab.GRID
) -> SessionView:
    """Build the view for the session's current step.

    Raises UnknownTheme if the snapshot carries a theme outside the catalog.
    """
    theme = get_theme(state.theme_id)
    tab = PreviewTab(tab)

    view = SessionView(session_id=state.session_id, step=state.step.value)
    if state.step is DeckStep.INPUT:
        view.input = _render_input(state)
    elif state.step is DeckStep.GENERATING:
        view.generating = _render_generating(state)
    else:
        view.preview = _render_preview(state, theme, tab)
    return view


class SlidePreviewRenderer:
    """Renders a session and remembers which preview tab is active."""

    def __init__(self):
        self.active_tab = PreviewTab.GRID

    def switch_tab(self, tab: Union[PreviewTab, str]) -> PreviewTab:
        """Raises ValueError for anything other than "grid" or "single"."""
        self.active_tab = PreviewTab(tab)
        return self.active_tab

    def reset(self) -> None:
        self.active_tab = PreviewTab.GRID

    def render(self, state: SessionSnapshot) -> SessionView:
        return render_view(state, self.active_tab)
