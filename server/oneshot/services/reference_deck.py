"""The fixed six-slide deck installed by every generation round."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PLACEHOLDER_IMAGE = "/placeholder.svg?height=200&width=300"


class SlideType(str, Enum):
    TITLE = "title"
    CONTENT = "content"
    IMAGE = "image"
    CONCLUSION = "conclusion"


@dataclass(frozen=True)
class Slide:
    id: int  # 1-based position in the deck
    title: str
    content: str
    type: SlideType
    image_url: Optional[str] = None
    icon: Optional[str] = None

    @property
    def lines(self) -> list[str]:
        """Content split on embedded line breaks, one entry per rendered line."""
        return self.content.split("\n")

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "type": self.type.value,
            "image_url": self.image_url,
            "icon": self.icon,
        }


REFERENCE_SLIDES: tuple[Slide, ...] = (
    Slide(
        id=1,
        title="プロジェクト概要",
        content="OneShot Deck - 5分で完成するプレゼンテーション作成ツール",
        type=SlideType.TITLE,
        image_url=PLACEHOLDER_IMAGE,
    ),
    Slide(
        id=2,
        title="課題と背景",
        content=(
            "従来のスライド作成は時間がかかりすぎる\n"
            "• デザインに悩む時間\n"
            "• 構成を考える時間\n"
            "• 素材を探す時間"
        ),
        type=SlideType.CONTENT,
        icon="⚡",
    ),
    Slide(
        id=3,
        title="ソリューション",
        content=(
            "AIが自動でスライド構成を生成\n"
            "• キーワード入力だけで完成\n"
            "• 3つのテーマから選択\n"
            "• 画像・アイコン自動挿入"
        ),
        type=SlideType.CONTENT,
        icon="🚀",
    ),
    Slide(
        id=4,
        title="ターゲットユーザー",
        content="• ビジネスパーソン\n• 学生・研究者\n• プレゼン初心者\n• 時間に追われる人",
        type=SlideType.CONTENT,
        image_url=PLACEHOLDER_IMAGE,
    ),
    Slide(
        id=5,
        title="技術構成",
        content="• Next.js + TypeScript\n• OpenAI GPT API\n• Unsplash API\n• Tailwind CSS",
        type=SlideType.CONTENT,
        icon="⚙️",
    ),
    Slide(
        id=6,
        title="まとめ",
        content="5分でプロ品質のスライドを作成\nプレゼンテーションの民主化を実現",
        type=SlideType.CONCLUSION,
        image_url=PLACEHOLDER_IMAGE,
    ),
)


def reference_deck() -> tuple[Slide, ...]:
    """Return the reference batch. Tuples of frozen slides, so callers cannot mutate it."""
    return REFERENCE_SLIDES
