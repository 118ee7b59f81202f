"""Fixed catalog of the three deck themes.

The table is built once at import and exposed read-only; callers go through
``list_themes`` / ``get_theme`` rather than touching the mapping.
"""

import logging
from dataclasses import asdict, dataclass
from types import MappingProxyType

from oneshot.errors import UnknownTheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    primary: str  # background style token for slide surfaces
    secondary: str
    accent: str  # text style token
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


_THEMES = MappingProxyType({
    theme.id: theme
    for theme in (
        Theme(
            id="modern",
            name="モダン",
            primary="bg-gradient-to-br from-blue-600 to-purple-600",
            secondary="bg-white",
            accent="text-blue-600",
            description="クリーンで洗練されたビジネス向けデザイン",
        ),
        Theme(
            id="creative",
            name="クリエイティブ",
            primary="bg-gradient-to-br from-orange-500 to-pink-500",
            secondary="bg-gray-50",
            accent="text-orange-600",
            description="カラフルで創造性を刺激するデザイン",
        ),
        Theme(
            id="minimal",
            name="ミニマル",
            primary="bg-gradient-to-br from-gray-800 to-gray-600",
            secondary="bg-white",
            accent="text-gray-800",
            description="シンプルで集中しやすいデザイン",
        ),
    )
})

THEME_IDS: tuple[str, ...] = tuple(_THEMES)


def list_themes() -> list[Theme]:
    """All themes in catalog order (the order the picker shows them)."""
    return list(_THEMES.values())


def get_theme(theme_id: str) -> Theme:
    """Resolve a theme by id. Raises UnknownTheme for anything outside the catalog."""
    theme = _THEMES.get(theme_id)
    if theme is None:
        logger.error(f"Theme lookup failed for {theme_id!r}")
        raise UnknownTheme(theme_id)
    return theme


def is_known_theme(theme_id: str) -> bool:
    return theme_id in _THEMES


def default_theme_id() -> str:
    return THEME_IDS[0]
