"""Run one OneShot Deck session end to end, in-process, and log every view.

Run:  cd server && python scripts/simulate_session.py "新商品発表" creative
"""

import asyncio
import json
import os
import sys
import logging

# Add current directory to path so we can import oneshot modules
sys.path.append(os.getcwd())

from oneshot.config import settings
from oneshot.services.preview_renderer import PreviewTab
from oneshot.services.session_registry import SessionRegistry

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _log_view(label: str, view) -> None:
    logger.info(f"--- {label} ---")
    logger.info(json.dumps(view.model_dump(exclude_none=True), ensure_ascii=False, indent=2))


async def simulate_session(keyword: str, theme_id: str, delay: float):
    async def print_event(event: str, data: dict):
        step = data.get("step")
        logger.info(f"[emit] {event}" + (f" step={step}" if step else f" {data}"))

    registry = SessionRegistry()
    active = registry.create_session(
        theme_id=theme_id,
        emitter_factory=lambda _session_id: print_event,
        delay_secs=delay,
    )
    session = active.session

    await session.set_keyword(keyword)
    _log_view("input", active.view())

    if not await session.submit():
        logger.error("Generation was not accepted (empty keyword?)")
        await registry.close_all()
        return
    _log_view("generating", active.view())

    await session.wait_until_ready()
    _log_view("preview (grid)", active.view())

    active.renderer.switch_tab(PreviewTab.SINGLE)
    _log_view("preview (single)", active.view())

    message = await session.download()
    logger.info(f"Download: {message}")

    await active.reset()
    _log_view("after reset", active.view())

    await registry.close_all()


if __name__ == "__main__":
    keyword = sys.argv[1] if len(sys.argv) > 1 else "新商品発表"
    theme_id = sys.argv[2] if len(sys.argv) > 2 else settings.default_theme
    delay = float(sys.argv[3]) if len(sys.argv) > 3 else settings.generation_delay_secs
    asyncio.run(simulate_session(keyword, theme_id, delay))
