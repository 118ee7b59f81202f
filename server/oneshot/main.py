import logging

import socketio
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oneshot.config import settings
from oneshot.api import sessions, themes
from oneshot.services.reference_deck import reference_deck
from oneshot.services.session_registry import registry
from oneshot.services.theme_registry import get_theme
from oneshot.ws.handler import sio

VERSION = "0.1.0"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

# Suppress noisy third-party loggers
logging.getLogger("engineio").setLevel(logging.WARNING)
logging.getLogger("socketio").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A misconfigured default theme is a programming error; fail before serving
    theme = get_theme(settings.default_theme)
    logger.info(
        f"OneShot Deck ready (default theme={theme.id}, "
        f"generation delay={settings.generation_delay_secs}s)"
    )
    yield
    await registry.close_all()


app = FastAPI(
    title="OneShot Deck API",
    description="Keyword-to-slide-deck session server",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount REST routes
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
app.include_router(themes.router, prefix="/api/themes", tags=["themes"])


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION}


@app.get("/api/meta")
async def meta():
    return {
        "name": "OneShot Deck",
        "tagline": "5分でプロ品質のスライドを作成",
        "badges": ["5分で完成", "誰でも簡単"],
        "slide_count": len(reference_deck()),
        "generation_delay_secs": settings.generation_delay_secs,
        "active_sessions": len(registry),
    }


# Mount Socket.IO as ASGI sub-app
socket_app = socketio.ASGIApp(sio, other_asgi_app=app)
