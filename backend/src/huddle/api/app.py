"""HTTP surface of the chat service.

``fastapi_app`` serves the chat page and a couple of read-only
endpoints; ``app`` wraps it with the Socket.IO ASGI app and is what
uvicorn runs.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

from huddle.config.settings import settings
from huddle.connection import socketio_server
from huddle.utils.logging_utils import configure_logging

configure_logging(settings.log_level, settings.log_file)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logger.info("Starting %s v%s (%s)", settings.service_name,
                settings.service_version, settings.environment)
    logger.info("Service will run on %s:%d", settings.host, settings.port)
    yield
    logger.info("Shutting down %s", settings.service_name)


fastapi_app = FastAPI(
    title=settings.service_name,
    description="Multi-room chat with presence notifications",
    version=settings.service_version,
    lifespan=lifespan,
)


@fastapi_app.get("/")
async def index():
    """Serve the browser chat client."""
    index_path = Path(settings.index_file)
    if not index_path.is_file():
        logger.warning("Chat page not found at %s", index_path)
        raise HTTPException(status_code=404, detail="Chat page not found")
    return FileResponse(index_path, media_type="text/html")


@fastapi_app.get("/health")
async def health():
    return {"status": "ok"}


@fastapi_app.get("/rooms")
async def list_rooms():
    """Current rooms and their member counts."""
    rooms = socketio_server.session_orchestrator.list_rooms()
    return {"rooms": [{"name": r.name, "userCount": r.user_count} for r in rooms]}


app = socketio_server.create_socketio_app(fastapi_app)
