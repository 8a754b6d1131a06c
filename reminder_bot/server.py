"""Reminder Bot Gateway - FastAPI WebSocket server.

Each WebSocket connection gets its own SessionExecutor. Inbound text frames
are handled one at a time in arrival order; replies and timer notifications
share one outbox per connection so they reach the client in the order they
were produced.
"""

import asyncio
import contextlib
import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

# Load environment variables from .env file
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Config
from .models import ErrorDetail, ErrorResponse, HealthResponse
from .session import SessionExecutor
from .timers import AsyncioTimers

logger = logging.getLogger(__name__)

# Live sessions keyed by connection id
_sessions: Dict[str, SessionExecutor] = {}


def get_config() -> Config:
    """Get gateway configuration from environment."""
    config = Config.from_env()
    config.validate()
    return config


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    logger.info("Reminder Bot Gateway starting up...")
    logger.info(f"Gateway config: host={config.host}, port={config.port}, "
                f"confirm_durations={config.confirm_durations}")
    yield
    for session_id, executor in list(_sessions.items()):
        executor.close()
        _sessions.pop(session_id, None)
    logger.info("Reminder Bot Gateway shut down.")


app = FastAPI(
    title="Reminder Bot Gateway",
    description="Conversational reminders over a WebSocket",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP exceptions as a JSON error body."""
    error = ErrorResponse(
        error=ErrorDetail(
            message=str(exc.detail),
            type="invalid_request_error" if exc.status_code < 500 else "server_error",
            code=str(exc.status_code),
        )
    )
    return JSONResponse(status_code=exc.status_code, content=error.model_dump())


@app.get("/health")
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(active_sessions=len(_sessions))


async def _drain_outbox(websocket: WebSocket, outbox: "asyncio.Queue[str]", session_id: str) -> None:
    """Send queued messages to the client until the connection fails."""
    while True:
        message = await outbox.get()
        try:
            await websocket.send_text(message)
        except Exception as e:
            logger.warning(f"Send to session {session_id} failed: {e}")
            return


@app.websocket("/ws")
async def reminder_socket(websocket: WebSocket):
    """Chat endpoint: one text frame in, one reply frame out."""
    await websocket.accept()

    config = get_config()
    session_id = uuid.uuid4().hex
    outbox: "asyncio.Queue[str]" = asyncio.Queue()
    executor = SessionExecutor(
        timers=AsyncioTimers(asyncio.get_running_loop()),
        notify=outbox.put_nowait,
        confirm_durations=config.confirm_durations,
    )
    _sessions[session_id] = executor
    writer = asyncio.create_task(_drain_outbox(websocket, outbox, session_id))
    logger.info(f"Session {session_id} connected")

    outbox.put_nowait(executor.greeting())
    try:
        while True:
            text = await websocket.receive_text()
            outbox.put_nowait(executor.handle_text(text))
    except WebSocketDisconnect:
        logger.info(f"Session {session_id} disconnected")
    finally:
        # Pending timers would otherwise fire into a dead connection
        executor.close()
        _sessions.pop(session_id, None)
        writer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await writer


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "reminder_bot.server:app",
        host=config.host,
        port=config.port,
        reload=False,
    )
