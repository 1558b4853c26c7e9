"""FastAPI application for the todo board."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..api import TodoClient
from ..board import TodoBoard
from ..config import settings
from ..logging_setup import setup_logging
from ..notify import RecordingNotifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, log_file=settings.log_file)
    client = TodoClient()
    board = TodoBoard(client, RecordingNotifier(confirm_answer=True))
    if not await board.load():
        logger.warning("Starting with an empty board; tasks API at %s unavailable", settings.api_base_url)
    app.state.board = board
    yield
    await client.close()


app = FastAPI(title=settings.app_title, lifespan=lifespan)

# Import and register routers
from .routers import board, health  # noqa: E402

app.include_router(board.router)
app.include_router(health.router)
