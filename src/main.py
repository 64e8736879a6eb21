"""Grid Share App"""

import asyncio
import logging
import sys
import os
from pathlib import Path
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import FastAPI, Request, Query
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field
from grid_board import GridBoard
from grid_state import GridRecord, GridState, MAX_GRID_SIZE, MIN_GRID_SIZE
from rate_limiter import RateLimiter
from state_serializer import build_query, serialize, state_from_query


# Define log format
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SHARE_RATE_LIMIT = int(os.getenv("SHARE_RATE_LIMIT", "60"))  # Max shares per IP per hour
TEMPLATES_DIR = Path(os.getenv(
    "TEMPLATES_DIR", Path(__file__).resolve().parent.parent / "templates"
))

# Create a handler with the custom format
formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(formatter)

# Configure the root logger
logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT,
    handlers=[handler]
)

# Apply the same format to the Uvicorn loggers
for logger_name in ["uvicorn", "uvicorn.access"]:
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.propagate = False
    logger.addHandler(handler)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
limiter = RateLimiter(window_seconds=3600)


class ShareRecord(BaseModel):
    """An active cell in a share request."""
    index: int = Field(ge=0)
    color: Optional[str] = None


class ShareRequest(BaseModel):
    """A grid to turn into a share link."""
    size: int = Field(ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)
    records: List[ShareRecord] = []


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Lifespan event handler to manage startup and shutdown tasks."""
    task = asyncio.create_task(limiter.cleanup_loop())  # Start cleanup task
    yield  # App runs here
    task.cancel()  # Cleanup on shutdown

app = FastAPI(lifespan=lifespan)


@app.get("/")
async def serve_grid(request: Request):
    """Serve the grid page, painted with the cells of a shared link."""
    state = state_from_query(request.query_params)
    board = GridBoard(state.size)
    board.apply(state)
    logging.info("Rendering %dx%d grid with %d active cells",
                 board.size, board.size, board.active_count)

    cells = [
        {"index": i, "active": board.is_active(i), "color": board.color_of(i)}
        for i in range(board.size * board.size)
    ]
    return templates.TemplateResponse(
        request=request,
        name="grid.html",
        context={"size": board.size, "cells": cells, "query": build_query(board.snapshot())}
    )


@app.get("/healthz")
async def healthz():
    """Liveness check."""
    return {"status": "ok"}


@app.get("/api/state")
async def read_state(
    request: Request,
    s: Optional[str] = Query(None),
    grid: str = Query(""),
):
    """Decode a share link's query parameters into a grid state."""
    state = state_from_query({"s": s, "grid": grid})
    if grid and state.is_empty():
        logging.info("%s Share token restored no cells", request.client.host if request.client else "-")
    return state.to_dict()


@app.post("/api/share")
@limiter.limit(SHARE_RATE_LIMIT)
async def create_share(request: Request, body: ShareRequest):
    """Creates a share token and link for a grid state."""
    state = GridState(
        body.size,
        [GridRecord(r.index, r.color) for r in body.records]
    )
    token = serialize(state)
    query = build_query(state, token)

    base_url = f"{request.url.scheme}://{request.url.netloc}"
    share_url = f"{base_url}/?{query}"

    logging.info("%s Created share link for %dx%d grid",
                 request.client.host if request.client else "-", state.size, state.size)

    return {"token": token, "query": query, "url": share_url}
