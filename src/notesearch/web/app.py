"""FastAPI application serving notesearch queries over a websocket."""

from __future__ import annotations

import asyncio
import json
import logging
from importlib.resources import files
from pathlib import Path
from typing import Any, List, Tuple

from fastapi import APIRouter, FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from notesearch import __version__
from notesearch.config import AppConfig
from notesearch.index.search import Searcher, SearchResult
from notesearch.utils.files import CorpusError

LOGGER = logging.getLogger(__name__)

router = APIRouter()


class SearchPayload(BaseModel):
    query: str


def _serialize(results: List[SearchResult]) -> List[Tuple[str, float]]:
    return [result.as_pair() for result in results]


async def _run_search(app: FastAPI, query: str) -> List[SearchResult]:
    """Score the corpus in a worker thread, bounded by the app's query slots."""
    async with app.state.query_slots:
        return await asyncio.to_thread(app.state.searcher.search, query)


def _load_client_page() -> str:
    """Browser client that re-sends the query on every keystroke."""
    return files("notesearch.web").joinpath("templates", "index.html").read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse)
async def client_page() -> HTMLResponse:
    return HTMLResponse(content=_load_client_page())


@router.websocket("/")
async def query_socket(websocket: WebSocket) -> None:
    await websocket.accept()
    client = websocket.client
    LOGGER.info("Connected to client %s", client)

    try:
        while True:
            query = await websocket.receive_text()
            LOGGER.info("Received request %r", query)
            try:
                results = await _run_search(websocket.app, query)
            except CorpusError as exc:
                LOGGER.error("Query %r from %s failed: %s", query, client, exc)
                await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
                return

            LOGGER.info("Found %d results", len(results))
            for result in results:
                LOGGER.debug("%s (score %s)", result.path, result.score)
            await websocket.send_text(json.dumps(_serialize(results)))
    except WebSocketDisconnect as exc:
        LOGGER.info("Client %s disconnected (code %s)", client, exc.code)


@router.post("/search")
async def search_documents(payload: SearchPayload, request: Request) -> dict[str, Any]:
    try:
        results = await _run_search(request.app, payload.query)
    except CorpusError as exc:
        LOGGER.error("Search failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"results": _serialize(results)}


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application for the corpus described by config."""
    config = config or AppConfig()
    root = config.resolve_root(Path.cwd())

    app = FastAPI(title="notesearch", version=__version__)
    app.state.config = config
    app.state.searcher = Searcher(root)
    app.state.query_slots = asyncio.Semaphore(config.max_concurrent_queries)
    app.include_router(router)
    return app


# Target for `uvicorn notesearch.web.app:app`; the corpus root comes from $NOTESEARCH_ROOT.
app = create_app()
