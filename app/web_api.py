"""FastAPI application serving the browser weather widget and its JSON API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Form, Query
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from app.config import get_search_log_path
from app.main import build_orchestrator, configure_logging
from app.web_view import WebWeatherView
from core.orchestrator import SearchOrchestrator, SearchOutcome
from core.search_log import read_search_log

logger = logging.getLogger(__name__)

STATIC_DIR = Path("web/static")


class SearchRequest(BaseModel):
    city: str = ""


def _format_outcome(outcome: SearchOutcome, orchestrator: SearchOrchestrator) -> Dict[str, Any]:
    """WHAT: reshape a ``SearchOutcome`` into the API schema.

    WHY: the page only shows one generic failure message, but API callers and
    tests need the distinct error kind to tell failures apart.
    HOW: copy the tagged status and user-facing message, attach the record
    and its summary on success, and always include the current recent list.
    """
    record = outcome.record if outcome.ok else None
    return {
        "status": outcome.status,
        "city": outcome.city,
        "generation": outcome.generation,
        "message": outcome.message,
        "record": record.to_dict() if record else None,
        "summary": record.summary() if record else None,
        "recent": [entry.to_dict() for entry in orchestrator.store.entries()],
    }


def create_app(
    orchestrator: Optional[SearchOrchestrator] = None,
    *,
    static_dir: Optional[Path] = None,
    search_log_path: Optional[Path] = None,
) -> FastAPI:
    """WHAT: instantiate FastAPI around one search orchestrator.

    WHY: the page, the form handler and the JSON API must share one view and
    one recent-search store so every surface shows the same history.
    HOW: accept dependency overrides (tests), restore the persisted history
    once, cache collaborators on ``app.state`` and register the routes.
    """
    orch = orchestrator or build_orchestrator(WebWeatherView())
    static_root = static_dir or STATIC_DIR
    log_path = search_log_path or get_search_log_path()

    restored = orch.restore()
    logger.info("Serving weather widget with %d recent searches", len(restored))

    app = FastAPI(title="Weather Lookup", version="1.0.0")
    app.state.orchestrator = orch
    app.state.static_root = static_root
    app.state.search_log_path = log_path

    app.mount("/static", StaticFiles(directory=static_root, check_dir=False), name="static")

    def _page(city_value: str = "", alert: Optional[str] = None) -> str:
        view = app.state.orchestrator.view
        if not isinstance(view, WebWeatherView):
            raise RuntimeError("The browser page requires a WebWeatherView.")
        return view.render_page(city_value, alert)

    @app.get("/", response_class=HTMLResponse)
    def root() -> str:
        return _page()

    @app.post("/search", response_class=HTMLResponse)
    def search_form(city: str = Form("")) -> str:
        """Handle the search button, the Enter key and recent-entry clicks."""

        outcome = app.state.orchestrator.search(city)
        return _page(city.strip(), alert=outcome.message)

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.get("/api/recent")
    def recent_searches() -> Dict[str, Any]:
        entries = app.state.orchestrator.store.entries()
        return {
            "recent": [entry.to_dict() for entry in entries],
            "count": len(entries),
        }

    @app.post("/api/search")
    def search_api(payload: SearchRequest) -> Dict[str, Any]:
        outcome = app.state.orchestrator.search(payload.city)
        return _format_outcome(outcome, app.state.orchestrator)

    @app.get("/api/searches/log")
    def search_log(limit: int = Query(20, ge=1, le=500)) -> Dict[str, Any]:
        """Return the newest search log rows for diagnostics."""

        rows = read_search_log(app.state.search_log_path, limit=limit)
        return {"entries": rows, "count": len(rows)}

    return app


if __name__ == "__main__":
    import uvicorn
    from app.config import get_web_ui_host, get_web_ui_port

    configure_logging()
    uvicorn.run(
        "app.web_api:create_app",
        factory=True,
        host=get_web_ui_host(),
        port=get_web_ui_port(),
        reload=False,
    )
