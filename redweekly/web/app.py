"""FastAPI web application for redweekly.

``GET /`` serves the report form; ``POST /`` generates a report for the
caller-supplied Redmine key and answers in plain text.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field

from redweekly.core.config import RedweeklyConfig, load_config
from redweekly.core.factory import build_report_service
from redweekly.core.window import resolve_window
from redweekly.errors import InvalidWindow, ReportError

logger = logging.getLogger(__name__)


class ReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(min_length=1)
    from_date: str | None = Field(default=None, alias="from")
    to_date: str | None = Field(default=None, alias="to")
    user: str | None = None


def create_app(*, config: RedweeklyConfig | None = None) -> FastAPI:
    cfg = config if config is not None else load_config()
    app = FastAPI(title="redweekly", docs_url=None, redoc_url=None)
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    app.state.config = cfg

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"redmine_base": cfg.redmine.base_url},
        )

    @app.post("/", response_class=PlainTextResponse)
    def generate_report(body: ReportRequest) -> PlainTextResponse:
        try:
            window = resolve_window(body.from_date, body.to_date, now=datetime.now().astimezone())
        except InvalidWindow as exc:
            return PlainTextResponse(str(exc), status_code=400)

        service = build_report_service(cfg, api_key=body.key)
        try:
            result = service.generate(user_id=body.user or cfg.redmine.user_id, window=window)
        except ReportError as exc:
            logger.warning("report generation failed: %s", exc)
            return PlainTextResponse(str(exc), status_code=502)

        return PlainTextResponse(result.text)

    return app
