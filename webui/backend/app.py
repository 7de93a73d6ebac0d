"""Litestar ASGI application: B-roll Web API."""
from __future__ import annotations

import logging

from litestar import Litestar, Request, Response
from litestar.config.cors import CORSConfig
from litestar.logging import LoggingConfig

from brollgen.errors import BrollError
from webui.backend.routes.broll import generate_broll
from webui.backend.routes.config import get_config, save_config
from webui.backend.routes.projects import create_project, get_project, list_projects

log = logging.getLogger(__name__)


def _broll_error_handler(request: Request, exc: BrollError) -> Response:
    """Render domain errors as ``{"error": ..., "details": ...}``."""
    log.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return Response(content=exc.to_dict(), status_code=exc.status_code)


app = Litestar(
    route_handlers=[
        generate_broll,
        create_project,
        list_projects,
        get_project,
        get_config,
        save_config,
    ],
    exception_handlers={BrollError: _broll_error_handler},
    cors_config=CORSConfig(
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-User-Id"],
    ),
    logging_config=LoggingConfig(
        loggers={
            "brollgen": {"level": "INFO", "handlers": ["queue_listener"]},
            "webui": {"level": "INFO", "handlers": ["queue_listener"]},
        }
    ),
)
