"""B-roll generation route."""
from __future__ import annotations

import logging

from litestar import Response, post

from brollgen.config import Config
from brollgen.errors import ConfigurationError
from brollgen.generator import GenerationOutcome, generate_broll_prompts
from brollgen.hf_client import HFClient
from webui.backend.models import GenerateBrollRequest

log = logging.getLogger(__name__)


def get_chat_client(cfg: Config) -> HFClient:
    return HFClient(token=cfg.hf_token, timeout=cfg.request_timeout_sec)


def outcome_to_body(outcome: GenerationOutcome) -> tuple[dict, int]:
    """Render a generation outcome as ``(json_body, status_code)``."""
    if outcome.ok:
        result = outcome.result
        return {
            "success": True,
            "brollPrompts": result.wire_prompts(),
            "promptCount": result.count,
        }, 200
    return {
        "error": "Failed to generate B-roll prompts",
        "details": outcome.detail,
    }, 500


def run_generation(cfg: Config, script: str) -> GenerationOutcome:
    if not cfg.hf_token:
        raise ConfigurationError("API key not configured")
    return generate_broll_prompts(script, cfg, client=get_chat_client(cfg))


@post("/api/generate-broll", status_code=200, sync_to_thread=True)
def generate_broll(data: GenerateBrollRequest) -> Response[dict]:
    cfg = Config.load()
    log.info("Received script (%d chars)", len(data.script or ""))
    outcome = run_generation(cfg, data.script or "")
    body, status = outcome_to_body(outcome)
    return Response(content=body, status_code=status)
