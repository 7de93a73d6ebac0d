"""Config read/write routes."""
from __future__ import annotations

from litestar import get, post

from brollgen.config import Config
from webui.backend.models import ConfigPayload


@get("/api/config")
async def get_config() -> ConfigPayload:
    cfg = Config.load()
    return ConfigPayload(
        # Mask secret keys, show only first/last 4 chars
        hf_token=_mask(cfg.hf_token),
        model=cfg.model,
        target_count=cfg.target_count,
        max_attempts=cfg.max_attempts,
        temperature=cfg.temperature,
        min_categories=cfg.min_categories,
        require_camera_language=cfg.require_camera_language,
    )


@post("/api/config", status_code=200)
async def save_config(data: ConfigPayload) -> dict:
    cfg = Config.load()
    # Only update secrets if the user sent a non-masked value
    if data.hf_token and "…" not in data.hf_token:
        cfg.hf_token = data.hf_token
    cfg.model = data.model
    cfg.target_count = data.target_count
    cfg.max_attempts = data.max_attempts
    cfg.temperature = data.temperature
    cfg.min_categories = data.min_categories
    cfg.require_camera_language = data.require_camera_language
    cfg.save()
    return {"ok": True}


def _mask(value: str) -> str:
    if not value:
        return ""
    return value[:4] + "…" + value[-4:] if len(value) > 8 else "…"
