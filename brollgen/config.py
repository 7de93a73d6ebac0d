"""Settings and API key management."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR = Path.home() / ".brollgen"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Text generation
# Mistral-7B-Instruct: free tier on the HF Inference API, follows JSON instructions well enough
DEFAULT_MODEL = "mistralai/Mistral-7B-Instruct-v0.3"
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.3  # low randomness

# Cut run-on output once the model starts a new turn
STOP_SEQUENCES = ["</s>", "[INST]", "\n\n\n"]

# B-roll batch
DEFAULT_TARGET_COUNT = 10
DEFAULT_MIN_CATEGORIES = 3

# Retry
MAX_ATTEMPTS = 3
REQUEST_TIMEOUT = 60   # seconds per inference call
OVERALL_DEADLINE = 180  # seconds across all attempts


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass
class Config:
    hf_token: str = ""
    model: str = DEFAULT_MODEL
    target_count: int = DEFAULT_TARGET_COUNT
    max_attempts: int = MAX_ATTEMPTS
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    request_timeout_sec: float = REQUEST_TIMEOUT
    deadline_sec: float = OVERALL_DEADLINE
    min_categories: int = DEFAULT_MIN_CATEGORIES
    require_camera_language: bool = True
    data_dir: Path = field(default_factory=lambda: CONFIG_DIR)

    @classmethod
    def load(cls) -> "Config":
        """Load config from the config file, then let env vars override it."""
        cfg = cls()

        if CONFIG_FILE.exists():
            try:
                data = json.loads(CONFIG_FILE.read_text(encoding="utf-8-sig"))
                cfg.hf_token = data.get("hf_token", "")
                if model := data.get("model"):
                    cfg.model = model
                if data.get("target_count") is not None:
                    cfg.target_count = int(data["target_count"])
                if data.get("max_attempts") is not None:
                    cfg.max_attempts = int(data["max_attempts"])
                if data.get("temperature") is not None:
                    cfg.temperature = float(data["temperature"])
                if data.get("min_categories") is not None:
                    cfg.min_categories = int(data["min_categories"])
                if data.get("require_camera_language") is not None:
                    cfg.require_camera_language = bool(data["require_camera_language"])
                if out := data.get("data_dir"):
                    cfg.data_dir = Path(out)
            except (json.JSONDecodeError, OSError, TypeError, ValueError):
                pass

        # Env var takes priority
        token = os.environ.get("HUGGINGFACE_API_KEY", "") or os.environ.get("HF_TOKEN", "")
        if token:
            cfg.hf_token = token
        cfg.model = os.environ.get("BROLLGEN_MODEL", "") or cfg.model
        cfg.target_count = _env_int("BROLLGEN_TARGET_COUNT", cfg.target_count)
        cfg.max_attempts = _env_int("BROLLGEN_MAX_ATTEMPTS", cfg.max_attempts)
        cfg.temperature = _env_float("BROLLGEN_TEMPERATURE", cfg.temperature)
        cfg.max_tokens = _env_int("BROLLGEN_MAX_TOKENS", cfg.max_tokens)
        cfg.request_timeout_sec = _env_float("BROLLGEN_TIMEOUT_SEC", cfg.request_timeout_sec)
        cfg.deadline_sec = _env_float("BROLLGEN_DEADLINE_SEC", cfg.deadline_sec)
        cfg.min_categories = _env_int("BROLLGEN_MIN_CATEGORIES", cfg.min_categories)
        cfg.require_camera_language = _env_bool(
            "BROLLGEN_REQUIRE_CAMERA_LANGUAGE", cfg.require_camera_language
        )
        if data_dir := os.environ.get("BROLLGEN_DATA_DIR"):
            cfg.data_dir = Path(data_dir)
        return cfg

    def save(self) -> None:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "hf_token": self.hf_token,
            "model": self.model,
            "target_count": self.target_count,
            "max_attempts": self.max_attempts,
            "temperature": self.temperature,
            "min_categories": self.min_categories,
            "require_camera_language": self.require_camera_language,
            "data_dir": str(self.data_dir),
        }
        CONFIG_FILE.write_text(json.dumps(data, indent=2))
