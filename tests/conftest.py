import json

import pytest

import brollgen.config as config_module
from brollgen.config import Config

SCRIPT = """Tired of waking up exhausted?
Thousands of people feel the same way every single morning.
Our formula was built by sleep scientists.
Imagine finally feeling rested.
Try it risk-free today."""

GOOD_PROMPTS = [
    "Slow-motion close-up of a woman laughing at her kitchen table",
    "Drone shot sweeping over a city skyline at sunrise",
    "Macro shot of the supplement bottle turning on a white pedestal",
    "Handheld shot of tears of relief rolling down a cheek",
    "3D animation of molecules entering a cell, slow dolly in",
    "Tracking shot of an hourglass draining its last grains of sand",
    "Overhead shot of a family sharing breakfast at home",
    "Dolly zoom on a frustrated face staring at a pile of bills",
    "Time-lapse of clouds racing across a mountain landscape",
    "Low-angle shot of a key turning in a heavy door",
]

TWO_CATEGORY_PROMPTS = [
    "Handheld shot of a man cooking dinner at home",
    "Overhead shot of a couple walking their dog",
    "Tracking shot of kids running down a hallway",
    "Wide shot of people working in a bright office",
    "Slow-motion shot of a person stretching before a workout",
    "Macro shot of the product label",
    "Close-up of a phone screen showing the app",
    "Dolly in on the bottle on a marble counter",
    "Top-down shot of an unboxing on a wooden table",
    "Pan across the packaging lined up on a shelf",
]

NO_CAMERA_PROMPTS = [
    "A woman reads a letter at home",
    "The city glows at night",
    "A bottle sits on a shelf",
    "Tears on a cheek",
    "A 3D cell divides",
    "An hourglass runs out",
    "A family eats dinner",
    "Sunlight over a lake",
    "A phone buzzes on a desk",
    "A key opens a door",
]


def make_batch(prompts: list[str]) -> list[dict]:
    lines = SCRIPT.splitlines()
    return [
        {"prompt": p, "scriptReference": lines[i % len(lines)]}
        for i, p in enumerate(prompts)
    ]


def make_response(prompts: list[str]) -> str:
    return json.dumps(make_batch(prompts))


class FakeClient:
    """Stands in for HFClient; replays canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[dict] = []

    def chat_completion(self, model, prompt, max_tokens=2000, temperature=0.3, stop=None):
        self.calls.append({
            "model": model, "prompt": prompt, "max_tokens": max_tokens,
            "temperature": temperature, "stop": stop,
        })
        item = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from ~/.brollgen and the real credentials."""
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config" / "config.json")
    for name in (
        "HUGGINGFACE_API_KEY", "HF_TOKEN", "BROLLGEN_MODEL", "BROLLGEN_TARGET_COUNT",
        "BROLLGEN_MAX_ATTEMPTS", "BROLLGEN_TEMPERATURE", "BROLLGEN_MAX_TOKENS",
        "BROLLGEN_TIMEOUT_SEC", "BROLLGEN_DEADLINE_SEC", "BROLLGEN_MIN_CATEGORIES",
        "BROLLGEN_REQUIRE_CAMERA_LANGUAGE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BROLLGEN_DATA_DIR", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def config(tmp_path):
    return Config(hf_token="hf_test_token", data_dir=tmp_path / "data")
