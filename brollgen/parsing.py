"""Recover a JSON array from noisy model output.

Instruct models often prefix their answer with a role label or wrap it in a
markdown fence even when told not to. Everything here is pure so it can be
exercised against captured responses without touching the network.
"""
from __future__ import annotations

import json
import logging
import re

log = logging.getLogger(__name__)

# "Assistant:", "AI:", "<|assistant|>", "[/INST]" and friends at the very start
_ROLE_LABEL_RE = re.compile(
    r"^\s*(?:<\|[a-z_]+\|>(?:\s*assistant\b)?|\[/?INST\]|"
    r"(?:assistant|ai|bot|model|mistral|response|answer)\s*:)\s*",
    re.IGNORECASE,
)
_FENCE_RE = re.compile(r"```[a-zA-Z]*[ \t]*\n?")

_decoder = json.JSONDecoder()


def strip_role_labels(text: str) -> str:
    """Remove any number of leading role labels."""
    previous = None
    while previous != text:
        previous = text
        text = _ROLE_LABEL_RE.sub("", text, count=1)
    return text


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```), keeping their contents."""
    return _FENCE_RE.sub("", text)


def recover_array_text(raw: str) -> str | None:
    """Return the first ``[ ... ]`` span of *raw* that decodes as a JSON array.

    Stray brackets in prose around the answer ("the [10] prompts", "see [3]")
    also decode as arrays, so a span holding only objects wins over the first
    array of anything else.
    """
    if not raw:
        return None
    cleaned = strip_code_fences(strip_role_labels(raw.strip())).strip()

    fallback = None
    idx = cleaned.find("[")
    while idx != -1:
        try:
            value, end = _decoder.raw_decode(cleaned, idx)
        except json.JSONDecodeError:
            idx = cleaned.find("[", idx + 1)
            continue
        if value and all(isinstance(item, dict) for item in value):
            return cleaned[idx:end]
        if fallback is None:
            fallback = cleaned[idx:end]
        idx = cleaned.find("[", end)
    return fallback


def parse_prompt_array(raw: str) -> list | None:
    """Recover and decode the array. ``None`` if there is no usable list."""
    text = recover_array_text(raw)
    if text is None:
        log.debug("No JSON array found in response")
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        log.debug("Recovered array is not valid JSON: %s", e)
        return None
    if not isinstance(data, list):
        return None
    return data
