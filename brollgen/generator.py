"""B-roll prompt generator with output validation.

Asks a hosted instruct model for a numbered list of b-roll shots tied to lines
of a VSL script, then refuses anything that is not exactly what was asked for:

  1. Build one instruction payload embedding the script and the format rules.
  2. Call the model with a low temperature and stop sequences.
  3. Recover the JSON array from the raw text (role labels, code fences).
  4. Validate count, required fields, camera language and category diversity.
  5. On any failure, spend another attempt, up to ``config.max_attempts``.

Attempts run one after another; each call's outcome decides whether another
is needed. Exhaustion is returned as a :class:`GenerationFailure` value, not
raised.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Protocol, Union

from schemas import GenerationResult

from .config import STOP_SEQUENCES, Config
from .errors import ConfigurationError, InvalidScriptError
from .hf_client import HFClient
from .parsing import parse_prompt_array
from .validation import validate_batch

log = logging.getLogger(__name__)


class ChatClient(Protocol):
    def chat_completion(
        self,
        model: str,
        prompt: str,
        max_tokens: int = ...,
        temperature: float = ...,
        stop: list[str] | None = ...,
    ) -> str: ...


# ---------------------------------------------------------------------------
# Outcome types
# ---------------------------------------------------------------------------

@dataclass
class GenerationSuccess:
    result: GenerationResult

    ok = True


@dataclass
class GenerationFailure:
    error_code: str
    detail: str
    attempts: int
    last_count: int | None = None

    ok = False


GenerationOutcome = Union[GenerationSuccess, GenerationFailure]


# ---------------------------------------------------------------------------
# Instruction payload
# ---------------------------------------------------------------------------

_INSTRUCTION_TEMPLATE = """**TASK**
You will receive a mini VSL (video sales letter) script. Generate {n} visually stunning, cinematic-quality b-roll prompts designed to enhance emotional and persuasive impact, each tightly corresponding to a line in the script.

**CONSTRAINTS**
- Return ONLY a JSON array of exactly {n} objects, in the exact order 1-{n}. Each object has two properties:
  "prompt": a short description of a b-roll shot.
  "scriptReference": the exact line of the script that inspired the shot, copied verbatim.
- Each shot must work as a standalone 5-second video clip.
- Every prompt must use camera language, e.g. "drone shot", "slow-motion close-up", "handheld", "dolly zoom", "tracking shot", "macro", "shallow depth of field".
- Vary the visuals across lifestyle, product, emotional reaction, environment, 3D visualization and metaphor. Use at least {min_categories} of these.
- Ensure direct visual or metaphorical alignment to the script line.
- Do not wrap the JSON in markdown. No text before or after the array.

Example of one element:
{{"prompt": "Slow-motion close-up of a woman smiling as she reads a message in her kitchen", "scriptReference": "<exact script line>"}}

**SCRIPT**:
{script}"""


def build_instruction(script: str, target_count: int, min_categories: int = 3) -> str:
    return _INSTRUCTION_TEMPLATE.format(
        n=target_count,
        min_categories=min_categories,
        script=script,
    )


# ---------------------------------------------------------------------------
# Main generate-validate loop
# ---------------------------------------------------------------------------

def generate_broll_prompts(
    script: str,
    config: Config,
    client: ChatClient | None = None,
    progress_cb: Callable[[str], None] | None = None,
) -> GenerationOutcome:
    """Generate exactly ``config.target_count`` validated prompts for *script*.

    Raises :class:`ConfigurationError` when no client is given and the config
    has no token, and :class:`InvalidScriptError` for a blank script. Neither
    makes a network call. Every other problem consumes an attempt.
    """
    cb = progress_cb or (lambda msg: None)

    if client is None and not config.hf_token:
        raise ConfigurationError("API key not configured")

    text = (script or "").strip()
    if not text:
        raise InvalidScriptError("Script content is required")

    if client is None:
        client = HFClient(token=config.hf_token, timeout=config.request_timeout_sec)

    instruction = build_instruction(text, config.target_count, config.min_categories)
    started = time.monotonic()
    last_count: int | None = None
    last_reason = "no attempt completed"
    attempts = 0

    for attempt in range(1, config.max_attempts + 1):
        if config.deadline_sec and time.monotonic() - started >= config.deadline_sec:
            last_reason = f"deadline of {config.deadline_sec:g}s exceeded"
            log.warning("B-roll generation stopped before attempt %d: %s", attempt, last_reason)
            break

        attempts = attempt
        cb(f"  Attempt {attempt}/{config.max_attempts}: calling {config.model}...")

        try:
            raw = client.chat_completion(
                model=config.model,
                prompt=instruction,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                stop=STOP_SEQUENCES,
            )
        except Exception as e:
            last_reason = f"inference call failed: {e}"
            log.warning("Attempt %d/%d: %s", attempt, config.max_attempts, last_reason)
            cb(f"  ⚠ {last_reason}")
            continue

        log.debug("Attempt %d raw response:\n%s", attempt, raw)

        items = parse_prompt_array(raw)
        if items is None:
            last_reason = "response did not contain a JSON array"
            log.warning("Attempt %d/%d: %s: %.200r", attempt, config.max_attempts, last_reason, raw)
            cb(f"  ⚠ {last_reason}")
            continue

        verdict = validate_batch(
            items,
            target_count=config.target_count,
            min_categories=config.min_categories,
            require_camera_language=config.require_camera_language,
        )
        last_count = verdict.count
        if not verdict.ok:
            last_reason = verdict.reason
            log.warning("Attempt %d/%d rejected: %s", attempt, config.max_attempts, last_reason)
            cb(f"  ⚠ Rejected: {last_reason}")
            continue

        log.info(
            "Generated %d b-roll prompts on attempt %d (categories: %s)",
            verdict.count, attempt, ", ".join(sorted(verdict.categories)),
        )
        cb(f"  ✓ {verdict.count} prompts accepted")
        return GenerationSuccess(GenerationResult(prompts=verdict.prompts, attempts=attempt))

    count_text = "none" if last_count is None else f"{last_count} of {config.target_count}"
    detail = (
        f"No valid result after {attempts} attempt(s); last observed count: {count_text}; "
        f"last failure: {last_reason}"
    )
    log.error("B-roll generation failed: %s", detail)
    return GenerationFailure(
        error_code="generation_exhausted",
        detail=detail,
        attempts=attempts,
        last_count=last_count,
    )
