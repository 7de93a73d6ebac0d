"""Acceptance rules for a batch of b-roll prompts."""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from pydantic import ValidationError

from schemas import ShotPrompt

# ---------------------------------------------------------------------------
# Camera language – at least one of these must appear in every prompt
# ---------------------------------------------------------------------------

CAMERA_TERMS: list[str] = [
    r"drone shot",
    r"aerial",
    r"(?:extreme )?close[- ]?up",
    r"slow[- ]motion",
    r"slo[- ]?mo",
    r"handheld",
    r"dolly(?: zoom| in| out)?",
    r"tracking shot",
    r"crane shot",
    r"whip pan",
    r"pan(?:s|ning)?",
    r"tilt(?:s|ing)?",
    r"wide shot",
    r"establishing shot",
    r"medium shot",
    r"overhead",
    r"top[- ]down",
    r"bird'?s[- ]eye",
    r"pov",
    r"point[- ]of[- ]view",
    r"over[- ]the[- ]shoulder",
    r"(?:shallow )?depth of field",
    r"rack focus",
    r"time[- ]?lapse",
    r"push[- ]in",
    r"pull[- ](?:back|out)",
    r"zoom(?:s|ing)?(?: in| out)?",
    r"macro",
    r"low[- ]angle",
    r"high[- ]angle",
    r"steadicam",
    r"gimbal",
]

_CAMERA_RE = re.compile(r"\b(?:" + "|".join(CAMERA_TERMS) + r")\b", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Visual categories – checked in this order, first match wins
# ---------------------------------------------------------------------------

FALLBACK_CATEGORY = "metaphor"

CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "lifestyle": [
        "lifestyle", "family", "friends", "couple", "mother", "father", "mom", "dad",
        "kids", "children", "woman", "man", "person", "people", "home", "kitchen",
        "living room", "jogging", "running", "walking", "cooking", "workout", "gym",
        "office", "desk", "routine",
    ],
    "product": [
        "product", "bottle", "jar", "package", "packaging", "box", "label", "capsule",
        "capsules", "pill", "pills", "supplement", "device", "app", "dashboard",
        "smartphone", "phone", "screen", "unboxing", "logo", "checkout", "cart",
    ],
    "emotional": [
        "emotional", "emotion", "smile", "smiles", "smiling", "laugh", "laughing",
        "tears", "crying", "cries", "relief", "relieved", "joy", "joyful",
        "frustration", "frustrated", "anxious", "anxiety", "worried", "stress",
        "stressed", "reaction", "hug", "hugging", "expression", "face",
    ],
    "environment": [
        "environment", "city", "skyline", "street", "forest", "ocean", "beach",
        "mountain", "mountains", "sunset", "sunrise", "landscape", "nature", "rain",
        "field", "countryside", "desert", "lake", "river", "clouds", "sky",
    ],
    "3d": [
        "3d", "cgi", "render", "rendering", "animation", "animated", "visualization",
        "hologram", "holographic", "molecule", "molecules", "cell", "cells", "diagram",
        "graph", "chart", "infographic", "particles",
    ],
    "metaphor": [
        "metaphor", "symbolic", "symbol", "hourglass", "chains", "key", "door",
        "ladder", "puzzle", "lightbulb", "maze", "compass", "scale", "seed", "bridge",
    ],
}

_CATEGORY_RES: dict[str, re.Pattern] = {
    name: re.compile(r"\b(?:" + "|".join(re.escape(k) for k in words) + r")\b", re.IGNORECASE)
    for name, words in CATEGORY_KEYWORDS.items()
}


def has_camera_language(prompt: str) -> bool:
    return bool(_CAMERA_RE.search(prompt or ""))


def infer_category(prompt: str) -> str:
    """Primary visual category of a prompt, by keyword presence."""
    for name, pattern in _CATEGORY_RES.items():
        if pattern.search(prompt or ""):
            return name
    return FALLBACK_CATEGORY


def _summarize(error: ValidationError) -> str:
    """One line per field: ``scriptReference: Field required``."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'item'}: {err['msg']}"
        for err in error.errors()
    )


@dataclass
class BatchVerdict:
    ok: bool
    count: int
    prompts: list[ShotPrompt] = field(default_factory=list)
    categories: set[str] = field(default_factory=set)
    reason: str = ""


def validate_batch(
    items: list,
    target_count: int,
    min_categories: int = 3,
    require_camera_language: bool = True,
) -> BatchVerdict:
    """Check a decoded array against the acceptance rules.

    Rules, in order: exactly *target_count* elements; each has non-empty
    ``prompt`` and ``scriptReference``; each prompt uses camera language
    (when required); at least *min_categories* distinct visual categories
    across the batch. Returns a verdict rather than raising.
    """
    count = len(items)
    if count != target_count:
        return BatchVerdict(ok=False, count=count, reason=f"expected {target_count} prompts, got {count}")

    prompts: list[ShotPrompt] = []
    for i, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            return BatchVerdict(ok=False, count=count, reason=f"prompt {i} is not an object")
        try:
            prompts.append(ShotPrompt.model_validate(item))
        except ValidationError as e:
            return BatchVerdict(ok=False, count=count, reason=f"prompt {i} is invalid: {_summarize(e)}")

    if require_camera_language:
        for i, shot in enumerate(prompts, start=1):
            if not has_camera_language(shot.prompt):
                return BatchVerdict(
                    ok=False, count=count,
                    reason=f"prompt {i} has no camera language: {shot.prompt[:60]!r}",
                )

    categories = {infer_category(shot.prompt) for shot in prompts}
    if len(categories) < min_categories:
        return BatchVerdict(
            ok=False, count=count, categories=categories,
            reason=(
                f"only {len(categories)} visual categories "
                f"({', '.join(sorted(categories))}), need {min_categories}"
            ),
        )

    return BatchVerdict(ok=True, count=count, prompts=prompts, categories=categories)
