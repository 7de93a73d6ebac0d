"""Entry point for headless b-roll generation."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _setup_logging() -> None:
    log_dir = Path.home() / ".brollgen"
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_dir / "brollgen.log"),
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_headless(script_text: str, count: int | None = None, as_json: bool = False) -> int:
    """Generate prompts for *script_text*, printing progress to stdout."""
    from .config import Config
    from .errors import BrollError
    from .generator import generate_broll_prompts

    config = Config.load()
    if count is not None:
        if count < 1:
            print("Error: --count must be at least 1", file=sys.stderr)
            return 1
        config.target_count = count

    def progress(msg: str) -> None:
        if not as_json:
            print(msg)

    try:
        outcome = generate_broll_prompts(script_text, config, progress_cb=progress)
    except BrollError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if not outcome.ok:
        print(f"⚠ B-roll generation failed: {outcome.detail}", file=sys.stderr)
        return 1

    result = outcome.result
    if as_json:
        print(json.dumps(result.wire_prompts(), indent=2))
        return 0

    print(f"\n🎬 Generated {result.count} B-roll prompts:")
    for i, shot in enumerate(result.prompts, start=1):
        print(f"\n#{i} {shot.prompt}")
        print(f'   "{shot.script_reference}"')
    return 0


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def main() -> None:
    _setup_logging()

    parser = argparse.ArgumentParser(description="Generate b-roll prompts for a VSL script")
    parser.add_argument("--script", required=True, help="Path to a .txt/.md/.pdf script, or - for stdin")
    parser.add_argument("--count", type=_positive_int, default=None, help="Number of prompts to request")
    parser.add_argument("--json", action="store_true", help="Print the prompts as a JSON array")
    args = parser.parse_args()

    from .errors import BrollError
    from .extract import extract_script_text

    if args.script == "-":
        script_text = sys.stdin.read()
    else:
        path = Path(args.script)
        if not path.exists():
            print(f"Error: no such file: {path}", file=sys.stderr)
            sys.exit(1)
        try:
            script_text = extract_script_text(path.name, path.read_bytes())
        except BrollError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            sys.exit(1)

    sys.exit(run_headless(script_text, count=args.count, as_json=args.json))


if __name__ == "__main__":
    main()
