#!/usr/bin/env python3
"""
Sandbox entrypoint for traversal-fixer.
Reads fix parameters from stdin JSON, scans and fixes one file or inline code,
outputs JSON to stdout.
"""

import json
import logging
import os
import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from pydantic import ValidationError

from traversal_fixer.config import load_settings
from traversal_fixer.fixer import apply_approved, format_report, write_source
from traversal_fixer.models import FixResponse, SandboxInput
from traversal_fixer.scanner import read_source, scan_code

logger = logging.getLogger(__name__)

EXAMPLES = {
    "file": {"path": "main.go", "dry_run": False, "confirm": True},
    "inline": {"code": "data, err := os.ReadFile(filePath)"},
    "selective": {"path": "main.go", "approve": ["../"]},
}


def _error(payload: dict) -> int:
    print(json.dumps(payload, indent=2))
    return 1


def run(fix_input: SandboxInput, fixed_suffix: str = "_fixed") -> FixResponse:
    """Scan and fix according to fix_input.

    Raises:
        ValueError: If the file cannot be read or approve names an unknown pattern.
    """
    if fix_input.path:
        code, error = read_source(fix_input.path)
        if error:
            raise ValueError(error)
    else:
        code = fix_input.code or ""

    outcome = apply_approved(code, fix_input.approve)
    response = FixResponse(
        scan_id=str(uuid.uuid4()),
        findings=scan_code(code),
        code=outcome.code,
        replacements=outcome.replacements,
        report=format_report(outcome),
        dry_run=fix_input.dry_run,
    )

    if fix_input.path and not fix_input.dry_run:
        response.write = write_source(
            fix_input.path,
            outcome.code,
            mode=fix_input.output_mode,
            backup=fix_input.backup,
            suffix=fixed_suffix,
        )

    return response


def main() -> int:
    try:
        settings = load_settings(os.environ, log_level="INFO")
    except ValueError as e:
        return _error({"error": str(e)})
    logging.basicConfig(level=settings.log_level_value, stream=sys.stderr)

    try:
        raw = sys.stdin.read()
        fix_input = SandboxInput.model_validate_json(raw or "{}")
    except ValidationError as e:
        return _error({"error": f"Invalid input: {e}", "examples": EXAMPLES})

    if fix_input.path is None and fix_input.code is None:
        return _error(
            {
                "error": "Missing required input. Provide either 'path' (local file) or 'code' (inline source)",
                "examples": EXAMPLES,
            }
        )

    if not fix_input.dry_run and not fix_input.confirm:
        return _error(
            {
                "error": "Must set confirm=true to write changes when dry_run=false",
                "message": "For safety, you must explicitly confirm before files are modified.",
            }
        )

    try:
        response = run(fix_input, fixed_suffix=settings.fixed_suffix)
    except ValueError as e:
        return _error({"error": str(e)})

    print(response.model_dump_json(indent=2))
    if response.write is not None and not response.write.success:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
