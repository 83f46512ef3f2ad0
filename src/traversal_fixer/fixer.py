"""Literal find/replace remediation and write-back of fixed source files."""

import logging
import shutil
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path
from typing import Literal

from .models import FixOutcome, Replacement, ReplacementRule, WriteResult
from .patterns import REPLACEMENT_RULES, REPLACEMENTS_BY_PATTERN
from .scanner import find_line_number

logger = logging.getLogger(__name__)

OutputMode = Literal["in_place", "copy"]

# Called once per pattern present in the code with (rule, first_line);
# returns True to replace every occurrence of the pattern.
ConfirmFunc = Callable[[ReplacementRule, int], bool]


def replace_vulnerabilities(code: str, confirm: ConfirmFunc) -> FixOutcome:
    """Offer each replacement rule whose pattern occurs in code.

    Presence and line numbers are always taken from the original code, while
    approved replacements are applied cumulatively to the modified code.

    Args:
        code: Original source text.
        confirm: Decision callback, asked once per present pattern.

    Returns:
        FixOutcome with the modified code and the applied replacements.
    """
    modified = code
    replacements: list[Replacement] = []

    for rule in REPLACEMENT_RULES:
        if rule.pattern not in code:
            continue
        line_num = find_line_number(code, rule.pattern)
        if not confirm(rule, line_num):
            logger.info(f"Replacement of {rule.pattern!r} declined")
            continue
        modified = modified.replace(rule.pattern, rule.replacement)
        replacements.append(
            Replacement(line=line_num, before=rule.pattern, after=rule.replacement)
        )
        logger.info(f"Replaced {rule.pattern!r} (first seen on line {line_num})")

    return FixOutcome(code=modified, replacements=replacements)


def apply_approved(code: str, approved: Iterable[str] | None = None) -> FixOutcome:
    """Non-interactive replacement pass.

    Args:
        code: Original source text.
        approved: Patterns to replace. None approves every pattern.

    Raises:
        ValueError: If approved names a pattern that has no replacement rule.
    """
    if approved is None:
        return replace_vulnerabilities(code, lambda rule, line: True)

    approved = set(approved)
    unknown = sorted(approved - REPLACEMENTS_BY_PATTERN.keys())
    if unknown:
        raise ValueError(f"Unknown patterns: {', '.join(unknown)}")
    return replace_vulnerabilities(code, lambda rule, line: rule.pattern in approved)


def format_report(outcome: FixOutcome) -> list[str]:
    """Build the replacement report lines for an outcome."""
    if not outcome.replacements:
        return ["No replacements made."]

    lines = []
    for index, item in enumerate(outcome.replacements, start=1):
        lines.append(f"Replacement {index}:")
        lines.append(f"  Before Replacement: `{item.before}` (Line {item.line})")
        lines.append(f"  After Replacement: `{item.after}`")
    return lines


def fixed_copy_path(file_path: str | Path, suffix: str = "_fixed") -> Path:
    """Return the sibling path used in copy mode, e.g. main.go -> main_fixed.go."""
    file_path = Path(file_path)
    return file_path.with_name(f"{file_path.stem}{suffix}{file_path.suffix}")


def _get_backup_path(file_path: str | Path) -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{file_path}.backup.{timestamp}"


def write_source(
    file_path: str | Path,
    content: str,
    mode: OutputMode = "in_place",
    backup: bool = False,
    suffix: str = "_fixed",
) -> WriteResult:
    """Write fixed code back to disk.

    Args:
        file_path: The scanned file.
        content: Code to write.
        mode: "in_place" overwrites file_path, "copy" writes a suffixed sibling.
        backup: Copy the original aside before an in-place overwrite.
        suffix: Stem suffix for copy mode.

    Returns:
        WriteResult indicating success or failure.
    """
    file_path = Path(file_path)
    target = file_path if mode == "in_place" else fixed_copy_path(file_path, suffix)

    backup_path = None
    if backup and mode == "in_place" and file_path.exists():
        backup_path = _get_backup_path(file_path)
        try:
            shutil.copy2(file_path, backup_path)
        except OSError as e:
            return WriteResult(
                success=False,
                path=None,
                backup_path=None,
                message=f"Failed to backup {file_path}: {str(e)}",
            )
        logger.info(f"Backed up {file_path} to {backup_path}")

    try:
        with open(target, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except PermissionError:
        return WriteResult(
            success=False,
            path=None,
            backup_path=backup_path,
            message=f"Permission denied writing to {target}",
        )
    except OSError as e:
        return WriteResult(
            success=False,
            path=None,
            backup_path=backup_path,
            message=f"Error writing {target}: {str(e)}",
        )

    logger.info(f"Wrote {len(content)} characters to {target}")
    return WriteResult(
        success=True,
        path=str(target),
        backup_path=backup_path,
        message=f"File has been updated at: {target}",
    )
