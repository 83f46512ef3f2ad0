"""Substring scanning for unsafe file access patterns."""

import logging
from pathlib import Path
from typing import Optional

from .models import Candidate, Finding, ScanSummary, Severity
from .patterns import DETECTION_RULES, REPLACEMENT_RULES

logger = logging.getLogger(__name__)


def read_source(file_path: str | Path) -> tuple[str, Optional[str]]:
    """Read a source file with friendly errors.

    Returns:
        Tuple of (content, error). On failure content is "" and error is set.
    """
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8", newline="") as handle:
            content = handle.read()
    except FileNotFoundError:
        return "", f"File not found: {file_path}"
    except IsADirectoryError:
        return "", f"Path is a directory: {file_path}"
    except PermissionError:
        return "", f"Permission denied: {file_path}"
    except UnicodeDecodeError:
        return "", f"File is not valid UTF-8 text: {file_path}"
    except OSError as exc:
        return "", f"Failed to read file: {file_path} ({exc})"

    logger.info(f"Read {len(content)} characters from {file_path}")
    return content, None


def find_line_number(code: str, pattern: str) -> int:
    """Return the 1-indexed line of the first occurrence of pattern, or -1."""
    for line_num, line in enumerate(code.split("\n"), start=1):
        if pattern in line:
            return line_num
    return -1


def scan_code(code: str) -> list[Finding]:
    """Run every detection rule over code.

    Each rule contributes at most one finding, located at the first line that
    contains the first of its substrings present in the code.
    """
    findings = []
    for rule in DETECTION_RULES:
        matched = next((s for s in rule.substrings if s in code), None)
        if matched is None:
            continue
        findings.append(
            Finding(
                rule=rule.name,
                severity=rule.severity,
                message=rule.message,
                matched=matched,
                line=find_line_number(code, matched),
                cwe=rule.cwe,
            )
        )
    return findings


def find_candidates(code: str) -> list[Candidate]:
    """List the replacement rules whose pattern occurs in code."""
    return [
        Candidate(
            pattern=rule.pattern,
            line=find_line_number(code, rule.pattern),
            occurrences=code.count(rule.pattern),
            replacement=rule.replacement,
        )
        for rule in REPLACEMENT_RULES
        if rule.pattern in code
    ]


def summarize(findings: list[Finding]) -> ScanSummary:
    """Count findings by severity."""
    summary = ScanSummary(total=len(findings))
    for finding in findings:
        if finding.severity == Severity.critical:
            summary.critical += 1
        elif finding.severity == Severity.high:
            summary.high += 1
        elif finding.severity == Severity.medium:
            summary.medium += 1
        elif finding.severity == Severity.low:
            summary.low += 1
    return summary


def format_warning(finding: Finding) -> str:
    return f"[WARNING] {finding.message}"
