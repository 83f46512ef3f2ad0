"""Pydantic models for traversal-fixer."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity levels for findings."""

    critical = "critical"
    high = "high"
    medium = "medium"
    low = "low"


class DetectionRule(BaseModel):
    """A scan rule that fires when any of its substrings is present."""

    name: str = Field(description="Rule identifier, e.g. 'path_traversal'")
    substrings: list[str] = Field(description="Literal substrings that trigger the rule")
    severity: Severity = Field(description="Severity level")
    message: str = Field(description="Warning text shown when the rule fires")
    cwe: Optional[str] = Field(default=None, description="CWE identifier, e.g. CWE-22")


class ReplacementRule(BaseModel):
    """A literal find/replace pair offered as a fix."""

    pattern: str = Field(description="Vulnerable substring to look for")
    replacement: str = Field(description="Safer code substituted for every occurrence")


class Finding(BaseModel):
    """A scan warning produced by a detection rule."""

    rule: str = Field(description="Name of the rule that fired")
    severity: Severity = Field(description="Severity level")
    message: str = Field(description="Human-readable warning")
    matched: str = Field(description="First substring of the rule found in the code")
    line: int = Field(description="Line of the first occurrence (1-indexed)")
    cwe: Optional[str] = Field(default=None, description="CWE identifier")


class Candidate(BaseModel):
    """A replacement rule whose pattern occurs in the scanned code."""

    pattern: str = Field(description="Vulnerable substring")
    line: int = Field(description="Line of the first occurrence (1-indexed)")
    occurrences: int = Field(description="Number of occurrences in the code")
    replacement: str = Field(description="Suggested safer code")


class Replacement(BaseModel):
    """A replacement that was actually applied."""

    line: int = Field(description="Line of the first occurrence in the original code")
    before: str = Field(description="Vulnerable substring that was replaced")
    after: str = Field(description="Code it was replaced with")


class FixOutcome(BaseModel):
    """Result of running the replacement pass over a piece of code."""

    code: str = Field(description="Code after all approved replacements")
    replacements: list[Replacement] = Field(
        default_factory=list, description="Applied replacements in rule order"
    )

    @property
    def changed(self) -> bool:
        return bool(self.replacements)


class WriteResult(BaseModel):
    """Result of writing fixed code back to disk."""

    success: bool = Field(description="Whether the write succeeded")
    path: Optional[str] = Field(default=None, description="Path that was written")
    backup_path: Optional[str] = Field(
        default=None, description="Path to backup file if one was created"
    )
    message: str = Field(description="Human-readable result message")


class ScanSummary(BaseModel):
    """Summary counts by severity."""

    critical: int = Field(default=0, description="Number of critical findings")
    high: int = Field(default=0, description="Number of high findings")
    medium: int = Field(default=0, description="Number of medium findings")
    low: int = Field(default=0, description="Number of low findings")
    total: int = Field(default=0, description="Total number of findings")


class ScanRequest(BaseModel):
    """Request body for scanning a piece of code."""

    code: str = Field(description="Source text to scan")


class FixRequest(BaseModel):
    """Request body for fixing a piece of code."""

    code: str = Field(description="Source text to fix")
    approve: Optional[list[str]] = Field(
        default=None,
        description="Vulnerable patterns to replace; null approves every pattern present",
    )


class ScanReport(BaseModel):
    """Response from a scan."""

    scan_id: str = Field(description="Unique identifier for this scan")
    findings: list[Finding] = Field(default_factory=list, description="Scan warnings")
    candidates: list[Candidate] = Field(
        default_factory=list, description="Replacements that could be applied"
    )
    summary: ScanSummary = Field(default_factory=ScanSummary, description="Summary counts")


class FixResponse(BaseModel):
    """Response from a fix run."""

    scan_id: str = Field(description="Unique identifier for this run")
    findings: list[Finding] = Field(default_factory=list, description="Scan warnings")
    code: str = Field(description="Fixed code")
    replacements: list[Replacement] = Field(
        default_factory=list, description="Applied replacements"
    )
    report: list[str] = Field(default_factory=list, description="Replacement report lines")
    dry_run: bool = Field(default=True, description="Whether the result was kept off disk")
    write: Optional[WriteResult] = Field(default=None, description="Write result, if written")


class SandboxInput(BaseModel):
    """Input for the stdin JSON entrypoint."""

    path: Optional[str] = Field(default=None, description="File to scan and fix")
    code: Optional[str] = Field(default=None, description="Inline source text")
    approve: Optional[list[str]] = Field(
        default=None,
        description="Vulnerable patterns to replace; null approves every pattern present",
    )
    dry_run: bool = Field(default=True, description="Preview without writing")
    confirm: bool = Field(
        default=False,
        description="Must be True to write changes (when dry_run is False)",
    )
    output_mode: Literal["in_place", "copy"] = Field(
        default="in_place",
        description="Overwrite the scanned file or write a _fixed sibling",
    )
    backup: bool = Field(default=False, description="Back up the original before overwriting")
