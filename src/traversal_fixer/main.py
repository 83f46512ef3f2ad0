"""FastAPI application for scanning and fixing unsafe file access patterns."""

import logging
import os
import uuid

from fastapi import FastAPI, HTTPException

from .config import load_settings
from .fixer import apply_approved, format_report
from .models import FixRequest, FixResponse, ScanReport, ScanRequest
from .scanner import find_candidates, scan_code, summarize

settings = load_settings(os.environ, log_level="INFO")

# Configure logging
logging.basicConfig(level=settings.log_level_value)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Traversal Fixer",
    description="Detects and replaces path traversal and arbitrary file read patterns in source code",
    version="0.1.0",
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/scan", response_model=ScanReport)
async def scan(request: ScanRequest) -> ScanReport:
    """
    Scan source text for unsafe file access patterns.

    - **code**: the source text to scan
    """
    findings = scan_code(request.code)
    logger.info(f"Scanned {len(request.code)} characters: {len(findings)} finding(s)")
    return ScanReport(
        scan_id=str(uuid.uuid4()),
        findings=findings,
        candidates=find_candidates(request.code),
        summary=summarize(findings),
    )


@app.post("/fix", response_model=FixResponse)
async def fix(request: FixRequest) -> FixResponse:
    """
    Replace unsafe file access patterns with safer code.

    - **code**: the source text to fix
    - **approve**: patterns to replace (omit or null to replace every pattern found)
    """
    try:
        outcome = apply_approved(request.code, request.approve)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Applied {len(outcome.replacements)} replacement(s)")
    return FixResponse(
        scan_id=str(uuid.uuid4()),
        findings=scan_code(request.code),
        code=outcome.code,
        replacements=outcome.replacements,
        report=format_report(outcome),
        dry_run=True,
    )
