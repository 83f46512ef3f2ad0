#!/usr/bin/env python3
"""
Demo target: deliberately vulnerable file read endpoint.

The handler passes the ``file`` query parameter straight to the filesystem,
so any readable file on the host can be fetched. It exists to exercise the
scanner and must only be run locally.

ATTACK: curl "http://127.0.0.1:8080/read?file=../../../etc/passwd"
"""

import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from traversal_fixer.config import load_settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Vulnerable File Reader",
    description="Intentionally vulnerable demo target for traversal-fixer",
    version="0.1.0",
)


@app.get("/read", response_class=PlainTextResponse)
async def read(file: str = "") -> PlainTextResponse:
    """Return the requested file as plain text. No path validation."""
    if not file:
        raise HTTPException(status_code=400, detail="File path is required")

    # VULNERABLE: user input used as the path
    try:
        with open(file, "rb") as f:
            data = f.read()
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Error reading file: {e}")

    return PlainTextResponse(content=data, media_type="text/plain")


def main() -> None:
    import uvicorn

    settings = load_settings(os.environ, log_level="INFO")
    logging.basicConfig(level=settings.log_level_value)
    logger.warning(
        f"Server running at http://{settings.demo_host}:{settings.demo_port} "
        "(deliberately vulnerable, do not expose)"
    )
    uvicorn.run(app, host=settings.demo_host, port=settings.demo_port)


if __name__ == "__main__":
    main()
