"""Entry point for running xoboard via ``python -m xoboard``."""

from __future__ import annotations

import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered xoboard web server."""

    host = os.environ.get("XOBOARD_HOST", "0.0.0.0")
    port = int(os.environ.get("XOBOARD_PORT", "8000"))
    log_level = os.environ.get("XOBOARD_LOG_LEVEL", "info").lower()
    uvicorn.run("xoboard.ui:app", host=host, port=port, log_level=log_level, reload=False)


if __name__ == "__main__":
    main()
