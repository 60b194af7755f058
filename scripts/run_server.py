"""Serve the recommendation API with uvicorn using configured host and port."""
from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from aiservice.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "aiservice.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
