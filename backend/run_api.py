#!/usr/bin/env python
"""
Start the DigitalPro storefront API under uvicorn.

Usage:
    python run_api.py
    python run_api.py --reload              # Development mode
    python run_api.py --storage memory      # No Supabase needed

Product archives are served from UPLOADS_DIR, which is created if missing.
"""

import argparse
import logging
import os
from typing import Optional

import uvicorn

from shared.config import get_settings

logger = logging.getLogger("run_api")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the DigitalPro storefront API")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--host", type=str, help="Interface to bind (default: HOST setting)")
    parser.add_argument("--port", type=int, help="Port to bind (default: PORT setting)")
    parser.add_argument(
        "--storage",
        choices=["supabase", "memory"],
        help="Override STORAGE_BACKEND for this run",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.storage:
        # The app reads settings from the environment, including under --reload
        os.environ["STORAGE_BACKEND"] = args.storage
        get_settings.cache_clear()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Serving product archives from %s", settings.uploads_dir.resolve())

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
