"""Setback Compliance Engine launcher. Starts the API server."""

from __future__ import annotations

import argparse

import uvicorn

from setback_engine.config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the setback compliance API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="auto-reload on code changes")
    args = parser.parse_args()

    print(f"Starting {settings.app_name} on http://{args.host}:{args.port}")
    uvicorn.run(
        "setback_engine.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
