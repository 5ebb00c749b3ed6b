"""Command-line entry point for the notes API server."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

import uvicorn


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Notes API server")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for the API")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "3000")),
        help="Port for the HTTP API (default: $PORT or 3000)",
    )
    parser.add_argument("--reload", action="store_true", help="Restart the server when source files change")
    return parser.parse_args(list(argv) if argv is not None else sys.argv[1:])


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    uvicorn.run(
        "notes_api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
