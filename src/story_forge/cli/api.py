"""CLI entrypoint for serving the story_forge HTTP API."""

from __future__ import annotations

import argparse
import os

import uvicorn

from story_forge.adapters.observability import configure_runtime_logging


def build_arg_parser() -> argparse.ArgumentParser:
    """Create CLI args for the local API server process."""
    parser = argparse.ArgumentParser(description="Serve story_forge API.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument(
        "--max-sessions",
        type=int,
        default=0,
        help="Live stories kept in memory before the oldest is evicted (default: 256).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI flags and start uvicorn with the app factory path."""
    configure_runtime_logging()
    parser = build_arg_parser()
    parsed = parser.parse_args(argv)
    if int(parsed.max_sessions) > 0:
        os.environ["STORY_FORGE_MAX_SESSIONS"] = str(int(parsed.max_sessions))
    uvicorn.run(
        "story_forge.api.app:app",
        host=str(parsed.host),
        port=int(parsed.port),
        reload=bool(parsed.reload),
    )


if __name__ == "__main__":
    main()
