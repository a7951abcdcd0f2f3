"""Command-line entrypoint: serve the API with uvicorn."""

from __future__ import annotations

import argparse
import os

import uvicorn


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="HomeScout Insights API server")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    parser.add_argument(
        "--log-level",
        help="Override LOG_LEVEL for this invocation (e.g. DEBUG, INFO)",
    )
    args = parser.parse_args(argv)

    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level

    # log_config=None keeps the JSON handler installed by create_app()
    uvicorn.run(
        "homescout.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
