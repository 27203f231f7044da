"""Command line entry point: serve the chat app with uvicorn."""

import argparse
from pathlib import Path

import uvicorn

from huddle.config.settings import get_settings

SRC_DIR = Path(__file__).resolve().parent.parent


def main(argv=None):
    """Start the chat service with uvicorn."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Huddle chat service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on source changes")
    args = parser.parse_args(argv)

    print(f"Starting {settings.service_name} on {args.host}:{args.port}")

    uvicorn.run(
        "huddle.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=[str(SRC_DIR)] if args.reload else None,
        log_level=settings.log_level.lower(),
    )
