"""Serve the latest email over HTTP."""

from __future__ import annotations

import argparse

import uvicorn
from loguru import logger

from inboxview.api.main import create_app
from inboxview.domain.errors import ConfigUnavailableError
from inboxview.infrastructure import configure_logging, load_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the latest email of an IMAP inbox as a web page")
    parser.add_argument("--config", default=None, help="Settings file (default: $INBOXVIEW_CONFIG or ./config.json)")
    parser.add_argument("--log-level", default=None, help="Override the log_level setting")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        settings = load_settings(args.config)
    except ConfigUnavailableError as e:
        logger.error(f"Error loading config: {e}")
        return 1

    if args.log_level is None:
        configure_logging(settings.log_level)

    logger.info(f"Server starting on port {settings.listen_port}")
    uvicorn.run(
        create_app(settings),
        host=settings.listen_host,
        port=settings.listen_port,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
