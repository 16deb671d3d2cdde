"""Command-line entry point for the Bold payment relay.

Settings come from the environment (``.env`` supported); ``--host`` and
``--port`` override ``HOST`` and ``PORT``.
"""

import argparse
import dataclasses
import logging

from src.config.settings import RelayConfig
from src.relay_server.server import PaymentRelayServer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bold payment signing and webhook relay")
    parser.add_argument("--host", help="bind host (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="listen port (default: $PORT or 3001)")
    parser.add_argument("--env-file", help="path to a .env file to load")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = RelayConfig.from_env(dotenv_path=args.env_file)
    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if overrides:
        config = dataclasses.replace(config, **overrides)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not config.secret_key:
        logger.warning("BOLD_SECRET_KEY is not set; signing and webhook verification will fail")
    if not config.api_key:
        logger.warning("BOLD_API_KEY is not set; notification lookups are disabled")

    server = PaymentRelayServer(config)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
