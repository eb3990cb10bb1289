"""Webmention Forwarder entry point.

Usage: webmention-forwarder [--config config.yaml] [--check]
"""

import argparse
import logging
import sys
from pathlib import Path

from webmention_forwarder.config import ForwardingConfig, load_config
from webmention_forwarder.logging import LOGGER_NAME, configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="webmention-forwarder",
        description="Receive webmentions and forward them as GitHub pull requests",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, set up logging, serve."""
    args = parse_args(argv)

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger(LOGGER_NAME).warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)
    package_log = configure_logging(config.logging)
    log = package_log.getChild("main")

    if args.check:
        forwarding = ForwardingConfig()
        print(
            "Config OK:",
            f"{config.server.host}:{config.server.port}",
            forwarding.repo or "(WEBMENTION_FORWARDER_REPO not set)",
        )
        return 0

    if not ForwardingConfig().repo:
        log.warning("WEBMENTION_FORWARDER_REPO is not set; webmentions will fail until it is")

    from webmention_forwarder.server import WebmentionForwarderApp, run_server

    try:
        run_server(config, WebmentionForwarderApp(log=package_log))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        log.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
