"""Command-line entry point: ``python -m activity_verifier``."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from activity_verifier.config import attestation_config_from_env
from activity_verifier.config import github_config_from_env
from activity_verifier.config import log_level_from_env
from activity_verifier.config import server_config_from_env
from activity_verifier.server import configure
from activity_verifier.server import mcp

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve the GitHub activity verifier over MCP and HTTP."
    )
    parser.add_argument(
        "--transport",
        choices=("http", "stdio"),
        default="http",
        help="MCP transport (default: http).",
    )
    parser.add_argument("--host", help="Bind host; overrides HOST.")
    parser.add_argument("--port", type=int, help="Bind port; overrides PORT.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    load_dotenv()
    logging.basicConfig(
        level=log_level_from_env(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    github_config = github_config_from_env()
    attestation_config = attestation_config_from_env()
    server_config = server_config_from_env()

    if attestation_config.endpoint:
        logger.info("MAA endpoint configured: %s", attestation_config.endpoint)
    else:
        logger.warning(
            "MAA_ENDPOINT not set; successful verifications will not be attested"
        )

    configure(github_config=github_config, attestation_config=attestation_config)

    if args.transport == "stdio":
        logger.info("Starting GitHub Activity Verifier on stdio")
        mcp.run(transport="stdio")
        return

    host = args.host or server_config.host
    port = args.port or server_config.port
    logger.info("Starting GitHub Activity Verifier on %s:%d", host, port)
    mcp.run(transport="http", host=host, port=port)


if __name__ == "__main__":
    main()
