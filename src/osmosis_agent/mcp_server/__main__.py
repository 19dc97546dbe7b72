"""Entry point for running the MCP server: python -m osmosis_agent.mcp_server"""

# Load .env file before importing anything else
from dotenv import load_dotenv
load_dotenv()

import argparse
import logging
import sys
from typing import Optional

from osmosis_agent.config import get_settings
from osmosis_agent.mcp_server.server import create_server
from osmosis_agent.toolkit import OsmosisAgentToolkit

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Osmosis agent MCP server (stdio)")
    parser.add_argument(
        "--mnemonic",
        help="BIP-39 seed phrase (default: OSMOSIS_MNEMONIC environment variable)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    """Run the MCP server on stdio."""
    args = parse_args(argv)
    settings = get_settings()

    # stdout carries MCP frames; logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    mnemonic = args.mnemonic or settings.mnemonic
    if not mnemonic:
        logger.error(
            "Osmosis mnemonic not provided. Please either pass it as an argument "
            "--mnemonic=$MNEMONIC or set the OSMOSIS_MNEMONIC environment variable."
        )
        sys.exit(1)

    try:
        toolkit = OsmosisAgentToolkit(mnemonic, settings=settings)
    except Exception as e:
        logger.error(f"Error initializing Osmosis MCP server: {e}")
        sys.exit(1)

    create_server(toolkit).run(transport="stdio")


if __name__ == "__main__":
    main()
