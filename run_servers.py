"""
Main entry point for running the shop/customer MCP server and client.

This script provides commands to:
- Run the MCP server (stdio or streamable HTTP)
- Run the demo client against a server
- Write the sample fixture files
"""

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def check_data(settings) -> None:
    """Check that the fixture files exist, write sample data if not."""
    from shop_mcp.store.fixture_setup import FixtureSetup

    setup = FixtureSetup(settings.data_dir)
    if setup.store.exists():
        logger.info("Fixtures found: %s", settings.data_dir)
        return
    logger.info("Fixtures not found in %s. Initializing...", settings.data_dir)
    setup.insert_sample_data()
    setup.verify_data()


def run_mcp_server(settings, transport: str = "stdio", host: str = "0.0.0.0", port: int = 8080):
    """Run the MCP server."""
    from shop_mcp.mcp.mcp_server import run_server, run_http_server

    check_data(settings)
    if transport == "stdio":
        # stdout carries the protocol; only stderr is safe for messages
        logger.info("Starting MCP server with stdio transport...")
        run_server(settings)
    elif transport == "http":
        logger.info("Starting MCP server with HTTP transport at http://%s:%d/mcp", host, port)
        run_http_server(settings, host=host, port=port)
    else:
        logger.error("Unknown transport: %s. Use 'stdio' or 'http'", transport)
        sys.exit(1)


def run_client(settings, url=None, stdio: bool = False):
    """Run the demo client against an HTTP server or a spawned stdio server."""
    from shop_mcp.mcp.mcp_client import MCPClient, run_demo

    if stdio:
        client = MCPClient(server_command=[sys.executable, __file__, "mcp"])
    else:
        client = MCPClient(base_url=url or settings.server_url)

    try:
        run_demo(client)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


def seed_data(settings, overwrite: bool = False):
    """Write the sample fixture files."""
    from shop_mcp.store.fixture_setup import FixtureSetup

    setup = FixtureSetup(settings.data_dir)
    if setup.insert_sample_data(overwrite=overwrite):
        counts = setup.verify_data()
        print(f"Fixtures written to {settings.data_dir}: {counts}")
    else:
        print(f"Fixtures already present in {settings.data_dir} (use --overwrite to replace)")


def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Run the shop/customer MCP server or its demo client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run MCP server with stdio (for MCP clients like Claude)
  python run_servers.py mcp

  # Run MCP server with HTTP transport
  python run_servers.py mcp --transport http --port 8080

  # Run the demo client against the HTTP server
  python run_servers.py client --url http://localhost:8080/mcp

  # Run the demo client against a freshly spawned stdio server
  python run_servers.py client --stdio

  # Reset the fixture files
  python run_servers.py seed --overwrite
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # MCP server command
    mcp_parser = subparsers.add_parser("mcp", help="Run the MCP server")
    mcp_parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport type (default: stdio)"
    )
    mcp_parser.add_argument("--host", default=None, help="Host for HTTP transport")
    mcp_parser.add_argument("--port", type=int, default=None, help="Port for HTTP transport")

    # Client command
    client_parser = subparsers.add_parser("client", help="Run the demo client")
    client_parser.add_argument("--url", default=None, help="MCP server URL (default: MCP_SERVER_URL)")
    client_parser.add_argument("--stdio", action="store_true", help="Spawn a stdio server instead")

    # Seed command
    seed_parser = subparsers.add_parser("seed", help="Write sample fixture files")
    seed_parser.add_argument("--overwrite", action="store_true", help="Replace existing files")

    args = parser.parse_args()

    from shop_mcp.config import Settings, configure_logging

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)
    configure_logging(settings.log_level)

    if args.command == "mcp":
        run_mcp_server(
            settings,
            transport=args.transport,
            host=args.host or settings.host,
            port=args.port or settings.port,
        )
    elif args.command == "client":
        run_client(settings, url=args.url, stdio=args.stdio)
    elif args.command == "seed":
        seed_data(settings, overwrite=args.overwrite)
    else:
        parser.print_help()
        print("\nNo command specified. Use one of: mcp, client, seed")
        sys.exit(1)


if __name__ == "__main__":
    main()
