"""
MCP (Model Context Protocol) Module.

Server and client for the shop/customer fixtures, built on the official
`mcp` SDK.

### MCP Server
Run over stdio (for Claude Desktop and other MCP clients):
    python run_servers.py mcp

Run over streamable HTTP:
    python run_servers.py mcp --transport http --port 8080

Or build one in-process:
    from shop_mcp.mcp import create_server
    server = create_server()

### MCP Client
    from shop_mcp.mcp import MCPClient

    client = MCPClient("http://localhost:8080")
    shops = client.get_shops()
    summary = client.compute_customer_expenses(1)
"""

from .mcp_server import (
    # MCP Server
    SERVER_NAME,
    create_server,
    run_server,
    run_http_server,
)

# MCP Client (protocol-compliant)
from .mcp_client import MCPClient, MCPError, MCPToolError, get_mcp_client, run_demo

__all__ = [
    # MCP Server
    "SERVER_NAME",
    "create_server",
    "run_server",
    "run_http_server",
    # MCP Client
    "MCPClient",
    "MCPError",
    "MCPToolError",
    "get_mcp_client",
    "run_demo",
]
