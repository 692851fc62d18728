"""
MCP Client for the shop/customer server.

Uses the official MCP Python SDK for session management over either
transport:
- streamable HTTP, for a server started with `run_servers.py mcp --transport http`
- stdio, spawning the server as a subprocess

Resource and prompt failures arrive as JSON-RPC errors and are raised as
MCPError. Tool failures arrive as results with isError set and are raised
as MCPToolError.
"""

import asyncio
import json
import os
from typing import Any, Dict, List, Optional, Sequence

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import streamablehttp_client
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from shop_mcp.config import DEFAULT_MCP_URL


class MCPClient:
    """
    MCP Client that talks to the shop/customer server using the official MCP SDK.

    Every call opens a session, initializes it, performs one request and
    closes it again.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_MCP_URL,
        server_command: Optional[Sequence[str]] = None,
    ):
        """
        Initialize the MCP client.

        Args:
            base_url: URL of the MCP server endpoint (default: http://localhost:8080/mcp)
            server_command: Command line that starts a stdio server. When given,
                the client spawns it instead of connecting over HTTP.
        """
        self.url = base_url.rstrip("/")
        if not self.url.endswith("/mcp"):
            self.url = f"{self.url}/mcp"
        self.server_command = list(server_command) if server_command else None
        self._tools_cache: Optional[List[Dict[str, Any]]] = None
        self.server_info: Optional[Dict[str, Any]] = None

    @property
    def base_url(self) -> str:
        """Return base URL for compatibility."""
        return self.url.rsplit("/mcp", 1)[0]

    @property
    def transport(self) -> str:
        return "stdio" if self.server_command else "http"

    async def _run_session(self, callback):
        """
        Run a callback within an MCP session.

        Args:
            callback: Async function that takes a ClientSession

        Returns:
            Result from the callback
        """
        try:
            if self.server_command:
                # The spawned server reads SHOP_MCP_* settings from our environment
                params = StdioServerParameters(
                    command=self.server_command[0],
                    args=self.server_command[1:],
                    env=dict(os.environ),
                )
                async with stdio_client(params) as (read_stream, write_stream):
                    return await self._in_session(read_stream, write_stream, callback)
            async with streamablehttp_client(self.url) as (read_stream, write_stream, _):
                return await self._in_session(read_stream, write_stream, callback)
        except Exception as e:
            # Transport task groups may wrap our errors in an ExceptionGroup
            error = _find_client_error(e)
            if error is None or error is e:
                raise
            raise error from e

    async def _in_session(self, read_stream, write_stream, callback):
        async with ClientSession(read_stream, write_stream) as session:
            init = await session.initialize()
            self.server_info = {
                "name": init.serverInfo.name,
                "version": init.serverInfo.version,
            }
            try:
                return await callback(session)
            except McpError as e:
                raise MCPError(e.error) from e

    def _run_sync(self, coro):
        """Run an async coroutine synchronously."""
        try:
            asyncio.get_running_loop()
            # If we're already in an async context, create a new thread
            import concurrent.futures
            with concurrent.futures.ThreadPoolExecutor() as pool:
                future = pool.submit(asyncio.run, coro)
                return future.result()
        except RuntimeError:
            # No running loop, we can use asyncio.run
            return asyncio.run(coro)

    @staticmethod
    def _parse_text(text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text

    async def _list_tools_async(self) -> List[Dict[str, Any]]:
        """List available tools from the MCP server (async)."""
        async def get_tools(session: ClientSession):
            result = await session.list_tools()
            return [
                {
                    "name": tool.name,
                    "description": tool.description or "",
                    "inputSchema": tool.inputSchema if hasattr(tool, 'inputSchema') else {}
                }
                for tool in result.tools
            ]
        return await self._run_session(get_tools)

    async def _call_tool_async(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Call a tool on the MCP server (async)."""
        async def call(session: ClientSession):
            result = await session.call_tool(name, arguments or {})
            return self._tool_result(name, result)
        return await self._run_session(call)

    def _tool_result(self, name: str, result) -> Any:
        """Extract the payload of a CallToolResult."""
        content = result.content

        # Check for tool execution errors
        if result.isError:
            error_msg = "Tool execution failed"
            if content and hasattr(content[0], 'text'):
                error_msg = content[0].text
            raise MCPToolError(name, error_msg)

        if content:
            first_content = content[0]
            if hasattr(first_content, 'text'):
                return self._parse_text(first_content.text)
            return first_content
        return result

    async def _list_resources_async(self) -> Dict[str, List[Dict[str, Any]]]:
        async def get_resources(session: ClientSession):
            resources = await session.list_resources()
            templates = await session.list_resource_templates()
            return {
                "resources": [
                    {"uri": str(r.uri), "name": r.name, "description": r.description or ""}
                    for r in resources.resources
                ],
                "templates": [
                    {"uriTemplate": t.uriTemplate, "name": t.name, "description": t.description or ""}
                    for t in templates.resourceTemplates
                ],
            }
        return await self._run_session(get_resources)

    async def _read_resource_async(self, uri: str) -> Any:
        async def read(session: ClientSession):
            result = await session.read_resource(AnyUrl(uri))
            texts = [c.text for c in result.contents if hasattr(c, "text")]
            if len(texts) == 1:
                return self._parse_text(texts[0])
            return [self._parse_text(t) for t in texts]
        return await self._run_session(read)

    async def _get_prompt_async(self, name: str, arguments: Optional[Dict[str, str]] = None) -> List[Dict[str, str]]:
        async def get_prompt(session: ClientSession):
            result = await session.get_prompt(name, arguments or {})
            return [
                {
                    "role": message.role,
                    "text": getattr(message.content, "text", ""),
                }
                for message in result.messages
            ]
        return await self._run_session(get_prompt)

    async def _get_server_info_async(self) -> Dict[str, Any]:
        async def info(session: ClientSession):
            return self.server_info
        return await self._run_session(info)

    def get_server_info(self) -> Dict[str, Any]:
        """Connect, initialize and return the server's {name, version}."""
        return self._run_sync(self._get_server_info_async())

    def list_tools(self, use_cache: bool = True) -> List[Dict[str, Any]]:
        """
        List available tools from the MCP server.

        Args:
            use_cache: Whether to use cached tools list

        Returns:
            List of tool definitions with name, description, and input schema
        """
        if use_cache and self._tools_cache is not None:
            return self._tools_cache

        tools = self._run_sync(self._list_tools_async())
        self._tools_cache = tools
        return tools

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call a tool on the MCP server via tools/call method.

        Args:
            name: Name of the tool to call
            arguments: Arguments to pass to the tool

        Returns:
            The tool's result (parsed from content array)

        Raises:
            MCPToolError: If the tool execution failed (isError: true)
        """
        return self._run_sync(self._call_tool_async(name, arguments))

    def list_resources(self) -> Dict[str, List[Dict[str, Any]]]:
        """List static resources and resource templates."""
        return self._run_sync(self._list_resources_async())

    def read_resource(self, uri: str) -> Any:
        """
        Read a resource via resources/read, parsing JSON text contents.

        Raises:
            MCPError: If the server reports an error for the URI
        """
        return self._run_sync(self._read_resource_async(uri))

    def get_prompt(self, name: str, arguments: Optional[Dict[str, str]] = None) -> List[Dict[str, str]]:
        """Render a prompt into a list of {role, text} messages."""
        return self._run_sync(self._get_prompt_async(name, arguments))

    # Convenience methods for shop/customer resources and tools

    def echo(self, message: str) -> str:
        return self.call_tool("echo", {"message": message})

    def get_shops(self) -> List[Dict[str, Any]]:
        return self.read_resource("shops:///")

    def get_shop(self, shop_id: int) -> Dict[str, Any]:
        return self.read_resource(f"shops:///{shop_id}")

    def get_customers(self) -> List[Dict[str, Any]]:
        return self.read_resource("customers:///")

    def get_customer(self, customer_id: int) -> Dict[str, Any]:
        return self.read_resource(f"customers:///{customer_id}")

    def get_shop_customers(self, shop_id: int) -> Dict[str, Any]:
        """Get a shop and the customers whose favorite shop it is."""
        return self.read_resource(f"shop-customers:///{shop_id}")

    def get_cars(self) -> List[str]:
        return self.read_resource("cars://")

    def create_customer(self, name: str, shop_id: int) -> Dict[str, Any]:
        """Create a customer whose favorite shop is shop_id."""
        return self.call_tool("create_customer", {"name": name, "shop_id": shop_id})

    def compute_customer_expenses(self, customer_id: int) -> Dict[str, Any]:
        """Get a customer's expense summary."""
        return self.call_tool("compute_customer_expenses", {"customer_id": customer_id})

    def customer_insights(self, customer_id: int, insight_type: str = "spending") -> str:
        """Render the customer-insights prompt and return its text."""
        messages = self.get_prompt(
            "customer-insights",
            {"customer_id": str(customer_id), "insight_type": insight_type},
        )
        return "\n".join(m["text"] for m in messages)


class MCPError(Exception):
    """
    Exception raised when MCP server returns a protocol-level error.
    These are JSON-RPC 2.0 errors such as unknown resources or prompts.
    """

    def __init__(self, error: Any):
        if isinstance(error, dict):
            self.code = error.get("code", -1)
            self.message = error.get("message", "Unknown error")
            self.data = error.get("data")
        elif hasattr(error, "message"):
            self.code = getattr(error, "code", -1)
            self.message = error.message
            self.data = getattr(error, "data", None)
        else:
            self.code = -1
            self.message = str(error)
            self.data = None
        super().__init__(f"MCP Error {self.code}: {self.message}")


class MCPToolError(Exception):
    """
    Exception raised when a tool execution fails (isError: true in response).
    These are tool-level errors like unknown ids or invalid arguments.
    """

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        self.message = message
        super().__init__(f"Tool '{tool_name}' failed: {message}")


def _find_client_error(error: BaseException) -> Optional[Exception]:
    """Return the first MCPError/MCPToolError in error or its nested groups."""
    if isinstance(error, (MCPError, MCPToolError)):
        return error
    for inner in getattr(error, "exceptions", ()):
        found = _find_client_error(inner)
        if found is not None:
            return found
    return None


def run_demo(client: MCPClient, out=print) -> None:
    """
    Walk through the server: server info, echo, shops, the first shop's
    customers and the details of that shop's first customer.
    """
    info = client.get_server_info()
    out(f"Connected to MCP server: {info['name']} v{info['version']}")

    out("\nTesting echo tool...")
    out(f"Echo response: {client.echo('Hello from client!')}")

    out("\nFetching all shops...")
    shops = client.get_shops()
    out(f"Found {len(shops)} shops:")
    for shop in shops:
        out(f"- {shop['name']} ({shop['type']}) - Rating: {shop['rating']}/5")
    if not shops:
        return

    first_shop = shops[0]
    out(f"\nFetching customers for {first_shop['name']}...")
    customers = client.get_shop_customers(first_shop["id"])["customers"]
    out(f"\nCustomers of {first_shop['name']}:")
    for customer in customers:
        out(f"- {customer['name']} ({customer['membershipLevel']}) - {customer['totalPurchases']} purchases")
    if not customers:
        return

    first_customer = customers[0]
    out(f"\nFetching details for {first_customer['name']}...")
    customer = client.get_customer(first_customer["id"])
    out("\nCustomer Details:")
    out(f"Name: {customer['name']}")
    out(f"Email: {customer['email']}")
    out(f"Membership Level: {customer['membershipLevel']}")
    out(f"Total Purchases: {customer['totalPurchases']}")
    out(f"Member Since: {customer['joinDate']}")


# Singleton client instance
_client: Optional[MCPClient] = None


def get_mcp_client(base_url: str = DEFAULT_MCP_URL) -> MCPClient:
    """
    Get or create a shared HTTP MCP client.

    Args:
        base_url: Base URL of the MCP server

    Returns:
        MCPClient instance
    """
    global _client
    if _client is None or _client.url != MCPClient(base_url).url:
        _client = MCPClient(base_url)
    return _client
