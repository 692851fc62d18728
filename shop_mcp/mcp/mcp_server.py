"""
MCP Server exposing shop, customer and transaction fixtures using the
official MCP Python SDK (FastMCP).

Resources (application/json):
- shops:///                     all shops
- shops:///{shop_id}            one shop
- customers:///                 all customers
- customers:///{customer_id}    one customer
- shop-customers:///{shop_id}   a shop and the customers who favor it
- cars://                       a fixed list of cars

Tools:
- echo                          echoes the message back
- create_customer               appends a customer and persists it
- compute_customer_expenses     totals, per-shop breakdown, recent purchases

Prompts:
- customer-insights             analysis request for one customer

Failure presentation:
- Resource and prompt failures are raised and reach the client as
  JSON-RPC errors
- Tool failures are raised as ToolError and reach the client as a result
  with isError set and the error message as text
"""

import logging
import random
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from typing import Annotated, Any, Dict, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from shop_mcp.config import Settings
from shop_mcp.prompts import build_customer_insights_prompt
from shop_mcp.store import DataStore, ResourceResolver, Result, ShopDataError, to_json
from shop_mcp.tools import compute_customer_expenses, create_customer

logger = logging.getLogger(__name__)

SERVER_NAME = "shop-customer-server"


def _resource_text(result: Result) -> str:
    try:
        return to_json(result.unwrap())
    except ShopDataError as e:
        raise ResourceError(e.message) from e


def _tool_data(result: Result) -> Any:
    try:
        return result.unwrap()
    except ShopDataError as e:
        raise ToolError(e.message) from e


def create_server(
    settings: Optional[Settings] = None,
    store: Optional[DataStore] = None,
    rng: Optional[random.Random] = None,
) -> FastMCP:
    """
    Build the MCP server.

    Args:
        settings: Runtime settings (default: read from the environment)
        store: Fixture store (default: one rooted at settings.data_dir)
        rng: Random source for generated customer fields

    Returns:
        Configured FastMCP instance
    """
    settings = settings or Settings.from_env()
    store = store or DataStore(settings.data_dir)
    resolver = ResourceResolver(store, settings.empty_match_policy)
    rng = rng or random.Random()

    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[None]:
        """Manage application lifecycle with the fixture store."""
        if not store.exists():
            logger.warning("Fixture files missing in %s; requests will fail until seeded", store.data_dir)
        logger.info(
            "%s started (data: %s, empty shop-customers policy: %s)",
            SERVER_NAME, store.data_dir, resolver.empty_match_policy.value,
        )
        try:
            # handlers capture store and resolver directly
            yield
        finally:
            logger.info("%s stopped", SERVER_NAME)

    mcp = FastMCP(
        SERVER_NAME,
        lifespan=app_lifespan,
        instructions="""
    Shop and customer MCP Server providing:
    - Shop and customer lookup resources
    - Customer creation and expense analysis tools
    - A customer insights prompt
    """
    )

    # Resources

    @mcp.resource(
        "shops:///",
        name="shops",
        description="All shops",
        mime_type="application/json",
    )
    def list_shops() -> str:
        return _resource_text(resolver.resolve("shops"))

    @mcp.resource(
        "shops:///{shop_id}",
        name="shop",
        description="A single shop by ID",
        mime_type="application/json",
    )
    def get_shop(shop_id: str) -> str:
        return _resource_text(resolver.resolve("shops", shop_id))

    @mcp.resource(
        "customers:///",
        name="customers",
        description="All customers",
        mime_type="application/json",
    )
    def list_customers() -> str:
        return _resource_text(resolver.resolve("customers"))

    @mcp.resource(
        "customers:///{customer_id}",
        name="customer",
        description="A single customer by ID",
        mime_type="application/json",
    )
    def get_customer(customer_id: str) -> str:
        return _resource_text(resolver.resolve("customers", customer_id))

    @mcp.resource(
        "shop-customers:///{shop_id}",
        name="shop-customers",
        description="A shop together with the customers whose favorite shop it is",
        mime_type="application/json",
    )
    def get_shop_customers(shop_id: str) -> str:
        return _resource_text(resolver.resolve("shop-customers", shop_id))

    @mcp.resource(
        "cars://",
        name="generated-cars-list",
        description="Provides access to generated car information",
        mime_type="application/json",
    )
    def list_cars() -> str:
        return _resource_text(resolver.resolve("cars"))

    # Tools

    @mcp.tool(name="echo", description="Echoes back the input")
    def echo(message: str) -> str:
        """
        Echo a message.

        Args:
            message: Text to echo back
        """
        return f"Echo: {message}"

    @mcp.tool(name="create_customer")
    def create_customer_tool(
        name: Annotated[str, Field(min_length=1, description="Customer's full name")],
        shop_id: Annotated[int, Field(gt=0, description="ID of the customer's favorite shop")],
    ) -> Dict[str, Any]:
        """
        Create a new customer with a generated email, membership level,
        purchase count and join date.

        Args:
            name: Customer's full name
            shop_id: ID of an existing shop to set as favorite

        Returns:
            The created customer record
        """
        return _tool_data(create_customer(store, name, shop_id, rng=rng))

    @mcp.tool(name="compute_customer_expenses")
    def compute_customer_expenses_tool(
        customer_id: Annotated[int, Field(gt=0, description="ID of the customer")],
    ) -> Dict[str, Any]:
        """
        Compute a customer's total and average spend, a per-shop breakdown
        and their five most recent transactions.

        Args:
            customer_id: The customer's unique identifier

        Returns:
            Expense summary for the customer
        """
        return _tool_data(compute_customer_expenses(store, customer_id))

    # Prompts

    @mcp.prompt(
        name="customer-insights",
        description=(
            "Generates personalized insights and recommendations for a specific customer "
            "based on their transaction history and preferences"
        ),
    )
    def customer_insights(
        customer_id: Annotated[str, Field(pattern=r"^\d+$", description="Customer ID as a numeric string")],
        insight_type: Annotated[
            Literal["spending", "loyalty", "personalization", "retention"],
            Field(description="Type of insight to generate"),
        ],
    ) -> str:
        try:
            return build_customer_insights_prompt(store, customer_id, insight_type).unwrap()
        except ShopDataError as e:
            raise ValueError(e.message) from e

    return mcp


def run_server(settings: Optional[Settings] = None):
    """Run the MCP server with stdio transport (default for MCP)."""
    create_server(settings).run(transport="stdio")


def run_http_server(settings: Optional[Settings] = None, host: str = "0.0.0.0", port: int = 8080):
    """Run the MCP server with streamable HTTP transport."""
    import uvicorn
    # FastMCP.run() doesn't accept host/port directly for streamable-http
    app = create_server(settings).streamable_http_app()
    uvicorn.run(app, host=host, port=port)
