"""
Customer insights prompt.

Embeds a customer's record, favorite shop and recent transactions into an
analysis request for one of four insight categories.
"""

import json
import logging

from shop_mcp.store import (
    DataStore,
    InvalidIdentifierError,
    NotFoundError,
    Result,
    ShopDataError,
    parse_id,
)
from shop_mcp.tools.expenses import most_recent

logger = logging.getLogger(__name__)

MAX_TRANSACTIONS = 10

INSIGHT_INSTRUCTIONS = {
    "spending": (
        "Analyze this customer's spending patterns. Identify where and when they "
        "spend the most, how their average purchase compares across shops, and "
        "suggest offers that match their spending habits."
    ),
    "loyalty": (
        "Assess this customer's loyalty. Consider their membership level, how long "
        "they have been a member and how concentrated their purchases are at their "
        "favorite shop, and recommend ways to reward and deepen that loyalty."
    ),
    "personalization": (
        "Suggest personalized recommendations for this customer. Use their "
        "favorite shop and transaction descriptions to propose products, services "
        "or experiences they are likely to value."
    ),
    "retention": (
        "Evaluate the risk that this customer stops shopping with us. Look at the "
        "recency and frequency of their transactions and propose concrete actions "
        "to keep them engaged."
    ),
}

INSIGHT_TYPES = tuple(INSIGHT_INSTRUCTIONS)


def build_customer_insights_prompt(store: DataStore, customer_id: str, insight_type: str) -> Result:
    """
    Build the analysis prompt text.
    
    Args:
        store: Fixture store
        customer_id: Customer id as a digit string
        insight_type: One of spending, loyalty, personalization, retention
        
    Returns:
        Result holding the prompt text
    """
    if insight_type not in INSIGHT_INSTRUCTIONS:
        return Result.from_error(InvalidIdentifierError(
            f"Invalid insight type '{insight_type}'. Valid types: {', '.join(INSIGHT_TYPES)}"
        ))

    try:
        data = store.load()
        cid = parse_id(customer_id, "customer", data.customer_ids())
        customer = data.customer_by_id(cid)
        if customer is None:
            raise NotFoundError(f"Customer with ID {cid} not found")
    except ShopDataError as e:
        logger.warning("Cannot build %s insights for customer %r: %s", insight_type, customer_id, e.message)
        return Result.from_error(e)

    shop = data.shop_by_id(customer.get("favoriteShopId"))
    transactions = most_recent(data.transactions_for_customer(cid), MAX_TRANSACTIONS)

    sections = [
        f"Please analyze customer {cid} and provide {insight_type} insights.",
        "",
        "Customer:",
        json.dumps(customer, indent=2),
        "",
        "Favorite shop:",
        json.dumps(shop, indent=2) if shop else f"Shop with ID {customer.get('favoriteShopId')} not found",
        "",
        f"Recent transactions ({len(transactions)}, most recent first):",
        json.dumps(transactions, indent=2) if transactions else "No transactions recorded.",
        "",
        INSIGHT_INSTRUCTIONS[insight_type],
    ]
    return Result.ok("\n".join(sections))
