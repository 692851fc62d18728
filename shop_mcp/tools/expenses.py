"""
Expense aggregation over a customer's transactions.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from shop_mcp.store import (
    DataStore,
    InvalidIdentifierError,
    NotFoundError,
    Result,
    ShopDataError,
    Transaction,
)

logger = logging.getLogger(__name__)

RECENT_TRANSACTION_COUNT = 5


def round_money(value: float) -> float:
    """Round to 2 places, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def most_recent(transactions: List[Transaction], limit: int) -> List[Transaction]:
    """Transactions sorted by date, newest first, truncated to limit."""
    return sorted(transactions, key=lambda t: t.get("date", ""), reverse=True)[:limit]


def compute_customer_expenses(store: DataStore, customer_id: int) -> Result:
    """
    Summarize what a customer has spent.
    
    Args:
        store: Fixture store
        customer_id: Id of an existing customer
        
    Returns:
        Result holding the customer identity, totals, a per-shop breakdown
        and the most recent transactions. A customer with no transactions
        gets a message instead of the aggregate blocks.
    """
    try:
        if isinstance(customer_id, bool) or not isinstance(customer_id, int) or customer_id <= 0:
            raise InvalidIdentifierError(
                f"Customer ID must be a positive integer, got {customer_id!r}"
            )
        data = store.load()
        customer = data.customer_by_id(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer with ID {customer_id} not found")
    except ShopDataError as e:
        logger.warning("Failed to compute expenses for customer %r: %s", customer_id, e.message)
        return Result.from_error(e)

    identity = {
        "id": customer["id"],
        "name": customer["name"],
        "email": customer.get("email"),
        "membershipLevel": customer.get("membershipLevel"),
    }
    transactions = data.transactions_for_customer(customer_id)
    if not transactions:
        return Result.ok({
            "customer": identity,
            "transactionCount": 0,
            "message": f"No transactions found for customer {customer['name']} (ID: {customer_id})",
        })

    total = sum(t["amount"] for t in transactions)
    shop_names = data.shop_names()
    by_shop: Dict[int, Dict[str, Any]] = {}
    for t in transactions:
        entry = by_shop.setdefault(t["shopId"], {
            "shopId": t["shopId"],
            "shopName": shop_names.get(t["shopId"], "Unknown shop"),
            "total": 0.0,
            "transactionCount": 0,
            "transactions": [],
        })
        entry["total"] += t["amount"]
        entry["transactionCount"] += 1
        entry["transactions"].append(t)
    for entry in by_shop.values():
        entry["total"] = round_money(entry["total"])

    logger.info(
        "Computed expenses for customer %d: %d transactions totalling %.2f",
        customer_id, len(transactions), total,
    )
    return Result.ok({
        "customer": identity,
        "summary": {
            "totalExpenses": round_money(total),
            "averageTransaction": round_money(total / len(transactions)),
            "transactionCount": len(transactions),
        },
        "shopBreakdown": list(by_shop.values()),
        "recentTransactions": most_recent(transactions, RECENT_TRANSACTION_COUNT),
    })
