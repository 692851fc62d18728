"""
Customer creation tool.
"""

import logging
import random
from datetime import date, timedelta
from typing import Optional

from shop_mcp.store import (
    MEMBERSHIP_LEVELS,
    Customer,
    DataStore,
    InvalidIdentifierError,
    NotFoundError,
    Result,
    ShopDataError,
)

logger = logging.getLogger(__name__)

JOIN_DATE_START = date(2019, 1, 1)
JOIN_DATE_END = date(2024, 12, 31)
MIN_PURCHASES = 1
MAX_PURCHASES = 50


def email_for(name: str) -> str:
    """Build the synthetic address for a customer name."""
    return name.lower().replace(" ", ".") + "@example.com"


def random_join_date(rng: random.Random) -> str:
    """Pick a day between JOIN_DATE_START and JOIN_DATE_END inclusive."""
    span = (JOIN_DATE_END - JOIN_DATE_START).days
    return (JOIN_DATE_START + timedelta(days=rng.randint(0, span))).isoformat()


def create_customer(
    store: DataStore,
    name: str,
    shop_id: int,
    rng: Optional[random.Random] = None,
) -> Result:
    """
    Create a customer whose favorite shop is shop_id and persist it.
    
    Args:
        store: Fixture store to read from and write to
        name: Customer's full name
        shop_id: Id of an existing shop
        rng: Random source for membership level, purchases and join date
        
    Returns:
        Result holding the new customer record
    """
    rng = rng or random.Random()
    try:
        if not isinstance(name, str) or not name.strip():
            raise InvalidIdentifierError("Customer name must be a non-empty string")
        if isinstance(shop_id, bool) or not isinstance(shop_id, int) or shop_id <= 0:
            raise InvalidIdentifierError(f"Shop ID must be a positive integer, got {shop_id!r}")

        data = store.load()
        if data.shop_by_id(shop_id) is None:
            raise NotFoundError(
                f"Shop with ID {shop_id} not found. "
                f"Valid shop IDs: {', '.join(str(i) for i in data.shop_ids()) or 'none'}"
            )

        ids = data.customer_ids()
        customer: Customer = {
            "id": max(ids) + 1 if ids else 1,
            "name": name,
            "email": email_for(name),
            "membershipLevel": rng.choice(MEMBERSHIP_LEVELS),
            "totalPurchases": rng.randint(MIN_PURCHASES, MAX_PURCHASES),
            "favoriteShopId": shop_id,
            "joinDate": random_join_date(rng),
        }
        data.customers.append(customer)
        store.save_customers(data.customers)
    except ShopDataError as e:
        logger.warning("Failed to create customer %r: %s", name, e.message)
        return Result.from_error(e)

    logger.info("Created customer %d (%s) for shop %d", customer["id"], name, shop_id)
    return Result.ok(customer)
