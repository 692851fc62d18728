"""
Resource resolution over the fixture collections.

Maps a URI scheme plus an optional identifier to the matching records:

    shops           all shops, or one shop by id
    customers       all customers, or one customer by id
    shop-customers  a shop bundled with the customers who favor it
    cars            a fixed list, identifier ignored
"""

import json
import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from .data_store import DataStore
from .errors import InvalidIdentifierError, NotFoundError, Result, ShopDataError
from .models import ShopData

logger = logging.getLogger(__name__)

CARS = ["Mustang", "Ferrari", "Lamborghini"]

SCHEMES = ("shops", "customers", "shop-customers", "cars")

_LEADING_DIGITS = re.compile(r"(\d+)")


class EmptyMatchPolicy(str, Enum):
    """What shop-customers returns when no customer favors the shop."""
    EMPTY = "empty"
    ERROR = "error"


def _format_ids(ids: List[int]) -> str:
    return ", ".join(str(i) for i in ids) if ids else "none"


def parse_id(identifier: Optional[str], label: str, valid_ids: List[int]) -> int:
    """
    Parse an identifier taken from a resource URI.
    
    Whitespace and leading slashes are ignored and the leading run of
    digits is used, so "12abc" parses as 12.
    
    Raises:
        InvalidIdentifierError: If the identifier does not start with a digit
    """
    text = (identifier or "").strip().lstrip("/")
    match = _LEADING_DIGITS.match(text)
    if not match:
        raise InvalidIdentifierError(
            f"Invalid {label} ID '{identifier}'. Valid {label} IDs: {_format_ids(valid_ids)}"
        )
    return int(match.group(1))


def to_json(data: Any) -> str:
    """Serialize resolved records the way resources return them."""
    return json.dumps(data, indent=2)


class ResourceResolver:
    """Resolves (scheme, identifier) pairs against a DataStore."""

    def __init__(
        self,
        store: DataStore,
        empty_match_policy: EmptyMatchPolicy = EmptyMatchPolicy.EMPTY,
    ):
        self.store = store
        self.empty_match_policy = EmptyMatchPolicy(empty_match_policy)

    def resolve(self, scheme: str, identifier: Optional[str] = None) -> Result:
        """
        Resolve a resource.
        
        Args:
            scheme: One of shops, customers, shop-customers, cars
            identifier: Record id as taken from the URI path (optional)
            
        Returns:
            Result holding a record, a list of records, or a failure
        """
        handlers = {
            "shops": self._shops,
            "customers": self._customers,
            "shop-customers": self._shop_customers,
            "cars": self._cars,
        }
        handler = handlers.get(scheme)
        if handler is None:
            return Result.from_error(InvalidIdentifierError(
                f"Unknown resource scheme '{scheme}'. Valid schemes: {', '.join(SCHEMES)}"
            ))
        try:
            return Result.ok(handler(identifier))
        except ShopDataError as e:
            logger.warning("Could not resolve %s://%s: %s", scheme, identifier or "", e.message)
            return Result.from_error(e)

    def _has_identifier(self, identifier: Optional[str]) -> bool:
        return bool((identifier or "").strip().strip("/"))

    def _shops(self, identifier: Optional[str]) -> Any:
        data = self.store.load()
        if not self._has_identifier(identifier):
            return data.shops
        shop_id = parse_id(identifier, "shop", data.shop_ids())
        return self._require_shop(data, shop_id)

    def _customers(self, identifier: Optional[str]) -> Any:
        data = self.store.load()
        if not self._has_identifier(identifier):
            return data.customers
        customer_id = parse_id(identifier, "customer", data.customer_ids())
        customer = data.customer_by_id(customer_id)
        if customer is None:
            raise NotFoundError(
                f"Customer with ID {customer_id} not found. "
                f"Valid customer IDs: {_format_ids(data.customer_ids())}"
            )
        return customer

    def _shop_customers(self, identifier: Optional[str]) -> Dict[str, Any]:
        data = self.store.load()
        shop_id = parse_id(identifier, "shop", data.shop_ids())
        shop = self._require_shop(data, shop_id)
        customers = data.customers_for_shop(shop_id)
        if not customers and self.empty_match_policy is EmptyMatchPolicy.ERROR:
            raise NotFoundError(f"No customers found for shop with ID {shop_id}")
        return {"shop": shop, "customers": customers, "count": len(customers)}

    def _cars(self, identifier: Optional[str]) -> List[str]:
        return list(CARS)

    def _require_shop(self, data: ShopData, shop_id: int) -> Dict[str, Any]:
        shop = data.shop_by_id(shop_id)
        if shop is None:
            raise NotFoundError(
                f"Shop with ID {shop_id} not found. "
                f"Valid shop IDs: {_format_ids(data.shop_ids())}"
            )
        return shop
