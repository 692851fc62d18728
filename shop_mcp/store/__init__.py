"""
Fixture storage and resource resolution.

    from shop_mcp.store import DataStore, ResourceResolver

    store = DataStore("data")
    result = ResourceResolver(store).resolve("shops", "1")
"""

from .data_store import DataStore
from .errors import (
    ErrorKind,
    InvalidIdentifierError,
    NotFoundError,
    Result,
    ShopDataError,
    StorageError,
)
from .models import MEMBERSHIP_LEVELS, Customer, Shop, ShopData, Transaction
from .resolver import CARS, EmptyMatchPolicy, ResourceResolver, parse_id, to_json

__all__ = [
    "DataStore",
    "ResourceResolver",
    "EmptyMatchPolicy",
    "parse_id",
    "to_json",
    "CARS",
    # Records
    "Shop",
    "Customer",
    "Transaction",
    "ShopData",
    "MEMBERSHIP_LEVELS",
    # Errors
    "Result",
    "ErrorKind",
    "ShopDataError",
    "NotFoundError",
    "InvalidIdentifierError",
    "StorageError",
]
