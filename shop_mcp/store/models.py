"""
Record types for the shop, customer and transaction fixtures.

Records stay plain JSON objects so that reading, serializing and re-parsing
them never drops or renames fields.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TypedDict


MEMBERSHIP_LEVELS = ("Gold", "Silver", "Platinum", "Bronze")


class Shop(TypedDict):
    id: int
    name: str
    type: str
    location: str
    established: str
    rating: float


class Customer(TypedDict):
    id: int
    name: str
    email: str
    membershipLevel: str
    totalPurchases: int
    favoriteShopId: int
    joinDate: str


class Transaction(TypedDict):
    id: int
    customerId: int
    shopId: int
    amount: float
    date: str
    description: str


@dataclass
class ShopData:
    """One snapshot of the three fixture collections."""
    shops: List[Shop] = field(default_factory=list)
    customers: List[Customer] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)

    def shop_by_id(self, shop_id: int) -> Optional[Shop]:
        return next((s for s in self.shops if s["id"] == shop_id), None)

    def customer_by_id(self, customer_id: int) -> Optional[Customer]:
        return next((c for c in self.customers if c["id"] == customer_id), None)

    def customers_for_shop(self, shop_id: int) -> List[Customer]:
        return [c for c in self.customers if c.get("favoriteShopId") == shop_id]

    def transactions_for_customer(self, customer_id: int) -> List[Transaction]:
        return [t for t in self.transactions if t.get("customerId") == customer_id]

    def shop_ids(self) -> List[int]:
        return [s["id"] for s in self.shops]

    def customer_ids(self) -> List[int]:
        return [c["id"] for c in self.customers]

    def shop_names(self) -> Dict[int, str]:
        return {s["id"]: s["name"] for s in self.shops}
