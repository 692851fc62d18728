"""
Shared fixtures: a temporary data directory holding small, known
shop/customer/transaction collections.
"""

import json
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shop_mcp.store import DataStore


SHOPS = [
    {"id": 1, "name": "Tech Haven", "type": "Electronics", "location": "Downtown",
     "established": "2015-03-12", "rating": 4.5},
    {"id": 2, "name": "Green Grocer", "type": "Grocery", "location": "Maple Street",
     "established": "2010-07-01", "rating": 4.2},
    {"id": 3, "name": "Quiet Corner", "type": "Bookstore", "location": "Old Town",
     "established": "2008-11-20", "rating": 4.8},
]

CUSTOMERS = [
    {"id": 1, "name": "Ann Lee", "email": "ann.lee@example.com", "membershipLevel": "Gold",
     "totalPurchases": 12, "favoriteShopId": 1, "joinDate": "2020-01-15"},
    {"id": 2, "name": "Bob Stone", "email": "bob.stone@example.com", "membershipLevel": "Silver",
     "totalPurchases": 7, "favoriteShopId": 2, "joinDate": "2021-03-22"},
    {"id": 3, "name": "Cara Diaz", "email": "cara.diaz@example.com", "membershipLevel": "Bronze",
     "totalPurchases": 1, "favoriteShopId": 1, "joinDate": "2023-09-05"},
]

TRANSACTIONS = [
    {"id": 1, "customerId": 1, "shopId": 1, "amount": 10, "date": "2024-01-01",
     "description": "Cable"},
    {"id": 2, "customerId": 1, "shopId": 2, "amount": 20, "date": "2024-03-01",
     "description": "Groceries"},
    {"id": 3, "customerId": 1, "shopId": 1, "amount": 30, "date": "2024-02-01",
     "description": "Charger"},
    {"id": 4, "customerId": 2, "shopId": 2, "amount": 5.5, "date": "2024-01-05",
     "description": "Apples"},
    {"id": 5, "customerId": 2, "shopId": 2, "amount": 6.25, "date": "2024-01-12",
     "description": "Bread"},
    {"id": 6, "customerId": 2, "shopId": 2, "amount": 4.75, "date": "2024-01-19",
     "description": "Milk"},
    {"id": 7, "customerId": 2, "shopId": 1, "amount": 99.99, "date": "2024-01-26",
     "description": "Headphones"},
    {"id": 8, "customerId": 2, "shopId": 2, "amount": 12.0, "date": "2024-02-02",
     "description": "Cheese"},
    {"id": 9, "customerId": 2, "shopId": 7, "amount": 3.5, "date": "2024-02-09",
     "description": "Newspaper"},
]


def write_fixtures(data_dir, shops=None, customers=None, transactions=None):
    """Write the three fixture files, defaulting to the shared collections."""
    os.makedirs(data_dir, exist_ok=True)
    for filename, records in (
        ("shops.json", SHOPS if shops is None else shops),
        ("customers.json", CUSTOMERS if customers is None else customers),
        ("transactions.json", TRANSACTIONS if transactions is None else transactions),
    ):
        with open(os.path.join(data_dir, filename), "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)


@pytest.fixture
def data_dir(tmp_path):
    """Temporary directory populated with the shared collections."""
    path = str(tmp_path / "data")
    write_fixtures(path)
    return path


@pytest.fixture
def store(data_dir):
    return DataStore(data_dir)
