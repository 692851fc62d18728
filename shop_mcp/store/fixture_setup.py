import json
import logging
import os
from typing import List

from .data_store import CUSTOMERS_FILE, SHOPS_FILE, TRANSACTIONS_FILE, DataStore
from .models import Customer, Shop, Transaction

logger = logging.getLogger(__name__)


SAMPLE_SHOPS: List[Shop] = [
    {"id": 1, "name": "Tech Haven", "type": "Electronics", "location": "Downtown Mall",
     "established": "2015-03-12", "rating": 4.5},
    {"id": 2, "name": "Green Grocer", "type": "Grocery", "location": "Maple Street",
     "established": "2010-07-01", "rating": 4.2},
    {"id": 3, "name": "Page Turner Books", "type": "Bookstore", "location": "Old Town",
     "established": "2008-11-20", "rating": 4.8},
    {"id": 4, "name": "Urban Threads", "type": "Clothing", "location": "Riverside Plaza",
     "established": "2018-05-15", "rating": 3.9},
    {"id": 5, "name": "Bean There Cafe", "type": "Cafe", "location": "University Avenue",
     "established": "2020-02-10", "rating": 4.6},
]

SAMPLE_CUSTOMERS: List[Customer] = [
    {"id": 1, "name": "John Doe", "email": "john.doe@example.com", "membershipLevel": "Gold",
     "totalPurchases": 42, "favoriteShopId": 1, "joinDate": "2020-01-15"},
    {"id": 2, "name": "Jane Smith", "email": "jane.smith@example.com", "membershipLevel": "Silver",
     "totalPurchases": 18, "favoriteShopId": 2, "joinDate": "2021-03-22"},
    {"id": 3, "name": "Bob Johnson", "email": "bob.johnson@example.com", "membershipLevel": "Platinum",
     "totalPurchases": 50, "favoriteShopId": 1, "joinDate": "2019-06-30"},
    {"id": 4, "name": "Alice Williams", "email": "alice.williams@example.com", "membershipLevel": "Bronze",
     "totalPurchases": 5, "favoriteShopId": 3, "joinDate": "2023-09-05"},
    {"id": 5, "name": "Charlie Brown", "email": "charlie.brown@example.com", "membershipLevel": "Gold",
     "totalPurchases": 27, "favoriteShopId": 3, "joinDate": "2020-11-11"},
    {"id": 6, "name": "Diana Prince", "email": "diana.prince@example.com", "membershipLevel": "Silver",
     "totalPurchases": 14, "favoriteShopId": 4, "joinDate": "2022-02-28"},
    {"id": 7, "name": "Edward Norton", "email": "edward.norton@example.com", "membershipLevel": "Bronze",
     "totalPurchases": 3, "favoriteShopId": 2, "joinDate": "2024-04-17"},
    {"id": 8, "name": "Fiona Green", "email": "fiona.green@example.com", "membershipLevel": "Platinum",
     "totalPurchases": 38, "favoriteShopId": 1, "joinDate": "2019-12-01"},
]

SAMPLE_TRANSACTIONS: List[Transaction] = [
    {"id": 1, "customerId": 1, "shopId": 1, "amount": 299.99, "date": "2024-01-10",
     "description": "Wireless headphones"},
    {"id": 2, "customerId": 1, "shopId": 1, "amount": 49.5, "date": "2024-02-14",
     "description": "Phone case"},
    {"id": 3, "customerId": 1, "shopId": 5, "amount": 12.75, "date": "2024-03-02",
     "description": "Coffee and pastry"},
    {"id": 4, "customerId": 1, "shopId": 3, "amount": 35.0, "date": "2024-03-20",
     "description": "Science fiction novels"},
    {"id": 5, "customerId": 1, "shopId": 1, "amount": 1199.0, "date": "2024-05-05",
     "description": "Laptop"},
    {"id": 6, "customerId": 1, "shopId": 5, "amount": 8.25, "date": "2024-06-18",
     "description": "Latte"},
    {"id": 7, "customerId": 2, "shopId": 2, "amount": 64.3, "date": "2024-01-08",
     "description": "Weekly groceries"},
    {"id": 8, "customerId": 2, "shopId": 2, "amount": 71.15, "date": "2024-01-15",
     "description": "Weekly groceries"},
    {"id": 9, "customerId": 2, "shopId": 4, "amount": 89.99, "date": "2024-02-03",
     "description": "Winter jacket"},
    {"id": 10, "customerId": 3, "shopId": 1, "amount": 549.0, "date": "2023-11-24",
     "description": "Smartwatch"},
    {"id": 11, "customerId": 3, "shopId": 1, "amount": 129.99, "date": "2024-04-01",
     "description": "Bluetooth speaker"},
    {"id": 12, "customerId": 4, "shopId": 3, "amount": 22.5, "date": "2024-02-29",
     "description": "Poetry collection"},
    {"id": 13, "customerId": 5, "shopId": 3, "amount": 45.0, "date": "2023-12-12",
     "description": "Cookbook gift set"},
    {"id": 14, "customerId": 5, "shopId": 5, "amount": 6.5, "date": "2024-01-03",
     "description": "Espresso"},
    {"id": 15, "customerId": 5, "shopId": 2, "amount": 38.4, "date": "2024-03-09",
     "description": "Fresh produce"},
    {"id": 16, "customerId": 6, "shopId": 4, "amount": 150.0, "date": "2024-03-30",
     "description": "Evening dress"},
    {"id": 17, "customerId": 6, "shopId": 4, "amount": 60.0, "date": "2024-05-12",
     "description": "Sneakers"},
    {"id": 18, "customerId": 8, "shopId": 1, "amount": 79.99, "date": "2024-06-01",
     "description": "Mechanical keyboard"},
]


class FixtureSetup:
    """JSON fixture setup for the shop/customer server."""

    def __init__(self, data_dir: str):
        """Initialize fixture setup.

        Args:
            data_dir: Directory the fixture files are written to
        """
        self.data_dir = data_dir
        self.store = DataStore(data_dir)

        # Ensure directory exists
        os.makedirs(self.data_dir, exist_ok=True)

    def _write(self, filename: str, records: list):
        with open(self.store.path_for(filename), "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
            f.write("\n")

    def insert_sample_data(self, overwrite: bool = False) -> bool:
        """Write sample shops, customers and transactions.

        Existing files are left alone unless overwrite is set.

        Returns:
            True if files were written
        """
        if self.store.exists() and not overwrite:
            logger.info("Fixture files already exist in %s, skipping.", self.data_dir)
            return False

        self._write(SHOPS_FILE, SAMPLE_SHOPS)
        self._write(CUSTOMERS_FILE, SAMPLE_CUSTOMERS)
        self._write(TRANSACTIONS_FILE, SAMPLE_TRANSACTIONS)
        logger.info(
            "Sample data written to %s: %d shops, %d customers, %d transactions",
            self.data_dir, len(SAMPLE_SHOPS), len(SAMPLE_CUSTOMERS), len(SAMPLE_TRANSACTIONS),
        )
        return True

    def verify_data(self) -> dict:
        """Load the fixtures back and report collection sizes."""
        data = self.store.load()
        counts = {
            "shops": len(data.shops),
            "customers": len(data.customers),
            "transactions": len(data.transactions),
        }
        logger.info("Verified fixtures: %s", counts)
        return counts
