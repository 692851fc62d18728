"""
JSON fixture store.

Every load reads shops.json, customers.json and transactions.json from disk;
nothing is cached between requests. Saving customers overwrites the file in
place with no lock, so concurrent writers race and the last one wins.
"""

import json
import logging
import os
from typing import Any, List

from .errors import StorageError
from .models import Customer, ShopData

logger = logging.getLogger(__name__)

SHOPS_FILE = "shops.json"
CUSTOMERS_FILE = "customers.json"
TRANSACTIONS_FILE = "transactions.json"


class DataStore:
    """Handle on a directory of fixture files, created once at startup."""

    def __init__(self, data_dir: str):
        """
        Initialize the store.
        
        Args:
            data_dir: Directory holding the three JSON fixture files
        """
        self.data_dir = data_dir

    def __repr__(self) -> str:
        return f"DataStore(data_dir={self.data_dir!r})"

    def path_for(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    def _read_array(self, filename: str) -> List[Any]:
        path = self.path_for(filename)
        logger.debug("Loading %s from: %s", filename, path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error loading %s: %s", path, e)
            raise StorageError(f"Failed to load data file {filename}: {e}") from e
        if not isinstance(records, list):
            raise StorageError(f"Data file {filename} must contain a JSON array")
        return records

    def load(self) -> ShopData:
        """Read all three collections fresh from disk."""
        return ShopData(
            shops=self._read_array(SHOPS_FILE),
            customers=self._read_array(CUSTOMERS_FILE),
            transactions=self._read_array(TRANSACTIONS_FILE),
        )

    def save_customers(self, customers: List[Customer]) -> None:
        """Overwrite customers.json with the full collection."""
        path = self.path_for(CUSTOMERS_FILE)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(customers, f, indent=2)
                f.write("\n")
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            raise StorageError(f"Failed to save customers: {e}") from e
        logger.debug("Wrote %d customers to %s", len(customers), path)

    def exists(self) -> bool:
        """Whether all fixture files are present."""
        return all(
            os.path.isfile(self.path_for(name))
            for name in (SHOPS_FILE, CUSTOMERS_FILE, TRANSACTIONS_FILE)
        )
