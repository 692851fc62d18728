"""
Tests for the JSON fixture store, the Result contract and fixture setup.
"""

import json
import os

import pytest

from conftest import CUSTOMERS, SHOPS, TRANSACTIONS, write_fixtures
from shop_mcp.store import (
    DataStore,
    ErrorKind,
    InvalidIdentifierError,
    NotFoundError,
    Result,
    StorageError,
)
from shop_mcp.store.fixture_setup import SAMPLE_CUSTOMERS, FixtureSetup


class TestDataStore:
    """Loading and saving the fixture files."""

    def test_load_reads_all_collections(self, store):
        """All three files are parsed into the snapshot."""
        data = store.load()

        assert data.shops == SHOPS
        assert data.customers == CUSTOMERS
        assert data.transactions == TRANSACTIONS

    def test_load_is_fresh_on_every_call(self, store, data_dir):
        """Changes on disk are visible to the next load."""
        store.load()
        write_fixtures(data_dir, shops=SHOPS[:1])

        assert store.load().shops == SHOPS[:1]

    def test_missing_file_raises_storage_error(self, tmp_path):
        """A missing fixture file is an IO failure."""
        store = DataStore(str(tmp_path))

        with pytest.raises(StorageError) as exc_info:
            store.load()
        assert "shops.json" in exc_info.value.message
        assert exc_info.value.kind is ErrorKind.IO

    def test_malformed_json_raises_storage_error(self, data_dir, store):
        """Unparseable JSON is an IO failure."""
        with open(os.path.join(data_dir, "customers.json"), "w") as f:
            f.write("{not json")

        with pytest.raises(StorageError):
            store.load()

    def test_non_array_file_raises_storage_error(self, data_dir, store):
        """Each fixture file must hold a JSON array."""
        with open(os.path.join(data_dir, "transactions.json"), "w") as f:
            json.dump({"id": 1}, f)

        with pytest.raises(StorageError) as exc_info:
            store.load()
        assert "JSON array" in exc_info.value.message

    def test_save_customers_overwrites_file(self, store, data_dir):
        """Saving replaces the whole customers file."""
        store.save_customers(CUSTOMERS[:1])

        with open(os.path.join(data_dir, "customers.json")) as f:
            assert json.load(f) == CUSTOMERS[:1]
        assert store.load().shops == SHOPS

    def test_exists(self, store, tmp_path):
        assert store.exists() is True
        assert DataStore(str(tmp_path / "nowhere")).exists() is False


class TestShopData:
    """Lookups on a loaded snapshot."""

    @pytest.fixture(autouse=True)
    def setup(self, store):
        self.data = store.load()

    def test_shop_by_id(self):
        assert self.data.shop_by_id(2)["name"] == "Green Grocer"
        assert self.data.shop_by_id(42) is None

    def test_customer_by_id(self):
        assert self.data.customer_by_id(3)["name"] == "Cara Diaz"
        assert self.data.customer_by_id(42) is None

    def test_customers_for_shop(self):
        assert [c["id"] for c in self.data.customers_for_shop(1)] == [1, 3]
        assert self.data.customers_for_shop(3) == []

    def test_transactions_for_customer(self):
        assert [t["id"] for t in self.data.transactions_for_customer(1)] == [1, 2, 3]
        assert self.data.transactions_for_customer(3) == []

    def test_id_lists(self):
        assert self.data.shop_ids() == [1, 2, 3]
        assert self.data.customer_ids() == [1, 2, 3]


class TestResult:
    """The Result contract returned by every operation."""

    def test_ok(self):
        result = Result.ok([1, 2])

        assert result.success is True
        assert result.unwrap() == [1, 2]

    def test_from_error_keeps_kind_and_message(self):
        result = Result.from_error(NotFoundError("Shop with ID 9 not found"))

        assert result.success is False
        assert result.kind is ErrorKind.NOT_FOUND
        assert result.error == "Shop with ID 9 not found"
        with pytest.raises(NotFoundError, match="Shop with ID 9 not found"):
            result.unwrap()

    def test_unwrap_raises_matching_error(self):
        with pytest.raises(InvalidIdentifierError):
            Result.from_error(InvalidIdentifierError("bad id")).unwrap()
        with pytest.raises(NotFoundError):
            Result.fail(ErrorKind.NOT_FOUND, "missing").unwrap()
        with pytest.raises(StorageError):
            Result.fail(ErrorKind.IO, "disk").unwrap()


class TestFixtureSetup:
    """Writing the sample fixtures."""

    def test_insert_sample_data_writes_files(self, tmp_path):
        setup = FixtureSetup(str(tmp_path / "fresh"))

        assert setup.insert_sample_data() is True
        counts = setup.verify_data()
        assert counts["customers"] == len(SAMPLE_CUSTOMERS)
        assert counts["shops"] > 0
        assert counts["transactions"] > 0

    def test_existing_files_are_kept(self, data_dir):
        setup = FixtureSetup(data_dir)

        assert setup.insert_sample_data() is False
        assert setup.store.load().customers == CUSTOMERS

    def test_overwrite_replaces_files(self, data_dir):
        setup = FixtureSetup(data_dir)

        assert setup.insert_sample_data(overwrite=True) is True
        assert setup.store.load().customers == SAMPLE_CUSTOMERS

    def test_sample_favorites_reference_sample_shops(self):
        """Every sample customer's favorite shop exists."""
        from shop_mcp.store.fixture_setup import SAMPLE_SHOPS
        shop_ids = {s["id"] for s in SAMPLE_SHOPS}
        assert all(c["favoriteShopId"] in shop_ids for c in SAMPLE_CUSTOMERS)
