"""Shared test fixtures"""
import copy
import io
from types import SimpleNamespace

import pytest
from bson import ObjectId

from admin_cleanup.core.config import Config
from admin_cleanup.repositories.record_repository import RecordRepository
from admin_cleanup.services.report import ConsoleReport


def _matches_condition(value, condition):
    if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
        for op, operand in condition.items():
            if op == "$ne" and value == operand:
                return False
            if op == "$in" and value not in operand:
                return False
            if op not in ("$ne", "$in"):
                raise NotImplementedError(op)
        return True
    return value == condition


def matches(document, query):
    """Evaluate the subset of MongoDB query syntax the cleanup uses"""
    for key, condition in query.items():
        if key == "$and":
            if not all(matches(document, sub) for sub in condition):
                return False
        elif not _matches_condition(document.get(key), condition):
            return False
    return True


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return list(self._documents)


class FakeCollection:
    """In-memory stand-in for a Motor collection"""

    def __init__(self, name, documents=None):
        self.name = name
        self.documents = [copy.deepcopy(doc) for doc in documents or []]
        self.calls = []

    async def delete_many(self, query):
        self.calls.append(("delete_many", query))
        kept = [doc for doc in self.documents if not matches(doc, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)

    def find(self, query, projection=None):
        self.calls.append(("find", query))
        found = [doc for doc in self.documents if matches(doc, query)]
        if projection:
            fields = {k for k, v in projection.items() if v} | {"_id"}
            found = [{k: v for k, v in doc.items() if k in fields} for doc in found]
        return FakeCursor(copy.deepcopy(found))

    async def count_documents(self, query):
        self.calls.append(("count_documents", query))
        return sum(1 for doc in self.documents if matches(doc, query))


class FakeConnection:
    """Connection double that records connect/close calls"""

    def __init__(self, collections, fail_connect=None):
        self.collections = collections
        self.fail_connect = fail_connect
        self.connect_calls = 0
        self.close_calls = 0

    async def connect(self):
        self.connect_calls += 1
        if self.fail_connect:
            raise self.fail_connect
        return self

    def collection(self, name):
        return self.collections[name]

    async def close(self):
        self.close_calls += 1


VENDOR_1 = ObjectId("64b7f0a1c2d3e4f5a6b7c801")
VENDOR_2 = ObjectId("64b7f0a1c2d3e4f5a6b7c802")
ADMIN_ID = ObjectId("64b7f0a1c2d3e4f5a6b7c9ff")


@pytest.fixture
def config():
    """Config that ignores the developer's .env file"""
    return Config(_env_file=None, mongodb_database="admin_dashboard_test")


@pytest.fixture
def admin_doc():
    return {"_id": ADMIN_ID, "role": "admin", "vendor_id": None,
            "email": "admin@example.com", "name": "Site Admin"}


@pytest.fixture
def store(admin_doc):
    """3 customer requests, 2 vendors, 2 vendor users, 1 customer user, 1 admin"""
    return {
        "customers": FakeCollection("customers", [
            {"_id": ObjectId(), "name": "Request 1"},
            {"_id": ObjectId(), "name": "Request 2"},
            {"_id": ObjectId(), "name": "Request 3"},
        ]),
        "vendorregisters": FakeCollection("vendorregisters", [
            {"_id": VENDOR_1, "business_name": "Vendor One"},
            {"_id": VENDOR_2, "business_name": "Vendor Two"},
        ]),
        "users": FakeCollection("users", [
            {"_id": ObjectId(), "role": "vendor", "vendor_id": VENDOR_1, "email": "v1@example.com"},
            {"_id": ObjectId(), "role": "vendor", "vendor_id": VENDOR_2, "email": "v2@example.com"},
            {"_id": ObjectId(), "role": "customer", "vendor_id": None, "email": "c@example.com"},
            admin_doc,
        ]),
    }


@pytest.fixture
def repositories(store):
    return {
        "customers": RecordRepository(store["customers"]),
        "vendors": RecordRepository(store["vendorregisters"]),
        "users": RecordRepository(store["users"]),
    }


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def error_output():
    return io.StringIO()


@pytest.fixture
def report(output, error_output):
    return ConsoleReport(stream=output, error_stream=error_output)
