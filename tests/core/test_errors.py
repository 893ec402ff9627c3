"""Tests for error types"""
from pymongo.errors import OperationFailure

from admin_cleanup.core.errors import CleanupError, ConfigurationError, StoreOperationFailure


class TestCleanupError:

    def test_creation(self):
        error = CleanupError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_with_details(self):
        error = ConfigurationError("Invalid configuration", details={"errors": ["bad policy"]})
        assert isinstance(error, CleanupError)
        assert error.details == {"errors": ["bad policy"]}


class TestStoreOperationFailure:

    def test_message_includes_collection_and_cause(self):
        cause = OperationFailure("not authorized")
        error = StoreOperationFailure("delete_many", "customers", cause)

        assert str(error) == "Store operation 'delete_many' on 'customers' failed: not authorized"
        assert error.details == {
            "operation": "delete_many",
            "collection": "customers",
            "cause": "OperationFailure",
        }

    def test_without_collection(self):
        error = StoreOperationFailure("connect")
        assert str(error) == "Store operation 'connect' failed"
        assert error.details == {"operation": "connect"}
        assert isinstance(error, CleanupError)
