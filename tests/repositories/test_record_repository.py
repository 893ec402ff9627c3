"""Tests for RecordRepository"""
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from admin_cleanup.core.errors import StoreOperationFailure
from admin_cleanup.models.filters import Equals, In, MatchAll, NotEquals
from admin_cleanup.repositories.record_repository import RecordRepository


@pytest.fixture
def mock_collection():
    """Mock Motor collection"""
    collection = AsyncMock()
    collection.name = "users"
    return collection


@pytest.fixture
def repository(mock_collection):
    return RecordRepository(mock_collection)


class TestDeleteMany:

    @pytest.mark.asyncio
    async def test_returns_deleted_count(self, repository, mock_collection):
        mock_collection.delete_many.return_value = SimpleNamespace(deleted_count=4)

        deleted = await repository.delete_many(NotEquals(field="role", value="admin"))

        assert deleted == 4
        mock_collection.delete_many.assert_awaited_once_with({"role": {"$ne": "admin"}})

    @pytest.mark.asyncio
    async def test_driver_error_wrapped(self, repository, mock_collection):
        mock_collection.delete_many.side_effect = OperationFailure("not authorized")

        with pytest.raises(StoreOperationFailure) as exc_info:
            await repository.delete_many(MatchAll())

        error = exc_info.value
        assert error.operation == "delete_many"
        assert error.collection == "users"
        assert isinstance(error.cause, OperationFailure)
        assert error.__cause__ is error.cause

    @pytest.mark.asyncio
    async def test_non_driver_errors_propagate_unchanged(self, repository, mock_collection):
        mock_collection.delete_many.side_effect = TypeError("bad query")

        with pytest.raises(TypeError):
            await repository.delete_many(MatchAll())


class TestFind:

    @pytest.mark.asyncio
    async def test_returns_documents(self, repository, mock_collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": 1, "email": "a@example.com"}])
        mock_collection.find = MagicMock(return_value=cursor)

        documents = await repository.find(Equals(field="role", value="admin"), projection={"email": 1})

        assert documents == [{"_id": 1, "email": "a@example.com"}]
        mock_collection.find.assert_called_once_with({"role": "admin"}, {"email": 1})
        cursor.to_list.assert_awaited_once_with(length=None)

    @pytest.mark.asyncio
    async def test_cursor_error_wrapped(self, repository, mock_collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        mock_collection.find = MagicMock(return_value=cursor)

        with pytest.raises(StoreOperationFailure) as exc_info:
            await repository.find(MatchAll())

        assert exc_info.value.operation == "find"


class TestCount:

    @pytest.mark.asyncio
    async def test_count(self, repository, mock_collection):
        mock_collection.count_documents.return_value = 2

        count = await repository.count(In(field="vendor_id", values=["v1", "v2"]))

        assert count == 2
        mock_collection.count_documents.assert_awaited_once_with({"vendor_id": {"$in": ["v1", "v2"]}})

    @pytest.mark.asyncio
    async def test_count_error_wrapped(self, repository, mock_collection):
        mock_collection.count_documents.side_effect = OperationFailure("interrupted")

        with pytest.raises(StoreOperationFailure) as exc_info:
            await repository.count(MatchAll())

        assert exc_info.value.operation == "count"
        assert "interrupted" in str(exc_info.value)
