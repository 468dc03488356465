"""Unit tests for the synchronous Cosmos client."""

from typing import Dict, List, Optional

import pytest

from azure_fluent_sdk.clients.azure.cosmos import (
    CosmosAsyncDatabaseResponse,
    CosmosClient,
    CosmosDatabaseProperties,
    CosmosError,
    CosmosException,
    FeedOptions,
    SqlParameter,
    SqlQuerySpec,
    StatusCodes,
)
from azure_fluent_sdk.common.error_codes import ClientError
from azure_fluent_sdk.common.sync_adapter import (
    CompositionError,
    EventLoopThread,
    UnexpectedFailureError,
)


async def paged(items: list, page_size: int):
    for start in range(0, len(items), page_size):
        yield items[start : start + page_size]


class FakeAsyncDatabase:
    def __init__(self, id: str, store: Dict[str, CosmosDatabaseProperties]):
        self.id = id
        self.store = store

    async def read(self, options=None) -> CosmosAsyncDatabaseResponse:
        if self.id not in self.store:
            raise CosmosException.from_error(
                StatusCodes.NOT_FOUND,
                CosmosError(code="NotFound", message="Resource Not Found"),
                response_headers={"x-ms-substatus": "1003", "x-ms-activity-id": "act-1"},
            )
        return CosmosAsyncDatabaseResponse(
            properties=self.store[self.id],
            headers={"x-ms-request-charge": "1.5"},
            database=self,
        )

    async def delete(self, options=None) -> CosmosAsyncDatabaseResponse:
        await self.read(options)
        del self.store[self.id]
        return CosmosAsyncDatabaseResponse(status_code=StatusCodes.NO_CONTENT)


class FakeAsyncCosmosClient:
    """In-memory stand-in for an asynchronous Cosmos client."""

    def __init__(self, page_size: int = 2):
        self.store: Dict[str, CosmosDatabaseProperties] = {}
        self.page_size = page_size
        self.closed = False
        self.failure: Optional[BaseException] = None
        self.feed_failure: Optional[BaseException] = None
        self.read_all_options: List[Optional[FeedOptions]] = []

    async def create_database(self, properties, throughput=None, options=None):
        if self.failure is not None:
            raise self.failure
        if properties.id in self.store:
            raise CosmosException.from_error(
                StatusCodes.CONFLICT,
                CosmosError(code="Conflict", message="Entity with the specified id already exists"),
            )
        self.store[properties.id] = properties.model_copy(update={"resource_id": "rid=="})
        return CosmosAsyncDatabaseResponse(
            properties=self.store[properties.id],
            status_code=StatusCodes.CREATED,
            headers={"X-MS-Request-Charge": "4.95", "x-ms-activity-id": "act-2"},
            database=self.get_database(properties.id),
        )

    async def create_database_if_not_exists(self, properties, throughput=None):
        if properties.id in self.store:
            return CosmosAsyncDatabaseResponse(
                properties=self.store[properties.id],
                database=self.get_database(properties.id),
            )
        return await self.create_database(properties, throughput)

    def read_all_databases(self, options=None):
        if self.feed_failure is not None:
            raise self.feed_failure
        self.read_all_options.append(options)
        return paged(list(self.store.values()), self.page_size)

    def query_databases(self, query, options=None):
        if self.feed_failure is not None:
            raise self.feed_failure
        wanted = {p.value for p in query.parameters} if isinstance(query, SqlQuerySpec) else set()
        matches = [p for p in self.store.values() if p.id in wanted]
        return paged(matches, self.page_size)

    def get_database(self, id: str) -> FakeAsyncDatabase:
        return FakeAsyncDatabase(id, self.store)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def async_client() -> FakeAsyncCosmosClient:
    return FakeAsyncCosmosClient()


@pytest.fixture
def client(async_client: FakeAsyncCosmosClient, runner: EventLoopThread) -> CosmosClient:
    return CosmosClient(async_client, runner=runner)


class TestCosmosClientDatabases:
    """Tests for blocking database operations."""

    def test_create_database(self, client: CosmosClient):
        response = client.create_database("orders")

        assert response.status_code == StatusCodes.CREATED
        assert response.properties.id == "orders"
        assert response.properties.resource_id == "rid=="
        assert response.database.id == "orders"
        assert response.request_charge == pytest.approx(4.95)
        assert response.activity_id == "act-2"

    def test_create_database_with_properties(self, client: CosmosClient):
        response = client.create_database(CosmosDatabaseProperties(id="billing"))
        assert response.properties.id == "billing"

    def test_create_database_conflict(self, client: CosmosClient):
        client.create_database("orders")

        with pytest.raises(CosmosException) as exc_info:
            client.create_database("orders")

        error = exc_info.value
        assert error.status_code == StatusCodes.CONFLICT
        assert error.diagnostics.operation == "create_database"
        assert error.diagnostics.duration_ms >= 0
        assert "already exists" in str(error)

    def test_wrapped_cosmos_exception_is_unwrapped(
        self, client: CosmosClient, async_client: FakeAsyncCosmosClient
    ):
        """Test a typed failure wrapped by a composition layer is re-raised as itself."""
        error = CosmosException.from_message(StatusCodes.TOO_MANY_REQUESTS, "throttled")
        wrapper = CompositionError("retry policy")
        wrapper.__cause__ = error
        async_client.failure = ExceptionGroup("attempts", [wrapper])

        with pytest.raises(CosmosException) as exc_info:
            client.create_database("orders")

        assert exc_info.value is error

    def test_transport_failure_is_unexpected(
        self, client: CosmosClient, async_client: FakeAsyncCosmosClient
    ):
        async_client.failure = ConnectionResetError("connection reset by peer")

        with pytest.raises(UnexpectedFailureError) as exc_info:
            client.create_database("orders")

        assert isinstance(exc_info.value.cause, ConnectionResetError)

    def test_create_database_if_not_exists(self, client: CosmosClient):
        created = client.create_database_if_not_exists("orders")
        existing = client.create_database_if_not_exists("orders")

        assert created.status_code == StatusCodes.CREATED
        assert existing.status_code == 200
        assert existing.properties.id == "orders"
        assert existing.request_charge == 0.0

    @pytest.mark.parametrize("database", ["", 42, None])
    def test_invalid_database_argument(self, client: CosmosClient, database):
        with pytest.raises(ClientError):
            client.create_database(database)

    def test_read_database(self, client: CosmosClient):
        client.create_database("orders")

        response = client.get_database("orders").read()

        assert response.properties.id == "orders"
        assert response.request_charge == pytest.approx(1.5)

    def test_read_missing_database(self, client: CosmosClient):
        with pytest.raises(CosmosException) as exc_info:
            client.get_database("missing").read()

        error = exc_info.value
        assert error.status_code == StatusCodes.NOT_FOUND
        assert error.sub_status_code == 1003
        assert error.activity_id == "act-1"
        assert error.diagnostics.operation == "read_database"

    def test_delete_database(self, client: CosmosClient):
        database = client.create_database("orders").database

        response = database.delete()

        assert response.status_code == StatusCodes.NO_CONTENT
        assert response.database is None
        with pytest.raises(CosmosException):
            database.read()


class TestCosmosClientFeeds:
    """Tests for paged feed operations."""

    def test_read_all_databases(
        self, client: CosmosClient, async_client: FakeAsyncCosmosClient
    ):
        for name in ("a", "b", "c"):
            client.create_database(name)
        options = FeedOptions(max_item_count=2)

        databases = client.read_all_databases(options)

        assert [database.id for database in databases] == ["a", "b", "c"]
        assert async_client.read_all_options == [options]
        assert list(databases) == []

    def test_read_all_databases_by_page(self, client: CosmosClient):
        for name in ("a", "b", "c"):
            client.create_database(name)

        pages = list(client.read_all_databases().by_page())

        assert [[database.id for database in page] for page in pages] == [["a", "b"], ["c"]]

    def test_query_databases(self, client: CosmosClient):
        for name in ("a", "b", "c"):
            client.create_database(name)
        query = SqlQuerySpec(
            query_text="SELECT * FROM root r WHERE r.id IN (@a, @c)",
            parameters=[SqlParameter(name="@a", value="a"), SqlParameter(name="@c", value="c")],
        )

        assert [database.id for database in client.query_databases(query)] == ["a", "c"]

    def test_read_all_databases_empty(self, client: CosmosClient):
        assert list(client.read_all_databases()) == []

    def test_fresh_feed_after_exhaustion(self, client: CosmosClient):
        """Test a new call reads every database again after a feed is drained."""
        for name in ("a", "b", "c"):
            client.create_database(name)

        first = client.read_all_databases()
        assert [database.id for database in first] == ["a", "b", "c"]
        assert list(first) == []

        second = client.read_all_databases()
        assert [database.id for database in second] == ["a", "b", "c"]

    def test_feed_open_failure_is_unexpected(
        self, client: CosmosClient, async_client: FakeAsyncCosmosClient
    ):
        async_client.feed_failure = ValueError("bad continuation token")

        with pytest.raises(UnexpectedFailureError) as exc_info:
            client.read_all_databases()

        assert isinstance(exc_info.value.cause, ValueError)

    def test_feed_open_failure_is_unwrapped(
        self, client: CosmosClient, async_client: FakeAsyncCosmosClient
    ):
        error = CosmosException.from_message(StatusCodes.BAD_REQUEST, "syntax error")
        wrapper = CompositionError("query plan")
        wrapper.__cause__ = error
        async_client.feed_failure = wrapper

        with pytest.raises(CosmosException) as exc_info:
            client.query_databases("SELECT * FROM root r WHERE")

        assert exc_info.value is error


class TestCosmosClientLifecycle:
    """Tests for closing the client."""

    def test_close(self, client: CosmosClient, async_client: FakeAsyncCosmosClient):
        client.close()

        assert async_client.closed
        with pytest.raises(ClientError):
            client.create_database("orders")
        with pytest.raises(ClientError):
            client.read_all_databases()

    def test_close_is_idempotent(self, client: CosmosClient):
        client.close()
        client.close()

    def test_shared_runner_is_not_closed(
        self, client: CosmosClient, runner: EventLoopThread
    ):
        client.close()
        assert not runner.is_closed

    def test_owned_runner_is_closed(self, async_client: FakeAsyncCosmosClient):
        with CosmosClient(async_client) as client:
            client.create_database("orders")
            runner = client.runner

        assert async_client.closed
        assert runner.is_closed
