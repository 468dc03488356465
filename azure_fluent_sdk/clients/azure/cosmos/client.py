"""
Synchronous Cosmos DB client.

``CosmosClient`` exposes the account-level operations of an asynchronous Cosmos
client as blocking calls. Each method has the same argument shape as its
asynchronous counterpart, blocks on the deferred result, and returns the mapped
response directly. Service failures are raised as ``CosmosException``; anything
else is raised as ``UnexpectedFailureError``.

Example:
    >>> from azure_fluent_sdk.clients.azure.cosmos import CosmosClient, CosmosException
    >>>
    >>> with CosmosClient(async_client) as client:
    ...     try:
    ...         response = client.create_database_if_not_exists("orders")
    ...         print(response.properties.id, response.request_charge)
    ...     except CosmosException as e:
    ...         print(e.status_code, e.sub_status_code, e.activity_id)
    ...
    ...     for database in client.read_all_databases():
    ...         print(database.id)
"""

import time
from typing import Any, Callable, Optional, Union

from azure_fluent_sdk.clients.azure.cosmos.constants import HttpHeaders
from azure_fluent_sdk.clients.azure.cosmos.exceptions import (
    CosmosDiagnostics,
    CosmosException,
)
from azure_fluent_sdk.clients.azure.cosmos.models import (
    CosmosAsyncDatabaseResponse,
    CosmosDatabaseProperties,
    CosmosDatabaseRequestOptions,
    FeedOptions,
    SqlQuerySpec,
)
from azure_fluent_sdk.clients.azure.cosmos.protocols import (
    CosmosAsyncClientProtocol,
    CosmosAsyncDatabaseProtocol,
)
from azure_fluent_sdk.common.error_codes import ClientError
from azure_fluent_sdk.common.paging import PagedIterable
from azure_fluent_sdk.common.sync_adapter import (
    EventLoopThread,
    block_and_map,
    translate_exception,
)
from azure_fluent_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

COSMOS_TYPED_ERRORS = (CosmosException,)


class CosmosDatabaseResponse:
    """Synchronous view of a database response.

    Attributes:
        properties (Optional[CosmosDatabaseProperties]): The database properties.
        status_code (int): HTTP status code.
        headers (Dict[str, str]): Response headers.
        database (Optional[CosmosDatabase]): Synchronous handle for the database.
    """

    def __init__(self, response: CosmosAsyncDatabaseResponse, client: "CosmosClient"):
        self.properties = response.properties
        self.status_code = response.status_code
        self.headers = response.headers
        self.database: Optional[CosmosDatabase] = None
        if response.properties is not None:
            self.database = CosmosDatabase(
                response.properties.id, client, response.database
            )

    @property
    def activity_id(self) -> Optional[str]:
        return _header(self.headers, HttpHeaders.ACTIVITY_ID)

    @property
    def request_charge(self) -> float:
        """Request units consumed by the operation; 0.0 when not reported."""
        value = _header(self.headers, HttpHeaders.REQUEST_CHARGE)
        try:
            return float(value) if value else 0.0
        except ValueError:
            return 0.0


def _header(headers: dict, key: str) -> Optional[str]:
    for name, value in headers.items():
        if name.lower() == key:
            return value
    return None


class CosmosDatabase:
    """Synchronous handle for a single database.

    Obtained from ``CosmosClient.get_database``; creating it performs no I/O.
    """

    def __init__(
        self,
        id: str,
        client: "CosmosClient",
        async_database: Optional[CosmosAsyncDatabaseProtocol],
    ):
        self._id = id
        self._client = client
        self._async_database = async_database

    @property
    def id(self) -> str:
        return self._id

    def _async(self) -> CosmosAsyncDatabaseProtocol:
        if self._async_database is None:
            self._async_database = self._client.async_client.get_database(self._id)
        return self._async_database

    def read(
        self, options: Optional[CosmosDatabaseRequestOptions] = None
    ) -> CosmosDatabaseResponse:
        """Read the database properties.

        Raises:
            CosmosException: If the service reports a failure (e.g. 404).
        """
        return self._client.map_database_response_and_block(
            lambda: self._async().read(options), operation="read_database"
        )

    def delete(
        self, options: Optional[CosmosDatabaseRequestOptions] = None
    ) -> CosmosDatabaseResponse:
        """Delete the database.

        Raises:
            CosmosException: If the service reports a failure.
        """
        logger.info(f"Deleting Cosmos database {self._id}")
        return self._client.map_database_response_and_block(
            lambda: self._async().delete(options), operation="delete_database"
        )

    def __repr__(self) -> str:
        return f"CosmosDatabase(id={self._id!r})"


class CosmosClient:
    """Blocking client over an asynchronous Cosmos DB client.

    Attributes:
        async_client (CosmosAsyncClientProtocol): The wrapped asynchronous client.
        runner (EventLoopThread): Loop the asynchronous calls run on.
    """

    def __init__(
        self,
        async_client: CosmosAsyncClientProtocol,
        runner: Optional[EventLoopThread] = None,
    ):
        """
        Args:
            async_client (CosmosAsyncClientProtocol): Client performing the actual I/O.
            runner (Optional[EventLoopThread]): Loop to run the asynchronous calls on.
                A private loop thread is created when omitted and closed with the client.
        """
        self.async_client = async_client
        self._owns_runner = runner is None
        self.runner = runner or EventLoopThread()
        self._closed = False

    def create_database_if_not_exists(
        self,
        database: Union[str, CosmosDatabaseProperties],
        throughput: Optional[int] = None,
    ) -> CosmosDatabaseResponse:
        """Create a database unless one with the same id already exists.

        Args:
            database (Union[str, CosmosDatabaseProperties]): Database id or properties.
            throughput (Optional[int]): Provisioned throughput, applied on creation only.

        Returns:
            CosmosDatabaseResponse: The created or existing database.

        Raises:
            CosmosException: If the service reports a failure.
        """
        properties = _to_properties(database)
        return self.map_database_response_and_block(
            lambda: self.async_client.create_database_if_not_exists(
                properties, throughput
            ),
            operation="create_database_if_not_exists",
        )

    def create_database(
        self,
        database: Union[str, CosmosDatabaseProperties],
        throughput: Optional[int] = None,
        options: Optional[CosmosDatabaseRequestOptions] = None,
    ) -> CosmosDatabaseResponse:
        """Create a database.

        Args:
            database (Union[str, CosmosDatabaseProperties]): Database id or properties.
            throughput (Optional[int]): Provisioned throughput.
            options (Optional[CosmosDatabaseRequestOptions]): Request options.

        Returns:
            CosmosDatabaseResponse: The created database.

        Raises:
            CosmosException: If the service reports a failure, e.g. 409 when the id is taken.
        """
        properties = _to_properties(database)
        return self.map_database_response_and_block(
            lambda: self.async_client.create_database(properties, throughput, options),
            operation="create_database",
        )

    def read_all_databases(
        self, options: Optional[FeedOptions] = None
    ) -> PagedIterable[CosmosDatabaseProperties]:
        """Read all databases of the account.

        Returns:
            PagedIterable[CosmosDatabaseProperties]: Forward-only iterable; use
            ``by_page()`` to iterate page by page.
        """
        return self._feed_iterable(lambda: self.async_client.read_all_databases(options))

    def query_databases(
        self,
        query: Union[str, SqlQuerySpec],
        options: Optional[FeedOptions] = None,
    ) -> PagedIterable[CosmosDatabaseProperties]:
        """Query databases with a SQL query string or a parameterized ``SqlQuerySpec``."""
        return self._feed_iterable(
            lambda: self.async_client.query_databases(query, options)
        )

    def get_database(self, id: str) -> CosmosDatabase:
        """Return a synchronous handle for database ``id`` without contacting the service."""
        return CosmosDatabase(id, self, self.async_client.get_database(id))

    def map_database_response_and_block(
        self, producer: Callable[[], Any], operation: str
    ) -> CosmosDatabaseResponse:
        """Block on ``producer()`` and wrap the result in a ``CosmosDatabaseResponse``.

        A ``CosmosException`` without diagnostics gets ``CosmosDiagnostics`` for
        ``operation`` attached before it is re-raised unchanged otherwise.
        """
        self._check_open()
        started = time.monotonic()
        try:
            return block_and_map(
                producer,
                self._convert_response,
                runner=self.runner,
                typed_errors=COSMOS_TYPED_ERRORS,
            )
        except CosmosException as e:
            if e.diagnostics is None:
                e.set_diagnostics(
                    CosmosDiagnostics(
                        operation=operation,
                        duration_ms=(time.monotonic() - started) * 1000,
                    )
                )
            raise

    def _convert_response(
        self, response: CosmosAsyncDatabaseResponse
    ) -> CosmosDatabaseResponse:
        return CosmosDatabaseResponse(response, self)

    def _feed_iterable(
        self, open_feed: Callable[[], Any]
    ) -> PagedIterable[CosmosDatabaseProperties]:
        """Open a feed on the asynchronous client and wrap it for blocking iteration.

        Failures raised while opening the feed are translated like page failures.
        """
        self._check_open()
        try:
            source = open_feed()
        except Exception as e:
            failure = translate_exception(e, COSMOS_TYPED_ERRORS)
        else:
            return PagedIterable(source, self.runner, typed_errors=COSMOS_TYPED_ERRORS)
        raise failure

    def _check_open(self) -> None:
        if self._closed:
            raise ClientError(f"{ClientError.CLIENT_CLOSED_ERROR}: CosmosClient is closed")

    def close(self) -> None:
        """Close the asynchronous client and, if owned, the event loop thread."""
        if self._closed:
            return
        logger.info("Closing Cosmos client...")
        try:
            block_and_map(
                self.async_client.close,
                lambda _: None,
                runner=self.runner,
                typed_errors=COSMOS_TYPED_ERRORS,
            )
        finally:
            self._closed = True
            if self._owns_runner:
                self.runner.close()
        logger.info("Cosmos client closed successfully")

    def __enter__(self) -> "CosmosClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _to_properties(
    database: Union[str, CosmosDatabaseProperties],
) -> CosmosDatabaseProperties:
    if isinstance(database, CosmosDatabaseProperties):
        return database
    if isinstance(database, str) and database:
        return CosmosDatabaseProperties(id=database)
    raise ClientError(
        f"{ClientError.INPUT_VALIDATION_ERROR}: database must be a non-empty id or CosmosDatabaseProperties"
    )
