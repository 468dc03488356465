"""Contract of the asynchronous Cosmos DB client the synchronous surface wraps.

Every action returns a deferred result (a coroutine) or a paged sequence.
Server-reported errors must surface as ``CosmosException``; transport errors must
not be turned into success values.
"""

from typing import Any, Optional, Protocol, Union

from azure_fluent_sdk.clients.azure.cosmos.models import (
    CosmosAsyncDatabaseResponse,
    CosmosDatabaseProperties,
    CosmosDatabaseRequestOptions,
    FeedOptions,
    SqlQuerySpec,
)


class CosmosAsyncDatabaseProtocol(Protocol):
    """Asynchronous handle for a single database."""

    @property
    def id(self) -> str: ...

    async def read(
        self, options: Optional[CosmosDatabaseRequestOptions] = None
    ) -> CosmosAsyncDatabaseResponse: ...

    async def delete(
        self, options: Optional[CosmosDatabaseRequestOptions] = None
    ) -> CosmosAsyncDatabaseResponse: ...


class CosmosAsyncClientProtocol(Protocol):
    """Asynchronous account-level client."""

    async def create_database(
        self,
        properties: CosmosDatabaseProperties,
        throughput: Optional[int] = None,
        options: Optional[CosmosDatabaseRequestOptions] = None,
    ) -> CosmosAsyncDatabaseResponse: ...

    async def create_database_if_not_exists(
        self,
        properties: CosmosDatabaseProperties,
        throughput: Optional[int] = None,
    ) -> CosmosAsyncDatabaseResponse: ...

    def read_all_databases(self, options: Optional[FeedOptions] = None) -> Any:
        """Return a paged sequence of ``CosmosDatabaseProperties``."""
        ...

    def query_databases(
        self,
        query: Union[str, SqlQuerySpec],
        options: Optional[FeedOptions] = None,
    ) -> Any:
        """Return a paged sequence of ``CosmosDatabaseProperties``."""
        ...

    def get_database(self, id: str) -> CosmosAsyncDatabaseProtocol: ...

    async def close(self) -> None: ...
