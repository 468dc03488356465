"""
Cosmos DB client surface.

- CosmosClient: blocking client over an asynchronous Cosmos client
- CosmosDatabase: blocking handle for one database
- CosmosException: the typed failure raised by every Cosmos operation
"""

from .client import CosmosClient, CosmosDatabase, CosmosDatabaseResponse
from .constants import HttpHeaders, StatusCodes, SubStatusCodes
from .exceptions import (
    CosmosDiagnostics,
    CosmosError,
    CosmosException,
    filter_sensitive_headers,
)
from .models import (
    CosmosAsyncDatabaseResponse,
    CosmosDatabaseProperties,
    CosmosDatabaseRequestOptions,
    FeedOptions,
    SqlParameter,
    SqlQuerySpec,
)
from .protocols import CosmosAsyncClientProtocol, CosmosAsyncDatabaseProtocol

__all__ = [
    "CosmosClient",
    "CosmosDatabase",
    "CosmosDatabaseResponse",
    "CosmosException",
    "CosmosError",
    "CosmosDiagnostics",
    "filter_sensitive_headers",
    "HttpHeaders",
    "StatusCodes",
    "SubStatusCodes",
    "CosmosAsyncDatabaseResponse",
    "CosmosDatabaseProperties",
    "CosmosDatabaseRequestOptions",
    "FeedOptions",
    "SqlParameter",
    "SqlQuerySpec",
    "CosmosAsyncClientProtocol",
    "CosmosAsyncDatabaseProtocol",
]
