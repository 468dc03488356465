"""Request and response models of the Cosmos DB client surface."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CosmosDatabaseProperties(BaseModel):
    """Properties of a Cosmos DB database resource.

    Attributes:
        id (str): User supplied database id.
        resource_id (Optional[str]): Service assigned resource id (``_rid``).
        etag (Optional[str]): Entity tag of the resource (``_etag``).
        timestamp (Optional[int]): Last modification time in epoch seconds (``_ts``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    resource_id: Optional[str] = Field(default=None, alias="_rid")
    etag: Optional[str] = Field(default=None, alias="_etag")
    timestamp: Optional[int] = Field(default=None, alias="_ts")


class CosmosDatabaseRequestOptions(BaseModel):
    """Per-request options for database operations."""

    if_match_etag: Optional[str] = None
    if_none_match_etag: Optional[str] = None
    session_token: Optional[str] = None


class FeedOptions(BaseModel):
    """Options for feed (read-all and query) operations."""

    max_item_count: Optional[int] = Field(default=None, ge=1)
    continuation_token: Optional[str] = None
    populate_query_metrics: bool = False


class SqlParameter(BaseModel):
    name: str
    value: Any = None


class SqlQuerySpec(BaseModel):
    """A parameterized SQL query.

    Attributes:
        query_text (str): Query text, e.g. ``SELECT * FROM root r WHERE r.id = @id``.
        parameters (List[SqlParameter]): Values bound to the query placeholders.
    """

    query_text: str
    parameters: List[SqlParameter] = Field(default_factory=list)


class CosmosAsyncDatabaseResponse(BaseModel):
    """Database response as produced by an asynchronous Cosmos client.

    Attributes:
        properties (Optional[CosmosDatabaseProperties]): The database, ``None`` after a delete.
        status_code (int): HTTP status code of the response.
        headers (Dict[str, str]): Response headers.
        database (Any): The asynchronous database handle the response refers to.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    properties: Optional[CosmosDatabaseProperties] = None
    status_code: int = 200
    headers: Dict[str, str] = Field(default_factory=dict)
    database: Any = None
