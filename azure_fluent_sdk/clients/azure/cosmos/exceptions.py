"""
Typed failures raised by the Cosmos DB client surface.

Applications are expected to catch ``CosmosException`` around every synchronous
Cosmos call. It carries the HTTP status code, the response headers and, when the
service returned one, the structured error payload (``CosmosError``). Derived
values such as the sub-status code or the retry hint are computed from the
response headers on access and never stored twice.

Example:
    >>> try:
    ...     client.create_database("orders")
    ... except CosmosException as e:
    ...     if e.status_code == 429:
    ...         time.sleep(e.retry_after.total_seconds())
"""

from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from azure.core.exceptions import AzureError
from azure.core.utils import CaseInsensitiveDict
from pydantic import BaseModel, ConfigDict, Field

from azure_fluent_sdk.clients.azure.cosmos.constants import HttpHeaders, SubStatusCodes


class CosmosError(BaseModel):
    """Structured error payload returned by the Cosmos DB service.

    Attributes:
        code (Optional[str]): Service error code, e.g. ``"Conflict"``.
        message (Optional[str]): Human readable error message.
        errors (Optional[Any]): Nested error details (wire name ``Errors``).
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    code: Optional[str] = None
    message: Optional[str] = None
    errors: Optional[Any] = Field(default=None, alias="Errors")


class CosmosDiagnostics(BaseModel):
    """Client-side diagnostics attached to a failure by the synchronous client."""

    operation: str
    duration_ms: float

    def __str__(self) -> str:
        return self.model_dump_json()


def filter_sensitive_headers(
    headers: Optional[Mapping[str, str]],
) -> Optional[Dict[str, str]]:
    """Return a copy of ``headers`` without the authorization header.

    The authorization header is matched case-insensitively.

    Args:
        headers (Optional[Mapping[str, str]]): Request headers.

    Returns:
        Optional[Dict[str, str]]: The remaining headers, or ``None`` if ``headers`` is ``None``.
    """
    if headers is None:
        return None
    return {
        key: value
        for key, value in headers.items()
        if key.lower() != HttpHeaders.AUTHORIZATION
    }


def _header_as_int(headers: Mapping[str, str], key: str) -> Optional[int]:
    value = headers.get(key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class CosmosException(AzureError):
    """Typed failure for all operations of the Cosmos DB client surface.

    Attributes:
        status_code (int): HTTP status code of the failed response.
        response_headers (CaseInsensitiveDict): Response headers, empty when none were given.
        error (Optional[CosmosError]): Structured error payload, if any.
        diagnostics (Optional[CosmosDiagnostics]): Client diagnostics attached after the fact.
        resource_address (Optional[str]): Address of the resource the request targeted.
        request_headers (Optional[Dict[str, str]]): Headers of the failed request.
        request_uri (Optional[str]): URI of the failed request.
        lsn (Optional[int]): Logical sequence number reported by the service.
        partition_key_range_id (Optional[str]): Partition key range that served the request.
    """

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        response_headers: Optional[Mapping[str, str]] = None,
        error: Optional[CosmosError] = None,
        resource_address: Optional[str] = None,
        inner_exception: Optional[BaseException] = None,
    ):
        super().__init__(message if message is not None else "", error=inner_exception)
        self._status_code = status_code
        self._raw_message = message
        self._response_headers = CaseInsensitiveDict(response_headers or {})
        self._error = error
        self._diagnostics: Optional[CosmosDiagnostics] = None
        self.resource_address = resource_address
        self.request_headers: Optional[Dict[str, str]] = None
        self.request_uri: Optional[str] = None
        self.lsn: Optional[int] = None
        self.partition_key_range_id: Optional[str] = None
        if inner_exception is not None:
            self.__cause__ = inner_exception

    @classmethod
    def from_error(
        cls,
        status_code: int,
        error: Optional[CosmosError],
        response_headers: Optional[Mapping[str, str]] = None,
        resource_address: Optional[str] = None,
    ) -> "CosmosException":
        """Build from a structured error payload returned by the service."""
        return cls(
            status_code,
            message=error.message if error is not None else None,
            response_headers=response_headers,
            error=error,
            resource_address=resource_address,
        )

    @classmethod
    def from_message(cls, status_code: int, message: str) -> "CosmosException":
        """Build a client-synthesized failure; the message also becomes the error payload."""
        return cls(status_code, message=message, error=CosmosError(message=message))

    @classmethod
    def from_exception(
        cls, status_code: int, inner_exception: BaseException
    ) -> "CosmosException":
        return cls(status_code, inner_exception=inner_exception)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def response_headers(self) -> CaseInsensitiveDict:
        return self._response_headers

    @property
    def error(self) -> Optional[CosmosError]:
        return self._error

    @property
    def diagnostics(self) -> Optional[CosmosDiagnostics]:
        return self._diagnostics

    def set_diagnostics(self, diagnostics: CosmosDiagnostics) -> "CosmosException":
        self._diagnostics = diagnostics
        return self

    @property
    def activity_id(self) -> Optional[str]:
        """Activity id of the failed request; ``None`` when the header is absent."""
        return self._response_headers.get(HttpHeaders.ACTIVITY_ID)

    @property
    def sub_status_code(self) -> int:
        """Sub-status code, or ``SubStatusCodes.UNKNOWN`` when absent or not an integer."""
        code = _header_as_int(self._response_headers, HttpHeaders.SUB_STATUS)
        return SubStatusCodes.UNKNOWN if code is None else code

    @property
    def retry_after_in_ms(self) -> int:
        """Server-recommended retry delay in milliseconds.

        Absent, unparsable and negative values all yield 0: without explicit
        guidance from the service no delay is introduced.
        """
        millis = _header_as_int(
            self._response_headers, HttpHeaders.RETRY_AFTER_IN_MILLISECONDS
        )
        if millis is None or millis < 0:
            return 0
        return millis

    @property
    def retry_after(self) -> timedelta:
        return timedelta(milliseconds=self.retry_after_in_ms)

    def inner_error_message(self) -> Optional[str]:
        """Message of the error payload, its nested ``Errors`` field, or the raw message."""
        if self._error is None:
            return self._raw_message
        if self._error.message is not None:
            return self._error.message
        return str(self._error.errors)

    def _cause_info(self) -> Optional[str]:
        cause = self.__cause__
        if cause is None:
            return None
        return f"[class: {type(cause).__name__}, message: {cause}]"

    def __str__(self) -> str:
        message = self.inner_error_message()
        if message is None:
            message = ""
        if self._diagnostics is None:
            return message
        return f"{message}, {self._diagnostics}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error={self._error!r}, "
            f"resource_address={self.resource_address!r}, "
            f"status_code={self._status_code}, message={str(self)!r}, "
            f"cause_info={self._cause_info()!r}, "
            f"response_headers={dict(self._response_headers)!r}, "
            f"request_headers={filter_sensitive_headers(self.request_headers)!r})"
        )
