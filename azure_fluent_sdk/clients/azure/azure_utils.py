"""
Azure utilities for the azure-fluent-sdk.

This module provides common helpers for Azure identifiers: connection strings
(Event Hub / Service Bus), Azure Resource Manager resource ids, and compact
rendering of service errors for log lines.
"""

from typing import Dict

from azure.core.exceptions import HttpResponseError

from azure_fluent_sdk.common.error_codes import CommonError
from azure_fluent_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

EVENTHUB_ENDPOINT_PREFIX = "Endpoint=sb://"


def get_eventhub_namespace(connection_string: str) -> str:
    """
    Extract the namespace from an Event Hub connection string.

    The namespace is the host label between ``Endpoint=sb://`` and the first dot,
    e.g. ``myns`` for ``Endpoint=sb://myns.servicebus.windows.net/;...``.

    Args:
        connection_string (str): Event Hub connection string.

    Returns:
        str: The namespace name.

    Raises:
        CommonError: If the string has no ``Endpoint=sb://`` prefix or no dot after it.
    """
    start = connection_string.find(EVENTHUB_ENDPOINT_PREFIX)
    if start < 0:
        raise CommonError(
            f"{CommonError.CONNECTION_STRING_PARSE_ERROR}: missing '{EVENTHUB_ENDPOINT_PREFIX}'"
        )
    start += len(EVENTHUB_ENDPOINT_PREFIX)
    end = connection_string.find(".", start)
    if end < 0:
        raise CommonError(
            f"{CommonError.CONNECTION_STRING_PARSE_ERROR}: endpoint has no host name"
        )
    return connection_string[start:end]


def parse_connection_string(connection_string: str) -> Dict[str, str]:
    """
    Split a ``key=value;key=value`` connection string into a dict.

    Values may contain ``=`` (e.g. base64 keys); only the first ``=`` separates
    the key. Empty segments are ignored.

    Args:
        connection_string (str): The connection string.

    Returns:
        Dict[str, str]: Parsed settings, keys as written.

    Raises:
        CommonError: If a segment has no ``=`` or an empty key.
    """
    settings: Dict[str, str] = {}
    for segment in connection_string.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        if not sep or not key:
            raise CommonError(
                f"{CommonError.CONNECTION_STRING_PARSE_ERROR}: invalid segment '{segment}'"
            )
        settings[key] = value
    return settings


def parse_resource_id(resource_id: str) -> Dict[str, str]:
    """
    Parse an Azure Resource Manager resource id.

    Args:
        resource_id (str): Id such as
            ``/subscriptions/{sub}/resourceGroups/{rg}/providers/{ns}/{type}/{name}``.

    Returns:
        Dict[str, str]: ``subscription_id``, ``resource_group``, ``provider``,
        ``resource_type`` and ``name``.

    Raises:
        CommonError: If the id does not follow the resource-group scoped layout.
    """
    parts = [part for part in resource_id.split("/") if part]
    # subscriptions/{sub}/resourceGroups/{rg}/providers/{ns}/{type}/{name}[/...]
    if (
        len(parts) < 8
        or parts[0].lower() != "subscriptions"
        or parts[2].lower() != "resourcegroups"
        or parts[4].lower() != "providers"
        or (len(parts) - 6) % 2 != 0
    ):
        logger.debug(f"Rejected resource id {resource_id}")
        raise CommonError(
            f"{CommonError.RESOURCE_ID_PARSE_ERROR}: '{resource_id}'"
        )
    return {
        "subscription_id": parts[1],
        "resource_group": parts[3],
        "provider": parts[5],
        "resource_type": "/".join(parts[6:-1:2]),
        "name": parts[-1],
    }


def format_azure_error_message(error: Exception) -> str:
    """
    Render an Azure error on one line for log messages.

    Args:
        error (Exception): Any exception; HTTP errors include their status code.

    Returns:
        str: ``"<Type> (<status>): <message>"`` or ``"<Type>: <message>"``.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(error, HttpResponseError) and error.response is not None:
        status_code = error.response.status_code
    message = str(error).splitlines()[0] if str(error) else ""
    if status_code is not None:
        return f"{type(error).__name__} ({status_code}): {message}"
    return f"{type(error).__name__}: {message}"
