"""
Azure client module for the azure-fluent-sdk.

This module provides synchronous surfaces over asynchronous Azure clients and
helpers shared by them.

The module includes:
- cosmos: CosmosClient and the CosmosException typed failure
- Utilities: Event Hub connection strings and resource id helpers
"""

from .azure_utils import (
    format_azure_error_message,
    get_eventhub_namespace,
    parse_connection_string,
    parse_resource_id,
)

__all__ = [
    "format_azure_error_message",
    "get_eventhub_namespace",
    "parse_connection_string",
    "parse_resource_id",
]
