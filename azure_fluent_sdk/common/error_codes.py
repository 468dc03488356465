"""
Error codes for the azure-fluent-sdk.

This module defines standardized error codes used throughout the SDK.
Error codes follow the format: Azure-{Component}-{HTTP_Code}-{Unique_ID}

Components:
- Client: Client lifecycle and input errors
- Common: Common utility errors (parsing of connection strings and resource ids)
- Management: Fluent resource-manager errors

Service failures are not part of this registry: they are raised with the
azure-core exception taxonomy (``AzureError`` and subclasses) and, for Cosmos DB,
``CosmosException``.
"""

from enum import Enum
from typing import Dict


class ErrorComponent(Enum):
    """Components that can generate errors in the SDK."""

    CLIENT = "Client"
    COMMON = "Common"
    MANAGEMENT = "Management"


class ErrorCode:
    """Error code with component, HTTP code, and description."""

    def __init__(
        self, component: str, http_code: str, unique_id: str, description: str
    ):
        self.code = f"Azure-{component}-{http_code}-{unique_id}"
        self.description = description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# Client Errors
CLIENT_ERRORS = {
    "INPUT_VALIDATION_ERROR": ErrorCode(
        "Client", "400", "00", "Input validation failed"
    ),
    "CLIENT_CLOSED_ERROR": ErrorCode("Client", "409", "00", "Client is closed"),
    "EVENT_LOOP_ERROR": ErrorCode(
        "Client", "500", "00", "Background event loop failed to start"
    ),
}

# Common Utility Errors
COMMON_ERRORS = {
    "CONNECTION_STRING_PARSE_ERROR": ErrorCode(
        "Common", "400", "00", "Connection string parse error"
    ),
    "RESOURCE_ID_PARSE_ERROR": ErrorCode(
        "Common", "400", "01", "Resource id parse error"
    ),
}

# Resource Manager Errors
MANAGEMENT_ERRORS = {
    "RESOURCE_GROUP_MISSING_ERROR": ErrorCode(
        "Management", "400", "00", "Resource group is not set"
    ),
    "RESOURCE_NAME_ERROR": ErrorCode("Management", "400", "01", "Invalid resource name"),
}

# Combined dictionary of all error codes
ERROR_CODES: Dict[str, ErrorCode] = {
    **CLIENT_ERRORS,
    **COMMON_ERRORS,
    **MANAGEMENT_ERRORS,
}


class SdkError(Exception):
    """Base class for errors raised by the SDK itself (not by a service)."""

    pass


class ClientError(SdkError):
    """Raised for client lifecycle and input errors."""

    INPUT_VALIDATION_ERROR = CLIENT_ERRORS["INPUT_VALIDATION_ERROR"]
    CLIENT_CLOSED_ERROR = CLIENT_ERRORS["CLIENT_CLOSED_ERROR"]
    EVENT_LOOP_ERROR = CLIENT_ERRORS["EVENT_LOOP_ERROR"]


class CommonError(SdkError):
    """Raised by common helpers when an input cannot be parsed."""

    CONNECTION_STRING_PARSE_ERROR = COMMON_ERRORS["CONNECTION_STRING_PARSE_ERROR"]
    RESOURCE_ID_PARSE_ERROR = COMMON_ERRORS["RESOURCE_ID_PARSE_ERROR"]


class ManagementError(SdkError):
    """Raised by fluent resource wrappers before any service call is made."""

    RESOURCE_GROUP_MISSING_ERROR = MANAGEMENT_ERRORS["RESOURCE_GROUP_MISSING_ERROR"]
    RESOURCE_NAME_ERROR = MANAGEMENT_ERRORS["RESOURCE_NAME_ERROR"]
