"""Wire constants used by the Cosmos DB client surface."""


class HttpHeaders:
    """Response and request header names read by the Cosmos client."""

    ACTIVITY_ID = "x-ms-activity-id"
    SUB_STATUS = "x-ms-substatus"
    RETRY_AFTER_IN_MILLISECONDS = "x-ms-retry-after-ms"
    REQUEST_CHARGE = "x-ms-request-charge"
    SESSION_TOKEN = "x-ms-session-token"
    AUTHORIZATION = "authorization"


class SubStatusCodes:
    """Sub-status values with a fixed meaning on the client side."""

    # Header absent or not an integer.
    UNKNOWN = 0


class StatusCodes:
    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    TOO_MANY_REQUESTS = 429
