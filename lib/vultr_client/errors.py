from __future__ import annotations


class VultrClientError(Exception):
    """Base client error."""


class ConfigError(VultrClientError):
    """Client was constructed with unusable settings."""


class NetworkError(VultrClientError):
    """Transport/network layer error."""


class MissingParameterError(VultrClientError, ValueError):
    """Request rejected locally before any HTTP call."""


class ApiError(VultrClientError):
    kind = "unclassified"

    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class BadRequestError(ApiError):
    kind = "bad_request"


class AuthError(ApiError):
    """Missing or invalid API key."""

    kind = "auth"


class MethodNotAllowedError(ApiError):
    kind = "method_not_allowed"


class PreconditionFailedError(ApiError):
    kind = "precondition_failed"


class ServerError(ApiError):
    kind = "server_error"


class RateLimitedError(ApiError):
    """Provider allows an average of 2 requests per second."""

    kind = "rate_limited"


class DecodeError(ApiError):
    """Response body was expected to be JSON and was not."""

    kind = "decode"


class AvailabilityError(VultrClientError):
    def __init__(self, region_id: int, plan_id: int):
        super().__init__(f"Plan ID {plan_id} is not available in region {region_id}")
        self.region_id = region_id
        self.plan_id = plan_id
