from .catalog import OPERATIONS
from .client import VultrClient
from .config_types import ClientConfig
from .errors import (
    ApiError,
    AuthError,
    AvailabilityError,
    ConfigError,
    DecodeError,
    MissingParameterError,
    NetworkError,
    RateLimitedError,
    VultrClientError,
)
from .oslist import filter_os_list
from .transport import ResultShape

__all__ = [
    "VultrClient",
    "ClientConfig",
    "ResultShape",
    "OPERATIONS",
    "filter_os_list",
    "VultrClientError",
    "ApiError",
    "AuthError",
    "AvailabilityError",
    "ConfigError",
    "DecodeError",
    "MissingParameterError",
    "NetworkError",
    "RateLimitedError",
]
