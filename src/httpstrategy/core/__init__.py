r"""Core configuration and validation for the request executor."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRY",
    "DEFAULT_TIMEOUT",
    "RequestConfig",
    "find_configuration_error",
    "validate_configuration",
]

from httpstrategy.core.config import DEFAULT_MAX_RETRY, DEFAULT_TIMEOUT, RequestConfig
from httpstrategy.core.validation import find_configuration_error, validate_configuration
