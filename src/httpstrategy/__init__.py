r"""httpstrategy - Strategy-driven asynchronous HTTP requests.

This package sends HTTP requests described by a declarative
configuration and routes every response to a caller-supplied strategy.
Responses are classified as success, no content, failed or
unauthorized; side effects registered for a branch run, in order,
before its strategy. Unauthorized responses can trigger a token
refresh and a new attempt, within a bounded retry budget.

Key Features:
    - Fluent builder with one chainable setter per configuration field
    - Four-way response classification (401, non-2xx, 204, other 2xx)
    - Token refresh and redispatch sharing a single retry budget
    - Sync or async strategies and side effects
    - httpx-based transport turning network errors into failed responses

Example:
    ```pycon
    >>> import asyncio
    >>> from httpstrategy import HttpBuilder
    >>> async def main():  # doctest: +SKIP
    ...     return await (
    ...         HttpBuilder()
    ...         .as_get()
    ...         .with_url("https://api.example.com/data")
    ...         .with_success_strategy(lambda response: response.data)
    ...         .with_failed_strategy(lambda response: None)
    ...         .send()
    ...     )
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "Classification",
    "HttpBuilder",
    "HttpMethod",
    "HttpStrategyError",
    "HttpxTransport",
    "InvalidConfigurationError",
    "RequestConfig",
    "RequestDescriptor",
    "RequestExecutor",
    "Response",
    "ResponseType",
    "Transport",
    "__version__",
    "classify_response",
    "close_default_transport",
    "get_default_transport",
    "set_default_transport",
    "validate_configuration",
]

from importlib.metadata import PackageNotFoundError, version

from httpstrategy.builder import HttpBuilder
from httpstrategy.classifier import Classification, classify_response
from httpstrategy.core.config import RequestConfig
from httpstrategy.core.validation import validate_configuration
from httpstrategy.exceptions import HttpStrategyError, InvalidConfigurationError
from httpstrategy.executor import RequestExecutor
from httpstrategy.request import HttpMethod, RequestDescriptor, ResponseType
from httpstrategy.response import Response
from httpstrategy.transport import (
    HttpxTransport,
    Transport,
    close_default_transport,
    get_default_transport,
    set_default_transport,
)

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
