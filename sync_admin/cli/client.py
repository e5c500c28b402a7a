"""
HTTP Client for the integration-management API.

Provides an async httpx client carrying the bearer token on every request.
GET only accepts 200 and 201; POST is checked against 2xx unless the caller
opts out and inspects the status itself.
"""

from typing import Any, Mapping

import httpx

from sync_admin.cli.routes import RequestDescriptor
from sync_admin.core.exceptions import ApiStatusError
from sync_admin.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

GET_SUCCESS_STATUSES = frozenset({200, 201})
REDACTED = "[REDACTED]"
SENSITIVE_HEADERS = frozenset({"authorization"})


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy headers with credential values replaced."""
    return {
        key: REDACTED if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def _form_data(data: Mapping[str, Any] | None) -> dict[str, str] | None:
    """Drop unset values; the API reads a missing key as the default."""
    if data is None:
        return None
    return {key: str(value) for key, value in data.items() if value is not None}


class APIClient:
    """
    HTTP client for the integration-management API.

    Features:
    - Bearer token on every request
    - One persistent connection for the invocation
    - Optional request/response echo (debug) with the token redacted

    Usage:
        async with APIClient("https://api.example.com", token) as client:
            response = await client.get("/api/42")
            response = await client.post("/api/42/sync", data={"jiraHost": host})
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        debug: bool = False,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API host, e.g. https://jira-integration.example.com
            token: Personal bearer token
            debug: Log full requests and responses at DEBUG level
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.debug = debug
        self._token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            event_hooks = {}
            if self.debug:
                event_hooks = {
                    "request": [self._log_request],
                    "response": [self._log_response],
                }
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Accept": "application/json",
                },
                event_hooks=event_hooks,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _log_request(self, request: httpx.Request) -> None:
        log_with_source(
            logger,
            "http",
            "debug",
            "API request",
            method=request.method,
            url=str(request.url),
            headers=redact_headers(request.headers),
            body=request.content.decode("utf-8", errors="replace"),
        )

    async def _log_response(self, response: httpx.Response) -> None:
        await response.aread()
        log_with_source(
            logger,
            "http",
            "debug",
            "API response",
            method=response.request.method,
            url=str(response.request.url),
            status_code=response.status_code,
            headers=redact_headers(response.headers),
            body=response.text,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST)
            path: Already-escaped API path (e.g., /api/42)
            params: Query parameters; None values are dropped
            data: Form body; None values are dropped

        Returns:
            httpx.Response

        Raises:
            httpx.TransportError: On connection or TLS failure
        """
        client = await self._get_client()

        log_with_source(logger, "http", "info", "API request", method=method, path=path)

        try:
            response = await client.request(
                method,
                path,
                params=_form_data(params),
                data=_form_data(data),
            )
        except httpx.TransportError as e:
            log_with_source(
                logger,
                "http",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            "http",
            "info",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Make a GET request. Anything but 200/201 raises ApiStatusError."""
        response = await self.request("GET", path, params=params)
        if response.status_code not in GET_SUCCESS_STATUSES:
            raise _status_error(response)
        return response

    async def post(
        self,
        path: str,
        data: Mapping[str, Any] | None = None,
        check: bool = True,
    ) -> httpx.Response:
        """
        Make a form-encoded POST request.

        With check=False the response is returned whatever its status.
        """
        response = await self.request("POST", path, data=data)
        if check and not response.is_success:
            raise _status_error(response)
        return response

    async def execute(self, descriptor: RequestDescriptor, check: bool = True) -> httpx.Response:
        """Issue the request a command resolved to."""
        if descriptor.method == "GET":
            return await self.get(descriptor.path, params=descriptor.params)
        if descriptor.method == "POST":
            return await self.post(descriptor.path, data=descriptor.data, check=check)
        raise ValueError(f"Unsupported method: {descriptor.method}")


def _status_error(response: httpx.Response) -> ApiStatusError:
    return ApiStatusError(
        status_code=response.status_code,
        reason=response.reason_phrase,
        body=response.text,
    )
