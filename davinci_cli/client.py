"""
HTTP Client.

Request dispatcher for the DaVinci auth and user-management APIs. Every
remote call made by the application goes through APIClient.dispatch.

Wire contract:
- Content-Type: application/json on every request
- Cookie header only when a session token is supplied
- Body is always the JSON serialization of the payload, so a call without
  a payload sends the literal body ``null``
- Empty response bodies parse as ``{}``
- No automatic retries
"""

import json
from typing import Any

import httpx

from davinci_cli.core.exceptions import NetworkError, ParseError
from davinci_cli.core.logging import get_logger, log_with_source
from davinci_cli.schemas.user import Method, Request, SessionToken

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class APIClient:
    """
    HTTP client for DaVinci API communication.

    One underlying httpx.AsyncClient is opened lazily and reused for every
    call until close(). Calls are awaited one at a time; the client never
    has two requests in flight.

    Usage:
        async with APIClient() as client:
            users = await client.dispatch(Method.GET, "api.contactcanvas.com",
                                          "/v1/api/user", token=token)
    """

    def __init__(
        self,
        scheme: str = "https",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            scheme: URL scheme used for every host (https outside of tests).
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, used to stub the wire in tests.
        """
        self.scheme = scheme
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, token: SessionToken | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token is not None:
            headers["Cookie"] = token.cookie
        return headers

    async def send(self, request: Request) -> Any:
        """
        Send a request and return the parsed JSON body.

        Raises:
            NetworkError: On connection, TLS, reset or timeout failures
            ParseError: If a non-empty response body cannot be decoded or is not JSON
        """
        client = await self._get_client()
        url = f"{self.scheme}://{request.host}{request.path or '/'}"

        log_with_source(
            logger,
            "api",
            "debug",
            "API request",
            method=request.method.value,
            host=request.host,
            path=request.path,
            authenticated=request.token is not None,
        )

        try:
            response = await client.request(
                request.method.value,
                url,
                content=request.body(),
                headers=self._build_headers(request.token),
            )
        except httpx.DecodingError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API response undecodable",
                method=request.method.value,
                host=request.host,
                path=request.path,
                error=str(e),
            )
            raise ParseError(
                f"{request.method.value} {request.host}{request.path} returned an undecodable body: {e}"
            ) from e
        except httpx.RequestError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=request.method.value,
                host=request.host,
                path=request.path,
                error=str(e) or type(e).__name__,
            )
            raise NetworkError(
                f"{request.method.value} {request.host}{request.path} failed: "
                f"{str(e) or type(e).__name__}"
            ) from e

        log_with_source(
            logger,
            "api",
            "warning" if response.status_code >= 400 else "debug",
            "API response",
            method=request.method.value,
            path=request.path,
            status_code=response.status_code,
        )

        return _parse_body(response.text)

    async def dispatch(
        self,
        method: Method | str,
        host: str,
        path: str,
        payload: Any = None,
        token: SessionToken | None = None,
    ) -> Any:
        """
        Make a JSON request against a host.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            host: Host name, e.g. api.contactcanvas.com
            path: Endpoint path, e.g. /v1/api/user
            payload: JSON-serializable body; None is sent as ``null``
            token: Session token; adds the Cookie header when present

        Returns:
            Parsed JSON body (object or array)
        """
        return await self.send(
            Request(method=Method(method), host=host, path=path, payload=payload, token=token)
        )


def _parse_body(text: str) -> Any:
    """Parse a response body, treating an empty body as an empty object."""
    if not text:
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e
