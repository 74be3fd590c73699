"""
Test Helpers.

Settings payloads and the stub API shared by the conftest fixtures and the
tests themselves.
"""

import json
from typing import Any

import httpx

APPLICATION_SETTINGS: dict[str, Any] = {
    "name": "davinci-users",
    "version": "1.0.0",
    "description": "Test application",
    "scheme": "https",
    "hosts": {"auth": "auth.test", "api": "api.test"},
    "endpoints": {
        "auth": "/v1/Auth",
        "users": "/v1/api/user",
        "import_users": "/v1/api/user/ImportUsers",
        "delete_users": "/v1/api/user/DeleteUsers",
    },
    "blobs": {
        "export_users": "users/exportUsers.json",
        "import_users": "users/importUsers.json",
        "delete_users": "users/deleteUsers.json",
    },
    "timeouts": {"request_seconds": 5},
}

LOGGING_SETTINGS: dict[str, Any] = {
    "level": "DEBUG",
    "format": "console",
    "handlers": {
        "console": {"enabled": True},
        "file": {
            "enabled": False,
            "path": "logs/davinci.jsonl",
            "max_bytes": 1048576,
            "backup_count": 1,
        },
    },
}

CREDENTIALS: dict[str, Any] = {"username": "admin@example.com", "password": "secret"}

AUTH_COOKIE = "access_token=eyJhbGciOi.abc.def; Path=/; Secure; HttpOnly"

AUTH_URL = "https://auth.test/v1/Auth"
USERS_URL = "https://api.test/v1/api/user"
IMPORT_URL = "https://api.test/v1/api/user/ImportUsers"
DELETE_URL = "https://api.test/v1/api/user/DeleteUsers"


class StubAPI:
    """
    Records every request and answers from a routing table.

    Routes are keyed by (method, url). A route is either a canned response
    (status, JSON body or raw text) or an exception to raise, which is how
    transport failures are simulated.

    Usage:
        stub.route("GET", USERS_URL, json=[...])
        stub.fail("PUT", IMPORT_URL, httpx.ReadError("Connection reset by peer"))
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Any] = {}

    def route(
        self,
        method: str,
        url: str,
        json: Any = None,
        text: str | None = None,
        status: int = 200,
    ) -> None:
        self._routes[(method, url)] = (status, json, text)

    def fail(self, method: str, url: str, error: Exception) -> None:
        self._routes[(method, url)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        if isinstance(route, Exception):
            raise route
        status, body, text = route
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def bodies(self) -> list[Any]:
        """Decoded JSON bodies of every recorded request."""
        return [json.loads(request.content) for request in self.requests]


def auth_response(*cookies: str) -> dict[str, Any]:
    """Auth endpoint body carrying the given Set-Cookie values."""
    return {
        "headers": [
            {"key": "Content-Type", "value": ["application/json"]},
            {"key": "Set-Cookie", "value": list(cookies)},
        ],
    }
