"""
Session Acquisition.

Exchanges the static credentials for a session token. The auth endpoint
answers with a JSON body whose ``headers`` list mirrors the response
headers as ``{"key": ..., "value": [...]}`` entries. The first Set-Cookie
value carrying an access token is kept whole and reused verbatim as the
Cookie header of every later request.

If the service ever returns several matching cookies, the first one wins.
"""

from typing import Any

from davinci_cli.client import APIClient
from davinci_cli.core.exceptions import ApplicationError, AuthenticationError
from davinci_cli.core.logging import get_logger, log_with_source
from davinci_cli.schemas.user import Credentials, Method, SessionToken

logger = get_logger(__name__)

SET_COOKIE_HEADER = "Set-Cookie"
TOKEN_MARKER = "access_token="


def extract_token(response: Any) -> SessionToken:
    """
    Find the token-bearing cookie in an auth response body.

    Raises:
        AuthenticationError: If no Set-Cookie value contains the token marker
    """
    headers = response.get("headers") if isinstance(response, dict) else None

    for header in headers or []:
        if not isinstance(header, dict) or header.get("key") != SET_COOKIE_HEADER:
            continue
        values = header.get("value")
        if isinstance(values, str):
            values = [values]
        for cookie in values or []:
            if isinstance(cookie, str) and TOKEN_MARKER in cookie:
                return SessionToken(cookie=cookie)

    raise AuthenticationError("no access token found")


async def acquire(
    client: APIClient,
    credentials: Credentials,
    host: str,
    path: str,
) -> SessionToken:
    """
    POST the credentials to the auth endpoint and capture the session token.

    Args:
        client: Request dispatcher
        credentials: Auth payload, sent verbatim
        host: Auth host
        path: Auth endpoint path

    Returns:
        The session token

    Raises:
        AuthenticationError: If the auth call fails or no token is found
    """
    log_with_source(logger, "session", "info", "Authenticating", host=host, path=path)

    try:
        response = await client.dispatch(Method.POST, host, path, credentials.root)
    except AuthenticationError:
        raise
    except ApplicationError as e:
        raise AuthenticationError(f"Auth request failed: {e.message}") from e

    token = extract_token(response)
    log_with_source(logger, "session", "info", "Session token acquired")
    return token
