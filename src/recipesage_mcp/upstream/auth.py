"""Login exchange against the RecipeSage API."""

from typing import Any

import httpx
import structlog
from pydantic import SecretStr

from recipesage_mcp.accounts.config import AccountConfig
from recipesage_mcp.defaults import DEFAULT_LOGIN_PATH
from recipesage_mcp.exceptions import AuthenticationError
from recipesage_mcp.upstream.http import extract_error_message

logger = structlog.get_logger()


def extract_token(payload: Any) -> str | None:
    """Read the session token from a login response.

    The service has answered logins in two shapes over time: a plain REST body
    ``{"token": ...}`` and a tRPC envelope ``{"result": {"data": {"token": ...}}}``.
    """
    if not isinstance(payload, dict):
        return None
    token = payload.get("token")
    if token is None:
        data = payload.get("result", {})
        data = data.get("data", {}) if isinstance(data, dict) else {}
        token = data.get("token") if isinstance(data, dict) else None
    if isinstance(token, str) and token:
        return token
    return None


async def authenticate(
    http: httpx.AsyncClient,
    account: AccountConfig,
    login_path: str = DEFAULT_LOGIN_PATH,
) -> SecretStr:
    """Exchange an account's email and password for a session token.

    Args:
        http: Async HTTP client with the API base URL configured.
        account: Account whose credentials to use.
        login_path: Path of the login endpoint.

    Returns:
        The session token.

    Raises:
        AuthenticationError: If the service rejects the credentials, cannot be
            reached, or answers without a token.
    """
    logger.info("Authenticating", account=account.id)
    try:
        response = await http.post(
            login_path,
            json={
                "email": account.email,
                "password": account.password.get_secret_value(),
            },
        )
    except httpx.HTTPError as e:
        logger.warning("Login request failed", account=account.id, error=str(e))
        raise AuthenticationError(account.id, f"could not reach service ({e})") from e

    if not response.is_success:
        reason = extract_error_message(response)
        logger.warning("Login rejected", account=account.id, status=response.status_code)
        raise AuthenticationError(account.id, reason)

    try:
        payload = response.json()
    except ValueError as e:
        raise AuthenticationError(account.id, "malformed login response") from e

    token = extract_token(payload)
    if token is None:
        raise AuthenticationError(account.id, "login response did not contain a token")

    logger.info("Authenticated", account=account.id)
    return SecretStr(token)
