"""Microsoft Graph client for directory sync.

Uses the OAuth2 client-credentials flow against login.microsoftonline.com and
pages through GET /v1.0/users following @odata.nextLink.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from deskmap.helpers.dto.directory_dto import DEFAULT_GRAPH_SCOPE, DirectorySettings, DirectoryUser
from deskmap.helpers.exceptions import DirectoryRequestError

logger = logging.getLogger(__name__)

_LOGIN_BASE = "https://login.microsoftonline.com"
_GRAPH_BASE = "https://graph.microsoft.com/v1.0"
_USER_FIELDS = "id,givenName,surname,displayName,officeLocation,userPrincipalName"
_REQUEST_TIMEOUT = 30  # seconds


def exchange_client_credential(settings: DirectorySettings, timeout: float = _REQUEST_TIMEOUT) -> str:
    """Exchange client id/secret for an app-only access token.

    Args:
        settings: Complete directory settings
        timeout: Request timeout in seconds

    Returns:
        Bearer access token

    Raises:
        DirectoryRequestError: If the token endpoint fails or is unreachable
    """
    url = f"{_LOGIN_BASE}/{settings.tenant_id}/oauth2/v2.0/token"
    form = {
        "client_id": settings.client_id,
        "scope": settings.scopes or DEFAULT_GRAPH_SCOPE,
        "client_secret": settings.client_secret,
        "grant_type": "client_credentials",
    }

    try:
        response = requests.post(url, data=form, timeout=timeout)
    except requests.RequestException as e:
        raise DirectoryRequestError(f"Token request failed: {e}") from e

    if not response.ok:
        raise DirectoryRequestError(f"Token error: {response.status_code} {response.text}")

    token = response.json().get("access_token")
    if not token:
        raise DirectoryRequestError("Token error: response did not contain an access_token")
    return str(token)


def fetch_all_users(
    settings: DirectorySettings,
    limit: int | None = None,
    timeout: float = _REQUEST_TIMEOUT,
) -> list[DirectoryUser]:
    """Fetch directory users, following pagination.

    Args:
        settings: Complete directory settings
        limit: Optional cap on users returned (used for connectivity tests)
        timeout: Per-request timeout in seconds

    Returns:
        Users in the order Graph returned them

    Raises:
        DirectoryRequestError: If any page fails
    """
    token = exchange_client_credential(settings, timeout=timeout)
    headers = {"Authorization": f"Bearer {token}"}

    url: str | None = f"{_GRAPH_BASE}/users?$select={_USER_FIELDS}"
    if limit and limit > 0:
        url += f"&$top={limit}"

    users: list[DirectoryUser] = []
    pages = 0
    while url:
        try:
            response = requests.get(url, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            raise DirectoryRequestError(f"Graph request failed: {e}") from e

        if not response.ok:
            raise DirectoryRequestError(f"Graph error: {response.status_code} {response.text}")

        data: dict[str, Any] = response.json()
        pages += 1
        for item in data.get("value") or []:
            users.append(DirectoryUser.from_graph(item))

        if limit and limit > 0 and len(users) >= limit:
            users = users[:limit]
            break
        url = data.get("@odata.nextLink") or None

    logger.info(f"[Graph] Fetched {len(users)} users in {pages} page(s)")
    return users
