"""
Storefront Menu Client

Fetches a tenant's menu from the menu API. One request per page load:
no retries and no partial results. Any network failure or non-2xx status
is raised as MenuFetchError for the caller to surface as a fatal error.

Usage:
    from storefront.services.menu_client import MenuClient

    with MenuClient() as client:
        menu = client.fetch_menu("estafeten")
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from storefront.core.config import get_settings
from storefront.schemas import MenuResponse

logger = logging.getLogger(__name__)


class MenuFetchError(Exception):
    """
    The menu could not be loaded.

    Attributes:
        tenant: Requested tenant slug
        status_code: HTTP status when the server answered, else None
    """

    def __init__(self, tenant: str, message: str, status_code: Optional[int] = None):
        self.tenant = tenant
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class MenuClient:
    """
    Synchronous HTTP client for GET /api/menu/{tenant}.

    Attributes:
        base_url: Root URL of the menu API
        timeout: Seconds before the request is abandoned
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.menu_fetch_timeout
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    def __enter__(self) -> "MenuClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_menu(self, tenant: str) -> MenuResponse:
        """
        Load the menu of ``tenant``.

        Raises:
            MenuFetchError: On network errors, non-2xx responses or an
                unexpected response body
        """
        try:
            path = f"/api/menu/{quote(tenant, safe='')}"
            response = self._client.get(path, headers={"Cache-Control": "no-store"})
        except httpx.HTTPError as e:
            logger.error(f"Menu fetch for {tenant} failed: {e}")
            raise MenuFetchError(tenant, f"Could not load the menu: {e}") from e

        if not response.is_success:
            detail = _error_detail(response)
            logger.error(f"Menu fetch for {tenant} returned {response.status_code}: {detail}")
            raise MenuFetchError(
                tenant,
                f"Could not load the menu ({response.status_code}): {detail}",
                status_code=response.status_code,
            )

        try:
            return MenuResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Menu response for {tenant} is malformed: {e}")
            raise MenuFetchError(
                tenant,
                "Could not load the menu: malformed response",
                status_code=response.status_code,
            ) from e


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return str(body)[:200]
