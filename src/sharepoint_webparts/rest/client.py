"""SharePoint REST API client with MSAL authentication."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx
import msal

from sharepoint_webparts.config import DEFAULT_USER_AGENT
from sharepoint_webparts.rest.http import build_async_client
from sharepoint_webparts.rest.models import (
    API_PATH,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    ODATA_DATA,
    ODATA_ERROR,
    ODATA_ERROR_CODE,
    ODATA_ERROR_LEGACY,
    ODATA_ERROR_MESSAGE,
    ODATA_RESULTS,
    ODATA_VALUE,
    ODATA_VERBOSE,
)

if TYPE_CHECKING:
    from types import TracebackType

    from sharepoint_webparts.config import AppConfig

logger = logging.getLogger(__name__)

AUTHORITY_BASE_URL = "https://login.microsoftonline.com"
DEFAULT_TIMEOUT_SECONDS = 30.0


class SharePointAuthError(Exception):
    """Raised when MSAL token acquisition fails."""


class SharePointApiError(Exception):
    """Raised when the SharePoint REST API returns a non-2xx response."""

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        super().__init__(f"SharePoint API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.code = code


def resource_scopes(site_url: str) -> list[str]:
    """Return the client-credentials scope for the tenant hosting ``site_url``."""
    parts = urlsplit(site_url)
    return [f"{parts.scheme}://{parts.netloc}/.default"]


def unwrap_odata(payload: Any) -> Any:
    """Strip the OData envelope from a decoded JSON response.

    Verbose responses wrap the entity in ``d`` (and collections in
    ``d.results``); minimal and nometadata responses use ``value``.
    Anything else is returned unchanged.
    """
    if not isinstance(payload, dict):
        return payload
    if ODATA_DATA in payload:
        data = payload[ODATA_DATA]
        if isinstance(data, dict) and ODATA_RESULTS in data:
            return data[ODATA_RESULTS]
        return data
    if ODATA_VALUE in payload:
        return payload[ODATA_VALUE]
    return payload


def _error_details(response: httpx.Response) -> tuple[str, str | None]:
    """Extract (message, code) from a SharePoint error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.reason_phrase, None
    if not isinstance(payload, dict):
        return response.reason_phrase, None

    error = payload.get(ODATA_ERROR) or payload.get(ODATA_ERROR_LEGACY) or {}
    if not isinstance(error, dict):
        return str(error), None
    message = error.get(ODATA_ERROR_MESSAGE)
    if isinstance(message, dict):
        message = message.get(ODATA_VALUE)
    code = error.get(ODATA_ERROR_CODE)
    return str(message or response.reason_phrase), code


class SharePointClient:
    """Authenticated asynchronous client for one SharePoint site."""

    def __init__(
        self,
        site_url: str,
        client_id: str,
        client_secret: str,
        tenant_id: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialise the MSAL confidential client application and HTTP client.

        Args:
            site_url: Absolute URL of the SharePoint site.
            client_id: Azure AD application (client) ID.
            client_secret: Azure AD application client secret.
            tenant_id: Azure AD tenant ID.
            http_client: Optional pre-built httpx client; one is created when omitted.
            timeout_seconds: Request timeout for the client created here.
            user_agent: User-Agent for the client created here.
        """
        self._site_url = site_url.rstrip("/")
        self._scopes = resource_scopes(self._site_url)
        authority = f"{AUTHORITY_BASE_URL}/{tenant_id}"
        self._app = msal.ConfidentialClientApplication(
            client_id=client_id,
            client_credential=client_secret,
            authority=authority,
        )
        self._http = http_client or build_async_client(
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
        )

    @property
    def site_url(self) -> str:
        return self._site_url

    @property
    def api_url(self) -> str:
        """Base address of the site's REST endpoint."""
        return f"{self._site_url}/{API_PATH}"

    def _acquire_token(self) -> str:
        """Acquire a Bearer token using client credentials flow.

        Returns:
            Access token string.

        Raises:
            SharePointAuthError: If MSAL cannot acquire a token.
        """
        result: dict[str, Any] = self._app.acquire_token_for_client(scopes=self._scopes) or {}
        if "access_token" not in result:
            error = result.get("error", "unknown_error")
            description = result.get("error_description", "No description provided")
            logger.error("[_acquire_token] MSAL token acquisition failed; error:%s", error)
            raise SharePointAuthError(f"Token acquisition failed: {error} ({description})")
        return str(result["access_token"])

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Perform an authenticated request against an absolute REST address.

        Args:
            method: HTTP verb.
            url: Absolute URL, including any query string.
            body: Serialized request body, sent as OData JSON.
            headers: Extra headers, overriding the defaults.

        Returns:
            The decoded response: None for an empty body, text for non-JSON
            content and the unwrapped OData payload otherwise.

        Raises:
            SharePointAuthError: If token acquisition fails.
            SharePointApiError: If the API returns a non-2xx status code.
            httpx.TransportError: If the request never produced a response.
        """
        token = await asyncio.to_thread(self._acquire_token)
        request_headers = {
            HEADER_AUTHORIZATION: f"Bearer {token}",
            HEADER_ACCEPT: ODATA_VERBOSE,
        }
        if body is not None:
            request_headers[HEADER_CONTENT_TYPE] = ODATA_VERBOSE
        if headers:
            request_headers.update(headers)

        logger.debug("[request] sending request; method:%s;url:%s", method, url)
        response = await self._http.request(method, url, content=body, headers=request_headers)

        if response.is_error:
            message, code = _error_details(response)
            logger.error(
                "[request] SharePoint rejected request; method:%s;url:%s;status:%d;code:%s",
                method,
                url,
                response.status_code,
                code,
            )
            raise SharePointApiError(response.status_code, message, code)

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        if "json" not in response.headers.get(HEADER_CONTENT_TYPE, ""):
            return response.text
        return unwrap_odata(response.json())

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> SharePointClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def sharepoint_client_from_config(config: AppConfig) -> SharePointClient:
    """Construct a SharePointClient from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured SharePointClient instance.
    """
    return SharePointClient(
        site_url=config.site_url,
        client_id=config.client_id,
        client_secret=config.client_secret,
        tenant_id=config.tenant_id,
        timeout_seconds=config.http_timeout_seconds,
        user_agent=config.user_agent,
    )
