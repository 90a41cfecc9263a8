"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from sharepoint_webparts import __version__

DEFAULT_USER_AGENT = f"sharepoint-webparts/{__version__}"


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Required fields have no defaults and will cause a KeyError at startup
    if the corresponding environment variable is missing. Everything else
    has a sensible default but can be overridden via environment variables.
    """

    # Required, no defaults: fail at startup if missing
    client_id: str
    client_secret: str
    tenant_id: str
    site_url: str

    # Optional, overridable via env
    page_url: str = ""
    personalization_scope: str = "shared"
    http_timeout_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        SPW_CLIENT_ID: Azure AD application (client) ID.
        SPW_CLIENT_SECRET: Azure AD application client secret.
        SPW_TENANT_ID: Azure AD tenant ID.
        SPW_SITE_URL: Absolute URL of the SharePoint site
            (e.g. https://contoso.sharepoint.com/sites/intranet).

    Optional environment variables (with defaults):
        SPW_PAGE_URL: Server-relative URL of the page whose web parts are managed.
        SPW_PERSONALIZATION_SCOPE: "shared" or "user" (default: shared).
        SPW_HTTP_TIMEOUT_SECONDS: Per-request timeout in seconds (default: 30).
        SPW_USER_AGENT: User-Agent header sent with every request.

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig(
        client_id=os.environ["SPW_CLIENT_ID"],
        client_secret=os.environ["SPW_CLIENT_SECRET"],
        tenant_id=os.environ["SPW_TENANT_ID"],
        site_url=os.environ["SPW_SITE_URL"],
        page_url=os.environ.get("SPW_PAGE_URL", ""),
        personalization_scope=os.environ.get("SPW_PERSONALIZATION_SCOPE", "shared"),
        http_timeout_seconds=float(os.environ.get("SPW_HTTP_TIMEOUT_SECONDS", "30")),
        user_agent=os.environ.get("SPW_USER_AGENT", DEFAULT_USER_AGENT),
    )
