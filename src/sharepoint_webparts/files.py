"""Site and file nodes leading to a page's web part manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from sharepoint_webparts.rest.queryable import QueryableInstance, api_root, derive
from sharepoint_webparts.rest.segments import method_call
from sharepoint_webparts.webparts import LimitedWebPartManager, PersonalizationScope

if TYPE_CHECKING:
    from sharepoint_webparts.config import AppConfig
    from sharepoint_webparts.rest.client import SharePointClient


@dataclass(frozen=True)
class Web(QueryableInstance):
    """The SharePoint web (site) behind a client."""

    default_path: ClassVar[str | None] = "web"

    def get_file_by_server_relative_url(self, url: str) -> File:
        """Get a file, such as a page, by its server-relative URL."""
        return derive(self, File, method_call("getFileByServerRelativeUrl", url))


@dataclass(frozen=True)
class File(QueryableInstance):
    """A file in a document library."""

    def get_limited_web_part_manager(
        self,
        scope: PersonalizationScope = PersonalizationScope.SHARED,
    ) -> LimitedWebPartManager:
        """Get the web part manager of this page for the given scope."""
        segment = method_call("getLimitedWebPartManager", scope=int(scope))
        return derive(self, LimitedWebPartManager, segment)


def site_web(client: SharePointClient) -> Web:
    return derive(api_root(client), Web)


def web_part_manager_from_config(
    client: SharePointClient,
    config: AppConfig,
) -> LimitedWebPartManager:
    """Construct the web part manager for the configured page.

    Args:
        client: Authenticated SharePointClient for the configured site.
        config: Application configuration instance.

    Returns:
        LimitedWebPartManager for ``config.page_url`` in ``config.personalization_scope``.

    Raises:
        ValueError: If no page URL is configured or the scope is unknown.
    """
    if not config.page_url:
        raise ValueError("No page configured; set SPW_PAGE_URL")
    scope = PersonalizationScope.from_name(config.personalization_scope)
    page = site_web(client).get_file_by_server_relative_url(config.page_url)
    return page.get_limited_web_part_manager(scope)
