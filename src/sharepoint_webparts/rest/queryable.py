"""Addressable nodes in the SharePoint REST hierarchy.

A node is an immutable handle on one composed address. Navigation never edits
a node: ``derive`` builds a new node whose address extends the parent's by one
segment, and action methods send a request to the node's own address.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar
from urllib.parse import urlencode

from sharepoint_webparts.rest.models import QUERY_EXPAND, QUERY_SELECT, NodeKind

if TYPE_CHECKING:
    from sharepoint_webparts.rest.client import SharePointClient

logger = logging.getLogger(__name__)

Q = TypeVar("Q", bound="Queryable")


@dataclass(frozen=True)
class Queryable:
    """A node addressing one point of the remote hierarchy.

    Attributes:
        client: Transport used by action methods. Excluded from equality.
        url: Absolute address of the node, without query string.
        query: OData query options sent with requests against this node.
    """

    client: SharePointClient = field(repr=False, compare=False)
    url: str
    query: tuple[tuple[str, str], ...] = ()

    kind: ClassVar[NodeKind] = NodeKind.RESOURCE
    default_path: ClassVar[str | None] = None

    @property
    def request_url(self) -> str:
        """The address plus encoded query options."""
        if not self.query:
            return self.url
        return f"{self.url}?{urlencode(self.query, safe='$,/')}"

    async def execute(
        self,
        method: str = "GET",
        *,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send one request to this node's address and return the decoded response."""
        logger.debug(
            "[execute] dispatching; node:%s;method:%s;url:%s",
            type(self).__name__,
            method,
            self.url,
        )
        return await self.client.request(method, self.request_url, body=body, headers=headers)

    async def post(
        self,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.execute("POST", body=body, headers=headers)


@dataclass(frozen=True)
class QueryableCollection(Queryable):
    """A set of sibling entities.

    Collections expose lookups, not entity actions (``get``, ``select``,
    ``expand``). The generic ``execute``/``post`` inherited from ``Queryable``
    stay reachable as the shared dispatch primitive.
    """

    kind: ClassVar[NodeKind] = NodeKind.COLLECTION


@dataclass(frozen=True)
class QueryableInstance(Queryable):
    """One concrete remote entity."""

    kind: ClassVar[NodeKind] = NodeKind.INSTANCE

    def select(self: Q, *fields: str) -> Q:
        """Return a copy of this node that only retrieves ``fields``."""
        return _with_option(self, QUERY_SELECT, fields)

    def expand(self: Q, *fields: str) -> Q:
        """Return a copy of this node that expands the ``fields`` navigation properties."""
        return _with_option(self, QUERY_EXPAND, fields)

    async def get(self) -> Any:
        """Retrieve the entity's properties."""
        return await self.execute("GET")


def _with_option(node: Q, name: str, fields: tuple[str, ...]) -> Q:
    options = tuple(option for option in node.query if option[0] != name)
    if fields:
        options += ((name, ",".join(fields)),)
    return dataclasses.replace(node, query=options)


def derive(parent: Queryable, node_type: type[Q], segment: str | None = None) -> Q:
    """Build a child node whose address is ``parent.url + "/" + segment``.

    This is the only way addresses are extended. Segments containing
    arguments must be built with ``segments.method_call`` so quoting stays
    consistent. When ``segment`` is omitted the child type's ``default_path``
    is used; with neither, the child addresses the same URL as the parent.
    Query options are never inherited.

    Args:
        parent: Node to extend.
        node_type: Concrete node class of the child.
        segment: Path segment to append.

    Returns:
        A new node of ``node_type``.
    """
    path = segment if segment is not None else node_type.default_path
    url = parent.url
    if path:
        url = f"{url.rstrip('/')}/{path.lstrip('/')}"
    return node_type(client=parent.client, url=url)


def api_root(client: SharePointClient) -> Queryable:
    """Return the root node of a site's REST endpoint (``<site>/_api``)."""
    return Queryable(client=client, url=client.api_url)
