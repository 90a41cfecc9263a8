"""Web part management endpoints of a SharePoint page."""

from __future__ import annotations

import json
import logging
import operator
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar

from sharepoint_webparts.rest.queryable import (
    Queryable,
    QueryableCollection,
    QueryableInstance,
    derive,
)
from sharepoint_webparts.rest.segments import method_call

logger = logging.getLogger(__name__)

EXPORT_WEB_PART = "ExportWebPart"
IMPORT_WEB_PART = "ImportWebPart"
SAVE_WEB_PART_CHANGES = "SaveWebPartChanges"
MOVE_WEB_PART_TO = "MoveWebPartTo"
CLOSE_WEB_PART = "CloseWebPart"
OPEN_WEB_PART = "OpenWebPart"
DELETE_WEB_PART = "DeleteWebPart"


class PersonalizationScope(IntEnum):
    """Which view of a page a web part manager operates on."""

    USER = 0
    SHARED = 1

    @classmethod
    def from_name(cls, name: str) -> PersonalizationScope:
        """Look up a scope by case-insensitive name, e.g. ``"shared"``.

        Raises:
            ValueError: If the name is not a known scope.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown personalization scope: {name!r}") from None


def _payload(**fields: Any) -> str:
    return json.dumps(fields, separators=(",", ":"))


@dataclass(frozen=True)
class LimitedWebPartManager(Queryable):
    """The web part manager of a single page."""

    @property
    def webparts(self) -> WebPartDefinitions:
        """The web part definitions contained by this manager."""
        return derive(self, WebPartDefinitions)

    async def export(self, web_part_id: str) -> str:
        """Export a web part definition.

        Args:
            web_part_id: Storage id (GUID) of the definition to export.

        Returns:
            The definition as XML text.
        """
        result = await derive(self, LimitedWebPartManager, EXPORT_WEB_PART).post(
            body=_payload(webPartId=web_part_id),
        )
        if isinstance(result, dict):
            result = result.get(EXPORT_WEB_PART, "")
        return "" if result is None else str(result)

    async def import_(self, xml: str) -> Any:
        """Import a web part.

        Args:
            xml: Web part definition in the .dwp or .webpart XML format. It is
                sent as-is; the service rejects malformed input.

        Returns:
            The decoded service response.
        """
        return await derive(self, LimitedWebPartManager, IMPORT_WEB_PART).post(
            body=_payload(webPartXml=xml),
        )


@dataclass(frozen=True)
class WebPartDefinitions(QueryableCollection):
    """Web part definitions on a page."""

    default_path: ClassVar[str | None] = "webparts"

    def get_by_id(self, web_part_id: str) -> WebPartDefinition:
        """Get a definition by its storage id."""
        return derive(self, WebPartDefinition, method_call("getbyid", str(web_part_id)))

    def get_by_control_id(self, control_id: str) -> WebPartDefinition:
        """Get a definition by the control id (``WebPart.ID``) of its web part."""
        return derive(self, WebPartDefinition, method_call("getByControlId", str(control_id)))


@dataclass(frozen=True)
class WebPartDefinition(QueryableInstance):
    """Placement of one web part on a page."""

    @property
    def webpart(self) -> WebPart:
        """The web part this definition places."""
        return derive(self, WebPart)

    async def _invoke(self, segment: str) -> Any:
        return await derive(self, WebPartDefinition, segment).post()

    async def save_changes(self) -> None:
        """Save changes made to the web part through its other properties."""
        await self._invoke(SAVE_WEB_PART_CHANGES)

    async def move_to(self, zone_id: str, zone_index: int) -> None:
        """Move the web part to another location on the page.

        Args:
            zone_id: Id of the destination web part zone.
            zone_index: Position within the destination zone.

        Raises:
            TypeError: If ``zone_index`` is not an integer. Nothing is sent.
        """
        if isinstance(zone_index, bool):
            raise TypeError("zone_index must be an integer, not bool")
        index = operator.index(zone_index)
        segment = method_call(MOVE_WEB_PART_TO, zoneID=str(zone_id), zoneIndex=index)
        await self._invoke(segment)

    async def close(self) -> None:
        """Close the web part. Closing a closed web part does nothing."""
        await self._invoke(CLOSE_WEB_PART)

    async def open(self) -> None:
        """Open the web part. Opening an open web part does nothing."""
        await self._invoke(OPEN_WEB_PART)

    async def delete(self) -> None:
        """Remove the web part from the page. All of its settings are lost."""
        logger.info("[delete] deleting web part definition; url:%s", self.url)
        await self._invoke(DELETE_WEB_PART)


@dataclass(frozen=True)
class WebPart(QueryableInstance):
    """The web part itself, as opposed to its placement on the page."""

    default_path: ClassVar[str | None] = "webpart"
