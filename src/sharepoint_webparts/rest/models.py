"""Wire-level constants for the SharePoint REST API."""

from enum import Enum

API_PATH = "_api"

# HTTP headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# OData verbose is the format every SharePoint version accepts
ODATA_VERBOSE = "application/json;odata=verbose"

# OData response keys
ODATA_DATA = "d"
ODATA_RESULTS = "results"
ODATA_VALUE = "value"
ODATA_ERROR = "error"
ODATA_ERROR_LEGACY = "odata.error"
ODATA_ERROR_CODE = "code"
ODATA_ERROR_MESSAGE = "message"

# OData query options
QUERY_SELECT = "$select"
QUERY_EXPAND = "$expand"


class NodeKind(Enum):
    """Marks what a node in the REST hierarchy addresses."""

    RESOURCE = "resource"
    COLLECTION = "collection"
    INSTANCE = "instance"
