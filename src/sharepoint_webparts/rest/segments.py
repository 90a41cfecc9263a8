"""OData path segment formatting.

SharePoint addresses entities and service operations with OData function-call
segments such as ``getbyid('42')`` or ``MoveWebPartTo(zoneID='Zone1', zoneIndex=3)``.
All quoting rules live here so that every node renders arguments the same way.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

# Characters left readable inside a string literal. Everything else, notably
# "#", "?" and "%", is percent-encoded so it cannot end the path.
LITERAL_SAFE = "'()=,/ "


def odata_literal(value: Any) -> str:
    """Render a Python value as an OData URL literal.

    Strings are wrapped in single quotes with embedded quotes doubled and
    URL-significant characters percent-encoded (``'a#b'`` becomes
    ``'a%23b'``). Integers and floats are emitted bare, booleans as
    ``true``/``false`` and ``None`` as ``null``.

    Args:
        value: The argument value to render.

    Returns:
        The literal as it appears inside a path segment.

    Raises:
        TypeError: If the value has no OData literal form.
    """
    if value is None:
        return "null"
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        escaped = quote(value.replace("'", "''"), safe=LITERAL_SAFE)
        return f"'{escaped}'"
    raise TypeError(f"Cannot render {type(value).__name__} as an OData literal")


def method_call(name: str, *args: Any, **kwargs: Any) -> str:
    """Build a function-call segment like ``name(arg)`` or ``name(key=arg, ...)``.

    Positional arguments come first, followed by keyword arguments in the
    order they were given, separated by ``", "``.
    """
    rendered = [odata_literal(arg) for arg in args]
    rendered.extend(f"{key}={odata_literal(arg)}" for key, arg in kwargs.items())
    return f"{name}({', '.join(rendered)})"
