"""Vendor option handling shared by the adapters.

Options parsed from a connection URL arrive as strings. Each adapter names
the keyword arguments its driver expects as numbers or flags, and
``coerce_options`` validates those through pydantic before the driver is
called. Connection-string adapters use ``quote_value`` so that values
containing separators cannot break out of their keyword.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter

_NEEDS_BRACES = re.compile(r"[;{}=]|^\s|\s$")


@lru_cache(maxsize=None)
def _type_adapter(option_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(option_type)


def coerce_options(options: Mapping[str, Any], option_types: Mapping[str, Any]) -> dict[str, Any]:
    """Convert known options to their driver types; others pass through unchanged.

    ``"5"`` becomes ``5.0`` for a float option and ``"true"``/``"0"`` become
    booleans for a bool option.

    Raises:
        pydantic.ValidationError: If a known option cannot be converted.
    """
    coerced = dict(options)
    for name, value in options.items():
        option_type = option_types.get(name)
        if option_type is not None:
            coerced[name] = _type_adapter(option_type).validate_python(value)
    return coerced


def quote_value(value: Any) -> str:
    """Quote a ``KEY=value`` connection-string value when it needs it.

    Values holding ``;``, ``{``, ``}``, ``=`` or edge whitespace are wrapped
    in braces, with ``}`` doubled.
    """
    text = str(value)
    if not _NEEDS_BRACES.search(text):
        return text
    return "{" + text.replace("}", "}}") + "}"
