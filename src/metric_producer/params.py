"""
Metric parameters and value rendering.

Every value attached to a metric is classified into a ``ParamKind`` and
rendered to text when it is added, so the logged value is a snapshot taken
at ``add_param`` time:

    NUMERIC   2137, 21.37          (unquoted)
    BOOLEAN   true, false          (unquoted)
    TEMPORAL  "2022-12-26 21:37:12" (local time)
    TEXT      "string"             (embedded quotes are not escaped)
    SYMBOLIC  "TEST_VAL"           (enum member name)
    GENERIC   "<str(value)>"
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ParamKind(Enum):
    """Kind of a parameter value, deciding how it is rendered."""

    NUMERIC = "numeric"
    TEMPORAL = "temporal"
    BOOLEAN = "boolean"
    TEXT = "text"
    SYMBOLIC = "symbolic"
    GENERIC = "generic"


def classify(value: Any) -> ParamKind:
    """Return the most specific kind for ``value``.

    ``bool`` is checked before numbers and ``Enum`` before numbers and
    strings, so ``True`` never renders as ``1`` and ``IntEnum`` / ``StrEnum``
    members render by name.
    """
    if isinstance(value, bool):
        return ParamKind.BOOLEAN
    if isinstance(value, Enum):
        return ParamKind.SYMBOLIC
    if isinstance(value, numbers.Number):
        return ParamKind.NUMERIC
    if isinstance(value, date):
        return ParamKind.TEMPORAL
    if isinstance(value, str):
        return ParamKind.TEXT
    return ParamKind.GENERIC


def _quote(text: str) -> str:
    return f'"{text}"'


def _render_temporal(value: date) -> str:
    if isinstance(value, datetime):
        # Aware values are shown in the process' local zone
        if value.tzinfo is not None:
            value = value.astimezone()
    else:
        value = datetime.combine(value, time())
    return _quote(value.strftime(DATE_FORMAT))


def render_value(value: Any, kind: ParamKind | None = None) -> str:
    """Render ``value`` as it appears in a metric line.

    Args:
        value: Value to render
        kind: Explicit kind; classified from the value when omitted

    Returns:
        Rendered text, quoted for every kind except numbers and booleans
    """
    if kind is None:
        kind = classify(value)

    if kind is ParamKind.NUMERIC:
        return str(value)
    if kind is ParamKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ParamKind.TEMPORAL:
        return _render_temporal(value)
    if kind is ParamKind.TEXT:
        return _quote(value)
    if kind is ParamKind.SYMBOLIC:
        return _quote(value.name)
    return _quote(str(value))


@dataclass(frozen=True)
class Param:
    """A parameter name paired with its rendered value."""

    name: str
    value: str

    @classmethod
    def of(cls, name: str, value: Any) -> Param:
        """Create a parameter, rendering ``value`` now."""
        return cls(name=name, value=render_value(value))

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"
