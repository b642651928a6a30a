# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Attribute set - the read-only view of a resource's attributes.

Resource attributes arrive as an OpenTelemetry SDK ``Resource``, a plain
mapping, or another :class:`AttributeSet`.  Keys are unique, so looking up a
reserved key never depends on iteration order.

Values keep their original type.  Anything that ends up in a label is
coerced with :func:`as_string`, which renders values the same way the
collector's ``pcommon.Value.AsString`` does (``true``/``false`` for booleans,
``1.5`` / ``2`` for doubles, base64 for bytes, JSON for arrays and maps).
"""

from __future__ import annotations

import base64
import json
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Iterator, Optional, Tuple, Union

from opentelemetry.sdk.resources import Resource

AttributeSource = Union["AttributeSet", Resource, Mapping]


def as_string(value: Any) -> str:
    """Return the string form of an attribute value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, Mapping):
        return json.dumps(dict(value), separators=(",", ":"), default=str)
    if isinstance(value, Sequence):
        return json.dumps(list(value), separators=(",", ":"), default=str)
    return str(value)


def _format_float(value: float) -> str:
    # Plain decimal notation, shortest round-trip digits, no trailing ".0".
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class AttributeSet(Mapping):
    """Immutable mapping of resource attribute keys to values.

    Example::

        >>> attrs = AttributeSet({"service.name": "orders", "replicas": 3})
        >>> attrs.get_string("replicas")
        ('3', True)
        >>> attrs.get_string("missing")
        ('', False)
    """

    __slots__ = ("_attrs",)

    def __init__(self, source: Optional[AttributeSource] = None) -> None:
        if source is None:
            attrs: dict = {}
        elif isinstance(source, AttributeSet):
            attrs = dict(source._attrs)
        elif isinstance(source, Resource):
            attrs = dict(source.attributes)
        else:
            attrs = dict(source)
        self._attrs = attrs

    @classmethod
    def of(cls, source: Optional[AttributeSource]) -> AttributeSet:
        """Return *source* as an AttributeSet, copying only when needed."""
        if isinstance(source, AttributeSet):
            return source
        return cls(source)

    def get_string(self, key: str) -> Tuple[str, bool]:
        """Look up *key* and return ``(string value, found)``."""
        if key in self._attrs:
            return as_string(self._attrs[key]), True
        return "", False

    def __getitem__(self, key: str) -> Any:
        return self._attrs[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __repr__(self) -> str:
        return f"AttributeSet({self._attrs!r})"
