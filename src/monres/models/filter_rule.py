# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Filter rules deciding which resource attributes become metric labels."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterRule:
    """Keep attributes whose key starts with ``prefix`` and matches ``pattern``.

    ``pattern`` is searched anywhere in the key; anchor it explicitly with
    ``^``/``$`` for a full match.  The pattern is compiled once.  A pattern
    that fails to compile produces a rule that never matches; call
    :meth:`validate` to turn that into an error instead.
    """

    prefix: str = ""
    pattern: str = ""
    _compiled: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)
    _error: Optional[str] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled: Optional[Pattern[str]] = re.compile(self.pattern)
            error = None
        except re.error as exc:
            compiled = None
            error = str(exc)
            logger.warning("Filter rule pattern %r is invalid and will never match: %s", self.pattern, exc)
        object.__setattr__(self, "_compiled", compiled)
        object.__setattr__(self, "_error", error)

    @property
    def is_valid(self) -> bool:
        return self._compiled is not None

    def validate(self) -> None:
        """Raise ``ValueError`` if the pattern does not compile."""
        if self._error is not None:
            raise ValueError(f"Invalid filter rule regex {self.pattern!r} (prefix {self.prefix!r}): {self._error}")

    def matches(self, key: str) -> bool:
        if self._compiled is None:
            return False
        return key.startswith(self.prefix) and self._compiled.search(key) is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterRule:
        """Build a rule from a ``{"prefix": ..., "regex": ...}`` config entry.

        ``pattern`` is accepted as an alias of ``regex``.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Filter rule must be a mapping, got {type(data).__name__}")
        unknown = set(data) - {"prefix", "regex", "pattern"}
        if unknown:
            raise ValueError(f"Unknown filter rule fields: {sorted(unknown)}")
        pattern = data.get("regex", data.get("pattern", ""))
        return cls(prefix=str(data.get("prefix") or ""), pattern=str(pattern or ""))

    def to_dict(self) -> Dict[str, str]:
        return {"prefix": self.prefix, "regex": self.pattern}
