# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Monitored resource identity - what the backend thinks the data is about.

The identity is a type name (``gce_instance``, ``k8s_pod``, ...) plus the
small fixed label set that type defines.  The monitoring and logging
backends recognise different type vocabularies, so every default mapping is
made for a :class:`TargetBackend`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class TargetBackend(str, Enum):
    """Backend write path a monitored resource is chosen for."""

    MONITORING = "monitoring"
    LOGGING = "logging"


@dataclass(frozen=True)
class MonitoredResourceIdentity:
    """Monitored resource type and labels.

    Invariant: ``type`` is never empty.  Labels are a read-only copy, so
    identities can be used as dict keys or set members.
    """

    type: str
    labels: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("Monitored resource type must not be empty")
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    def __hash__(self) -> int:
        return hash((self.type, frozenset(self.labels.items())))

    def to_dict(self) -> Dict[str, Any]:
        """Export as the ``{"type": ..., "labels": {...}}`` wire shape."""
        return {"type": self.type, "labels": dict(self.labels)}
