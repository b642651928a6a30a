# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Resolve the monitored resource a batch of telemetry is written against.

A resource can force its identity with two kinds of attributes::

    gcp.resource_type = "k8s_pod"
    gcp.k8s_pod.namespace = "default"     ->  labels["namespace"] = "default"
    gcp.k8s_pod.pod_name = "web-1"        ->  labels["pod_name"] = "web-1"

Without a (non-empty) ``gcp.resource_type`` the identity comes from the
heuristic mapper for the chosen :class:`~monres.models.TargetBackend`.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from monres.models.attributes import AttributeSet, AttributeSource, as_string
from monres.models.identity import MonitoredResourceIdentity, TargetBackend
from monres.resources.mapping import HeuristicResourceMapper

logger = logging.getLogger(__name__)

DEFAULT_MAPPING_KEY = "gcp.resource_type"
DEFAULT_LABEL_PREFIX = "gcp."


class ResourceMapper(Protocol):
    """Infers a monitored resource from generic resource attributes.

    Implementations must be total and side-effect free.
    """

    def map_for_monitoring(self, attrs: AttributeSource) -> MonitoredResourceIdentity: ...

    def map_for_logging(self, attrs: AttributeSource) -> MonitoredResourceIdentity: ...


class ResourceIdentityResolver:
    """Picks a monitored resource identity for a set of resource attributes.

    Args:
        mapping_key: Attribute carrying an explicit monitored resource type.
        label_prefix: Leading part of the per-type label prefix; labels for
            type ``T`` are read from ``<label_prefix>T.<label>`` attributes.
        mapper: Fallback used when no explicit type is set.  Defaults to
            :class:`~monres.resources.mapping.HeuristicResourceMapper`.
    """

    def __init__(
        self,
        mapping_key: str = DEFAULT_MAPPING_KEY,
        label_prefix: str = DEFAULT_LABEL_PREFIX,
        mapper: Optional[ResourceMapper] = None,
    ) -> None:
        self._mapping_key = mapping_key
        self._label_prefix = label_prefix
        self._mapper = mapper if mapper is not None else HeuristicResourceMapper()

    @property
    def mapping_key(self) -> str:
        return self._mapping_key

    @property
    def label_prefix(self) -> str:
        return self._label_prefix

    def resolve(
        self,
        attrs: AttributeSource,
        target: TargetBackend = TargetBackend.MONITORING,
    ) -> MonitoredResourceIdentity:
        """Return the explicit identity if one is set, else the mapped one."""
        attrs = AttributeSet.of(attrs)
        resource_type, _ = attrs.get_string(self._mapping_key)
        if not resource_type:
            return self.resolve_default(attrs, target)

        prefix = f"{self._label_prefix}{resource_type}."
        labels: Dict[str, str] = {}
        for key, value in attrs.items():
            if len(key) > len(prefix) and key.startswith(prefix):
                labels[key[len(prefix):]] = as_string(value)

        logger.debug("Using explicit monitored resource %s with labels %s", resource_type, sorted(labels))
        return MonitoredResourceIdentity(type=resource_type, labels=labels)

    def resolve_default(
        self,
        attrs: AttributeSource,
        target: TargetBackend = TargetBackend.MONITORING,
    ) -> MonitoredResourceIdentity:
        """Map *attrs* with the heuristic mapper, ignoring any explicit type."""
        if target is TargetBackend.LOGGING:
            return self._mapper.map_for_logging(attrs)
        return self._mapper.map_for_monitoring(attrs)

    def monitoring_resource(self, attrs: AttributeSource) -> MonitoredResourceIdentity:
        return self.resolve_default(attrs, TargetBackend.MONITORING)

    def logging_resource(self, attrs: AttributeSource) -> MonitoredResourceIdentity:
        return self.resolve_default(attrs, TargetBackend.LOGGING)


def resolve_monitored_resource(
    attrs: AttributeSource,
    target: TargetBackend = TargetBackend.MONITORING,
) -> MonitoredResourceIdentity:
    """Resolve *attrs* with the default key, prefix and mapper."""
    return ResourceIdentityResolver().resolve(attrs, target)
