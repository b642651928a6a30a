# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Monitored resource resolution.

The resolver honours an explicit ``gcp.resource_type`` override and falls
back to :class:`HeuristicResourceMapper`, which infers the type from
well-known OpenTelemetry resource attributes::

    >>> from monres.resources import resolve_monitored_resource
    >>> resolve_monitored_resource({"cloud.platform": "gcp_compute_engine",
    ...                             "cloud.availability_zone": "us-central1-a",
    ...                             "host.id": "1234"}).type
    'gce_instance'

A custom mapper only needs ``map_for_monitoring`` and ``map_for_logging``.
"""

from __future__ import annotations

from monres.resources.mapping import (
    HeuristicResourceMapper,
    resource_attributes_to_logging_resource,
    resource_attributes_to_monitoring_resource,
)
from monres.resources.resolver import (
    DEFAULT_LABEL_PREFIX,
    DEFAULT_MAPPING_KEY,
    ResourceIdentityResolver,
    ResourceMapper,
    resolve_monitored_resource,
)

__all__ = [
    "DEFAULT_LABEL_PREFIX",
    "DEFAULT_MAPPING_KEY",
    "HeuristicResourceMapper",
    "ResourceIdentityResolver",
    "ResourceMapper",
    "resolve_monitored_resource",
    "resource_attributes_to_logging_resource",
    "resource_attributes_to_monitoring_resource",
]
