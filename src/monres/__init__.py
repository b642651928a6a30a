# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Monres - monitored resources and metric labels from OpenTelemetry resources.

Quick Start::

    from monres import ExporterConfig, TargetBackend

    config = ExporterConfig.from_file_or_env()
    resolver = config.build_resolver()
    label_filter = config.build_filter()

    identity = resolver.resolve(resource)                        # write target
    log_identity = resolver.resolve(resource, TargetBackend.LOGGING)
    labels = label_filter.filter(resource)                       # per-point labels
"""

from __future__ import annotations

from monres._version import __version__

# Data models
from monres.models import AttributeSet, FilterRule, MonitoredResourceIdentity, TargetBackend, as_string

# Label filtering
from monres.processors import SERVICE_LABEL_KEYS, AttributeLabelFilter, filter_attributes

# Monitored resource resolution
from monres.resources import (
    HeuristicResourceMapper,
    ResourceIdentityResolver,
    ResourceMapper,
    resolve_monitored_resource,
)

# Configuration
from monres.sdk.config import ExporterConfig

__all__ = [
    "__version__",
    # Models
    "AttributeSet",
    "FilterRule",
    "MonitoredResourceIdentity",
    "TargetBackend",
    "as_string",
    # Resolution
    "HeuristicResourceMapper",
    "ResourceIdentityResolver",
    "ResourceMapper",
    "resolve_monitored_resource",
    # Filtering
    "SERVICE_LABEL_KEYS",
    "AttributeLabelFilter",
    "filter_attributes",
    # Configuration
    "ExporterConfig",
]
