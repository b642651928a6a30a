# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Monres data models."""

from __future__ import annotations

from monres.models.attributes import AttributeSet, as_string
from monres.models.filter_rule import FilterRule
from monres.models.identity import MonitoredResourceIdentity, TargetBackend

__all__ = [
    "AttributeSet",
    "FilterRule",
    "MonitoredResourceIdentity",
    "TargetBackend",
    "as_string",
]
