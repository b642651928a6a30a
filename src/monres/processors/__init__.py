# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Attribute processors applied before export."""

from monres.processors.label_filter import SERVICE_LABEL_KEYS, AttributeLabelFilter, filter_attributes

__all__ = ["SERVICE_LABEL_KEYS", "AttributeLabelFilter", "filter_attributes"]
