# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Monres configuration."""

from __future__ import annotations

from monres.sdk.config import ExporterConfig

__all__ = ["ExporterConfig"]
