# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for monitored resource resolution and label filtering.

Configuration precedence (highest to lowest):
1. Code arguments (explicit values passed to ExporterConfig)
2. Environment variables (MONRES_*)
3. YAML config file (monres.yaml or specified path)
4. Built-in defaults

Filter rule patterns are validated when the config is built, so a typo in a
regex fails at startup instead of silently dropping labels at export time.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from monres.models.filter_rule import FilterRule
from monres.processors.label_filter import AttributeLabelFilter
from monres.resources.resolver import DEFAULT_LABEL_PREFIX, DEFAULT_MAPPING_KEY, ResourceIdentityResolver, ResourceMapper

logger = logging.getLogger(__name__)

_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off", "")

# Comma followed by the next "prefix=" entry.
_FILTER_ENTRY_SEPARATOR = re.compile(r",(?=[^,=]*=)")


@dataclass
class ExporterConfig:
    """Resource-related settings of a monitoring exporter.

    Example::

        >>> config = ExporterConfig(
        ...     service_resource_labels=True,
        ...     resource_filters=[FilterRule(prefix="k8s.", pattern=r"\\.name$")],
        ... )

        >>> # Or load from YAML
        >>> config = ExporterConfig.from_yaml("config/monres.yaml")
    """

    # Export service.name / service.namespace / service.instance.id as labels
    service_resource_labels: Optional[bool] = None

    # Extra attributes to export as labels; first matching rule wins
    resource_filters: Optional[List[FilterRule]] = None

    # Explicit monitored resource convention
    mapping_key: Optional[str] = None
    label_prefix: Optional[str] = None

    # Config file path (for tracking where config was loaded from)
    _config_file: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Apply environment variable defaults, then validate."""
        if self.service_resource_labels is None:
            env_labels = os.getenv("MONRES_SERVICE_RESOURCE_LABELS")
            if env_labels is not None:
                self.service_resource_labels = _parse_bool("MONRES_SERVICE_RESOURCE_LABELS", env_labels)
            else:
                self.service_resource_labels = True
        else:
            self.service_resource_labels = _parse_bool("service_resource_labels", self.service_resource_labels)

        if self.resource_filters is None:
            env_filters = os.getenv("MONRES_RESOURCE_FILTERS")
            self.resource_filters = _parse_filter_list(env_filters) if env_filters else []
        else:
            self.resource_filters = [
                rule if isinstance(rule, FilterRule) else FilterRule.from_dict(rule) for rule in self.resource_filters
            ]

        if self.mapping_key is None:
            self.mapping_key = os.getenv("MONRES_MAPPING_KEY", DEFAULT_MAPPING_KEY)

        if self.label_prefix is None:
            self.label_prefix = os.getenv("MONRES_LABEL_PREFIX", DEFAULT_LABEL_PREFIX)

        self.validate()

    def validate(self) -> None:
        """Raise ``ValueError`` for settings that can never work."""
        if not self.mapping_key:
            raise ValueError("mapping_key must not be empty")
        for rule in self.resource_filters or []:
            rule.validate()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def build_resolver(self, mapper: Optional[ResourceMapper] = None) -> ResourceIdentityResolver:
        return ResourceIdentityResolver(
            mapping_key=self.mapping_key or DEFAULT_MAPPING_KEY,
            label_prefix=self.label_prefix if self.label_prefix is not None else DEFAULT_LABEL_PREFIX,
            mapper=mapper,
        )

    def build_filter(self) -> AttributeLabelFilter:
        return AttributeLabelFilter(
            include_service_labels=bool(self.service_resource_labels),
            rules=self.resource_filters or [],
        )

    # ------------------------------------------------------------------
    # YAML loading
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> ExporterConfig:
        """Load configuration from a YAML file.

        Supports environment variable interpolation using ``${VAR_NAME}`` syntax.

        Args:
            path: Path to YAML config file.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If YAML is malformed or a filter rule is invalid.
        """
        if path is None:
            raise FileNotFoundError("No config file path provided")

        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")

        try:
            import yaml  # type: ignore[import-untyped]
        except ImportError as err:
            raise ImportError("PyYAML required for YAML config. Install with: pip install monres[yaml]") from err

        with open(resolved) as fh:
            raw_content = fh.read()

        content = _interpolate_env_vars(raw_content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {resolved}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config in {resolved}: expected a mapping at the top level")

        return cls._from_dict(data, config_file=str(resolved))

    @classmethod
    def from_file_or_env(cls, path: Optional[str] = None) -> ExporterConfig:
        """Load config from file if exists, otherwise use environment variables.

        Search order:
        1. Explicit *path* argument
        2. ``MONRES_CONFIG_FILE`` env var
        3. ``./monres.yaml``
        4. ``./config/monres.yaml``
        5. Falls back to env-only config
        """
        search_paths: List[Path] = []

        if path:
            search_paths.append(Path(path))

        env_path = os.getenv("MONRES_CONFIG_FILE")
        if env_path:
            search_paths.append(Path(env_path))

        search_paths.extend(
            [
                Path("monres.yaml"),
                Path("monres.yml"),
                Path("config/monres.yaml"),
                Path("config/monres.yml"),
            ]
        )

        for candidate in search_paths:
            if candidate.exists():
                logger.info("Loading config from: %s", candidate)
                return cls.from_yaml(str(candidate))

        logger.debug("No config file found, using environment variables only")
        return cls()

    @classmethod
    def _from_dict(
        cls,
        data: Dict[str, Any],
        config_file: Optional[str] = None,
    ) -> ExporterConfig:
        """Create config from dictionary (parsed YAML).

        Accepts the collector layout::

            metric:
              service_resource_labels: true
              resource_filters:
                - prefix: "k8s."
                  regex: ".*"
        """
        metric = data.get("metric") or {}
        resource = data.get("resource") or {}

        filters = metric.get("resource_filters")
        if filters is not None and not isinstance(filters, list):
            raise ValueError("metric.resource_filters must be a list")

        return cls(
            service_resource_labels=metric.get("service_resource_labels"),
            resource_filters=[FilterRule.from_dict(item) for item in filters] if filters is not None else None,
            mapping_key=resource.get("mapping_key"),
            label_prefix=resource.get("label_prefix"),
            _config_file=config_file,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "metric": {
                "service_resource_labels": self.service_resource_labels,
                "resource_filters": [rule.to_dict() for rule in self.resource_filters or []],
            },
            "resource": {
                "mapping_key": self.mapping_key,
                "label_prefix": self.label_prefix,
            },
        }


def _parse_filter_list(value: str) -> List[FilterRule]:
    """Parse ``prefix=regex`` entries separated by commas.

    A comma starts a new entry only when a ``prefix=`` follows it, so commas
    inside a regex (``{1,3}``) stay in the pattern.  ``prefix=`` alone keeps
    every key with that prefix.

    Raises:
        ValueError: If an entry has no ``=``.
    """
    rules: List[FilterRule] = []
    for entry in _FILTER_ENTRY_SEPARATOR.split(value):
        entry = entry.strip()
        if not entry:
            continue
        prefix, sep, pattern = entry.partition("=")
        if not sep:
            raise ValueError(f"Invalid resource filter {entry!r}: expected prefix=regex")
        rules.append(FilterRule(prefix=prefix.strip(), pattern=pattern.strip()))
    return rules


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _interpolate_env_vars(content: str) -> str:
    """Interpolate ``${VAR_NAME}`` and ``${VAR_NAME:-default}`` in *content*."""
    pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
        var_name = match.group(1)
        default = match.group(2)
        value = os.getenv(var_name)
        if value is not None:
            return value
        if default is not None:
            return default
        return match.group(0)

    return pattern.sub(_replace, content)
