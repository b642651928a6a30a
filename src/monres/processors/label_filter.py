# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""AttributeLabelFilter - chooses which resource attributes become labels.

A resource usually carries far more attributes than a time series should be
labelled with.  Two things survive the filter:

- Service identity (``service.name``, ``service.namespace``,
  ``service.instance.id``) when ``include_service_labels`` is set and the
  value is not empty.
- Any attribute accepted by a :class:`~monres.models.FilterRule`.  Rules are
  tried in order and the first match wins.

Service keys are decided by the service branch alone while
``include_service_labels`` is on; they are never checked against rules
then.
"""

from __future__ import annotations

import logging
from typing import ClassVar, FrozenSet, Iterable, Tuple

from opentelemetry.sdk.resources import SERVICE_INSTANCE_ID, SERVICE_NAME, SERVICE_NAMESPACE

from monres.models.attributes import AttributeSet, AttributeSource, as_string
from monres.models.filter_rule import FilterRule

logger = logging.getLogger(__name__)


class AttributeLabelFilter:
    """Reduces resource attributes to the labels attached to exported points."""

    SERVICE_LABEL_KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {
            SERVICE_NAME,
            SERVICE_NAMESPACE,
            SERVICE_INSTANCE_ID,
        }
    )

    def __init__(
        self,
        include_service_labels: bool = True,
        rules: Iterable[FilterRule] = (),
    ) -> None:
        self._include_service_labels = include_service_labels
        self._rules: Tuple[FilterRule, ...] = tuple(rules)

    @property
    def include_service_labels(self) -> bool:
        return self._include_service_labels

    @property
    def rules(self) -> Tuple[FilterRule, ...]:
        return self._rules

    def filter(self, attrs: AttributeSource) -> AttributeSet:
        """Return the subset of *attrs* to export as labels, values as strings."""
        source = AttributeSet.of(attrs)
        labels = {}
        for key, value in source.items():
            if self._include_service_labels and key in self.SERVICE_LABEL_KEYS:
                text = as_string(value)
                if text:
                    labels[key] = text
                continue

            for rule in self._rules:
                if rule.matches(key):
                    labels[key] = as_string(value)
                    break

        logger.debug("Kept %d of %d resource attributes as labels", len(labels), len(source))
        return AttributeSet(labels)


def filter_attributes(
    attrs: AttributeSource,
    include_service_labels: bool,
    rules: Iterable[FilterRule],
) -> AttributeSet:
    """One-shot form of :meth:`AttributeLabelFilter.filter`."""
    return AttributeLabelFilter(include_service_labels, rules).filter(attrs)


SERVICE_LABEL_KEYS = AttributeLabelFilter.SERVICE_LABEL_KEYS
