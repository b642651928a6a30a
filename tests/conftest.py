# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for monres tests."""

from __future__ import annotations

import os

import pytest
from opentelemetry.sdk.resources import Resource

from monres.models.identity import MonitoredResourceIdentity


@pytest.fixture(autouse=True)
def clean_monres_env(monkeypatch):
    """Keep MONRES_* settings from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("MONRES_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def k8s_pod_override_attrs():
    """Attributes forcing a k8s_pod identity, plus one unrelated attribute."""
    return {
        "gcp.resource_type": "k8s_pod",
        "gcp.k8s_pod.namespace": "default",
        "gcp.k8s_pod.pod_name": "web-1",
        "other.unrelated": "x",
    }


@pytest.fixture
def gce_resource():
    """An SDK Resource as the GCE detector would produce it."""
    return Resource(
        {
            "cloud.provider": "gcp",
            "cloud.platform": "gcp_compute_engine",
            "cloud.availability_zone": "us-central1-a",
            "host.id": "1234567890",
            "host.name": "vm-1",
            "service.name": "orders",
        }
    )


class RecordingMapper:
    """Mapper double that records calls and returns fixed identities."""

    def __init__(self) -> None:
        self.calls = []
        self.monitoring = MonitoredResourceIdentity("generic_node", {"node_id": "from-monitoring"})
        self.logging = MonitoredResourceIdentity("generic_node", {"node_id": "from-logging"})

    def map_for_monitoring(self, attrs):
        self.calls.append(("monitoring", dict(attrs)))
        return self.monitoring

    def map_for_logging(self, attrs):
        self.calls.append(("logging", dict(attrs)))
        return self.logging


@pytest.fixture
def recording_mapper():
    return RecordingMapper()
