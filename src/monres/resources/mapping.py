# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Heuristic mapping from resource attributes to monitored resources.

Picks a monitored resource type from well-known OpenTelemetry resource
conventions, most specific first:

- Platform (``cloud.platform``): App Engine, Cloud Run, Cloud Functions,
  Compute Engine, AWS EC2, Bare Metal Solution
- Kubernetes (``k8s.*``): container, pod, node, cluster
- Service / FaaS identity: ``generic_task``
- Anything else: ``generic_node``

Two flavors exist because the monitoring and logging backends accept
different type vocabularies.  Both are total: every attribute set maps to
some identity.

The mapper behind ``opentelemetry-resourcedetector-gcp`` is private and
only covers the monitoring vocabulary, so it cannot serve the logging
flavor.  Pass any object with ``map_for_monitoring`` and
``map_for_logging`` to :class:`~monres.resources.ResourceIdentityResolver`
to replace this one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from opentelemetry.sdk.resources import (
    CLOUD_ACCOUNT_ID,
    CLOUD_AVAILABILITY_ZONE,
    CLOUD_REGION,
    FAAS_INSTANCE,
    FAAS_NAME,
    FAAS_VERSION,
    HOST_NAME,
    KUBERNETES_CLUSTER_NAME,
    KUBERNETES_CONTAINER_NAME,
    KUBERNETES_NAMESPACE_NAME,
    KUBERNETES_POD_NAME,
    SERVICE_INSTANCE_ID,
    SERVICE_NAME,
    SERVICE_NAMESPACE,
)

from monres.models.attributes import AttributeSet, AttributeSource
from monres.models.identity import MonitoredResourceIdentity

CLOUD_PLATFORM = "cloud.platform"
HOST_ID = "host.id"
KUBERNETES_NODE_NAME = "k8s.node.name"

UNKNOWN_SERVICE_PREFIX = "unknown_service"

# =========================================================================
# Monitored Resource Types
# =========================================================================

AWS_EC2_INSTANCE = "aws_ec2_instance"
BMS_INSTANCE = "baremetalsolution.googleapis.com/Instance"
CLOUD_FUNCTION = "cloud_function"
CLOUD_RUN_REVISION = "cloud_run_revision"
GAE_APP = "gae_app"
GAE_INSTANCE = "gae_instance"
GCE_INSTANCE = "gce_instance"
GENERIC_NODE = "generic_node"
GENERIC_TASK = "generic_task"
K8S_CLUSTER = "k8s_cluster"
K8S_CONTAINER = "k8s_container"
K8S_NODE = "k8s_node"
K8S_POD = "k8s_pod"

# =========================================================================
# Label Mappings
# =========================================================================

_LOCATION_KEYS: List[str] = [CLOUD_AVAILABILITY_ZONE, CLOUD_REGION]


@dataclass(frozen=True)
class LabelMapping:
    """Labels of one monitored resource type.

    ``label_keys`` maps each label to candidate attribute keys, tried in
    order.  When none is present the label takes its ``fallbacks`` value,
    or ``""``.
    """

    label_keys: Dict[str, List[str]]
    fallbacks: Dict[str, str] = field(default_factory=dict)


MONITORED_RESOURCE_MAPPINGS: Dict[str, LabelMapping] = {
    GCE_INSTANCE: LabelMapping(
        label_keys={
            "zone": [CLOUD_AVAILABILITY_ZONE],
            "instance_id": [HOST_ID],
        },
    ),
    K8S_CONTAINER: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "cluster_name": [KUBERNETES_CLUSTER_NAME],
            "namespace_name": [KUBERNETES_NAMESPACE_NAME],
            "pod_name": [KUBERNETES_POD_NAME],
            "container_name": [KUBERNETES_CONTAINER_NAME],
        },
    ),
    K8S_POD: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "cluster_name": [KUBERNETES_CLUSTER_NAME],
            "namespace_name": [KUBERNETES_NAMESPACE_NAME],
            "pod_name": [KUBERNETES_POD_NAME],
        },
    ),
    K8S_NODE: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "cluster_name": [KUBERNETES_CLUSTER_NAME],
            "node_name": [KUBERNETES_NODE_NAME],
        },
    ),
    K8S_CLUSTER: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "cluster_name": [KUBERNETES_CLUSTER_NAME],
        },
    ),
    GAE_INSTANCE: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "module_id": [FAAS_NAME],
            "version_id": [FAAS_VERSION],
            "instance_id": [FAAS_INSTANCE],
        },
    ),
    GAE_APP: LabelMapping(
        label_keys={
            "zone": _LOCATION_KEYS,
            "module_id": [FAAS_NAME],
            "version_id": [FAAS_VERSION],
        },
    ),
    CLOUD_RUN_REVISION: LabelMapping(
        label_keys={
            "location": [CLOUD_REGION],
            "service_name": [FAAS_NAME],
            "revision_name": [FAAS_VERSION],
            "configuration_name": [FAAS_NAME],
        },
    ),
    CLOUD_FUNCTION: LabelMapping(
        label_keys={
            "region": [CLOUD_REGION],
            "function_name": [FAAS_NAME],
        },
    ),
    AWS_EC2_INSTANCE: LabelMapping(
        label_keys={
            "instance_id": [HOST_ID],
            "region": _LOCATION_KEYS,
            "aws_account": [CLOUD_ACCOUNT_ID],
        },
    ),
    BMS_INSTANCE: LabelMapping(
        label_keys={
            "location": [CLOUD_REGION],
            "instance_id": [HOST_ID],
        },
    ),
    GENERIC_TASK: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "namespace": [SERVICE_NAMESPACE],
            "job": [SERVICE_NAME, FAAS_NAME],
            "task_id": [SERVICE_INSTANCE_ID, FAAS_INSTANCE],
        },
        fallbacks={"location": "global"},
    ),
    GENERIC_NODE: LabelMapping(
        label_keys={
            "location": _LOCATION_KEYS,
            "namespace": [SERVICE_NAMESPACE],
            "node_id": [HOST_ID, HOST_NAME],
        },
        fallbacks={"location": "global"},
    ),
}

# cloud.platform values recognised before falling back to k8s / generic types.
_COMMON_PLATFORM_TYPES: Dict[str, str] = {
    "gcp_compute_engine": GCE_INSTANCE,
    "aws_ec2": AWS_EC2_INSTANCE,
    "gcp_bare_metal_solution": BMS_INSTANCE,
}

_MONITORING_PLATFORM_TYPES: Dict[str, str] = {
    "gcp_app_engine": GAE_INSTANCE,
}

_LOGGING_PLATFORM_TYPES: Dict[str, str] = {
    "gcp_app_engine": GAE_APP,
    "gcp_cloud_run": CLOUD_RUN_REVISION,
    "gcp_cloud_functions": CLOUD_FUNCTION,
}


# =========================================================================
# Mapping Functions
# =========================================================================


def create_monitored_resource(resource_type: str, attrs: AttributeSet) -> MonitoredResourceIdentity:
    """Fill in the labels of *resource_type* from *attrs*."""
    mapping = MONITORED_RESOURCE_MAPPINGS[resource_type]
    labels: Dict[str, str] = {}
    for label, attr_keys in mapping.label_keys.items():
        value = _first_string(attrs, attr_keys)
        if label == "job" and value is not None and value.startswith(UNKNOWN_SERVICE_PREFIX):
            # SDKs default service.name to "unknown_service:<process>"; a
            # FaaS name identifies the job better.
            faas_name, found = attrs.get_string(FAAS_NAME)
            if found:
                value = faas_name
        if value is None:
            value = mapping.fallbacks.get(label, "")
        labels[label] = _sanitize_utf8(value)
    return MonitoredResourceIdentity(type=resource_type, labels=labels)


def _first_string(attrs: AttributeSet, keys: List[str]) -> Optional[str]:
    for key in keys:
        value, found = attrs.get_string(key)
        if found:
            return value
    return None


def _sanitize_utf8(value: str) -> str:
    return value.encode("utf-8", "replace").decode("utf-8")


def _common_resource_type(cloud_platform: str, attrs: AttributeSet) -> str:
    platform_type = _COMMON_PLATFORM_TYPES.get(cloud_platform)
    if platform_type:
        return platform_type

    if KUBERNETES_CLUSTER_NAME in attrs:
        # Most to least specific.
        if KUBERNETES_CONTAINER_NAME in attrs:
            return K8S_CONTAINER
        if KUBERNETES_POD_NAME in attrs:
            return K8S_POD
        if KUBERNETES_NODE_NAME in attrs:
            return K8S_NODE
        return K8S_CLUSTER

    has_service = SERVICE_NAME in attrs and SERVICE_INSTANCE_ID in attrs
    has_faas = FAAS_NAME in attrs and FAAS_INSTANCE in attrs
    if has_service or has_faas:
        return GENERIC_TASK

    return GENERIC_NODE


class HeuristicResourceMapper:
    """Default mapper with a monitoring flavor and a logging flavor."""

    def map_for_monitoring(self, attrs: AttributeSource) -> MonitoredResourceIdentity:
        return self._map(AttributeSet.of(attrs), _MONITORING_PLATFORM_TYPES)

    def map_for_logging(self, attrs: AttributeSource) -> MonitoredResourceIdentity:
        return self._map(AttributeSet.of(attrs), _LOGGING_PLATFORM_TYPES)

    @staticmethod
    def _map(attrs: AttributeSet, platform_types: Dict[str, str]) -> MonitoredResourceIdentity:
        cloud_platform, _ = attrs.get_string(CLOUD_PLATFORM)
        resource_type = platform_types.get(cloud_platform) or _common_resource_type(cloud_platform, attrs)
        return create_monitored_resource(resource_type, attrs)


def resource_attributes_to_monitoring_resource(attrs: AttributeSource) -> MonitoredResourceIdentity:
    """Map *attrs* with the monitoring vocabulary."""
    return HeuristicResourceMapper().map_for_monitoring(attrs)


def resource_attributes_to_logging_resource(attrs: AttributeSource) -> MonitoredResourceIdentity:
    """Map *attrs* with the logging vocabulary."""
    return HeuristicResourceMapper().map_for_logging(attrs)
