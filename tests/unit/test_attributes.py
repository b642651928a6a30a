# SPDX-FileCopyrightText: 2026 The Monres Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for AttributeSet and value coercion."""

from __future__ import annotations

import pytest
from opentelemetry.sdk.resources import Resource

from monres.models.attributes import AttributeSet, as_string
from monres.models.identity import MonitoredResourceIdentity, TargetBackend


class TestAsString:
    """Tests for attribute value string coercion."""

    def test_string_unchanged(self):
        assert as_string("orders") == "orders"

    def test_booleans(self):
        assert as_string(True) == "true"
        assert as_string(False) == "false"

    def test_integers(self):
        assert as_string(42) == "42"
        assert as_string(-7) == "-7"

    def test_floats_drop_trailing_zero(self):
        assert as_string(2.0) == "2"
        assert as_string(1.5) == "1.5"
        assert as_string(0.1) == "0.1"

    def test_large_float_not_in_exponent_form(self):
        assert as_string(1e21) == "1000000000000000000000"

    def test_special_floats(self):
        assert as_string(float("nan")) == "NaN"
        assert as_string(float("inf")) == "+Inf"
        assert as_string(float("-inf")) == "-Inf"

    def test_bytes_base64(self):
        assert as_string(b"hi") == "aGk="

    def test_sequences_json(self):
        assert as_string(("a", "b")) == '["a","b"]'
        assert as_string([1, 2]) == "[1,2]"

    def test_none_is_empty(self):
        assert as_string(None) == ""


class TestAttributeSet:
    """Tests for the AttributeSet mapping."""

    def test_from_dict(self):
        attrs = AttributeSet({"a": "1", "b": 2})
        assert len(attrs) == 2
        assert attrs["b"] == 2
        assert set(attrs) == {"a", "b"}

    def test_from_resource(self):
        attrs = AttributeSet(Resource({"service.name": "orders"}))
        assert attrs["service.name"] == "orders"

    def test_empty(self):
        assert len(AttributeSet()) == 0

    def test_copy_is_independent(self):
        source = {"a": "1"}
        attrs = AttributeSet(source)
        source["a"] = "changed"
        assert attrs["a"] == "1"

    def test_of_reuses_attribute_set(self):
        attrs = AttributeSet({"a": "1"})
        assert AttributeSet.of(attrs) is attrs

    def test_get_string_found(self):
        attrs = AttributeSet({"replicas": 3, "enabled": True})
        assert attrs.get_string("replicas") == ("3", True)
        assert attrs.get_string("enabled") == ("true", True)

    def test_get_string_missing(self):
        assert AttributeSet({}).get_string("nope") == ("", False)

    def test_get_string_present_but_empty(self):
        assert AttributeSet({"k": ""}).get_string("k") == ("", True)

    def test_equals_plain_mapping(self):
        assert AttributeSet({"a": "1"}) == {"a": "1"}

    def test_is_read_only(self):
        attrs = AttributeSet({"a": "1"})
        with pytest.raises(TypeError):
            attrs["a"] = "2"  # type: ignore[index]


class TestMonitoredResourceIdentity:
    """Tests for the identity value object."""

    def test_empty_type_rejected(self):
        with pytest.raises(ValueError):
            MonitoredResourceIdentity(type="")

    def test_labels_default_empty(self):
        assert MonitoredResourceIdentity("generic_node").labels == {}

    def test_labels_are_copied(self):
        labels = {"zone": "a"}
        identity = MonitoredResourceIdentity("gce_instance", labels)
        labels["zone"] = "b"
        assert identity.labels == {"zone": "a"}

    def test_labels_are_read_only(self):
        identity = MonitoredResourceIdentity("k8s_pod", {"pod_name": "p"})
        with pytest.raises(TypeError):
            identity.labels["pod_name"] = "q"  # type: ignore[index]

    def test_hashable(self):
        first = MonitoredResourceIdentity("k8s_pod", {"pod_name": "p", "namespace_name": "ns"})
        second = MonitoredResourceIdentity("k8s_pod", {"namespace_name": "ns", "pod_name": "p"})
        assert hash(first) == hash(second)
        assert {first, second} == {first}
        assert {first: 1}[second] == 1

    def test_different_labels_not_equal(self):
        first = MonitoredResourceIdentity("k8s_pod", {"pod_name": "p"})
        assert first != MonitoredResourceIdentity("k8s_pod", {"pod_name": "q"})

    def test_to_dict(self):
        identity = MonitoredResourceIdentity("k8s_pod", {"pod_name": "web-1"})
        assert identity.to_dict() == {"type": "k8s_pod", "labels": {"pod_name": "web-1"}}

    def test_target_backend_values(self):
        assert TargetBackend.MONITORING.value == "monitoring"
        assert TargetBackend("logging") is TargetBackend.LOGGING
