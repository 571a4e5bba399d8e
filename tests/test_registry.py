"""
Tests for RuleRegistry and the built-in registry contents.
"""

import logging

from kubehint.core.models import FindingsCollector
from kubehint.core.rules.builtin import (
    default_registry,
    lint_deployment,
    lint_persistent_volume_claim,
)
from kubehint.core.rules.registry import DEFAULT_VERSION, RuleRegistry


def _rule_a(document, document_index, findings):
    return findings


def _rule_b(document, document_index, findings):
    return findings


class TestResolve:
    def test_exact_version(self):
        registry = RuleRegistry()
        registry.register("Deployment", _rule_a, api_version="apps/v1")
        registry.register("Deployment", _rule_b)
        assert registry.resolve("Deployment", "apps/v1") is _rule_a

    def test_default_fallback(self):
        registry = RuleRegistry()
        registry.register("Deployment", _rule_a, api_version="apps/v1")
        registry.register("Deployment", _rule_b)
        assert registry.resolve("Deployment", "extensions/v1beta1") is _rule_b

    def test_unregistered_kind(self):
        registry = RuleRegistry()
        registry.register("Deployment", _rule_a)
        assert registry.resolve("Widget", "example.com/v1") is None
        assert registry.has_kind("Widget") is False

    def test_registered_kind_without_default(self):
        registry = RuleRegistry()
        registry.register("Service", _rule_a, api_version="v1")
        assert registry.has_kind("Service") is True
        assert registry.resolve("Service", "v2") is None

    def test_kind_is_case_insensitive(self):
        registry = RuleRegistry()
        registry.register("PersistentVolumeClaim", _rule_a)
        assert registry.resolve("persistentvolumeclaim", "v1") is _rule_a
        assert registry.resolve("PERSISTENTVOLUMECLAIM", "v1") is _rule_a
        assert registry.kinds() == ["persistentvolumeclaim"]

    def test_version_is_case_sensitive(self):
        registry = RuleRegistry()
        registry.register("Deployment", _rule_a, api_version="apps/v1")
        assert registry.resolve("Deployment", "Apps/V1") is None

    def test_literal_default_string_is_a_version(self):
        """The fallback entry cannot be reached by an apiVersion named 'default'."""
        registry = RuleRegistry()
        registry.register("Deployment", _rule_a, api_version="default")
        registry.register("Deployment", _rule_b, api_version=DEFAULT_VERSION)
        assert registry.resolve("Deployment", "default") is _rule_a
        assert registry.resolve("Deployment", "apps/v1") is _rule_b


class TestRegister:
    def test_overwrite_logs_warning(self, caplog):
        registry = RuleRegistry()
        registry.register("Deployment", _rule_a)
        with caplog.at_level(logging.WARNING, logger="kubehint.core.rules.registry"):
            registry.register("Deployment", _rule_b)
        assert registry.resolve("Deployment", "apps/v1") is _rule_b
        assert "Overwriting existing rule" in caplog.text


class TestDefaultRegistry:
    def test_kinds(self):
        assert sorted(default_registry().kinds()) == ["deployment", "persistentvolumeclaim"]

    def test_deployment_versions_share_logic(self):
        registry = default_registry()
        assert registry.resolve("Deployment", "apps/v1") is lint_deployment
        assert registry.resolve("Deployment", "extensions/v1beta1") is lint_deployment

    def test_pvc_default(self):
        registry = default_registry()
        assert registry.resolve("PersistentVolumeClaim", "v1") is lint_persistent_volume_claim

    def test_pvc_accepts_any_shape(self):
        findings = FindingsCollector()
        result = lint_persistent_volume_claim(
            {"apiVersion": "v1", "kind": "PersistentVolumeClaim", "spec": "nonsense"}, 0, findings,
        )
        assert result is findings
        assert findings.total == 0

    def test_fresh_instances(self):
        assert default_registry() is not default_registry()
