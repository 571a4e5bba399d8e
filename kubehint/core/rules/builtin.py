"""
Built-in best-practice rules.

Every rule is a free function ``(document, document_index, findings)``
that records findings and returns the same collector. Rules only run on
documents that already have a string ``apiVersion`` and ``kind``; deeper
fields fall back to empty values, so a half-written manifest yields findings
rather than a crash.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kubehint.core.models.findings import FindingsCollector
from kubehint.core.rules.registry import RuleRegistry


def _mapping(value: Any) -> Mapping[str, Any]:
    """Return ``value`` if it is a mapping, else an empty one."""
    return value if isinstance(value, Mapping) else {}


def _lacks_resources(container: Any) -> bool:
    """True when a container has no usable ``resources`` entry.

    Missing, null, false, empty-string and zero values count as absent.
    Any mapping, even an empty one, counts as present.
    """
    resources = _mapping(container).get("resources")
    return resources is None or resources in (False, "", 0)


def _containers(document: Mapping[str, Any]) -> list[Any]:
    """Containers of a pod template at ``spec.template.spec.containers``."""
    pod_spec = _mapping(_mapping(_mapping(document.get("spec")).get("template")).get("spec"))
    containers = pod_spec.get("containers")
    return containers if isinstance(containers, list) else []


# ═══════════════════════════════════════════════════════════════════
#  Rules
# ═══════════════════════════════════════════════════════════════════


def lint_persistent_volume_claim(
    document: Mapping[str, Any],
    document_index: int,
    findings: FindingsCollector,
) -> FindingsCollector:
    """PersistentVolumeClaim — accepted as-is."""
    return findings


def lint_deployment(
    document: Mapping[str, Any],
    document_index: int,
    findings: FindingsCollector,
) -> FindingsCollector:
    """Deployment best practices.

    - fewer than 2 replicas → suggestion (single point of failure)
    - no containers → error
    - each container without resources → warning
    """
    replicas = _mapping(document.get("spec")).get("replicas")
    if isinstance(replicas, (int, float)) and not isinstance(replicas, bool):
        if replicas < 2:
            findings.record_suggestion(
                document_index,
                "spec.replicas",
                "One replica implies a single point of failure!",
            )

    containers = _containers(document)
    if len(containers) < 1:
        findings.record_error(
            document_index,
            "spec.template.spec.containers.length",
            "No containers in this Deployment?",
        )

    for i, container in enumerate(containers):
        if _lacks_resources(container):
            findings.record_warning(
                document_index,
                f"spec.template.spec.containers[{i}]",
                "No resource limits defined!",
            )

    return findings


# ═══════════════════════════════════════════════════════════════════
#  Registry
# ═══════════════════════════════════════════════════════════════════


def default_registry() -> RuleRegistry:
    """Build a registry holding the built-in rule set."""
    registry = RuleRegistry()
    registry.register("PersistentVolumeClaim", lint_persistent_volume_claim)
    registry.register("Deployment", lint_deployment, api_version="apps/v1")
    registry.register("Deployment", lint_deployment)
    return registry
