"""
Document summaries — plain-language descriptions of workloads.

Cross-references each workload (Deployment, StatefulSet, Job, ...) with
the Services that route to it and the PersistentVolumeClaims it mounts:

    A "redis" Deployment, with 1 replica of "redis:6"
    exposed internally (not to the internet) at the DNS address "redis"
    with a 80Gi volume "redis-pvc" mounted at /data

Read-only over the documents. Does not depend on lint findings, but
expects the documents to be the usual Kubernetes shapes; anything that
does not fit is skipped rather than reported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

_WORKLOAD_KINDS = frozenset({
    "pod", "replicaset", "daemonset", "statefulset", "deployment", "cronjob", "job",
})

# Service types reachable from outside the cluster
_EXTERNAL_SERVICE_TYPES = frozenset({"LoadBalancer", "NodePort"})


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _scalar(value: Any) -> str | int | None:
    """Return ``value`` if it is a port number or name, else None."""
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return value
    return None


def _kind(doc: Any) -> str:
    """Lower-cased kind of a document, or '' when it has none."""
    kind = _mapping(doc).get("kind")
    return kind.lower() if isinstance(kind, str) else ""


def _name(doc: Mapping[str, Any]) -> str:
    return str(_mapping(doc.get("metadata")).get("name", "?"))


def _pod_template(doc: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the pod template ``{metadata, spec}`` of a workload."""
    spec = _mapping(doc.get("spec"))
    kind = _kind(doc)
    if kind == "pod":
        return {"metadata": _mapping(doc.get("metadata")), "spec": spec}
    if kind == "cronjob":
        spec = _mapping(_mapping(spec.get("jobTemplate")).get("spec"))
    return _mapping(spec.get("template"))


def is_workload(doc: Any) -> bool:
    """Whether a document is a workload kind (a trailing 's' is tolerated)."""
    kind = _kind(doc)
    if kind.endswith("s"):
        kind = kind[:-1]
    return kind in _WORKLOAD_KINDS


# ═══════════════════════════════════════════════════════════════════
#  Summary sections
# ═══════════════════════════════════════════════════════════════════


def _subject_line(doc: Mapping[str, Any], containers: list[Any]) -> str:
    replicas = _mapping(doc.get("spec")).get("replicas", 1)
    unit = "replica" if replicas == 1 else "replicas"
    images = [
        f'{replicas} {unit} of "{_mapping(c).get("image", "?")}"'
        for c in containers
    ]
    described = " and ".join(images) if images else "no containers"
    return f'A "{_name(doc)}" {doc["kind"]}, with {described}'


def _container_ports(containers: list[Any]) -> set[Any]:
    """Every containerPort number and port name exposed by the containers."""
    ports: set[Any] = set()
    for container in containers:
        for port in _list(_mapping(container).get("ports")):
            port = _mapping(port)
            for key in ("containerPort", "name"):
                value = _scalar(port.get(key))
                if value is not None:
                    ports.add(value)
    return ports


def _service_lines(
    template: Mapping[str, Any],
    containers: list[Any],
    services: list[Mapping[str, Any]],
) -> list[str]:
    labels = _mapping(_mapping(template.get("metadata")).get("labels"))
    exposed = _container_ports(containers)
    lines: list[str] = []

    if not exposed:
        return lines

    for svc in services:
        spec = _mapping(svc.get("spec"))
        selector = _mapping(spec.get("selector"))
        if not selector or any(labels.get(k) != v for k, v in selector.items()):
            continue
        targets = {
            _scalar(_mapping(p).get("targetPort", _mapping(p).get("port")))
            for p in _list(spec.get("ports"))
        }
        targets.discard(None)
        if not targets & exposed:
            continue

        if _scalar(spec.get("type")) in _EXTERNAL_SERVICE_TYPES:
            reach = "exposed to the internet"
        else:
            reach = "exposed internally (not to the internet)"
        lines.append(f'{reach} at the DNS address "{_name(svc)}"')

    return lines


def _volume_line(
    pod_spec: Mapping[str, Any],
    containers: list[Any],
    claims: dict[str, Mapping[str, Any]],
) -> str | None:
    parts: list[str] = []
    for volume in _list(pod_spec.get("volumes")):
        volume = _mapping(volume)
        claim_name = _mapping(volume.get("persistentVolumeClaim")).get("claimName")
        pvc = claims.get(claim_name) if isinstance(claim_name, str) else None
        if pvc is None:
            continue

        storage = (
            _mapping(_mapping(_mapping(pvc.get("spec")).get("resources")).get("requests"))
            .get("storage", "?")
        )
        for container in containers:
            for mount in _list(_mapping(container).get("volumeMounts")):
                mount = _mapping(mount)
                if mount.get("name") == volume.get("name"):
                    parts.append(
                        f'a {storage} volume "{claim_name}" mounted at {mount.get("mountPath", "?")}'
                    )

    if not parts:
        return None
    return f"with {' and '.join(parts)}"


# ═══════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════


def summarize_documents(docs: Sequence[Any]) -> list[list[str]]:
    """Describe every workload in ``docs``.

    Returns:
        One list of lines per workload, in document order.
    """
    services = [d for d in docs if _kind(d) == "service"]
    claims = {
        _name(d): d for d in docs if _kind(d) == "persistentvolumeclaim"
    }

    summaries: list[list[str]] = []
    for doc in docs:
        if not is_workload(doc):
            continue

        template = _pod_template(doc)
        pod_spec = _mapping(template.get("spec"))
        containers = _list(pod_spec.get("containers"))

        summary = [_subject_line(doc, containers)]
        summary.extend(_service_lines(template, containers, services))
        volumes = _volume_line(pod_spec, containers, claims)
        if volumes:
            summary.append(volumes)

        summaries.append(summary)

    logger.debug("Summarised %d workload(s) out of %d document(s)", len(summaries), len(docs))
    return summaries
