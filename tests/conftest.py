"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo setup_logging() calls made by CLI tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def deployment() -> dict:
    """A single-replica apps/v1 Deployment with one container, no resources."""
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": "redis"},
        "spec": {
            "replicas": 1,
            "template": {"spec": {"containers": [{"image": "redis"}]}},
        },
    }


@pytest.fixture
def healthy_deployment() -> dict:
    """A Deployment with no findings."""
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": "web"},
        "spec": {
            "replicas": 3,
            "template": {
                "spec": {
                    "containers": [
                        {
                            "name": "web",
                            "image": "nginx:1.25",
                            "resources": {"limits": {"cpu": "500m", "memory": "256Mi"}},
                        },
                    ],
                },
            },
        },
    }


@pytest.fixture
def manifests_dir(tmp_path: Path) -> Path:
    """Return a k8s/ directory under tmp_path."""
    k8s = tmp_path / "k8s"
    k8s.mkdir()
    return k8s
