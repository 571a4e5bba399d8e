"""
kubehint — best-practice linting for Kubernetes resource manifests.
"""

__version__ = "0.1.0"
