"""
Domain models — Pydantic types for the linter.

All models are re-exported here for convenient access:

    from kubehint.core.models import Finding, FindingsCollector, RuleConfiguration
"""

from kubehint.core.models.findings import Finding, FindingsCollector
from kubehint.core.models.rule_config import DEFAULT_K8S_VERSION, RuleConfiguration

__all__ = [
    "DEFAULT_K8S_VERSION",
    # findings.py
    "Finding",
    "FindingsCollector",
    # rule_config.py
    "RuleConfiguration",
]
