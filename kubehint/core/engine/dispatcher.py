"""
Dispatcher — routes one document to the rule for its kind and version.

Steps for each document:
    1. Shape check (DocumentValidator). Stop on failure.
    2. Resolve the rule from the registry by (kind, apiVersion).
    3. Run the rule, or log a notice when no rule covers the document.

A missing rule is a gap in rule coverage, not a fault in the document,
so it is logged and never recorded as a finding. Errors raised by a rule
are not caught here. All dispatcher output goes to one logger, the
injected ``notifier`` when given.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from kubehint.core.engine.validator import DocumentValidator
from kubehint.core.models.findings import FindingsCollector
from kubehint.core.models.rule_config import RuleConfiguration
from kubehint.core.rules.registry import RuleRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs the shape check and the matching rule for one document."""

    def __init__(
        self,
        registry: RuleRegistry,
        validator: DocumentValidator | None = None,
        notifier: logging.Logger | None = None,
    ):
        self._registry = registry
        self._validator = validator or DocumentValidator()
        self._notifier = notifier or logger

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def process(
        self,
        document: Any,
        document_index: int,
        findings: FindingsCollector,
        config: RuleConfiguration | None = None,
    ) -> FindingsCollector:
        """Lint one document into ``findings`` and return it.

        Rules are called with ``(document, document_index, findings)``;
        ``config`` is only reported in the debug log.
        """
        if self._validator.validate(document, document_index, findings):
            return findings

        assert isinstance(document, Mapping)  # guaranteed by the shape check
        api_version: str = document["apiVersion"]
        kind: str = document["kind"]
        if config is not None:
            self._notifier.debug(
                "Document %d: %s/%s (Kubernetes %s)",
                document_index, api_version, kind, config.version,
            )

        if not self._registry.has_kind(kind):
            self._notifier.warning(
                "No linter defined for %s/%s",
                api_version,
                kind,
                extra={"api_version": api_version, "kind": kind},
            )
            return findings

        rule = self._registry.resolve(kind, api_version)
        if rule is None:
            self._notifier.debug("No %s rule for apiVersion %s and no default", kind, api_version)
            return findings

        return rule(document, document_index, findings)
