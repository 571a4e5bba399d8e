"""
LintEngine — public entry point for linting a batch of manifests.

Usage:

    engine = LintEngine()
    findings = engine.lint(documents)
    for error in findings.errors:
        print(error.document_index, error.field_path, error.message)

Bad call arguments (a non-sequence batch, a non-mapping configuration)
raise InvalidArgument before any document is looked at. Problems with
the documents themselves are returned as findings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from kubehint.core.engine.dispatcher import Dispatcher
from kubehint.core.models.findings import FindingsCollector
from kubehint.core.models.rule_config import RuleConfiguration
from kubehint.core.rules.builtin import default_registry
from kubehint.core.rules.registry import RuleRegistry

logger = logging.getLogger(__name__)


class InvalidArgument(TypeError):
    """Raised when lint is called with arguments it cannot work with."""


def _coerce_config(config: RuleConfiguration | Mapping[str, Any]) -> RuleConfiguration:
    """Turn a model or a plain mapping into a RuleConfiguration."""
    if isinstance(config, RuleConfiguration):
        return config
    if not isinstance(config, Mapping):
        raise InvalidArgument(
            "Lint expects a rule configuration mapping, "
            f"got {type(config).__name__}"
        )
    try:
        return RuleConfiguration.model_validate(dict(config))
    except ValidationError as e:
        raise InvalidArgument(f"Invalid rule configuration: {e}") from e


class LintEngine:
    """Lints Kubernetes manifests against the registered rule set.

    Args:
        default_config: Configuration used by calls that do not pass their
            own. Defaults to ``RuleConfiguration()``.
        registry: Rule registry. Defaults to the built-in rules.
        notifier: Logger receiving the "no linter defined" notices.
    """

    def __init__(
        self,
        default_config: RuleConfiguration | Mapping[str, Any] | None = None,
        registry: RuleRegistry | None = None,
        notifier: logging.Logger | None = None,
    ):
        self._default_config = (
            _coerce_config(default_config) if default_config is not None
            else RuleConfiguration()
        )
        self._dispatcher = Dispatcher(registry or default_registry(), notifier=notifier)

    @property
    def default_config(self) -> RuleConfiguration:
        return self._default_config

    @property
    def registry(self) -> RuleRegistry:
        return self._dispatcher.registry

    def _resolve_config(
        self, config: RuleConfiguration | Mapping[str, Any] | None,
    ) -> RuleConfiguration:
        if config is None:
            return self._default_config
        return _coerce_config(config)

    def lint(
        self,
        documents: Sequence[Any],
        config: RuleConfiguration | Mapping[str, Any] | None = None,
    ) -> FindingsCollector:
        """Lint every document, in order, into one collector.

        Args:
            documents: The parsed manifests.
            config: Rule configuration for this run.

        Raises:
            InvalidArgument: If ``documents`` is not a sequence or
                ``config`` is not a mapping.
        """
        if not isinstance(documents, Sequence) or isinstance(documents, (str, bytes)):
            raise InvalidArgument(
                "Lint expects a sequence of document objects as its first argument"
            )
        rules = self._resolve_config(config)

        findings = FindingsCollector()
        for index, document in enumerate(documents):
            self.lint_document(document, index, findings, rules)

        logger.debug(
            "Linted %d document(s): %d error(s), %d warning(s), %d suggestion(s)",
            len(documents),
            len(findings.errors),
            len(findings.warnings),
            len(findings.suggestions),
        )
        return findings

    def lint_document(
        self,
        document: Any,
        document_index: int,
        findings: FindingsCollector | None = None,
        config: RuleConfiguration | Mapping[str, Any] | None = None,
    ) -> FindingsCollector:
        """Lint a single document.

        Args:
            document: The parsed manifest.
            document_index: Position of the document in its batch.
            findings: Collector to add to. A new one is created if omitted.
            config: Rule configuration for this document.
        """
        rules = self._resolve_config(config)
        if findings is None:
            findings = FindingsCollector()
        return self._dispatcher.process(document, document_index, findings, rules)
