"""
Document validator — minimal shape check run before any rule.

A document must be a mapping with a non-empty string ``apiVersion`` and a
non-empty string ``kind``. Checks stop at the first failure, so a
document never gets more than one structural error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from kubehint.core.models.findings import FindingsCollector

logger = logging.getLogger(__name__)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


class DocumentValidator:
    """Checks that a document can be dispatched to a rule."""

    def validate(
        self,
        document: Any,
        document_index: int,
        findings: FindingsCollector,
    ) -> bool:
        """Check one document, recording at most one error.

        Returns:
            True if a structural error was recorded.
        """
        if not isinstance(document, Mapping):
            findings.record_error(None, None, "Document is not an object!")
        elif not _is_non_empty_str(document.get("apiVersion")):
            findings.record_error(document_index, "apiVersion", "apiVersion is invalid!")
        elif not _is_non_empty_str(document.get("kind")):
            findings.record_error(document_index, "kind", "kind is invalid!")
        else:
            return False

        logger.debug("Document %d failed the shape check", document_index)
        return True
