"""
Rule registry — two-level lookup from (kind, apiVersion) to a rule.

Kinds are normalised to lower case on the way in and on the way out.
Each kind holds any number of exact apiVersion entries plus at most one
default entry, keyed by ``DEFAULT_VERSION``, which is used when no exact
version matches.

The registry is populated once when an engine is built and is read-only
from then on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from kubehint.core.models.findings import FindingsCollector

logger = logging.getLogger(__name__)

RuleFunction = Callable[[Mapping[str, Any], int, FindingsCollector], FindingsCollector]

# Key of the per-kind fallback entry. Not a string, so no real
# apiVersion can ever collide with it.
DEFAULT_VERSION = None


class RuleRegistry:
    """Maps a normalised kind, then an apiVersion, to a rule function."""

    def __init__(self) -> None:
        self._rules: dict[str, dict[str | None, RuleFunction]] = {}

    def register(
        self,
        kind: str,
        rule: RuleFunction,
        api_version: str | None = DEFAULT_VERSION,
    ) -> None:
        """Register a rule for a kind.

        Args:
            kind: Resource kind, any case.
            rule: The rule function.
            api_version: Exact apiVersion, or ``DEFAULT_VERSION`` for the
                kind's fallback entry.
        """
        versions = self._rules.setdefault(kind.lower(), {})
        label = api_version if api_version is not None else "default"
        if api_version in versions:
            logger.warning("Overwriting existing rule: %s %s", kind.lower(), label)
        versions[api_version] = rule
        logger.debug("Registered rule: %s %s", kind.lower(), label)

    def resolve(self, kind: str, api_version: str) -> RuleFunction | None:
        """Find the rule for a document's kind and apiVersion.

        Exact version first, then the kind's default entry. Returns None
        when the kind has neither.
        """
        versions = self._rules.get(kind.lower())
        if versions is None:
            return None
        rule = versions.get(api_version)
        if rule is None:
            rule = versions.get(DEFAULT_VERSION)
        return rule

    def has_kind(self, kind: str) -> bool:
        """Whether any rule is registered for the kind."""
        return kind.lower() in self._rules

    def kinds(self) -> list[str]:
        """List all registered (normalised) kinds."""
        return list(self._rules.keys())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} kinds={self.kinds()!r}>"
