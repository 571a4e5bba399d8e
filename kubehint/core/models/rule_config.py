"""
RuleConfiguration — the knobs handed to a lint run.

Only ``version`` (the targeted Kubernetes release) is defined today.
Extra keys are kept so that rule sets can grow their own settings
without a model change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

DEFAULT_K8S_VERSION = "1.15.4"


class RuleConfiguration(BaseModel):
    """Configuration for one lint run."""

    model_config = ConfigDict(extra="allow")

    version: str = DEFAULT_K8S_VERSION
