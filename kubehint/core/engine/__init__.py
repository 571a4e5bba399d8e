"""
Lint engine — shape check, rule dispatch and batch linting.

    from kubehint.core.engine import LintEngine, InvalidArgument
"""

from kubehint.core.engine.dispatcher import Dispatcher
from kubehint.core.engine.linter import InvalidArgument, LintEngine
from kubehint.core.engine.validator import DocumentValidator

__all__ = [
    "Dispatcher",
    "DocumentValidator",
    "InvalidArgument",
    "LintEngine",
]
