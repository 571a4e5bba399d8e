"""
Configuration loader — reads manifests and rule configuration from disk.

Manifests are YAML (or JSON) files, possibly holding several documents
separated by ``---``. Rule configuration lives in ``.kubehint.yml`` and is
validated into a RuleConfiguration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubehint.core.models.rule_config import RuleConfiguration

logger = logging.getLogger(__name__)

# Default rule configuration filename
RULE_CONFIG_FILE = ".kubehint.yml"

_MANIFEST_SUFFIXES = frozenset({".yaml", ".yml", ".json"})

_SKIP_DIRS = frozenset({
    ".git", ".venv", "venv", "node_modules", "__pycache__",
    ".mypy_cache", ".ruff_cache", ".pytest_cache", ".tox",
    "dist", "build", ".eggs", "htmlcov",
})


class ConfigError(Exception):
    """Raised when manifests or rule configuration cannot be loaded."""


@dataclass
class ManifestSet:
    """Documents loaded from one or more files, in load order."""

    documents: list[Any] = field(default_factory=list)
    sources: list[Path] = field(default_factory=list)  # one per document
    files: list[Path] = field(default_factory=list)

    def source_of(self, document_index: int | None) -> Path | None:
        """File a document came from, or None for an unknown index."""
        if document_index is None or not 0 <= document_index < len(self.sources):
            return None
        return self.sources[document_index]


# ═══════════════════════════════════════════════════════════════════
#  Manifests
# ═══════════════════════════════════════════════════════════════════


def _manifest_files(path: Path) -> list[Path]:
    """Expand a path into the manifest files it names, sorted."""
    if path.is_file():
        return [path]
    if not path.is_dir():
        raise ConfigError(f"Manifest path not found: {path}")

    files: list[Path] = []
    for candidate in sorted(path.rglob("*")):
        rel_parts = candidate.relative_to(path).parts
        if any(part in _SKIP_DIRS for part in rel_parts[:-1]):
            continue
        if candidate.is_file() and candidate.suffix.lower() in _MANIFEST_SUFFIXES:
            files.append(candidate)
    return files


def parse_manifest(path: Path) -> list[Any]:
    """Parse one file into its documents.

    Empty documents (a bare ``---``) are dropped. Everything else is kept
    as parsed, including values that are not mappings, so that the
    linter can report them.

    Raises:
        ConfigError: If the file cannot be read or is not valid YAML.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        return [doc for doc in yaml.safe_load_all(content) if doc is not None]
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_documents(paths: list[Path] | list[str]) -> ManifestSet:
    """Load every document from the given files and directories.

    Args:
        paths: Files or directories. Directories are searched recursively
            for ``*.yaml``, ``*.yml`` and ``*.json``.

    Returns:
        ManifestSet with documents in file order, then in-file order.

    Raises:
        ConfigError: If a path is missing or a file cannot be parsed.
    """
    manifests = ManifestSet()
    for raw in paths:
        for file in _manifest_files(Path(raw)):
            docs = parse_manifest(file)
            manifests.files.append(file)
            manifests.documents.extend(docs)
            manifests.sources.extend([file] * len(docs))
            logger.debug("Loaded %d document(s) from %s", len(docs), file)

    logger.info(
        "Loaded %d document(s) from %d file(s)",
        len(manifests.documents), len(manifests.files),
    )
    return manifests


# ═══════════════════════════════════════════════════════════════════
#  Rule configuration
# ═══════════════════════════════════════════════════════════════════


def find_rule_config(start_dir: Path | None = None) -> Path | None:
    """Search for .kubehint.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / RULE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_rule_config(path: Path | None = None) -> RuleConfiguration:
    """Load and validate rule configuration.

    Args:
        path: Explicit path to the file. If None, searches upward and
            falls back to the defaults when nothing is found.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_rule_config()
        if path is None:
            logger.debug("No %s found, using default rule configuration", RULE_CONFIG_FILE)
            return RuleConfiguration()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading rule config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # YAML reads an unquoted 1.15 as a float
    if isinstance(data.get("version"), (int, float)) and not isinstance(data["version"], bool):
        data["version"] = str(data["version"])

    try:
        config = RuleConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid rule configuration: {e}") from e

    logger.info("Loaded rule configuration for Kubernetes %s", config.version)
    return config
