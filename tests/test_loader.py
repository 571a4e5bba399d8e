"""
Tests for the loader — manifest files and rule configuration.
"""

import textwrap
from pathlib import Path

import pytest

from kubehint.core.config.loader import (
    ConfigError,
    find_rule_config,
    load_documents,
    load_rule_config,
    parse_manifest,
)


def _write(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content))
    return path


class TestParseManifest:
    def test_multi_document(self, manifests_dir: Path):
        path = _write(manifests_dir, "app.yaml", """\
            apiVersion: apps/v1
            kind: Deployment
            ---
            apiVersion: v1
            kind: Service
        """)
        docs = parse_manifest(path)
        assert [d["kind"] for d in docs] == ["Deployment", "Service"]

    def test_empty_documents_dropped(self, manifests_dir: Path):
        path = _write(manifests_dir, "app.yaml", """\
            ---
            apiVersion: v1
            kind: Service
            ---
            ---
        """)
        assert len(parse_manifest(path)) == 1

    def test_non_mapping_documents_kept(self, manifests_dir: Path):
        path = _write(manifests_dir, "odd.yaml", """\
            - just
            - a list
            ---
            plain string
        """)
        assert parse_manifest(path) == [["just", "a list"], "plain string"]

    def test_json(self, manifests_dir: Path):
        path = _write(manifests_dir, "pvc.json", '{"apiVersion": "v1", "kind": "PersistentVolumeClaim"}')
        assert parse_manifest(path)[0]["kind"] == "PersistentVolumeClaim"

    def test_invalid_yaml(self, manifests_dir: Path):
        path = _write(manifests_dir, "bad.yaml", "kind: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            parse_manifest(path)


class TestLoadDocuments:
    def test_directory_sorted_and_filtered(self, manifests_dir: Path):
        _write(manifests_dir, "b.yaml", "apiVersion: v1\nkind: Service\n")
        _write(manifests_dir, "a.yml", "apiVersion: apps/v1\nkind: Deployment\n")
        _write(manifests_dir, "notes.txt", "not a manifest")
        _write(manifests_dir, "node_modules/x.yaml", "apiVersion: v1\nkind: Pod\n")

        manifests = load_documents([manifests_dir])
        assert [d["kind"] for d in manifests.documents] == ["Deployment", "Service"]
        assert [f.name for f in manifests.files] == ["a.yml", "b.yaml"]

    def test_sources_track_documents(self, manifests_dir: Path):
        first = _write(manifests_dir, "one.yaml", "apiVersion: v1\nkind: A\n---\napiVersion: v1\nkind: B\n")
        second = _write(manifests_dir, "two.yaml", "apiVersion: v1\nkind: C\n")

        manifests = load_documents([first, second])
        assert manifests.sources == [first, first, second]
        assert manifests.source_of(2) == second
        assert manifests.source_of(None) is None
        assert manifests.source_of(3) is None

    def test_paths_keep_given_order(self, manifests_dir: Path):
        a = _write(manifests_dir, "a.yaml", "apiVersion: v1\nkind: A\n")
        b = _write(manifests_dir, "b.yaml", "apiVersion: v1\nkind: B\n")
        manifests = load_documents([str(b), str(a)])
        assert [d["kind"] for d in manifests.documents] == ["B", "A"]

    def test_missing_path(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_documents([tmp_path / "nope"])


class TestRuleConfig:
    def test_defaults_when_absent(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_rule_config().version == "1.15.4"

    def test_found_upward(self, tmp_path: Path, monkeypatch):
        _write(tmp_path, ".kubehint.yml", 'version: "1.27.3"\n')
        nested = tmp_path / "deep" / "er"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert find_rule_config() == (tmp_path / ".kubehint.yml").resolve()
        assert load_rule_config().version == "1.27.3"

    def test_unquoted_version(self, tmp_path: Path):
        path = _write(tmp_path, ".kubehint.yml", "version: 1.29\n")
        assert load_rule_config(path).version == "1.29"

    def test_extra_settings(self, tmp_path: Path):
        path = _write(tmp_path, ".kubehint.yml", "version: '1.28.0'\nstrict: true\n")
        assert load_rule_config(path).model_extra == {"strict": True}

    def test_empty_file(self, tmp_path: Path):
        path = _write(tmp_path, ".kubehint.yml", "")
        assert load_rule_config(path).version == "1.15.4"

    def test_explicit_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_rule_config(tmp_path / "missing.yml")

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write(tmp_path, ".kubehint.yml", "- 1.15\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_rule_config(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path, ".kubehint.yml", "version: [1\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_rule_config(path)

    def test_invalid_version(self, tmp_path: Path):
        path = _write(tmp_path, ".kubehint.yml", "version: [1, 2]\n")
        with pytest.raises(ConfigError, match="Invalid rule configuration"):
            load_rule_config(path)
