"""
CLI commands for linting and summarising manifests.

Thin wrappers over ``kubehint.core.engine`` and
``kubehint.core.services.summarize``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from kubehint.core.config.loader import ConfigError, ManifestSet, load_documents
from kubehint.core.models.findings import Finding, FindingsCollector

_SEVERITY_COLORS = {"error": "red", "warning": "yellow", "suggestion": "cyan"}
_SEVERITY_ICONS = {"error": "❌", "warning": "⚠️", "suggestion": "💡"}


def _load(paths: tuple[str, ...]) -> ManifestSet:
    """Load manifests or exit with a message."""
    try:
        return load_documents([Path(p) for p in paths])
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _location(manifests: ManifestSet, finding: Finding) -> str:
    source = manifests.source_of(finding.document_index)
    if source is None:
        return "document ?"
    return f"{source} (document {finding.document_index})"


def _print_findings(manifests: ManifestSet, findings: FindingsCollector) -> None:
    groups = (
        ("error", findings.errors),
        ("warning", findings.warnings),
        ("suggestion", findings.suggestions),
    )
    for severity, items in groups:
        for finding in items:
            field = f" {finding.field_path}" if finding.field_path else ""
            click.secho(
                f"   {_SEVERITY_ICONS[severity]} [{severity.upper()}] "
                f"{_location(manifests, finding)}{field}",
                fg=_SEVERITY_COLORS[severity],
            )
            click.echo(f"      {finding.message}")


@click.command("lint")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--k8s-version", default=None, help="Target Kubernetes version.")
@click.pass_context
def lint(ctx: click.Context, paths: tuple[str, ...], as_json: bool, k8s_version: str | None) -> None:
    """Lint Kubernetes manifests for best practices.

    Examples:

        kubehint lint k8s/

        kubehint lint deploy.yaml service.yaml --json
    """
    from kubehint.core.config.loader import load_rule_config
    from kubehint.core.engine.linter import LintEngine

    try:
        config = load_rule_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    if k8s_version:
        config = config.model_copy(update={"version": k8s_version})

    manifests = _load(paths)
    findings = LintEngine(default_config=config).lint(manifests.documents)

    if as_json:
        click.echo(json.dumps(findings.to_dict(), indent=2))
        sys.exit(0 if findings.ok else 1)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.secho(
            f"🔍 Linting {len(manifests.documents)} document(s) "
            f"from {len(manifests.files)} file(s) (Kubernetes {config.version})",
            fg="cyan",
        )

    errors = len(findings.errors)
    warnings = len(findings.warnings)
    suggestions = len(findings.suggestions)

    if findings.total == 0:
        click.secho("✅ No issues found", fg="green", bold=True)
        return

    _print_findings(manifests, findings)
    click.echo()
    click.secho(
        f"   {errors} error(s), {warnings} warning(s), {suggestions} suggestion(s)",
        fg="red" if errors else "yellow",
        bold=True,
    )

    if errors:
        sys.exit(1)


@click.command("summarize")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def summarize(paths: tuple[str, ...], as_json: bool) -> None:
    """Describe the workloads in Kubernetes manifests."""
    from kubehint.core.services.summarize import summarize_documents

    manifests = _load(paths)
    summaries = summarize_documents(manifests.documents)

    if as_json:
        click.echo(json.dumps(summaries, indent=2))
        return

    if not summaries:
        click.echo("No workloads found")
        return

    for summary in summaries:
        click.secho(f"📦 {summary[0]}", bold=True)
        for line in summary[1:]:
            click.echo(f"   {line}")
        click.echo()
