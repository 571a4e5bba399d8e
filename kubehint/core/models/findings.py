"""
Finding and FindingsCollector — the output contract of a lint run.

A lint run never raises for a bad document. Everything it has to say
about the documents lands in one FindingsCollector, split into three
ordered categories: errors, warnings and suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict


class Finding(BaseModel):
    """One reported issue, tied to a document and a field path.

    ``document_index`` is None only for documents whose shape is so broken
    that they are not a mapping at all.
    """

    model_config = ConfigDict(frozen=True)

    document_index: int | None
    field_path: str | None
    message: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


@dataclass
class FindingsCollector:
    """Accumulates findings for a single lint run.

    Append-only while the run is in progress. Insertion order is the
    document processing order, which is the input order.
    """

    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    suggestions: list[Finding] = field(default_factory=list)

    # ── Recording ────────────────────────────────────────────────

    def record_error(
        self, document_index: int | None, field_path: str | None, message: str,
    ) -> None:
        self.errors.append(Finding(
            document_index=document_index, field_path=field_path, message=message,
        ))

    def record_warning(
        self, document_index: int | None, field_path: str | None, message: str,
    ) -> None:
        self.warnings.append(Finding(
            document_index=document_index, field_path=field_path, message=message,
        ))

    def record_suggestion(
        self, document_index: int | None, field_path: str | None, message: str,
    ) -> None:
        self.suggestions.append(Finding(
            document_index=document_index, field_path=field_path, message=message,
        ))

    # ── Reading ──────────────────────────────────────────────────

    @property
    def ok(self) -> bool:
        """True when no errors were recorded."""
        return not self.errors

    @property
    def total(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.suggestions)

    def for_document(self, document_index: int | None) -> FindingsCollector:
        """Return a new collector holding only one document's findings."""
        return FindingsCollector(
            errors=[f for f in self.errors if f.document_index == document_index],
            warnings=[f for f in self.warnings if f.document_index == document_index],
            suggestions=[
                f for f in self.suggestions if f.document_index == document_index
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
            "suggestions": [f.to_dict() for f in self.suggestions],
            "counts": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "suggestions": len(self.suggestions),
            },
        }
