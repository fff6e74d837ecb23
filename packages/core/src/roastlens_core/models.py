"""Data model shared by the roast pipeline.

Kept free of any SDK or store imports so every layer (providers, diff
source, CLI, store) can depend on it without pulling in the others.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ISSUE_KINDS = ("error", "warning", "suggestion", "info")
FILE_STATUSES = ("added", "modified", "removed", "renamed")


@dataclass(frozen=True)
class UnifiedDiffHunk:
    """One ``@@ -a,b +c,d @@`` block of a unified diff, header line included."""

    old_start: int
    old_line_count: int
    new_start: int
    new_line_count: int
    raw_content: str


@dataclass(frozen=True)
class ParsedFileChange:
    filename: str
    status: str  # "added" | "modified" | "removed" | "renamed"
    additions_count: int
    deletions_count: int
    hunks: tuple[UnifiedDiffHunk, ...] = ()
    raw_patch: str = ""


@dataclass
class ReviewRequest:
    """Input to the pipeline. Run it through validators.validate_review_request first."""

    code: str
    language: str | None = None
    context: str | None = None
    focus_areas: tuple[str, ...] = ()
    provider_id: str = "openai"
    model_id: str = ""
    title: str | None = None


@dataclass
class ReviewIssue:
    kind: str  # "error" | "warning" | "suggestion" | "info"
    title: str
    description: str
    line_start: int | None = None
    line_end: int | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind, "title": self.title, "description": self.description}
        if self.line_start is not None:
            data["lineStart"] = self.line_start
        if self.line_end is not None:
            data["lineEnd"] = self.line_end
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data

    @classmethod
    def from_dict(cls, d: dict) -> ReviewIssue:
        return cls(
            kind=d.get("type", "info"),
            title=d.get("title", ""),
            description=d.get("description", ""),
            line_start=d.get("lineStart"),
            line_end=d.get("lineEnd"),
            suggestion=d.get("suggestion"),
        )


@dataclass
class ReviewResult:
    """The terminal artifact of a roast, stamped with the provider that produced it.

    Serialized with the same keys the model is asked to emit (``roasts`` for
    highlight_quotes, ``provider``/``model`` for provenance) so stored rows
    stay readable next to the raw model contract.
    """

    summary: str
    issues: list[ReviewIssue] = field(default_factory=list)
    highlight_quotes: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    positives: list[str] = field(default_factory=list)
    score: int = 42
    verdict: str = ""
    provider_id: str = ""
    model_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "issues": [issue.to_dict() for issue in self.issues],
            "roasts": list(self.highlight_quotes),
            "improvements": list(self.improvements),
            "positives": list(self.positives),
            "score": self.score,
            "verdict": self.verdict,
            "provider": self.provider_id,
            "model": self.model_id,
        }

    @classmethod
    def from_dict(cls, d: dict) -> ReviewResult:
        return cls(
            summary=d.get("summary", ""),
            issues=[ReviewIssue.from_dict(i) for i in d.get("issues", []) if isinstance(i, dict)],
            highlight_quotes=list(d.get("roasts", [])),
            improvements=list(d.get("improvements", [])),
            positives=list(d.get("positives", [])),
            score=d.get("score", 42),
            verdict=d.get("verdict", ""),
            provider_id=d.get("provider", ""),
            model_id=d.get("model", ""),
        )


@dataclass(frozen=True)
class ModelDescriptor:
    id: str
    name: str
    description: str = ""


@dataclass
class PullRequestMetadata:
    number: int
    title: str
    state: str
    url: str
    author: str
    head_ref: str
    base_ref: str
    additions: int = 0
    deletions: int = 0
    changed_file_count: int = 0


@dataclass
class PullRequestFile:
    """One entry of a pull request's file list. ``patch`` is None for binary or oversized files."""

    filename: str
    status: str
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None
