"""Normalize a raw model reply into a ReviewResult.

parse_response never raises. The model is asked for a bare JSON object but
regularly wraps it in a markdown fence, adds prose around it, drops fields
or returns the wrong types. Each field is pulled with a type check and a
fixed default; if no JSON object can be decoded at all, a synthetic result
is returned that keeps the first 500 characters of the reply as the summary.

Provenance (provider_id/model_id) is left empty here and stamped by the
provider that made the call.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from roastlens_core.models import ISSUE_KINDS, ReviewIssue, ReviewResult

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 42
DEFAULT_SUMMARY = "This code left me speechless... and not in a good way."
DEFAULT_VERDICT = "No comment. I'm calling my therapist."
DEFAULT_POSITIVES = ("At least you tried.",)

FALLBACK_SUMMARY_CHARS = 500
FALLBACK_ROAST = "The code was so bad even the JSON parser gave up."
FALLBACK_VERDICT = "Error parsing response. Even the AI couldn't handle this code."

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _candidate_json(raw: str) -> str:
    text = raw
    fence = _FENCE_RE.search(raw)
    if fence:
        text = fence.group(1).strip()
    obj = _OBJECT_RE.search(text)
    if obj:
        text = obj.group(0)
    return text


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _strings(value: Any) -> list[str]:
    return [item for item in value if isinstance(item, str)]


def _line(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _score(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_SCORE
    if not math.isfinite(value):
        return DEFAULT_SCORE
    return max(0, min(100, int(round(value))))


def _issue(item: dict) -> ReviewIssue:
    kind = item.get("type")
    suggestion = item.get("suggestion")
    return ReviewIssue(
        kind=kind if kind in ISSUE_KINDS else "info",
        title=item.get("title") if isinstance(item.get("title"), str) else "",
        description=item.get("description") if isinstance(item.get("description"), str) else "",
        line_start=_line(item.get("lineStart")),
        line_end=_line(item.get("lineEnd")),
        suggestion=suggestion if isinstance(suggestion, str) else None,
    )


def fallback_result(raw: str) -> ReviewResult:
    return ReviewResult(
        summary=raw[:FALLBACK_SUMMARY_CHARS],
        issues=[],
        highlight_quotes=[FALLBACK_ROAST],
        improvements=[],
        positives=[],
        score=DEFAULT_SCORE,
        verdict=FALLBACK_VERDICT,
    )


def parse_response(raw: str | None) -> ReviewResult:
    raw = raw or ""
    try:
        parsed = json.loads(_candidate_json(raw))
    except (ValueError, RecursionError):
        logger.warning("Could not parse model response as JSON: %s", raw[:200])
        return fallback_result(raw)

    if not isinstance(parsed, dict):
        logger.warning("Model response is JSON but not an object: %s", raw[:200])
        return fallback_result(raw)

    issues = parsed.get("issues")
    roasts = parsed.get("roasts")
    improvements = parsed.get("improvements")
    positives = parsed.get("positives")

    return ReviewResult(
        summary=_text(parsed.get("summary"), DEFAULT_SUMMARY),
        issues=[_issue(i) for i in issues if isinstance(i, dict)] if isinstance(issues, list) else [],
        highlight_quotes=_strings(roasts) if isinstance(roasts, list) else [],
        improvements=_strings(improvements) if isinstance(improvements, list) else [],
        positives=_strings(positives) if isinstance(positives, list) else list(DEFAULT_POSITIVES),
        score=_score(parsed.get("score")),
        verdict=_text(parsed.get("verdict"), DEFAULT_VERDICT),
    )
