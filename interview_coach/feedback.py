"""Interpretation of free-form answer evaluations returned by the coach model.

A reply is expected to carry four 0-100 scores (structure, clarity, tone,
relevance), a list of issues, a list of suggestions and an improved version of
the answer, but nothing about its layout is guaranteed. Every field is
extracted independently and a missing field never breaks the others.
"""

from __future__ import annotations

import json
import random
import re
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .fallbacks import FALLBACK_SUGGESTIONS, IMPROVED_ANSWER_UNAVAILABLE, RETRY_SUGGESTION, pick_fallback

SCORE_FIELDS = ("structure", "clarity", "tone", "relevance")
SCORE_MIN, SCORE_MAX = 0, 100

ISSUE_KINDS = ("warning", "error", "success")

# Producer layout order matters: a section ends where any later label starts.
SECTION_LABELS: List[Tuple[str, str]] = [
    ("issues", r"\bissues?\b"),
    ("suggestions", r"\bsuggestions?\b"),
    ("improved_answer", r"\bimproved\b\s*(?:(?:answer|version|response)\b)?"),
]

# Words echoed after a label up to its colon, e.g. "Issues found (list specific problems):"
HEADER_TAIL = r"(?:[ \t][\w ()']{0,40}(?=:))?"


@dataclass(frozen=True)
class Issue:
    message: str
    kind: str = "warning"

    def __post_init__(self):
        if self.kind not in ISSUE_KINDS:
            raise ValueError(f"Unknown issue kind: {self.kind!r}")


@dataclass(frozen=True)
class FeedbackResult:
    reply: str = ""
    structure: Optional[int] = None
    clarity: Optional[int] = None
    tone: Optional[int] = None
    relevance: Optional[int] = None
    issues: Tuple[Issue, ...] = field(default_factory=tuple)
    suggestions: Tuple[str, ...] = field(default_factory=tuple)
    improved_answer: Optional[str] = None

    def scores(self) -> Dict[str, Optional[int]]:
        return {name: getattr(self, name) for name in SCORE_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["issues"] = [{"type": i.kind, "message": i.message} for i in self.issues]
        data["suggestions"] = list(self.suggestions)
        return data


def _coerce_score(value: Any) -> Optional[int]:
    """Accept an int-like score in [0, 100]; anything else counts as missing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        score = round(value) if isinstance(value, float) else int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not SCORE_MIN <= score <= SCORE_MAX:
        return None
    return score


def _direct_score(direct_scores: Optional[Mapping[str, Any]], name: str) -> Optional[int]:
    if not direct_scores:
        return None
    value = direct_scores.get(name)
    if value is None:
        value = direct_scores.get(f"{name}_score")
    return _coerce_score(value)


def _mined_score(reply: str, name: str) -> Optional[int]:
    match = re.search(rf"\b{name}\s*(?:score)?[:\s]*([0-9]+)", reply, re.IGNORECASE)
    return _coerce_score(match.group(1)) if match else None


def _section_spans(reply: str) -> Dict[str, str]:
    spans: Dict[str, str] = {}
    for idx, (slot, label) in enumerate(SECTION_LABELS):
        stops = [pattern for _, pattern in SECTION_LABELS[idx + 1:]] + [r"\Z"]
        pattern = rf"{label}{HEADER_TAIL}[:\s]*(.*?)(?={'|'.join(stops)})"
        match = re.search(pattern, reply, re.IGNORECASE | re.DOTALL)
        if match:
            spans[slot] = match.group(1)
    return spans


def _section_lines(span: str) -> List[str]:
    lines = []
    for line in span.split("\n"):
        cleaned = re.sub(r"^\s*[-*•]\s*", "", line).strip()
        if cleaned:
            lines.append(cleaned)
    return lines


def extract_feedback(raw_reply: str, direct_scores: Optional[Mapping[str, Any]] = None) -> FeedbackResult:
    """Extract scores and sections from one evaluation reply.

    ``direct_scores`` holds values the producer sent out-of-band; a valid one
    always beats a number mined from the text for the same field.
    """
    reply = raw_reply or ""

    scores = {}
    for name in SCORE_FIELDS:
        score = _direct_score(direct_scores, name)
        if score is None:
            score = _mined_score(reply, name)
        scores[name] = score

    spans = _section_spans(reply)
    issues = tuple(Issue(message=line) for line in _section_lines(spans.get("issues", "")))
    suggestions = tuple(_section_lines(spans.get("suggestions", "")))
    improved = spans.get("improved_answer", "").strip() or None

    return FeedbackResult(
        reply=reply,
        issues=issues,
        suggestions=suggestions,
        improved_answer=improved,
        **scores,
    )


def parse_feedback_response(response: Mapping[str, Any]) -> FeedbackResult:
    """Interpret a producer payload: ``reply`` text plus optional ``*_score`` fields."""
    response = response or {}
    reply = response.get("reply") or ""
    if not isinstance(reply, str):
        reply = str(reply)
    direct = {name: response.get(f"{name}_score") for name in SCORE_FIELDS}
    return extract_feedback(reply, direct)


def unavailable_feedback(reply: str = "Unable to get detailed feedback at this time.") -> FeedbackResult:
    return FeedbackResult(
        reply=reply,
        suggestions=(RETRY_SUGGESTION,),
        improved_answer=IMPROVED_ANSWER_UNAVAILABLE,
    )


def with_generic_suggestion(result: FeedbackResult, rng: Optional[random.Random] = None) -> FeedbackResult:
    """Give a reply that produced no suggestions one generic suggestion."""
    if result.suggestions:
        return result
    return replace(result, suggestions=(pick_fallback(FALLBACK_SUGGESTIONS, rng),))


def score_cards(result: FeedbackResult) -> List[Dict[str, Any]]:
    """Display rows for the four scores; unavailable scores show as N/A."""
    cards = []
    for name in SCORE_FIELDS:
        score = getattr(result, name)
        cards.append({
            "label": name.title(),
            "score": score,
            "display": "N/A" if score is None else f"{score}%",
        })
    return cards


def history_record(question: str, answer: str, result: FeedbackResult) -> Dict[str, Any]:
    """Row handed to the persistence layer. Storage has no null scores, so unavailable becomes 0."""
    return {
        "question": question,
        "answer_text": answer,
        "structure_score": result.structure if result.structure is not None else 0,
        "clarity_score": result.clarity if result.clarity is not None else 0,
        "tone_score": result.tone if result.tone is not None else 0,
        "issues": json.dumps([{"type": i.kind, "message": i.message} for i in result.issues]),
        "suggestions": json.dumps(list(result.suggestions)),
    }


def average_score(record: Mapping[str, Any]) -> int:
    values = [record.get(key) or 0 for key in ("structure_score", "clarity_score", "tone_score")]
    return round(sum(values) / 3)
