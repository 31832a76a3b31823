import random
from typing import List, Optional, Sequence

from .counts import MAX_COUNT, MIN_COUNT
from .fallbacks import FALLBACK_QUESTIONS, pick_fallback
from .normalizer import strip_question_prefix

MIN_QUESTION_LENGTH = 10

QUESTION_CUES = ("tell me", "describe", "explain", "how", "what", "why", "when", "where")


def _is_substantial(line: str) -> bool:
    return len(line) > MIN_QUESTION_LENGTH


def segment_questions(
    raw: str,
    target_count: int,
    rng: Optional[random.Random] = None,
    pool: Sequence[str] = FALLBACK_QUESTIONS,
) -> List[str]:
    """Split a multi-line model reply into exactly ``target_count`` questions.

    Short lines are noise. Surplus questions are cut in first-seen order and
    missing ones are drawn from ``pool``. Pool entries already in the list are
    skipped until every entry of the pool is present; after that duplicates
    are accepted so padding always terminates.
    """
    if not MIN_COUNT <= target_count <= MAX_COUNT:
        raise ValueError(f"target_count must be between {MIN_COUNT} and {MAX_COUNT}, got {target_count}.")
    rng = rng or random.Random()

    questions: List[str] = []
    for line in (raw or "").splitlines():
        line = line.strip()
        if not _is_substantial(line):
            continue
        cleaned = strip_question_prefix(line)
        if _is_substantial(cleaned) and cleaned not in questions:
            questions.append(cleaned)

    if len(questions) > target_count:
        return questions[:target_count]

    while len(questions) < target_count:
        candidate = rng.choice(pool)
        if candidate not in questions or all(entry in questions for entry in pool):
            questions.append(candidate)
    return questions


def finish_question(raw: str) -> str:
    """Turn a single-question reply into one clean line, adding '?' when it reads like a question."""
    question = strip_question_prefix(raw or "")
    if "\n" in question:
        question = question.split("\n")[0].strip()
    if question and not question.endswith(("?", ".")):
        lowered = question.lower()
        if any(cue in lowered for cue in QUESTION_CUES):
            question += "?"
    return question


def finish_or_fallback(
    raw: str,
    rng: Optional[random.Random] = None,
    pool: Sequence[str] = FALLBACK_QUESTIONS,
) -> str:
    question = finish_question(raw)
    if len(question) < MIN_QUESTION_LENGTH:
        return pick_fallback(pool, rng)
    return question
