from .counts import extract_count
from .fallbacks import FALLBACK_QUESTIONS, FALLBACK_SUGGESTIONS
from .feedback import FeedbackResult, Issue, extract_feedback, parse_feedback_response
from .normalizer import normalize
from .questions import finish_or_fallback, finish_question, segment_questions

__all__ = [
    "normalize",
    "extract_count",
    "segment_questions",
    "extract_feedback",
    "finish_question",
    "finish_or_fallback",
    "parse_feedback_response",
    "FeedbackResult",
    "Issue",
    "FALLBACK_QUESTIONS",
    "FALLBACK_SUGGESTIONS",
]
