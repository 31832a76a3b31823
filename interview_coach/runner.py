import random
from typing import List, Optional

from .client import call_agent
from .counts import extract_count
from .fallbacks import NO_RESPONSE, pick_fallback
from .feedback import FeedbackResult, parse_feedback_response, unavailable_feedback, with_generic_suggestion
from .normalizer import normalize
from .prompts import NEXT_QUESTION_PROMPT, build_feedback_prompt, build_generation_prompt
from .questions import finish_or_fallback, segment_questions

CHAT_ERROR_REPLY = "I'm sorry, I'm having trouble connecting right now. Please try again in a moment."


def generate_questions(request: str, user_id: str = "anonymous", rng: Optional[random.Random] = None) -> List[str]:
    """Ask the coach for a batch of questions matching a free-text request."""
    count = extract_count(request)
    prompt = build_generation_prompt(count, request)
    try:
        reply = call_agent(user_id, prompt).get("reply") or ""
    except Exception as e:
        print(f"[generate_questions] Error calling agent, using fallback questions: {e}")
        reply = ""

    questions = segment_questions(reply, count, rng=rng)
    print(f"[generate_questions] Requested {count}, returning {len(questions)} questions")
    return questions


def next_question(user_id: str = "anonymous", rng: Optional[random.Random] = None) -> str:
    try:
        reply = call_agent(user_id, NEXT_QUESTION_PROMPT).get("reply") or ""
    except Exception as e:
        print(f"[next_question] Error loading question: {e}")
        return pick_fallback(rng=rng)
    return finish_or_fallback(reply, rng=rng)


def review_answer(
    question: str,
    answer: str,
    user_id: str = "anonymous",
    rng: Optional[random.Random] = None,
    pad_suggestions: bool = False,
) -> FeedbackResult:
    """Get coach feedback on one answer; a failed call yields the 'unavailable' result."""
    try:
        response = call_agent(user_id, build_feedback_prompt(question, answer))
    except Exception as e:
        print(f"[review_answer] Error getting feedback: {e}")
        return unavailable_feedback()

    result = parse_feedback_response(response)
    missing = [name for name, score in result.scores().items() if score is None]
    if missing:
        print(f"[review_answer] Scores unavailable in reply: {', '.join(missing)}")
    if pad_suggestions:
        result = with_generic_suggestion(result, rng=rng)
    return result


def chat_reply(message: str, user_id: str = "anonymous") -> str:
    try:
        reply = call_agent(user_id, message).get("reply") or NO_RESPONSE
    except Exception as e:
        print(f"[chat_reply] Error calling agent: {e}")
        return CHAT_ERROR_REPLY
    return normalize(reply)
