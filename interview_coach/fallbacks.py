import random
from typing import Optional, Sequence

FALLBACK_QUESTIONS = (
    "Tell me about your problem-solving approach.",
    "Describe a challenging situation you faced recently.",
    "How do you handle working under pressure?",
    "What motivates you in your work?",
    "Describe your ideal work environment.",
    "Tell me about a challenging project you worked on and how you overcame the obstacles.",
    "Describe a time when you had to work with a difficult team member. How did you handle it?",
    "What's your approach to handling tight deadlines and multiple priorities?",
    "Tell me about a time you had to learn a new technology or skill quickly.",
    "Describe a situation where you had to give constructive feedback to a colleague.",
    "How do you stay updated with the latest trends in your field?",
    "Tell me about a time you made a mistake at work. How did you handle it?",
    "Describe your problem-solving process when faced with a complex technical issue.",
)

FALLBACK_SUGGESTIONS = (
    "Structure your answer with the STAR method: situation, task, action, result.",
    "Quantify the outcome with concrete metrics where you can.",
    "Lead with a one-sentence summary before going into detail.",
    "Make your personal contribution explicit instead of describing only the team's work.",
)

RETRY_SUGGESTION = "Please try again for detailed feedback."
IMPROVED_ANSWER_UNAVAILABLE = "Improved answer example not available at this time."
NO_RESPONSE = "No response received from AI."


def pick_fallback(pool: Sequence[str] = FALLBACK_QUESTIONS, rng: Optional[random.Random] = None) -> str:
    """Uniformly draw one entry from a fallback pool."""
    return (rng or random.Random()).choice(pool)
