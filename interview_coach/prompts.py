NEXT_QUESTION_PROMPT = (
    "Generate one general interview question. Return only the question text, nothing else. "
    "Make it a behavioral or technical question suitable for a job interview."
)


def build_generation_prompt(count: int, request: str) -> str:
    return f"""Generate exactly {count} interview questions based on this request: "{request}".

IMPORTANT INSTRUCTIONS:
- Generate EXACTLY {count} questions, no more, no less
- Each question should be on a separate line
- Do not include numbering, bullets, or prefixes
- Make each question clear and interview-appropriate
- Focus on the specific topics mentioned in the request

Example format:
Tell me about your experience with data structures
Explain how you would implement a binary search algorithm
Describe a time when you optimized code performance"""


def build_feedback_prompt(question: str, answer: str) -> str:
    return f"""Please analyze this interview answer and provide comprehensive feedback:

Question: {question}
Answer: {answer}

Please provide:
1. Structure score (0-100)
2. Clarity score (0-100)
3. Tone score (0-100)
4. Relevance score (0-100)
5. Issues found (list specific problems)
6. Suggestions for improvement (actionable advice)
7. An improved version of the answer that demonstrates best practices

Format your response clearly with sections for each component."""
