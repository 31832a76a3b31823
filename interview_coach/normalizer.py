import re

BULLET = "\u2022"


def _normalize_once(text: str) -> str:
    text = re.sub(r'^#{1,6}[ \t]+', '', text, flags=re.MULTILINE)  # Remove headers
    text = re.sub(r'\*\*(.*?)\*\*', r'\1', text)  # Remove bold
    text = re.sub(r'\*(.*?)\*', r'\1', text)  # Remove italic
    text = re.sub(r'^[-*+][ \t]+', BULLET + ' ', text, flags=re.MULTILINE)  # Uniform bullets
    text = re.sub(r'\n{3,}', '\n\n', text)  # Max 2 newlines
    return text.strip()


def normalize(text: str) -> str:
    """Strip markdown presentation from a model reply so it reads as plain text.

    Passes are repeated until nothing changes: unwrapping emphasis can expose a
    header or bullet at the start of a line, and a single pass would leave it.
    Every pass either shortens the text or turns a '-', '*' or '+' marker into
    a bullet, so the loop terminates.
    """
    if not text:
        return ""
    current = text
    while True:
        cleaned = _normalize_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def strip_question_prefix(line: str) -> str:
    """Remove numbering, 'Question:'/'Q:' labels and bullet markers from one line."""
    line = line.strip()
    line = re.sub(r'^\d+\.\s*', '', line)  # "1. "
    line = re.sub(r'^Question:\s*', '', line, flags=re.IGNORECASE)
    line = re.sub(r'^Q:\s*', '', line, flags=re.IGNORECASE)
    line = re.sub(r'^[*' + BULLET + r']\s*', '', line)  # Bullets
    line = re.sub(r'^-\s*', '', line)  # Dashes
    return line.strip()
