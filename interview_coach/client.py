import os
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv
from openai import OpenAI

load_dotenv()
_client = None

SYSTEM_PROMPT = (
    "You are an AI Interview Coach. You help candidates practice interviews by asking "
    "questions and giving structured, actionable feedback on their answers."
)

MOCK_QUESTIONS_REPLY = (
    "1. Tell me about a time you had to debug a production incident under pressure.\n"
    "2. Explain how you would design a rate limiter for a public API.\n"
    "3. Describe a situation where you disagreed with a teammate and how you resolved it.\n"
    "4. What trade-offs do you consider when choosing between SQL and NoSQL storage?\n"
    "5. How do you decide when a piece of code is ready to ship?\n"
    "6. Walk me through the last technical design document you wrote.\n"
    "7. Tell me about a project you are proud of and your specific contribution to it.\n"
    "8. Describe how you onboard yourself onto an unfamiliar codebase.\n"
    "9. Explain how you prioritise bugs against feature work.\n"
    "10. What did you learn from the last project that did not go to plan?"
)

MOCK_QUESTION_REPLY = "Question: Tell me about a time you took ownership of a failing project"

MOCK_FEEDBACK_REPLY = (
    "Structure score: 72\n"
    "Clarity score: 80\n"
    "Tone score: 88\n"
    "Relevance score: 65\n\n"
    "Issues:\n"
    "- The answer does not state the outcome.\n"
    "- Personal contribution is unclear.\n\n"
    "Suggestions:\n"
    "- Close with a measurable result.\n"
    "- Use 'I' rather than 'we' for your own actions.\n\n"
    "Improved Answer:\n"
    "When our release pipeline kept failing, I traced the flaky stage, rewrote its retry logic "
    "and cut failed deploys by 40% within two sprints."
)


def _client_openai():
    global _client
    if _client is None:
        key = os.getenv("OPENAI_API_KEY")
        if not key:
            raise RuntimeError("OPENAI_API_KEY not set and FASTAPI_URL not configured; use .env or set MOCK_MODE=1")
        _client = OpenAI(api_key=key)
    return _client


def _mock_reply(message: str) -> Dict[str, Any]:
    # deterministic mock output, chosen by the kind of prompt
    if "analyze this interview answer" in message:
        return {"reply": MOCK_FEEDBACK_REPLY}
    if "Generate exactly" in message:
        return {"reply": MOCK_QUESTIONS_REPLY}
    return {"reply": MOCK_QUESTION_REPLY}


def _call_fastapi(base_url: str, user_id: str, message: str, timeout: float) -> Dict[str, Any]:
    resp = requests.post(
        f"{base_url.rstrip('/')}/agent-chat",
        json={"user_id": user_id, "message": message},
        headers={"Content-Type": "application/json"},
        timeout=timeout,
    )
    if not resp.ok:
        raise RuntimeError(f"FastAPI error: {resp.reason}")
    data = resp.json()
    if not isinstance(data, dict):
        return {"reply": str(data)}
    reply = data.get("reply")
    data["reply"] = reply if isinstance(reply, str) else ("" if reply is None else str(reply))
    return data


def call_agent(user_id: str, message: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """Send one prompt to the coach model and return its payload.

    The payload always has a ``reply`` string and may carry ``*_score``
    fields when the agent endpoint sends them.
    """
    if os.getenv("MOCK_MODE", "0") == "1":
        return _mock_reply(message)

    if timeout is None:
        timeout = float(os.getenv("AGENT_TIMEOUT", "60"))

    base_url = os.getenv("FASTAPI_URL")
    if base_url:
        return _call_fastapi(base_url, user_id, message, timeout)

    client = _client_openai()
    resp = client.chat.completions.create(
        model=os.getenv("OPENAI_MODEL", "gpt-4o"),
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ],
        temperature=0.3,
        user=user_id,
        timeout=timeout,
    )
    return {"reply": resp.choices[0].message.content or ""}
