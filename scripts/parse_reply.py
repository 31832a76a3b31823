#!/usr/bin/env python
import argparse, json, random
from typing import Any, Dict
from interview_coach import extract_count, finish_or_fallback, normalize, parse_feedback_response, segment_questions
from interview_coach.feedback import score_cards

def run(args) -> Dict[str, Any]:
    with open(args.input, "r", encoding="utf-8") as f:
        raw = f.read()
    rng = random.Random(args.seed) if args.seed is not None else None

    if args.kind == "normalize":
        return {"text": normalize(raw)}
    if args.kind == "question":
        return {"question": finish_or_fallback(raw, rng=rng)}
    if args.kind == "questions":
        count = args.count if args.count is not None else extract_count(args.request or "")
        return {"count": count, "questions": segment_questions(raw, count, rng=rng)}

    result = parse_feedback_response({"reply": raw})
    out = result.to_dict()
    out["score_cards"] = score_cards(result)
    return out

def main():
    ap = argparse.ArgumentParser(description="Interpret a saved coach reply")
    ap.add_argument("input", help="Path to a text file holding the raw model reply")
    ap.add_argument("--kind", choices=["feedback", "questions", "question", "normalize"], default="feedback")
    ap.add_argument("--count", type=int, help="Number of questions to keep (1-10)")
    ap.add_argument("--request", help="Free-text request to read the question count from")
    ap.add_argument("--seed", type=int, help="Seed for fallback selection")
    args = ap.parse_args()

    try:
        out = run(args)
    except ValueError as e:
        ap.error(str(e))
    print(json.dumps(out, indent=2, ensure_ascii=False))

if __name__ == "__main__":
    main()
