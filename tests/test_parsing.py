import json
import pytest
from interview_coach.fallbacks import FALLBACK_SUGGESTIONS, IMPROVED_ANSWER_UNAVAILABLE, RETRY_SUGGESTION
from interview_coach.feedback import (
    FeedbackResult, Issue, average_score, extract_feedback, history_record,
    parse_feedback_response, score_cards, unavailable_feedback, with_generic_suggestion,
)

REPLY = ("Structure score: 85\nClarity: 60\nIssues:\n- too vague\nSuggestions:\n- add metrics\n"
         "Improved Answer: Use the STAR method.")

class SequenceRng:
    def __init__(self, picks):
        self.picks = list(picks)
    def choice(self, seq):
        return seq[self.picks.pop(0)]

def test_extract_feedback_full_reply():
    res = extract_feedback(REPLY)
    assert (res.structure, res.clarity, res.tone, res.relevance) == (85, 60, None, None)
    assert res.issues == (Issue(message="too vague", kind="warning"),)
    assert res.suggestions == ("add metrics",)
    assert res.improved_answer == "Use the STAR method."
    assert res.reply == REPLY

@pytest.mark.parametrize("raw", ["", None, "The model had nothing useful to say."])
def test_extract_feedback_never_fails(raw):
    res = extract_feedback(raw)
    assert res.scores() == {"structure": None, "clarity": None, "tone": None, "relevance": None}
    assert res.issues == ()
    assert res.suggestions == ()
    assert res.improved_answer is None

def test_zero_is_a_real_score():
    assert extract_feedback("Relevance: 0").relevance == 0

def test_out_of_range_score_is_unavailable():
    assert extract_feedback("Tone score: 250").tone is None

def test_direct_score_beats_text():
    res = extract_feedback("Structure score: 40\nClarity: 75", {"structure": 90, "clarity": 0})
    assert res.structure == 90
    assert res.clarity == 0

def test_missing_or_bad_direct_score_falls_back_to_text():
    res = extract_feedback("Structure: 40\nClarity: 75\nTone: 50",
                           {"structure": None, "clarity": "n/a", "tone": True})
    assert (res.structure, res.clarity, res.tone) == (40, 75, 50)

def test_direct_score_suffixed_keys():
    assert extract_feedback("", {"relevance_score": 77}).relevance == 77

def test_parse_feedback_response_side_channel():
    res = parse_feedback_response({"reply": REPLY, "structure_score": 70, "tone_score": 55.0})
    assert res.structure == 70
    assert res.tone == 55
    assert res.clarity == 60

def test_parse_feedback_response_without_reply():
    res = parse_feedback_response({})
    assert res.reply == ""
    assert res.issues == ()

def test_sections_with_mixed_bullets_and_blank_lines():
    raw = ("Issues:\n* rambling intro\n\n• no numbers\n"
           "Suggestions:\n\n1) cut the intro\n- quantify impact\n"
           "Improved version:\n  I led the migration.\n  It cut costs by 20%.  ")
    res = extract_feedback(raw)
    assert [i.message for i in res.issues] == ["rambling intro", "no numbers"]
    assert all(i.kind == "warning" for i in res.issues)
    assert res.suggestions == ("1) cut the intro", "quantify impact")
    assert res.improved_answer == "I led the migration.\n  It cut costs by 20%."

def test_section_runs_to_end_without_later_labels():
    res = extract_feedback("Issues:\n- missing example\n- too long")
    assert [i.message for i in res.issues] == ["missing example", "too long"]
    assert res.suggestions == ()
    assert res.improved_answer is None

def test_empty_improved_block_is_absent():
    assert extract_feedback("Suggestions:\n- slow down\nImproved answer:   ").improved_answer is None

def test_issue_kind_is_validated():
    with pytest.raises(ValueError):
        Issue(message="x", kind="critical")

def test_to_dict_is_plain_data():
    data = extract_feedback(REPLY).to_dict()
    assert data["issues"] == [{"type": "warning", "message": "too vague"}]
    assert data["suggestions"] == ["add metrics"]
    assert data["tone"] is None
    json.dumps(data)

def test_score_cards():
    cards = score_cards(extract_feedback(REPLY))
    assert [c["label"] for c in cards] == ["Structure", "Clarity", "Tone", "Relevance"]
    assert [c["display"] for c in cards] == ["85%", "60%", "N/A", "N/A"]

def test_history_record_zeroes_unavailable_scores():
    rec = history_record("Why us?", "Because.", extract_feedback(REPLY))
    assert (rec["structure_score"], rec["clarity_score"], rec["tone_score"]) == (85, 60, 0)
    assert json.loads(rec["issues"]) == [{"type": "warning", "message": "too vague"}]
    assert json.loads(rec["suggestions"]) == ["add metrics"]
    assert average_score(rec) == 48

def test_unavailable_feedback():
    res = unavailable_feedback()
    assert res.scores() == {"structure": None, "clarity": None, "tone": None, "relevance": None}
    assert res.suggestions == (RETRY_SUGGESTION,)
    assert res.improved_answer == IMPROVED_ANSWER_UNAVAILABLE

def test_generic_suggestion_only_when_missing():
    bare = FeedbackResult(reply="Clarity: 50", clarity=50)
    padded = with_generic_suggestion(bare, rng=SequenceRng([1]))
    assert padded.suggestions == (FALLBACK_SUGGESTIONS[1],)
    assert padded.clarity == 50
    full = extract_feedback(REPLY)
    assert with_generic_suggestion(full) is full

@pytest.mark.parametrize("reply", [
    "Structure score: 70\nThe tone was calm; milestone 4 slipped.\nTone score: 88",
    "Improved Answer: I hit milestone 3 early.\nTone score: 88",
])
def test_score_label_inside_word_is_ignored(reply):
    assert extract_feedback(reply).tone == 88

def test_section_label_inside_word_is_ignored():
    res = extract_feedback("Structure: 60\nThe tissue sample analogy confused me.\nSuggestions:\n- drop it")
    assert res.issues == ()
    assert res.suggestions == ("drop it",)

def test_echoed_header_words_are_not_items():
    res = extract_feedback("Issues found (list specific problems):\n- rambling\n"
                           "Suggestions for improvement:\n- tighten")
    assert [issue.message for issue in res.issues] == ["rambling"]
    assert res.suggestions == ("tighten",)
