"""
Text parser for OCR'd exam-question screenshots.
OCR 텍스트에서 문제, 선택지, 정답, 해설을 추출합니다.

Every field is a best-effort regex extraction. A miss leaves the field empty;
parsing never raises.
"""

import re

from .schema import ParsedQuestion

_NEWLINES_RE = re.compile(r"\r\n?")

# "Question:", "Question 3:", "Q12." ... up to the first option or answer label
_QUESTION_RE = re.compile(
    r"\bQ(?:uestion)?(?:\s*\d+)?(?:[:.)]\s*|\s+)"
    r"(.*?)"
    r"(?=\(?\bA\)|\n[ \t]*\(?A[.:)][ \t]|Options:|Your\s+Answer|Correct\s+Answer|$)",
    re.IGNORECASE | re.DOTALL,
)

# "A) text", "B. text", "C: text", "(D) text" - on its own line or inline after another option
_OPTION_RE = re.compile(
    r"(?<![A-Za-z0-9])([A-D])[:.)][ \t]*"
    r"(.+?)"
    r"(?=[ \t]+\(?[A-D][:.)]|[ \t]*(?i:your\s+answer|correct\s+answer|explanation)|[ \t]*$)",
    re.MULTILINE,
)

_YOUR_ANSWER_RE = re.compile(r"\bYour\s+Answer[:\s]*([A-D])\b", re.IGNORECASE)
_CORRECT_ANSWER_RE = re.compile(r"\bCorrect\s+Answer[:\s]*([A-D])\b", re.IGNORECASE)
_EXPLANATION_RE = re.compile(r"\bExplanation[:\s]*(.*)", re.IGNORECASE | re.DOTALL)


def parse_question(text: str) -> ParsedQuestion:
    """Extract question stem, options, answers and explanation from OCR text."""
    normalized = _NEWLINES_RE.sub("\n", text)
    result = ParsedQuestion(raw_text=text)

    question_match = _QUESTION_RE.search(normalized)
    if question_match:
        result.question = question_match.group(1).strip()

    # No dedup: OCR that repeats a line yields a repeated option
    for match in _OPTION_RE.finditer(normalized):
        option_text = match.group(2).strip()
        if option_text:
            result.options.append(f"{match.group(1)}: {option_text}")

    your_match = _YOUR_ANSWER_RE.search(normalized)
    if your_match:
        result.your_answer = your_match.group(1).upper()

    correct_match = _CORRECT_ANSWER_RE.search(normalized)
    if correct_match:
        result.correct_answer = correct_match.group(1).upper()

    explanation_match = _EXPLANATION_RE.search(normalized)
    if explanation_match:
        result.explanation = explanation_match.group(1).strip()

    return result


def is_answer_correct(parsed: ParsedQuestion) -> bool:
    """True when an answer was marked and it matches the correct one.

    A screenshot with neither answer recognized counts as incorrect, not as
    "both empty, therefore equal".
    """
    return bool(parsed.your_answer) and parsed.your_answer == parsed.correct_answer
