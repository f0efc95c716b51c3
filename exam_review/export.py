"""
Markdown export of analyzed questions, for pasting into an LLM chat or notes.
"""

from collections.abc import Sequence

from .schema import QuestionAnalysis
from .vocabulary import get_vocabulary


def _format_question(index: int, analysis: QuestionAnalysis) -> str:
    parsed = analysis.parsed
    verdict = "CORRECT" if analysis.is_correct else "INCORRECT"
    lines = [f"## Question {index} ({verdict})", "", f"**File**: {analysis.file}", ""]

    if parsed.question:
        lines += [f"**Question**: {parsed.question}", ""]

    if parsed.options:
        lines.append("**Options**:")
        lines += [f"- {opt}" for opt in parsed.options]
        lines.append("")

    lines.append(f"**Your Answer**: {parsed.your_answer or 'N/A'}")
    lines += [f"**Correct Answer**: {parsed.correct_answer or 'N/A'}", ""]

    if parsed.explanation:
        lines += [f"**Explanation**: {parsed.explanation}", ""]

    if analysis.tags.categories:
        lines.append(f"**Categories**: {', '.join(analysis.tags.categories)}")
    if analysis.tags.domains:
        lines.append(f"**Domains**: {', '.join(analysis.tags.domains)}")

    lines += ["", "---", ""]
    return "\n".join(lines)


def format_markdown(analyses: Sequence[QuestionAnalysis], title: str | None = None) -> str:
    """Render analyses as Markdown, one section per question."""
    title = title or f"{get_vocabulary().name} Exam Review"
    parts = [f"# {title}\n", f"Total Questions: {len(analyses)}\n", "---\n"]
    parts += [_format_question(i, a) for i, a in enumerate(analyses, 1)]
    return "\n".join(parts)
