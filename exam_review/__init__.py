"""
Exam Screenshot Review - OCR exam-question screenshots and find weak areas.
"""

__version__ = "0.1.0"

from .analyzer import generate_heatmap, generate_recommendations, generate_summary
from .config import get_settings
from .parser import is_answer_correct, parse_question
from .pipeline import ReviewPipeline, analyze_text
from .schema import (
    HeatmapItem,
    ParsedQuestion,
    QuestionAnalysis,
    ReviewReport,
    StudySummary,
    Tags,
)
from .tagger import tag_question
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary, get_vocabulary

__all__ = [
    "ReviewPipeline",
    "analyze_text",
    "parse_question",
    "is_answer_correct",
    "tag_question",
    "generate_summary",
    "generate_recommendations",
    "generate_heatmap",
    "ParsedQuestion",
    "Tags",
    "QuestionAnalysis",
    "StudySummary",
    "HeatmapItem",
    "ReviewReport",
    "Vocabulary",
    "DEFAULT_VOCABULARY",
    "get_vocabulary",
    "get_settings",
]
