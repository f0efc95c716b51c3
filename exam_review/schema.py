"""
Pydantic models for parsed questions, tags and study summaries.
문제 파싱 결과와 학습 요약을 위한 데이터 스키마 정의.

All models serialize with camelCase aliases (``yourAnswer``, ``categoryBreakdown``,
...). Saved result files and the HTTP API use these names, so they must not change.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """Plain dict using the camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class ParsedQuestion(CamelModel):
    """Structured content of one recognized screenshot"""

    question: str = ""
    options: list[str] = Field(default_factory=list, description='Each option as "<letter>: <text>"')
    your_answer: str = ""
    correct_answer: str = ""
    explanation: str = ""
    raw_text: str = Field("", description="Unmodified OCR output")


class Tags(CamelModel):
    """Vocabulary matches found in the raw text"""

    categories: list[str] = Field(default_factory=list)
    domains: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class QuestionAnalysis(CamelModel):
    """One processed image"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    file: str
    parsed: ParsedQuestion
    tags: Tags = Field(default_factory=Tags)
    is_correct: bool = False


class Breakdown(CamelModel):
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    accuracy: float = 0.0


class AreaStat(CamelModel):
    """Weak or strong area entry"""

    category: str
    accuracy: float
    questions_reviewed: int


class KeywordCount(CamelModel):
    keyword: str
    count: int


class StudySummary(CamelModel):
    """Aggregate statistics over a batch of analyses"""

    total_questions: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    accuracy: float = 0.0
    category_breakdown: dict[str, Breakdown] = Field(default_factory=dict)
    domain_breakdown: dict[str, Breakdown] = Field(default_factory=dict)
    weak_areas: list[AreaStat] = Field(default_factory=list)
    strong_areas: list[AreaStat] = Field(default_factory=list)
    top_keywords: list[KeywordCount] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class HeatmapItem(CamelModel):
    category: str
    accuracy: float
    total: int
    color: str
    status: str


class QuickStats(CamelModel):
    accuracy: str = Field(description='Overall accuracy formatted as "72.5%"')
    correct: int
    incorrect: int
    total_categories: int
    weak_area_count: int


class ReviewReport(CamelModel):
    """Everything produced for one uploaded batch; this is what gets saved."""

    success: bool = True
    processed_count: int
    timestamp: str
    engine: str
    questions: list[QuestionAnalysis]
    summary: StudySummary
    heatmap: list[HeatmapItem]
    quick_stats: QuickStats


class ResultFileInfo(CamelModel):
    name: str
    timestamp: str
    size: int
