"""
Batch aggregation: accuracy breakdowns, weak/strong areas, recommendations, heatmap.
분석 결과를 집계하여 학습 요약과 히트맵 데이터를 생성합니다.

Every function here is pure: the same analyses always produce the same summary.
"""

from collections import Counter
from collections.abc import Iterable, Sequence

from .schema import AreaStat, Breakdown, HeatmapItem, KeywordCount, QuestionAnalysis, StudySummary
from .vocabulary import Vocabulary, get_vocabulary

# Categories need at least this many questions before they count as weak/strong
MIN_AREA_OBSERVATIONS = 2
WEAK_AREA_THRESHOLD = 70.0
STRONG_AREA_THRESHOLD = 85.0
WEAK_DOMAIN_THRESHOLD = 65.0
TOP_KEYWORDS_LIMIT = 15
PATTERN_MISTAKE_THRESHOLD = 3
MIN_RELIABLE_SAMPLE = 20

# (lower bound, status, color), checked top-down
_HEAT_BUCKETS = (
    (85.0, "strong", "green"),
    (70.0, "good", "yellow"),
    (50.0, "review", "orange"),
)

HEAT_COLOR_HEX = {
    "green": "#22c55e",
    "yellow": "#eab308",
    "orange": "#f97316",
    "red": "#ef4444",
}


def _percent(correct: int, total: int) -> float:
    return correct / total * 100 if total else 0.0


def _build_breakdown(pairs: Iterable[tuple[str, bool]]) -> dict[str, Breakdown]:
    """Fold (key, is_correct) pairs into per-key counters; insertion order = first seen."""
    breakdown: dict[str, Breakdown] = {}
    for key, is_correct in pairs:
        entry = breakdown.setdefault(key, Breakdown())
        entry.total += 1
        if is_correct:
            entry.correct += 1
        else:
            entry.incorrect += 1
    for entry in breakdown.values():
        entry.accuracy = _percent(entry.correct, entry.total)
    return breakdown


def _classify_areas(breakdown: dict[str, Breakdown]) -> tuple[list[AreaStat], list[AreaStat]]:
    weak: list[AreaStat] = []
    strong: list[AreaStat] = []
    for category, data in breakdown.items():
        if data.total < MIN_AREA_OBSERVATIONS:
            continue
        area = AreaStat(category=category, accuracy=data.accuracy, questions_reviewed=data.total)
        if data.accuracy < WEAK_AREA_THRESHOLD:
            weak.append(area)
        elif data.accuracy >= STRONG_AREA_THRESHOLD:
            strong.append(area)
    weak.sort(key=lambda a: a.accuracy)
    strong.sort(key=lambda a: a.accuracy, reverse=True)
    return weak, strong


def _top_keywords(analyses: Sequence[QuestionAnalysis]) -> list[KeywordCount]:
    counts = Counter(kw for a in analyses for kw in a.tags.keywords)
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [KeywordCount(keyword=k, count=c) for k, c in ranked[:TOP_KEYWORDS_LIMIT]]


def generate_summary(
    analyses: Sequence[QuestionAnalysis],
    vocabulary: Vocabulary | None = None,
) -> StudySummary:
    """
    Aggregate a batch of analyses into a study summary.

    Args:
        analyses: Processed questions, in file order
        vocabulary: Vocabulary supplying the pattern-detection sets (default: configured one)

    Returns:
        StudySummary; an empty batch gives a zeroed summary
    """
    total = len(analyses)
    correct = sum(1 for a in analyses if a.is_correct)

    category_breakdown = _build_breakdown(
        (category, a.is_correct) for a in analyses for category in a.tags.categories
    )
    domain_breakdown = _build_breakdown(
        (domain, a.is_correct) for a in analyses for domain in a.tags.domains
    )
    weak_areas, strong_areas = _classify_areas(category_breakdown)

    summary = StudySummary(
        total_questions=total,
        correct_count=correct,
        incorrect_count=total - correct,
        accuracy=_percent(correct, total),
        category_breakdown=category_breakdown,
        domain_breakdown=domain_breakdown,
        weak_areas=weak_areas,
        strong_areas=strong_areas,
        top_keywords=_top_keywords(analyses),
    )
    summary.recommendations = generate_recommendations(summary, analyses, vocabulary)
    return summary


def generate_recommendations(
    summary: StudySummary,
    analyses: Sequence[QuestionAnalysis],
    vocabulary: Vocabulary | None = None,
) -> list[str]:
    """Heuristic study advice. Each rule fires independently, in a fixed order."""
    vocabulary = vocabulary or get_vocabulary()
    recommendations: list[str] = []

    # Overall banding; 75-85% intentionally gets no message
    if summary.accuracy < 60:
        recommendations.append(
            f"Overall score below 60% - review {vocabulary.name} fundamentals and service overviews"
        )
    elif summary.accuracy < 75:
        recommendations.append("You're on track! Focus on weak areas to boost your score above 75%")
    elif summary.accuracy >= 85:
        recommendations.append("Excellent performance! You're exam-ready. Focus on scenario-based practice")

    if summary.weak_areas:
        top_weak = ", ".join(w.category for w in summary.weak_areas[:3])
        recommendations.append(f"Priority review needed: {top_weak}")

    for domain, data in summary.domain_breakdown.items():
        if data.accuracy < WEAK_DOMAIN_THRESHOLD:
            recommendations.append(f"{domain}: {data.accuracy:.1f}% - deep dive recommended")

    incorrect = [a for a in analyses if not a.is_correct]

    security = set(vocabulary.security_categories)
    security_mistakes = sum(1 for a in incorrect if security.intersection(a.tags.categories))
    if security_mistakes >= PATTERN_MISTAKE_THRESHOLD:
        recommendations.append(
            "Security pattern detected - review IAM policies, KMS encryption, and Cognito authentication"
        )

    markers = [m.lower() for m in vocabulary.serverless_markers]
    serverless_mistakes = sum(
        1 for a in incorrect
        if any(marker in kw.lower() for kw in a.tags.keywords for marker in markers)
    )
    if serverless_mistakes >= PATTERN_MISTAKE_THRESHOLD:
        recommendations.append(
            "Serverless concepts need attention - review Lambda triggers, async patterns, and cold starts"
        )

    if summary.total_questions < MIN_RELIABLE_SAMPLE:
        recommendations.append(
            f"Process more questions ({MIN_RELIABLE_SAMPLE}+) for accurate weak-area detection"
        )

    return recommendations


def heat_status(accuracy: float) -> str:
    for lower, status, _ in _HEAT_BUCKETS:
        if accuracy >= lower:
            return status
    return "weak"


def heat_color(accuracy: float) -> str:
    for lower, _, color in _HEAT_BUCKETS:
        if accuracy >= lower:
            return color
    return "red"


def generate_heatmap(summary: StudySummary) -> list[HeatmapItem]:
    """One item per observed category, weakest first."""
    items = [
        HeatmapItem(
            category=category,
            accuracy=data.accuracy,
            total=data.total,
            color=heat_color(data.accuracy),
            status=heat_status(data.accuracy),
        )
        for category, data in summary.category_breakdown.items()
    ]
    items.sort(key=lambda item: item.accuracy)
    return items
