"""
Batch review pipeline orchestrator.
OCR → Parsing → Tagging → Aggregation 순서로 스크린샷 묶음을 처리합니다.

Images are processed one at a time, in file order, with a single OCR engine
opened for the whole batch and closed when the batch ends. A failure on one
image becomes a degraded analysis record; it never aborts the batch.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from .analyzer import generate_heatmap, generate_summary
from .archive import extract_archive, find_image_files
from .config import get_settings
from .errors import NoImagesError
from .ocr import OCREngine, get_ocr_engine
from .parser import is_answer_correct, parse_question
from .schema import ParsedQuestion, QuestionAnalysis, QuickStats, ReviewReport, Tags
from .tagger import tag_question
from .vocabulary import Vocabulary, get_vocabulary

logger = logging.getLogger(__name__)


def analyze_text(file: str, text: str, vocabulary: Vocabulary | None = None) -> QuestionAnalysis:
    """Parse and tag the recognized text of one image."""
    parsed = parse_question(text)
    return QuestionAnalysis(
        file=file,
        parsed=parsed,
        tags=tag_question(text, vocabulary),
        is_correct=is_answer_correct(parsed),
    )


def failed_analysis(file: str, error: Exception | str) -> QuestionAnalysis:
    """Placeholder record for an image that could not be processed."""
    return QuestionAnalysis(
        file=file,
        parsed=ParsedQuestion(raw_text=f"Error: {error}"),
        tags=Tags(),
        is_correct=False,
    )


def build_report(
    analyses: list[QuestionAnalysis],
    engine_name: str,
    vocabulary: Vocabulary | None = None,
) -> ReviewReport:
    """Summarize analyses into the report that gets saved and served."""
    summary = generate_summary(analyses, vocabulary)
    return ReviewReport(
        processed_count=len(analyses),
        timestamp=datetime.now(timezone.utc).isoformat(),
        engine=engine_name,
        questions=analyses,
        summary=summary,
        heatmap=generate_heatmap(summary),
        quick_stats=QuickStats(
            accuracy=f"{summary.accuracy:.1f}%",
            correct=summary.correct_count,
            incorrect=summary.incorrect_count,
            total_categories=len(summary.category_breakdown),
            weak_area_count=len(summary.weak_areas),
        ),
    )


class ReviewPipeline:
    """Runs OCR, parsing, tagging and aggregation over a batch of screenshots."""

    def __init__(
        self,
        engine_name: str | None = None,
        languages: list[str] | None = None,
        vocabulary: Vocabulary | None = None,
    ):
        settings = get_settings()
        self.engine_name = engine_name or settings.OCR_ENGINE
        self.languages = languages or settings.ocr_languages
        self.vocabulary = vocabulary or get_vocabulary()

    def create_engine(self) -> OCREngine:
        return get_ocr_engine(self.engine_name, languages=self.languages)

    def analyze_images(self, image_paths: Sequence[Path], engine: OCREngine) -> list[QuestionAnalysis]:
        """OCR, parse and tag each image in order. One attempt per image."""
        analyses: list[QuestionAnalysis] = []
        total = len(image_paths)

        for i, path in enumerate(image_paths, 1):
            path = Path(path)
            logger.info("OCR processing [%d/%d]: %s", i, total, path.name)
            try:
                text = engine.recognize(path.read_bytes())
                if not text:
                    logger.warning("No text extracted from %s", path.name)
                analysis = analyze_text(path.name, text, self.vocabulary)
                logger.info("Processed %s: %s", path.name, "correct" if analysis.is_correct else "incorrect")
            except Exception as e:
                logger.warning("Failed to process %s: %s", path.name, e)
                analysis = failed_analysis(path.name, e)
            analyses.append(analysis)

        return analyses

    def run(self, image_paths: Sequence[Path]) -> ReviewReport:
        """
        Process a batch of image files.

        Raises:
            NoImagesError: image_paths is empty (checked before any engine is created)
        """
        if not image_paths:
            raise NoImagesError("No image files found")

        with self.create_engine() as engine:
            analyses = self.analyze_images(image_paths, engine)
            logger.info("OCR metrics: %s", engine.get_metrics())

        report = build_report(analyses, self.engine_name, self.vocabulary)
        logger.info(
            "Batch complete: %d questions, %.1f%% accuracy",
            report.processed_count,
            report.summary.accuracy,
        )
        return report

    def run_archive(self, zip_path: str | Path, work_dir: str | Path) -> ReviewReport:
        """Extract a ZIP of screenshots into work_dir and process every image in it."""
        extracted = extract_archive(zip_path, work_dir)
        image_paths = find_image_files(extracted)
        logger.info("Found %d images in %s", len(image_paths), Path(zip_path).name)
        if not image_paths:
            raise NoImagesError("No image files found in ZIP")
        return self.run(image_paths)

    def run_directory(self, directory: str | Path) -> ReviewReport:
        """Process every image under an already-extracted directory."""
        image_paths = find_image_files(directory)
        if not image_paths:
            raise NoImagesError(f"No image files found in {directory}")
        return self.run(image_paths)
