"""
Exception types raised by the review pipeline.
리뷰 파이프라인에서 사용하는 예외 정의.
"""


class ExamReviewError(Exception):
    """Base class for all exam_review errors."""


class OCRError(ExamReviewError):
    """Text recognition failed for a single image."""


class ArchiveError(ExamReviewError):
    """The uploaded archive could not be read or extracted."""


class NoImagesError(ExamReviewError):
    """A batch contained no image files to process."""


class ResultsNotFoundError(ExamReviewError):
    """No saved result files exist yet."""


class VocabularyError(ExamReviewError):
    """A vocabulary file is missing or malformed."""
