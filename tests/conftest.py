import io
import zipfile

import pytest
from PIL import Image

from exam_review.config import get_settings
from exam_review.ocr.base import OCREngine
from exam_review.schema import ParsedQuestion, QuestionAnalysis, Tags
from exam_review.vocabulary import get_vocabulary

SAMPLE_TEXT = (
    "Question: What is S3? A) Object storage B) Block storage "
    "Your Answer: A Correct Answer: A Explanation: S3 is object storage."
)


class FakeOCREngine(OCREngine):
    """Returns canned texts in call order; Exception items are raised instead."""

    def __init__(self, texts=(), languages=None):
        super().__init__(name="fake", languages=languages)
        self.texts = list(texts)
        self.open_count = 0
        self.close_count = 0

    def _initialize(self):
        self.open_count += 1

    def _shutdown(self):
        self.close_count += 1

    def _extract_from_image(self, image):
        item = self.texts.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @staticmethod
    def is_available() -> bool:
        return True


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Fresh settings per test, with results written under tmp_path."""
    for var in ("OCR_ENGINE", "OCR_LANGUAGES", "API_KEYS", "VOCABULARY_PATH", "CORS_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("RESULTS_DIR", str(tmp_path / "results"))
    get_settings.cache_clear()
    get_vocabulary.cache_clear()
    yield
    get_settings.cache_clear()
    get_vocabulary.cache_clear()


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def fake_engine_cls():
    return FakeOCREngine


@pytest.fixture
def make_zip(png_bytes):
    """Build an in-memory ZIP: {member_name: bytes or None for a PNG}."""

    def _make(members: dict) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for name, data in members.items():
                zf.writestr(name, png_bytes if data is None else data)
        return buf.getvalue()

    return _make


@pytest.fixture
def make_analysis():
    def _make(
        file="q.png",
        is_correct=False,
        categories=(),
        domains=(),
        keywords=(),
        your_answer="",
        correct_answer="",
    ) -> QuestionAnalysis:
        return QuestionAnalysis(
            file=file,
            parsed=ParsedQuestion(your_answer=your_answer, correct_answer=correct_answer),
            tags=Tags(categories=list(categories), domains=list(domains), keywords=list(keywords)),
            is_correct=is_correct,
        )

    return _make


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT
