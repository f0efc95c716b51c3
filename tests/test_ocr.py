import pytest

from exam_review.errors import OCRError
from exam_review.ocr import get_ocr_engine, is_engine_available, list_available_engines


def test_recognize_requires_open_engine(fake_engine_cls, png_bytes):
    engine = fake_engine_cls(["text"])
    with pytest.raises(OCRError, match="not open"):
        engine.recognize(png_bytes)


def test_context_manager_opens_and_closes(fake_engine_cls, png_bytes):
    engine = fake_engine_cls(["  Question: hi \n"])
    with engine as opened:
        assert opened is engine
        assert engine.is_open
        assert engine.recognize(png_bytes) == "Question: hi"
    assert not engine.is_open
    assert (engine.open_count, engine.close_count) == (1, 1)
    assert engine.get_metrics()["images_processed"] == 1


def test_open_and_close_are_idempotent(fake_engine_cls):
    engine = fake_engine_cls()
    engine.close()
    engine.open()
    engine.open()
    engine.close()
    engine.close()
    assert (engine.open_count, engine.close_count) == (1, 1)


def test_empty_result_is_empty_string(fake_engine_cls, png_bytes):
    with fake_engine_cls([None]) as engine:
        assert engine.recognize(png_bytes) == ""


def test_undecodable_image(fake_engine_cls):
    with fake_engine_cls(["unused"]) as engine:
        with pytest.raises(OCRError, match="Cannot decode image"):
            engine.recognize(b"definitely not a png")


def test_backend_failure_is_wrapped(fake_engine_cls, png_bytes):
    with fake_engine_cls([RuntimeError("segfault-ish")]) as engine:
        with pytest.raises(OCRError, match="fake failed: segfault-ish"):
            engine.recognize(png_bytes)


def test_unknown_engine():
    with pytest.raises(ValueError, match="Unknown OCR engine"):
        get_ocr_engine("nope")
    assert is_engine_available("nope") is False


def test_get_tesseract_engine_is_returned_closed():
    engine = get_ocr_engine("tesseract", languages=["eng", "kor"])
    assert type(engine).__name__ == "TesseractOCR"
    assert engine.name == "tesseract"
    assert engine.languages == ["eng", "kor"]
    assert not engine.is_open


def test_easyocr_language_codes():
    engine = get_ocr_engine("easyocr", languages=["eng", "kor"])
    assert engine.languages == ["en", "ko"]


def test_list_available_engines():
    engines = list_available_engines()
    assert set(engines) == {"tesseract", "easyocr", "paddleocr"}
    assert all(isinstance(info["available"], bool) for info in engines.values())
