"""
Tesseract OCR engine.
Google Tesseract를 사용한 OCR 텍스트 추출.
"""

from PIL import Image

from .base import OCREngine, _check_import


class TesseractOCR(OCREngine):

    def __init__(self, languages: list[str] | None = None):
        super().__init__(name="tesseract", languages=languages or ["eng"])
        self._pytesseract = None

    def _initialize(self):
        import pytesseract
        # Fails fast when the tesseract binary itself is missing
        pytesseract.get_tesseract_version()
        self._pytesseract = pytesseract

    def _shutdown(self):
        self._pytesseract = None

    def _extract_from_image(self, image: Image.Image) -> str:
        lang_str = "+".join(self.languages)
        # psm 6: screenshots are a single uniform block of text
        config = "--oem 3 --psm 6"
        return self._pytesseract.image_to_string(image, lang=lang_str, config=config)

    @staticmethod
    def is_available() -> bool:
        return _check_import("pytesseract")
