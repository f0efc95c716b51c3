"""
EasyOCR engine.
EasyOCR을 사용한 다국어 OCR 텍스트 추출.
"""

import numpy as np
from PIL import Image

from .base import OCREngine, _check_import

# Tesseract language codes -> EasyOCR codes
_LANGUAGE_CODES = {"eng": "en", "kor": "ko", "jpn": "ja", "chi_sim": "ch_sim"}


class EasyOCREngine(OCREngine):

    def __init__(self, languages: list[str] | None = None):
        codes = [_LANGUAGE_CODES.get(lang, lang) for lang in (languages or ["en"])]
        super().__init__(name="easyocr", languages=codes)
        self._reader = None

    def _initialize(self):
        import easyocr
        try:
            import torch
            gpu = torch.cuda.is_available()
        except ImportError:
            gpu = False
        self._reader = easyocr.Reader(self.languages, gpu=gpu)

    def _shutdown(self):
        self._reader = None

    def _extract_from_image(self, image: Image.Image) -> str:
        img_array = np.array(image)
        # paragraph=False keeps option lines ("A) ...") separate
        results = self._reader.readtext(img_array, detail=1, paragraph=False)
        lines = []
        for item in results:
            if len(item) >= 2:
                lines.append(item[1])
        return "\n".join(lines)

    @staticmethod
    def is_available() -> bool:
        return _check_import("easyocr")
