"""
Base class for OCR engines.
OCR 엔진의 기본 인터페이스를 정의합니다.

An engine is an explicitly owned resource: open it before a batch, close it
afterwards. The context-manager protocol does both::

    with get_ocr_engine("tesseract") as engine:
        text = engine.recognize(image_bytes)
"""

import io
import logging
import time
from abc import ABC, abstractmethod

from PIL import Image, UnidentifiedImageError

from ..errors import OCRError

logger = logging.getLogger(__name__)


def _check_import(*module_names: str) -> bool:
    """Check if all given module names can be imported."""
    for name in module_names:
        try:
            __import__(name)
        except ImportError:
            return False
    return True


class OCREngine(ABC):
    """Base class for all OCR engines"""

    def __init__(self, name: str, languages: list[str] | None = None):
        self.name = name
        self.languages = languages or ["eng"]
        self._opened = False
        self.init_time = 0.0
        self.ocr_time = 0.0
        self.images_processed = 0

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "OCREngine":
        """Load models / handles. Calling open() on an open engine is a no-op."""
        if not self._opened:
            start = time.time()
            try:
                self._initialize()
            except Exception as e:
                raise OCRError(f"Failed to initialize OCR engine '{self.name}': {e}") from e
            self.init_time = time.time() - start
            self._opened = True
            logger.info("OCR engine '%s' ready (%.2fs)", self.name, self.init_time)
        return self

    def close(self) -> None:
        """Release the engine. Safe to call more than once."""
        if self._opened:
            self._shutdown()
            self._opened = False
            logger.info("OCR engine '%s' closed after %d images", self.name, self.images_processed)

    def __enter__(self) -> "OCREngine":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abstractmethod
    def _initialize(self):
        """Initialize the OCR engine."""
        pass

    def _shutdown(self):
        """Release engine resources. Override when the backend holds any."""
        pass

    @abstractmethod
    def _extract_from_image(self, image: Image.Image) -> str:
        """Extract text from a single PIL Image."""
        pass

    def recognize(self, image_bytes: bytes) -> str:
        """
        Recognize text in one encoded image (PNG/JPEG/WebP).

        Args:
            image_bytes: Raw file contents

        Returns:
            Recognized text, stripped; empty string if nothing was found

        Raises:
            OCRError: engine not open, image undecodable, or backend failure
        """
        if not self._opened:
            raise OCRError(f"OCR engine '{self.name}' is not open")

        start = time.time()
        try:
            img = Image.open(io.BytesIO(image_bytes)).convert("RGB")
            text = self._extract_from_image(img)
        except UnidentifiedImageError as e:
            raise OCRError(f"Cannot decode image: {e}") from e
        except OCRError:
            raise
        except Exception as e:
            raise OCRError(f"{self.name} failed: {e}") from e
        finally:
            self.ocr_time += time.time() - start
            self.images_processed += 1

        return (text or "").strip()

    def get_metrics(self) -> dict:
        """Return timing metrics."""
        return {
            "engine": self.name,
            "images_processed": self.images_processed,
            "init_time_seconds": round(self.init_time, 2),
            "ocr_time_seconds": round(self.ocr_time, 2),
            "total_time_seconds": round(self.init_time + self.ocr_time, 2),
        }

    @staticmethod
    def is_available() -> bool:
        """Check if this OCR engine's dependencies are installed."""
        return False
