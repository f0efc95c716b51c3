"""
OCR engines for text recognition on question screenshots.
"""

import importlib

from .base import OCREngine

# Registry: engine_name -> (module_suffix, class_name)
# Modules are loaded on demand via importlib (lazy imports).
_ENGINE_REGISTRY: dict[str, tuple[str, str]] = {
    "tesseract": ("tesseract_ocr", "TesseractOCR"),
    "easyocr": ("easyocr_ocr", "EasyOCREngine"),
    "paddleocr": ("paddleocr_ocr", "PaddleOCREngine"),
}


def _load_engine_class(name: str) -> type:
    """Dynamically load an OCR engine class by registry name."""
    module_suffix, class_name = _ENGINE_REGISTRY[name]
    module = importlib.import_module(f".{module_suffix}", package=__package__)
    return getattr(module, class_name)


def get_ocr_engine(name: str, languages: list[str] | None = None) -> OCREngine:
    """Create an OCR engine by name. The engine is returned closed; the caller opens and closes it."""
    if name not in _ENGINE_REGISTRY:
        raise ValueError(f"Unknown OCR engine: {name}. Available: {list(_ENGINE_REGISTRY.keys())}")
    return _load_engine_class(name)(languages=languages)


def is_engine_available(name: str) -> bool:
    if name not in _ENGINE_REGISTRY:
        return False
    return _load_engine_class(name).is_available()


def list_available_engines() -> dict:
    """List all OCR engines with availability status."""
    return {
        name: {
            "class": class_name,
            "available": _load_engine_class(name).is_available(),
        }
        for name, (_, class_name) in _ENGINE_REGISTRY.items()
    }


__all__ = [
    "OCREngine",
    "get_ocr_engine",
    "is_engine_available",
    "list_available_engines",
]
