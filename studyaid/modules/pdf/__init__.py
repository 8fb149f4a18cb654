from .extract import ExtractionFailed, NoTextFound, extract_text, require_text

__all__ = ["ExtractionFailed", "NoTextFound", "extract_text", "require_text"]
