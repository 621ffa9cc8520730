"""Character layer: decoding XML files before minification."""

from .encoding import (
    BOMDetector,
    DetectionMethod,
    EncodingDetector,
    EncodingResult,
    XMLDeclarationParser,
    decode_document,
    detect_encoding,
)

__all__ = [
    "BOMDetector",
    "DetectionMethod",
    "EncodingDetector",
    "EncodingResult",
    "XMLDeclarationParser",
    "decode_document",
    "detect_encoding",
]
