"""Encoding detection for XML documents read from bytes.

Detection runs in sequence: byte order mark, then the ``encoding`` attribute
of the XML declaration, then UTF-8 as the XML default.
"""

import codecs
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple

DEFAULT_ENCODING = "utf-8"

# The XML declaration must appear within the first bytes of the document
DECLARATION_SCAN_BYTES = 1024


class DetectionMethod(Enum):
    """Enumeration of encoding detection methods."""
    BOM = "bom"
    XML_DECLARATION = "xml_declaration"
    DEFAULT = "default"


@dataclass
class EncodingResult:
    """Result of encoding detection.

    Attributes:
        encoding: Detected encoding name (Python codec name)
        method: Detection method used
        issues: Problems found during detection
    """
    encoding: str
    method: DetectionMethod
    issues: Optional[List[str]] = None


class BOMDetector:
    """Byte Order Mark (BOM) detection."""

    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        codecs.BOM_UTF32_LE: "utf-32",
        codecs.BOM_UTF32_BE: "utf-32",
        codecs.BOM_UTF8: "utf-8-sig",
        codecs.BOM_UTF16_LE: "utf-16",
        codecs.BOM_UTF16_BE: "utf-16",
    }

    def detect(self, data: bytes) -> Optional[EncodingResult]:
        """Detect encoding based on BOM.

        The returned codecs consume the mark when decoding and write it back
        when encoding. UTF-32 marks are checked first since the UTF-32-LE mark
        starts with the UTF-16-LE one.
        """
        for bom_bytes, encoding in self.BOM_PATTERNS.items():
            if data.startswith(bom_bytes):
                return EncodingResult(
                    encoding=encoding,
                    method=DetectionMethod.BOM,
                )
        return None


class XMLDeclarationParser:
    """Parser for the encoding attribute of the XML declaration."""

    XML_DECLARATION_PATTERN = re.compile(
        rb'<\?xml\s[^>]*?encoding\s*=\s*["\']([A-Za-z][A-Za-z0-9._-]*)["\']'
    )

    def parse_declaration(self, data: bytes) -> Optional[EncodingResult]:
        """Parse the declared encoding, if present and known to Python."""
        match = self.XML_DECLARATION_PATTERN.search(data[:DECLARATION_SCAN_BYTES])
        if not match:
            return None

        declared = match.group(1).decode("ascii").lower()
        try:
            encoding = codecs.lookup(declared).name
        except LookupError:
            return EncodingResult(
                encoding=DEFAULT_ENCODING,
                method=DetectionMethod.DEFAULT,
                issues=[f"Unknown declared encoding: {declared}"],
            )
        return EncodingResult(encoding=encoding, method=DetectionMethod.XML_DECLARATION)


class EncodingDetector:
    """Encoding detection combining BOM and declaration sniffing."""

    def __init__(self) -> None:
        self.bom_detector = BOMDetector()
        self.declaration_parser = XMLDeclarationParser()

    def detect(self, data: bytes) -> EncodingResult:
        """Detect the encoding of raw XML data."""
        return (
            self.bom_detector.detect(data)
            or self.declaration_parser.parse_declaration(data)
            or EncodingResult(encoding=DEFAULT_ENCODING, method=DetectionMethod.DEFAULT)
        )


def detect_encoding(data: bytes) -> EncodingResult:
    """Detect the encoding of raw XML data."""
    return EncodingDetector().detect(data)


def decode_document(data: bytes, encoding: Optional[str] = None) -> Tuple[str, str]:
    """Decode raw XML data.

    Args:
        data: Raw document bytes
        encoding: Encoding override; detected when omitted

    Returns:
        Tuple of decoded text (without byte order mark) and the encoding used

    Raises:
        UnicodeDecodeError: If the data is not valid in the encoding
    """
    if encoding is not None:
        text = data.decode(encoding)
        return text.lstrip("\ufeff"), encoding

    result = detect_encoding(data)
    return data.decode(result.encoding), result.encoding
