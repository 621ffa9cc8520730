"""Minification API with progressive disclosure.

Level 1 is the module-level :func:`minify` (text in, text out) and
:func:`minify_file`; level 2 is the reusable, configured :class:`XMLMinifier`,
which also reports per-pass metrics.

Passes run in a fixed order. Whitespace between tags is removed before empty
elements are collapsed (that pass only matches directly adjacent start/end
tags), and the standalone declaration is examined before the DOCTYPE is
rewritten.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from minify_xml.character import decode_document
from minify_xml.patterns import compile_pattern, has_cdata
from minify_xml.shared import (
    CorrelationLogger,
    MinifyOptions,
    MinifyResult,
    PassMetrics,
    get_logger,
    is_strict,
    resolve_options,
)
from minify_xml.transforms import (
    collapse_empty_elements,
    collapse_whitespace_in_doc_type,
    collapse_whitespace_in_prolog,
    collapse_whitespace_in_tags,
    collapse_whitespace_in_texts,
    minify_namespaces,
    remove_comments,
    remove_schema_location_attributes,
    remove_unnecessary_standalone_declaration,
    remove_whitespace_between_tags,
    trim_whitespace_from_texts,
)

OptionsType = Union[MinifyOptions, Mapping[str, Any], None]

MS_PER_SECOND = 1000

EDGE_WHITESPACE_PATTERN = r"^[\s\uFEFF\xA0]+|[\s\uFEFF\xA0]+$"


@dataclass(frozen=True)
class MinifyPass:
    """A named, toggleable minification pass.

    Attributes:
        name: Pass name, used in logs and reports
        enabled: Predicate deciding from the options whether the pass runs
        apply: Function of (document, options, guard_cdata) returning the new document
    """

    name: str
    enabled: Callable[[MinifyOptions], bool]
    apply: Callable[[str, MinifyOptions, bool], str]


PASSES: Tuple[MinifyPass, ...] = (
    MinifyPass(
        "remove_comments",
        lambda options: options.remove_comments,
        lambda xml, options, guard: remove_comments(xml, guard),
    ),
    MinifyPass(
        "remove_whitespace_between_tags",
        lambda options: bool(options.remove_whitespace_between_tags),
        lambda xml, options, guard: remove_whitespace_between_tags(
            xml, is_strict(options.remove_whitespace_between_tags), guard
        ),
    ),
    MinifyPass(
        "remove_schema_location_attributes",
        lambda options: options.remove_schema_location_attributes,
        lambda xml, options, guard: remove_schema_location_attributes(xml, guard),
    ),
    MinifyPass(
        "collapse_whitespace_in_tags",
        lambda options: options.collapse_whitespace_in_tags,
        lambda xml, options, guard: collapse_whitespace_in_tags(xml, guard_cdata=guard),
    ),
    MinifyPass(
        "collapse_empty_elements",
        lambda options: options.collapse_empty_elements,
        lambda xml, options, guard: collapse_empty_elements(xml, guard),
    ),
    MinifyPass(
        "trim_whitespace_from_texts",
        lambda options: bool(options.trim_whitespace_from_texts),
        lambda xml, options, guard: trim_whitespace_from_texts(
            xml,
            is_strict(options.trim_whitespace_from_texts),
            options.consider_preserve_whitespace,
            guard,
        ),
    ),
    MinifyPass(
        "collapse_whitespace_in_texts",
        lambda options: bool(options.collapse_whitespace_in_texts),
        lambda xml, options, guard: collapse_whitespace_in_texts(
            xml,
            is_strict(options.collapse_whitespace_in_texts),
            options.consider_preserve_whitespace,
            guard,
        ),
    ),
    MinifyPass(
        "remove_unnecessary_standalone_declaration",
        lambda options: options.remove_unnecessary_standalone_declaration,
        lambda xml, options, guard: remove_unnecessary_standalone_declaration(xml, guard),
    ),
    MinifyPass(
        "collapse_whitespace_in_prolog",
        lambda options: options.collapse_whitespace_in_prolog,
        lambda xml, options, guard: collapse_whitespace_in_prolog(xml, guard),
    ),
    MinifyPass(
        "collapse_whitespace_in_doc_type",
        lambda options: options.collapse_whitespace_in_doc_type,
        lambda xml, options, guard: collapse_whitespace_in_doc_type(xml, guard),
    ),
    MinifyPass(
        "minify_namespaces",
        lambda options: options.namespaces_enabled,
        lambda xml, options, guard: minify_namespaces(
            xml,
            remove_unused=options.remove_unused_namespaces,
            remove_unused_default=options.remove_unused_default_namespace,
            shorten=options.shorten_namespaces,
            guard_cdata=guard,
        ),
    ),
)


def trim_document(xml: str) -> str:
    """Strip whitespace, byte order marks and no-break spaces at both ends."""
    return compile_pattern(EDGE_WHITESPACE_PATTERN).sub("", xml)


def _run_passes(
    xml: str, options: MinifyOptions, logger: CorrelationLogger
) -> Tuple[str, List[PassMetrics]]:
    """Apply every pass in order, collecting metrics."""
    # Fast path: no CDATA, no guard
    guard = options.ignore_cdata and has_cdata(xml)
    metrics: List[PassMetrics] = []

    for minify_pass in PASSES:
        if not minify_pass.enabled(options):
            metrics.append(PassMetrics(minify_pass.name, applied=False))
            continue

        start_time = time.perf_counter()
        before = len(xml)
        xml = minify_pass.apply(xml, options, guard)
        elapsed = (time.perf_counter() - start_time) * MS_PER_SECOND

        metrics.append(PassMetrics(
            minify_pass.name,
            applied=True,
            characters_before=before,
            characters_after=len(xml),
            processing_time_ms=elapsed,
        ))
        logger.debug(
            "Applied minification pass",
            extra={
                "pass": minify_pass.name,
                "characters_before": before,
                "characters_after": len(xml),
                "processing_time_ms": elapsed,
            }
        )

    return trim_document(xml), metrics


def _check_document(xml: Any) -> str:
    if not isinstance(xml, str):
        raise TypeError(f"XML document must be str, got {type(xml).__name__}")
    return xml


def minify(
    xml: str,
    options: OptionsType = None,
    correlation_id: Optional[str] = None
) -> str:
    """Minify an XML document.

    Args:
        xml: The XML document to minify
        options: MinifyOptions, a mapping of overrides (snake_case or
            camelCase names) merged onto the defaults, or None for defaults
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The minified XML document

    Raises:
        ConfigValidationError: If an option is unknown or has a wrong type
        TypeError: If ``xml`` is not a string

    Examples:
        >>> minify("<a>  </a>")
        '<a/>'
        >>> minify("<a xmlns:alpha='urn:x'><alpha:b/></a>")
        "<a xmlns:a='urn:x'><a:b/></a>"
    """
    xml = _check_document(xml)
    effective = resolve_options(options)
    logger = get_logger(__name__, correlation_id, "minify")

    logger.info(
        "Starting minify operation",
        extra={"content_length": len(xml)}
    )
    minified, _ = _run_passes(xml, effective, logger)
    return minified


def minify_file(
    file_path: Union[str, Path],
    options: OptionsType = None,
    encoding: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> MinifyResult:
    """Minify an XML file.

    Args:
        file_path: Path to the XML file
        options: Options as accepted by :func:`minify`
        encoding: Encoding override (detected from BOM/declaration if omitted)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        MinifyResult with the minified text, detected encoding and metrics

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid in its encoding
    """
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "minify_file")
    logger.info("Starting file minify operation", extra={"file_path": str(path_obj)})

    text, detected = decode_document(path_obj.read_bytes(), encoding)
    minifier = XMLMinifier(options, correlation_id=correlation_id)
    result = minifier.minify_with_report(text)
    result.source = str(path_obj)
    result.encoding = detected
    return result


class XMLMinifier:
    """Configured, reusable XML minifier.

    Attributes:
        options: Effective minification options
        correlation_id: Correlation ID for request tracking

    Examples:
        >>> minifier = XMLMinifier({"collapseWhitespaceInTexts": True})
        >>> minifier.minify("<a>x   y</a>")
        '<a>x y</a>'
        >>> minifier.statistics["minify_count"]
        1
    """

    def __init__(
        self,
        options: OptionsType = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.options = resolve_options(options)
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_minifier")

        self._minify_count = 0
        self._total_processing_time = 0.0
        self._characters_saved = 0

    def minify(self, xml: str, options_override: OptionsType = None) -> str:
        """Minify a document and return the text."""
        return self.minify_with_report(xml, options_override).text

    def minify_with_report(
        self, xml: str, options_override: OptionsType = None
    ) -> MinifyResult:
        """Minify a document and return the text with per-pass metrics.

        Args:
            xml: The XML document to minify
            options_override: Options replacing the configured ones for this call

        Returns:
            MinifyResult for the document
        """
        xml = _check_document(xml)
        options = (
            resolve_options(options_override)
            if options_override is not None else self.options
        )

        start_time = time.perf_counter()
        minified, metrics = _run_passes(xml, options, self.logger)
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND

        result = MinifyResult(
            text=minified,
            original_length=len(xml),
            passes=metrics,
            processing_time_ms=processing_time,
            correlation_id=self.correlation_id,
        )

        self._minify_count += 1
        self._total_processing_time += processing_time
        self._characters_saved += result.characters_saved

        self.logger.info(
            "Minify operation completed",
            extra={
                "original_length": result.original_length,
                "minified_length": result.minified_length,
                "processing_time_ms": processing_time,
            }
        )
        return result

    def reconfigure(
        self, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> None:
        """Replace individual options for subsequent calls.

        Raises:
            ConfigValidationError: If an option is unknown or has a wrong type
        """
        self.options = self.options.merged(overrides, **kwargs)
        self.logger.info(
            "Minifier reconfigured",
            extra={"options": self.options.to_dict()}
        )

    @property
    def statistics(self) -> Dict[str, Any]:
        """Aggregate statistics over every call made with this instance."""
        average = (
            self._total_processing_time / self._minify_count
            if self._minify_count else 0.0
        )
        return {
            "minify_count": self._minify_count,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": average,
            "characters_saved": self._characters_saved,
        }

    def reset_statistics(self) -> None:
        """Reset aggregate statistics."""
        self._minify_count = 0
        self._total_processing_time = 0.0
        self._characters_saved = 0
