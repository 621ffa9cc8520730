"""Comment, whitespace and empty-element passes.

Every pass is a pure function taking the document (and the flags it needs)
and returning the rewritten document.
"""

from minify_xml.patterns import (
    COMMENT_PATTERN,
    PRESERVE_CONTEXT,
    QUOTED_VALUE,
    REMOVE,
    SINGLE_SPACE,
    TAG_CONTEXT,
    TEXT_RUN,
    ContextFragment,
    Literal,
    replace_all,
    replace_between,
    replace_in_context,
)

SCHEMA_LOCATION_PATTERN = (
    r"\s+xsi:(?:noNamespaceS|s)chemaLocation\s*=\s*" + QUOTED_VALUE
)

# Start tag directly followed by its end tag
EMPTY_ELEMENT_PATTERN = r"<([^\s/>]+)((?:\s[^<]*?)?)(?<!/)></\1\s*>"


def remove_comments(document: str, guard_cdata: bool = False) -> str:
    """Strip ``<!-- ... -->`` comments."""
    return replace_all(document, COMMENT_PATTERN, REMOVE, guard_cdata)


def remove_whitespace_between_tags(
    document: str, strict: bool = False, guard_cdata: bool = False
) -> str:
    """Strip whitespace-only text between tags."""
    return replace_between(
        document, r"\s+", REMOVE, strict=strict, guard_cdata=guard_cdata
    )


def remove_schema_location_attributes(document: str, guard_cdata: bool = False) -> str:
    """Strip ``xsi:schemaLocation`` and ``xsi:noNamespaceSchemaLocation``."""
    return replace_in_context(
        document, SCHEMA_LOCATION_PATTERN, SINGLE_SPACE, guard_cdata=guard_cdata
    )


def collapse_whitespace_in_tags(
    document: str,
    context: ContextFragment = TAG_CONTEXT,
    trim_before_close: bool = True,
    guard_cdata: bool = False,
) -> str:
    """Collapse whitespace between attributes of tags in ``context``.

    Whitespace runs become a single space, whitespace around ``=`` is removed
    and whitespace before the closing ``>``, ``/>`` or ``?>`` is removed, or
    collapsed to one space when ``trim_before_close`` is False.
    """
    document = replace_in_context(
        document, r"\s+", SINGLE_SPACE, context=context, guard_cdata=guard_cdata
    )
    document = replace_in_context(
        document,
        r"\s*=\s*",
        Literal("="),
        context=context,
        lookbehind=r"\s+[^=\s>]+",
        guard_cdata=guard_cdata,
    )
    if trim_before_close:
        document = replace_in_context(
            document, r"\s+(?=[/?]?>)", REMOVE, context=context, guard_cdata=guard_cdata
        )
    return document


def collapse_empty_elements(document: str, guard_cdata: bool = False) -> str:
    """Rewrite ``<a attr="..."></a>`` as ``<a attr="..."/>``."""
    return replace_all(
        document, EMPTY_ELEMENT_PATTERN, Literal(r"<\1\2/>"), guard_cdata
    )


def _preserve_lookbehind(consider_preserve_whitespace: bool) -> str:
    return PRESERVE_CONTEXT.pattern if consider_preserve_whitespace else ""


def trim_whitespace_from_texts(
    document: str,
    strict: bool = False,
    consider_preserve_whitespace: bool = True,
    guard_cdata: bool = False,
) -> str:
    """Trim leading and trailing whitespace of text nodes.

    Leading and trailing runs are removed by two separate passes so that no
    pass ever has to match an empty string.
    """
    preserve = _preserve_lookbehind(consider_preserve_whitespace)
    document = replace_between(
        document,
        r"\s+",
        REMOVE,
        strict=strict,
        lookbehind=preserve,
        lookahead=TEXT_RUN,
        guard_cdata=guard_cdata,
    )
    return replace_between(
        document,
        r"\s+",
        REMOVE,
        strict=strict,
        lookbehind=preserve + TEXT_RUN,
        guard_cdata=guard_cdata,
    )


def collapse_whitespace_in_texts(
    document: str,
    strict: bool = False,
    consider_preserve_whitespace: bool = True,
    guard_cdata: bool = False,
) -> str:
    """Collapse whitespace runs inside text nodes to a single space."""
    return replace_between(
        document,
        r"\s+",
        SINGLE_SPACE,
        strict=strict,
        lookbehind=_preserve_lookbehind(consider_preserve_whitespace) + TEXT_RUN,
        lookahead=TEXT_RUN,
        guard_cdata=guard_cdata,
    )
