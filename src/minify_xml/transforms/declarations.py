"""Prolog and DOCTYPE declaration passes.

The standalone declaration has no meaning when neither an external DTD
subset nor a parameter entity can contribute markup declarations. External
subsets are never read, so any SYSTEM/PUBLIC identifier keeps the
declaration in place.
"""

from typing import Optional

from minify_xml.patterns import (
    COMMENT_PATTERN,
    DOCTYPE_PATTERN,
    PROLOG_CONTEXT,
    REMOVE,
    Compute,
    compile_pattern,
    replace_all,
    replace_in_context,
)
from minify_xml.transforms.whitespace import collapse_whitespace_in_tags

STANDALONE_PATTERN = r"""\s+standalone\s*=\s*(?:"yes"|'yes'|yes|"no"|'no'|no)"""

PARAMETER_ENTITY_PATTERN = r"<!ENTITY\s+%"


def has_unnecessary_standalone(document: str) -> bool:
    """Check whether the standalone declaration provably has no effect.

    True if the document has no DOCTYPE, or a DOCTYPE without an external
    identifier and without parameter entity declarations in its internal
    subset.
    """
    doc_type = compile_pattern(DOCTYPE_PATTERN).search(document)
    if doc_type is None:
        return True
    if doc_type.group(2):
        return False
    subset = doc_type.group(5)
    return not (subset and compile_pattern(PARAMETER_ENTITY_PATTERN).search(subset))


def remove_unnecessary_standalone_declaration(
    document: str, guard_cdata: bool = False
) -> str:
    """Remove ``standalone="yes|no"`` from the prolog when it has no effect."""
    if not has_unnecessary_standalone(document):
        return document
    return replace_in_context(
        document,
        STANDALONE_PATTERN,
        REMOVE,
        context=PROLOG_CONTEXT,
        guard_cdata=guard_cdata,
    )


def collapse_whitespace_in_prolog(document: str, guard_cdata: bool = False) -> str:
    """Collapse whitespace in ``<?xml ... ?>``.

    Whitespace before ``?>`` is kept as a single space.
    """
    return collapse_whitespace_in_tags(
        document,
        context=PROLOG_CONTEXT,
        trim_before_close=False,
        guard_cdata=guard_cdata,
    )


def minify_internal_subset(subset: str) -> str:
    """Simplified minification of a DOCTYPE internal subset.

    Assumes ``>`` does not occur inside the markup declarations themselves.
    """
    subset = compile_pattern(COMMENT_PATTERN).sub("", subset)
    subset = compile_pattern(r"\s+").sub(" ", subset)
    subset = compile_pattern(r">\s+<").sub("><", subset)
    return subset.strip()


def _rebuild_doc_type(
    name: str,
    external_type: Optional[str],
    first_literal: Optional[str],
    second_literal: Optional[str],
    subset: Optional[str],
) -> str:
    fields = "".join(
        " " + token for token in (external_type, first_literal, second_literal) if token
    )
    internal = minify_internal_subset(subset) if subset else ""
    if internal:
        internal = "[" + internal + "]"
    return "<!DOCTYPE " + name + fields + internal + ">"


def collapse_whitespace_in_doc_type(document: str, guard_cdata: bool = False) -> str:
    """Collapse whitespace in the first ``<!DOCTYPE ...>`` declaration."""
    return replace_all(
        document,
        DOCTYPE_PATTERN,
        Compute(lambda match: _rebuild_doc_type(*match.groups())),
        guard_cdata,
        count=1,
    )
