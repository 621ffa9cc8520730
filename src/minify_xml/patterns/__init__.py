"""Pattern layer: context fragments, scoped matchers and the CDATA guard."""

from .cdata import CDataGuard, find_cdata_spans, has_cdata
from .library import (
    BRACKET_CONTEXT,
    COMMENT_PATTERN,
    DOCTYPE_PATTERN,
    PRESERVE_CONTEXT,
    PROLOG_CONTEXT,
    QUOTED_VALUE,
    TAG_CONTEXT,
    TEXT_RUN,
    ContextFragment,
    compile_pattern,
    escape,
)
from .matching import (
    REMOVE,
    SINGLE_SPACE,
    Compute,
    Literal,
    Replacement,
    find_all,
    find_all_in_context,
    replace_all,
    replace_between,
    replace_between_brackets,
    replace_between_tags,
    replace_in_context,
)

__all__ = [
    "CDataGuard",
    "find_cdata_spans",
    "has_cdata",
    "BRACKET_CONTEXT",
    "COMMENT_PATTERN",
    "DOCTYPE_PATTERN",
    "PRESERVE_CONTEXT",
    "PROLOG_CONTEXT",
    "QUOTED_VALUE",
    "TAG_CONTEXT",
    "TEXT_RUN",
    "ContextFragment",
    "compile_pattern",
    "escape",
    "REMOVE",
    "SINGLE_SPACE",
    "Compute",
    "Literal",
    "Replacement",
    "find_all",
    "find_all_in_context",
    "replace_all",
    "replace_between",
    "replace_between_brackets",
    "replace_between_tags",
    "replace_in_context",
]
