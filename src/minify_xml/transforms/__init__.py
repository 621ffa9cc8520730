"""Minification passes.

Each pass takes a document and returns a new one; passes never share state.
"""

from .declarations import (
    collapse_whitespace_in_doc_type,
    collapse_whitespace_in_prolog,
    has_unnecessary_standalone,
    minify_internal_subset,
    remove_unnecessary_standalone_declaration,
)
from .namespaces import (
    NamespaceTable,
    minify_namespaces,
    remove_unused_default_namespace,
    rename_prefix,
)
from .whitespace import (
    collapse_empty_elements,
    collapse_whitespace_in_tags,
    collapse_whitespace_in_texts,
    remove_comments,
    remove_schema_location_attributes,
    remove_whitespace_between_tags,
    trim_whitespace_from_texts,
)

__all__ = [
    "collapse_whitespace_in_doc_type",
    "collapse_whitespace_in_prolog",
    "has_unnecessary_standalone",
    "minify_internal_subset",
    "remove_unnecessary_standalone_declaration",
    "NamespaceTable",
    "minify_namespaces",
    "remove_unused_default_namespace",
    "rename_prefix",
    "collapse_empty_elements",
    "collapse_whitespace_in_tags",
    "collapse_whitespace_in_texts",
    "remove_comments",
    "remove_schema_location_attributes",
    "remove_whitespace_between_tags",
    "trim_whitespace_from_texts",
]
