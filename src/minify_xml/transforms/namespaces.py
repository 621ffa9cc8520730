"""Namespace analysis: unused declaration removal and prefix shortening.

Usage is detected document-wide, not per subtree. A prefix used in one
branch therefore keeps every one of its declarations, even redundant ones in
unrelated branches. Prefix search may also pick up names from CDATA text;
renaming itself is only applied to tags and declarations.
"""

from dataclasses import dataclass, field
from itertools import count, product
from typing import Iterator, List, Optional, Set

from minify_xml.patterns import (
    QUOTED_VALUE,
    REMOVE,
    Literal,
    compile_pattern,
    escape,
    find_all,
    find_all_in_context,
    replace_all,
    replace_in_context,
)
from minify_xml.shared.logging import CorrelationLogger, get_logger

RESERVED_PREFIXES = frozenset({"xml", "xsi"})

START_CHARSET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
CHARSET = START_CHARSET[:52] + "0123456789-_."

DECLARED_PREFIX_PATTERN = r"\s+xmlns:([^\s=]+)\s*="
ELEMENT_PREFIX_PATTERN = r"<([^\s/>:]+):"
ATTRIBUTE_PREFIX_PATTERN = r"([^\s=:]+):"
DEFAULT_NAMESPACE_PATTERN = r"\s+xmlns\s*=\s*" + QUOTED_VALUE

# Start or empty-element tag without a prefix; <? and <! are not elements
UNPREFIXED_ELEMENT_PATTERN = r"<(?![?!])([^\s/>:]+)[\s/>]"


def _unique(names: List[str]) -> List[str]:
    return list(dict.fromkeys(names))


def iter_candidate_prefixes() -> Iterator[str]:
    """Yield valid prefixes ordered by length, then by charset position."""
    for length in count(1):
        for chars in product(START_CHARSET, *([CHARSET] * (length - 1))):
            yield "".join(chars)


@dataclass
class NamespaceTable:
    """Declared namespace prefixes and their usage within one document.

    Attributes:
        declared: Declared prefixes in order of first appearance
        used: Prefixes referenced by element or attribute names
        taken: Prefix names that must not be assigned by renaming
    """

    declared: List[str] = field(default_factory=list)
    used: Set[str] = field(default_factory=set)
    taken: Set[str] = field(default_factory=set)

    @classmethod
    def scan(cls, document: str) -> "NamespaceTable":
        """Collect declared prefixes and the prefixes used by names."""
        declared = _unique(
            find_all_in_context(document, DECLARED_PREFIX_PATTERN, group=1)
        )
        used = set(find_all(document, ELEMENT_PREFIX_PATTERN, group=1))
        used.update(
            find_all_in_context(
                document, ATTRIBUTE_PREFIX_PATTERN, lookbehind=r"\s+", group=1
            )
        )
        used.discard("xmlns")
        return cls(declared=declared, used=used, taken=set(declared) | used)

    @property
    def unused(self) -> List[str]:
        """Declared prefixes that are never referenced."""
        return [prefix for prefix in self.declared if prefix not in self.used]

    def drop(self, prefixes: List[str]) -> None:
        """Forget removed declarations."""
        removed = set(prefixes)
        self.declared = [prefix for prefix in self.declared if prefix not in removed]
        self.taken -= removed - self.used

    def is_free(self, name: str) -> bool:
        """Whether ``name`` may be assigned to a renamed prefix."""
        return name not in self.taken and not name.lower().startswith("xml")

    def first_free(self) -> str:
        """Shortest free prefix, searched breadth-first by length."""
        return next(name for name in iter_candidate_prefixes() if self.is_free(name))

    def shorter_name(self, prefix: str) -> Optional[str]:
        """Pick a shorter free name for ``prefix``, or None to keep it."""
        if prefix in RESERVED_PREFIXES or len(prefix) == 1:
            return None
        name = prefix[0] if self.is_free(prefix[0]) else self.first_free()
        if len(prefix) <= len(name):
            return None
        return name

    def rename(self, old: str, new: str) -> None:
        """Record that ``old`` was renamed to ``new``."""
        self.declared = [new if prefix == old else prefix for prefix in self.declared]
        self.taken.discard(old)
        self.taken.add(new)


def remove_declarations(
    document: str, prefixes: List[str], guard_cdata: bool = False
) -> str:
    """Remove the ``xmlns:prefix="..."`` declarations of the given prefixes."""
    if not prefixes:
        return document
    alternatives = "|".join(escape(prefix) for prefix in prefixes)
    return replace_in_context(
        document,
        r"\s+xmlns:(?:" + alternatives + r")\s*=\s*" + QUOTED_VALUE,
        REMOVE,
        guard_cdata=guard_cdata,
    )


def has_unprefixed_elements(document: str) -> bool:
    """Check whether any element tag lacks a namespace prefix."""
    return compile_pattern(UNPREFIXED_ELEMENT_PATTERN).search(document) is not None


def remove_unused_default_namespace(document: str, guard_cdata: bool = False) -> str:
    """Remove ``xmlns="..."`` when every element carries a prefix.

    Prefixed attributes can never refer to the default namespace, so only
    element names are inspected.
    """
    if has_unprefixed_elements(document):
        return document
    return replace_in_context(
        document, DEFAULT_NAMESPACE_PATTERN, REMOVE, guard_cdata=guard_cdata
    )


def rename_prefix(document: str, old: str, new: str, guard_cdata: bool = False) -> str:
    """Rename a namespace prefix in tags, attribute names and its declaration."""
    prefix = escape(old)
    document = replace_all(
        document, r"<(/?)" + prefix + ":", Literal(r"<\g<1>" + new + ":"), guard_cdata
    )
    document = replace_in_context(
        document,
        prefix + ":",
        Literal(new + ":"),
        lookbehind=r"\s+",
        guard_cdata=guard_cdata,
    )
    return replace_in_context(
        document,
        r"xmlns:" + prefix + r"(?=[\s=])",
        Literal("xmlns:" + new),
        lookbehind=r"\s+",
        guard_cdata=guard_cdata,
    )


def minify_namespaces(
    document: str,
    remove_unused: bool = True,
    remove_unused_default: bool = True,
    shorten: bool = True,
    guard_cdata: bool = False,
    logger: Optional[CorrelationLogger] = None,
) -> str:
    """Remove unused namespace declarations and shorten the remaining prefixes.

    Args:
        document: XML text
        remove_unused: Remove declarations of prefixes that are never used
        remove_unused_default: Remove the default namespace if no element needs it
        shorten: Rename prefixes to the shortest free names
        guard_cdata: Leave CDATA sections untouched
        logger: Logger for rename diagnostics

    Returns:
        New document
    """
    logger = logger or get_logger(__name__, component="namespaces")
    table = NamespaceTable.scan(document)

    if remove_unused:
        unused = table.unused
        if unused:
            document = remove_declarations(document, unused, guard_cdata)
            table.drop(unused)
            logger.debug(
                "Removed unused namespace declarations",
                extra={"prefixes": unused},
            )

    if remove_unused_default:
        document = remove_unused_default_namespace(document, guard_cdata)

    if shorten:
        for prefix in list(table.declared):
            new = table.shorter_name(prefix)
            if new is None:
                continue
            document = rename_prefix(document, prefix, new, guard_cdata)
            table.rename(prefix, new)
            logger.debug(
                "Shortened namespace prefix",
                extra={"prefix": prefix, "new_prefix": new},
            )

    return document
