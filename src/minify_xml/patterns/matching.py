"""Context-scoped matching and replacement.

Sub-patterns are scoped to a structural context by prefixing them with a
context fragment (see :mod:`minify_xml.patterns.library`). Because the
context is a zero-width look-behind, a match can never extend across the
boundary of the construct it is scoped to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List

import regex

from .cdata import CDataGuard
from .library import (
    BRACKET_CONTEXT,
    TAG_CONTEXT,
    ContextFragment,
    compile_pattern,
)


class Replacement(ABC):
    """Replacement applied to each match of a pattern."""

    @abstractmethod
    def render(self, match: "regex.Match[str]") -> str:
        """Produce the replacement text for a match."""


@dataclass(frozen=True)
class Literal(Replacement):
    """Replacement text, with group references (``\\1``, ``\\g<name>``) expanded."""

    text: str

    def render(self, match: "regex.Match[str]") -> str:
        if "\\" not in self.text:
            return self.text
        return match.expand(self.text)


@dataclass(frozen=True)
class Compute(Replacement):
    """Replacement computed from the match (captures and offset included)."""

    func: Callable[["regex.Match[str]"], str]

    def render(self, match: "regex.Match[str]") -> str:
        return self.func(match)


REMOVE = Literal("")
SINGLE_SPACE = Literal(" ")


def find_all(document: str, pattern: str, group: int = 0) -> List[str]:
    """Find all non-empty values of ``group`` for matches of ``pattern``."""
    return [
        match.group(group)
        for match in compile_pattern(pattern).finditer(document)
        if match.group(group)
    ]


def find_all_in_context(
    document: str,
    pattern: str,
    context: ContextFragment = TAG_CONTEXT,
    lookbehind: str = "",
    group: int = 0,
) -> List[str]:
    """Find matches of ``pattern`` occurring inside ``context``.

    Args:
        document: XML text
        pattern: Sub-pattern source
        context: Structural context the matches must lie in
        lookbehind: Extra condition spliced into the context look-behind
        group: Capture group to collect

    Returns:
        Captured values in document order
    """
    return find_all(document, context.splice(lookbehind) + pattern, group)


def replace_all(
    document: str,
    pattern: str,
    replacement: Replacement,
    guard_cdata: bool = False,
    count: int = 0,
) -> str:
    """Replace matches of ``pattern`` anywhere in the document.

    Args:
        document: XML text
        pattern: Pattern source
        replacement: Literal or computed replacement
        guard_cdata: Leave matches starting inside CDATA sections unchanged
        count: Maximum number of replacements, 0 for all

    Returns:
        New document
    """
    compiled = compile_pattern(pattern)
    if guard_cdata:
        render = CDataGuard(document).wrap(replacement)
    else:
        render = replacement.render
    return compiled.sub(render, document, count=count)


def replace_in_context(
    document: str,
    pattern: str,
    replacement: Replacement,
    context: ContextFragment = TAG_CONTEXT,
    lookbehind: str = "",
    guard_cdata: bool = False,
) -> str:
    """Replace matches of ``pattern`` occurring inside ``context``."""
    return replace_all(
        document, context.splice(lookbehind) + pattern, replacement, guard_cdata
    )


def replace_between_tags(
    document: str,
    pattern: str,
    replacement: Replacement,
    lookbehind: str = "",
    lookahead: str = "",
    guard_cdata: bool = False,
) -> str:
    """Replace matches lying in text between two element tags.

    The match must follow the ``>`` of a start, end or empty-element tag and
    precede a ``<`` that opens another element tag (not ``<?`` or ``<!``).
    """
    return replace_in_context(
        document,
        pattern + "(?=" + lookahead + "<[^?!])",
        replacement,
        context=TAG_CONTEXT,
        lookbehind=r"\s*/?>" + lookbehind,
        guard_cdata=guard_cdata,
    )


def replace_between_brackets(
    document: str,
    pattern: str,
    replacement: Replacement,
    lookbehind: str = "",
    lookahead: str = "",
    guard_cdata: bool = False,
) -> str:
    """Replace matches lying between any two bracketed constructs.

    Comments, CDATA sections, the DOCTYPE, the prolog and processing
    instructions count as tags here.
    """
    return replace_in_context(
        document,
        pattern + "(?=" + lookahead + "<)",
        replacement,
        context=BRACKET_CONTEXT,
        lookbehind=r"\s*[!?/]?>" + lookbehind,
        guard_cdata=guard_cdata,
    )


def replace_between(
    document: str,
    pattern: str,
    replacement: Replacement,
    strict: bool = False,
    lookbehind: str = "",
    lookahead: str = "",
    guard_cdata: bool = False,
) -> str:
    """Replace text-node matches, strictly between element tags or between brackets."""
    replacer = replace_between_tags if strict else replace_between_brackets
    return replacer(
        document,
        pattern,
        replacement,
        lookbehind=lookbehind,
        lookahead=lookahead,
        guard_cdata=guard_cdata,
    )
