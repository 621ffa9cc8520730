"""Guard that keeps replacements out of CDATA sections.

A position counts as "inside CDATA" when the text before it contains a
``<![CDATA[`` that is not yet closed by ``]]>``. Instead of re-scanning the
prefix for every match, the open intervals are computed once per document and
looked up with :mod:`bisect`.
"""

from bisect import bisect_right
from typing import TYPE_CHECKING, Callable, List, Tuple

if TYPE_CHECKING:
    from .matching import Replacement

    import regex

CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"


def has_cdata(document: str) -> bool:
    """Check whether a document contains any CDATA section opener."""
    return CDATA_OPEN in document


def find_cdata_spans(document: str) -> List[Tuple[int, int]]:
    """Find the offset intervals lying inside CDATA sections.

    Each interval ``(start, end)`` is half-open and starts directly after an
    opener. It ends after the first closer that follows, or one past the end
    of the document when the section is never closed. Overlapping intervals
    (an opener inside CDATA text) are merged.

    Args:
        document: XML text

    Returns:
        Sorted, disjoint list of intervals
    """
    spans: List[Tuple[int, int]] = []
    position = document.find(CDATA_OPEN)
    while position != -1:
        start = position + len(CDATA_OPEN)
        close = document.find(CDATA_CLOSE, start)
        end = close + len(CDATA_CLOSE) if close != -1 else len(document) + 1
        if spans and start <= spans[-1][1]:
            spans[-1] = (spans[-1][0], max(spans[-1][1], end))
        else:
            spans.append((start, end))
        position = document.find(CDATA_OPEN, start)
    return spans


class CDataGuard:
    """Suppresses replacements whose match starts inside a CDATA section."""

    def __init__(self, document: str) -> None:
        self.spans = find_cdata_spans(document)
        self._starts = [start for start, _ in self.spans]

    def is_inside(self, offset: int) -> bool:
        """Check whether ``offset`` lies after an unterminated CDATA opener."""
        index = bisect_right(self._starts, offset) - 1
        return index >= 0 and offset < self.spans[index][1]

    def wrap(self, replacement: "Replacement") -> Callable[["regex.Match[str]"], str]:
        """Wrap a replacement so it leaves CDATA content untouched."""
        def guarded(match: "regex.Match[str]") -> str:
            if self.is_inside(match.start()):
                return match.group(0)
            return replacement.render(match)

        return guarded
