"""Pattern fragments describing structural contexts of an XML document.

Each context fragment is a look-behind assertion that holds only when the
current position lies inside the construct it describes. Fragments carry a
single splice point where callers insert an additional look-behind condition,
e.g. "inside a tag, directly after whitespace".

Literally any character except ``<&"`` may appear almost anywhere in XML,
including ``>`` inside attribute values, so a naive ``(?<=<[^>]*)`` is not
enough to detect "inside a tag". The tag fragment instead walks back over
complete ``name="value"`` pairs up to the tag name.

Variable-width look-behind is not available in :mod:`re`, so everything here
is compiled with :mod:`regex`.
"""

from dataclasses import dataclass
from functools import lru_cache

import regex

SPLICE_POINT = "%1"

# Complete attributes inside a start tag or declaration
_ATTRIBUTES = r"""(?:\s+[^=\s>]+\s*=\s*(?:"[^"]*"|'[^']*'))*"""

# Start or end tag up to the current position
_TAG = r"/?[^?!\s/>]+\b" + _ATTRIBUTES

_COMMENT_BODY = r"!\s*(?:--(?:[^-]|-[^-])*--\s*)"
_CDATA_BODY = r"!\[(?:CDATA|.*?)\[(?:[^\]]|\][^\]]|\]\][^>])*\]\]"
_DOCTYPE_BODY = r"!DOCTYPE\s+(?:[^>\[]|\[[^\]]*\])*"
_INSTRUCTION_BODY = r"\?[^>]*"

_QUOTED = r"""("[^"]*"|'[^']*')"""

QUOTED_VALUE = "(?:" + _QUOTED[1:]

COMMENT_PATTERN = r"<" + _COMMENT_BODY + r">"

# Groups: 1 name, 2 SYSTEM/PUBLIC, 3 first literal, 4 second literal, 5 subset
DOCTYPE_PATTERN = (
    r"<!DOCTYPE\s+([^\s>\[]+)"
    r"(?:\s+(SYSTEM|PUBLIC)\s+" + _QUOTED + r"(?:\s+" + _QUOTED + r")?)?"
    r"(?:\s*\[([^\]]*)\])?\s*>"
)

# Run of text up to the next markup
TEXT_RUN = r"[^<]*"


@dataclass(frozen=True)
class ContextFragment:
    """Look-behind template for a structural context.

    Attributes:
        name: Short identifier of the context
        template: Pattern source containing at most one splice point
    """

    name: str
    template: str

    def splice(self, lookbehind: str = "") -> str:
        """Insert an extra look-behind condition at the splice point."""
        return self.template.replace(SPLICE_POINT, lookbehind or "")

    @property
    def pattern(self) -> str:
        """Fragment source without any spliced condition."""
        return self.splice()


TAG_CONTEXT = ContextFragment(
    "tag",
    r"(?<=<" + _TAG + SPLICE_POINT + r")",
)

BRACKET_CONTEXT = ContextFragment(
    "bracket",
    r"(?<=<(?:"
    + "|".join((_COMMENT_BODY, _CDATA_BODY, _DOCTYPE_BODY, _INSTRUCTION_BODY, _TAG))
    + r")" + SPLICE_POINT + r")",
)

PROLOG_CONTEXT = ContextFragment(
    "prolog",
    r"(?<=<\?xml\b" + _ATTRIBUTES + SPLICE_POINT + r")",
)

# Negative: holds unless the position directly follows a <pre> start tag or a
# start tag declaring xml:space="preserve"
PRESERVE_CONTEXT = ContextFragment(
    "preserve",
    r"(?<!<(?:[^\s/>:]+:)?pre[^<]*?>"
    r"""|\s+xml:space\s*=\s*(?:"preserve"|'preserve'|preserve)"""
    + _ATTRIBUTES + r"\s*>)",
)


@lru_cache(maxsize=512)
def compile_pattern(source: str) -> "regex.Pattern[str]":
    """Compile a pattern source once and reuse it across calls."""
    return regex.compile(source)


def escape(text: str) -> str:
    """Escape text for literal use inside a pattern."""
    return regex.escape(text)
