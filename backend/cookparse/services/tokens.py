"""
Cooklang token grammar.

Each inline form is a named pattern; TOKENS joins them into one alternation
where every form sits in an outer group named after its TokenKind, so the
form that matched is ``match.lastgroup``.
"""

import re
import unicodedata
from enum import Enum


class TokenKind(str, Enum):
    METADATA = "metadata"
    MULTIWORD_INGREDIENT = "multiword_ingredient"
    SINGLE_WORD_INGREDIENT = "single_word_ingredient"
    MULTIWORD_COOKWARE = "multiword_cookware"
    SINGLE_WORD_COOKWARE = "single_word_cookware"
    TIMER = "timer"


# Planes 2 and up (ideographs, tags, private use) have no P* characters
_LAST_PUNCTUATION_PLANE_END = 0x1FFFF


def _punctuation_ranges() -> str:
    """Character-class body covering the Unicode P* categories."""
    ranges = []
    start = prev = None
    for code in range(_LAST_PUNCTUATION_PLANE_END + 1):
        if unicodedata.category(chr(code)).startswith("P"):
            if start is None:
                start = code
            prev = code
        elif start is not None:
            ranges.append((start, prev))
            start = None
    if start is not None:
        ranges.append((start, prev))

    parts = []
    for lo, hi in ranges:
        if lo == hi:
            parts.append(re.escape(chr(lo)))
        else:
            parts.append(f"{re.escape(chr(lo))}-{re.escape(chr(hi))}")
    return "".join(parts)


_WORD = rf"[^\s{_punctuation_ranges()}]+"

# Names stop at the next marker and bodies at the next brace, so every
# character is scanned by a bounded number of match attempts.
METADATA = r"^>>\s*(?P<meta_key>[^\s:][^:]*):\s*(?P<meta_value>.+)"

MULTIWORD_INGREDIENT = (
    r"@(?P<mi_name>[^@#~\[{}]+?)"
    r"\{(?P<mi_quantity>[^{}]*?)(?:%(?P<mi_units>[^{}]+?))?\}"
    r"(?:\((?P<mi_preparation>[^()]*)\))?"
)
SINGLE_WORD_INGREDIENT = rf"@(?P<si_name>{_WORD})"

MULTIWORD_COOKWARE = r"#(?P<mc_name>[^@#~\[{}]+?)\{(?P<mc_quantity>[^{}]*?)\}"
SINGLE_WORD_COOKWARE = rf"#(?P<sc_name>{_WORD})"

TIMER = r"~(?P<timer_name>[^~{}]*?)\{(?P<timer_quantity>[^{}]*?)(?:%(?P<timer_units>[^{}]*?))?\}"

# Alternation order is match priority at a given position.
FORMS = (
    (TokenKind.METADATA, METADATA),
    (TokenKind.MULTIWORD_INGREDIENT, MULTIWORD_INGREDIENT),
    (TokenKind.SINGLE_WORD_INGREDIENT, SINGLE_WORD_INGREDIENT),
    (TokenKind.MULTIWORD_COOKWARE, MULTIWORD_COOKWARE),
    (TokenKind.SINGLE_WORD_COOKWARE, SINGLE_WORD_COOKWARE),
    (TokenKind.TIMER, TIMER),
)

TOKENS = re.compile("|".join(f"(?P<{kind.value}>{pattern})" for kind, pattern in FORMS))

COMMENT = re.compile(r"--.*")
# A whitespace run is only entered at its first character
BLOCK_COMMENT_OPEN = re.compile(r"(?:(?<!\s)\s*)?\[-")
BLOCK_COMMENT_CLOSE = re.compile(r"-\]\s*")

SHOPPING_LIST = re.compile(
    r"(?:\A|\n)[ \t\r]*\[(?P<category>.+)\][ \t\r]*(?=\n)"
    r"(?P<items>(?:\n[ \t\r]*\S.*)+)"
)
