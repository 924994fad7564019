"""Fixed regex building blocks for citation tokenization.

Provides the page and roman numeral patterns that are spliced into the
reporter templates, the fixed-purpose patterns for id/supra/stop word/
paragraph/section tokens, the boundary wrappers, and the derivation of a
short citation pattern from a full citation pattern.

Token patterns always expose the token text as capture group 1; anything
outside group 1 is boundary context consumed by the match.
"""

from __future__ import annotations

import re

from citelex.errors import ShortFormDerivationError

# ---------------------------------------------------------------------------
# Page numbers
# ---------------------------------------------------------------------------

# Roman numerals 1-199 except 5, 50 and 100, lowercase only. "v", "l", "c",
# uppercase numerals and numerals over 200 are nearly always false positives.
ROMAN_NUMERAL_REGEX = "|".join((
    # 10-199, but not 50-59, 100-109 or 150-159
    r"c?(?:xc|xl|l?x{1,3})(?:ix|iv|v?i{0,3})",
    # 1-9, 51-59, 101-109, 151-159, but not 5, 55, 105, 155
    r"(?:c?l?)(?:ix|iv|v?i{1,3})",
    # 55, 105, 150, 155
    r"(?:lv|cv|cl|clv)",
))

# Plain digits first, they are far more common.
PAGE_NUMBER_REGEX = rf"(?:\d+|{ROMAN_NUMERAL_REGEX})"

PAGE_REGEX = rf"(?P<page>{PAGE_NUMBER_REGEX})"

# Base full citation: "410 U.S. 113" and "410 U.S., 113".
FULL_CITE_TEMPLATE = "$volume $reporter,? $page"

# ---------------------------------------------------------------------------
# Boundary wrappers
# ---------------------------------------------------------------------------

# Punctuation allowed around stop words and "supra". Letters, digits and
# whitespace are excluded.
PUNCTUATION_REGEX = r"[^\sa-zA-Z0-9]*"


def space_boundaries_re(regex: str) -> str:
    """Wrap regex so it only matches between whitespace or string edges."""
    return rf"(?:^|\s)({regex})(?:\s|$)"


def strip_punctuation_re(regex: str) -> str:
    """Allow leading and trailing punctuation around regex."""
    return f"{PUNCTUATION_REGEX}{regex}{PUNCTUATION_REGEX}"


def nonalphanum_boundaries_re(regex: str) -> str:
    """Wrap regex to require non-alphanumeric characters on left and right."""
    return rf"(?:^|[^a-zA-Z0-9])({regex})(?:[^a-zA-Z0-9]|$)"


# ---------------------------------------------------------------------------
# Fixed-purpose token patterns
# ---------------------------------------------------------------------------

STOP_WORDS: tuple[str, ...] = (
    "v",
    "re",
    "parte",
    "denied",
    "citing",
    "aff'd",
    "affirmed",
    "remanded",
    "see",
    "granted",
    "dismissed",
)

ID_REGEX = space_boundaries_re(r"id\.,?|ibid\.")
ID_STRINGS: tuple[str, ...] = ("id.", "ibid.")

SUPRA_REGEX = space_boundaries_re(strip_punctuation_re("supra"))
SUPRA_STRINGS: tuple[str, ...] = ("supra",)

STOP_WORD_REGEX = space_boundaries_re(
    strip_punctuation_re(rf"(?P<stop_word>{'|'.join(STOP_WORDS)})"),
)

PARAGRAPH_REGEX = r"(\n)"

SECTION_SYMBOL = "§"
SECTION_REGEX = rf"(\S*{SECTION_SYMBOL}\S*)"

# ---------------------------------------------------------------------------
# Short citation derivation
# ---------------------------------------------------------------------------

_SHORT_CITE_ANCHOR_RE = re.compile(
    r"""
    # reporter group:
    (
        \(\?P<reporter>[^)]+\)
    )
    (?:,\?)?\  # optional comma and the space
    # page group:
    (
        \(\?P<page>
    )
    """,
    re.VERBOSE,
)


def has_short_cite_form(regex: str) -> bool:
    """Return True if regex has a reporter group directly followed by page."""
    return _SHORT_CITE_ANCHOR_RE.search(regex) is not None


def short_cite_re(regex: str) -> str:
    """Convert a full citation regex into a short citation regex.

    Turns ``(?P<reporter>...),? (?P<page>...`` into
    ``(?P<reporter>...),? at (?P<page>...``, so "515 U.S., at 241" and
    "515 U.S. at 241" match but "515 U.S. 241" does not. Nothing outside the
    connective between the two groups is touched.

    Raises:
        ShortFormDerivationError: if the reporter/page anchor is absent.
    """
    short, count = _SHORT_CITE_ANCHOR_RE.subn(r"\1,? at \2", regex)
    if not count:
        raise ShortFormDerivationError(
            f"No (?P<reporter>...) group followed by (?P<page>...) in: {regex[:200]}",
        )
    return short
