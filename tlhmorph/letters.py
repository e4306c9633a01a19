"""
Klingon letters for tlhmorph.

Klingon is written with multi-character letters (ch, gh, ng, tlh) and uses
case to tell letters apart (q and Q, H, D, I, S). This module splits text
into letters and defines the alphabetical order used to sort dictionary
entries.

Alphabet: a b ch D e gh H I j l m n ng o p q Q r S t tlh u v w y '
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple

# =============================================================================
# Alphabet
# =============================================================================

# Multi-character letters come first so they win over their first character
MULTI_LETTERS = ('tlh', 'ch', 'gh', 'ng')
SINGLE_LETTERS = "abDeHIjlmnopqQrStuvwy'ʼ"

ALPHABET = MULTI_LETTERS + tuple(SINGLE_LETTERS)

# Anything outside the alphabet is kept as a one-character letter
LETTER_RE = re.compile(
    '|'.join(MULTI_LETTERS) + '|[' + re.escape(SINGLE_LETTERS) + ']|.',
    re.DOTALL,
)


# =============================================================================
# Letter
# =============================================================================

@total_ordering
@dataclass(frozen=True, slots=True)
class Letter:
    """
    One letter of the Klingon alphabet.

    Letters compare by their lowercased form, except q and Q: both lowercase
    to "q", so q is placed before Q explicitly.
    """
    text: str

    def __lt__(self, other: 'Letter') -> bool:
        if not isinstance(other, Letter):
            return NotImplemented
        return compare(self, other) < 0

    def __str__(self) -> str:
        return self.text


def compare(a: Letter, b: Letter) -> int:
    """Compare two letters. Returns -1, 0 or 1."""
    if a.text == 'q' and b.text == 'Q':
        return -1
    if a.text == 'Q' and b.text == 'q':
        return 1
    x, y = a.text.lower(), b.text.lower()
    if x == y:
        # Case pairs outside the alphabet; keeps the order consistent with ==
        x, y = a.text, b.text
    return (x > y) - (x < y)


def letters(text: str) -> Tuple[Letter, ...]:
    """
    Split text into letters.

    Example:
        >>> [str(l) for l in letters("tlhIngan")]
        ['tlh', 'I', 'ng', 'a', 'n']
    """
    return tuple(Letter(m.group()) for m in LETTER_RE.finditer(text))


def sort_key(text: str) -> Tuple[Letter, ...]:
    """Sort key placing words in Klingon alphabetical order."""
    return letters(text)
