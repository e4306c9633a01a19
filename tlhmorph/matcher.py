"""
Track matcher for tlhmorph.

Matches a (possibly partial) word against one track, slot by slot. At each
slot the longest dictionary entry that starts the word is taken greedily;
optional slots are skipped when nothing matches. The result tells the
completion engine how far the word got along the track and what is left.
"""

from typing import NamedTuple, Sequence, Tuple

from tlhmorph.dictionary import BOUNDARY, Dictionary, PartOfSpeech
from tlhmorph.grammar import Slot


class ParseStep(NamedTuple):
    """One morpheme consumed by the matcher."""
    text: str
    pos: PartOfSpeech


class MatchResult(NamedTuple):
    """
    Outcome of matching a word against a track.

    Attributes:
        ending: Unmatched rest of the word. Empty when the word is a
            complete parse along the track.
        parsed: Morphemes consumed so far, in order
        remaining: Slots not yet resolved, starting at the slot where
            matching stopped
    """
    ending: str
    parsed: Tuple[ParseStep, ...]
    remaining: Tuple[Slot, ...]


def match_track(
    dictionary: Dictionary,
    track: Sequence[Slot],
    word: str,
    parsed: Tuple[ParseStep, ...] = (),
) -> MatchResult:
    """
    Match `word` against `track`.

    Recursion depth is bounded by the track length: every call either
    returns or recurses on a shorter track.

    Args:
        dictionary: Dictionary to take morphemes from
        track: Slots to fill, in order
        word: Text still to be matched. After the first morpheme it starts
            with a boundary hyphen, as suffix entries do.
        parsed: Morphemes consumed before this call

    Returns:
        MatchResult
    """
    track = tuple(track)
    if not track:
        return MatchResult(word, parsed, ())

    pos, mandatory = track[0]

    for entry in dictionary.longest_first(pos):
        bare = entry.bare
        if word == bare:
            # Complete, but the slot stays open for further suffixes
            return MatchResult('', parsed + (ParseStep(entry.tlh, pos),), track)
        if word.startswith(bare):
            rest = word[len(bare):]
            if not entry.tlh.endswith(BOUNDARY):
                rest = BOUNDARY + rest
            return match_track(
                dictionary, track[1:], rest, parsed + (ParseStep(entry.tlh, pos),)
            )

    if mandatory:
        return MatchResult(word, parsed, track)

    skipped = match_track(dictionary, track[1:], word, parsed)
    if skipped.ending == word:
        return MatchResult(word, parsed, track)
    return skipped
