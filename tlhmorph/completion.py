"""
Completion engine for tlhmorph.

Runs the track matcher once per track and merges the results into:
- the distinct ways the word splits into dictionary morphemes
- dictionary entries that would continue the word
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from tlhmorph.dictionary import DictEntry, Dictionary
from tlhmorph.grammar import TRACKS, Slot, Track
from tlhmorph.matcher import match_track

logger = logging.getLogger(__name__)

# One morpheme of a parse: every entry sharing its text and part of speech
Morpheme = FrozenSet[DictEntry]
Parse = Tuple[Morpheme, ...]


@dataclass
class Completions:
    """
    Result of completing a word.

    Attributes:
        parsed: Distinct parses of the word, each a sequence of morphemes
        suggestions: Entries that would continue the word, best first
    """
    parsed: Set[Parse] = field(default_factory=set)
    suggestions: List[DictEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "parsed": [
                [[e.to_dict() for e in sorted(morpheme)] for morpheme in parse]
                for parse in sorted_parses(self.parsed)
            ],
            "suggestions": [e.to_dict() for e in self.suggestions],
        }


def sorted_parses(parses: Set[Parse]) -> List[Parse]:
    """Parses in a stable display order: by their morphemes' entries."""
    return sorted(parses, key=lambda p: [min(m).sort_key for m in p if m])


def complete_track(
    dictionary: Dictionary,
    track: Sequence[Slot],
    word: str,
) -> Tuple[str, Parse, Set[DictEntry]]:
    """
    Complete `word` along one track.

    Returns:
        (ending, parse, suggestions) where ending is the unmatched rest of
        the word and suggestions are the entries that could fill the open
        slots up to and including the first mandatory one.
    """
    ending, steps, remaining = match_track(dictionary, track, word)

    parse = tuple(
        frozenset(e for e in dictionary.entries_by_text(step.text) if e.pos == step.pos)
        for step in steps
    )

    suggestions: Set[DictEntry] = set()
    if ending:
        for pos, mandatory in remaining:
            suggestions.update(dictionary.entries_with_prefix(pos, ending))
            if mandatory:
                break

    return ending, parse, suggestions


def completions(
    dictionary: Dictionary,
    word: str,
    tracks: Optional[Sequence[Track]] = None,
) -> Completions:
    """
    Parse and complete a word against every track.

    Args:
        dictionary: Dictionary to take morphemes from
        word: Word as typed, possibly incomplete
        tracks: Tracks to try. Defaults to the full catalogue.

    Returns:
        Completions
    """
    if tracks is None:
        tracks = TRACKS

    parsed: Set[Parse] = set()
    suggested: Set[DictEntry] = set()

    for track in tracks:
        ending, parse, suggestions = complete_track(dictionary, track.slots, word)
        logger.debug(
            f"{track.name}: ending={ending!r} morphemes={len(parse)} "
            f"suggestions={len(suggestions)}"
        )
        if parse and (not ending or suggestions):
            parsed.add(parse)
        if not ending:
            continue
        suggested.update(suggestions)

    ordered = sorted(suggested, key=lambda e: (not e.tlh.startswith(word), e.sort_key))
    return Completions(parsed=parsed, suggestions=ordered)
