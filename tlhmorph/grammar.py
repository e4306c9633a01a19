"""
Word grammar for tlhmorph.

A track is the template of one word class: the ordered slots a word of that
class is built from. Each slot names a part of speech and whether it must be
filled. Verb suffixes come in nine ordered classes; rover suffixes may appear
between any two of them, so verb tracks carry an optional rover slot after
the stem and after every suffix class.
"""

from typing import Iterable, List, NamedTuple, Tuple

from tlhmorph.dictionary import PartOfSpeech as P


class Slot(NamedTuple):
    """One position of a track."""
    pos: P
    mandatory: bool


class Track(NamedTuple):
    """A named, ordered sequence of slots."""
    name: str
    slots: Tuple[Slot, ...]


def with_rovers(slots: Iterable[Slot], rover: P = P.VERB_SUFFIX_ROVER) -> Tuple[Slot, ...]:
    """Follow every slot with an optional rover slot."""
    result: List[Slot] = []
    for slot in slots:
        result.append(slot)
        result.append(Slot(rover, False))
    return tuple(result)


def _optional(*poses: P) -> Tuple[Slot, ...]:
    return tuple(Slot(pos, False) for pos in poses)


NOUN_SUFFIXES = _optional(
    P.NOUN_SUFFIX_1, P.NOUN_SUFFIX_2, P.NOUN_SUFFIX_3, P.NOUN_SUFFIX_4, P.NOUN_SUFFIX_5,
)

VERB_SUFFIXES = _optional(
    P.VERB_SUFFIX_1, P.VERB_SUFFIX_2, P.VERB_SUFFIX_3, P.VERB_SUFFIX_4,
    P.VERB_SUFFIX_5, P.VERB_SUFFIX_6, P.VERB_SUFFIX_7, P.VERB_SUFFIX_8,
    P.VERB_SUFFIX_9,
)

# Type 9 suffixes nominalize a verb, so the nominalized tracks require one
NOMINALIZING_SUFFIXES = VERB_SUFFIXES[:-1] + (Slot(P.VERB_SUFFIX_9, True),)


# ============================================================================
# Track Catalogue
# ============================================================================

TRACKS: Tuple[Track, ...] = (
    Track("Noun track", (Slot(P.NOUN, True),) + NOUN_SUFFIXES),
    Track("Verb track", (Slot(P.VERB_PREFIX, False),) + with_rovers(
        (Slot(P.VERB, True),) + VERB_SUFFIXES
    )),
    Track("Nominalized verb track", with_rovers(
        (Slot(P.VERB, True),) + NOMINALIZING_SUFFIXES
    ) + NOUN_SUFFIXES),
    Track("Adjective track", (
        Slot(P.VERB, True),
        Slot(P.VERB_SUFFIX_ROVER, False),
        Slot(P.NOUN_SUFFIX_5, False),
    )),
    Track("Pronoun track (verb)", with_rovers(
        (Slot(P.PRONOUN, True),) + NOMINALIZING_SUFFIXES
    )),
    Track("Pronoun track (noun)", (
        Slot(P.PRONOUN, True),
        Slot(P.NOUN_SUFFIX_5, False),
    )),
    Track("Numerals", (Slot(P.NUMERAL, True),)),
    Track("Adverbials", (Slot(P.ADVERBIAL, True),)),
    Track("Conjunctions", (Slot(P.CONJUNCTION, True),)),
    Track("Question words", (Slot(P.QUESTION_WORD, True),)),
)


def get_track(name: str) -> Track:
    """
    Look up a track by name.

    Raises:
        KeyError: If there is no track with that name
    """
    for track in TRACKS:
        if track.name == name:
            return track
    raise KeyError(name)
