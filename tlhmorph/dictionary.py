"""
Dictionary for tlhmorph.

This module reads the zrajm Klingon dictionary (a tab-separated text file)
and indexes its entries for the matcher:
- by part of speech, longest surface text first
- by surface text
- by English and Swedish gloss words

Prefix lookups used for completion go through one marisa_trie.Trie of
surface texts per part of speech.
"""

import logging
import os
import re
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import marisa_trie

from tlhmorph.letters import Letter, letters

logger = logging.getLogger(__name__)

# Hyphen marking where a morpheme attaches to its neighbour
BOUNDARY = '-'

START_OF_DATA = '== start-of-data =='
END_OF_DATA = '== end-of-data =='

DICTIONARY_ENV = 'TLHMORPH_DICTIONARY'


# ============================================================================
# Part of Speech
# ============================================================================

class PartOfSpeech(Enum):
    """Part-of-speech tags, valued by their spelling in the dictionary file."""
    ADVERBIAL = 'adverbial'
    CONJUNCTION = 'conjunction'
    EXCLAMATION = 'exclamation'
    NAME = 'name'
    NOUN = 'noun'
    NOUN_SUFFIX_1 = 'noun suffix type 1'
    NOUN_SUFFIX_2 = 'noun suffix type 2'
    NOUN_SUFFIX_3 = 'noun suffix type 3'
    NOUN_SUFFIX_4 = 'noun suffix type 4'
    NOUN_SUFFIX_5 = 'noun suffix type 5'
    NUMERAL = 'numeral'
    PRONOUN = 'pronoun'
    QUESTION_WORD = 'question word'
    VERB = 'verb'
    VERB_PREFIX = 'verb prefix'
    VERB_SUFFIX_1 = 'verb suffix type 1'
    VERB_SUFFIX_2 = 'verb suffix type 2'
    VERB_SUFFIX_3 = 'verb suffix type 3'
    VERB_SUFFIX_4 = 'verb suffix type 4'
    VERB_SUFFIX_5 = 'verb suffix type 5'
    VERB_SUFFIX_6 = 'verb suffix type 6'
    VERB_SUFFIX_7 = 'verb suffix type 7'
    VERB_SUFFIX_8 = 'verb suffix type 8'
    VERB_SUFFIX_9 = 'verb suffix type 9'
    VERB_SUFFIX_ROVER = 'verb suffix type rover'
    UNKNOWN = 'unknown'

    @classmethod
    def from_text(cls, text: str) -> 'PartOfSpeech':
        """Map a dictionary `pos:` value to a tag. Unknown values map to UNKNOWN."""
        try:
            return cls(text.strip())
        except ValueError:
            return cls.UNKNOWN


# ============================================================================
# Dictionary Entry
# ============================================================================

@total_ordering
@dataclass(frozen=True, eq=False)
class DictEntry:
    """
    A dictionary entry. Immutable: indices hash entries by their identity.

    Attributes:
        tlh: Klingon surface text, e.g. "Qagh", "-wIj" or "bI-"
        pos: Part of speech
        homonym: Homonym number (the [1] in "[1] {Qagh}")
        sense: Sense number
        subsense: Subsense number
        id: Entry id from the dictionary file
        en: English glosses
        sv: Swedish glosses
        tag: Tags
        data: Data references
        fields: Any other field, by name
    """
    tlh: str
    pos: PartOfSpeech = PartOfSpeech.UNKNOWN
    homonym: int = 1
    sense: int = 1
    subsense: int = 1
    id: str = ''
    en: List[str] = field(default_factory=list)
    sv: List[str] = field(default_factory=list)
    tag: List[str] = field(default_factory=list)
    data: List[str] = field(default_factory=list)
    fields: Dict[str, str] = field(default_factory=dict)

    @property
    def identity(self) -> Tuple[str, str, PartOfSpeech, int, int, int]:
        return (self.id, self.tlh, self.pos, self.homonym, self.sense, self.subsense)

    @property
    def bare(self) -> str:
        """Surface text without a trailing boundary hyphen."""
        return self.tlh.rstrip(BOUNDARY)

    @property
    def sort_key(self) -> Tuple[Tuple[Letter, ...], int, int, int, str]:
        return (letters(self.tlh), self.homonym, self.sense, self.subsense, self.id)

    def __eq__(self, other):
        if not isinstance(other, DictEntry):
            return NotImplemented
        return self.identity == other.identity

    def __lt__(self, other):
        if not isinstance(other, DictEntry):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self):
        return hash(self.identity)

    def __repr__(self) -> str:
        return f"DictEntry({self.tlh!r}, {self.pos.value!r}, {self.homonym}.{self.sense}.{self.subsense})"

    def en_index(self) -> List[str]:
        return index_words(self.en)

    def sv_index(self) -> List[str]:
        return index_words(self.sv)

    def to_dict(self) -> dict:
        return {
            "tlh": self.tlh,
            "pos": self.pos.value,
            "homonym": self.homonym,
            "sense": self.sense,
            "subsense": self.subsense,
            "id": self.id,
            "en": self.en,
            "sv": self.sv,
        }


def index_words(translations: Iterable[str]) -> List[str]:
    """
    Expand glosses into the words they are indexed under.

    Text inside <...> or «...» is indexed on its own and as part of the
    enclosing gloss:

        >>> index_words(["<kill> someone"])
        ['kill', 'kill someone']
    """
    words = []
    for translation in translations:
        stack = ['']
        for ch in translation:
            if ch in '<«':
                stack.append('')
            elif ch in '>»':
                if len(stack) > 1:
                    words.append(stack.pop())
            else:
                stack = [s + ch for s in stack]
        words.append(stack[0])
    return words


# ============================================================================
# Dictionary
# ============================================================================

class Dictionary:
    """
    Indexed, read-only collection of dictionary entries.

    Indices are built once in the constructor.
    """

    def __init__(self, entries: Iterable[DictEntry]):
        self.entries: List[DictEntry] = list(entries)

        by_pos = defaultdict(set)
        by_text = defaultdict(set)
        en_index = defaultdict(set)
        sv_index = defaultdict(set)

        for entry in self.entries:
            by_pos[entry.pos].add(entry)
            by_text[entry.tlh].add(entry)
            for word in entry.en_index():
                en_index[word].add(entry)
            for word in entry.sv_index():
                sv_index[word].add(entry)

        self._by_pos: Dict[PartOfSpeech, FrozenSet[DictEntry]] = {
            pos: frozenset(group) for pos, group in by_pos.items()
        }
        self._by_text: Dict[str, FrozenSet[DictEntry]] = {
            text: frozenset(group) for text, group in by_text.items()
        }
        self._indices = {
            'en': {word: frozenset(group) for word, group in en_index.items()},
            'sv': {word: frozenset(group) for word, group in sv_index.items()},
        }

        # Longest surface text first, ties in alphabetical order
        self._longest_first: Dict[PartOfSpeech, Tuple[DictEntry, ...]] = {
            pos: tuple(sorted(group, key=lambda e: (-len(e.tlh), e.sort_key)))
            for pos, group in self._by_pos.items()
        }
        self._tries: Dict[PartOfSpeech, marisa_trie.Trie] = {
            pos: marisa_trie.Trie([e.tlh for e in group])
            for pos, group in self._by_pos.items()
        }

    def __len__(self) -> int:
        return len(self.entries)

    def entries_by_pos(self, pos: PartOfSpeech) -> FrozenSet[DictEntry]:
        """All entries tagged with `pos`; empty if there are none."""
        return self._by_pos.get(pos, frozenset())

    def entries_by_text(self, tlh: str) -> FrozenSet[DictEntry]:
        """All entries with surface text `tlh`."""
        return self._by_text.get(tlh, frozenset())

    def longest_first(self, pos: PartOfSpeech) -> Tuple[DictEntry, ...]:
        """Entries of `pos`, longest surface text first."""
        return self._longest_first.get(pos, ())

    def entries_with_prefix(self, pos: PartOfSpeech, prefix: str) -> List[DictEntry]:
        """Entries of `pos` whose surface text starts with `prefix`."""
        trie = self._tries.get(pos)
        if trie is None:
            return []
        return [
            entry
            for text in trie.keys(prefix)
            for entry in self.entries_by_text(text)
            if entry.pos == pos
        ]

    def search(self, word: str, language: str = 'en') -> List[DictEntry]:
        """
        Look up entries by gloss word.

        Args:
            word: Gloss word, e.g. "kill"
            language: "en" or "sv"

        Returns:
            Matching entries in alphabetical order

        Raises:
            ValueError: If the language has no index
        """
        if language not in self._indices:
            raise ValueError(f"no gloss index for language {language!r}")
        return sorted(self._indices[language].get(word, ()))


# ============================================================================
# Reading the zrajm format
# ============================================================================

TLH_RE = re.compile(
    r"(\[(?P<homonym>\d+)\]\s)?"
    r"\{(?P<word>.*)\}"
    r"(\s\[(?P<sense>\d+)?(\.(?P<subsense>\d+))?\])?"
)


def parse_tlh(value: str) -> Optional[Tuple[str, int, int, int]]:
    """
    Parse a `tlh:` value such as "[2] {Qagh} [1.2]".

    Returns:
        (text, homonym, sense, subsense), or None if the value is malformed
    """
    m = TLH_RE.search(value)
    if m is None:
        return None
    return (
        m.group('word'),
        int(m.group('homonym') or 1),
        int(m.group('sense') or 1),
        int(m.group('subsense') or 1),
    )


class _EntryBuilder:
    """Collects the fields of one entry while reading."""

    def __init__(self):
        self.values = {'tlh': '', 'fields': {}}
        self.valid = True
        self.prev_field = ''

    def add(self, name: str, value: str, line: str):
        values = self.values
        if name == 'tlh:':
            parsed = parse_tlh(value)
            if parsed is None:
                logger.warning(f"{value} is not tlh")
                self.valid = False
                return
            values['tlh'], values['homonym'], values['sense'], values['subsense'] = parsed
        elif name == 'pos:':
            values['pos'] = PartOfSpeech.from_text(value)
        elif name in ('en:', 'sv:'):
            values[name[:-1]] = value.split(', ')
        elif name in ('tag:', 'data:'):
            values[name[:-1]] = value.split('; ')
        elif name == 'id:':
            values['id'] = value
        elif name == '':
            if self.prev_field in values['fields']:
                values['fields'][self.prev_field] += '\n' + line.strip()
        else:
            # Free-form fields are keyed without the colon
            key = name.rstrip(':')
            values['fields'][key] = value
            self.prev_field = key

    def build(self) -> Optional[DictEntry]:
        entry_id = self.values.get('id')
        if not entry_id:
            return None
        if not self.valid:
            logger.warning(f"Skipping malformed entry {entry_id}")
            return None
        return DictEntry(**self.values)


def read_entries(lines: Iterable[str]) -> List[DictEntry]:
    """Read entries from the lines of a zrajm dictionary file."""
    entries = []
    in_data = False
    builder = _EntryBuilder()

    for line in lines:
        line = line.rstrip('\r\n')
        if line == START_OF_DATA:
            in_data = True
        if line == END_OF_DATA:
            break
        elif not in_data or line.startswith('=='):
            continue

        if not line:
            entry = builder.build()
            if entry is not None:
                entries.append(entry)
            builder = _EntryBuilder()
            continue

        fields = line.split('\t')
        if len(fields) < 2:
            continue
        builder.add(fields[0], fields[1], line)

    entry = builder.build()
    if entry is not None:
        entries.append(entry)

    return entries


def read_dictionary(path: Path) -> Dictionary:
    """
    Read a zrajm dictionary file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, encoding='utf-8') as f:
        entries = read_entries(f)
    logger.info(f"Read {len(entries)} entries from {path}")
    return Dictionary(entries)


# ============================================================================
# Dictionary Loading
# ============================================================================

# Module-level singleton
_DICTIONARY: Optional[Dictionary] = None


def get_dictionary_path() -> Path:
    """Get the default dictionary path ($TLHMORPH_DICTIONARY overrides it)."""
    env = os.environ.get(DICTIONARY_ENV)
    if env:
        return Path(env)
    return Path(__file__).parent / "data" / "dict.zdb"


def is_dictionary_loaded() -> bool:
    """Check if dictionary is loaded."""
    return _DICTIONARY is not None


def load_dictionary(path: Optional[Path] = None) -> Dictionary:
    """
    Load the dictionary once per process.

    Args:
        path: Path to the dictionary file. Uses default if not specified.

    Returns:
        The loaded Dictionary

    Raises:
        FileNotFoundError: If dictionary file doesn't exist
    """
    global _DICTIONARY

    if _DICTIONARY is not None:
        return _DICTIONARY

    if path is None:
        path = get_dictionary_path()
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(
            f"Dictionary not found at {path}. "
            f"Download dict.zdb from the zrajm Klingon dictionary and "
            f"point {DICTIONARY_ENV} at it."
        )

    _DICTIONARY = read_dictionary(path)
    return _DICTIONARY


def get_dictionary_size() -> int:
    """Get the number of entries in the loaded dictionary."""
    if _DICTIONARY is None:
        return 0
    return len(_DICTIONARY)


def unload_dictionary():
    """Unload the dictionary to free memory."""
    global _DICTIONARY
    _DICTIONARY = None
