"""
Shared fixtures: a small Klingon dictionary, in memory and as a zrajm file.
"""

import pytest

from tlhmorph.dictionary import DictEntry, Dictionary, PartOfSpeech as P, unload_dictionary


def entry(tlh, pos, en=(), **kwargs):
    return DictEntry(tlh=tlh, pos=pos, id=f"{tlh}:{pos.value}", en=list(en), **kwargs)


ENTRIES = [
    entry("Qagh", P.NOUN, ["mistake", "error"]),
    entry("Qagh", P.VERB, ["err"]),
    entry("Qargh", P.NOUN, ["fissure"]),
    entry("ghogh", P.NOUN, ["voice"]),
    entry("ghoghHom", P.NOUN, ["<vocal> cord"]),
    entry("QongDaq", P.NOUN, ["bed"]),
    entry("Qong", P.VERB, ["sleep"]),
    entry("jIH", P.PRONOUN, ["I", "me"]),
    entry("wa'", P.NUMERAL, ["one"]),
    entry("'ej", P.CONJUNCTION, ["and"]),
    entry("nuq", P.QUESTION_WORD, ["what"]),
    entry("bI-", P.VERB_PREFIX, ["you (no object)"]),
    entry("-Hom", P.NOUN_SUFFIX_1, ["diminutive"]),
    entry("-mey", P.NOUN_SUFFIX_2, ["plural"]),
    entry("-wIj", P.NOUN_SUFFIX_4, ["my"]),
    entry("-Daq", P.NOUN_SUFFIX_5, ["locative"]),
    entry("-be'", P.VERB_SUFFIX_ROVER, ["not"]),
    entry("-taH", P.VERB_SUFFIX_7, ["continuous"]),
    entry("-wI'", P.VERB_SUFFIX_9, ["one who"]),
]


ZDB = """\
Header text that is not part of the data.
== start-of-data ==

tlh:\t{Qagh}
pos:\tnoun
en:\t<mistake>, error
sv:\t<misstag>, fel
tag:\tTKD; KGT
id:\t1

tlh:\t{Qagh}
pos:\tverb
en:\terr
id:\t2

tlh:\t[2] {Qargh} [1.2]
pos:\tnoun
en:\tfissure
notes:\tA crack.
\tSee also {ghop}.
id:\t3

tlh:\t{-wIj}
pos:\tnoun suffix type 4
en:\tmy
id:\t4

tlh:\tQaghbe'
pos:\tnoun
id:\t5

== some-section ==
tlh:\t{Qong}
pos:\tverb
en:\tsleep
id:\t6
== end-of-data ==

tlh:\t{ghoS}
pos:\tverb
id:\t7
"""


@pytest.fixture
def dictionary():
    return Dictionary(ENTRIES)


@pytest.fixture
def zdb_file(tmp_path):
    path = tmp_path / "dict.zdb"
    path.write_text(ZDB, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def fresh_dictionary():
    """Each test starts without a loaded default dictionary."""
    unload_dictionary()
    yield
    unload_dictionary()
