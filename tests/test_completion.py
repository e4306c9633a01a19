"""
Tests for the completion engine.
"""

from tlhmorph.completion import Completions, complete_track, completions, sorted_parses
from tlhmorph.dictionary import Dictionary, PartOfSpeech as P
from tlhmorph.grammar import get_track


def surface(parses):
    """Parses as lists of (text, pos) pairs, one pair per entry."""
    return sorted(
        [sorted((e.tlh, e.pos.value) for e in morpheme) for morpheme in parse]
        for parse in parses
    )


class TestCompleteTrack:

    def test_homonyms_kept_together(self):
        from tlhmorph.dictionary import DictEntry
        d = Dictionary([
            DictEntry("Qagh", P.NOUN, id="a"),
            DictEntry("Qagh", P.NOUN, homonym=2, id="b"),
            DictEntry("Qagh", P.VERB, id="c"),
        ])
        ending, parse, suggestions = complete_track(d, get_track("Noun track").slots, "Qagh")
        assert ending == ""
        assert len(parse) == 1
        assert {e.id for e in parse[0]} == {"a", "b"}
        assert suggestions == set()

    def test_suggestions_stop_at_mandatory_slot(self, dictionary):
        track = get_track("Nominalized verb track").slots
        ending, parse, suggestions = complete_track(dictionary, track, "QongwI")
        assert ending == "-wI"
        assert {e.tlh for e in suggestions} == {"-wI'"}

    def test_suggestions_beyond_mandatory_slot_not_collected(self, dictionary):
        track = get_track("Nominalized verb track").slots
        ending, parse, suggestions = complete_track(dictionary, track, "QongD")
        # -Daq fills a noun suffix slot after the mandatory type 9 slot
        assert ending == "-D"
        assert suggestions == set()

    def test_suggestions_start_with_ending(self, dictionary):
        for word in ["Q", "Qo", "Qongta", "QaghwI", "bI", "jIHD"]:
            for track in [get_track("Verb track"), get_track("Noun track")]:
                ending, _, suggestions = complete_track(dictionary, track.slots, word)
                assert all(e.tlh.startswith(ending) for e in suggestions)


class TestCompletions:

    def test_complete_word(self, dictionary):
        result = completions(dictionary, "QaghwIj")
        assert surface(result.parsed) == [[[("Qagh", "noun")], [("-wIj", "noun suffix type 4")]]]
        assert result.suggestions == []

    def test_stem_alone(self, dictionary):
        result = completions(dictionary, "Qagh")
        assert surface(result.parsed) == [
            [[("Qagh", "noun")]],
            [[("Qagh", "verb")]],
        ]
        assert result.suggestions == []

    def test_partial_stem(self, dictionary):
        result = completions(dictionary, "Qa")
        assert result.parsed == set()
        assert [(e.tlh, e.pos) for e in result.suggestions] == [
            ("Qagh", P.NOUN),
            ("Qagh", P.VERB),
            ("Qargh", P.NOUN),
        ]

    def test_partial_suffix(self, dictionary):
        result = completions(dictionary, "Qongta")
        assert surface(result.parsed) == [[[("Qong", "verb")]]]
        assert [e.tlh for e in result.suggestions] == ["-taH"]

    def test_typed_prefix_sorts_first(self, dictionary):
        result = completions(dictionary, "QongD")
        # By entry order -Daq would come first
        assert [e.tlh for e in result.suggestions] == ["QongDaq", "-Daq"]
        assert surface(result.parsed) == [[[("Qong", "verb")]]]

    def test_tracks_agree_on_one_parse(self, dictionary):
        # Both the verb track and the nominalized verb track find this
        result = completions(dictionary, "QongwI'")
        assert surface(result.parsed) == [
            [[("Qong", "verb")], [("-wI'", "verb suffix type 9")]],
        ]

    def test_pronoun_with_noun_suffix(self, dictionary):
        result = completions(dictionary, "jIHDaq")
        assert surface(result.parsed) == [
            [[("jIH", "pronoun")], [("-Daq", "noun suffix type 5")]],
        ]

    def test_greedy_stem(self, dictionary):
        result = completions(dictionary, "ghoghHom")
        assert surface(result.parsed) == [[[("ghoghHom", "noun")]]]

    def test_prefixed_verb(self, dictionary):
        result = completions(dictionary, "bIQongtaH")
        assert surface(result.parsed) == [[
            [("bI-", "verb prefix")],
            [("Qong", "verb")],
            [("-taH", "verb suffix type 7")],
        ]]

    def test_unknown_word(self, dictionary):
        result = completions(dictionary, "xyzzy")
        assert result.parsed == set()
        assert result.suggestions == []

    def test_empty_dictionary(self):
        result = completions(Dictionary([]), "Qagh")
        assert result == Completions()

    def test_restrict_tracks(self, dictionary):
        result = completions(dictionary, "Qa", tracks=[get_track("Noun track")])
        assert [(e.tlh, e.pos) for e in result.suggestions] == [
            ("Qagh", P.NOUN),
            ("Qargh", P.NOUN),
        ]

    def test_to_dict(self, dictionary):
        # Noun + -wIj and verb + -wI' are both still possible
        data = completions(dictionary, "QaghwI").to_dict()
        assert len(data["parsed"]) == 2
        assert data["parsed"][0] == [[{
            "tlh": "Qagh", "pos": "noun", "homonym": 1, "sense": 1, "subsense": 1,
            "id": "Qagh:noun", "en": ["mistake", "error"], "sv": [],
        }]]
        assert [s["tlh"] for s in data["suggestions"]] == ["-wI'", "-wIj"]

    def test_sorted_parses(self, dictionary):
        result = completions(dictionary, "Qagh")
        ordered = sorted_parses(result.parsed)
        assert [min(p[0]).pos for p in ordered] == [P.NOUN, P.VERB]
