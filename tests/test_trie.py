import pytest
from wordsquare.trie import END_OF_WORD, InvalidWord, PrefixDictionary, load_dictionary


WORDS = ["CAT", "CATS", "CAR", "CARE", "BONE", "BONES", "DIG", "ONE", "AREA", "RARE", "ERAS"]


def _make_dict(words: list[str]) -> PrefixDictionary:
    dictionary = PrefixDictionary()
    for w in words:
        dictionary.insert(w.upper())
    return dictionary


def test_every_proper_prefix_has_continuations():
    dictionary = _make_dict(WORDS)
    for word in WORDS:
        for i in range(len(word)):
            poss = dictionary.continuations(word[:i])
            assert poss is not None, f"prefix {word[:i]!r} of {word} missing"
            assert word[i] in poss


def test_full_word_marks_end_of_word():
    dictionary = _make_dict(WORDS)
    for word in WORDS:
        assert END_OF_WORD in dictionary.continuations(word)
        assert word in dictionary


def test_end_of_word_listed_first_and_once():
    dictionary = _make_dict(["CAT", "CATS"])
    assert dictionary.continuations("CAT") == (END_OF_WORD, "S")
    assert dictionary.continuations("CATS") == (END_OF_WORD,)


def test_absent_prefix_returns_none():
    dictionary = _make_dict(WORDS)
    assert dictionary.continuations("XYZ") is None
    assert dictionary.continuations("CATSS") is None


def test_empty_prefix_lists_first_symbols():
    dictionary = _make_dict(["CAT", "BONE", "CAR", "AREA"])
    poss = dictionary.continuations("")
    assert poss == ("C", "B", "A")
    assert END_OF_WORD not in poss


def test_continuations_have_no_duplicates():
    dictionary = _make_dict(["CAT", "CAR", "CAB", "CAT"])
    poss = dictionary.continuations("CA")
    assert len(poss) == len(set(poss)) == 3


def test_continuations_accept_symbol_sequences():
    dictionary = _make_dict(["CAT"])
    assert dictionary.continuations(("C", "A")) == ("T",)
    assert dictionary.continuations([]) == ("C",)


def test_empty_dictionary_has_no_prefixes():
    assert PrefixDictionary().continuations("") is None


def test_end_of_word_is_not_a_symbol():
    assert END_OF_WORD != ""
    assert END_OF_WORD not in PrefixDictionary().alphabet
    assert repr(END_OF_WORD) == "END_OF_WORD"


def test_insert_is_idempotent():
    dictionary = _make_dict(["CAT"])
    nodes_before = repr(dictionary)
    dictionary.insert("CAT")
    assert len(dictionary) == 1
    assert repr(dictionary) == nodes_before


def test_insert_empty_word_rejected():
    dictionary = PrefixDictionary()
    with pytest.raises(InvalidWord):
        dictionary.insert("")
    assert len(dictionary) == 0


def test_insert_out_of_alphabet_rejected():
    dictionary = _make_dict(["CAT"])
    with pytest.raises(InvalidWord):
        dictionary.insert("cat")
    with pytest.raises(InvalidWord):
        dictionary.insert("CA-T")
    assert len(dictionary) == 1
    assert dictionary.continuations("CA") == ("T",)


def test_custom_alphabet():
    dictionary = PrefixDictionary.from_words(["abc", "cab"], alphabet="abc")
    assert "abc" in dictionary
    with pytest.raises(InvalidWord):
        dictionary.insert("ABC")


def test_words_of_length_exact():
    dictionary = _make_dict(WORDS)
    for length in range(0, 7):
        expected = sorted(w for w in set(WORDS) if len(w) == length)
        found = dictionary.words_of_length(length)
        assert sorted(found) == expected
        assert len(found) == len(set(found))


def test_words_of_length_deterministic():
    a = _make_dict(WORDS)
    b = _make_dict(WORDS)
    assert a.words_of_length(4) == b.words_of_length(4)
    # Depth-first in insertion order
    assert a.words_of_length(3) == ["CAT", "CAR", "DIG", "ONE"]


def test_restricted_to_length():
    dictionary = _make_dict(WORDS)
    reduced = dictionary.restricted_to_length(4)
    assert reduced.lengths == {4}
    assert sorted(reduced.words_of_length(4)) == sorted(w for w in WORDS if len(w) == 4)
    assert "CAT" not in reduced
    assert dictionary.restricted_to_length(9).lengths == frozenset()


def test_contains_rejects_prefixes_and_non_strings():
    dictionary = _make_dict(WORDS)
    assert "CA" not in dictionary
    assert "" not in dictionary
    assert 42 not in dictionary


def test_load_dictionary(tmp_path):
    dict_file = tmp_path / "words.txt"
    dict_file.write_text("cat\nCar\n\n  bone  \nit's\ncafé\nCAT\n", encoding="utf-8")
    dictionary = load_dictionary(str(dict_file))
    assert len(dictionary) == 3
    assert "CAT" in dictionary
    assert "CAR" in dictionary
    assert "BONE" in dictionary


def test_load_dictionary_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dictionary(str(tmp_path / "nope.txt"))


def test_load_dictionary_skips_expanding_case_mappings(tmp_path):
    dict_file = tmp_path / "words.txt"
    dict_file.write_text("straße\nﬁt\nfit\n", encoding="utf-8")
    dictionary = load_dictionary(str(dict_file))
    assert len(dictionary) == 1
    assert "FIT" in dictionary
    assert "STRASSE" not in dictionary
