"""Tests for the prefix automaton (automaton.py)."""

import pytest

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.errors import LexiconError


@pytest.fixture
def small_set() -> PrefixSet:
    return PrefixSet(["p", "pre", "pref", "prefix"])


# ── prefixes ──────────────────────────────────────────────────────────────────

def test_finds_prefixes_shortest_first(small_set):
    assert list(small_set.prefixes("prefixes")) == ["p", "pre", "pref", "prefix"]


def test_prefixes_of_short_word(small_set):
    assert list(small_set.prefixes("pre")) == ["p", "pre"]


def test_no_prefixes(small_set):
    assert list(small_set.prefixes("fix")) == []
    assert list(small_set.prefixes("")) == []


def test_prefixes_stop_at_first_unmatched_char():
    s = PrefixSet(["ab", "abcd"])
    # 'abxd' leaves the automaton at 'x'; 'abcd' must not be found
    assert list(s.prefixes("abxcd")) == ["ab"]


def test_prefixes_is_lazy_and_restartable(small_set):
    it = small_set.prefixes("prefixes")
    assert next(it) == "p"
    assert list(small_set.prefixes("prefixes")) == ["p", "pre", "pref", "prefix"]
    assert list(it) == ["pre", "pref", "prefix"]


def test_multibyte_prefixes():
    s = PrefixSet(["über", "überein", "ü"])
    assert list(s.prefixes("übereinstimmen")) == ["ü", "über", "überein"]


def test_member_is_last_prefix_of_itself(prefix_set):
    for member in prefix_set:
        assert list(prefix_set.prefixes(member))[-1] == member


# ── longest_prefix ────────────────────────────────────────────────────────────

def test_longest_prefix(small_set):
    assert small_set.longest_prefix("prefab") == "pref"
    assert small_set.longest_prefix("prefixes") == "prefix"
    assert small_set.longest_prefix("fix") is None


@pytest.mark.parametrize("word", ["prefixes", "pre", "prxy", "", "fix", "p"])
def test_longest_prefix_is_last_prefix(small_set, word):
    found = list(small_set.prefixes(word))
    assert small_set.longest_prefix(word) == (found[-1] if found else None)


# ── Set behaviour ─────────────────────────────────────────────────────────────

def test_contains(small_set):
    assert "pre" in small_set
    assert "pr" not in small_set
    assert "prefixes" not in small_set
    assert 42 not in small_set


def test_len_and_iter_sorted():
    s = PrefixSet(["zu", "ab", "auf", "ab"])
    assert len(s) == 3
    assert list(s) == ["ab", "auf", "zu"]


def test_unsorted_input_equals_sorted_input():
    words = ["hinzu", "ab", "hin", "dazu", "da", "ab", "zu"]
    a = PrefixSet(words)
    b = PrefixSet(sorted(set(words)))
    assert list(a) == list(b)
    for word in ["hinzufügen", "dazugeben", "abfahren", "zurück"]:
        assert list(a.prefixes(word)) == list(b.prefixes(word))


def test_equivalent_states_are_merged():
    # A plain trie needs 1 + 3 + 3 = 7 states; the shared suffix 'en'
    # and the final states collapse.
    s = PrefixSet(["ben", "gen"])
    assert s.num_states == 4
    assert list(s) == ["ben", "gen"]
    assert "ben" in s and "gen" in s and "en" not in s


def test_empty_set():
    s = PrefixSet()
    assert len(s) == 0
    assert list(s.prefixes("anything")) == []
    assert s.longest_prefix("anything") is None


def test_empty_string_is_not_a_member():
    s = PrefixSet(["", "ab"])
    assert len(s) == 1
    assert "" not in s
    assert list(s) == ["ab"]
    assert list(s.prefixes("")) == []


# ── from_file ─────────────────────────────────────────────────────────────────

def test_from_file_skips_blank_lines(tmp_path):
    p = tmp_path / "prefixes.txt"
    p.write_text("ab\n\n  auf  \nzu\n", encoding="utf-8")
    s = PrefixSet.from_file(p)
    assert list(s) == ["ab", "auf", "zu"]


def test_from_file_missing(tmp_path):
    with pytest.raises(LexiconError):
        PrefixSet.from_file(tmp_path / "missing.txt")


def test_from_file_invalid_utf8(tmp_path):
    p = tmp_path / "prefixes.txt"
    p.write_bytes(b"ab\n\xff\xfe\n")
    with pytest.raises(LexiconError):
        PrefixSet.from_file(p)
