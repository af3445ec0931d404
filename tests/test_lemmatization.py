"""Tests for the lemmatization rules (lemmatization.py)."""

import pytest

from conftest import make_token, read_cases
from tdz_lemma.delemmatization import RemoveSepVerbPrefix
from tdz_lemma.errors import LexiconError
from tdz_lemma.graph import DependencyGraph
from tdz_lemma.lemmatization import (
    AddSeparatedVerbPrefix,
    FormAsLemma,
    MarkVerbPrefix,
    RestoreCase,
    read_prefix_verbs,
    uppercase_first_char,
)

PREFIX_VERBS = {"abbestellen": "ab#bestellen"}


# ── Table-driven rule tests ───────────────────────────────────────────────────

def test_add_separated_verb_prefix(run_cases):
    run_cases("add-separated-verb-prefix.test", AddSeparatedVerbPrefix())


def test_form_as_lemma(run_cases):
    run_cases("form-as-lemma.test", FormAsLemma())


def test_mark_verb_prefix(run_cases, prefix_set):
    run_cases("mark-verb-prefix.test", MarkVerbPrefix(prefix_set, PREFIX_VERBS))


def test_restore_case(run_cases):
    run_cases("restore-case.test", RestoreCase())


# ── AddSeparatedVerbPrefix ────────────────────────────────────────────────────

def _nimmt_zu_ab() -> DependencyGraph:
    g = DependencyGraph()
    verb = g.add_token(make_token("nimmt", "nehmen", "VVFIN"))
    g.add_edge(verb, g.add_token(make_token("zu", "zu", "PTKVZ")), "AVZ")
    g.add_edge(verb, g.add_token(make_token("ab", "ab", "PTKVZ")), "KON")
    return g


def test_multiple_particles_give_alternatives():
    assert AddSeparatedVerbPrefix().transform(_nimmt_zu_ab(), 0) == "zu#nehmen|ab#nehmen"


def test_single_prefix_mode_uses_first_particle():
    rule = AddSeparatedVerbPrefix(multiple_prefixes=False)
    assert rule.transform(_nimmt_zu_ab(), 0) == "zu#nehmen"


def test_separated_prefix_is_removed_again():
    g = DependencyGraph()
    verb = g.add_token(make_token("zeichnen", "zeichnen", "VVFIN"))
    g.add_edge(verb, g.add_token(make_token("ab", "ab", "PTKVZ")), "AVZ")

    g[verb].set_lemma(AddSeparatedVerbPrefix(multiple_prefixes=False).transform(g, verb))
    assert g[verb].lemma == "ab#zeichnen"
    assert RemoveSepVerbPrefix().transform(g, verb) == "zeichnen"


def test_particle_must_be_dependent():
    g = DependencyGraph()
    particle = g.add_token(make_token("ab", "ab", "PTKVZ"))
    verb = g.add_token(make_token("zeichnen", "zeichnen", "VVFIN"))
    g.add_edge(particle, verb, "AVZ")
    assert AddSeparatedVerbPrefix().transform(g, verb) == "zeichnen"


# ── MarkVerbPrefix ────────────────────────────────────────────────────────────

def test_mark_verb_prefix_output_contains_no_zu_prefix(prefix_set):
    rule = MarkVerbPrefix(prefix_set)
    for case in read_cases("mark-verb-prefix.test"):
        token = case.graph[case.node]
        if token.tag != "VVIZU":
            continue
        lemma = rule.transform(case.graph, case.node)
        assert not any(p.endswith("zu") for p in lemma.split("#")[:-1]), case.line


def test_prefix_verb_lookup_is_case_insensitive(prefix_set):
    g = DependencyGraph()
    g.add_token(make_token("Abbestellt", "Abbestellen", "VVFIN"))
    assert MarkVerbPrefix(prefix_set, PREFIX_VERBS).transform(g, 0) == "ab#bestellen"


def test_mark_verb_prefix_from_files(tmp_path):
    prefixes = tmp_path / "prefixes.txt"
    prefixes.write_text("ab\nan\n", encoding="utf-8")
    verbs = tmp_path / "verbs.tsv"
    verbs.write_text("anbieten\tan#bieten\n", encoding="utf-8")

    rule = MarkVerbPrefix.from_files(prefixes, verbs)
    assert len(rule.prefixes) == 2
    assert rule.prefix_verbs == {"anbieten": "an#bieten"}


# ── read_prefix_verbs ─────────────────────────────────────────────────────────

def test_read_prefix_verbs_skips_comments(tmp_path):
    p = tmp_path / "verbs.tsv"
    p.write_text("# lemma\tsegmented\n\nAbbestellen\tab#bestellen\n", encoding="utf-8")
    assert read_prefix_verbs(p) == {"abbestellen": "ab#bestellen"}


def test_read_prefix_verbs_bad_line(tmp_path):
    p = tmp_path / "verbs.tsv"
    p.write_text("abbestellen ab#bestellen\n", encoding="utf-8")
    with pytest.raises(LexiconError, match=":1:"):
        read_prefix_verbs(p)


def test_read_prefix_verbs_missing(tmp_path):
    with pytest.raises(LexiconError):
        read_prefix_verbs(tmp_path / "missing.tsv")


# ── uppercase_first_char ──────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "s, expected",
    [("test", "Test"), ("", ""), ("Test", "Test"), ("ärger", "Ärger"), ("ß", "SS")],
)
def test_uppercase_first_char(s, expected):
    assert uppercase_first_char(s) == expected
