"""Tests for the rule pipeline (transform.py)."""

import pytest

from conftest import make_token
from tdz_lemma.graph import DependencyGraph
from tdz_lemma.transform import Transform, Transforms


class Append(Transform):
    def __init__(self, suffix: str):
        self.suffix = suffix

    def transform(self, graph, node):
        return graph[node].lemma + self.suffix


class CopyPrevious(Transform):
    """Lemma of the preceding node, to observe write-back order."""

    def transform(self, graph, node):
        if node == 0:
            return graph[node].lemma
        return graph[node - 1].lemma


def _graph(*lemmas: str, tag: str = "NN") -> DependencyGraph:
    g = DependencyGraph()
    for lemma in lemmas:
        g.add_token(make_token(lemma, lemma, tag))
    return g


def test_transform_is_abstract():
    with pytest.raises(TypeError):
        Transform()


def test_rules_apply_in_order():
    g = _graph("a", "b")
    Transforms([Append("1"), Append("2")]).transform(g)
    assert [t.lemma for t in g.tokens()] == ["a12", "b12"]


def test_rule_sees_output_of_all_previous_rules():
    # CopyPrevious on node 1 must see node 0 after Append, not before.
    g = _graph("a", "b")
    Transforms([Append("!"), CopyPrevious()]).transform(g)
    assert [t.lemma for t in g.tokens()] == ["a!", "a!"]


def test_lemma_is_written_back_before_next_node():
    g = _graph("a", "b", "c")
    Transforms([CopyPrevious()]).transform(g)
    assert [t.lemma for t in g.tokens()] == ["a", "a", "a"]


def test_skip_tags():
    g = DependencyGraph()
    g.add_token(make_token("Haus", "haus", "NN"))
    g.add_token(make_token(",", ",", "$,"))
    Transforms([Append("x")], skip_tags={"$,"}).transform(g)
    assert [t.lemma for t in g.tokens()] == ["hausx", ","]


def test_empty_pipeline():
    g = _graph("a")
    pipeline = Transforms([])
    pipeline.transform(g)
    assert len(pipeline) == 0
    assert g[0].lemma == "a"


def test_iter_and_repr():
    rules = [Append("1"), CopyPrevious()]
    pipeline = Transforms(rules)
    assert list(pipeline) == rules
    assert repr(rules[1]) == "CopyPrevious()"
