"""
Auxiliary and passive readings of verbs.

TüBa-D/Z marks auxiliary readings of verbs with *%aux* (*haben%aux*) and
passive readings of *werden* with *%passiv*.  The reading follows from the
dependency structure: an auxiliary or modal heads its main verb with an AUX
relation.
"""

from __future__ import annotations

from enum import Enum

from tdz_lemma.constants import (
    ADVERBIAL_RELATION,
    AUXILIARY_MARKER,
    AUXILIARY_RELATION,
    CONJUNCT_RELATION,
    COORDINATION_RELATION,
    NON_FINITE_VERB_TAGS,
    PARTICIPLE_TAG,
    PASSIVE_MARKER,
    PASSIVE_VERB_LEMMA,
    PUNCTUATION_RELATION,
    is_auxiliary_or_modal,
)
from tdz_lemma.graph import DependencyGraph
from tdz_lemma.transform import Transform

# Walk from the second conjunct of a coordination to the first one.
CONJUNCTION_PATH = (CONJUNCT_RELATION, COORDINATION_RELATION)


class VerbLemmaTag(Enum):
    AUXILIARY = AUXILIARY_MARKER
    PASSIVE = PASSIVE_MARKER
    NONE = ""


def strip_verb_marker(lemma: str) -> str:
    """Remove a trailing %aux or %passiv marker."""
    for marker in (AUXILIARY_MARKER, PASSIVE_MARKER):
        if lemma.endswith(marker):
            return lemma[: -len(marker)]
    return lemma


def verb_lemma_tag(graph: DependencyGraph, node: int) -> VerbLemmaTag:
    """The reading of node given its AUX dependent, if it has one."""
    edge = next(graph.outgoing(node, lambda rel: rel == AUXILIARY_RELATION), None)
    if edge is None:
        return VerbLemmaTag.NONE

    # The lemma may already carry a marker when node was visited earlier in
    # the same pass.
    lemma = strip_verb_marker(graph[node].lemma)
    if lemma == PASSIVE_VERB_LEMMA and graph[edge.target].tag == PARTICIPLE_TAG:
        return VerbLemmaTag.PASSIVE
    return VerbLemmaTag.AUXILIARY


def _has_dependents(graph: DependencyGraph, node: int) -> bool:
    return next(graph.outgoing(node, lambda rel: rel != PUNCTUATION_RELATION), None) is not None


def indirect_verb_lemma_tag(graph: DependencyGraph, node: int) -> VerbLemmaTag:
    """The reading of a verb without dependents that is a conjunct.

    In *hat und wird gefragt*, *wird* has no dependents of its own; it
    shares the AUX dependent of the first conjunct.
    """
    if _has_dependents(graph, node):
        return VerbLemmaTag.NONE

    ancestor = graph.ancestor_path(node, CONJUNCTION_PATH)
    if ancestor is None:
        return VerbLemmaTag.NONE
    return verb_lemma_tag(graph, ancestor)


class AddAuxPassivTag(Transform):
    """Add auxiliary and passive markers to auxiliaries and modals.

    * *hat gesagt*: *haben* → *haben%aux*
    * *wird gesagt*: *werden* → *werden%passiv*
    * *wird sagen*: *werden* → *werden%aux*
    """

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        lemma = token.lemma

        if not is_auxiliary_or_modal(token.tag):
            return lemma

        verdict = verb_lemma_tag(graph, node)
        if verdict is VerbLemmaTag.NONE:
            verdict = indirect_verb_lemma_tag(graph, node)
        if verdict is not VerbLemmaTag.NONE:
            return lemma + verdict.value

        for edge in graph.incoming(node):
            if edge.rel == ADVERBIAL_RELATION and graph[edge.source].tag in NON_FINITE_VERB_TAGS:
                return lemma + AUXILIARY_MARKER

        return lemma
