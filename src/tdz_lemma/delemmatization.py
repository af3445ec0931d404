"""
Delemmatization rules.

These rules turn TüBa-D/Z-style lemmas into plain lemmas.
"""

from __future__ import annotations

from tdz_lemma.constants import (
    ALTERNATIVE_SEPARATOR,
    AUXILIARY_MARKER,
    AUXILIARY_PREFIX,
    FOREIGN_WORD_TAG,
    NON_WORD_TAG,
    PASSIVE_MARKER,
    PUNCTUATION_PREFIX,
    REFLEXIVE_PERSONAL_PRONOUN_LEMMA,
    REFLEXIVE_PERSONAL_PRONOUN_TAG,
    SEPARABLE_PREFIX_MARKER,
    TRUNCATED_TAG,
    TRUNCATION_MARKER,
    is_auxiliary_or_modal,
    is_verb,
)
from tdz_lemma.graph import DependencyGraph
from tdz_lemma.transform import Transform


class RemoveAlternatives(Transform):
    """Remove alternative lemma analyses.

    TüBa-D/Z sometimes gives several analyses separated by '|'.  Only the
    first one is kept.
    """

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        tag = token.tag

        if tag.startswith(PUNCTUATION_PREFIX) or tag in (NON_WORD_TAG, FOREIGN_WORD_TAG):
            return token.lemma

        return token.lemma.split(ALTERNATIVE_SEPARATOR, 1)[0]


class RemoveAuxTag(Transform):
    """Remove auxiliary markers: *haben%aux* → *haben*."""

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        if not is_auxiliary_or_modal(token.tag):
            return token.lemma
        return _cut_at_last(token.lemma, AUXILIARY_MARKER)


class RemovePassivTag(Transform):
    """Remove passive markers: *werden%passiv* → *werden*."""

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        if not token.tag.startswith(AUXILIARY_PREFIX):
            return token.lemma
        return _cut_at_last(token.lemma, PASSIVE_MARKER)


class RemoveReflexiveTag(Transform):
    """Replace the *#refl* pseudo-lemma of reflexives by the lowercased form."""

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        if (
            token.tag == REFLEXIVE_PERSONAL_PRONOUN_TAG
            and token.lemma == REFLEXIVE_PERSONAL_PRONOUN_LEMMA
        ):
            return token.form.lower()
        return token.lemma


class RemoveSepVerbPrefix(Transform):
    """Remove separable prefixes from verbs: *ab#zeichnen* → *zeichnen*."""

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        if not is_verb(token.tag):
            return token.lemma
        return token.lemma.rpartition(SEPARABLE_PREFIX_MARKER)[2]


class RemoveTruncMarker(Transform):
    """Remove truncation markers.

    *Bau-* in *Bau- und Verkehrsplanungen* has the lemma *Bauplanung%n*:
    the full lemma plus a simplified tag.  The lemma is replaced by the
    form, lowercased unless the simplified tag is *n*.
    """

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        lemma = token.lemma

        if token.tag != TRUNCATED_TAG or TRUNCATION_MARKER not in lemma:
            return lemma

        simplified_tag = lemma.rpartition(TRUNCATION_MARKER)[2]
        if simplified_tag == "n":
            return token.form
        return token.form.lower()


def _cut_at_last(lemma: str, marker: str) -> str:
    idx = lemma.rfind(marker)
    return lemma[:idx] if idx != -1 else lemma
