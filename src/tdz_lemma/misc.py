"""
Rules shared by lemmatization and delemmatization.

Article and pronoun lemmas are reduced to simplified, gender- and
case-independent forms.
"""

from __future__ import annotations

from typing import Mapping

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.constants import (
    ARTICLE_TAG,
    ATTR_POSS_PRONOUN_PREFIXES,
    ATTR_REL_PRONOUN,
    ATTRIBUTIVE_POSSESIVE_PRONOUN_TAG,
    PERSONAL_PRONOUN_LOOKUP,
    PERSONAL_PRONOUN_TAG,
    SUBST_POSS_PRONOUN_PREFIXES,
    SUBST_POSSESIVE_PRONOUN_TAG,
    SUBST_REL_PRONOUN,
)
from tdz_lemma.graph import DependencyGraph
from tdz_lemma.transform import Transform

ARTICLE_LIKE_TAGS = frozenset({ARTICLE_TAG, SUBST_REL_PRONOUN, ATTR_REL_PRONOUN})


class SimplifyArticleLemma(Transform):
    """Simplify article and relative pronoun lemmas.

    Definite forms become *d*, indefinite forms *e*:

    * *den* → *d*
    * *einem* → *e*
    * *dessen* → *d*
    """

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]

        if token.tag in ARTICLE_LIKE_TAGS:
            form = token.form.lower()
            if form.startswith("d"):
                return "d"
            if form.startswith("e"):
                return "e"

        return token.lemma


class SimplifyPossesivePronounLemma(Transform):
    """Simplify possessive pronoun lemmas to their stem.

    * *deinen* → *dein*
    * *eurem* → *euer*
    """

    def __init__(
        self,
        attributive: PrefixSet | None = None,
        substantival: PrefixSet | None = None,
    ):
        if attributive is None:
            attributive = PrefixSet(ATTR_POSS_PRONOUN_PREFIXES)
        if substantival is None:
            substantival = PrefixSet(SUBST_POSS_PRONOUN_PREFIXES)
        self.attributive = attributive
        self.substantival = substantival

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]

        if token.tag == SUBST_POSSESIVE_PRONOUN_TAG:
            stems = self.substantival
        elif token.tag == ATTRIBUTIVE_POSSESIVE_PRONOUN_TAG:
            stems = self.attributive
        else:
            return token.lemma

        stem = next(stems.prefixes(token.form.lower()), None)
        if stem is None:
            return token.lemma
        if stem == "eure":
            return "euer"
        return stem


class SimplifyPersonalPronounLemma(Transform):
    """Map case forms of personal pronouns to the nominative.

    * *mir* → *ich*
    * *euch* → *ihr*
    * *ihr* → *sie*
    """

    def __init__(self, lookup: Mapping[str, str] = PERSONAL_PRONOUN_LOOKUP):
        self.lookup = lookup

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]

        if token.tag != PERSONAL_PRONOUN_TAG:
            return token.lemma

        return self.lookup.get(token.form.lower(), token.lemma)
