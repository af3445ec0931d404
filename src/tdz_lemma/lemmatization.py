"""
Lemmatization rules.

These rules turn plain lemmas into TüBa-D/Z-style lemmas.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.constants import (
    ALTERNATIVE_SEPARATOR,
    LEMMA_IS_FORM_PRESERVE_CASE_TAGS,
    LEMMA_IS_FORM_TAGS,
    NAMED_ENTITY_TAG,
    NOUN_TAG,
    SEPARABLE_PARTICLE_POS,
    SEPARABLE_PREFIX_MARKER,
    is_separable_verb,
    is_verb,
)
from tdz_lemma.errors import LexiconError
from tdz_lemma.graph import DependencyGraph
from tdz_lemma.named_entity import restore_named_entity_case
from tdz_lemma.segmentation import longest_prefixes
from tdz_lemma.transform import Transform

logger = logging.getLogger(__name__)


class AddSeparatedVerbPrefix(Transform):
    """Add separated verb prefixes to verbs.

    TüBa-D/Z marks separable verb prefixes in the verb lemma, e.g.
    *ab#zeichnen*.  This rule handles prefixes that are separated from the
    verb, as in

    *Diese Änderungen zeichnen sich bereits ab .*

    where *zeichnen* is lemmatized as *ab#zeichnen*.  The particle is found
    through the dependency structure.  With multiple_prefixes, competing
    particles give alternative lemmas: *nimmt* in *nimmt eher zu als ab*
    becomes *zu#nehmen|ab#nehmen*.
    """

    def __init__(self, multiple_prefixes: bool = True):
        self.multiple_prefixes = multiple_prefixes

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        lemma = token.lemma

        if not is_separable_verb(token.tag):
            return lemma

        particles = [
            graph[edge.target].form.lower()
            for edge in graph.outgoing(node)
            if graph[edge.target].tag == SEPARABLE_PARTICLE_POS
        ]
        if not particles:
            return lemma

        if self.multiple_prefixes:
            return ALTERNATIVE_SEPARATOR.join(
                f"{p}{SEPARABLE_PREFIX_MARKER}{lemma}" for p in particles
            )
        return f"{particles[0]}{SEPARABLE_PREFIX_MARKER}{lemma}"

    def __repr__(self) -> str:
        return f"AddSeparatedVerbPrefix(multiple_prefixes={self.multiple_prefixes})"


class FormAsLemma(Transform):
    """Use the form as the lemma for tags that have no other lemma."""

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]

        if token.tag in LEMMA_IS_FORM_TAGS:
            return token.form.lower()
        if token.tag in LEMMA_IS_FORM_PRESERVE_CASE_TAGS:
            return token.form
        return token.lemma


class MarkVerbPrefix(Transform):
    """Mark separable verb prefixes in verbs.

    This rule handles prefixes that are **not** separated from the verb:

    1. *abhing/hängen* → *ab#hängen*
    2. *wiedergutgemacht/machen* → *wieder#gut#machen*
    3. *hinzubewegen/bewegen* → *hin#bewegen*

    If the lemmatizer did not strip the prefix, the lemma is looked up in
    prefix_verbs.  Otherwise the prefixes are inferred from the form (see
    tdz_lemma.segmentation).  The *zu* of a zu-infinitive is never taken
    as (part of) a prefix.
    """

    def __init__(self, prefixes: PrefixSet, prefix_verbs: Mapping[str, str] | None = None):
        self.prefixes = prefixes
        self.prefix_verbs = dict(prefix_verbs or {})

    @classmethod
    def from_files(
        cls, prefixes_path: str | Path, prefix_verbs_path: str | Path | None = None,
    ) -> MarkVerbPrefix:
        prefixes = PrefixSet.from_file(prefixes_path)
        prefix_verbs = read_prefix_verbs(prefix_verbs_path) if prefix_verbs_path else None
        return cls(prefixes, prefix_verbs)

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]
        lemma = token.lemma

        if not is_verb(token.tag):
            return lemma

        lemma_lc = lemma.lower()

        # Case 1: the lemmatizer kept the prefix.
        sep_lemma = self.prefix_verbs.get(lemma_lc)
        if sep_lemma is not None:
            return sep_lemma

        # Case 2: the prefix was stripped; infer it from the form.
        parts = longest_prefixes(self.prefixes, token.form.lower(), lemma_lc, token.tag)
        if parts:
            return SEPARABLE_PREFIX_MARKER.join(parts + [lemma_lc])

        return lemma

    def __repr__(self) -> str:
        return f"MarkVerbPrefix({self.prefixes!r}, {len(self.prefix_verbs)} prefix verbs)"


def read_prefix_verbs(path: str | Path) -> dict[str, str]:
    """Read a prefix verb table: 'lemma<TAB>segmented lemma' per line.

    Blank lines and lines starting with '#' are skipped.
    """
    path = Path(path)
    table: dict[str, str] = {}
    try:
        with path.open(encoding="utf-8") as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                fields = line.split("\t")
                if len(fields) != 2:
                    raise LexiconError(
                        f"{path}:{lineno}: expected 'lemma<TAB>segmented lemma'"
                    )
                table[fields[0].lower()] = fields[1]
    except (OSError, UnicodeDecodeError) as e:
        raise LexiconError(f"Cannot read prefix verbs from {path}: {e}") from e

    logger.info(f"Loaded {len(table)} prefix verbs from {path}")
    return table


class RestoreCase(Transform):
    """Restore the case of noun and named entity lemmas."""

    def transform(self, graph: DependencyGraph, node: int) -> str:
        token = graph[node]

        if token.tag == NOUN_TAG:
            return uppercase_first_char(token.lemma)
        if token.tag == NAMED_ENTITY_TAG:
            return restore_named_entity_case(token.form, token.lemma)
        return token.lemma


def uppercase_first_char(s: str) -> str:
    # Uppercasing one character can give several (ß → SS).
    return s[:1].upper() + s[1:]
