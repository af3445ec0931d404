"""Case restoration for named entity lemmas."""

from __future__ import annotations


def restore_named_entity_case(form: str, lemma: str) -> str:
    """Copy the casing of form onto lemma.

    Characters are aligned position by position over the longest prefix
    that form and lemma share when compared case-insensitively; the rest of
    the lemma is kept as is.

    >>> restore_named_entity_case("Müllers", "müller")
    'Müller'
    >>> restore_named_entity_case("USA", "usa")
    'USA'
    """
    restored = []
    for form_char, lemma_char in zip(form, lemma):
        if form_char.lower() != lemma_char.lower():
            break
        restored.append(form_char)

    return "".join(restored) + lemma[len(restored):]
