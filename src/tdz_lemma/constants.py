"""
Tag sets, markers and lookup tables of the TüBa-D/Z lemma convention.

Tags are STTS tags as used in TüBa-D/Z, relations are the TüBa-D/Z
dependency labels.  Everything here is immutable and built once at import.
"""

from __future__ import annotations

from types import MappingProxyType

# ── Markers ──────────────────────────────────────────────────────────────────

AUXILIARY_MARKER = "%aux"
PASSIVE_MARKER = "%passiv"
SEPARABLE_PREFIX_MARKER = "#"
ALTERNATIVE_SEPARATOR = "|"
TRUNCATION_MARKER = "%"

REFLEXIVE_PERSONAL_PRONOUN_LEMMA = "#refl"
PASSIVE_VERB_LEMMA = "werden"

# ── Relations ────────────────────────────────────────────────────────────────

AUXILIARY_RELATION = "AUX"
ADVERBIAL_RELATION = "ADV"
COORDINATION_RELATION = "KON"
CONJUNCT_RELATION = "CJ"
PUNCTUATION_RELATION = "-PUNCT-"

# ── Tags ─────────────────────────────────────────────────────────────────────

AUXILIARY_PREFIX = "VA"
MODAL_PREFIX = "VM"
VERB_PREFIX = "V"
PUNCTUATION_PREFIX = "$"

ARTICLE_TAG = "ART"
ATTRIBUTIVE_POSSESIVE_PRONOUN_TAG = "PPOSAT"
ATTR_REL_PRONOUN = "PRELAT"
FOREIGN_WORD_TAG = "FM"
NAMED_ENTITY_TAG = "NE"
NON_WORD_TAG = "XY"
NOUN_TAG = "NN"
PARTICIPLE_TAG = "VVPP"
PERSONAL_PRONOUN_TAG = "PPER"
REFLEXIVE_PERSONAL_PRONOUN_TAG = "PRF"
SEPARABLE_PARTICLE_POS = "PTKVZ"
SUBST_POSSESIVE_PRONOUN_TAG = "PPOSS"
SUBST_REL_PRONOUN = "PRELS"
TRUNCATED_TAG = "TRUNC"
ZU_INFINITIVE_VERB = "VVIZU"

# Verbs that can have a separated particle attached in the dependency tree.
SEPARABLE_VERB_TAGS = frozenset({"VVFIN", "VVIMP", "VAFIN", "VAIMP", "VMFIN"})

# Heads that make an ADV-attached auxiliary an auxiliary reading.
NON_FINITE_VERB_TAGS = frozenset(
    {"VVINF", "VAINF", "VMINF", "VVIZU", "VVPP", "VAPP", "VMPP"}
)

# The lemma of these tags is the lowercased form.
LEMMA_IS_FORM_TAGS = frozenset({"$,", "$.", "$(", "CARD", "XY"})

# The lemma of these tags is the form, case preserved.
LEMMA_IS_FORM_PRESERVE_CASE_TAGS = frozenset({FOREIGN_WORD_TAG})

# No lemma transformation is attempted for these tags.
NO_LEMMA_TAGS: frozenset[str] = frozenset()

# ── Pronoun tables ───────────────────────────────────────────────────────────

ATTR_POSS_PRONOUN_PREFIXES = ("dein", "euer", "eure", "ihr", "mein", "sein", "unser")
SUBST_POSS_PRONOUN_PREFIXES = ("dein", "ihr", "mein", "sein", "unser", "unsrig")

# Canonical pronoun → case forms.  Inverted in order, so a form listed under
# several pronouns maps to the last one (e.g. "ihr" → "sie").
PERSONAL_PRONOUN_FORMS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ich", ("ich", "meiner", "mir", "mich")),
    ("du", ("du", "deiner", "dir", "dich")),
    ("er", ("er", "seiner", "ihm", "ihn")),
    ("es", ("es", "'s")),
    ("wir", ("wir", "unser", "uns")),
    ("ihr", ("ihr", "euer", "euch")),
    ("sie", ("sie", "ihrer", "ihr", "ihnen")),
)


def _invert(table: tuple[tuple[str, tuple[str, ...]], ...]) -> MappingProxyType:
    lookup: dict[str, str] = {}
    for canonical, forms in table:
        for form in forms:
            lookup[form] = canonical
    return MappingProxyType(lookup)


PERSONAL_PRONOUN_LOOKUP = _invert(PERSONAL_PRONOUN_FORMS)


def is_verb(tag: str) -> bool:
    return tag.startswith(VERB_PREFIX)


def is_separable_verb(tag: str) -> bool:
    return tag in SEPARABLE_VERB_TAGS


def is_auxiliary_or_modal(tag: str) -> bool:
    return tag.startswith(AUXILIARY_PREFIX) or tag.startswith(MODAL_PREFIX)
