"""
Segmentation of verb forms into separable prefix chains.

All decompositions of a form into (prefix)* + rest are enumerated with the
prefix set, implausible ones are filtered out, and the remaining ones are
ranked.  Two filters guard against mis-segmentations seen in the corpus:
absorbing the verb stem into a prefix, and absorbing the zu of a
zu-infinitive into a prefix.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.constants import ZU_INFINITIVE_VERB

# A separable verb with a stem shorter than 3 characters is unlikely.
MIN_STEM_LENGTH = 3


@dataclass(frozen=True, slots=True)
class PrefixCandidate:
    """Prefixes stripped from a form, and what is left of it."""

    stripped_form: str
    prefixes: tuple[str, ...] = ()


def prefix_star(prefix_set: PrefixSet, form: str) -> list[PrefixCandidate]:
    """Find all matches of (prefix)* at the start of form.

    Candidates are produced breadth-first, starting with the unstripped
    form.  Every prefix of a remaining form spawns a new candidate, so the
    result contains every prefix chain, not just the greedy one.
    """
    result = []
    queue = deque([PrefixCandidate(form)])

    while queue:
        candidate = queue.popleft()
        result.append(candidate)

        for prefix in prefix_set.prefixes(candidate.stripped_form):
            queue.append(
                PrefixCandidate(
                    candidate.stripped_form[len(prefix):],
                    candidate.prefixes + (prefix,),
                )
            )

    return result


def _is_plausible(candidate: PrefixCandidate, lemma: str, tag: str) -> bool:
    prefixes = candidate.prefixes
    if not prefixes:
        return True

    last_prefix = prefixes[-1]

    # Avoid e.g. 'dazu' as a prefix of a zu-infinitive.
    if (
        tag == ZU_INFINITIVE_VERB
        and last_prefix.endswith("zu")
        and not candidate.stripped_form.startswith("zu")
    ):
        return False

    # Do not strip parts of the lemma, and do not let a prefix end with the
    # lemma: abgefangen/fangen -> ab#fangen, not ab#gefangen#fangen.
    if any(lemma.startswith(p) for p in prefixes) or last_prefix.endswith(lemma):
        return False

    return len(candidate.stripped_form) >= MIN_STEM_LENGTH


def longest_prefixes(prefix_set: PrefixSet, form: str, lemma: str, tag: str) -> list[str]:
    """Return the best prefix chain of a (lowercased) verb form.

    The candidate with the shortest stripped form wins; on a tie the one
    with more prefixes wins, then the one found last.  Returns an empty
    list when no candidate strips anything.
    """
    best = None
    for candidate in prefix_star(prefix_set, form):
        if not _is_plausible(candidate, lemma, tag):
            continue
        if best is None or _rank(candidate) <= _rank(best):
            best = candidate

    return list(best.prefixes) if best is not None else []


def _rank(candidate: PrefixCandidate) -> tuple[int, int]:
    return (len(candidate.stripped_form), -len(candidate.prefixes))
