"""Exceptions raised by tdz-lemma.

Rules never raise; every error below aborts the run.
"""

from __future__ import annotations


class LemmaError(Exception):
    """Base class for all tdz-lemma errors."""


class CorpusError(LemmaError):
    """The corpus is structurally broken (bad line, bad head, second head)."""


class MissingHeadRelationError(CorpusError):
    """Raised when a token has no head relation label."""

    def __init__(self, index: int, form: str):
        super().__init__(
            f"Token {index} ('{form}') has no head relation"
        )
        self.index = index
        self.form = form


class LexiconError(LemmaError):
    """A verb-prefix lexicon or prefix-verb table cannot be loaded."""


class ConfigError(LemmaError):
    """The configuration file is missing or invalid."""


class PrefixDecodeError(LemmaError):
    """The prefix automaton produced a prefix that is not valid UTF-8.

    Members of a PrefixSet are always valid text, so this means the
    automaton is corrupted.
    """

    def __init__(self, word: str, prefix_bytes: bytes):
        super().__init__(
            f"Cannot decode prefix {prefix_bytes!r} of '{word}': "
            f"automaton returned an invalid prefix"
        )
        self.word = word
        self.prefix_bytes = prefix_bytes
