"""tdz-lemma: conversion between plain lemmas and TüBa-D/Z-style lemmas."""

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.conllx import Sentence, Token, read_sentences, write_sentences
from tdz_lemma.engine import LemmaEngine, Mode
from tdz_lemma.errors import (
    ConfigError,
    CorpusError,
    LemmaError,
    LexiconError,
    MissingHeadRelationError,
    PrefixDecodeError,
)
from tdz_lemma.graph import DependencyGraph, sentence_to_graph
from tdz_lemma.segmentation import longest_prefixes
from tdz_lemma.transform import Transform, Transforms

__all__ = [
    "PrefixSet", "longest_prefixes",
    "Sentence", "Token", "read_sentences", "write_sentences",
    "DependencyGraph", "sentence_to_graph",
    "Transform", "Transforms",
    "LemmaEngine", "Mode",
    "LemmaError", "CorpusError", "MissingHeadRelationError",
    "LexiconError", "ConfigError", "PrefixDecodeError",
]
