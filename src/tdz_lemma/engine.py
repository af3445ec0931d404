"""
Lemmatization and delemmatization of whole corpora.

Builds the rule pipeline of a run mode, with TOML-based configuration, and
streams sentences through it.

Usage:
    from tdz_lemma.engine import LemmaEngine, Mode

    engine = LemmaEngine.from_config("tdz_lemma.toml", Mode.LEMMATIZE)
    with open("in.conll", encoding="utf-8") as inp, \\
            open("out.conll", "w", encoding="utf-8") as out:
        engine.process_file(inp, out)

    # Or build manually:
    engine = LemmaEngine.lemmatizer(PrefixSet.from_file("data/prefixes.txt"))
    engine = LemmaEngine.delemmatizer()
"""

from __future__ import annotations

import logging
import tomllib
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Mapping, TextIO

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.auxpassiv import AddAuxPassivTag
from tdz_lemma.conllx import Sentence, read_sentences, write_sentences
from tdz_lemma.constants import LEMMA_IS_FORM_TAGS, NO_LEMMA_TAGS
from tdz_lemma.delemmatization import (
    RemoveAlternatives,
    RemoveAuxTag,
    RemovePassivTag,
    RemoveReflexiveTag,
    RemoveSepVerbPrefix,
    RemoveTruncMarker,
)
from tdz_lemma.errors import ConfigError, LexiconError
from tdz_lemma.graph import DependencyGraph, sentence_to_graph
from tdz_lemma.lemmatization import (
    AddSeparatedVerbPrefix,
    FormAsLemma,
    MarkVerbPrefix,
    RestoreCase,
    read_prefix_verbs,
)
from tdz_lemma.misc import (
    SimplifyArticleLemma,
    SimplifyPersonalPronounLemma,
    SimplifyPossesivePronounLemma,
)
from tdz_lemma.transform import Transforms

logger = logging.getLogger(__name__)

# Tags that no rule of the main pipeline touches.
EXEMPT_TAGS = LEMMA_IS_FORM_TAGS | NO_LEMMA_TAGS


class Mode(str, Enum):
    LEMMATIZE = "lemmatize"
    DELEMMATIZE = "delemmatize"


class LemmaEngine:
    """Runs a mode's rule pipeline over sentences.

    An optional preparation pipeline runs first over all tokens (exempt
    tags included); the main pipeline skips the exempt tags.
    """

    def __init__(
        self,
        transforms: Transforms,
        prepare: Transforms | None = None,
        mode: Mode | None = None,
    ):
        self.transforms = transforms
        self.prepare = prepare
        self.mode = mode

    # ── Construction helpers ─────────────────────────────────────────────

    @classmethod
    def lemmatizer(
        cls,
        prefixes: PrefixSet,
        prefix_verbs: Mapping[str, str] | None = None,
        multiple_prefixes: bool = True,
    ) -> LemmaEngine:
        """Plain lemmas → TüBa-D/Z lemmas."""
        transforms = Transforms(
            [
                AddSeparatedVerbPrefix(multiple_prefixes),
                MarkVerbPrefix(prefixes, prefix_verbs),
                AddAuxPassivTag(),
                SimplifyArticleLemma(),
                SimplifyPossesivePronounLemma(),
                SimplifyPersonalPronounLemma(),
                RestoreCase(),
            ],
            skip_tags=EXEMPT_TAGS,
        )
        return cls(transforms, prepare=Transforms([FormAsLemma()]), mode=Mode.LEMMATIZE)

    @classmethod
    def delemmatizer(cls) -> LemmaEngine:
        """TüBa-D/Z lemmas → plain lemmas."""
        transforms = Transforms(
            [
                RemoveAlternatives(),
                RemoveAuxTag(),
                RemovePassivTag(),
                RemoveReflexiveTag(),
                RemoveSepVerbPrefix(),
                RemoveTruncMarker(),
                SimplifyArticleLemma(),
                SimplifyPossesivePronounLemma(),
                SimplifyPersonalPronounLemma(),
            ],
            skip_tags=EXEMPT_TAGS,
        )
        return cls(transforms, mode=Mode.DELEMMATIZE)

    @classmethod
    def for_mode(
        cls,
        mode: Mode | str,
        prefixes: PrefixSet | None = None,
        prefix_verbs: Mapping[str, str] | None = None,
        multiple_prefixes: bool = True,
    ) -> LemmaEngine:
        """Build the engine of a run mode."""
        mode = Mode(mode)
        if mode is Mode.DELEMMATIZE:
            return cls.delemmatizer()
        if prefixes is None:
            raise LexiconError("Lemmatization requires a verb prefix lexicon")
        return cls.lemmatizer(prefixes, prefix_verbs, multiple_prefixes)

    @classmethod
    def from_config(
        cls,
        config_path: str | Path,
        mode: Mode | str,
        multiple_prefixes: bool | None = None,
        prefix_verbs_path: str | Path | None = None,
    ) -> LemmaEngine:
        """Build a LemmaEngine from a TOML config file.

        Paths in the config are resolved relative to the config file's
        directory.  The lexicon is only loaded for lemmatization.
        multiple_prefixes overrides [lemmatize] multiple_prefixes and
        prefix_verbs_path overrides [lexicon] prefix_verbs (it is not
        resolved against the config directory).
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config not found: {config_path}")

        try:
            with config_path.open("rb") as f:
                cfg = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config {config_path}: {e}") from e

        mode = Mode(mode)
        if mode is Mode.DELEMMATIZE:
            return cls.delemmatizer()

        base_dir = config_path.parent
        lexicon_cfg = cfg.get("lexicon", {})

        prefixes_path = lexicon_cfg.get("prefixes")
        if not prefixes_path:
            raise ConfigError(f"{config_path}: [lexicon] prefixes is not set")
        _check_path_value(prefixes_path, "[lexicon] prefixes", config_path)
        prefixes = PrefixSet.from_file(_resolve_config_path(prefixes_path, base_dir))

        prefix_verbs = None
        if prefix_verbs_path is None:
            configured = lexicon_cfg.get("prefix_verbs")
            if configured:
                _check_path_value(configured, "[lexicon] prefix_verbs", config_path)
                prefix_verbs_path = _resolve_config_path(configured, base_dir)
        if prefix_verbs_path:
            prefix_verbs = read_prefix_verbs(prefix_verbs_path)

        if multiple_prefixes is None:
            multiple_prefixes = cfg.get("lemmatize", {}).get("multiple_prefixes", True)
            if not isinstance(multiple_prefixes, bool):
                raise ConfigError(
                    f"{config_path}: [lemmatize] multiple_prefixes must be a boolean"
                )

        return cls.lemmatizer(prefixes, prefix_verbs, multiple_prefixes)

    # ── Processing ───────────────────────────────────────────────────────

    def process_graph(self, graph: DependencyGraph) -> None:
        """Rewrite the lemmas of a sentence graph in place."""
        if self.prepare is not None:
            self.prepare.transform(graph)
        self.transforms.transform(graph)

    def process_sentence(self, sentence: Sentence) -> Sentence:
        """Return a copy of sentence with rewritten lemmas."""
        graph = sentence_to_graph(sentence.tokens)
        self.process_graph(graph)
        return Sentence(graph.tokens())

    def process(self, sentences: Iterable[Sentence]) -> Iterator[Sentence]:
        for sentence in sentences:
            yield self.process_sentence(sentence)

    def process_file(self, inp: TextIO, out: TextIO) -> int:
        """Read CoNLL-X from inp and write the rewritten corpus to out."""
        count = write_sentences(out, self.process(read_sentences(inp)))
        logger.info(f"Processed {count} sentences ({self.mode_name})")
        return count

    # ── Introspection ────────────────────────────────────────────────────

    @property
    def mode_name(self) -> str:
        return self.mode.value if self.mode is not None else "custom"

    def summary(self) -> str:
        lines = [f"LemmaEngine ({self.mode_name}) with {len(self.transforms)} rule(s):"]
        if self.prepare is not None:
            for t in self.prepare:
                lines.append(f"  [prepare] {t!r}")
        for t in self.transforms:
            lines.append(f"  {t!r}")
        return "\n".join(lines)


# ── Path helpers ─────────────────────────────────────────────────────────


def _resolve_config_path(raw_path: str, base_dir: Path) -> Path:
    """Resolve a config path relative to base_dir."""
    path = Path(raw_path)
    return path if path.is_absolute() else base_dir / path


def _check_path_value(value: object, key: str, config_path: Path) -> None:
    if not isinstance(value, str):
        raise ConfigError(f"{config_path}: {key} must be a path string")
