#!/usr/bin/env python3
"""
TüBa-D/Z lemma conversion CLI.

Loads the lexicon from tdz_lemma.toml by default, or override with flags:

    tdz-lemma delemmatize tuebadz.conll plain.conll
    tdz-lemma lemmatize predicted.conll tuebadz-style.conll
    tdz-lemma lemmatize --prefixes data/separable-prefixes.txt < in.conll > out.conll
    tdz-lemma lemmatize --config tdz_lemma.toml --single-prefix in.conll
"""

import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path

from tdz_lemma.errors import LemmaError

logger = logging.getLogger("tdz_lemma")


def _find_default_config() -> Path | None:
    """Look for tdz_lemma.toml in CWD."""
    candidate = Path("tdz_lemma.toml")
    if candidate.exists():
        return candidate
    return None


def _setup_logging(verbose: bool) -> None:
    # stdout may carry the corpus, so log to stderr only.
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tdz-lemma",
        description="Convert lemmas to and from the TüBa-D/Z lemma convention",
    )
    parser.add_argument(
        "mode",
        choices=["lemmatize", "delemmatize"],
        help="lemmatize: plain → TüBa-D/Z lemmas; delemmatize: TüBa-D/Z → plain lemmas",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Input CoNLL-X file (default: stdin)",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Output CoNLL-X file (default: stdout)",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect tdz_lemma.toml)",
    )
    parser.add_argument(
        "--prefixes",
        metavar="FILE",
        help="Verb prefix lexicon, one prefix per line (overrides config)",
    )
    parser.add_argument(
        "--prefix-verbs",
        metavar="FILE",
        help="Prefix verb table, 'lemma<TAB>segmented' per line (overrides config)",
    )
    parser.add_argument(
        "--single-prefix",
        action="store_true",
        help="Only attach the first separated prefix of a verb",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    return parser


def _build_engine(args, parser):
    from tdz_lemma.automaton import PrefixSet
    from tdz_lemma.engine import LemmaEngine, Mode
    from tdz_lemma.lemmatization import read_prefix_verbs

    mode = Mode(args.mode)
    if mode is Mode.DELEMMATIZE:
        return LemmaEngine.delemmatizer()

    if args.prefixes:
        # Explicit flags: build engine manually (flags override config)
        prefixes = PrefixSet.from_file(args.prefixes)
        prefix_verbs = read_prefix_verbs(args.prefix_verbs) if args.prefix_verbs else None
        return LemmaEngine.lemmatizer(
            prefixes, prefix_verbs, multiple_prefixes=not args.single_prefix,
        )

    config_path = Path(args.config) if args.config else _find_default_config()
    if config_path is None:
        parser.error(
            "lemmatize needs a verb prefix lexicon: no tdz_lemma.toml found "
            "and no --prefixes given."
        )
    return LemmaEngine.from_config(
        config_path,
        mode,
        multiple_prefixes=False if args.single_prefix else None,
        prefix_verbs_path=args.prefix_verbs,
    )


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        engine = _build_engine(args, parser)
        logger.debug(engine.summary())

        with ExitStack() as stack:
            inp = (
                stack.enter_context(open(args.input, encoding="utf-8"))
                if args.input else sys.stdin
            )
            out = (
                stack.enter_context(open(args.output, "w", encoding="utf-8"))
                if args.output else sys.stdout
            )
            engine.process_file(inp, out)
    except (LemmaError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
