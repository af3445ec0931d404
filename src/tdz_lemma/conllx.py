"""
Read and write CoNLL-X files as used for TüBa-D/Z.

Usage:
    from tdz_lemma.conllx import read_sentences, write_sentences

    with open("tuebadz.conll", encoding="utf-8") as f:
        for sent in read_sentences(f):
            for tok in sent.tokens:
                print(tok.form, tok.lemma, tok.tag, tok.head, tok.head_rel)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from tdz_lemma.errors import CorpusError

EMPTY = "_"
NUM_FIELDS = 10


@dataclass(slots=True)
class Token:
    """A single token in a CoNLL-X sentence."""

    id: str  # "1", "2", ...
    form: str  # surface form as it appears in text
    lemma: str = ""  # "" when the column is "_"
    cpos: str = EMPTY  # coarse POS tag
    pos: str = EMPTY  # fine-grained STTS tag
    feats: str = EMPTY  # morphological features, passed through
    head: int | None = None  # 0 for root
    head_rel: str | None = None  # dependency relation to the head
    phead: str = EMPTY  # projective head, passed through
    phead_rel: str = EMPTY

    @property
    def tag(self) -> str:
        """The STTS tag, falling back to the coarse tag."""
        return self.pos if self.pos != EMPTY else self.cpos

    def set_lemma(self, lemma: str) -> None:
        self.lemma = lemma

    def to_line(self) -> str:
        """Format as one tab-separated CoNLL-X line."""
        fields = [
            self.id,
            self.form,
            self.lemma or EMPTY,
            self.cpos,
            self.pos,
            self.feats,
            EMPTY if self.head is None else str(self.head),
            EMPTY if self.head_rel is None else self.head_rel,
            self.phead,
            self.phead_rel,
        ]
        return "\t".join(fields)


@dataclass
class Sentence:
    """A single sentence: tokens in input order."""

    tokens: list[Token] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    @property
    def words(self) -> list[str]:
        """Just the surface forms."""
        return [t.form for t in self.tokens]

    @property
    def lemmas(self) -> list[str]:
        """Just the lemmas."""
        return [t.lemma for t in self.tokens]

    def to_conllx(self) -> str:
        """Format the sentence, terminated by a blank line."""
        return "".join(t.to_line() + "\n" for t in self.tokens) + "\n"


# ── Reading ──────────────────────────────────────────────────────────────────


def read_sentences(lines: Iterable[str]) -> Iterator[Sentence]:
    """Lazily parse sentences from an iterable of lines (e.g. an open file)."""
    current = Sentence()

    for lineno, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")

        if not line.strip():
            # blank line = sentence boundary
            if current.tokens:
                yield current
                current = Sentence()
            continue

        current.tokens.append(_parse_token(line, lineno))

    # don't lose the last sentence if file doesn't end with blank line
    if current.tokens:
        yield current


def parse_conllx(text: str) -> list[Sentence]:
    """Parse raw CoNLL-X text into Sentence objects."""
    return list(read_sentences(text.split("\n")))


def read_file(path: str | Path) -> list[Sentence]:
    """Parse a whole .conll file."""
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        return list(read_sentences(f))


# ── Writing ──────────────────────────────────────────────────────────────────


def write_sentences(out: TextIO, sentences: Iterable[Sentence]) -> int:
    """Write sentences to a text stream, returning the number written."""
    count = 0
    for sent in sentences:
        out.write(sent.to_conllx())
        count += 1
    return count


# ── Internal parsing ─────────────────────────────────────────────────────────


def _parse_head(raw: str, lineno: int) -> int | None:
    if raw == EMPTY:
        return None
    try:
        head = int(raw)
    except ValueError:
        raise CorpusError(f"Line {lineno}: invalid head '{raw}'") from None
    if head < 0:
        raise CorpusError(f"Line {lineno}: invalid head '{raw}'")
    return head


def _parse_token(line: str, lineno: int) -> Token:
    """Parse one token line: 10 tab-separated fields."""
    fields = line.split("\t")
    if len(fields) != NUM_FIELDS:
        raise CorpusError(
            f"Line {lineno}: expected {NUM_FIELDS} columns, found {len(fields)}"
        )

    return Token(
        id=fields[0],
        form=fields[1],
        lemma="" if fields[2] == EMPTY else fields[2],
        cpos=fields[3],
        pos=fields[4],
        feats=fields[5],
        head=_parse_head(fields[6], lineno),
        head_rel=None if fields[7] == EMPTY else fields[7],
        phead=fields[8],
        phead_rel=fields[9],
    )
