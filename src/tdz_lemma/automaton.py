"""
Prefix search over a fixed set of strings.

The set is compiled into a minimal deterministic acyclic automaton over the
UTF-8 bytes of its members: a trie is built from the sorted members and
equivalent states (same finality, same transitions) are merged bottom-up.

Usage:
    from tdz_lemma.automaton import PrefixSet

    prefixes = PrefixSet(["p", "pre", "pref", "prefix"])
    list(prefixes.prefixes("prefixes"))   # ['p', 'pre', 'pref', 'prefix']
    prefixes.longest_prefix("prefab")     # 'pref'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from tdz_lemma.errors import LexiconError, PrefixDecodeError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _TrieState:
    """Construction-time state; replaced by integer ids once compiled."""

    final: bool = False
    next: dict[int, _TrieState] = field(default_factory=dict)

    def signature(self) -> tuple:
        # Children are already canonical, so their identity stands for
        # their whole right language.
        return (self.final, tuple(sorted((b, id(s)) for b, s in self.next.items())))


class PrefixSet:
    """Immutable string set supporting prefix queries.

    The empty string is never a member: it would be a prefix of every word
    without being reported by prefixes().
    """

    def __init__(self, words: Iterable[str] = ()):
        members = sorted({w.encode("utf-8") for w in words if w})
        self._size = len(members)
        self._final: list[bool] = []
        self._next: list[dict[int, int]] = []
        self._compile(self._minimize(self._build_trie(members), {}))

    @classmethod
    def from_file(cls, path: str | Path) -> PrefixSet:
        """Load a prefix set from a text file with one prefix per line."""
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                words = [line.strip() for line in f]
        except (OSError, UnicodeDecodeError) as e:
            raise LexiconError(f"Cannot read verb prefixes from {path}: {e}") from e

        prefix_set = cls(w for w in words if w)
        logger.info(
            f"Loaded {len(prefix_set)} prefixes from {path} "
            f"({prefix_set.num_states} automaton states)"
        )
        return prefix_set

    # ── Queries ──────────────────────────────────────────────────────────

    def prefixes(self, word: str) -> Iterator[str]:
        """Members of the set that are prefixes of word, shortest first.

        The automaton is walked one byte at a time; the walk ends at the
        first byte without a transition.
        """
        data = word.encode("utf-8")
        state = 0
        for length, byte in enumerate(data, 1):
            state = self._next[state].get(byte)
            if state is None:
                return
            if self._final[state]:
                yield _decode(word, data[:length])

    def longest_prefix(self, word: str) -> str | None:
        """The longest member of the set that is a prefix of word."""
        longest = None
        for prefix in self.prefixes(word):
            longest = prefix
        return longest

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        state = 0
        for byte in word.encode("utf-8"):
            state = self._next[state].get(byte)
            if state is None:
                return False
        return self._final[state]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        """Members in byte order."""
        stack: list[tuple[int, bytes]] = [(0, b"")]
        while stack:
            state, data = stack.pop()
            if self._final[state]:
                yield data.decode("utf-8")
            for byte in sorted(self._next[state], reverse=True):
                stack.append((self._next[state][byte], data + bytes([byte])))

    @property
    def num_states(self) -> int:
        return len(self._final)

    def __repr__(self) -> str:
        return f"PrefixSet({self._size} members, {self.num_states} states)"

    # ── Construction ─────────────────────────────────────────────────────

    @staticmethod
    def _build_trie(members: list[bytes]) -> _TrieState:
        root = _TrieState()
        for member in members:
            state = root
            for byte in member:
                state = state.next.setdefault(byte, _TrieState())
            state.final = True
        return root

    @classmethod
    def _minimize(cls, state: _TrieState, register: dict[tuple, _TrieState]) -> _TrieState:
        """Replace state and its descendants by their registered equivalents."""
        for byte, child in state.next.items():
            state.next[byte] = cls._minimize(child, register)
        return register.setdefault(state.signature(), state)

    def _compile(self, root: _TrieState) -> None:
        """Number the states (root is 0) and store them as flat tables."""
        ids: dict[int, int] = {}
        order: list[_TrieState] = []
        stack = [root]
        while stack:
            state = stack.pop()
            if id(state) in ids:
                continue
            ids[id(state)] = len(order)
            order.append(state)
            stack.extend(state.next.values())

        for state in order:
            self._final.append(state.final)
            self._next.append({b: ids[id(s)] for b, s in state.next.items()})


def _decode(word: str, prefix_bytes: bytes) -> str:
    try:
        return prefix_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PrefixDecodeError(word, prefix_bytes) from e
