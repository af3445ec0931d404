"""
Per-sentence dependency graphs.

A DependencyGraph holds one token per node (node ids are 0-based sentence
positions) and one labeled edge per head → dependent relation.  Graphs are
single-headed: every node has at most one incoming edge, and adding a second
head raises CorpusError.  Rules rely on this when they walk up the tree
(see ancestor_path).

Usage:
    from tdz_lemma.graph import sentence_to_graph

    graph = sentence_to_graph(sentence.tokens)
    for node in graph.nodes():
        for edge in graph.outgoing(node, lambda rel: rel == "AUX"):
            print(graph[edge.target].form)
"""

from __future__ import annotations

import copy
from typing import Callable, Iterable, Iterator, NamedTuple, Protocol, Sequence

import networkx as nx

from tdz_lemma.conllx import Token
from tdz_lemma.errors import CorpusError, MissingHeadRelationError


class TokenLike(Protocol):
    """What rules need from a token: read access plus lemma assignment."""

    form: str
    lemma: str

    @property
    def tag(self) -> str: ...

    def set_lemma(self, lemma: str) -> None: ...


class Edge(NamedTuple):
    source: int  # head
    target: int  # dependent
    rel: str


RelPredicate = Callable[[str], bool]


class DependencyGraph:
    """Directed graph of tokens connected by labeled dependency edges."""

    def __init__(self):
        self._graph = nx.DiGraph()

    # ── Construction ─────────────────────────────────────────────────────

    def add_token(self, token: TokenLike) -> int:
        """Add a token as a new node and return its id."""
        node = self._graph.number_of_nodes()
        self._graph.add_node(node, token=token)
        return node

    def add_edge(self, head: int, dependent: int, rel: str) -> None:
        """Attach dependent to head with relation rel."""
        for node in (head, dependent):
            if node not in self._graph:
                raise CorpusError(f"Unknown node {node}")
        if self._graph.in_degree(dependent) > 0:
            raise CorpusError(f"Node {dependent} already has a head")
        self._graph.add_edge(head, dependent, rel=rel)

    # ── Access ───────────────────────────────────────────────────────────

    def __getitem__(self, node: int) -> TokenLike:
        return self._graph.nodes[node]["token"]

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def nodes(self) -> Iterator[int]:
        """Node ids in insertion (sentence) order."""
        return iter(self._graph.nodes)

    def tokens(self) -> list[TokenLike]:
        return [self[node] for node in self.nodes()]

    def outgoing(self, node: int, predicate: RelPredicate | None = None) -> Iterator[Edge]:
        """Edges to the dependents of node, optionally filtered by label."""
        for source, target, rel in self._graph.out_edges(node, data="rel"):
            if predicate is None or predicate(rel):
                yield Edge(source, target, rel)

    def incoming(self, node: int, predicate: RelPredicate | None = None) -> Iterator[Edge]:
        """Edges from the head(s) of node, optionally filtered by label."""
        for source, target, rel in self._graph.in_edges(node, data="rel"):
            if predicate is None or predicate(rel):
                yield Edge(source, target, rel)

    def head(self, node: int) -> Edge | None:
        """The unique incoming edge of node, None for roots."""
        return next(self.incoming(node), None)

    def ancestor_path(self, node: int, path: Sequence[str]) -> int | None:
        """Return the ancestor reached by following incoming relations.

        Each step takes the incoming edge labeled with the next relation in
        path.  Returns None when a step has no such edge.

        *Note:* assumes single-headedness.
        """
        for rel in path:
            edge = next(self.incoming(node, lambda r: r == rel), None)
            if edge is None:
                return None
            node = edge.source
        return node


def sentence_to_graph(tokens: Iterable[Token]) -> DependencyGraph:
    """Build the dependency graph of a sentence.

    Tokens need a head (1-based, 0 for root) and a head relation.  They are
    copied into the graph; harvest the processed tokens with graph.tokens().
    """
    tokens = [copy.copy(t) for t in tokens]
    graph = DependencyGraph()
    for token in tokens:
        graph.add_token(token)

    for idx, token in enumerate(tokens):
        if token.head_rel is None:
            raise MissingHeadRelationError(idx + 1, token.form)

        head = token.head
        if not head:
            continue
        if head > len(tokens) or head == idx + 1:
            raise CorpusError(
                f"Token {idx + 1} ('{token.form}') has invalid head {head} "
                f"in a sentence of {len(tokens)} tokens"
            )
        graph.add_edge(head - 1, idx, token.head_rel)

    return graph
