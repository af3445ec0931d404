"""
Lemma transformation rules and the pipeline that applies them.

A rule looks at one node of a sentence graph (and its neighbours) and
returns the new lemma of that node.  Rules never modify the graph; the
pipeline writes their output back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from tdz_lemma.graph import DependencyGraph


class Transform(ABC):
    """A lemma rule: (graph, node) → new lemma."""

    @abstractmethod
    def transform(self, graph: DependencyGraph, node: int) -> str:
        """Return the new lemma for node.

        Tokens outside the rule's domain get their lemma back unchanged.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Transforms:
    """An ordered list of rules.

    The order matters: later rules see the lemmas written by earlier ones.
    """

    def __init__(self, transforms: Iterable[Transform], skip_tags: Iterable[str] = ()):
        self.transforms: list[Transform] = list(transforms)
        self.skip_tags = frozenset(skip_tags)

    def transform(self, graph: DependencyGraph) -> None:
        """Transform the lemmas of a graph in place.

        Each rule is applied to every node before the next rule starts, so
        that a rule reading the lemmas of other nodes sees the output of all
        preceding rules.  Within a pass, a node's new lemma is written back
        before the next node is visited.
        """
        for t in self.transforms:
            for node in graph.nodes():
                token = graph[node]
                if token.tag in self.skip_tags:
                    continue
                token.set_lemma(t.transform(graph, node))

    def __len__(self) -> int:
        return len(self.transforms)

    def __iter__(self):
        return iter(self.transforms)

    def __repr__(self) -> str:
        return f"Transforms({self.transforms!r})"
