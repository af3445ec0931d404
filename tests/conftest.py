"""Shared test fixtures.

Rule tests are table-driven from tests/data/*.test.  Each non-comment line
describes one token and the lemma a rule should give it:

    form lemma tag gold [<REL form lemma tag] [>REL form lemma tag]...

'<REL ...' attaches a head with relation REL, '>REL ...' a dependent.
'_' stands for an empty lemma.
"""

from dataclasses import dataclass
from pathlib import Path

import pytest

from tdz_lemma.automaton import PrefixSet
from tdz_lemma.conllx import Token
from tdz_lemma.graph import DependencyGraph

DATA_DIR = Path(__file__).parent / "data"


@dataclass
class RuleCase:
    graph: DependencyGraph
    node: int
    gold: str
    line: str


def make_token(form: str, lemma: str, tag: str) -> Token:
    return Token(id="_", form=form, lemma="" if lemma == "_" else lemma, pos=tag)


def _parse_case(line: str) -> RuleCase:
    fields = line.split()
    if len(fields) < 4 or (len(fields) - 4) % 4 != 0:
        raise ValueError(f"Malformed test case: {line!r}")

    graph = DependencyGraph()
    node = graph.add_token(make_token(*fields[:3]))
    gold = "" if fields[3] == "_" else fields[3]

    rest = fields[4:]
    for i in range(0, len(rest), 4):
        rel, form, lemma, tag = rest[i:i + 4]
        other = graph.add_token(make_token(form, lemma, tag))
        if rel.startswith("<"):
            graph.add_edge(other, node, rel[1:])
        elif rel.startswith(">"):
            graph.add_edge(node, other, rel[1:])
        else:
            raise ValueError(f"Relation must start with '<' or '>': {line!r}")

    return RuleCase(graph, node, gold, line)


def read_cases(filename: str) -> list[RuleCase]:
    cases = []
    for line in (DATA_DIR / filename).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        cases.append(_parse_case(line))
    return cases


@pytest.fixture
def run_cases():
    """Check a rule against every case of a .test file."""

    def run(filename: str, transform) -> None:
        cases = read_cases(filename)
        assert cases, f"No test cases in {filename}"
        for case in cases:
            assert transform.transform(case.graph, case.node) == case.gold, case.line

    return run


@pytest.fixture(scope="session")
def prefix_set() -> PrefixSet:
    return PrefixSet.from_file(DATA_DIR / "separable-prefixes.txt")
