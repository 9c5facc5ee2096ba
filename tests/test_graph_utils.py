import itertools
from pathlib import Path

import networkx as nx
import pytest

from relang.graph_utils import AutomatonMeta
from relang.graph_utils import automaton_to_graph
from relang.graph_utils import get_automaton_meta
from relang.graph_utils import graph_to_nfa
from relang.graph_utils import read_graph_from_dot
from relang.graph_utils import save_automaton_to_dot
from relang.graph_utils import to_pyformlang
from relang.minimization import minimize
from relang.regex_utils import regex_to_dfa
from relang.regex_utils import regex_to_nfa


def words(alphabet: str, max_len: int):
    for n in range(max_len + 1):
        for letters in itertools.product(alphabet, repeat=n):
            yield "".join(letters)


def test_get_automaton_meta():
    assert get_automaton_meta(regex_to_nfa("a|b")) == AutomatonMeta(
        states_n=6, transitions_n=6, labels={"a", "b", "ε"}
    )
    assert get_automaton_meta(minimize(regex_to_dfa("ab"))) == AutomatonMeta(
        states_n=3, transitions_n=2, labels={"a", "b"}
    )


def test_automaton_to_graph():
    nfa = regex_to_nfa("a*")
    graph = automaton_to_graph(nfa)

    assert set(graph.nodes) == {0, 1, 2, 3}
    assert graph.nodes[2]["is_start"]
    assert graph.nodes[3]["is_final"]
    assert not graph.nodes[0]["is_start"] and not graph.nodes[0]["is_final"]
    assert sorted(graph.edges.data("label")) == [
        (0, 1, "a"),
        (1, 0, "ε"),
        (1, 3, "ε"),
        (2, 0, "ε"),
        (2, 3, "ε"),
    ]


def test_graph_to_nfa_round_trip():
    nfa = regex_to_nfa("(a|b)*ab")
    restored = graph_to_nfa(automaton_to_graph(nfa))

    assert restored.get_states() == nfa.get_states()
    assert restored.get_start_state() == nfa.get_start_state()
    assert restored.get_final_states() == nfa.get_final_states()
    assert restored.get_transitions() == nfa.get_transitions()


def test_graph_to_nfa_without_start_node():
    graph = nx.MultiDiGraph()
    graph.add_node(0, is_start=False, is_final=True)

    with pytest.raises(ValueError):
        graph_to_nfa(graph)


@pytest.mark.parametrize(
    "pattern",
    [
        pytest.param("(a|b)*ab", id="textbook"),
        pytest.param("a*|b", id="star or literal"),
    ],
)
def test_save_automaton_to_dot(pattern: str, tmp_path: Path):
    test_path = tmp_path / "tmp_file.dot"
    nfa = regex_to_nfa(pattern)

    save_automaton_to_dot(nfa, test_path)
    restored = graph_to_nfa(read_graph_from_dot(test_path))

    assert restored.get_states_number() == nfa.get_states_number()
    for word in words("ab", 5):
        assert restored.accepts(word) == nfa.accepts(word), word


def test_saved_graph_is_isomorphic(tmp_path: Path):
    test_path = tmp_path / "tmp_file.dot"
    dfa = minimize(regex_to_dfa("(a|b)*ab"))

    save_automaton_to_dot(dfa, test_path)
    expected_graph = nx.DiGraph(automaton_to_graph(dfa))
    result_graph = nx.DiGraph(read_graph_from_dot(test_path))

    assert nx.is_isomorphic(
        expected_graph,
        result_graph,
        edge_match=lambda e1, e2: str(e1["label"]).strip('"') == str(e2["label"]).strip('"'),
    )


@pytest.mark.parametrize(
    "pattern",
    [
        pytest.param("a|b", id="union"),
        pytest.param("(a|b)*ab", id="textbook"),
        pytest.param("(aa|b)*(a|ε)", id="optional tail"),
    ],
)
def test_to_pyformlang_accepts_same_words(pattern: str):
    nfa = regex_to_nfa(pattern)
    dfa = minimize(regex_to_dfa(pattern))
    pyformlang_nfa = to_pyformlang(nfa)
    pyformlang_dfa = to_pyformlang(dfa)

    for word in words("ab", 5):
        assert pyformlang_nfa.accepts(word) == nfa.accepts(word), word
        assert pyformlang_dfa.accepts(word) == dfa.accepts(word), word


def test_to_pyformlang_minimal_state_count():
    dfa = regex_to_dfa("(a|b)*ab")
    assert len(to_pyformlang(dfa).minimize().states) == minimize(dfa).get_states_number()
