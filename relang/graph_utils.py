from dataclasses import dataclass
from pathlib import Path
from typing import Set
from typing import Union

from pyformlang.finite_automaton import DeterministicFiniteAutomaton
from pyformlang.finite_automaton import Epsilon
from pyformlang.finite_automaton import EpsilonNFA
from pyformlang.finite_automaton import State
from pyformlang.finite_automaton import Symbol
import networkx as nx

from relang.dfa import DFA
from relang.finite_automaton import EPSILON
from relang.finite_automaton import FiniteAutomaton
from relang.nfa import NFA

__all__ = [
    "EPSILON_LABEL",
    "AutomatonMeta",
    "get_automaton_meta",
    "automaton_to_graph",
    "graph_to_nfa",
    "save_automaton_to_dot",
    "read_graph_from_dot",
    "to_pyformlang",
]

EPSILON_LABEL = "ε"


@dataclass
class AutomatonMeta:
    states_n: int
    transitions_n: int
    labels: Set[str]


def get_automaton_meta(fa: FiniteAutomaton) -> AutomatonMeta:
    transitions = fa.get_transitions()
    return AutomatonMeta(
        states_n=fa.get_states_number(),
        transitions_n=len(transitions),
        labels=set(_label(symbol) for (_, symbol, _) in transitions),
    )


def _label(symbol) -> str:
    return EPSILON_LABEL if symbol is EPSILON else symbol


def _unquote(value) -> str:
    value = str(value)
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _is_set(value) -> bool:
    return _unquote(value) in ("True", "true", "1")


def automaton_to_graph(fa: FiniteAutomaton) -> nx.MultiDiGraph:
    graph = nx.MultiDiGraph()
    for state in fa.get_states():
        graph.add_node(
            state,
            is_start=state == fa.start_state,
            is_final=state in fa.final_states,
        )
    for start, symbol, end in fa.get_transitions():
        graph.add_edge(start, end, label=_label(symbol))
    return graph


def graph_to_nfa(graph: nx.MultiDiGraph) -> NFA:
    """Read back a graph in the ``automaton_to_graph`` layout.

    Node names are converted with ``int``, so graphs loaded from .dot files
    (where every name is a string) are accepted as well.
    """
    start_nodes = [node for node, flag in graph.nodes(data="is_start") if _is_set(flag)]
    if len(start_nodes) != 1:
        raise ValueError(f"expected exactly one start node, found {len(start_nodes)}")

    final_nodes = [int(node) for node, flag in graph.nodes(data="is_final") if _is_set(flag)]

    transitions = {}
    for v1, v2, label in graph.edges.data("label"):
        label = _unquote(label)
        symbol = EPSILON if label == EPSILON_LABEL else label
        transitions.setdefault((int(v1), symbol), set()).add(int(v2))

    return NFA(
        states=set(int(node) for node in graph.nodes),
        start_state=int(start_nodes[0]),
        final_states=final_nodes,
        transitions=transitions,
    )


def save_automaton_to_dot(fa: FiniteAutomaton, path: Path):
    return nx.drawing.nx_pydot.write_dot(automaton_to_graph(fa), path)


def read_graph_from_dot(path: Path) -> nx.MultiDiGraph:
    return nx.drawing.nx_pydot.read_dot(path)


def to_pyformlang(fa: FiniteAutomaton) -> Union[EpsilonNFA, DeterministicFiniteAutomaton]:
    result = DeterministicFiniteAutomaton() if isinstance(fa, DFA) else EpsilonNFA()

    result.add_start_state(State(fa.start_state))
    for state in fa.final_states:
        result.add_final_state(State(state))

    for start, symbol, end in fa.get_transitions():
        label = Epsilon() if symbol is EPSILON else Symbol(symbol)
        result.add_transition(State(start), label, State(end))

    return result
