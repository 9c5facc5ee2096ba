import functools
import operator
from typing import Iterable

import numpy as np
import scipy as sp

from relang.dfa import DFA
from relang.finite_automaton import FiniteAutomaton
from relang.nfa import NFA

__all__ = [
    "AdjacencyMatrixFA",
    "intersect_automata",
    "are_equivalent",
]


class AdjacencyMatrixFA:
    """Boolean decomposition of an epsilon-free automaton.

    Entry (i, j) of the matrix for a symbol is set when that symbol moves
    state i to state j. Start and final states are boolean masks over the
    same indices.
    """

    matrices: dict[str, sp.sparse.csc_matrix]
    start: np.ndarray
    final: np.ndarray

    def __init__(
        self,
        matrices: dict[str, sp.sparse.csc_matrix],
        start: np.ndarray,
        final: np.ndarray,
    ):
        self.matrices = matrices
        self.start = start
        self.final = final

    @classmethod
    def from_automaton(cls, fa: FiniteAutomaton) -> "AdjacencyMatrixFA":
        if isinstance(fa, NFA) and fa.has_epsilon_transitions():
            fa = fa.remove_epsilon_transitions()

        index = {state: idx for idx, state in enumerate(fa.get_states())}
        n = len(index)

        rows: dict[str, list[int]] = {symbol: [] for symbol in fa.alphabet}
        cols: dict[str, list[int]] = {symbol: [] for symbol in fa.alphabet}
        for source, symbol, target in fa.get_transitions():
            rows[symbol].append(index[source])
            cols[symbol].append(index[target])

        matrices = {
            symbol: sp.sparse.csc_matrix(
                (np.ones(len(rows[symbol]), dtype=bool), (rows[symbol], cols[symbol])),
                shape=(n, n),
            )
            for symbol in fa.alphabet
        }

        start = np.zeros(n, dtype=bool)
        start[index[fa.start_state]] = True
        final = np.zeros(n, dtype=bool)
        final[[index[state] for state in fa.final_states]] = True

        return cls(matrices, start, final)

    def get_states_number(self) -> int:
        return len(self.start)

    def _step(self, front: np.ndarray, matrix: sp.sparse.csc_matrix) -> np.ndarray:
        return (front @ matrix).astype(bool)

    def accepts(self, word: Iterable[str]) -> bool:
        front = self.start
        for symbol in word:
            if symbol not in self.matrices:
                return False
            front = self._step(front, self.matrices[symbol])
        return bool(np.any(front & self.final))

    def reachable(self) -> np.ndarray:
        """Mask of states reachable from the start state, by front-based BFS."""
        front = self.start
        visited = front

        while front.any():
            step = functools.reduce(
                operator.or_,
                (self._step(front, matrix) for matrix in self.matrices.values()),
                np.zeros_like(front),
            )
            front = step & ~visited
            visited = visited | front

        return visited

    def is_empty(self) -> bool:
        return not np.any(self.reachable() & self.final)


def intersect_automata(
    automaton1: AdjacencyMatrixFA,
    automaton2: AdjacencyMatrixFA,
    final_rule: np.ufunc = np.logical_and,
) -> AdjacencyMatrixFA:
    """Product automaton over the shared symbols.

    Pair (i, j) sits at index ``i * n2 + j``, the layout of ``scipy.sparse.kron``.
    A pair is final when ``final_rule`` holds for the two final flags, so the
    default gives the intersection and ``np.not_equal`` the symmetric difference.
    """
    matrices = {
        symbol: sp.sparse.kron(
            automaton1.matrices[symbol], automaton2.matrices[symbol]
        ).tocsc()
        for symbol in automaton1.matrices.keys() & automaton2.matrices.keys()
    }
    start = np.logical_and.outer(automaton1.start, automaton2.start).ravel()
    final = final_rule.outer(automaton1.final, automaton2.final).ravel()
    return AdjacencyMatrixFA(matrices, start, final)


def are_equivalent(dfa1: DFA, dfa2: DFA) -> bool:
    """Both DFAs accept the same language.

    The DFAs are completed over the union of their alphabets, then the
    symmetric-difference product is checked for emptiness.
    """
    alphabet = dfa1.alphabet | dfa2.alphabet
    difference = intersect_automata(
        AdjacencyMatrixFA.from_automaton(dfa1.complete(alphabet)),
        AdjacencyMatrixFA.from_automaton(dfa2.complete(alphabet)),
        final_rule=np.not_equal,
    )
    return difference.is_empty()
