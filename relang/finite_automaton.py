from typing import AbstractSet
from typing import FrozenSet
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Tuple

__all__ = [
    "EPSILON",
    "Edge",
    "FiniteAutomaton",
    "accepts",
]

EPSILON = None

Edge = Tuple[int, Optional[str], int]


def _edge_key(edge: Edge):
    start, symbol, end = edge
    return start, symbol is not EPSILON, symbol or "", end


class FiniteAutomaton:
    """Inspection shared by NFA and DFA.

    States are integers unique within one automaton; symbols are strings and
    ``EPSILON`` (``None``) labels epsilon edges. Automata are never mutated
    after construction: every conversion returns a new object.
    """

    states: FrozenSet[int]
    start_state: int
    final_states: FrozenSet[int]
    alphabet: FrozenSet[str]

    def _init_states(
        self,
        states: Iterable[int],
        start_state: int,
        final_states: Iterable[int],
    ):
        self.states = frozenset(states)
        self.start_state = start_state
        self.final_states = frozenset(final_states)

        assert self.start_state in self.states, "start state is not a state"
        assert self.final_states <= self.states, "final state is not a state"

    def _iter_edges(self) -> Iterator[Edge]:
        raise NotImplementedError

    def _successors(self, state: int) -> Iterable[int]:
        raise NotImplementedError

    def accepts(self, word: Iterable[str]) -> bool:
        raise NotImplementedError

    def get_states(self) -> Tuple[int, ...]:
        return tuple(sorted(self.states))

    def get_states_number(self) -> int:
        return len(self.states)

    def get_start_state(self) -> int:
        return self.start_state

    def get_final_states(self) -> FrozenSet[int]:
        return self.final_states

    def get_alphabet(self) -> Tuple[str, ...]:
        return tuple(sorted(self.alphabet))

    def get_transitions(self) -> Tuple[Edge, ...]:
        return tuple(sorted(self._iter_edges(), key=_edge_key))

    def reachable_states(self, sources: Optional[AbstractSet[int]] = None) -> FrozenSet[int]:
        stack = list(sources) if sources is not None else [self.start_state]
        visited = set(stack)
        while stack:
            state = stack.pop()
            for next_state in self._successors(state):
                if next_state not in visited:
                    visited.add(next_state)
                    stack.append(next_state)
        return frozenset(visited)

    def productive_states(self) -> FrozenSet[int]:
        """States from which some final state can be reached."""
        predecessors = {}
        for start, _, end in self._iter_edges():
            predecessors.setdefault(end, set()).add(start)

        stack = list(self.final_states)
        visited = set(stack)
        while stack:
            state = stack.pop()
            for prev_state in predecessors.get(state, ()):
                if prev_state not in visited:
                    visited.add(prev_state)
                    stack.append(prev_state)
        return frozenset(visited)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(states={self.get_states_number()}, "
            f"start={self.start_state}, final={sorted(self.final_states)}, "
            f"alphabet={list(self.get_alphabet())})"
        )


def accepts(automaton: FiniteAutomaton, word: Iterable[str]) -> bool:
    return automaton.accepts(word)
