import logging
from typing import Dict
from typing import FrozenSet
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Tuple

from relang.finite_automaton import EPSILON
from relang.finite_automaton import Edge
from relang.finite_automaton import FiniteAutomaton

__all__ = [
    "DFA",
]

logger = logging.getLogger(__name__)


class DFA(FiniteAutomaton):
    """Deterministic automaton with a possibly partial transition function.

    A missing ``(state, symbol)`` entry rejects the input, exactly as an
    explicit non-accepting sink would.
    """

    transitions: Dict[Tuple[int, str], int]
    state_subsets: Dict[int, FrozenSet[int]]

    def __init__(
        self,
        states: Iterable[int],
        start_state: int,
        final_states: Iterable[int],
        transitions: Dict[Tuple[int, str], int],
        alphabet: Optional[Iterable[str]] = None,
        state_subsets: Optional[Dict[int, FrozenSet[int]]] = None,
    ):
        self._init_states(states, start_state, final_states)
        self.transitions = dict(transitions)
        for (state, symbol), target in self.transitions.items():
            assert symbol is not EPSILON, "DFA cannot have epsilon transitions"
            assert state in self.states, f"transition from unknown state {state}"
            assert target in self.states, f"transition to unknown state {target}"

        used = {symbol for _, symbol in self.transitions}
        self.alphabet = frozenset(used | set(alphabet or ()))
        self.state_subsets = dict(state_subsets or {})

    def _iter_edges(self) -> Iterator[Edge]:
        for (start, symbol), end in self.transitions.items():
            yield start, symbol, end

    def _successors(self, state: int) -> Iterable[int]:
        for symbol in self.alphabet:
            target = self.transitions.get((state, symbol))
            if target is not None:
                yield target

    def delta(self, state: int, symbol: str) -> Optional[int]:
        return self.transitions.get((state, symbol))

    def accepts(self, word: Iterable[str]) -> bool:
        state = self.start_state
        for symbol in word:
            state = self.transitions.get((state, symbol))
            if state is None:
                return False
        return state in self.final_states

    def is_complete(self, alphabet: Optional[Iterable[str]] = None) -> bool:
        symbols = self.alphabet if alphabet is None else frozenset(alphabet)
        return all(
            (state, symbol) in self.transitions
            for state in self.states
            for symbol in symbols
        )

    def complete(self, alphabet: Optional[Iterable[str]] = None) -> "DFA":
        """Same language with every missing transition sent to a new sink."""
        symbols = self.alphabet | frozenset(alphabet or ())
        if self.is_complete(symbols):
            return DFA(
                self.states,
                self.start_state,
                self.final_states,
                self.transitions,
                symbols,
                self.state_subsets,
            )

        sink = max(self.states) + 1
        states = self.states | {sink}
        transitions = dict(self.transitions)
        for state in states:
            for symbol in symbols:
                transitions.setdefault((state, symbol), sink)

        logger.debug("completed DFA with sink state %d", sink)
        return DFA(
            states,
            self.start_state,
            self.final_states,
            transitions,
            symbols,
            self.state_subsets,
        )

    def remove_unreachable_states(self) -> "DFA":
        reachable = self.reachable_states()
        return DFA(
            reachable,
            self.start_state,
            self.final_states & reachable,
            {key: end for key, end in self.transitions.items() if key[0] in reachable},
            self.alphabet,
            {state: subset for state, subset in self.state_subsets.items() if state in reachable},
        )

    def to_table(self) -> str:
        """Transition table: ``#`` marks the start, ``*`` accepting states, ``N`` no move."""
        symbols = self.get_alphabet()
        lines = ["\t" + "\t".join(symbols)]
        for state in self.get_states():
            mark = ("*" if state in self.final_states else "") + (
                "#" if state == self.start_state else ""
            )
            row = [
                "N" if target is None else f"q{target}"
                for target in (self.delta(state, symbol) for symbol in symbols)
            ]
            lines.append(f"{mark}q{state}\t" + "\t".join(row))
        return "\n".join(lines) + "\n"
