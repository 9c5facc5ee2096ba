import itertools
import logging
from typing import Dict
from typing import FrozenSet
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Set
from typing import Tuple

from relang.finite_automaton import EPSILON
from relang.finite_automaton import Edge
from relang.finite_automaton import FiniteAutomaton

__all__ = [
    "NFA",
    "NFABuilder",
]

logger = logging.getLogger(__name__)


class NFA(FiniteAutomaton):
    transitions: Dict[Tuple[int, Optional[str]], FrozenSet[int]]

    def __init__(
        self,
        states: Iterable[int],
        start_state: int,
        final_states: Iterable[int],
        transitions: Dict[Tuple[int, Optional[str]], Iterable[int]],
        alphabet: Optional[Iterable[str]] = None,
    ):
        self._init_states(states, start_state, final_states)
        self.transitions = {}
        for (state, symbol), targets in transitions.items():
            targets = frozenset(targets)
            if not targets:
                continue
            assert state in self.states, f"transition from unknown state {state}"
            assert targets <= self.states, f"transition from {state} to unknown state"
            self.transitions[(state, symbol)] = targets

        used = {symbol for _, symbol in self.transitions if symbol is not EPSILON}
        self.alphabet = frozenset(used | set(alphabet or ()))

    def _iter_edges(self) -> Iterator[Edge]:
        for (start, symbol), targets in self.transitions.items():
            for end in targets:
                yield start, symbol, end

    def _successors(self, state: int) -> Iterable[int]:
        for symbol in itertools.chain((EPSILON,), self.alphabet):
            yield from self.transitions.get((state, symbol), ())

    def has_epsilon_transitions(self) -> bool:
        return any(symbol is EPSILON for _, symbol in self.transitions)

    def epsilon_closure(self, states: Iterable[int]) -> FrozenSet[int]:
        stack = list(states)
        closure = set(stack)
        while stack:
            state = stack.pop()
            for next_state in self.transitions.get((state, EPSILON), ()):
                if next_state not in closure:
                    closure.add(next_state)
                    stack.append(next_state)
        return frozenset(closure)

    def move(self, states: Iterable[int], symbol: str) -> FrozenSet[int]:
        """States reachable from ``states`` by exactly one ``symbol`` edge."""
        targets: Set[int] = set()
        for state in states:
            targets |= self.transitions.get((state, symbol), frozenset())
        return frozenset(targets)

    def step(self, states: Iterable[int], symbol: str) -> FrozenSet[int]:
        return self.epsilon_closure(self.move(states, symbol))

    def accepts(self, word: Iterable[str]) -> bool:
        current = self.epsilon_closure([self.start_state])
        for symbol in word:
            current = self.step(current, symbol)
            if not current:
                return False
        return not current.isdisjoint(self.final_states)

    def remove_epsilon_transitions(self) -> "NFA":
        """Equivalent NFA without epsilon edges.

        A state gets an ``a`` edge to every state of
        closure(move(closure(q), a)) and becomes final when its closure holds a
        final state. States no longer reachable from the start are dropped.
        """
        closures = {state: self.epsilon_closure([state]) for state in self.states}

        transitions = {}
        for state, closure in closures.items():
            for symbol in self.alphabet:
                targets = self.step(closure, symbol)
                if targets:
                    transitions[(state, symbol)] = targets

        final_states = {
            state
            for state, closure in closures.items()
            if not closure.isdisjoint(self.final_states)
        }

        full = NFA(self.states, self.start_state, final_states, transitions, self.alphabet)
        reachable = full.reachable_states()
        result = NFA(
            reachable,
            self.start_state,
            final_states & reachable,
            {key: targets for key, targets in transitions.items() if key[0] in reachable},
            self.alphabet,
        )
        logger.debug(
            "removed epsilon transitions: %d -> %d states",
            self.get_states_number(),
            result.get_states_number(),
        )
        return result


class NFABuilder:
    """Accumulates states and edges; state ids come from one counter."""

    def __init__(self):
        self._ids = itertools.count()
        self._states: list[int] = []
        self._transitions: Dict[Tuple[int, Optional[str]], Set[int]] = {}

    def add_state(self) -> int:
        state = next(self._ids)
        self._states.append(state)
        return state

    def add_transition(self, start: int, symbol: Optional[str], end: int):
        self._transitions.setdefault((start, symbol), set()).add(end)

    def add_epsilon_transition(self, start: int, end: int):
        self.add_transition(start, EPSILON, end)

    def build(
        self,
        start_state: int,
        final_states: Iterable[int],
        alphabet: Optional[Iterable[str]] = None,
    ) -> NFA:
        return NFA(self._states, start_state, final_states, self._transitions, alphabet)
