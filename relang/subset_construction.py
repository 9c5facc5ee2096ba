import logging
from collections import deque
from typing import Dict
from typing import FrozenSet
from typing import Iterable
from typing import Optional
from typing import Tuple

from relang.dfa import DFA
from relang.nfa import NFA

__all__ = [
    "determinize",
]

logger = logging.getLogger(__name__)

SubsetKey = Tuple[int, ...]


def determinize(
    nfa: NFA,
    alphabet: Optional[Iterable[str]] = None,
    complete: bool = False,
) -> DFA:
    """Subset construction over epsilon-closures.

    DFA states are numbered from 0 in breadth-first discovery order, trying
    symbols in sorted order. Each subset is keyed by its sorted tuple of NFA
    states. The empty subset is only materialized, as a sink, when
    ``complete`` is set; otherwise the transition is left undefined.
    """
    symbols = sorted(nfa.alphabet | frozenset(alphabet or ()))

    start_subset = nfa.epsilon_closure([nfa.start_state])
    subset_to_state: Dict[SubsetKey, int] = {}
    subsets: Dict[int, FrozenSet[int]] = {}
    transitions: Dict[Tuple[int, str], int] = {}

    def get_state(subset: FrozenSet[int]) -> int:
        key = tuple(sorted(subset))
        if key not in subset_to_state:
            state = len(subset_to_state)
            subset_to_state[key] = state
            subsets[state] = subset
            frontier.append(state)
        return subset_to_state[key]

    frontier = deque()
    start_state = get_state(start_subset)

    while frontier:
        state = frontier.popleft()
        subset = subsets[state]
        for symbol in symbols:
            target = nfa.step(subset, symbol)
            if not target and not complete:
                continue
            transitions[(state, symbol)] = get_state(target)

    final_states = [
        state
        for state, subset in subsets.items()
        if not subset.isdisjoint(nfa.final_states)
    ]

    dfa = DFA(subsets.keys(), start_state, final_states, transitions, symbols, subsets)
    logger.debug(
        "determinized NFA with %d states into DFA with %d states",
        nfa.get_states_number(),
        dfa.get_states_number(),
    )
    return dfa
