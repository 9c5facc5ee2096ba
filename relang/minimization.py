import itertools
import logging
from typing import Dict
from typing import FrozenSet
from typing import List
from typing import Set

from relang.dfa import DFA

__all__ = [
    "trim",
    "equivalence_classes",
    "minimize",
    "distinguishable_pairs",
]

logger = logging.getLogger(__name__)


def trim(dfa: DFA) -> DFA:
    """Drop states that are unreachable or cannot reach a final state.

    The start state is always kept, so a DFA for the empty language trims
    down to a single non-accepting state.
    """
    keep = dfa.reachable_states() & (dfa.productive_states() | {dfa.start_state})
    return DFA(
        keep,
        dfa.start_state,
        dfa.final_states & keep,
        {
            (state, symbol): target
            for (state, symbol), target in dfa.transitions.items()
            if state in keep and target in keep
        },
        dfa.alphabet,
    )


def _refine(dfa: DFA) -> List[FrozenSet[int]]:
    symbols = dfa.get_alphabet()
    states = dfa.get_states()
    class_of: Dict[int, int] = {state: int(state in dfa.final_states) for state in states}
    classes_n = len(set(class_of.values()))

    while True:
        groups: Dict[tuple, List[int]] = {}
        for state in states:
            signature = (class_of[state],) + tuple(
                class_of.get(dfa.delta(state, symbol)) for symbol in symbols
            )
            groups.setdefault(signature, []).append(state)

        class_of = {
            state: idx for idx, members in enumerate(groups.values()) for state in members
        }
        if len(groups) == classes_n:
            # states are visited in sorted order, so classes are ordered by smallest member
            return [frozenset(members) for members in groups.values()]
        classes_n = len(groups)


def equivalence_classes(dfa: DFA) -> List[FrozenSet[int]]:
    """Classes of indistinguishable states among the reachable, productive ones."""
    return _refine(trim(dfa))


def minimize(dfa: DFA, complete: bool = False) -> DFA:
    trimmed = trim(dfa)
    classes = _refine(trimmed)
    class_index = {state: idx for idx, members in enumerate(classes) for state in members}

    transitions = {}
    final_states = set()
    for idx, members in enumerate(classes):
        representative = min(members)
        if representative in trimmed.final_states:
            final_states.add(idx)
        for symbol in trimmed.alphabet:
            target = trimmed.delta(representative, symbol)
            if target is not None:
                transitions[(idx, symbol)] = class_index[target]

    result = DFA(
        range(len(classes)),
        class_index[trimmed.start_state],
        final_states,
        transitions,
        dfa.alphabet,
    )
    if complete and not final_states:
        # the lone start class is already dead, it becomes the sink itself
        result = DFA([0], 0, [], {(0, symbol): 0 for symbol in dfa.alphabet}, dfa.alphabet)
    elif complete:
        result = result.complete()

    logger.debug(
        "minimized DFA from %d to %d states",
        dfa.get_states_number(),
        result.get_states_number(),
    )
    return result


def distinguishable_pairs(dfa: DFA) -> Set[FrozenSet[int]]:
    """Table-filling: mark every pair of states told apart by some word.

    A missing transition behaves like a move into a non-accepting sink.
    """
    completed = dfa.complete()
    symbols = completed.get_alphabet()
    pairs = list(itertools.combinations(completed.get_states(), 2))

    marked = {
        frozenset(pair)
        for pair in pairs
        if (pair[0] in completed.final_states) != (pair[1] in completed.final_states)
    }

    changed = True
    while changed:
        changed = False
        for first, second in pairs:
            pair = frozenset((first, second))
            if pair in marked:
                continue
            for symbol in symbols:
                targets = frozenset(
                    (completed.delta(first, symbol), completed.delta(second, symbol))
                )
                if targets in marked:
                    marked.add(pair)
                    changed = True
                    break

    return {pair for pair in marked if pair <= dfa.states}
