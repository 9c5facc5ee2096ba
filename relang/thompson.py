import logging
from dataclasses import dataclass
from typing import Iterable
from typing import List
from typing import Optional

from relang.nfa import NFA
from relang.nfa import NFABuilder
from relang.regex_ast import Concat
from relang.regex_ast import Empty
from relang.regex_ast import Epsilon
from relang.regex_ast import Literal
from relang.regex_ast import RegexNode
from relang.regex_ast import Star
from relang.regex_ast import Union

__all__ = [
    "Fragment",
    "compile_to_nfa",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fragment:
    start: int
    accept: int


def _leaf_fragment(builder: NFABuilder, node: RegexNode) -> Fragment:
    start, accept = builder.add_state(), builder.add_state()
    if isinstance(node, Epsilon):
        builder.add_epsilon_transition(start, accept)
    elif isinstance(node, Literal):
        builder.add_transition(start, node.symbol, accept)
    elif not isinstance(node, Empty):
        raise TypeError(f"unexpected regex node {node!r}")
    return Fragment(start, accept)


def _combine(builder: NFABuilder, node: RegexNode, fragments: List[Fragment]) -> Fragment:
    if isinstance(node, Star):
        inner = fragments.pop()
        start, accept = builder.add_state(), builder.add_state()
        builder.add_epsilon_transition(start, inner.start)
        builder.add_epsilon_transition(start, accept)
        builder.add_epsilon_transition(inner.accept, inner.start)
        builder.add_epsilon_transition(inner.accept, accept)
        return Fragment(start, accept)

    right = fragments.pop()
    left = fragments.pop()

    if isinstance(node, Concat):
        builder.add_epsilon_transition(left.accept, right.start)
        return Fragment(left.start, right.accept)

    start, accept = builder.add_state(), builder.add_state()
    builder.add_epsilon_transition(start, left.start)
    builder.add_epsilon_transition(start, right.start)
    builder.add_epsilon_transition(left.accept, accept)
    builder.add_epsilon_transition(right.accept, accept)
    return Fragment(start, accept)


def compile_to_nfa(node: RegexNode, alphabet: Optional[Iterable[str]] = None) -> NFA:
    """Thompson construction: one start state and one accepting state.

    The tree is walked in post-order with an explicit stack, so long
    concatenation chains do not hit the interpreter recursion limit.
    """
    builder = NFABuilder()
    fragments: List[Fragment] = []
    stack = [(node, False)]

    while stack:
        current, expanded = stack.pop()
        if isinstance(current, (Concat, Union)):
            if not expanded:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
                continue
            fragments.append(_combine(builder, current, fragments))
        elif isinstance(current, Star):
            if not expanded:
                stack.append((current, True))
                stack.append((current.inner, False))
                continue
            fragments.append(_combine(builder, current, fragments))
        else:
            fragments.append(_leaf_fragment(builder, current))

    assert len(fragments) == 1, "unbalanced fragment stack"
    result = fragments[0]

    nfa = builder.build(result.start, [result.accept], alphabet)
    logger.debug("compiled NFA with %d states", nfa.get_states_number())
    return nfa
