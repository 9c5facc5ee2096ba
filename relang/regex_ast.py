from dataclasses import dataclass
from typing import Union as TypingUnion

__all__ = [
    "Empty",
    "Epsilon",
    "Literal",
    "Concat",
    "Union",
    "Star",
    "RegexNode",
    "to_pattern",
]


@dataclass(frozen=True)
class Empty:
    """Matches nothing."""


@dataclass(frozen=True)
class Epsilon:
    """Matches only the empty string."""


@dataclass(frozen=True)
class Literal:
    symbol: str


@dataclass(frozen=True)
class Concat:
    left: "RegexNode"
    right: "RegexNode"


@dataclass(frozen=True)
class Union:
    left: "RegexNode"
    right: "RegexNode"


@dataclass(frozen=True)
class Star:
    inner: "RegexNode"


RegexNode = TypingUnion[Empty, Epsilon, Literal, Concat, Union, Star]

_PRECEDENCE = {Union: 0, Concat: 1, Star: 2}


def _wrap(node: RegexNode, text: str, min_precedence: int) -> str:
    if _PRECEDENCE.get(type(node), 3) < min_precedence:
        return f"({text})"
    return text


def _leaf_pattern(node: RegexNode, epsilon: str, empty: str) -> str:
    if isinstance(node, Empty):
        return empty
    if isinstance(node, Epsilon):
        return epsilon
    if isinstance(node, Literal):
        if node.symbol in "|*()\\" or node.symbol in (epsilon, empty):
            return "\\" + node.symbol
        return node.symbol
    raise TypeError(f"unexpected regex node {node!r}")


def to_pattern(node: RegexNode, epsilon: str = "ε", empty: str = "∅") -> str:
    """Render a tree back to pattern syntax with the fewest parentheses.

    Operator characters inside literals are escaped with a backslash, so the
    result parses back to an equal tree under the default configuration.
    The tree is walked in post-order with an explicit stack.
    """
    texts = []
    stack = [(node, False)]

    while stack:
        current, expanded = stack.pop()
        if isinstance(current, Star):
            if not expanded:
                stack.append((current, True))
                stack.append((current.inner, False))
                continue
            texts.append(_wrap(current.inner, texts.pop(), 2) + "*")
        elif isinstance(current, (Concat, Union)):
            if not expanded:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
                continue
            right = texts.pop()
            left = texts.pop()
            if isinstance(current, Concat):
                # the parser builds left-nested chains, so a right Concat needs parentheses
                texts.append(_wrap(current.left, left, 1) + _wrap(current.right, right, 2))
            else:
                texts.append(_wrap(current.left, left, 0) + "|" + _wrap(current.right, right, 1))
        else:
            texts.append(_leaf_pattern(current, epsilon, empty))

    return texts.pop()
