import logging
from typing import List
from typing import Optional

from relang.config import DEFAULT_CONFIG
from relang.config import RegexConfig
from relang.errors import AlphabetError
from relang.errors import RegexSyntaxError
from relang.regex_ast import Concat
from relang.regex_ast import Empty
from relang.regex_ast import Epsilon
from relang.regex_ast import Literal
from relang.regex_ast import RegexNode
from relang.regex_ast import Star
from relang.regex_ast import Union

__all__ = [
    "parse",
]

logger = logging.getLogger(__name__)


class _Group:
    """A group still being read: its finished alternatives, the concatenation
    in progress and that concatenation's last factor, which a '*' applies to.

    ``opening`` is the index of the '(' or None for the whole pattern.
    """

    def __init__(self, opening: Optional[int]):
        self.opening = opening
        self.union: Optional[RegexNode] = None
        self.bar: Optional[int] = None
        self.concat: Optional[RegexNode] = None
        self.last: Optional[RegexNode] = None

    def push(self, node: RegexNode):
        if self.last is not None:
            self.concat = self.last if self.concat is None else Concat(self.concat, self.last)
        self.last = node

    def star(self, pos: int):
        if self.last is None:
            raise RegexSyntaxError("missing operand of '*'", pos)
        self.last = Star(self.last)

    def _term(self) -> Optional[RegexNode]:
        term = self.concat
        if self.last is not None:
            term = self.last if term is None else Concat(term, self.last)
        self.concat = self.last = None
        return term

    def alternate(self, pos: int):
        term = self._term()
        if term is None:
            if self.union is None:
                raise RegexSyntaxError("missing left operand of '|'", pos)
            raise RegexSyntaxError("missing right operand of '|'", self.bar)
        self.union = term if self.union is None else Union(self.union, term)
        self.bar = pos

    def close(self) -> RegexNode:
        term = self._term()
        if term is None:
            if self.bar is not None:
                raise RegexSyntaxError("missing right operand of '|'", self.bar)
            return Epsilon()
        return term if self.union is None else Union(self.union, term)


class _Parser:
    """Single left-to-right scan over the grammar

        union  := concat ('|' concat)*
        concat := star*
        star   := atom '*'*
        atom   := symbol | escape symbol | epsilon | empty | '(' union? ')'

    Open groups live on an explicit stack, so nesting depth is bounded only
    by memory.
    """

    def __init__(self, pattern: str, config: RegexConfig):
        self.pattern = pattern
        self.config = config
        self.pos = 0

    def parse(self) -> RegexNode:
        groups: List[_Group] = [_Group(None)]

        while self.pos < len(self.pattern):
            char = self.pattern[self.pos]
            group = groups[-1]

            if char == "(":
                groups.append(_Group(self.pos))
                self.pos += 1
            elif char == ")":
                node = group.close()
                if group.opening is None:
                    raise RegexSyntaxError("unmatched ')'", self.pos)
                groups.pop()
                groups[-1].push(node)
                self.pos += 1
            elif char == "|":
                group.alternate(self.pos)
                self.pos += 1
            elif char == "*":
                group.star(self.pos)
                self.pos += 1
            else:
                group.push(self._parse_atom(char))

        node = groups[-1].close()
        if len(groups) > 1:
            # report the innermost group left open
            raise RegexSyntaxError("unmatched '('", groups[-1].opening)
        return node

    def _parse_atom(self, char: str) -> RegexNode:
        if char == self.config.escape:
            if self.pos + 1 >= len(self.pattern):
                raise RegexSyntaxError("dangling escape", self.pos)
            self.pos += 1
            return self._literal(self.pattern[self.pos])

        if char == self.config.epsilon:
            self.pos += 1
            return Epsilon()

        if char == self.config.empty:
            self.pos += 1
            return Empty()

        return self._literal(char)

    def _literal(self, symbol: str) -> Literal:
        if not self.config.allows(symbol):
            raise AlphabetError(symbol, self.pos)
        self.pos += 1
        return Literal(symbol)


def parse(pattern: str, config: RegexConfig = DEFAULT_CONFIG) -> RegexNode:
    node = _Parser(pattern, config).parse()
    logger.debug("parsed %r into %s", pattern, type(node).__name__)
    return node
