import itertools
import re

import pytest

from relang.regex_ast import Concat
from relang.regex_ast import Empty
from relang.regex_ast import Epsilon
from relang.regex_ast import Literal
from relang.regex_ast import Star
from relang.regex_ast import Union
from relang.regex_parser import parse
from relang.thompson import compile_to_nfa


@pytest.mark.parametrize(
    "node,expected_transitions,start,final",
    [
        pytest.param(Empty(), (), 0, 1, id="empty"),
        pytest.param(Epsilon(), ((0, None, 1),), 0, 1, id="epsilon"),
        pytest.param(Literal("a"), ((0, "a", 1),), 0, 1, id="literal"),
        pytest.param(
            Concat(Literal("a"), Literal("b")),
            ((0, "a", 1), (1, None, 2), (2, "b", 3)),
            0,
            3,
            id="concat",
        ),
        pytest.param(
            Union(Literal("a"), Literal("b")),
            ((0, "a", 1), (1, None, 5), (2, "b", 3), (3, None, 5), (4, None, 0), (4, None, 2)),
            4,
            5,
            id="union",
        ),
        pytest.param(
            Star(Literal("a")),
            ((0, "a", 1), (1, None, 0), (1, None, 3), (2, None, 0), (2, None, 3)),
            2,
            3,
            id="star",
        ),
    ],
)
def test_compile_to_nfa_fragments(node, expected_transitions, start: int, final: int):
    nfa = compile_to_nfa(node)

    assert nfa.get_transitions() == expected_transitions
    assert nfa.get_start_state() == start
    assert nfa.get_final_states() == {final}


@pytest.mark.parametrize(
    "pattern,operators_n",
    [
        pytest.param("a", 0, id="literal"),
        pytest.param("(a|b)*ab", 2, id="textbook"),
        pytest.param("((a|ε)*|b*)*∅", 5, id="nested"),
    ],
)
def test_compile_to_nfa_allocates_fresh_states(pattern: str, operators_n: int):
    node = parse(pattern)
    nfa = compile_to_nfa(node)

    leaves_n = sum(ch not in "|*()" for ch in pattern)
    # every leaf, union and star introduces two states, concatenation none
    assert nfa.get_states_number() == 2 * (leaves_n + operators_n)
    assert nfa.get_states() == tuple(range(nfa.get_states_number()))
    assert len(nfa.get_final_states()) == 1


def test_compile_to_nfa_declares_alphabet():
    nfa = compile_to_nfa(parse("a"), alphabet="ab")
    assert nfa.get_alphabet() == ("a", "b")


@pytest.mark.parametrize(
    "pattern,accepted,rejected",
    [
        pytest.param("a|b", ["a", "b"], ["", "ab", "ba", "aa"], id="union"),
        pytest.param("ab", ["ab"], ["", "a", "b", "ba", "abb"], id="concat"),
        pytest.param("a*", ["", "a", "aa", "aaa"], ["b", "ab", "ba"], id="star"),
        pytest.param("(a|b)*ab", ["ab", "aab", "bab", "abab"], ["", "a", "ba", "abb"], id="textbook"),
        pytest.param("ε", [""], ["a"], id="epsilon"),
        pytest.param("∅", [], ["", "a"], id="empty language"),
        pytest.param("∅*", [""], ["a"], id="star of empty language"),
        pytest.param("a∅|b", ["b"], ["a", ""], id="empty absorbs concat"),
        pytest.param("(a*b*)*", ["", "a", "ba", "abba"], ["c"], id="nested stars"),
        pytest.param("(ε|a)(ε|b)", ["", "a", "b", "ab"], ["ba", "aa"], id="optional parts"),
    ],
)
def test_compiled_nfa_accepts_language(pattern: str, accepted: list, rejected: list):
    nfa = compile_to_nfa(parse(pattern))

    for word in accepted:
        assert nfa.accepts(word), word
    for word in rejected:
        assert not nfa.accepts(word), word


def test_compiled_nfa_matches_python_re_on_short_words():
    pattern = "(a|bb)*a(ab|b)*"
    nfa = compile_to_nfa(parse(pattern))
    compiled = re.compile(pattern)

    for n in range(7):
        for letters in itertools.product("ab", repeat=n):
            word = "".join(letters)
            assert nfa.accepts(word) == bool(compiled.fullmatch(word)), word


def test_compile_to_nfa_long_concatenation():
    nfa = compile_to_nfa(parse("ab" * 1500))

    assert nfa.accepts("ab" * 1500)
    assert not nfa.accepts("ab" * 1499)
