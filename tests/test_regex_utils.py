import pytest

from relang.config import RegexConfig
from relang.errors import AlphabetError
from relang.errors import RegexSyntaxError
from relang.minimization import minimize
from relang.regex_utils import regex_to_dfa
from relang.regex_utils import regex_to_min_dfa
from relang.regex_utils import regex_to_nfa

AB = RegexConfig(alphabet=frozenset("ab"))


def test_union_nfa():
    nfa = regex_to_nfa("a|b", AB)

    assert nfa.accepts("a")
    assert nfa.accepts("b")
    assert not nfa.accepts("")
    assert not nfa.accepts("ab")


def test_concat_dfa():
    dfa = regex_to_dfa("ab", AB)

    assert dfa.accepts("ab")
    for word in ["a", "b", ""]:
        assert not dfa.accepts(word), word


def test_star_dfa():
    dfa = regex_to_dfa("a*", AB)

    for word in ["", "a", "aa", "aaa"]:
        assert dfa.accepts(word), word
    for word in ["b", "ab"]:
        assert not dfa.accepts(word), word


def test_textbook_min_dfa():
    dfa = regex_to_min_dfa("(a|b)*ab", AB)

    assert dfa.get_states_number() == 3
    for word in ["ab", "aab", "bab"]:
        assert dfa.accepts(word), word
    for word in ["a", "ba", ""]:
        assert not dfa.accepts(word), word


def test_duplicate_branches_min_dfa():
    duplicated = minimize(regex_to_dfa("a|a", AB))
    plain = regex_to_min_dfa("a", AB)

    assert duplicated.get_states() == plain.get_states()
    assert duplicated.get_start_state() == plain.get_start_state()
    assert duplicated.get_final_states() == plain.get_final_states()
    assert duplicated.get_transitions() == plain.get_transitions()
    assert duplicated.get_alphabet() == ("a", "b")


def test_unbalanced_grouping():
    with pytest.raises(RegexSyntaxError) as exc_info:
        regex_to_min_dfa("(a|b", AB)

    assert exc_info.value.position == 0


def test_symbol_outside_alphabet():
    with pytest.raises(AlphabetError):
        regex_to_nfa("abc", AB)


def test_alphabet_reaches_dfa():
    dfa = regex_to_dfa("a", AB)

    assert dfa.get_alphabet() == ("a", "b")
    assert not dfa.accepts("b")
