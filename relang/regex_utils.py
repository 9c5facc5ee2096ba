from relang.config import DEFAULT_CONFIG
from relang.config import RegexConfig
from relang.dfa import DFA
from relang.minimization import minimize
from relang.nfa import NFA
from relang.regex_parser import parse
from relang.subset_construction import determinize
from relang.thompson import compile_to_nfa

__all__ = [
    "regex_to_nfa",
    "regex_to_dfa",
    "regex_to_min_dfa",
]


def regex_to_nfa(regex: str, config: RegexConfig = DEFAULT_CONFIG) -> NFA:
    return compile_to_nfa(parse(regex, config), config.alphabet)


def regex_to_dfa(regex: str, config: RegexConfig = DEFAULT_CONFIG) -> DFA:
    return determinize(regex_to_nfa(regex, config), config.alphabet)


def regex_to_min_dfa(regex: str, config: RegexConfig = DEFAULT_CONFIG) -> DFA:
    return minimize(regex_to_dfa(regex, config))
