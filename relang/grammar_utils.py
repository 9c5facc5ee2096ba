from pyformlang.cfg import CFG
from pyformlang.cfg import Production
from pyformlang.cfg import Terminal
from pyformlang.cfg import Variable

from relang.dfa import DFA

__all__ = [
    "START_VARIABLE",
    "dfa_to_regular_grammar",
    "grammar_to_text",
]

START_VARIABLE = "S"


def _state_variable(state: int) -> Variable:
    return Variable(f"q{state}")


def dfa_to_regular_grammar(dfa: DFA) -> CFG:
    """Right-linear grammar for the language of ``dfa``.

    PLAN:
        1. S -> q_start, and S -> epsilon if the start state accepts
        2. q -> a q' for every move into a state that can still accept
        3. q -> a for every move into an accepting state
    """
    start = Variable(START_VARIABLE)
    useful = dfa.reachable_states() & dfa.productive_states()

    productions = set()
    if dfa.start_state in useful:
        productions.add(Production(start, [_state_variable(dfa.start_state)]))
    if dfa.start_state in dfa.final_states:
        productions.add(Production(start, []))

    for (state, symbol), target in dfa.transitions.items():
        if state not in useful or target not in useful:
            continue
        terminal = Terminal(symbol)
        productions.add(
            Production(_state_variable(state), [terminal, _state_variable(target)])
        )
        if target in dfa.final_states:
            productions.add(Production(_state_variable(state), [terminal]))

    variables = {start} | {_state_variable(state) for state in useful}
    terminals = {Terminal(symbol) for symbol in dfa.alphabet}
    return CFG(
        variables=variables,
        terminals=terminals,
        start_symbol=start,
        productions=productions,
    )


def _variable_order(variable: Variable):
    name = str(variable.value)
    if name == START_VARIABLE:
        return -1, name
    return int(name[1:]), name


def grammar_to_text(cfg: CFG) -> str:
    bodies = {}
    for production in cfg.productions:
        body = " ".join(str(obj.value) for obj in production.body) or "ε"
        bodies.setdefault(production.head, []).append(body)

    return "".join(
        f"{head.value} -> {' | '.join(sorted(bodies[head]))}\n"
        for head in sorted(bodies, key=_variable_order)
    )
