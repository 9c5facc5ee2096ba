import argparse
import logging
import sys
from pathlib import Path

from relang.config import DEFAULT_CONFIG
from relang.config import load_config
from relang.errors import RegexSyntaxError
from relang.grammar_utils import dfa_to_regular_grammar
from relang.grammar_utils import grammar_to_text
from relang.graph_utils import save_automaton_to_dot
from relang.minimization import minimize
from relang.regex_parser import parse
from relang.subset_construction import determinize
from relang.thompson import compile_to_nfa

__all__ = [
    "main",
]

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relang",
        description="Convert a regular expression into a minimal DFA and a regular grammar.",
    )
    parser.add_argument("pattern", help="Regular expression over | * ( ) and literals")
    parser.add_argument("--alphabet", help="Allowed literal symbols, e.g. 01")
    parser.add_argument("--config", type=Path, help="JSON file with grammar settings")
    parser.add_argument(
        "--word",
        action="append",
        default=[],
        help="Word to test against the automaton (repeatable)",
    )
    parser.add_argument("--dot-dir", type=Path, help="Directory for nfa/dfa/min_dfa .dot files")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    config = DEFAULT_CONFIG
    if args.config is not None:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            parser.error(f"cannot load {args.config}: {e}")
    if args.alphabet is not None:
        config = config.with_alphabet(args.alphabet)

    try:
        ast = parse(args.pattern, config)
    except RegexSyntaxError as e:
        print(f"error: {e}", file=sys.stderr)
        print(f"  {args.pattern}\n  {' ' * e.position}^", file=sys.stderr)
        return 2

    nfa = compile_to_nfa(ast, config.alphabet)
    dfa = determinize(nfa, config.alphabet)
    min_dfa = minimize(dfa)
    logger.info(
        "NFA: %d states, DFA: %d states, minimal DFA: %d states",
        nfa.get_states_number(),
        dfa.get_states_number(),
        min_dfa.get_states_number(),
    )

    print(min_dfa.to_table(), end="")
    print()
    print(grammar_to_text(dfa_to_regular_grammar(min_dfa)), end="")

    for word in args.word:
        verdict = "accepted" if min_dfa.accepts(word) else "rejected"
        print(f"{word!r}: {verdict}")

    if args.dot_dir is not None:
        args.dot_dir.mkdir(parents=True, exist_ok=True)
        for name, fa in (("nfa", nfa), ("dfa", dfa), ("min_dfa", min_dfa)):
            path = args.dot_dir / f"{name}.dot"
            save_automaton_to_dot(fa, path)
            logger.info("%s saved to %s", name, path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
