from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet
from typing import Iterable
from typing import Optional
import json

__all__ = [
    "OPERATORS",
    "RegexConfig",
    "DEFAULT_CONFIG",
    "load_config",
]

OPERATORS = frozenset("|*()")


@dataclass(frozen=True)
class RegexConfig:
    alphabet: Optional[FrozenSet[str]] = None
    escape: str = "\\"
    epsilon: str = "ε"
    empty: str = "∅"

    def __post_init__(self):
        if self.alphabet is not None:
            object.__setattr__(self, "alphabet", frozenset(self.alphabet))

        markers = (self.escape, self.epsilon, self.empty)
        for marker in markers:
            if not isinstance(marker, str) or len(marker) != 1:
                raise ValueError(f"marker {marker!r} must be a single character")
            if marker in OPERATORS:
                raise ValueError(f"marker {marker!r} clashes with an operator")
        if len(set(markers)) != len(markers):
            raise ValueError("escape, epsilon and empty markers must differ")

    def reserved(self) -> FrozenSet[str]:
        return OPERATORS | {self.escape, self.epsilon, self.empty}

    def allows(self, symbol: str) -> bool:
        return self.alphabet is None or symbol in self.alphabet

    def with_alphabet(self, alphabet: Optional[Iterable[str]]) -> "RegexConfig":
        return RegexConfig(
            alphabet=None if alphabet is None else frozenset(alphabet),
            escape=self.escape,
            epsilon=self.epsilon,
            empty=self.empty,
        )


DEFAULT_CONFIG = RegexConfig()

_CONFIG_KEYS = {"alphabet", "escape", "epsilon", "empty"}


def load_config(path: Path) -> RegexConfig:
    with open(path, encoding="utf-8") as json_fl:
        data = json.load(json_fl)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: configuration must be a JSON object")

    unknown = set(data) - _CONFIG_KEYS
    if unknown:
        raise ValueError(f"{path}: unknown configuration keys {sorted(unknown)}")

    alphabet = data.get("alphabet")
    if alphabet is not None:
        if isinstance(alphabet, list) and all(isinstance(s, str) for s in alphabet):
            data["alphabet"] = frozenset(alphabet)
        elif isinstance(alphabet, str):
            data["alphabet"] = frozenset(alphabet)
        else:
            raise ValueError(f"{path}: alphabet must be a string or a list of strings")

    return RegexConfig(**data)
