from typing import Dict, Iterator, Tuple

from bitcalc.errors import UndefinedVariableError


class Environment:
    """Maps variable names to their last bound word.

    One environment lives for a whole interactive session. Entries are only
    ever added or overwritten, never removed.
    """
    def __init__(self):
        self.values: Dict[str, int] = {}

    def get(self, name: str) -> int:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariableError(name)

    def set(self, name: str, value: int):
        self.values[name] = value

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self.values.items())

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Environment({self.values!r})"
