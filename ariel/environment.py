from typing import Dict, Iterator, Optional

from ariel.types import FunctionVal, Value


class Environment:
    """A flat mapping from identifier to value.

    There is no parent chain. A block runs against a `snapshot` of the
    enclosing environment and `merge_from` copies the final values of the
    names the enclosing environment already had back into it; names first
    declared inside the block are dropped with the snapshot. A function
    call starts from an empty environment and `import_functions` brings in
    the caller's function bindings only.
    """
    def __init__(self, values: Optional[Dict[str, Value]] = None):
        self.values: Dict[str, Value] = dict(values) if values else {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str) -> Optional[Value]:
        return self.values.get(name)

    def set(self, name: str, value: Value) -> Value:
        self.values[name] = value
        return value

    def snapshot(self) -> 'Environment':
        return Environment(self.values)

    def merge_from(self, other: 'Environment'):
        for name in self.values:
            self.values[name] = other.values[name]

    def import_functions(self, other: 'Environment'):
        for name, value in other.values.items():
            if isinstance(value, FunctionVal):
                self.values[name] = value
