from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from decisive_flow.errors import BindingError


@dataclass(frozen=True, slots=True)
class ParameterStore:
    """Opaque build-time arguments, referenced by handlers by position."""

    values: tuple[object, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    def get(self, index: int) -> object:
        if not 0 <= index < len(self.values):
            raise BindingError(
                f"Parameter index {index} is out of range; "
                f"{len(self.values)} parameter(s) were supplied at build time."
            )
        return self.values[index]

    def gather(self, indices: Iterable[int]) -> tuple[object, ...]:
        return tuple(self.get(i) for i in indices)
