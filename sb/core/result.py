"""Ok/Err values for operations that fail in expected ways.

Mirror fetches, listing resolution, extraction and cache writes return
``Ok(value)`` or ``Err(error)``; nothing below the CLI raises for an
expected failure. Narrow with ``isinstance`` or a match statement:

    match lister.releases("4.0"):
        case Ok(releases):
            ...
        case Err(error):
            console.error(str(error))

Errors are frozen dataclasses with a ``__str__`` suitable for users.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeGuard

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def map_err[F](self, f: Callable[[object], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def unwrap(self) -> None:
        """Raise ValueError carrying the error; there is no value to return."""
        raise ValueError(f"unwrap() on {self!r}: {self.error}")

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Wrap the error, e.g. an HttpError into FetchFailed.

        Lets a caller lift a lower layer's error into its own error union
        without unpacking the result.
        """
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
