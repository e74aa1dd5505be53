"""Optional: a value that may be present or absent.

A closed sum type with two variants, Present(value) and Absent(). Every
operation below is derived from the per-variant ``fold`` eliminator, so the
functor/monad laws hold by construction.

Examples:
    >>> Optional.from_nullable(5).map(lambda x: x * 2).get_or_else(0)
    10
    >>> Optional.from_nullable(None).map(lambda x: x * 2).get_or_else(0)
    0
    >>> Present(4).filter(lambda x: x % 2 == 0).ok_or("odd")
    Success(4)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .outcome import Outcome

T = TypeVar("T")  # Payload type
E = TypeVar("E")  # Error type for conversions
B = TypeVar("B")  # Fold / mapped type


def _identity(x: T) -> T:
    return x


def _nothing(*_: object) -> None:
    return None


class Optional(ABC, Generic[T]):
    """Discriminated union of Present(value) and Absent().

    Closed: the only variants are the two defined in this module, and
    subclassing anywhere else raises TypeError. Instances are immutable.
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(f"Optional is closed to Present and Absent; cannot subclass as {cls.__qualname__}")

    # ─── Elimination ──────────────────────────────────────────────────

    @abstractmethod
    def fold(self, if_present: Callable[[T], B], if_absent: Callable[[], B]) -> B:
        """Apply if_present to the payload, or call if_absent. Signature: Optional[T] → (T→B, ()→B) → B"""

    # ─── Construction ─────────────────────────────────────────────────

    @staticmethod
    def from_nullable(value: T | None) -> Optional[T]:
        """Present(value) unless value is None. The only bridge from None into Optional."""
        return Absent() if value is None else Present(value)

    # ─── Type Checking ────────────────────────────────────────────────

    def is_present(self) -> bool:
        return self.fold(lambda _: True, lambda: False)

    def is_absent(self) -> bool:
        return self.fold(lambda _: False, lambda: True)

    # ─── Value Extraction ─────────────────────────────────────────────

    def get_or_else(self, fallback: T) -> T:
        """Payload, or fallback when absent."""
        return self.fold(_identity, lambda: fallback)

    def get_or_else_get(self, supplier: Callable[[], T]) -> T:
        """Payload, or supplier() when absent. supplier is not called when present."""
        return self.fold(_identity, supplier)

    def to_nullable(self) -> T | None:
        """Payload, or None when absent."""
        return self.fold(_identity, _nothing)

    def unwrap(self) -> T:
        """Payload. Raises UnwrapError on Absent."""
        def absent() -> T:
            raise UnwrapError(self, "unwrap() on Absent()")
        return self.fold(_identity, absent)

    def expect(self, msg: str) -> T:
        """Payload. Raises UnwrapError with msg on Absent."""
        def absent() -> T:
            raise UnwrapError(self, msg)
        return self.fold(_identity, absent)

    # ─── Functor / Monad ──────────────────────────────────────────────

    def map(self, f: Callable[[T], B]) -> Optional[B]:
        """Apply f to the payload. Signature: Optional[T] → (T→B) → Optional[B]"""
        return self.fold(lambda v: Present(f(v)), Absent)

    def flat_map(self, f: Callable[[T], Optional[B]]) -> Optional[B]:
        """Monadic bind (>>=). f runs at most once and only when present.

        Example:
            >>> Present("42").flat_map(lambda s: Present(int(s)) if s.isdigit() else Absent())
            Present(42)
        """
        return self.fold(f, Absent)

    def filter(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Keep the payload only if predicate holds."""
        return self.fold(lambda v: self if predicate(v) else Absent(), Absent)

    def or_else(self, alternative: Callable[[], Optional[T]]) -> Optional[T]:
        """Self if present, otherwise alternative(). Short-circuit OR."""
        return self.fold(lambda _: self, alternative)

    # ─── Observers ────────────────────────────────────────────────────

    def if_present(self, f: Callable[[T], object]) -> None:
        self.fold(f, _nothing)

    def if_absent(self, f: Callable[[], object]) -> None:
        self.fold(_nothing, f)

    def if_present_else(self, if_present: Callable[[T], object], if_absent: Callable[[], object]) -> None:
        self.fold(if_present, if_absent)

    def when(
        self,
        *,
        present: Callable[[T], object] | None = None,
        absent: Callable[[], object] | None = None,
    ) -> None:
        """Run whichever handler matches the variant; a missing handler does nothing."""
        self.fold(
            present if present is not None else _nothing,
            absent if absent is not None else _nothing,
        )

    # ─── Conversion ───────────────────────────────────────────────────

    def ok_or(self, error: E) -> Outcome[T, E]:
        """Success(v) if present, else Failure(error)."""
        from .outcome import Failure, Success
        return self.fold(Success, lambda: Failure(error))

    def ok_or_else(self, supplier: Callable[[], E]) -> Outcome[T, E]:
        """Like ok_or, computing the error only when absent."""
        from .outcome import Failure, Success
        return self.fold(Success, lambda: Failure(supplier()))

    @staticmethod
    def flatten(option: Optional[Optional[T]]) -> Optional[T]:
        """Optional[Optional[T]] → Optional[T]"""
        return option.fold(_identity, Absent)

    @staticmethod
    def transpose(option: Optional[Outcome[T, E]]) -> Outcome[Optional[T], E]:
        """Optional[Outcome[T,E]] → Outcome[Optional[T],E]

        Absent() becomes Success(Absent()); Present(Success(v)) becomes
        Success(Present(v)); Present(Failure(e)) becomes Failure(e).
        """
        from .outcome import Success
        return option.fold(lambda outcome: outcome.map(Present), lambda: Success(Absent()))

    # ─── Dunder Methods ───────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self.is_present()

    def __iter__(self) -> Iterator[T]:
        """Yields the payload if present, nothing otherwise."""
        yield from self.fold(lambda v: (v,), tuple)


@dataclass(frozen=True, slots=True, repr=False)
class Present(Optional[T]):
    """Some value of type T."""

    value: T

    def fold(self, if_present: Callable[[T], B], if_absent: Callable[[], B]) -> B:
        return if_present(self.value)

    def __repr__(self) -> str:
        return f"Present({self.value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Absent(Optional[T]):
    """No value. All Absent() instances are equal and share one hash."""

    def fold(self, if_present: Callable[[T], B], if_absent: Callable[[], B]) -> B:
        return if_absent()

    def __repr__(self) -> str:
        return "Absent()"


from_nullable = Optional.from_nullable


def present_values(options: Iterable[Optional[T]]) -> list[T]:
    """Payloads of the present elements, in order."""
    return [v for option in options for v in option]


__all__ = ["Absent", "Optional", "Present", "from_nullable", "present_values"]
