"""Outcome/Either type for success-or-failure values.

Implements a closed sum type with full combinator support:
- Functor: map, map_err
- Bifunctor: bimap
- Monad: flat_map (bind), flat_map_err (recovery)
- Conversions to and from Optional: ok, error, transpose

Every derived operation goes through the per-variant ``fold``. Functions
passed in are never guarded: if they raise, the exception reaches the
caller unchanged. ``catching`` is the one explicit bridge from exceptions
into Failure values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

from .diagnostics import ErrorTrace, trace_from_exc
from .errors import UnwrapError
from .log import get_logger
from .optional import Absent, Optional, Present

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type
B = TypeVar("B")  # Fold type

logger = get_logger("outcome")


def _identity(x: T) -> T:
    return x


def _ignore(_: object) -> None:
    return None


class Outcome(ABC, Generic[T, E]):
    """Discriminated union of Success(value) and Failure(error).

    Examples:
        >>> Success(5).flat_map(lambda x: Success(x * 2) if x > 0 else Failure("neg")).fold(lambda v: v, lambda e: -1)
        10
        >>> Failure("boom").map_err(lambda e: e + "!").fold(lambda v: v, lambda e: e)
        'boom!'

    Notes:
        - Closed: only Success and Failure may subclass it
        - Immutable; combinators return new values (or self when nothing changes)
        - Failure.trace is diagnostic only and ignored by ==, hash() and repr()
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(f"Outcome is closed to Success and Failure; cannot subclass as {cls.__qualname__}")

    # ─── Elimination ──────────────────────────────────────────────────

    @abstractmethod
    def fold(self, if_ok: Callable[[T], B], if_err: Callable[[E], B]) -> B:
        """Apply if_ok to a success payload or if_err to a failure payload."""

    # ─── Type Checking ────────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self.fold(lambda _: True, lambda _: False)

    def is_err(self) -> bool:
        return self.fold(lambda _: False, lambda _: True)

    # ─── Value Extraction ─────────────────────────────────────────────

    def get_or_else(self, fallback: T) -> T:
        """Success payload or fallback."""
        return self.fold(_identity, lambda _: fallback)

    def get_or_else_get(self, f: Callable[[E], T]) -> T:
        """Success payload or f(error)."""
        return self.fold(_identity, f)

    def unwrap(self) -> T:
        """Extract Success payload. Raises UnwrapError on Failure."""
        def err(e: E) -> T:
            raise UnwrapError(self, f"unwrap() on Failure({e!r})")
        return self.fold(_identity, err)

    def unwrap_err(self) -> E:
        """Extract Failure payload. Raises UnwrapError on Success."""
        def ok(v: T) -> E:
            raise UnwrapError(self, f"unwrap_err() on Success({v!r})")
        return self.fold(ok, _identity)

    def expect(self, msg: str) -> T:
        """Extract Success payload with custom error message."""
        def err(e: E) -> T:
            raise UnwrapError(self, f"{msg}: {e!r}")
        return self.fold(_identity, err)

    # ─── Functor Operations ───────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Outcome[U, E]:
        """Apply f to Success payload. Signature: Outcome[T,E] → (T→U) → Outcome[U,E]"""
        return self.fold(lambda v: Success(f(v)), lambda _: cast("Outcome[U, E]", self))

    def map_err(self, f: Callable[[E], F]) -> Outcome[T, F]:
        """Apply f to Failure payload, keeping its trace. Signature: Outcome[T,E] → (E→F) → Outcome[T,F]"""
        return self.fold(lambda _: cast("Outcome[T, F]", self), lambda e: self._refail(f(e)))

    def bimap(self, ok_fn: Callable[[T], U], err_fn: Callable[[E], F]) -> Outcome[U, F]:
        """Apply ok_fn if Success, err_fn if Failure."""
        return self.fold(lambda v: Success(ok_fn(v)), lambda e: self._refail(err_fn(e)))

    # ─── Monad Operations ─────────────────────────────────────────────

    def flat_map(self, f: Callable[[T], Outcome[U, E]]) -> Outcome[U, E]:
        """Monadic bind (>>=). Short-circuits on Failure without calling f.

        Example:
            >>> Success("42").flat_map(lambda s: catching(int, s)).map(lambda n: n + 1)
            Success(43)
        """
        return self.fold(f, lambda _: cast("Outcome[U, E]", self))

    def flat_map_err(self, f: Callable[[E], Outcome[T, F]]) -> Outcome[T, F]:
        """Chain recovery on Failure. Success passes through without calling f."""
        return self.fold(lambda _: cast("Outcome[T, F]", self), f)

    # ─── Observers ────────────────────────────────────────────────────

    def if_ok(self, f: Callable[[T], object]) -> None:
        self.fold(f, _ignore)

    def if_err(self, f: Callable[[E], object]) -> None:
        self.fold(_ignore, f)

    def if_ok_else(self, if_ok: Callable[[T], object], if_err: Callable[[E], object]) -> None:
        self.fold(if_ok, if_err)

    def when(
        self,
        *,
        ok: Callable[[T], object] | None = None,
        err: Callable[[E], object] | None = None,
    ) -> None:
        self.fold(ok if ok is not None else _ignore, err if err is not None else _ignore)

    # ─── Conversion ───────────────────────────────────────────────────

    def ok(self) -> Optional[T]:
        """Present(value) on Success, Absent() on Failure (error discarded)."""
        return self.fold(Present, lambda _: Absent())

    def error(self) -> Optional[E]:
        """Present(error) on Failure, Absent() on Success."""
        return self.fold(lambda _: Absent(), Present)

    @staticmethod
    def flatten(outcome: Outcome[Outcome[T, E], E]) -> Outcome[T, E]:
        """Outcome[Outcome[T,E],E] → Outcome[T,E]"""
        return outcome.fold(_identity, lambda _: cast("Outcome[T, E]", outcome))

    @staticmethod
    def transpose(outcome: Outcome[Optional[T], E]) -> Optional[Outcome[T, E]]:
        """Outcome[Optional[T],E] → Optional[Outcome[T,E]]

        Success(Absent()) becomes Absent(); Success(Present(v)) becomes
        Present(Success(v)); Failure(e) becomes Present(Failure(e)).
        """
        return outcome.fold(lambda option: option.map(Success), lambda _: Present(cast("Outcome[T, E]", outcome)))

    def _refail(self, error: F) -> Outcome[T, F]:
        # Only reached from the failure branch of fold
        return Failure(error, cast("Failure[T, E]", self).trace)

    # ─── Dunder Methods ───────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self.is_ok()

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Success, nothing if Failure."""
        yield from self.fold(lambda v: (v,), lambda _: ())


@dataclass(frozen=True, slots=True, repr=False)
class Success(Outcome[T, E]):
    """Contains the success value."""

    value: T

    def fold(self, if_ok: Callable[[T], B], if_err: Callable[[E], B]) -> B:
        return if_ok(self.value)

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Failure(Outcome[T, E]):
    """Contains the error value and an optional diagnostic trace."""

    err: E
    trace: ErrorTrace | None = field(default=None, compare=False)

    def fold(self, if_ok: Callable[[T], B], if_err: Callable[[E], B]) -> B:
        return if_err(self.err)

    def with_context(self, operation: str, location: str = "", **metadata: object) -> Failure[T, E]:
        """Same error, with one more context frame on its trace (created if missing)."""
        base = self.trace or ErrorTrace(str(self.err) or type(self.err).__name__)
        return Failure(self.err, base.with_operation(operation, location, **metadata))

    def __repr__(self) -> str:
        return f"Failure({self.err!r})"


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def catching(fn: Callable[..., T], *args: object, operation: str = "", **kwargs: object) -> Outcome[T, Exception]:
    """Call fn, turning a raised Exception into Failure(exc) with a trace.

    BaseExceptions that are not Exceptions (KeyboardInterrupt, SystemExit)
    propagate.

    Example:
        >>> catching(int, "12")
        Success(12)
        >>> catching(int, "x").map_err(type)
        Failure(<class 'ValueError'>)
    """
    try:
        return Success(fn(*args, **kwargs))
    except Exception as exc:
        name = operation or getattr(fn, "__qualname__", repr(fn))
        logger.debug("captured %s in %s: %s", type(exc).__name__, name, exc)
        return Failure(exc, trace_from_exc(exc, operation=name))


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def sequence(outcomes: Iterable[Outcome[T, E]]) -> Outcome[list[T], E]:
    """Iterable[Outcome[T,E]] → Outcome[list[T], E]. Fail-fast on first Failure."""
    values: list[T] = []
    for outcome in outcomes:
        if outcome.is_err():
            return cast("Outcome[list[T], E]", outcome)
        values.append(outcome.unwrap())
    return Success(values)


def traverse(items: Iterable[T], f: Callable[[T], Outcome[U, E]]) -> Outcome[list[U], E]:
    """Map f over items, sequence results. Stops calling f after the first Failure."""
    values: list[U] = []
    for item in items:
        outcome = f(item)
        if outcome.is_err():
            return cast("Outcome[list[U], E]", outcome)
        values.append(outcome.unwrap())
    return Success(values)


def collect_outcomes(outcomes: Iterable[Outcome[T, E]]) -> Outcome[list[T], list[E]]:
    """Collect every Outcome, accumulating ALL errors (not fail-fast)."""
    values: list[T] = []
    errors: list[E] = []
    for outcome in outcomes:
        outcome.if_ok_else(values.append, errors.append)
    return Failure(errors) if errors else Success(values)


__all__ = [
    "Failure",
    "Outcome",
    "Success",
    "catching",
    "collect_outcomes",
    "sequence",
    "traverse",
]
