"""Exceptions raised by the library itself.

Combinators never raise on their own account: whatever a caller-supplied
function raises propagates unchanged. The only exceptions originating here
come from the explicitly partial extractors (unwrap/expect).
"""

from __future__ import annotations


class OutcomesError(Exception):
    """Base class for errors raised by outcomes."""


class UnwrapError(OutcomesError, RuntimeError):
    """Partial extraction attempted on the wrong variant."""

    container: object

    def __init__(self, container: object, message: str) -> None:
        self.container = container
        super().__init__(message)


__all__ = ["OutcomesError", "UnwrapError"]
