"""Optional and Outcome sum types with fold-derived combinators.

Provides two closed, immutable generic types:
- Optional[T]: Present(value) or Absent()
- Outcome[T, E]: Success(value) or Failure(err)

Every combinator (map, flat_map, filter, map_err, ...) is derived from the
per-variant fold eliminator. The two types convert into each other through
ok_or / ok / error and the two transpose functions.

Example:
    >>> from outcomes import Optional, Success, Failure
    >>> Optional.from_nullable(5).map(lambda x: x * 2).get_or_else(0)
    10
    >>> Optional.transpose(Optional.from_nullable(Failure("e")))
    Failure('e')
"""

from .errors import OutcomesError, UnwrapError
from .diagnostics import ErrorContext, ErrorTrace, context, trace, trace_from_exc
from .optional import Absent, Optional, Present, from_nullable, present_values
from .outcome import Failure, Outcome, Success, catching, collect_outcomes, sequence, traverse

__all__ = [
    # Optional
    "Optional", "Present", "Absent", "from_nullable", "present_values",
    # Outcome
    "Outcome", "Success", "Failure", "catching",
    # Collection ops
    "sequence", "traverse", "collect_outcomes",
    # Diagnostic trace
    "ErrorContext", "ErrorTrace", "context", "trace", "trace_from_exc",
    # Errors
    "OutcomesError", "UnwrapError",
]
