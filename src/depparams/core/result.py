"""
Result Type Implementation.

This module provides a small Ok/Err result type to keep validation
errors explicit instead of bubbling them up as exceptions.

Two composition primitives sit on top of it:

    - zip_accumulate: combine independent results, collecting every error.
    - and_then: chain a dependent step, short-circuiting on the first error.

Errors are carried as lists of messages so that accumulation is a plain
concatenation.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Tuple, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    A validated value, e.g. the parsed exclusion set or the final
    DependencyParams bundle.
    """
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """
    A rejected validation. For Validated results, `error` is the list of
    human-readable messages shown to the user.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise with the carried messages; use only where failure is a bug."""
        raise ValueError(f"Called unwrap on Err: {self.error}")


# Generic result; the validators below use Validated
Result = Union[Ok[T], Err[E]]

# Validation results carry a non-empty list of messages on failure
Validated = Union[Ok[T], Err[List[str]]]


def fail(message: str) -> Err[List[str]]:
    """Build a failed validation carrying a single message."""
    return Err([message])


def map_ok(result: Result[T, E], func: Callable[[T], U]) -> Result[U, E]:
    """
    Transform a successful value, leaving error messages untouched.

    Used to turn validated pieces into their final shape, e.g. grouping
    exclusion-file rules by parent module.
    """
    if isinstance(result, Ok):
        return Ok(func(result.value))
    return result  # type: ignore


def and_then(result: Result[T, E], func: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """
    Chain a dependent computation onto a successful result.

    The function only runs when `result` is Ok. An Err is passed through
    untouched, so the dependent step contributes no errors of its own.
    """
    if isinstance(result, Ok):
        return func(result.value)
    return result  # type: ignore


def zip_accumulate(*results: Validated[Any]) -> Validated[Tuple[Any, ...]]:
    """
    Combine independent validations.

    Returns Ok with a tuple of every value when all inputs succeeded.
    Otherwise returns Err with the errors of every failed input,
    concatenated in argument order.
    """
    errors: List[str] = []
    values = []
    for result in results:
        if isinstance(result, Err):
            errors.extend(result.error)
        else:
            values.append(result.value)

    if errors:
        return Err(errors)
    return Ok(tuple(values))


def traverse(items: Iterable[T], func: Callable[[T], Validated[U]]) -> Validated[List[U]]:
    """
    Validate every item, accumulating all failures.

    Unlike a loop that stops on the first bad item, every item is visited
    and the errors of all failed items are reported together.
    """
    results = [func(item) for item in items]
    return map_ok(zip_accumulate(*results), list)
