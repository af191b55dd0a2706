"""
Errors carrying the stack trace of the place where they were created or first
wrapped.

Wrapping is safe to apply at every return site: `wrap(None)` is `None`, and an
error that already carries a stack trace is returned as is, so the trace always
points at the original failure.
"""

import traceback
from typing import (
    Any,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

from tracerr import settings, stack
from tracerr.frame import Frame

# Skips `stack.capture` and the function calling it.
DEFAULT_SKIP = 2


@runtime_checkable
class Error(Protocol):
    def stack_trace(self) -> Tuple[Frame, ...]:
        ...

    def unwrap(self) -> BaseException:
        ...


class TracedError(Exception):
    def __init__(self, error: BaseException, frames: Sequence[Frame]) -> None:
        self._error = error
        self._frames = tuple(frames)
        super().__init__(str(error))

    def __str__(self) -> str:
        return str(self._error)

    def __repr__(self) -> str:
        return f"TracedError({self._error!r}, frames={len(self._frames)})"

    def stack_trace(self) -> Tuple[Frame, ...]:
        return self._frames

    def unwrap(self) -> BaseException:
        return self._error


def new(message: str, skip: Optional[int] = None) -> TracedError:
    frames = stack.capture(DEFAULT_SKIP if skip is None else skip)
    return TracedError(Exception(message), frames)


def errorf(message: str, *args: Any) -> TracedError:
    """
    Create an error with a `%`-formatted message. Arguments that do not fit
    the format are appended to the message instead of raising.
    """
    frames = stack.capture(DEFAULT_SKIP)
    return TracedError(Exception(_format(message, args)), frames)


def wrap(err: Optional[BaseException], skip: Optional[int] = None):
    if err is None:
        return None
    if isinstance(err, Error):
        return err

    frames = stack.capture(DEFAULT_SKIP if skip is None else skip)
    return TracedError(err, frames)


def custom_error(err: BaseException, frames: Sequence[Frame]) -> TracedError:
    return TracedError(err, frames)


def unwrap(err: Optional[BaseException]) -> Optional[BaseException]:
    if err is None:
        return None
    if isinstance(err, Error):
        return err.unwrap()
    return err


def stack_trace(err: Optional[BaseException]) -> Tuple[Frame, ...]:
    if isinstance(err, Error):
        return tuple(err.stack_trace())
    return ()


def from_exception(exc: BaseException, depth: Optional[int] = None):
    """
    Build an error from the traceback of a raised exception, keeping the
    innermost `depth` frames.
    """
    if isinstance(exc, Error):
        return exc

    if depth is None:
        depth = settings.settings().stack_depth()

    summaries = traceback.extract_tb(exc.__traceback__)
    if depth > 0:
        summaries = summaries[-depth:]

    frames = [
        Frame(summary.name, summary.lineno or 0, summary.filename)
        for summary in reversed(summaries)
    ]
    return TracedError(exc, frames)


def _format(message: str, args: Tuple[Any, ...]) -> str:
    if not args:
        return message

    try:
        # A single mapping fills named fields, as with `%` itself.
        if len(args) == 1 and isinstance(args[0], Mapping):
            return message % args[0]
        return message % args
    except (TypeError, ValueError, KeyError):
        extra = ", ".join(repr(arg) for arg in args)
        return f"{message} (extra: {extra})"
