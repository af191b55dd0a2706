import sys
from types import CodeType
from typing import Any, Callable, List, Optional, Tuple, cast

from tracerr import settings
from tracerr.frame import Frame
from tracerr.logging import logger

UNKNOWN_FUNCTION = "<unknown>"

Caller = Callable[[int], Optional[Tuple[Any, str, int]]]
Resolver = Callable[[Any], str]


def runtime_caller(skip: int) -> Optional[Tuple[CodeType, str, int]]:
    """
    Look up a caller of the function invoking `runtime_caller`. A `skip` of 0
    refers to that function itself, 1 to its caller, and so on. Returns the
    code object, file path and line number, or `None` once the stack is
    exhausted.
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return None

    return frame.f_code, frame.f_code.co_filename, frame.f_lineno


def function_name(code: CodeType) -> str:
    return code.co_qualname


def capture(
    skip: int,
    depth: Optional[int] = None,
    capacity: Optional[int] = None,
    caller: Caller = runtime_caller,
    resolve: Resolver = function_name,
) -> Tuple[Frame, ...]:
    """
    Walk the stack outward starting `skip` frames above `capture`, collecting
    at most `depth` frames, innermost first. A `depth` of zero or less walks
    the whole stack.
    """
    current = settings.settings()
    if depth is None:
        depth = current.stack_depth()
    if capacity is None:
        capacity = current.frame_capacity()

    # The hint only reserves room a bounded walk can fill.
    reserved = min(capacity, depth) if depth > 0 else 0
    frames: List[Optional[Frame]] = [None] * reserved
    count = 0
    while depth <= 0 or count < depth:
        found = caller(skip + count)
        if found is None:
            break

        code, path, line = found
        frame = Frame(_resolve_name(resolve, code), line, path)
        if count < len(frames):
            frames[count] = frame
        else:
            frames.append(frame)
        count += 1

    return tuple(cast(List[Frame], frames[:count]))


def _resolve_name(resolve: Resolver, code: Any) -> str:
    try:
        return resolve(code)
    except Exception as e:
        logger.debug(f"Failed to resolve function name for {code!r}: {e}")
        return UNKNOWN_FUNCTION
