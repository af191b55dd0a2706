import os
import runpy
import sys
import tempfile
from argparse import Namespace
from typing import Callable, Dict, Tuple

from tracerr import render, wrapper
from tracerr.logging import fmt, logger

_RUNNER_FILES = {
    os.path.abspath(__file__),
    os.path.abspath(runpy.__file__ or ""),
    "<frozen runpy>",
}


def run(args: Namespace):
    script = os.path.abspath(args.script)
    if not os.path.isfile(script):
        logger.fatal(f"Script {fmt.path(args.script)} does not exist")

    logger.debug(f"Running {fmt.path(script)}")

    saved_argv = sys.argv
    saved_path = list(sys.path)
    sys.argv = [args.script, *args.args]
    sys.path.insert(0, os.path.dirname(script))
    try:
        runpy.run_path(script, run_name="__main__")
    except Exception as e:
        traced = wrapper.from_exception(e)
        frames = [f for f in traced.stack_trace() if f.path not in _RUNNER_FILES]
        err = wrapper.custom_error(wrapper.unwrap(traced), frames)

        if args.plain:
            render.print_source(err, *_line_spec(args))
        else:
            render.print_source_color(err, *_line_spec(args))
        sys.exit(1)
    finally:
        sys.argv = saved_argv
        sys.path[:] = saved_path


def _line_spec(args: Namespace) -> Tuple[int, ...]:
    if args.no_source:
        return (0,)
    if args.lines is not None:
        return (args.lines,)
    if args.window is not None:
        return tuple(args.window)
    return ()


def demo(args: Namespace):
    EXAMPLES[args.example]()


def _new_error():
    def foo():
        bar(0)

    def bar(i: int):
        if i >= 2:
            # Create a new error with a stack trace.
            raise wrapper.errorf("i = %d", i)
        bar(i + 1)

    try:
        foo()
    except wrapper.TracedError as e:
        print(render.sprint(e))


def _existing_error():
    missing = os.path.join(tempfile.gettempdir(), "tracerr_non_existent_file")

    def read():
        read_non_existent()

    def read_non_existent():
        try:
            with open(missing, "r", encoding="utf-8") as file:
                file.read()
        except OSError as e:
            # Add a stack trace to the existing error.
            raise wrapper.wrap(e)

    try:
        read()
    except wrapper.TracedError as e:
        render.print_source_color(e)


def _nil_error():
    err = wrapper.wrap(None)
    if err is not None:
        render.print_source_color(err)
    else:
        print("no error")


EXAMPLES: Dict[str, Callable[[], None]] = {
    "new": _new_error,
    "wrap": _existing_error,
    "nil": _nil_error,
}
