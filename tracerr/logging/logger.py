import sys
import traceback

from tracerr import settings
from tracerr.error import TracerrError

from .fmt import *


def info(msg):
    print(f"[{FG_GREEN}*{FG_RESET}] {msg}", file=sys.stderr)


def warn(msg):
    print(f"[{FG_YELLOW}!{FG_RESET}] {msg}", file=sys.stderr)


def error(msg, exception: BaseException):
    # The renderer depends on this module through the source cache.
    from tracerr import render, wrapper

    print(f"{BG_RED}[×]{BG_RESET} {msg}", file=sys.stderr)

    if isinstance(exception, wrapper.Error):
        rendered = render.sprint_source_color(exception)
    elif isinstance(exception, TracerrError) and exception.location() is not None:
        located = wrapper.custom_error(exception, [exception.location()])
        rendered = render.sprint_source_color(located, 1)
    else:
        print(f"    {type(exception).__name__}: {exception}", file=sys.stderr)
        for line in traceback.format_exception(exception):
            for sub_line in line.splitlines():
                print(f"      {sub_line}", file=sys.stderr)
        return

    for line in rendered.split("\n"):
        print(f"    {line}", file=sys.stderr)


def debug(msg):
    if settings.settings().verbose():
        print(f"[{FG_BRIGHT_BLACK}~{FG_RESET}] {msg}", file=sys.stderr)


def fatal(msg):
    print(f"[{BG_RED}E{BG_RESET}] {msg}", file=sys.stderr)
    print(f"[{BG_RED}E{BG_RESET}] Exiting...", file=sys.stderr)
    sys.exit(1)
