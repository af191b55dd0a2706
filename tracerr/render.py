"""
Text output for errors and their stack traces.

Functions taking a variable number of `lines` select how much source code is
shown around each frame:

* no value: `lines_before` and `lines_after` from the settings (3 and 2 by
  default);
* a single value: the total number of lines, with the extra line going before
  the traced line. Zero or less hides the source code;
* two values: exactly how many lines to show before and after the traced line.
"""

import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from tracerr import settings as settings_module
from tracerr import source, wrapper
from tracerr.frame import Frame
from tracerr.logging import fmt
from tracerr.settings import Settings


class Style:
    def location(self, text: str) -> str:
        return text

    def current_line(self, number: int, text: str) -> str:
        return f"{number}\t{text}"

    def context_line(self, number: int, text: str) -> str:
        return f"{number}\t{text}"

    def diagnostic(self, text: str) -> str:
        return text


class ColorStyle(Style):
    def location(self, text: str) -> str:
        return fmt.location(text)

    def current_line(self, number: int, text: str) -> str:
        return fmt.current_line(f"{number}\t{text}")

    def context_line(self, number: int, text: str) -> str:
        return f"{fmt.line_number(number)}\t{text}"

    def diagnostic(self, text: str) -> str:
        return fmt.diagnostic(text)


def calc_rows(
    lines: Sequence[int], settings: Optional[Settings] = None
) -> Tuple[int, int, bool]:
    if settings is None:
        settings = settings_module.settings()

    before = settings.lines_before()
    after = settings.lines_after()
    with_source = True
    if len(lines) > 1:
        before, after = lines[0], lines[1]
    elif len(lines) == 1:
        if lines[0] > 0:
            # The extra line goes before the traced line.
            after = (lines[0] - 1) // 2
            before = lines[0] - after - 1
        else:
            before, after = 0, 0
            with_source = False

    return max(before, 0), max(after, 0), with_source


class Renderer:
    def __init__(
        self,
        style: Optional[Style] = None,
        cache: Optional[source.SourceCache] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._style = style or Style()
        self._cache = cache
        self._settings = settings

    def render(self, err: Optional[BaseException], *lines: int) -> str:
        if err is None:
            return ""
        if not isinstance(err, wrapper.Error):
            return str(err)

        before, after, with_source = calc_rows(lines, self._settings)
        rows = [str(err)]
        if with_source:
            rows.append("")

        for frame in err.stack_trace():
            rows.append(self._style.location(str(frame)))
            if with_source:
                self._source_rows(rows, frame, before, after)

        return "\n".join(rows)

    def render_frames(self, err: Optional[BaseException]) -> str:
        return self.render(err, 0)

    def _source_rows(self, rows: List[str], frame: Frame, before: int, after: int):
        cache = self._cache if self._cache is not None else source.cache()
        try:
            lines = cache.read_lines(frame.path)
        except wrapper.TracedError as e:
            rows.extend([self._style.diagnostic(str(e)), ""])
            return

        if len(lines) < frame.line:
            message = f"tracerr: too few lines, got {len(lines)}, want {frame.line}"
            rows.extend([self._style.diagnostic(message), ""])
            return

        current = frame.line - 1
        for i in range(current - before, current + after + 1):
            if i < 0 or i >= len(lines):
                continue
            if i == current:
                rows.append(self._style.current_line(i + 1, lines[i]))
            else:
                rows.append(self._style.context_line(i + 1, lines[i]))
        rows.append("")


_plain = Renderer()
_color = Renderer(ColorStyle())


def sprint(err: Optional[BaseException]) -> str:
    """
    Returns the error message followed by its stack trace, without source code.
    """
    return _plain.render_frames(err)


def sprint_color(err: Optional[BaseException]) -> str:
    return _color.render_frames(err)


def sprint_source(err: Optional[BaseException], *lines: int) -> str:
    return _plain.render(err, *lines)


def sprint_source_color(err: Optional[BaseException], *lines: int) -> str:
    return _color.render(err, *lines)


def print_error(err: Optional[BaseException], file: Optional[TextIO] = None):
    print(sprint(err), file=file or sys.stdout)


def print_color(err: Optional[BaseException], file: Optional[TextIO] = None):
    print(sprint_color(err), file=file or sys.stdout)


def print_source(
    err: Optional[BaseException], *lines: int, file: Optional[TextIO] = None
):
    print(sprint_source(err, *lines), file=file or sys.stdout)


def print_source_color(
    err: Optional[BaseException], *lines: int, file: Optional[TextIO] = None
):
    print(sprint_source_color(err, *lines), file=file or sys.stdout)
