from typing import NamedTuple


class Frame(NamedTuple):
    """
    A single step in a stack trace.
    """

    func: str
    line: int
    path: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line} {self.func}()"
