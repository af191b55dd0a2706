from typing import Optional

from yaml import MarkedYAMLError

from tracerr.frame import Frame


class TracerrError(Exception):
    def __init__(self, message: str, location: Optional[Frame] = None) -> None:
        self._location = location
        super().__init__(message)

    def location(self) -> Optional[Frame]:
        return self._location


class SourceNotFoundError(TracerrError):
    def __init__(self, path: str) -> None:
        self._path = path
        super().__init__(f"tracerr: file {path} not found")

    def path(self) -> str:
        return self._path


class SettingsError(TracerrError):
    @staticmethod
    def from_yaml_error(path: str, e: MarkedYAMLError) -> "SettingsError":
        mark = e.problem_mark or e.context_mark
        if mark is None:
            return SettingsError(f"Error reading settings '{path}': {e}")

        # YAML marks are 0-based.
        return SettingsError(
            f"Error reading settings '{path}': {e.problem}",
            Frame("<settings>", mark.line + 1, path),
        )
