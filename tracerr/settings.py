from typing import Any, Dict

import yaml

from tracerr.error import SettingsError

DEFAULT_STACK_DEPTH = 5
DEFAULT_FRAME_CAPACITY = 20
DEFAULT_LINES_BEFORE = 3
DEFAULT_LINES_AFTER = 2


class Settings:
    """
    Defaults used when capturing and rendering stack traces. The values are
    read every time an error is created or rendered, so changes take effect
    immediately.
    """

    def __init__(
        self,
        stack_depth: int = DEFAULT_STACK_DEPTH,
        frame_capacity: int = DEFAULT_FRAME_CAPACITY,
        lines_before: int = DEFAULT_LINES_BEFORE,
        lines_after: int = DEFAULT_LINES_AFTER,
        verbose: bool = False,
    ) -> None:
        self._stack_depth = stack_depth
        self._frame_capacity = frame_capacity
        self._lines_before = lines_before
        self._lines_after = lines_after
        self._verbose = verbose

    def stack_depth(self) -> int:
        return self._stack_depth

    def frame_capacity(self) -> int:
        """
        Number of frames to reserve room for before a stack is walked. Only
        affects allocation, never the captured frames.
        """
        return self._frame_capacity

    def lines_before(self) -> int:
        return self._lines_before

    def lines_after(self) -> int:
        return self._lines_after

    def verbose(self) -> bool:
        return self._verbose


class SettingsBuilder:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def stack_depth(self, depth: int) -> "SettingsBuilder":
        if depth <= 0:
            depth = DEFAULT_STACK_DEPTH
        self._settings._stack_depth = depth
        return self

    def frame_capacity(self, capacity: int) -> "SettingsBuilder":
        self._settings._frame_capacity = max(capacity, 0)
        return self

    def lines_before(self, lines: int) -> "SettingsBuilder":
        self._settings._lines_before = max(lines, 0)
        return self

    def lines_after(self, lines: int) -> "SettingsBuilder":
        self._settings._lines_after = max(lines, 0)
        return self

    def verbose(self, verbose: bool = True) -> "SettingsBuilder":
        self._settings._verbose = verbose
        return self

    def from_file(self, path: str) -> "SettingsBuilder":
        """
        Apply the settings in a YAML file. Nothing is changed unless every
        entry in the file is valid.
        """
        entries = _load_settings_file(path)
        for key, value in entries.items():
            if key not in _SETTERS:
                raise SettingsError(f"Unknown setting '{key}' in '{path}'")

            expected = bool if key == "verbose" else int
            # bool is a subclass of int, which is not a valid depth.
            if type(value) != expected:
                raise SettingsError(
                    f"Setting '{key}' in '{path}' must be of type {expected.__name__}"
                )

        for key, value in entries.items():
            _SETTERS[key](self, value)

        return self


_SETTERS = {
    "stack_depth": SettingsBuilder.stack_depth,
    "frame_capacity": SettingsBuilder.frame_capacity,
    "lines_before": SettingsBuilder.lines_before,
    "lines_after": SettingsBuilder.lines_after,
    "verbose": SettingsBuilder.verbose,
}


def _load_settings_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as file:
        try:
            content = yaml.safe_load(file)
        except yaml.MarkedYAMLError as e:
            raise SettingsError.from_yaml_error(path, e)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise SettingsError(f"Error reading settings '{path}': {e}")

    if content is None:
        return {}
    if type(content) != dict:
        raise SettingsError(f"Settings file '{path}' must contain a mapping")

    return content


_settings = Settings()
_settings_builder = SettingsBuilder(_settings)


def settings() -> Settings:
    return _settings


def setup() -> SettingsBuilder:
    return _settings_builder


def load(path: str) -> Settings:
    setup().from_file(path)
    return _settings


def reset():
    """
    Restore every setting to its default value.
    """
    _settings.__init__()


def set_stack_max_depth(depth: int):
    setup().stack_depth(depth)
