from tracerr.error import SettingsError, SourceNotFoundError, TracerrError
from tracerr.frame import Frame
from tracerr.render import (
    ColorStyle,
    Renderer,
    Style,
    print_color,
    print_error,
    print_source,
    print_source_color,
    sprint,
    sprint_color,
    sprint_source,
    sprint_source_color,
)
from tracerr.settings import Settings, set_stack_max_depth
from tracerr.wrapper import (
    Error,
    TracedError,
    custom_error,
    errorf,
    from_exception,
    new,
    stack_trace,
    unwrap,
    wrap,
)
