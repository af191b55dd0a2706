import tracerr
from tracerr.error import TracerrError
from tracerr.frame import Frame
from tracerr.logging import fmt, logger
from tests.fixtures import *


def test_error_renders_traced_error(config, source_file, capsys):
    err = tracerr.custom_error(Exception("boom"), [Frame("load", 5, str(source_file))])

    logger.error("Something failed", err)

    lines = capsys.readouterr().err.splitlines()
    assert "Something failed" in lines[0]
    assert lines[1] == "    boom"
    assert lines[3] == f"    {fmt.location(f'{source_file}:5 load()')}"
    assert f"    {fmt.current_line('5' + chr(9) + 'line 5')}" in lines


def test_error_shows_location_of_library_error(source_file, capsys):
    err = TracerrError("bad value", Frame("<settings>", 4, str(source_file)))

    logger.error("Failed to load settings", err)

    output = capsys.readouterr().err
    assert "    bad value" in output
    assert fmt.current_line("4\tline 4") in output
    assert "line 3" not in output


def test_error_shows_traceback_of_plain_exception(capsys):
    try:
        raise ValueError("invalid")
    except ValueError as e:
        logger.error("Something failed", e)

    output = capsys.readouterr().err
    assert "    ValueError: invalid" in output
    assert "Traceback" in output


def test_debug_requires_verbose(config, capsys):
    logger.debug("hidden")
    assert capsys.readouterr().err == ""

    config.setup().verbose()
    logger.debug("shown")
    assert "shown" in capsys.readouterr().err
