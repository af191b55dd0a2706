from .ansi import *


def location(content: str) -> str:
    return f"{BOLD}{content}{BOLD_RESET}"


def current_line(content: str) -> str:
    return f"{FG_RED}{content}{FG_RESET}"


def line_number(number: int) -> str:
    return f"{FG_BRIGHT_BLACK}{number}{FG_RESET}"


def diagnostic(content: str) -> str:
    return f"{FG_YELLOW}{content}{FG_RESET}"


def path(content: str) -> str:
    if content == "":
        content = "''"
    return f"{FG_CYAN_BOLD}{content}{RESET}"
