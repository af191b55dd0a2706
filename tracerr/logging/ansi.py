RESET = "\033[0m"
BOLD = "\033[1m"
BOLD_RESET = "\033[22m"

FG_RED = "\033[31m"
FG_GREEN = "\033[32m"
FG_YELLOW = "\033[33m"
FG_CYAN_BOLD = "\033[1;36m"
FG_BRIGHT_BLACK = "\033[90m"
FG_RESET = "\033[39m"

BG_RED = "\033[41m"
BG_RESET = "\033[49m"
