"""Interactive command line for running a tournament without the GUI."""

from classbracket.console.commands import (
    COMMANDS,
    ConsoleContext,
    create_completer,
    execute_line,
    run_command,
)

__all__ = [
    "COMMANDS",
    "ConsoleContext",
    "create_completer",
    "execute_line",
    "run_command",
]
