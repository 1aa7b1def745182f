"""Class Bracket console.

Run without a command for the interactive shell, or pass one command to run
it once and exit::

    classbracket-console --store class.json
    classbracket-console --store class.json bracket --positions
"""

# Class Bracket
# Copyright (C) 2025  Class Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from classbracket import APP_NAME, APP_VERSION
from classbracket.config import load_config, with_overrides
from classbracket.console.commands import (
    COMMAND_HANDLERS,
    Colors,
    ConsoleContext,
    create_completer,
    execute_line,
    run_command,
)
from classbracket.exceptions import ClassBracketException
from classbracket.store import open_store
from classbracket.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                    CLASS BRACKET - CONSOLE                    ║
║                                                               ║
║              [Rock, paper, scissors, elimination]             ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def run_interactive_mode(context: ConsoleContext) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )

    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = session.prompt("bracket> ")
            if not execute_line(context, user_input):
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
        except Exception as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            logger.exception("Unexpected error in interactive mode")

    return 0


def create_main_parser():
    parser = argparse.ArgumentParser(
        prog="classbracket-console",
        description=f"{APP_NAME} v{APP_VERSION} console",
    )
    parser.add_argument("--store", help="JSON file holding the roster and matches")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument(
        "command",
        nargs="?",
        choices=sorted(COMMAND_HANDLERS),
        help="Run a single command and exit",
    )
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Command arguments")
    return parser


def main(argv=None) -> int:
    """Main entry point for the classbracket-console CLI."""
    args = create_main_parser().parse_args(argv)

    try:
        config = with_overrides(load_config(args.config), args.store, args.log_level)
        set_log_level(config.log_level)
        context = ConsoleContext(store=open_store(config.store_path), config=config)
    except ClassBracketException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    if args.command is None:
        return run_interactive_mode(context)
    return run_command(context, args.command, args.args)


if __name__ == "__main__":
    sys.exit(main())
