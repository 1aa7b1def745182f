"""Console commands for Class Bracket.

Each command parses its own arguments with argparse and prints to stdout, so
the same dispatch serves the interactive shell and one-shot invocations.
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
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List

from prompt_toolkit.completion import NestedCompleter, WordCompleter

from classbracket.bracket import compute_bracket
from classbracket.config import AppConfig
from classbracket.constants import CHOICES, SLOT_PLAYER1, SLOT_PLAYER2
from classbracket.controllers import MatchRecorder, RosterManager
from classbracket.controllers import statistics
from classbracket.exceptions import ClassBracketException
from classbracket.store.base import TournamentStore
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "import": {
        "description": "Add students (names as arguments, or --file)",
        "options": {
            "<name>": "Student name (quote names with spaces)",
            "--file": "Text file with one student name per line",
        },
    },
    "students": {
        "description": "List the roster with match counts",
        "options": {
            "--active": "Only students still in the tournament",
            "--sort": "Order by name, matches or status",
            "--desc": "Reverse the order",
        },
    },
    "search": {
        "description": "Search students by name",
        "options": {
            "<term>": "Part of a name",
            "--active": "Only students still in the tournament",
        },
    },
    "record": {
        "description": "Record a match by picking the winner",
        "options": {
            "<player1>": "Name or id of the first student",
            "<player2>": "Name or id of the second student",
            "--winner": "Winning slot (player1/player2)",
        },
    },
    "play": {
        "description": "Record a rock/paper/scissors match",
        "options": {
            "<player1> <choice1>": "First student and their move",
            "<player2> <choice2>": "Second student and their move",
        },
    },
    "matches": {"description": "List recorded matches, newest first", "options": {}},
    "delete": {
        "description": "Delete a match and reactivate its loser",
        "options": {"<match_id>": "Id of the match to delete"},
    },
    "bracket": {
        "description": "Show the bracket rings and progression edges",
        "options": {"--positions": "Include node coordinates"},
    },
    "leaderboard": {"description": "Rank active students by wins", "options": {}},
    "stats": {"description": "Show tournament statistics", "options": {}},
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


@dataclass
class ConsoleContext:
    """Everything a command needs."""

    store: TournamentStore
    config: AppConfig = field(default_factory=AppConfig)

    def __post_init__(self) -> None:
        self.roster = RosterManager(self.store)
        self.recorder = MatchRecorder(self.store)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        flags = [opt for opt in info["options"] if opt.startswith("--")]
        options_completer = WordCompleter(flags) if flags else None
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


# ----- Parsers -----


def create_import_parser():
    parser = argparse.ArgumentParser(prog="import", description="Add students")
    parser.add_argument("names", nargs="*", help="Student names")
    parser.add_argument("--file", help="Text file with one name per line")
    return parser


def create_students_parser():
    parser = argparse.ArgumentParser(prog="students", description="List the roster")
    parser.add_argument("--active", action="store_true", help="Only active students")
    parser.add_argument(
        "--sort",
        choices=statistics.SORT_KEYS,
        default=statistics.SORT_NAME,
        help="Column to order by",
    )
    parser.add_argument("--desc", action="store_true", help="Reverse the order")
    return parser


def create_search_parser():
    parser = argparse.ArgumentParser(prog="search", description="Search students")
    parser.add_argument("term", help="Part of a name")
    parser.add_argument("--active", action="store_true", help="Only active students")
    return parser


def create_record_parser():
    parser = argparse.ArgumentParser(prog="record", description="Record a match")
    parser.add_argument("player1", help="Name or id of the first student")
    parser.add_argument("player2", help="Name or id of the second student")
    parser.add_argument(
        "--winner",
        choices=[SLOT_PLAYER1, SLOT_PLAYER2],
        required=True,
        help="Winning slot",
    )
    return parser


def create_play_parser():
    parser = argparse.ArgumentParser(prog="play", description="Rock/paper/scissors")
    parser.add_argument("player1", help="Name or id of the first student")
    parser.add_argument("choice1", choices=CHOICES, help="First student's move")
    parser.add_argument("player2", help="Name or id of the second student")
    parser.add_argument("choice2", choices=CHOICES, help="Second student's move")
    return parser


def create_delete_parser():
    parser = argparse.ArgumentParser(prog="delete", description="Delete a match")
    parser.add_argument("match_id", help="Id of the match")
    return parser


def create_bracket_parser():
    parser = argparse.ArgumentParser(prog="bracket", description="Show the bracket")
    parser.add_argument(
        "--positions", action="store_true", help="Include node coordinates"
    )
    return parser


def create_empty_parser(prog: str):
    return argparse.ArgumentParser(prog=prog)


# ----- Commands -----


def run_import_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    lines = list(args.names)
    if args.file:
        file_path = Path(args.file)
        if not file_path.exists():
            print(f"{Colors.FAIL}Error: File not found: {file_path}{Colors.ENDC}")
            return 1
        lines.extend(file_path.read_text(encoding="utf-8").splitlines())

    created = context.roster.import_students("\n".join(lines))
    print(f"{Colors.OKGREEN}Successfully imported {len(created)} students{Colors.ENDC}")
    return 0


def _print_students(students) -> None:
    if not students:
        print("No students found.")
        return
    for student in students:
        status = (
            f"{Colors.FAIL}eliminated{Colors.ENDC}"
            if student.eliminated
            else f"{Colors.OKGREEN}active{Colors.ENDC}"
        )
        print(f"  {student.name:30} {status:20} {student.id}")


def run_students_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    rows = statistics.students_with_match_counts(
        context.store.list_students(),
        context.store.list_matches(),
        active_only=args.active,
    )
    if not rows:
        print("No students found.")
        return 0

    for row in statistics.sort_standings(rows, args.sort, args.desc):
        status = (
            f"{Colors.FAIL}eliminated{Colors.ENDC}"
            if row.student.eliminated
            else f"{Colors.OKGREEN}active{Colors.ENDC}"
        )
        print(f"  {row.student.name:30} {row.match_count:3} matches  {status}")
    return 0


def run_search_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    _print_students(context.roster.search_students(args.term, active_only=args.active))
    return 0


def run_record_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    player1 = context.roster.resolve(args.player1)
    player2 = context.roster.resolve(args.player2)
    match = context.recorder.record_match_with_winner(
        player1.id, player2.id, args.winner
    )
    print(f"{Colors.OKGREEN}Match recorded: {match.winner} won ({match.id}){Colors.ENDC}")
    return 0


def run_play_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    player1 = context.roster.resolve(args.player1)
    player2 = context.roster.resolve(args.player2)
    match = context.recorder.record_choice_match(
        player1.id, args.choice1, player2.id, args.choice2
    )
    if match.is_tie:
        print(f"{Colors.WARNING}It's a tie! ({match.id}){Colors.ENDC}")
    else:
        print(f"{Colors.OKGREEN}Match recorded: {match.winner} won ({match.id}){Colors.ENDC}")
    return 0


def run_matches_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    matches = context.store.list_matches()
    if not matches:
        print("No matches recorded yet!")
        return 0
    for match in matches:
        outcome = "tie" if match.is_tie else f"{match.winner} won"
        when = match.created_at.strftime("%Y-%m-%d %H:%M")
        print(
            f"  {when}  {match.player1_name} vs {match.player2_name}: "
            f"{outcome}  [{match.id}]"
        )
    return 0


def run_delete_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    context.recorder.delete_match(args.match_id)
    print(f"{Colors.OKGREEN}Match deleted{Colors.ENDC}")
    return 0


def run_bracket_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    students = context.store.list_students()
    matches = context.store.list_matches()
    layout = compute_bracket(students, matches, context.config.layout)
    if layout.is_empty:
        print("No students imported yet!")
        return 0

    print(f"\n{Colors.BOLD}{len(students)} Students • {len(matches)} Matches{Colors.ENDC}")
    for wins in sorted(layout.tiers, reverse=True):
        tier_nodes = [node for node in layout.nodes if node.win_count == wins]
        print(
            f"\n{Colors.BOLD}{wins} wins{Colors.ENDC} "
            f"(ring radius {tier_nodes[0].radius:.0f})"
        )
        for node in tier_nodes:
            line = (
                f"  {node.name:25} W: {node.win_count}  L: {node.loss_count}"
                f"  T: {node.tie_count}  {node.status}"
            )
            if args.positions:
                line += f"  ({node.position.x:.1f}, {node.position.y:.1f})"
            print(line)

    if layout.edges:
        names = {node.student_id: node.name for node in layout.nodes}
        print(f"\n{Colors.BOLD}Progression:{Colors.ENDC}")
        for edge in layout.edges:
            print(
                f"  {names[edge.source_student_id]} -> "
                f"{names[edge.target_student_id]}  ({edge.label})"
            )
    print()
    return 0


def run_leaderboard_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    rows = statistics.leaderboard(
        context.store.list_students(), context.store.list_matches()
    )
    if not rows:
        print("No active students.")
        return 0
    for rank, row in enumerate(rows, start=1):
        print(
            f"  {rank:3}. {row.student.name:25} {row.win_count} wins "
            f"({row.match_count} matches)"
        )
    return 0


def run_stats_command(context: ConsoleContext, args: argparse.Namespace) -> int:
    students = context.store.list_students()
    matches = context.store.list_matches()
    status = statistics.tournament_status(students)
    choices = statistics.choice_statistics(matches)

    print(f"\n{Colors.BOLD}Tournament Statistics:{Colors.ENDC}")
    print(f"  Students: {status.total_students}")
    print(f"  Active: {status.active_students}")
    print(f"  Eliminated: {status.eliminated_students}")
    print(f"  Matches: {len(matches)}")
    print(
        f"  Participation: "
        f"{statistics.participation_percentage(students, matches):.1f}%"
    )
    if status.winner:
        print(f"  {Colors.OKGREEN}Winner: {status.winner.name}{Colors.ENDC}")
    elif status.is_complete:
        print("  Tournament complete")

    print(f"\n{Colors.BOLD}Moves:{Colors.ENDC}")
    for choice in CHOICES:
        print(
            f"  {choice:10} wins {choices.wins[choice]}  "
            f"losses {choices.losses[choice]}  ties {choices.ties[choice]}"
        )
    print()
    return 0


CommandRunner = Callable[[ConsoleContext, argparse.Namespace], int]

COMMAND_HANDLERS: Dict[str, tuple] = {
    "import": (create_import_parser, run_import_command),
    "students": (create_students_parser, run_students_command),
    "search": (create_search_parser, run_search_command),
    "record": (create_record_parser, run_record_command),
    "play": (create_play_parser, run_play_command),
    "matches": (lambda: create_empty_parser("matches"), run_matches_command),
    "delete": (create_delete_parser, run_delete_command),
    "bracket": (create_bracket_parser, run_bracket_command),
    "leaderboard": (
        lambda: create_empty_parser("leaderboard"),
        run_leaderboard_command,
    ),
    "stats": (lambda: create_empty_parser("stats"), run_stats_command),
}


def run_command(context: ConsoleContext, command: str, args_list: List[str]) -> int:
    """Parse and run one command.

    Returns:
        Exit status (0 on success)
    """
    create_parser, runner = COMMAND_HANDLERS[command]
    args = create_parser().parse_args(args_list)
    try:
        return runner(context, args)
    except ClassBracketException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


def execute_line(context: ConsoleContext, user_input: str) -> bool:
    """Handle one line typed at the prompt.

    Returns:
        False when the user asked to leave, True otherwise
    """
    user_input = user_input.strip()
    if not user_input:
        return True

    if user_input in ["exit", "quit", "q", "/exit"]:
        return False

    if user_input in ["/help", "help", "?", "/list"]:
        print_commands_list()
        return True

    try:
        parts = shlex.split(user_input)
    except ValueError as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return True

    # Strip leading "/" if present (support both "/command" and "command")
    command = parts[0].lstrip("/")
    args_list = parts[1:]

    if command == "help":
        if args_list:
            print_command_help(args_list[0].lstrip("/"))
        else:
            print_commands_list()
        return True

    if command not in COMMAND_HANDLERS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
        return True

    try:
        run_command(context, command, args_list)
    except SystemExit:
        # argparse calls sys.exit on error, catch it
        pass
    return True
