"""Command-line interface for Partner Pairing.

This module provides the ``partner-pairing`` command with one subcommand per
operation, and an interactive shell with autocomplete when started without
arguments.
"""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
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
import logging
import sys
import time
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import confirm
from prompt_toolkit.styles import Style

from partnerpairing.constants import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_BENCHMARK_BUDGETS,
    DEFAULT_BENCHMARK_TRIALS,
    LOGGER_NAME,
)
from partnerpairing.controllers import SessionManager
from partnerpairing.exceptions import PartnerPairingException
from partnerpairing.models.session import SessionConfig, load_config
from partnerpairing.pairing import create_greedy_pairings
from partnerpairing.utils import set_log_level, setup_logger
from partnerpairing.utils.print import (
    format_groups,
    format_sessions,
    save_groups_html,
)
from partnerpairing.utils.validation import validate_iterations

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
    "generate": {
        "description": "Generate groups for a new session",
        "options": {
            "--roster": "Roster file (.json, .txt or .csv)",
            "--db": "History database file",
            "--iterations": "Number of random attempts (default: 10000)",
            "--seed": "Random seed for reproducibility",
            "--no-save": "Do not record the session",
            "--no-matrix": "Do not print the encounter matrix",
            "--html": "Also write a printable HTML sheet",
            "--title": "Title for the HTML sheet",
            "--config": "JSON config file",
        },
    },
    "history": {
        "description": "List recorded sessions",
        "options": {
            "--db": "History database file",
            "--config": "JSON config file",
        },
    },
    "matrix": {
        "description": "Show how often each pair has met",
        "options": {
            "--roster": "Roster file",
            "--db": "History database file",
            "--config": "JSON config file",
        },
    },
    "undo": {
        "description": "Remove the most recent session",
        "options": {
            "--db": "History database file",
            "--config": "JSON config file",
        },
    },
    "import": {
        "description": "Record a grouping made elsewhere (JSON array of groups)",
        "options": {
            "--file": "Groups file to import",
            "--db": "History database file",
            "--config": "JSON config file",
        },
    },
    "benchmark": {
        "description": "Compare repeat score and time per iteration budget",
        "options": {
            "--roster": "Roster file",
            "--db": "History database file",
            "--budgets": "Comma separated budgets (default: 10,100,1000,10000)",
            "--trials": "Runs per budget (default: 5)",
            "--seed": "Base random seed",
            "--config": "JSON config file",
        },
    },
}


def parse_iterations(value: str) -> int:
    """Parse an iteration budget for argparse.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid budget
    """
    try:
        iterations = int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid iterations '{value}'. Must be an integer")
    result = validate_iterations(iterations)
    if not result:
        raise argparse.ArgumentTypeError(result.error_message)
    return iterations


def parse_trials(value: str) -> int:
    """Parse the number of benchmark runs per budget for argparse."""
    try:
        trials = int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid trials '{value}'. Must be an integer")
    if trials < 1:
        raise argparse.ArgumentTypeError(f"Trials must be at least 1, got {trials}")
    return trials


def parse_budgets(value: str) -> List[int]:
    """Parse a comma separated list of iteration budgets, e.g. ``10,100,1000``."""
    budgets = [parse_iterations(part) for part in value.split(",") if part.strip()]
    if not budgets:
        raise argparse.ArgumentTypeError("At least one budget is required")
    return sorted(set(budgets))


def build_config(args: argparse.Namespace) -> SessionConfig:
    """Combine the config file (if any) with command line overrides."""
    config_path = getattr(args, "config", None)
    config = load_config(config_path) if config_path else SessionConfig()

    config = config.with_overrides(
        roster_path=getattr(args, "roster", None),
        database_path=getattr(args, "db", None),
        iterations=getattr(args, "iterations", None),
        seed=getattr(args, "seed", None),
    )
    if getattr(args, "no_save", False):
        config = config.with_overrides(save=False)
    if getattr(args, "no_matrix", False):
        config = config.with_overrides(show_matrix=False)
    return config


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                   PARTNER PAIRING - CLI                       ║
║                                                               ║
║               [New partners every session]                    ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}verbose{Colors.ENDC} to switch debug logging on or off
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


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
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None
    completions["/verbose"] = None
    completions["verbose"] = None

    return NestedCompleter.from_nested_dict(completions)


def toggle_verbose() -> bool:
    """Switch debug logging on or off; returns True when it is now on."""
    verbose = not logging.getLogger(LOGGER_NAME).isEnabledFor(logging.DEBUG)
    set_log_level(logging.DEBUG if verbose else logging.WARNING)
    return verbose


# ---------- command implementations ----------


def run_generate_command(args: argparse.Namespace) -> int:
    """Generate, optionally record, and display a new session."""
    config = build_config(args)
    manager = SessionManager(config)
    try:
        roster = manager.load_roster()
        print(f"{len(roster)} participants loaded.")
        print(f"{len(manager.load_history())} distinct pairs in history.")

        result = manager.create_session()
        print(f"Total score of the chosen combination: {result.total_score}")

        session_id: Optional[int] = None
        save = config.save
        if save and getattr(args, "confirm", False):
            save = confirm("Record these groups in the history?")
        if save:
            session_id = manager.save_session(result)
            print(f"{Colors.OKGREEN}Groups recorded as session {session_id}{Colors.ENDC}")
        else:
            print(f"{Colors.WARNING}Groups not recorded{Colors.ENDC}")

        print()
        print(format_groups(result))

        if getattr(args, "html", None):
            path = save_groups_html(result, args.html, getattr(args, "title", ""), session_id)
            print(f"Group sheet written to {path}")

        if config.show_matrix:
            print(f"\n{Colors.BOLD}Encounter matrix:{Colors.ENDC}")
            print(manager.matrix())
    finally:
        manager.close()
    return 0


def run_history_command(args: argparse.Namespace) -> int:
    """List recorded sessions."""
    manager = SessionManager(build_config(args))
    try:
        print(format_sessions(manager.sessions()))
    finally:
        manager.close()
    return 0


def run_matrix_command(args: argparse.Namespace) -> int:
    """Print the encounter matrix for the roster."""
    manager = SessionManager(build_config(args))
    try:
        print(manager.matrix())
    finally:
        manager.close()
    return 0


def run_undo_command(args: argparse.Namespace) -> int:
    """Remove the last recorded session."""
    manager = SessionManager(build_config(args))
    try:
        session_id = manager.undo_last_session()
    finally:
        manager.close()

    if session_id is None:
        print(f"{Colors.WARNING}No session to undo{Colors.ENDC}")
        return 1
    print(f"{Colors.OKGREEN}Removed session {session_id}{Colors.ENDC}")
    return 0


def run_import_command(args: argparse.Namespace) -> int:
    """Record a grouping from a JSON file as a new session."""
    manager = SessionManager(build_config(args))
    try:
        session_id = manager.import_session(args.file)
    finally:
        manager.close()
    print(f"{Colors.OKGREEN}Imported {args.file} as session {session_id}{Colors.ENDC}")
    return 0


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run the generator with several budgets and compare the outcome."""
    config = build_config(args)
    budgets = args.budgets or list(DEFAULT_BENCHMARK_BUDGETS)
    trials = args.trials
    base_seed = config.seed if config.seed is not None else 42

    manager = SessionManager(config)
    try:
        roster = manager.load_roster()
        history = manager.load_history()
    finally:
        manager.close()

    print(f"\n{Colors.BOLD}Running benchmark...{Colors.ENDC}")
    print(f"Roster: {len(roster)} participants, {len(history)} distinct pairs in history")
    print(f"Trials per budget: {trials}\n")
    print(f"{'Budget':>8}  {'Best':>5}  {'Avg':>7}  {'Worst':>5}  {'Avg time':>10}")

    for budget in budgets:
        scores = []
        times = []
        for trial in range(trials):
            start = time.perf_counter()
            result = create_greedy_pairings(
                roster, history, iterations=budget, seed=base_seed + trial
            )
            times.append(time.perf_counter() - start)
            scores.append(result.total_score)

        print(
            f"{budget:>8}  {min(scores):>5}  {sum(scores) / len(scores):>7.2f}"
            f"  {max(scores):>5}  {sum(times) / len(times) * 1000:>8.2f}ms"
        )

    return 0


# ---------- parsers ----------


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="JSON config file")


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="partner-pairing",
        description=f"{APP_NAME}: pair participants while avoiding repeat partners",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  partner-pairing

  # Generate and record the next session
  partner-pairing generate --roster students.json --db db.sqlite

  # Try a grouping without recording it
  partner-pairing generate --no-save --seed 7

  # Show past sessions and the encounter matrix
  partner-pairing history
  partner-pairing matrix

  # Compare iteration budgets
  partner-pairing benchmark --budgets 10,100,1000 --trials 10
        """,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {APP_VERSION}"
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help=COMMANDS["generate"]["description"])
    gen_parser.add_argument("--roster", help="Roster file")
    gen_parser.add_argument("--db", help="History database file")
    gen_parser.add_argument("--iterations", type=parse_iterations)
    gen_parser.add_argument("--seed", type=int)
    gen_parser.add_argument("--no-save", action="store_true")
    gen_parser.add_argument("--no-matrix", action="store_true")
    gen_parser.add_argument("--html", help="Write a printable HTML sheet")
    gen_parser.add_argument("--title", default="", help="Title for the HTML sheet")
    _add_config_argument(gen_parser)
    gen_parser.set_defaults(func=run_generate_command)

    hist_parser = subparsers.add_parser("history", help=COMMANDS["history"]["description"])
    hist_parser.add_argument("--db", help="History database file")
    _add_config_argument(hist_parser)
    hist_parser.set_defaults(func=run_history_command)

    matrix_parser = subparsers.add_parser("matrix", help=COMMANDS["matrix"]["description"])
    matrix_parser.add_argument("--roster", help="Roster file")
    matrix_parser.add_argument("--db", help="History database file")
    _add_config_argument(matrix_parser)
    matrix_parser.set_defaults(func=run_matrix_command)

    undo_parser = subparsers.add_parser("undo", help=COMMANDS["undo"]["description"])
    undo_parser.add_argument("--db", help="History database file")
    _add_config_argument(undo_parser)
    undo_parser.set_defaults(func=run_undo_command)

    import_parser = subparsers.add_parser("import", help=COMMANDS["import"]["description"])
    import_parser.add_argument("--file", required=True, help="Groups file (JSON)")
    import_parser.add_argument("--db", help="History database file")
    _add_config_argument(import_parser)
    import_parser.set_defaults(func=run_import_command)

    bench_parser = subparsers.add_parser(
        "benchmark", help=COMMANDS["benchmark"]["description"]
    )
    bench_parser.add_argument("--roster", help="Roster file")
    bench_parser.add_argument("--db", help="History database file")
    bench_parser.add_argument("--budgets", type=parse_budgets)
    bench_parser.add_argument(
        "--trials", type=parse_trials, default=DEFAULT_BENCHMARK_TRIALS
    )
    bench_parser.add_argument("--seed", type=int)
    _add_config_argument(bench_parser)
    bench_parser.set_defaults(func=run_benchmark_command)

    return parser


def execute(args: argparse.Namespace) -> int:
    """Run the command selected by ``args`` and turn errors into exit codes."""
    try:
        return args.func(args)
    except PartnerPairingException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        logger.debug("Command %s failed", args.command, exc_info=True)
        return 1


# ---------- modes ----------


def run_interactive_mode() -> int:
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
    parser = create_main_parser()

    while True:
        try:
            user_input = session.prompt("partner-pairing> ").strip()

            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            if user_input in ["/verbose", "verbose"]:
                state = "on" if toggle_verbose() else "off"
                print(f"Debug logging {state}")
                continue

            if user_input.startswith("/help ") or user_input.startswith("help "):
                print_command_help(user_input.split()[1].lstrip("/"))
                continue

            parts = user_input.split()
            command = parts[0].lstrip("/")
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                args = parser.parse_args([command] + parts[1:])
            except SystemExit:
                # argparse calls sys.exit on error
                continue

            # Recording is confirmed explicitly in interactive mode
            args.confirm = True
            try:
                execute(args)
            except Exception as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break

    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.interactive:
        return run_interactive_mode()

    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return execute(args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the partner-pairing CLI."""
    if argv is None:
        argv = sys.argv[1:]

    # If no arguments, start interactive mode
    if not argv:
        return run_interactive_mode()

    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
