"""Command-line entry point: shell integration, registration and queries."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from odds import discovery, paths, seeder
from odds.history import History
from odds.markov import MARKOV_N
from odds.persistence import PersistenceError
from odds.picker import ConfidenceRules, confident_pick, do_jump, pick_and_jump
from odds.ranking import rank_candidates
from odds.session import Session

BASH_ZSH_SCRIPT = r"""
o() {
    local result
    result=$(command odds query "$@")
    if [ -n "$result" ]; then
        cd "$result"
    elif [ "$#" -eq 1 ] && [ "$1" = "-" ]; then
        cd -
    fi
}
"""

BASH_EXTRA = r"""
_odds_register() {
    if [ "$PWD" != "$_ODDS_LAST_PWD" ]; then
        (command odds register --pwd "$PWD" &>/dev/null &)
        _ODDS_LAST_PWD="$PWD"
    fi
}
PROMPT_COMMAND="_odds_register;${PROMPT_COMMAND}"
"""

ZSH_EXTRA = r"""
chpwd() {
    (command odds register --pwd "$PWD" &>/dev/null &)
}
"""

MAX_RESULTS = 9
MAX_DEPTH = 5


def handle_init(shell: str) -> bool:
    """Print the shell integration script for ``shell``; False if unsupported."""
    scripts = {
        "bash": BASH_ZSH_SCRIPT + BASH_EXTRA,
        "zsh": BASH_ZSH_SCRIPT + ZSH_EXTRA,
    }
    script = scripts.get(shell)
    if script is None:
        print(f"Unsupported shell: {shell}", file=sys.stderr)
        return False
    print(script, end="")
    return True


def register(pwd: str) -> None:
    """Record a directory change made with a plain ``cd``."""
    path = Path(pwd)
    history = History.load_or_new()
    session = Session.load_or_new()

    current = session.current()
    if current is not None:
        context = session.entries[1:MARKOV_N]
        history.chain.register(context, current, path)

    history.record_visit(path)
    session.push(path)

    try:
        history.save()
    except PersistenceError as exc:
        print(f"Error saving history while registering regular cd: {exc}", file=sys.stderr)

    try:
        session.save()
    except PersistenceError as exc:
        print(f"Error saving session while registering regular cd: {exc}", file=sys.stderr)


def _display(path: Path, home: Path) -> str:
    try:
        relative = path.relative_to(home)
    except ValueError:
        return str(path)
    return "~/" if not relative.parts else f"~/{relative}"


def query(tokens: Sequence[str]) -> None:
    """Resolve ``tokens`` to a directory and print it for the shell to enter."""
    session = Session.load_or_new()
    history = History.load_or_new()

    # Like a bare cd: go home.
    if not tokens:
        do_jump(paths.home_dir())
        return

    # Like cd -: go back to the previous directory.
    if list(tokens) == ["-"]:
        previous = session.previous()
        if previous is not None:
            print(_display(previous, paths.home_dir()), file=sys.stderr)
            do_jump(previous)
        return

    explicit = paths.detect_explicit_path(tokens[0])
    if explicit is not None:
        do_jump(explicit)
        return

    ranked = rank_candidates(history.history_candidates(tokens), history, session, MAX_RESULTS)

    choice = confident_pick(ranked, ConfidenceRules())
    if choice is not None:
        do_jump(choice.path)
        return

    found = discovery.discover(tokens, MAX_DEPTH, MAX_RESULTS)
    pick_and_jump(rank_candidates(found, history, session, MAX_RESULTS))


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="odds")
    commands = parser.add_subparsers(dest="command", metavar="{init,seed}")

    init = commands.add_parser("init", help="print the shell integration script")
    init.add_argument("shell")

    commands.add_parser("seed", help="seed history from the shell's command history")

    reg = commands.add_parser("register")
    reg.add_argument("--pwd", required=True)

    ask = commands.add_parser("query")
    ask.add_argument("tokens", nargs=argparse.REMAINDER)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``odds`` command."""
    args_list = list(sys.argv[1:] if argv is None else argv)

    # Everything after "query" is a token, hyphens included.
    if args_list and args_list[0] == "query":
        query(args_list[1:])
        return 0

    args = _parser().parse_args(args_list)

    if args.command == "init":
        handle_init(args.shell)
    elif args.command == "seed":
        try:
            seeder.seed()
        except (seeder.SeedError, PersistenceError, OSError) as exc:
            print(f"Error seeding odds: {exc}", file=sys.stderr)
    elif args.command == "register":
        register(args.pwd)
    elif args.command == "query":
        query(args.tokens)
    else:
        print("Usage: odds [COMMAND]", file=sys.stderr)

    return 0