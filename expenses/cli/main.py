"""Command-line interface for recording and reviewing expenses."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from expenses import __version__
from expenses.errors import ConnectionFailure, ConstraintViolation
from expenses.logging import configure_cli_logging
from expenses.prompt import Confirm, confirm_keypress
from expenses.render import expense_lines, listing_lines
from expenses.store import ExpenseStore

LOG = logging.getLogger("expenses.cli")

DESCRIPTION = "An expense recording system"
COMMANDS = ("add", "clear", "list", "delete", "search")
# Everything after the command word is a positional word for these, even "-x".
FREE_TEXT_COMMANDS = ("add", "search")
CLEAR_QUESTION = "Are you sure? (y/n)"

HELP_TEXT = f"""{DESCRIPTION} (version {__version__})

Commands:

add AMOUNT MEMO - record a new expense
clear - delete all expenses
list - list all expenses
delete NUMBER - remove expense with id NUMBER
search QUERY - list expenses with a matching memo field"""


def _parse_expense_id(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an expense id, got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expenses",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="cmd", required=True)

    add = subparsers.add_parser("add", help="record a new expense")
    add.add_argument("amount", help="amount spent, at least 0.01 with up to 2 decimals")
    add.add_argument("memo", nargs="+", help="what the money was spent on")

    subparsers.add_parser("clear", help="delete all expenses")
    subparsers.add_parser("list", help="list all expenses")

    delete = subparsers.add_parser("delete", help="remove expense with id NUMBER")
    delete.add_argument("expense_id", metavar="NUMBER", type=_parse_expense_id)

    search = subparsers.add_parser("search", help="list expenses with a matching memo field")
    search.add_argument("query", nargs="+", help="text to look for in memos, case-insensitive")
    return parser


def _positional_only(arguments: list[str]) -> list[str]:
    command, rest = arguments[0], arguments[1:]
    if command in FREE_TEXT_COMMANDS:
        return [command, "--", *rest]
    return arguments


def _print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)


def _handle_add(args: argparse.Namespace, store: ExpenseStore) -> None:
    store.add(args.amount, " ".join(args.memo))


def _handle_list(args: argparse.Namespace, store: ExpenseStore) -> None:
    _print_lines(listing_lines(store.list()))


def _handle_search(args: argparse.Namespace, store: ExpenseStore) -> None:
    _print_lines(listing_lines(store.search(" ".join(args.query))))


def _handle_delete(args: argparse.Namespace, store: ExpenseStore) -> None:
    """Delete one expense and report what happened.

    A missing id only prints an informational message. The deleted row is
    shown with its own separator and total line.
    """

    deleted = store.delete(args.expense_id)
    if deleted is None:
        print(f"There is no expense with the id '{args.expense_id}'.")
        return
    print("The following expense has been deleted:")
    _print_lines(expense_lines([deleted]))


def _handle_clear(args: argparse.Namespace, store: ExpenseStore, confirm: Confirm) -> None:
    if not confirm(CLEAR_QUESTION):
        LOG.debug("Clear cancelled")
        return
    store.delete_all()
    print("All expenses have been deleted.")


def _dispatch(args: argparse.Namespace, store: ExpenseStore, confirm: Confirm) -> None:
    if args.cmd == "add":
        _handle_add(args, store)
    elif args.cmd == "list":
        _handle_list(args, store)
    elif args.cmd == "search":
        _handle_search(args, store)
    elif args.cmd == "delete":
        _handle_delete(args, store)
    elif args.cmd == "clear":
        _handle_clear(args, store, confirm)


def main(
    argv: Sequence[str] | None = None,
    *,
    store: ExpenseStore | None = None,
    confirm: Confirm | None = None,
) -> None:
    """Run one expense command.

    Args:
        argv: Command-line arguments without the program name; defaults to
            ``sys.argv[1:]``.
        store: Already connected store. When omitted the configured database
            is opened for the duration of the command.
        confirm: Confirmation callback used by ``clear``; defaults to a
            single keypress read from the terminal.

    Raises:
        SystemExit: With status 2 on missing or invalid arguments, or with
            the error message when the database rejects the command or
            cannot be opened.
    """

    arguments = list(sys.argv[1:] if argv is None else argv)
    if not arguments or arguments[0] not in COMMANDS:
        print(HELP_TEXT)
        return

    args, ignored = build_parser().parse_known_args(_positional_only(arguments))
    configure_cli_logging()
    if ignored:
        LOG.debug("Ignoring extra arguments for %s: %s", args.cmd, ignored)
    ask = confirm if confirm is not None else confirm_keypress
    try:
        if store is not None:
            _dispatch(args, store, ask)
        else:
            with ExpenseStore.connect() as opened:
                _dispatch(args, opened, ask)
    except (ConstraintViolation, ConnectionFailure) as exc:
        LOG.debug("%s failed: %s", args.cmd, exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
