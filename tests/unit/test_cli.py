from __future__ import annotations

from pathlib import Path

import pytest

from expenses import __version__
from expenses.cli.main import HELP_TEXT, main
from expenses.render import SEPARATOR
from expenses.store import ExpenseStore


def _never(question: str) -> bool:
    raise AssertionError("confirmation should not be requested")


@pytest.mark.parametrize("argv", [[], ["bogus"], ["--help"], ["LIST"]])
def test_unknown_command_prints_help(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    main(argv)
    out = capsys.readouterr().out
    assert out == HELP_TEXT + "\n"
    for usage in ("add AMOUNT MEMO", "clear", "list", "delete NUMBER", "search QUERY"):
        assert usage in out


@pytest.mark.parametrize("argv", [["add"], ["add", "5.00"], ["search"], ["delete"], ["delete", "abc"]])
def test_missing_arguments_abort_with_usage(
    argv: list[str], store: ExpenseStore, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv, store=store, confirm=_never)
    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err
    assert store.count() == 0


def test_add_then_list(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    main(["add", "20.00", "train ticket"], store=store)
    assert capsys.readouterr().out == ""

    main(["list"], store=store)
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "There is 1 expense.",
        "  1 | 2026-10-19 |        20.00 | train ticket",
        SEPARATOR,
        "Total " + "20.00".rjust(25),
    ]


def test_add_joins_memo_words(store: ExpenseStore) -> None:
    main(["add", "3.10", "bus", "fare"], store=store)
    assert [record.memo for record in store.list()] == ["bus fare"]


def test_list_reports_total(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    main(["add", "5.00", "coffee"], store=store)
    main(["add", "15.25", "dinner"], store=store)
    main(["list"], store=store)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "There are 2 expenses."
    assert lines[-1] == "Total " + "20.25".rjust(25)


def test_list_empty(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    main(["list"], store=store)
    assert capsys.readouterr().out == "There are no expenses\n"


def test_search_totals_only_matches(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    store.add("5.00", "coffee")
    store.add("15.25", "dinner")
    store.add("2.00", "Coffee refill")
    main(["search", "COFFEE"], store=store)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "There are 2 expenses."
    assert lines[1].endswith("| coffee")
    assert lines[2].endswith("| Coffee refill")
    assert lines[-1] == "Total " + "7.00".rjust(25)


def test_delete_missing_id(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    main(["delete", "999"], store=store)
    assert capsys.readouterr().out == "There is no expense with the id '999'.\n"
    assert store.count() == 0


def test_delete_prints_row_and_total(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    record = store.add("9.99", "book")
    store.add("1.00", "pen")
    main(["delete", str(record.id)], store=store)
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "The following expense has been deleted:",
        f"{record.id:>3} | 2026-10-19 |         9.99 | book",
        SEPARATOR,
        "Total " + "9.99".rjust(25),
    ]
    assert store.count() == 1


def test_clear_declined_keeps_rows(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    store.add("5.00", "coffee")
    questions: list[str] = []

    def decline(question: str) -> bool:
        questions.append(question)
        return False

    main(["clear"], store=store, confirm=decline)
    assert questions == ["Are you sure? (y/n)"]
    assert capsys.readouterr().out == ""
    assert store.count() == 1


def test_clear_confirmed_removes_all(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    store.add("5.00", "coffee")
    store.add("15.25", "dinner")
    main(["clear"], store=store, confirm=lambda question: True)
    assert capsys.readouterr().out == "All expenses have been deleted.\n"
    assert store.count() == 0


def test_constraint_violation_aborts(store: ExpenseStore) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["add", "0.00", "free"], store=store)
    assert excinfo.value.code not in (0, None)
    assert store.count() == 0


def test_non_numeric_amount_aborts(store: ExpenseStore) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["add", "ten", "lunch"], store=store)
    assert "amount" in str(excinfo.value.code)


def test_configured_database_round_trip(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("EXPENSES_DATABASE_URL", f"sqlite:///{tmp_path / 'expenses.db'}")
    main(["add", "5.00", "coffee"])
    main(["add", "15.25", "dinner"])
    main(["search", "din"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "There is 1 expense."
    assert lines[1].endswith("|        15.25 | dinner")


def test_unreachable_database_stops_before_dispatch(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("EXPENSES_DATABASE_URL", f"sqlite:///{tmp_path / 'absent' / 'expenses.db'}")
    with pytest.raises(SystemExit) as excinfo:
        main(["clear"], confirm=_never)
    assert "Unable to open the expenses database" in str(excinfo.value.code)


@pytest.mark.parametrize(
    ("argv", "memo"),
    [
        (["add", "5.00", "-refund"], "-refund"),
        (["add", "2.50", "coffee", "-x", "large"], "coffee -x large"),
    ],
)
def test_add_accepts_dash_prefixed_memo(argv: list[str], memo: str, store: ExpenseStore) -> None:
    main(argv, store=store)
    assert [record.memo for record in store.list()] == [memo]


def test_search_accepts_dash_prefixed_query(store: ExpenseStore, capsys: pytest.CaptureFixture[str]) -> None:
    store.add("4.00", "-x adapter")
    store.add("9.00", "cable")
    main(["search", "-x"], store=store)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "There is 1 expense."
    assert lines[1].endswith("| -x adapter")


@pytest.mark.parametrize("argv", [["list", "extra"], ["list", "--verbose"]])
def test_list_ignores_trailing_words(
    argv: list[str], store: ExpenseStore, capsys: pytest.CaptureFixture[str]
) -> None:
    store.add("5.00", "coffee")
    main(argv, store=store)
    assert capsys.readouterr().out.splitlines()[0] == "There is 1 expense."


def test_clear_ignores_trailing_words(store: ExpenseStore) -> None:
    store.add("5.00", "coffee")
    main(["clear", "now"], store=store, confirm=lambda question: False)
    assert store.count() == 1


def test_help_banner_shows_version(capsys: pytest.CaptureFixture[str]) -> None:
    main([])
    assert f"(version {__version__})" in capsys.readouterr().out.splitlines()[0]
