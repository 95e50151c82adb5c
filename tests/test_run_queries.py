from unittest.mock import MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from plp_bookstore import queries

STATS = {"nReturned": 1, "totalDocsExamined": 1}


@pytest.fixture()
def fake_explain(monkeypatch):
    monkeypatch.setattr(queries, "explain_title_lookup", lambda books, title: STATS)


@pytest.fixture()
def close_calls(client, monkeypatch):
    calls = []
    monkeypatch.setattr(client, "close", lambda: calls.append(True))
    return calls


def test_run_queries_full_sequence(client, books, fake_explain, close_calls, capsys):
    assert queries.run_queries(client, "plp_bookstore", "books") is True

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "✅ Connected to MongoDB"
    assert lines[-1] == "🔌 MongoDB connection closed"
    assert len(lines) == 18
    assert lines[4] == "💰 Price update result: 1"
    assert lines[5] == "🗑️ Delete result: 1"
    assert lines[-2].endswith(str(STATS))
    assert not any(line.startswith("❌") for line in lines)
    assert close_calls == [True]

    assert books.find_one({"title": "Atomic Habits"})["price"] == 13.99
    assert books.count_documents({"title": "1984"}) == 0


def test_run_queries_rerun_gives_zero_counts_and_same_reads(client, books, fake_explain, close_calls, capsys):
    queries.run_queries(client, "plp_bookstore", "books")
    first = capsys.readouterr().out.splitlines()

    assert queries.run_queries(client, "plp_bookstore", "books") is True
    second = capsys.readouterr().out.splitlines()
    assert "💰 Price update result: 0" in second
    assert "🗑️ Delete result: 0" in second
    # reads before the writes differ only by the updated price
    assert second[1] == first[1]
    assert second[2:4] == [line.replace("11.98", "13.99") for line in first[2:4]]

    queries.run_queries(client, "plp_bookstore", "books")
    assert capsys.readouterr().out.splitlines() == second
    assert close_calls == [True, True, True]


def test_run_queries_stops_at_first_failure(client, books, fake_explain, close_calls, monkeypatch, capsys):
    def boom(books, title):
        raise OperationFailure("write conflict")

    monkeypatch.setattr(queries, "delete_by_title", boom)

    assert queries.run_queries(client, "plp_bookstore", "books") is False

    lines = capsys.readouterr().out.splitlines()
    assert lines[4].startswith("💰 Price update result:")
    assert lines[5] == "❌ Error running queries: write conflict"
    assert lines[6] == "🔌 MongoDB connection closed"
    assert len(lines) == 7
    assert close_calls == [True]
    assert books.count_documents({"title": "1984"}) == 1


def test_run_queries_connection_refused_still_closes(capsys):
    client = MagicMock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("connection refused")

    assert queries.run_queries(client) is False

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "❌ Error running queries: connection refused",
        "🔌 MongoDB connection closed",
    ]
    client.close.assert_called_once_with()


def test_main_seeds_then_runs(client, fake_explain, close_calls, monkeypatch, capsys):
    monkeypatch.setattr(queries, "get_client", lambda uri=None: client)

    queries.main(["--seed", "--db", "cli_db", "--collection", "cli_books"])

    out = capsys.readouterr().out
    assert "Inserted 12 books" in out
    assert "❌" not in out
    assert client["cli_db"]["cli_books"].count_documents({}) == 11
    assert close_calls == [True, True]


def test_main_exits_nonzero_on_failure(monkeypatch):
    client = MagicMock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("down")
    monkeypatch.setattr(queries, "get_client", lambda uri=None: client)

    with pytest.raises(SystemExit) as exc:
        queries.main([])
    assert exc.value.code == 1
