# ruff: noqa: I001
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import inspect

from mono_db.client import open_engine, session_scope, sqlite_url
from mono_import import ErrorKind, MonoImportError, Transaction, load_statements
from mono_import import persistence
from mono_import.persistence import ensure_schema, insert_transactions, to_row

from tests.helpers.db import bootstrap_sqlite_db, count_rows, fetch_rows


def _tx(**overrides) -> Transaction:
    values = {
        "created_at": datetime(2024, 1, 1, 10, 0, 0),
        "title": "Coffee",
        "mcc": 5812,
        "amount": -550,
        "amount_orig": -550,
        "currency": "UAH",
        "exchange": 10_000_000,
        "commission": 0,
        "cashback": 0,
        "rest": 99_450,
    }
    values.update(overrides)
    return Transaction(**values)


def _insert(url: str, transactions):
    with open_engine(database_url=url) as engine, session_scope(engine) as session:
        return insert_transactions(session, transactions)


def test_to_row_divides_fixed_point_back_down():
    row = to_row(_tx(exchange=3_925_425, cashback=412))

    assert row["amount"] == Decimal("-5.50")
    assert row["amount_orig"] == Decimal("-5.50")
    assert row["exchange"] == Decimal("39.25425")
    assert row["cashback"] == Decimal("4.12")
    assert row["rest"] == Decimal("994.50")
    assert row["mcc"] == 5812
    assert row["created_at"] == datetime(2024, 1, 1, 10, 0, 0)


def test_ensure_schema_creates_table_with_natural_key(tmp_path: Path):
    url = sqlite_url(tmp_path / "store.db")
    with open_engine(database_url=url) as engine:
        ensure_schema(engine)
        ensure_schema(engine)  # second call is a no-op
        insp = inspect(engine)
        assert "mono" in insp.get_table_names()
        uniques = insp.get_unique_constraints("mono")

    assert any(
        sorted(u["column_names"]) == ["amount", "created_at", "title"] for u in uniques
    )


def test_insert_stores_decimal_values(tmp_path: Path, january_csv: Path):
    url = bootstrap_sqlite_db(tmp_path / "store.db")
    transactions = load_statements([january_csv]).transactions

    report = _insert(url, transactions)

    assert (report.inserted, report.attempted, report.skipped) == (4, 4, 0)
    rows = fetch_rows(url)
    assert [r["title"] for r in rows] == ["Coffee", "Silpo", "Netflix", "Salary, January"]
    netflix = rows[2]
    assert netflix["amount"] == Decimal("-392.15")
    assert netflix["amount_orig"] == Decimal("-9.99")
    assert netflix["exchange"] == Decimal("39.25425")
    assert netflix["currency"] == "USD"
    assert netflix["created_at"] == datetime(2024, 1, 5, 9, 15, 0)


def test_reinserting_same_records_inserts_nothing(tmp_path: Path, january_csv: Path):
    url = bootstrap_sqlite_db(tmp_path / "store.db")
    transactions = load_statements([january_csv]).transactions

    _insert(url, transactions)
    again = _insert(url, transactions)

    assert (again.inserted, again.attempted, again.skipped) == (0, 4, 4)
    assert count_rows(url) == 4


def test_conflict_skips_only_the_stored_row(tmp_path: Path):
    url = bootstrap_sqlite_db(tmp_path / "store.db")
    _insert(url, [_tx()])

    # Same natural key with a different balance is still a duplicate.
    report = _insert(url, [_tx(rest=1), _tx(title="Tea"), _tx(amount=-551)])

    assert (report.inserted, report.attempted) == (2, 3)
    rows = fetch_rows(url)
    assert len(rows) == 3
    assert rows[0]["rest"] == Decimal("994.50")


def test_empty_batch(tmp_path: Path):
    url = bootstrap_sqlite_db(tmp_path / "store.db")
    report = _insert(url, [])
    assert (report.inserted, report.attempted) == (0, 0)


def test_unopenable_store_is_reported(tmp_path: Path):
    url = sqlite_url(tmp_path / "no" / "such" / "dir" / "store.db")

    with open_engine(database_url=url) as engine:
        with pytest.raises(MonoImportError) as exc:
            ensure_schema(engine)

    assert exc.value.kind is ErrorKind.STORE_UNAVAILABLE


def test_write_failure_names_the_record(tmp_path: Path):
    url = bootstrap_sqlite_db(tmp_path / "store.db")
    with open_engine(database_url=url) as engine:
        with engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE mono")
        with pytest.raises(MonoImportError) as exc:
            with session_scope(engine) as session:
                insert_transactions(session, [_tx()])

    assert exc.value.kind is ErrorKind.WRITE_FAILED
    assert "Coffee" in str(exc.value)


def test_integer_beyond_64_bits_is_a_write_failure(tmp_path: Path):
    url = bootstrap_sqlite_db(tmp_path / "store.db")

    with pytest.raises(MonoImportError) as exc:
        _insert(url, [_tx(mcc=10**19)])

    assert exc.value.kind is ErrorKind.WRITE_FAILED
    assert count_rows(url) == 0


def test_unsupported_dialect_is_rejected_before_creating_the_table(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(persistence, "_INSERTS", {"postgresql": persistence.pg_insert})
    url = sqlite_url(tmp_path / "store.db")

    with open_engine(database_url=url) as engine:
        with pytest.raises(MonoImportError) as exc:
            ensure_schema(engine)
        assert "mono" not in inspect(engine).get_table_names()

    assert exc.value.kind is ErrorKind.STORE_UNAVAILABLE
    assert "'sqlite'" in str(exc.value)
