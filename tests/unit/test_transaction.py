"""Unit tests for transaction helpers and TransactionManager."""

from __future__ import annotations

from unittest.mock import MagicMock, call, patch

import pytest

from dbutil.core.engine import Engine
from dbutil.core.exceptions import TransactionStateError
from dbutil.core.transaction import (
    TransactionManager,
    commit_transaction,
    rollback_transaction,
)


def _count(engine: Engine) -> int:
    return engine.fetch_rows("SELECT COUNT(*) AS cnt FROM users")[0]["cnt"]  # type: ignore[no-any-return]


class TestAutocommitReset:
    def test_new_connection_is_autocommit(self, engine: Engine) -> None:
        with engine.connect() as conn:
            assert engine.adapter.get_autocommit(conn) is True

    def test_begin_disables_autocommit(self, engine: Engine) -> None:
        with engine.connect() as conn:
            engine.begin(conn)
            assert engine.adapter.get_autocommit(conn) is False
            engine.rollback(conn)

    def test_commit_restores_autocommit(self, engine: Engine) -> None:
        with engine.connect() as conn:
            engine.begin(conn)
            engine.execute_update(conn, "INSERT INTO users (id, name) VALUES (3, 'Cy')")
            engine.commit(conn)
            assert engine.adapter.get_autocommit(conn) is True
        assert _count(engine) == 3

    def test_rollback_restores_autocommit(self, engine: Engine) -> None:
        with engine.connect() as conn:
            engine.begin(conn)
            engine.execute_update(conn, "INSERT INTO users (id, name) VALUES (3, 'Cy')")
            engine.rollback(conn)
            assert engine.adapter.get_autocommit(conn) is True
        assert _count(engine) == 2

    def test_commit_order(self) -> None:
        connection, adapter = MagicMock(), MagicMock()
        order: list[object] = []
        connection.commit.side_effect = lambda: order.append("commit")
        adapter.set_autocommit.side_effect = lambda conn, enabled: order.append(enabled)
        commit_transaction(connection, adapter)
        assert order == ["commit", True]

    def test_failed_rollback_leaves_autocommit_alone(self) -> None:
        connection, adapter = MagicMock(), MagicMock()
        connection.rollback.side_effect = RuntimeError("connection lost")
        with pytest.raises(RuntimeError, match="connection lost"):
            rollback_transaction(connection, adapter)
        adapter.set_autocommit.assert_not_called()


class TestTransactionManager:
    def test_commit_persists_changes(self, engine: Engine) -> None:
        with engine.transaction() as tx:
            tx.execute("INSERT INTO users (id, name) VALUES (3, 'Cy')")
        assert _count(engine) == 3

    def test_auto_rollback_on_exception(self, engine: Engine) -> None:
        with pytest.raises(RuntimeError, match="boom"), engine.transaction() as tx:
            tx.execute("INSERT INTO users (id, name) VALUES (3, 'Cy')")
            raise RuntimeError("boom")
        assert _count(engine) == 2

    def test_explicit_rollback(self, engine: Engine) -> None:
        with engine.transaction() as tx:
            tx.execute("INSERT INTO users (id, name) VALUES (3, 'Cy')")
            tx.rollback()
        assert _count(engine) == 2

    def test_execute_returns_row_count(self, engine: Engine) -> None:
        with engine.transaction() as tx:
            assert tx.execute("UPDATE users SET email = 'x@example.com'") == 2

    def test_fetch_within_transaction_sees_own_writes(self, engine: Engine) -> None:
        with engine.transaction() as tx:
            tx.execute("INSERT INTO users (id, name) VALUES (3, 'Cy')")
            rows = tx.fetch_rows("SELECT name FROM users ORDER BY id")
            assert [r["name"] for r in rows] == ["Ann", "Bob", "Cy"]
            pairs = tx.fetch_pairs("SELECT id FROM users WHERE id = 3")
            assert pairs == [[("id", 3)]]

    def test_borrowed_connection_stays_open(self, engine: Engine) -> None:
        with engine.connect() as conn:
            with engine.transaction(conn) as tx:
                tx.execute("INSERT INTO users (id, name) VALUES (3, 'Cy')")
            assert engine.adapter.get_autocommit(conn) is True
            assert engine.fetch_rows("SELECT id FROM users WHERE id = 3", connection=conn) == [
                {"id": 3}
            ]

    def test_commit_after_rollback_raises(self, engine: Engine) -> None:
        with engine.transaction() as tx:
            tx.execute("INSERT INTO users (id, name) VALUES (3, 'Cy')")
            tx.rollback()
            with pytest.raises(TransactionStateError):
                tx.commit()

    def test_execute_after_commit_raises(self, engine: Engine) -> None:
        with engine.transaction() as tx:
            tx.commit()
            with pytest.raises(TransactionStateError, match="committed"):
                tx.execute("DELETE FROM users")

    def test_execute_before_enter_raises(self) -> None:
        tx = TransactionManager(MagicMock(), MagicMock())
        with pytest.raises(TransactionStateError, match="idle"):
            tx.execute("DELETE FROM users")

    def test_owned_connection_closed_on_exit(self) -> None:
        connection, adapter = MagicMock(), MagicMock()
        with TransactionManager(connection, adapter):
            pass
        connection.commit.assert_called_once()
        connection.close.assert_called_once()
        adapter.set_autocommit.assert_has_calls(
            [call(connection, False), call(connection, True)]
        )

    def test_connection_closed_when_commit_fails(self) -> None:
        connection, adapter = MagicMock(), MagicMock()
        connection.commit.side_effect = RuntimeError("deadlock")
        with pytest.raises(RuntimeError, match="deadlock"):
            with TransactionManager(connection, adapter):
                pass
        connection.close.assert_called_once()

    def test_connection_opened_on_enter(self) -> None:
        connection, adapter = MagicMock(), MagicMock()
        opener = MagicMock(return_value=connection)
        tx = TransactionManager(None, adapter, opener=opener)
        opener.assert_not_called()
        assert tx.connection is None
        with tx:
            opener.assert_called_once_with()
            assert tx.connection is connection
        connection.close.assert_called_once()

    def test_engine_transaction_never_entered_holds_no_connection(self, engine: Engine) -> None:
        with patch.object(engine.connection_manager, "open") as open_:
            tx = engine.transaction()
        open_.assert_not_called()
        assert tx.connection is None

    def test_needs_connection_or_opener(self) -> None:
        with pytest.raises(ValueError, match="connection or an opener"):
            TransactionManager(None, MagicMock())
