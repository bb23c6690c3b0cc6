"""pytest 共通設定: 設定値の復元と DB テスト基盤."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Generator
from typing import Any

import pytest

from sqldecl import config

# --- 接続 URL ---
POSTGRESQL_URL = os.environ.get(
    "SQLDECL_TEST_POSTGRESQL_URL",
    "host=localhost port=5432 dbname=sqldecl_test user=sqldecl password=sqldecl_test_pass",
)


def _can_connect_postgresql() -> bool:
    """PostgreSQL に接続可能か判定する."""
    try:
        import psycopg

        conn = psycopg.connect(POSTGRESQL_URL, connect_timeout=3)
        conn.close()
    except Exception:
        return False
    return True


# --- DB 接続可否キャッシュ ---
_pg_available: bool | None = None


def _is_pg_available() -> bool:
    global _pg_available
    if _pg_available is None:
        _pg_available = _can_connect_postgresql()
    return _pg_available


# --- マーカーによる自動スキップ ---
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "postgresql: PostgreSQL が必要なテスト")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """DB マーカー付きテストを接続不可時に自動スキップする."""
    for item in items:
        if "postgresql" in item.keywords and not _is_pg_available():
            item.add_marker(pytest.mark.skip(reason="PostgreSQL is not available"))


# --- 設定値 ---
@pytest.fixture(autouse=True)
def _restore_config() -> Generator[None, None, None]:
    """テスト中に変更された設定値を元に戻す."""
    saved = (config.ERROR_MESSAGE_LANGUAGE, config.ERROR_INCLUDE_SQL, config.DECLARATION_MARKER)
    yield
    (
        config.ERROR_MESSAGE_LANGUAGE,
        config.ERROR_INCLUDE_SQL,
        config.DECLARATION_MARKER,
    ) = saved


# --- DB fixture ---
@pytest.fixture
def sqlite_conn() -> Generator[sqlite3.Connection, None, None]:
    """SQLite インメモリ接続 fixture."""
    conn = sqlite3.connect(":memory:")
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def pg_conn() -> Generator[Any, None, None]:
    """PostgreSQL 接続 fixture."""
    import psycopg

    conn = psycopg.connect(POSTGRESQL_URL)
    try:
        yield conn
    finally:
        conn.close()
