"""Dialect enum: RDBMS ごとのプレースホルダ形式."""

from __future__ import annotations

from enum import Enum
from typing import Any

NAMED_PLACEHOLDER = ":name"

POSITIONAL_PLACEHOLDERS = frozenset({"?", "%s"})


class Dialect(Enum):
    """RDBMS ごとの SQL 方言.

    POSTGRESQL と MYSQL は同じプレースホルダ ``%s`` を使用するが、
    接続からの自動検出で区別するため別メンバーとして定義する。
    """

    SQLITE = ("sqlite", "?")
    POSTGRESQL = ("postgresql", "%s")
    MYSQL = ("mysql", "%s")
    ORACLE = ("oracle", NAMED_PLACEHOLDER)

    def __init__(self, dialect_id: str, placeholder_fmt: str) -> None:
        self._dialect_id = dialect_id
        self._placeholder_fmt = placeholder_fmt

    @property
    def dialect_id(self) -> str:
        """方言の識別子."""
        return self._dialect_id

    @property
    def placeholder(self) -> str:
        """プレースホルダ文字列を返す."""
        return self._placeholder_fmt

    @property
    def is_named(self) -> bool:
        """名前付きプレースホルダ（``:name``）を使用するか."""
        return self._placeholder_fmt == NAMED_PLACEHOLDER

    @classmethod
    def detect(cls, connection: Any) -> Dialect | None:
        """DB-API 接続オブジェクトのモジュール名から方言を推定する.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠）

        Returns:
            推定した方言。判定できない場合は None。

        """
        module = type(connection).__module__
        if "sqlite3" in module:
            return cls.SQLITE
        if "psycopg" in module:
            return cls.POSTGRESQL
        if "pymysql" in module:
            return cls.MYSQL
        if "oracledb" in module:
            return cls.ORACLE
        return None
