"""sqldecl の設定値.

モジュール変数として定義し、参照側は呼び出し時に読み取る。
テストやアプリケーションから書き換えて使用する。
"""

from __future__ import annotations

ERROR_MESSAGE_LANGUAGE: str = "ja"
"""エラーメッセージの言語 ("ja" | "en")."""

ERROR_INCLUDE_SQL: bool = False
"""ヘッダエラーのメッセージに該当する宣言行を含めるか."""

DECLARATION_MARKER: str = "--?"
"""パラメータ宣言行の先頭記号."""
