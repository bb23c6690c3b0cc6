"""render_sql 便利関数."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqldecl.binder import bind
from sqldecl.query import parse_query
from sqldecl.renderer import RenderedQuery, render

if TYPE_CHECKING:
    from sqldecl.dialect import Dialect


def render_sql(
    text: str,
    values: Mapping[str, Any],
    *,
    placeholder: str = "?",
    dialect: Dialect | None = None,
) -> RenderedQuery:
    """宣言付きクエリを解析・バインド・レンダリングする便利関数.

    同じクエリを繰り返し実行する場合は parse_query の結果を
    呼び出し側で保持し、bind / render を直接使用すること。

    Args:
        text: 宣言付きクエリ
        values: パラメータ名 → 値
        placeholder: プレースホルダ形式 ("?", "%s", ":name")
        dialect: RDBMS 方言。指定時は dialect.placeholder を使用する。

    Returns:
        レンダリング結果

    """
    plan = bind(parse_query(text), values)
    return render(plan, placeholder=placeholder, dialect=dialect)
