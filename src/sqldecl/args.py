"""外部入力（クエリ文字列・CLI 引数）から値の辞書を組み立てる."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqldecl.exceptions import InvalidArgumentError, LiteralError, MissingRequiredParamError
from sqldecl.parser.header import ParamDecl
from sqldecl.parser.literal import coerce_arg
from sqldecl.types import ArrayValue, Value


def values_from_pairs(
    decls: Sequence[ParamDecl],
    pairs: Iterable[tuple[str, str]],
) -> dict[str, Value]:
    """(名前, 文字列) の組から宣言に沿った値の辞書を作成する.

    クエリ文字列 ``?ids=1&ids=2`` や繰り返し指定された CLI フラグを想定する。
    配列パラメータは同名の値をすべて出現順に集める。宣言にない名前は無視する。

    Args:
        decls: パラメータ宣言
        pairs: (パラメータ名, 値の文字列) の組

    Returns:
        パラメータ名 → 値。指定がないパラメータはデフォルト値を使用する。

    Raises:
        MissingRequiredParamError: 必須パラメータが指定されていない場合
        InvalidArgumentError: 値を変換できない場合、または基本型に複数の値がある場合

    """
    found: dict[str, list[str]] = {}
    for name, text in pairs:
        found.setdefault(name, []).append(text)

    values: dict[str, Value] = {}
    for decl in decls:
        texts = found.get(decl.name)
        if not texts:
            if decl.default is None:
                raise MissingRequiredParamError(decl.name)
            values[decl.name] = decl.default
            continue
        if not decl.type.is_array and len(texts) > 1:
            raise InvalidArgumentError(decl.name, ", ".join(texts))
        items = [_coerce(decl, text) for text in texts]
        if decl.type.is_array:
            values[decl.name] = ArrayValue(decl.type.base, tuple(items))
        else:
            values[decl.name] = items[0]
    return values


def _coerce(decl: ParamDecl, text: str) -> Value:
    try:
        return coerce_arg(text, decl.type.base)
    except LiteralError as e:
        raise InvalidArgumentError(decl.name, text) from e
