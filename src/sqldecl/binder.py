"""参照への値のバインド."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqldecl.exceptions import (
    ArrayElementTypeMismatchError,
    MissingRequiredParamError,
    TypeMismatchError,
    UndefinedReferenceError,
)
from sqldecl.parser.header import ParamDecl
from sqldecl.parser.scanner import Reference
from sqldecl.query import ParsedQuery
from sqldecl.types import (
    SCALAR_TYPES,
    ArrayValue,
    ParamType,
    Value,
    from_python,
    python_type_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    """参照1箇所と解決済みの値."""

    reference: Reference
    value: Value


@dataclass(frozen=True)
class BindPlan:
    """バインド結果（レンダリング前）."""

    body: str
    """ヘッダを除いた本文."""

    bindings: tuple[Binding, ...]
    """参照ごとの解決済みの値（出現順）."""


def bind(parsed: ParsedQuery, values: Mapping[str, Any]) -> BindPlan:
    """参照ごとに値を解決し、型を検査する.

    値は指定値、なければ宣言のデフォルト値を使用する。同じ名前の参照が
    複数ある場合も、参照ごとに Binding を生成する（位置プレースホルダでは
    出現ごとにプレースホルダが必要なため）。

    Value 以外の Python の値（str, int, float, list など）は宣言型に
    合わせて変換してから検査する。str が RawValue になることはない。

    Args:
        parsed: 解析済みクエリ
        values: パラメータ名 → 値

    Returns:
        バインド結果

    Raises:
        UndefinedReferenceError: 未宣言のパラメータを参照している場合
        MissingRequiredParamError: 必須パラメータの値がない場合
        TypeMismatchError: 値の型が宣言と一致しない場合
        ArrayElementTypeMismatchError: 配列要素の型が一致しない場合

    """
    decls = {decl.name: decl for decl in parsed.decls}
    unknown = [name for name in values if name not in decls]
    if unknown:
        logger.debug("ignoring values for undeclared parameters: %s", unknown)

    resolved: dict[str, Value] = {}
    bindings: list[Binding] = []
    for ref in parsed.refs:
        decl = decls.get(ref.name)
        if decl is None:
            raise UndefinedReferenceError(ref.name, position=ref.start)
        if ref.name not in resolved:
            resolved[ref.name] = _resolve(decl, values, ref)
        bindings.append(Binding(reference=ref, value=resolved[ref.name]))

    return BindPlan(body=parsed.body, bindings=tuple(bindings))


def _resolve(decl: ParamDecl, values: Mapping[str, Any], ref: Reference) -> Value:
    """実効値を決定して型を検査する."""
    if decl.name in values:
        return _check_type(decl, from_python(values[decl.name], decl.type), ref)
    if decl.default is not None:
        return decl.default
    raise MissingRequiredParamError(decl.name, position=ref.start)


def _check_type(decl: ParamDecl, value: Any, ref: Reference) -> Value:
    expected = decl.type
    if not expected.is_array:
        if not _matches(value, expected):
            raise TypeMismatchError(
                decl.name, str(expected), python_type_name(value), position=ref.start
            )
        return value

    # from_python が変換しきれなかったリストもここで要素ごとに検査する
    if isinstance(value, ArrayValue):
        items = value.items
    elif isinstance(value, list):
        items = tuple(value)
    else:
        raise TypeMismatchError(
            decl.name, str(expected), python_type_name(value), position=ref.start
        )
    for index, item in enumerate(items):
        if not _matches(item, expected.element):
            raise ArrayElementTypeMismatchError(decl.name, index, position=ref.start)
    if isinstance(value, ArrayValue) and value.base is not expected.base:
        raise TypeMismatchError(
            decl.name, str(expected), python_type_name(value), position=ref.start
        )
    return ArrayValue(expected.base, items)


def _matches(value: Any, expected: ParamType) -> bool:
    return isinstance(value, SCALAR_TYPES) and value.type == expected
