"""パラメータの型と値."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class BasicType(Enum):
    """基本型.

    値は宣言ヘッダで使用する型キーワード。
    """

    STR = "str"
    NUM = "num"
    RAW = "raw"

    @classmethod
    def from_keyword(cls, keyword: str) -> BasicType | None:
        """型キーワードから BasicType を返す（未知のキーワードは None）."""
        for member in cls:
            if member.value == keyword:
                return member
        return None


@dataclass(frozen=True)
class ParamType:
    """パラメータの型.

    ``is_array`` が True の場合は ``base`` を要素型とする配列。
    配列の入れ子は表現できない。
    """

    base: BasicType
    is_array: bool = False

    def __str__(self) -> str:
        if self.is_array:
            return f"[{self.base.value}]"
        return self.base.value

    @property
    def element(self) -> ParamType:
        """要素の型（基本型の場合は自身）."""
        return ParamType(self.base)


STR = ParamType(BasicType.STR)
NUM = ParamType(BasicType.NUM)
RAW = ParamType(BasicType.RAW)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _format_num(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class StrValue:
    """文字列値（プレースホルダでバインドされる）."""

    value: str

    @property
    def type(self) -> ParamType:
        return STR

    def to_python(self) -> str:
        return self.value

    def to_literal(self) -> str:
        return _quote(self.value)


@dataclass(frozen=True)
class NumValue:
    """数値（プレースホルダでバインドされる）."""

    value: float

    def __post_init__(self) -> None:
        # int で渡されても float で保持する
        object.__setattr__(self, "value", float(self.value))

    @property
    def type(self) -> ParamType:
        return NUM

    def to_python(self) -> float:
        return self.value

    def to_literal(self) -> str:
        return _format_num(self.value)


@dataclass(frozen=True)
class RawValue:
    """SQL にそのまま埋め込まれる値.

    エスケープもバインドも行わないため、信頼できる入力にのみ使用すること。
    """

    value: str

    @property
    def type(self) -> ParamType:
        return RAW

    def to_python(self) -> str:
        return self.value

    def to_literal(self) -> str:
        return f"#{self.value}#"


@dataclass(frozen=True)
class ArrayValue:
    """配列値.

    要素は基本型の値のみ。要素型の検査はバインド時に行う。
    """

    base: BasicType
    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if isinstance(item, ArrayValue):
                msg = "ArrayValue cannot contain ArrayValue"
                raise TypeError(msg)
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def type(self) -> ParamType:
        return ParamType(self.base, is_array=True)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]

    def to_literal(self) -> str:
        return "[" + ", ".join(item.to_literal() for item in self.items) + "]"


Value = StrValue | NumValue | RawValue | ArrayValue

SCALAR_TYPES = (StrValue, NumValue, RawValue)
VALUE_TYPES = (*SCALAR_TYPES, ArrayValue)


def python_type_name(obj: Any) -> str:
    """エラーメッセージ用に値の型名を返す.

    Value であれば型表記（``num``, ``[str]``）、それ以外は Python の型名。
    """
    if isinstance(obj, VALUE_TYPES):
        return str(obj.type)
    return type(obj).__name__


def from_python(obj: Any, expected: ParamType) -> Any:
    """Python の値を宣言型に対応する Value に変換する.

    - str → StrValue（RawValue には変換しない）
    - int / float（bool を除く）→ NumValue
    - list / tuple → ArrayValue（要素型は ``expected.base``）

    Value はそのまま返す。変換できない値もそのまま返し、型の不一致は
    バインダーが報告する。要素に変換できないものを含むリストは、
    要素ごとの変換結果のリストとして返す。

    Args:
        obj: 変換対象の値
        expected: 宣言された型

    Returns:
        Value、または変換できなかった値

    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if isinstance(obj, (list, tuple)):
        items = [_scalar_from_python(item) for item in obj]
        if all(isinstance(item, SCALAR_TYPES) for item in items):
            return ArrayValue(expected.base, tuple(items))
        return items
    return _scalar_from_python(obj)


def _scalar_from_python(obj: Any) -> Any:
    if isinstance(obj, str):
        return StrValue(obj)
    if isinstance(obj, (int, float)) and not isinstance(obj, bool):
        return NumValue(obj)
    return obj
