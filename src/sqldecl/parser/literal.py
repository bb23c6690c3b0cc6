"""型付きリテラルの字句解析."""

from __future__ import annotations

import math
import re

from sqldecl.exceptions import (
    InvalidNumberFormatError,
    LiteralTypeMismatchError,
    TrailingCommaError,
    UnmatchedDelimiterError,
    UnterminatedLiteralError,
)
from sqldecl.types import ArrayValue, BasicType, NumValue, ParamType, RawValue, StrValue, Value

# リテラルの文法:
#   str   'text' / "text"    バックスラッシュで次の1文字をエスケープ
#   num   [+-]digits[.digits][e[+-]digits]
#   raw   #text#             中身は無解釈（# は含められない）
#   array [lit, lit, ...]    要素は基本型のみ、末尾カンマ不可
#
# いずれも1行内で完結する。

NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# 数値トークンの切り出し（区切り文字まで）
_NUMBER_TOKEN = re.compile(r"[^\s,\[\]/'\"#]*")

_SPACES = " \t"
_NEWLINES = "\r\n"
_QUOTES = "'\""
_NUMBER_START = "0123456789+-."


def parse_literal(text: str, expected: ParamType) -> Value:
    """文字列全体を1つのリテラルとして解析する.

    前後の空白（スペース・タブ）は無視する。

    Args:
        text: リテラル文字列
        expected: 期待する型

    Returns:
        解析結果の値

    Raises:
        LiteralError: リテラルとして解釈できない場合

    """
    pos = _skip_spaces(text, 0)
    value, end = scan_literal(text, pos, expected)
    end = _skip_spaces(text, end)
    if end != len(text):
        if expected == ParamType(BasicType.NUM):
            raise InvalidNumberFormatError(text, end)
        raise UnmatchedDelimiterError(text, end)
    return value


def scan_literal(text: str, pos: int, expected: ParamType) -> tuple[Value, int]:
    """``pos`` から始まるリテラルを1つ解析する.

    Args:
        text: 解析対象の文字列
        pos: リテラルの開始位置
        expected: 期待する型

    Returns:
        (値, リテラル直後の位置) のタプル

    Raises:
        LiteralError: リテラルとして解釈できない場合

    """
    if expected.is_array:
        return _scan_array(text, pos, expected.base)
    return _scan_scalar(text, pos, expected.base)


def coerce_arg(text: str, base: BasicType) -> Value:
    """外部から渡された引数文字列を値に変換する.

    CLI フラグやクエリ文字列の値を想定する。str は引用符なしの文字列を
    そのまま使用し、num は文字列全体が数値であること、raw は ``#...#``
    形式であることを要求する。

    Raises:
        LiteralError: 変換できない場合

    """
    match base:
        case BasicType.STR:
            return StrValue(text)
        case BasicType.NUM:
            number = _to_number(text)
            if number is None:
                raise InvalidNumberFormatError(text, 0)
            return NumValue(number)
        case BasicType.RAW:
            return parse_literal(text, ParamType(BasicType.RAW))


def _detect(text: str, pos: int) -> str | None:
    """先頭文字からリテラルの種類を推定する."""
    if pos >= len(text):
        return None
    ch = text[pos]
    if ch in _QUOTES:
        return BasicType.STR.value
    if ch == "#":
        return BasicType.RAW.value
    if ch == "[":
        return "array"
    if ch in _NUMBER_START:
        return BasicType.NUM.value
    return None


def _scan_scalar(text: str, pos: int, base: BasicType) -> tuple[Value, int]:
    detected = _detect(text, pos)
    if detected is not None and detected != base.value:
        raise LiteralTypeMismatchError(text, pos, expected=base.value, actual=detected)
    match base:
        case BasicType.STR:
            if detected is None:
                raise UnmatchedDelimiterError(text, pos)
            return _scan_str(text, pos)
        case BasicType.NUM:
            return _scan_num(text, pos)
        case BasicType.RAW:
            if detected is None:
                raise UnmatchedDelimiterError(text, pos)
            return _scan_raw(text, pos)


def _scan_str(text: str, pos: int) -> tuple[StrValue, int]:
    quote = text[pos]
    chars: list[str] = []
    i = pos + 1
    while True:
        if i >= len(text) or text[i] in _NEWLINES:
            raise UnterminatedLiteralError(text, pos)
        ch = text[i]
        if ch == "\\":
            if i + 1 >= len(text) or text[i + 1] in _NEWLINES:
                raise UnterminatedLiteralError(text, pos)
            chars.append(text[i + 1])
            i += 2
            continue
        if ch == quote:
            return StrValue("".join(chars)), i + 1
        chars.append(ch)
        i += 1


def _scan_num(text: str, pos: int) -> tuple[NumValue, int]:
    m = _NUMBER_TOKEN.match(text, pos)
    token = m.group() if m else ""
    number = _to_number(token)
    if number is None:
        raise InvalidNumberFormatError(text, pos)
    return NumValue(number), pos + len(token)


def _to_number(token: str) -> float | None:
    """数値トークンを float に変換する（文法外・有限でない値は None）."""
    if not NUMBER_PATTERN.fullmatch(token):
        return None
    number = float(token)
    # 1e999 などは文法上は正しいが inf になる
    return number if math.isfinite(number) else None


def _scan_raw(text: str, pos: int) -> tuple[RawValue, int]:
    end = text.find("#", pos + 1)
    if end < 0 or any(nl in text[pos + 1 : end] for nl in _NEWLINES):
        raise UnterminatedLiteralError(text, pos)
    return RawValue(text[pos + 1 : end]), end + 1


def _scan_array(text: str, pos: int, base: BasicType) -> tuple[ArrayValue, int]:
    if not text.startswith("[", pos):
        detected = _detect(text, pos)
        if detected is not None:
            raise LiteralTypeMismatchError(
                text, pos, expected=f"[{base.value}]", actual=detected
            )
        raise UnmatchedDelimiterError(text, pos)

    items: list[Value] = []
    i = _skip_spaces(text, pos + 1)
    if text.startswith("]", i):
        return ArrayValue(base), i + 1
    while True:
        if i >= len(text) or text[i] in _NEWLINES:
            raise UnterminatedLiteralError(text, pos)
        value, i = _scan_scalar(text, i, base)
        items.append(value)
        i = _skip_spaces(text, i)
        if i >= len(text) or text[i] in _NEWLINES:
            raise UnterminatedLiteralError(text, pos)
        if text[i] == "]":
            return ArrayValue(base, tuple(items)), i + 1
        if text[i] != ",":
            raise UnmatchedDelimiterError(text, i)
        i = _skip_spaces(text, i + 1)
        if text.startswith("]", i):
            raise TrailingCommaError(text, i)


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _SPACES:
        pos += 1
    return pos
