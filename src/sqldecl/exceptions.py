"""sqldecl例外クラス."""

from __future__ import annotations

from typing import Any

from sqldecl import config

_MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "unterminated_literal": "リテラルが閉じられていません",
        "unmatched_delimiter": "区切り文字が対応していません",
        "invalid_number_format": "数値の形式が不正です",
        "trailing_comma": "配列の末尾にカンマがあります",
        "literal_type_mismatch": "リテラルの型が一致しません",
        "duplicate_param": "パラメータが重複しています",
        "unknown_type": "未知の型です",
        "nested_array_not_allowed": "配列の入れ子は使用できません",
        "default_type_mismatch": "デフォルト値の型が宣言と一致しません",
        "invalid_declaration": "パラメータ宣言の形式が不正です",
        "unused_param": "宣言されたパラメータが参照されていません",
        "undefined_reference": "宣言されていないパラメータを参照しています",
        "missing_required_param": "必須パラメータが指定されていません",
        "type_mismatch": "パラメータの型が一致しません",
        "array_element_type_mismatch": "配列要素の型が一致しません",
        "invalid_argument": "引数の値が不正です",
    },
    "en": {
        "unterminated_literal": "Unterminated literal",
        "unmatched_delimiter": "Unmatched delimiter",
        "invalid_number_format": "Invalid number format",
        "trailing_comma": "Trailing comma in array literal",
        "literal_type_mismatch": "Literal type mismatch",
        "duplicate_param": "Duplicate parameter",
        "unknown_type": "Unknown type",
        "nested_array_not_allowed": "Nested array type is not allowed",
        "default_type_mismatch": "Default value does not match the declared type",
        "invalid_declaration": "Invalid parameter declaration",
        "unused_param": "Declared parameter is never referenced",
        "undefined_reference": "Reference to undeclared parameter",
        "missing_required_param": "Required parameter is missing",
        "type_mismatch": "Parameter type mismatch",
        "array_element_type_mismatch": "Array element type mismatch",
        "invalid_argument": "Invalid argument value",
    },
}


def _format_error(key: str, *, sql_line: str | None = None, **detail: Any) -> str:
    """設定された言語でエラーメッセージを組み立てる.

    None の項目は出力しない。``sql_line`` は ``config.ERROR_INCLUDE_SQL``
    が有効な場合のみ付加する。
    """
    lang = config.ERROR_MESSAGE_LANGUAGE
    base = _MESSAGES.get(lang, _MESSAGES["ja"]).get(key, key)
    items = []
    for k, v in detail.items():
        if v is None:
            continue
        items.append(f"{k}={v!r}" if isinstance(v, str) else f"{k}={v}")
    msg = f"{base}: {' '.join(items)}" if items else base
    if sql_line is not None and config.ERROR_INCLUDE_SQL:
        msg = f"{msg} sql='{sql_line.strip()}'"
    return msg


class SqldeclError(Exception):
    """sqldeclの基底例外."""


# --- リテラル ---


class LiteralError(SqldeclError):
    """リテラル解析エラーの基底."""

    key = "literal_error"

    def __init__(self, text: str, position: int, **detail: Any) -> None:
        self.text = text
        self.position = position
        super().__init__(_format_error(self.key, position=position, **detail, text=text))


class UnterminatedLiteralError(LiteralError):
    """閉じ記号が見つからない."""

    key = "unterminated_literal"


class UnmatchedDelimiterError(LiteralError):
    """開き記号がない、または閉じ記号の後に余分な文字がある."""

    key = "unmatched_delimiter"


class InvalidNumberFormatError(LiteralError):
    """数値リテラルとして解釈できない."""

    key = "invalid_number_format"


class TrailingCommaError(LiteralError):
    """配列リテラルの ``]`` 直前にカンマがある."""

    key = "trailing_comma"


class LiteralTypeMismatchError(LiteralError):
    """リテラルの種類が期待する型と異なる."""

    key = "literal_type_mismatch"

    def __init__(self, text: str, position: int, *, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(text, position, expected=expected, actual=actual)


# --- ヘッダ ---


class HeaderError(SqldeclError):
    """パラメータ宣言ヘッダのエラーの基底."""

    key = "header_error"

    def __init__(
        self,
        name: str,
        *,
        line_number: int | None = None,
        sql_line: str | None = None,
        type_name: str | None = None,
    ) -> None:
        self.name = name
        self.line_number = line_number
        self.type_name = type_name
        super().__init__(
            _format_error(
                self.key,
                sql_line=sql_line,
                line=line_number,
                param=name,
                type=type_name,
            )
        )


class DuplicateParamError(HeaderError):
    """同名のパラメータが複数宣言された."""

    key = "duplicate_param"


class UnknownTypeError(HeaderError):
    """型キーワードが str / num / raw のいずれでもない.

    ``type_name`` には解釈できなかった型表記が入る。
    """

    key = "unknown_type"


class NestedArrayNotAllowedError(HeaderError):
    """``[[num]]`` のような配列の入れ子."""

    key = "nested_array_not_allowed"


class DefaultTypeMismatchError(HeaderError):
    """デフォルト値が宣言された型と一致しない."""

    key = "default_type_mismatch"


class InvalidDeclarationError(HeaderError):
    """宣言行に解釈できない文字列が残っている."""

    key = "invalid_declaration"


class UnusedParamError(HeaderError):
    """宣言されたパラメータが本文で参照されていない（strict モード）."""

    key = "unused_param"


# --- バインド ---


class BindError(SqldeclError):
    """値のバインドエラーの基底."""

    key = "bind_error"

    def __init__(self, name: str, *, position: int | None = None, **detail: Any) -> None:
        self.name = name
        self.position = position
        super().__init__(_format_error(self.key, param=name, **detail, position=position))


class UndefinedReferenceError(BindError):
    """本文の ``@name`` に対応する宣言がない."""

    key = "undefined_reference"


class MissingRequiredParamError(BindError):
    """デフォルトのないパラメータに値が指定されていない."""

    key = "missing_required_param"


class TypeMismatchError(BindError):
    """値の型が宣言と一致しない."""

    key = "type_mismatch"

    def __init__(
        self,
        name: str,
        expected: str,
        actual: str,
        *,
        position: int | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(name, position=position, expected=expected, actual=actual)


class ArrayElementTypeMismatchError(BindError):
    """配列の要素の型が宣言の要素型と一致しない."""

    key = "array_element_type_mismatch"

    def __init__(self, name: str, index: int, *, position: int | None = None) -> None:
        self.index = index
        super().__init__(name, position=position, index=index)


class InvalidArgumentError(BindError):
    """外部から渡された引数文字列を値に変換できない."""

    key = "invalid_argument"

    def __init__(self, name: str, text: str) -> None:
        self.text = text
        super().__init__(name, text=text)
