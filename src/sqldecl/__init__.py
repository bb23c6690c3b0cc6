"""sqldecl: 型付きパラメータ宣言を持つ SQL のバインドとレンダリング."""

from sqldecl._render import render_sql
from sqldecl.args import values_from_pairs
from sqldecl.binder import BindPlan, Binding, bind
from sqldecl.dialect import Dialect
from sqldecl.exceptions import (
    ArrayElementTypeMismatchError,
    BindError,
    DefaultTypeMismatchError,
    DuplicateParamError,
    HeaderError,
    InvalidArgumentError,
    InvalidDeclarationError,
    InvalidNumberFormatError,
    LiteralError,
    LiteralTypeMismatchError,
    MissingRequiredParamError,
    NestedArrayNotAllowedError,
    SqldeclError,
    TrailingCommaError,
    TypeMismatchError,
    UndefinedReferenceError,
    UnknownTypeError,
    UnmatchedDelimiterError,
    UnterminatedLiteralError,
    UnusedParamError,
)
from sqldecl.parser import (
    ParamDecl,
    Reference,
    coerce_arg,
    parse_header,
    parse_literal,
    scan_refs,
)
from sqldecl.query import ParsedQuery, parse_query
from sqldecl.renderer import RenderedQuery, render
from sqldecl.types import (
    ArrayValue,
    BasicType,
    NumValue,
    ParamType,
    RawValue,
    StrValue,
    Value,
    from_python,
)

__all__ = [
    "ArrayElementTypeMismatchError",
    "ArrayValue",
    "BasicType",
    "BindError",
    "BindPlan",
    "Binding",
    "DefaultTypeMismatchError",
    "Dialect",
    "DuplicateParamError",
    "HeaderError",
    "InvalidArgumentError",
    "InvalidDeclarationError",
    "InvalidNumberFormatError",
    "LiteralError",
    "LiteralTypeMismatchError",
    "MissingRequiredParamError",
    "NestedArrayNotAllowedError",
    "NumValue",
    "ParamDecl",
    "ParamType",
    "ParsedQuery",
    "RawValue",
    "Reference",
    "RenderedQuery",
    "SqldeclError",
    "StrValue",
    "TrailingCommaError",
    "TypeMismatchError",
    "UndefinedReferenceError",
    "UnknownTypeError",
    "UnmatchedDelimiterError",
    "UnterminatedLiteralError",
    "UnusedParamError",
    "Value",
    "bind",
    "coerce_arg",
    "from_python",
    "parse_header",
    "parse_literal",
    "parse_query",
    "render",
    "render_sql",
    "scan_refs",
    "values_from_pairs",
]
