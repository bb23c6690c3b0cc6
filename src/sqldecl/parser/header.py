"""パラメータ宣言ヘッダのパーサー.

クエリ先頭の連続した宣言行を解析する::

    --? age: num = 10 // 年齢の下限
    --? addrs: [str] = ['sh', 'beijing']
    --? pp: [num]
    select ...

宣言の形式に一致しない最初の行（空行を含む）からが本文となる。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqldecl import config
from sqldecl.exceptions import (
    DefaultTypeMismatchError,
    DuplicateParamError,
    InvalidDeclarationError,
    LiteralTypeMismatchError,
    NestedArrayNotAllowedError,
    UnknownTypeError,
)
from sqldecl.parser.literal import scan_literal
from sqldecl.types import BasicType, ParamType, Value

logger = logging.getLogger(__name__)

IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"

# マーカー直後の "name :" 部分。これに一致する行を宣言行とみなす
_DECL_PREFIX = re.compile(rf"[ \t]*(?P<name>{IDENTIFIER})[ \t]*:[ \t]*")
_KEYWORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class ParamDecl:
    """パラメータ宣言."""

    name: str
    """パラメータ名."""

    type: ParamType
    """宣言された型."""

    default: Value | None
    """デフォルト値（None の場合は必須パラメータ）."""

    help: str
    """説明文（省略時はパラメータ名）."""

    order: int
    """宣言順（0 始まり）."""

    @property
    def required(self) -> bool:
        """必須パラメータかどうか."""
        return self.default is None


def parse_header(text: str) -> tuple[tuple[ParamDecl, ...], str]:
    """クエリ先頭の宣言行を解析し、宣言と本文に分割する.

    Args:
        text: クエリ全体の文字列

    Returns:
        (宣言のタプル, 本文) のタプル。本文は元の文字列をそのまま切り出したもの。

    Raises:
        HeaderError: 宣言が不正な場合
        LiteralError: デフォルト値のリテラルが不正な場合

    """
    marker = config.DECLARATION_MARKER
    decls: list[ParamDecl] = []
    seen: set[str] = set()
    pos = 0
    line_number = 0
    while pos < len(text):
        nl = text.find("\n", pos)
        end = len(text) if nl < 0 else nl + 1
        line = text[pos:end].rstrip("\r\n")
        line_number += 1
        if not line.startswith(marker):
            break
        m = _DECL_PREFIX.match(line, len(marker))
        if m is None:
            break
        decl = _parse_declaration(line, m, order=len(decls), line_number=line_number)
        if decl.name in seen:
            raise DuplicateParamError(decl.name, line_number=line_number, sql_line=line)
        seen.add(decl.name)
        decls.append(decl)
        pos = end

    logger.debug("parsed %d parameter declarations", len(decls))
    return tuple(decls), text[pos:]


def _parse_declaration(
    line: str,
    prefix: re.Match[str],
    *,
    order: int,
    line_number: int,
) -> ParamDecl:
    """1行の宣言を解析する（マーカーと "name :" は解析済み）."""
    name = prefix.group("name")
    ty, i = _parse_type(line, prefix.end(), name=name, line_number=line_number)
    i = _skip_spaces(line, i)

    default: Value | None = None
    if line.startswith("=", i):
        i = _skip_spaces(line, i + 1)
        try:
            default, i = scan_literal(line, i, ty)
        except LiteralTypeMismatchError as e:
            raise DefaultTypeMismatchError(
                name, line_number=line_number, sql_line=line
            ) from e
        i = _skip_spaces(line, i)

    help_text = name
    if line.startswith("//", i):
        help_text = line[i + 2 :].strip() or name
        i = len(line)

    if line[i:].strip():
        raise InvalidDeclarationError(name, line_number=line_number, sql_line=line)

    return ParamDecl(name=name, type=ty, default=default, help=help_text, order=order)


def _parse_type(line: str, pos: int, *, name: str, line_number: int) -> tuple[ParamType, int]:
    """型表記（``num`` / ``[num]``）を解析する."""
    is_array = line.startswith("[", pos)
    i = _skip_spaces(line, pos + 1) if is_array else pos
    if is_array and line.startswith("[", i):
        raise NestedArrayNotAllowedError(name, line_number=line_number, sql_line=line)

    m = _KEYWORD.match(line, i)
    keyword = m.group() if m else line[i : i + 1]
    base = BasicType.from_keyword(keyword)
    if base is None:
        raise UnknownTypeError(
            name, line_number=line_number, sql_line=line, type_name=keyword
        )
    i += len(keyword)

    if is_array:
        i = _skip_spaces(line, i)
        if not line.startswith("]", i):
            raise InvalidDeclarationError(name, line_number=line_number, sql_line=line)
        i += 1
    return ParamType(base, is_array=is_array), i


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    return pos
