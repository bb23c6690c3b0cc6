"""ParsedQuery: 宣言付きクエリの解析結果."""

from __future__ import annotations

from dataclasses import dataclass

from sqldecl.exceptions import UndefinedReferenceError, UnusedParamError
from sqldecl.parser.header import ParamDecl, parse_header
from sqldecl.parser.scanner import Reference, scan_refs


@dataclass(frozen=True)
class ParsedQuery:
    """宣言付きクエリの解析結果.

    生成後は変更しない。同じインスタンスを複数スレッドから
    並行してバインドしてよい。
    """

    decls: tuple[ParamDecl, ...]
    """宣言（宣言順）."""

    body: str
    """ヘッダを除いた本文."""

    refs: tuple[Reference, ...]
    """本文中の参照（出現順）."""

    def param(self, name: str) -> ParamDecl | None:
        """名前で宣言を取得する."""
        for decl in self.decls:
            if decl.name == name:
                return decl
        return None

    @property
    def names(self) -> list[str]:
        """宣言されたパラメータ名（宣言順）."""
        return [decl.name for decl in self.decls]

    @property
    def referenced_names(self) -> list[str]:
        """本文で参照されているパラメータ名（初出順、重複なし）."""
        return list(dict.fromkeys(ref.name for ref in self.refs))

    @property
    def unused_params(self) -> list[ParamDecl]:
        """本文で一度も参照されていない宣言."""
        referenced = set(self.referenced_names)
        return [decl for decl in self.decls if decl.name not in referenced]


def parse_query(text: str, *, strict: bool = False) -> ParsedQuery:
    """宣言付きクエリを解析する.

    Args:
        text: クエリ全体の文字列
        strict: True の場合、未宣言の参照と未使用の宣言をエラーにする

    Returns:
        解析結果

    Raises:
        HeaderError: 宣言が不正な場合
        LiteralError: デフォルト値のリテラルが不正な場合
        UndefinedReferenceError: strict で未宣言のパラメータを参照している場合

    """
    decls, body = parse_header(text)
    parsed = ParsedQuery(decls=decls, body=body, refs=tuple(scan_refs(body)))
    if strict:
        declared = set(parsed.names)
        for ref in parsed.refs:
            if ref.name not in declared:
                raise UndefinedReferenceError(ref.name, position=ref.start)
        unused = parsed.unused_params
        if unused:
            # ヘッダは先頭から連続するため、宣言順 + 1 が行番号になる
            raise UnusedParamError(unused[0].name, line_number=unused[0].order + 1)
    return parsed
