"""宣言ヘッダ・リテラル・参照のパーサーパッケージ."""

from sqldecl.parser.header import ParamDecl, parse_header
from sqldecl.parser.literal import coerce_arg, parse_literal, scan_literal
from sqldecl.parser.scanner import Reference, scan_refs

__all__ = [
    "ParamDecl",
    "Reference",
    "coerce_arg",
    "parse_header",
    "parse_literal",
    "scan_literal",
    "scan_refs",
]
