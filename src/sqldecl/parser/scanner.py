"""本文中の ``@name`` 参照の走査."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_IDENT_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class Reference:
    """本文中の参照1箇所."""

    name: str
    """参照しているパラメータ名."""

    start: int
    """本文内の開始位置（``@`` の位置）."""

    end: int
    """本文内の終了位置."""

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)


def scan_refs(body: str) -> list[Reference]:
    """本文から ``@name`` 参照を出現順に抽出する.

    以下の範囲内の ``@`` は参照として扱わない:

    - ``'...'`` / ``"..."`` の引用符（``''`` の重ねは範囲内とみなす）
    - ``#...#`` の raw リテラル
    - ``-- ...`` 行コメント、``/* ... */`` ブロックコメント

    ``@@name``（サーバー変数）と識別子が続かない ``@`` も参照ではない。
    閉じられていない範囲は本文末尾までとみなす。宣言の有無は検査しない。

    Args:
        body: ヘッダを除いた本文

    Returns:
        Reference のリスト（出現順）

    """
    refs: list[Reference] = []
    n = len(body)
    i = 0
    while i < n:
        ch = body[i]
        if ch in "'\"#":
            i = _skip_quoted(body, i)
        elif body.startswith("--", i):
            nl = body.find("\n", i)
            i = n if nl < 0 else nl + 1
        elif body.startswith("/*", i):
            close = body.find("*/", i + 2)
            i = n if close < 0 else close + 2
        elif ch == "@":
            if body.startswith("@@", i):
                # @@var: 識別子部分も読み飛ばす
                m = _IDENT_PATTERN.match(body, i + 2)
                i = m.end() if m else i + 2
                continue
            m = _IDENT_PATTERN.match(body, i + 1)
            if m is None:
                i += 1
                continue
            refs.append(Reference(name=m.group(), start=i, end=m.end()))
            i = m.end()
        else:
            i += 1

    logger.debug("found %d references", len(refs))
    return refs


def _skip_quoted(body: str, start: int) -> int:
    """引用範囲の直後の位置を返す."""
    delimiter = body[start]
    i = start + 1
    while True:
        close = body.find(delimiter, i)
        if close < 0:
            return len(body)
        # SQL の '' エスケープ（raw リテラルには適用しない）
        if delimiter != "#" and body.startswith(delimiter, close + 1):
            i = close + 2
            continue
        return close + 1
