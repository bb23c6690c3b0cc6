"""BindPlan から実行用 SQL とバインド引数を生成する."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqldecl.dialect import NAMED_PLACEHOLDER, POSITIONAL_PLACEHOLDERS
from sqldecl.types import ArrayValue, BasicType, NumValue, RawValue, StrValue

if TYPE_CHECKING:
    from sqldecl.binder import BindPlan, Binding
    from sqldecl.dialect import Dialect

logger = logging.getLogger(__name__)


@dataclass
class RenderedQuery:
    """レンダリング結果."""

    sql: str
    args: list[StrValue | NumValue] = field(default_factory=list)
    """?, %s 形式用（プレースホルダ順）."""

    named_args: dict[str, StrValue | NumValue] = field(default_factory=dict)
    """:name 形式用."""

    @property
    def params(self) -> list[Any]:
        """ドライバに渡す位置パラメータ（Python の値）."""
        return [arg.to_python() for arg in self.args]

    @property
    def named_params(self) -> dict[str, Any]:
        """ドライバに渡す名前付きパラメータ（Python の値）."""
        return {key: arg.to_python() for key, arg in self.named_args.items()}


def render(
    plan: BindPlan,
    *,
    placeholder: str = "?",
    dialect: Dialect | None = None,
) -> RenderedQuery:
    """本文の参照をプレースホルダに置き換える.

    - str / num: プレースホルダ1つ
    - raw: 値をそのまま埋め込む（引数には追加しない）
    - 配列: 要素数分のプレースホルダを ``,`` で連結する。括弧は付加しない。
      空配列は何も出力しない。``[raw]`` は要素をそのまま ``,`` で連結する。

    ``:name`` 形式では配列要素を ``:name_0, :name_1, ...`` とし、
    同名の参照は同じキーを共有する。要素のキーが他の参照名と重なる場合は
    末尾に番号を付けて重ならないキーにする（``:ids_0_1`` など）。

    Args:
        plan: バインド結果
        placeholder: プレースホルダ形式 ("?", "%s", ":name")
        dialect: RDBMS 方言。指定時は dialect.placeholder を使用する。

    Returns:
        レンダリング結果

    Raises:
        ValueError: dialect と placeholder (デフォルト以外) を同時に指定した場合、
            または未対応のプレースホルダ形式の場合

    """
    if dialect is not None and placeholder != "?":
        msg = "dialect と placeholder は同時に指定できません"
        raise ValueError(msg)
    if dialect is not None:
        placeholder = dialect.placeholder
    if placeholder != NAMED_PLACEHOLDER and placeholder not in POSITIONAL_PLACEHOLDERS:
        msg = f"未対応のプレースホルダ形式です: {placeholder!r}"
        raise ValueError(msg)

    result = RenderedQuery(sql="")
    # :name 形式では参照名をすべて予約し、配列要素のキーと衝突させない
    keys = _NamedKeys({binding.reference.name for binding in plan.bindings})
    body = plan.body
    pieces: list[str] = []
    cursor = 0
    for binding in plan.bindings:
        ref = binding.reference
        pieces.append(body[cursor : ref.start])
        pieces.append(_substitute(binding, placeholder, result, keys))
        cursor = ref.end
    pieces.append(body[cursor:])

    result.sql = "".join(pieces)
    logger.debug("rendered sql: %s", result.sql)
    return result


class _NamedKeys:
    """配列要素に割り当てる名前付きプレースホルダのキー.

    キーは ``name_i``。参照名や割り当て済みのキーと重なる場合は
    ``name_i_1``, ``name_i_2``, ... と末尾の番号を増やす。
    同じ配列を複数回参照した場合は同じキーを返す。
    """

    def __init__(self, reserved: set[str]) -> None:
        self._taken = set(reserved)
        self._by_name: dict[str, list[str]] = {}

    def for_array(self, name: str, count: int) -> list[str]:
        keys = self._by_name.get(name)
        if keys is None:
            keys = [self._allocate(f"{name}_{i}") for i in range(count)]
            self._by_name[name] = keys
        return keys

    def _allocate(self, key: str) -> str:
        candidate = key
        n = 0
        while candidate in self._taken:
            n += 1
            candidate = f"{key}_{n}"
        self._taken.add(candidate)
        return candidate


def _substitute(
    binding: Binding,
    placeholder: str,
    result: RenderedQuery,
    keys: _NamedKeys,
) -> str:
    """参照1箇所の置換文字列を返し、引数を result に追加する."""
    name = binding.reference.name
    is_named = placeholder == NAMED_PLACEHOLDER
    match binding.value:
        case RawValue(value=text):
            return text
        case ArrayValue(base=BasicType.RAW, items=items):
            return ",".join(item.to_python() for item in items)
        case ArrayValue(items=items):
            if is_named:
                item_keys = keys.for_array(name, len(items))
                result.named_args.update(zip(item_keys, items))
                return ",".join(f":{key}" for key in item_keys)
            result.args.extend(items)
            return ",".join([placeholder] * len(items))
        case value:
            if is_named:
                result.named_args[name] = value
                return f":{name}"
            result.args.append(value)
            return placeholder
