"""宣言ヘッダパーサーのテスト."""

import pytest

from sqldecl import config
from sqldecl.exceptions import (
    DefaultTypeMismatchError,
    DuplicateParamError,
    InvalidDeclarationError,
    InvalidNumberFormatError,
    NestedArrayNotAllowedError,
    TrailingCommaError,
    UnknownTypeError,
    UnterminatedLiteralError,
)
from sqldecl.parser.header import parse_header
from sqldecl.types import (
    NUM,
    RAW,
    STR,
    ArrayValue,
    BasicType,
    NumValue,
    ParamType,
    RawValue,
    StrValue,
)


class TestDeclaration:
    """1行の宣言の解析."""

    def test_complete_num(self) -> None:
        decls, _ = parse_header("--? age : num = 10 // help msg\nselect 1")
        decl = decls[0]
        assert decl.name == "age"
        assert decl.type == NUM
        assert decl.default == NumValue(10)
        assert decl.help == "help msg"
        assert decl.order == 0
        assert decl.required is False

    def test_double_quote_str_without_space_before_help(self) -> None:
        decls, _ = parse_header('--? addr: str = "SH"//where are you from?\nselect 1')
        assert decls[0].default == StrValue("SH")
        assert decls[0].help == "where are you from?"

    def test_raw_default(self) -> None:
        decls, _ = parse_header("--? where: raw = #select * from ()# // insert raw\n")
        assert decls[0].type == RAW
        assert decls[0].default == RawValue("select * from ()")

    def test_array_default(self) -> None:
        decls, _ = parse_header("--? arr: [num] = [ 1, 2, 3 ] // array param\n")
        assert decls[0].type == ParamType(BasicType.NUM, is_array=True)
        assert decls[0].default == ArrayValue(
            BasicType.NUM, (NumValue(1), NumValue(2), NumValue(3))
        )

    def test_array_type_with_inner_spaces(self) -> None:
        decls, _ = parse_header("--? arr: [ str ]\n")
        assert decls[0].type == ParamType(BasicType.STR, is_array=True)

    def test_no_default_is_required(self) -> None:
        decls, _ = parse_header("--? age: num // help msg\n")
        assert decls[0].default is None
        assert decls[0].required is True

    def test_no_spaces(self) -> None:
        decls, _ = parse_header("--?age:num=10\n")
        assert decls[0].name == "age"
        assert decls[0].default == NumValue(10)

    def test_help_defaults_to_name(self) -> None:
        """説明文がない場合はパラメータ名を説明文とする."""
        decls, _ = parse_header("--? pp: [num]\n--? age: num = 10\n")
        assert decls[0].help == "pp"
        assert decls[1].help == "age"

    def test_empty_help_defaults_to_name(self) -> None:
        decls, _ = parse_header("--? age: num = 10 //\n")
        assert decls[0].help == "age"

    def test_help_keeps_non_ascii(self) -> None:
        decls, _ = parse_header("--? pattern: str = '%%'// 表名字\n")
        assert decls[0].help == "表名字"
        assert decls[0].default == StrValue("%%")


class TestHeaderAndBody:
    """ヘッダと本文の分割."""

    def test_order_preserved(self) -> None:
        text = (
            "--? age: num = 10\n"
            "--? pattern: str\n"
            "--? addrs: [str] = ['sh', 'beijing']\n"
            "--? pp: [num]\n"
            "select 1"
        )
        decls, body = parse_header(text)
        assert [d.name for d in decls] == ["age", "pattern", "addrs", "pp"]
        assert [d.order for d in decls] == [0, 1, 2, 3]
        assert body == "select 1"

    def test_body_is_verbatim(self) -> None:
        text = "--? a: num\n  select @a\n\n--? b: num\nfrom t\n"
        _, body = parse_header(text)
        assert body == "  select @a\n\n--? b: num\nfrom t\n"

    def test_blank_line_ends_header(self) -> None:
        """空行でヘッダが終わり、以降の宣言らしき行は本文になる."""
        decls, body = parse_header("--? a: num\n\n--? b: num\nselect 1")
        assert [d.name for d in decls] == ["a"]
        assert body == "\n--? b: num\nselect 1"

    def test_leading_blank_line_means_no_header(self) -> None:
        decls, body = parse_header("\n--? a: num\nselect @a")
        assert decls == ()
        assert body == "\n--? a: num\nselect @a"

    def test_plain_comment_ends_header(self) -> None:
        decls, body = parse_header("--? a: num\n-- comment\nselect 1")
        assert len(decls) == 1
        assert body == "-- comment\nselect 1"

    def test_marker_without_name_ends_header(self) -> None:
        decls, body = parse_header("--? just a note\nselect 1")
        assert decls == ()
        assert body.startswith("--? just a note")

    def test_crlf(self) -> None:
        decls, body = parse_header("--? a: str = 'x'\r\n--? b: num\r\nselect 1\r\n")
        assert decls[0].default == StrValue("x")
        assert decls[1].type == NUM
        assert body == "select 1\r\n"

    def test_header_only(self) -> None:
        decls, body = parse_header("--? a: num")
        assert len(decls) == 1
        assert body == ""

    def test_no_header(self) -> None:
        decls, body = parse_header("select 1")
        assert decls == ()
        assert body == "select 1"

    def test_custom_marker(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "DECLARATION_MARKER", "-- @param")
        decls, body = parse_header("-- @param a: num\nselect @a")
        assert decls[0].name == "a"
        assert body == "select @a"


class TestHeaderErrors:
    """宣言のエラー."""

    def test_duplicate(self) -> None:
        with pytest.raises(DuplicateParamError) as exc_info:
            parse_header("--? a: num\n--? a: num\nselect 1")
        assert exc_info.value.name == "a"
        assert exc_info.value.line_number == 2

    def test_duplicate_with_different_types(self) -> None:
        """型やデフォルト値が異なっても重複はエラー."""
        with pytest.raises(DuplicateParamError):
            parse_header("--? a: num = 1\n--? a: [str] = ['x']\nselect 1")

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownTypeError) as exc_info:
            parse_header("--? a: int\nselect 1")
        assert exc_info.value.name == "a"
        assert exc_info.value.type_name == "int"

    def test_unknown_array_element_type(self) -> None:
        with pytest.raises(UnknownTypeError):
            parse_header("--? a: [bool]\nselect 1")

    def test_nested_array(self) -> None:
        with pytest.raises(NestedArrayNotAllowedError):
            parse_header("--? a: [[num]]\nselect 1")

    def test_unclosed_array_type(self) -> None:
        with pytest.raises(InvalidDeclarationError):
            parse_header("--? a: [num\nselect 1")

    @pytest.mark.parametrize(
        "line",
        [
            "--? a: num = 'x'",
            "--? a: str = 10",
            "--? a: [num] = 1",
            "--? a: num = [1]",
            "--? a: [num] = [1, 'x']",
            "--? a: raw = 'NOW()'",
        ],
    )
    def test_default_type_mismatch(self, line: str) -> None:
        with pytest.raises(DefaultTypeMismatchError) as exc_info:
            parse_header(f"{line}\nselect 1")
        assert exc_info.value.name == "a"

    def test_invalid_num_default(self) -> None:
        with pytest.raises(InvalidNumberFormatError):
            parse_header("--? age: num = gx\nselect 1")

    def test_overflowing_num_default(self) -> None:
        with pytest.raises(InvalidNumberFormatError):
            parse_header("--? big: num = 1e999\nselect @big")

    def test_empty_num_default(self) -> None:
        with pytest.raises(InvalidNumberFormatError):
            parse_header("--? age: num = \nselect 1")

    def test_unterminated_default(self) -> None:
        with pytest.raises(UnterminatedLiteralError):
            parse_header("--? a: str = 'abc\nselect 1")

    def test_trailing_comma_default(self) -> None:
        with pytest.raises(TrailingCommaError):
            parse_header("--? a: [num] = [1,]\nselect 1")

    def test_trailing_garbage(self) -> None:
        with pytest.raises(InvalidDeclarationError):
            parse_header("--? a: num = 1 extra\nselect 1")

    def test_error_message_includes_line(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "ERROR_MESSAGE_LANGUAGE", "en")
        monkeypatch.setattr(config, "ERROR_INCLUDE_SQL", True)
        with pytest.raises(DuplicateParamError) as exc_info:
            parse_header("--? a: num\n--? a: str\nselect 1")
        msg = str(exc_info.value)
        assert msg.startswith("Duplicate parameter")
        assert "line=2" in msg
        assert "sql='--? a: str'" in msg

    def test_types_exposed(self) -> None:
        decls, _ = parse_header("--? a: str\n--? b: num\n--? c: raw\n")
        assert [d.type for d in decls] == [STR, NUM, RAW]
