"""Tests for the TokenKind StrEnum.

Verifies:
- TokenKind has exactly 6 members with lowercase string values (StrEnum property)
- str() and format() give the capitalised display name
- is_container is True only for ARRAY and OBJECT
"""

from json_signature.tokens import TokenKind


class TestTokenKind:
    def test_has_exactly_six_members(self) -> None:
        assert len(TokenKind) == 6

    def test_expected_members_exist(self) -> None:
        names = {m.name for m in TokenKind}
        assert names == {"NULL", "NUMBER", "BOOLEAN", "STRING", "ARRAY", "OBJECT"}

    def test_members_are_str_instances(self) -> None:
        for member in TokenKind:
            assert isinstance(member, str), f"{member!r} is not a str instance"

    def test_values_are_lowercased(self) -> None:
        assert TokenKind.NULL == "null"
        assert TokenKind.NUMBER == "number"
        assert TokenKind.BOOLEAN == "boolean"
        assert TokenKind.STRING == "string"
        assert TokenKind.ARRAY == "array"
        assert TokenKind.OBJECT == "object"

    def test_str_is_display_name(self) -> None:
        assert [str(m) for m in TokenKind] == [
            "Null",
            "Number",
            "Boolean",
            "String",
            "Array",
            "Object",
        ]

    def test_format_matches_str(self) -> None:
        assert f"{TokenKind.OBJECT}" == "Object"
        assert f"{TokenKind.NULL:>6}" == "  Null"

    def test_is_container(self) -> None:
        containers = {m for m in TokenKind if m.is_container}
        assert containers == {TokenKind.ARRAY, TokenKind.OBJECT}
