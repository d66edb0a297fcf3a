"""입력 검증 스킬 테스트"""

import pytest

from railway.models.errors import ValidationError
from railway.skills.validation import parse_menu_number, require_text


class TestParseMenuNumber:
    @pytest.mark.parametrize("raw,expected", [("0", 0), ("5", 5), (" 1001 ", 1001), ("10000", 10000)])
    def test_valid(self, raw, expected):
        assert parse_menu_number(raw) == expected

    def test_empty(self):
        with pytest.raises(ValidationError, match="비어"):
            parse_menu_number("")

    @pytest.mark.parametrize("raw", ["abc", "-1", "1.5", "١٢"])
    def test_non_digit(self, raw):
        with pytest.raises(ValidationError, match="숫자"):
            parse_menu_number(raw)

    def test_out_of_range(self):
        with pytest.raises(ValidationError, match="범위"):
            parse_menu_number("10001")


class TestRequireText:
    def test_passes_through(self):
        assert require_text("Asha", "승객 이름") == "Asha"

    @pytest.mark.parametrize("value", ["", "  "])
    def test_rejects_blank(self, value):
        with pytest.raises(ValidationError, match="승객 이름"):
            require_text(value, "승객 이름")
