"""입력 검증 스킬

메뉴 입력과 엔진 인자에 대한 공통 규칙.
"""

from __future__ import annotations

from railway.models.errors import ValidationError

MENU_NUMBER_MAX = 10_000


def parse_menu_number(raw: str) -> int:
    """숫자만 허용, 0~10000 범위. 실패 시 ValidationError."""
    text = raw.strip()
    if not text:
        raise ValidationError("입력이 비어 있습니다")
    if not text.isascii() or not text.isdigit():
        raise ValidationError(f"숫자가 아닌 문자가 포함되어 있습니다: '{raw}'")
    value = int(text)
    if value > MENU_NUMBER_MAX:
        raise ValidationError(f"입력 범위(0~{MENU_NUMBER_MAX})를 벗어났습니다: {value}")
    return value


def require_text(value: str, field: str) -> str:
    """빈 문자열/공백만 있는 문자열 거부"""
    if not value or not value.strip():
        raise ValidationError(f"{field}이(가) 비어 있습니다")
    return value
