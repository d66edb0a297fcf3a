"""승차권 상태 머신

취소는 원장에서 완전히 삭제한다 (취소 상태 보존 없음).
"""

from __future__ import annotations

from enum import Enum, auto


class TicketState(Enum):
    NONEXISTENT = auto()
    BOOKED = auto()


# 허용된 상태 전이 맵: {현재상태: {허용되는 다음 상태들}}
_VALID_TRANSITIONS: dict[TicketState, frozenset[TicketState]] = {
    TicketState.NONEXISTENT: frozenset({TicketState.BOOKED}),
    TicketState.BOOKED: frozenset({TicketState.NONEXISTENT}),
}


def validate_transition(current: TicketState, target: TicketState) -> bool:
    """상태 전이가 유효한지 검증"""
    allowed = _VALID_TRANSITIONS.get(current, frozenset())
    return target in allowed
