"""예약 원장 오류 체계

컴포넌트(Train, Ticket, 코덱)는 아래 예외를 발생시키고,
ReservationEngine 경계에서 Outcome 실패값으로 변환된다.
"""

from __future__ import annotations


class ReservationError(Exception):
    """예약 원장 도메인 오류의 기본 클래스"""


class ValidationError(ReservationError, ValueError):
    """생성자 또는 연산에 대한 빈 값/잘못된 입력"""


class TrainNotFound(ReservationError, LookupError):
    def __init__(self, train_id: int) -> None:
        self.train_id = train_id
        super().__init__(f"열차 {train_id}을(를) 찾을 수 없습니다")


class SeatOutOfRange(ReservationError, IndexError):
    def __init__(self, train_id: int, seat_number: int, total_seats: int) -> None:
        self.train_id = train_id
        self.seat_number = seat_number
        self.total_seats = total_seats
        super().__init__(
            f"열차 {train_id}의 좌석 번호 {seat_number}은(는) "
            f"유효 범위(1~{total_seats})를 벗어났습니다"
        )


class NoSeatsAvailable(ReservationError):
    def __init__(self, train_id: int) -> None:
        self.train_id = train_id
        super().__init__(f"열차 {train_id}에 남은 좌석이 없습니다")


class TicketNotFound(ReservationError, LookupError):
    def __init__(self, booking_id: str) -> None:
        self.booking_id = booking_id
        super().__init__(f"예약 번호 {booking_id}의 승차권을 찾을 수 없습니다")


class SourceUnavailable(ReservationError):
    """파일 적재/저장 I/O 실패"""

    def __init__(self, source: str, operation: str, reason: str = "") -> None:
        self.source = source
        self.operation = operation
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"파일 {operation} 실패: {source}{detail}")


class LedgerInconsistency(ReservationError):
    """좌석 점유 상태와 원장이 어긋난 상태를 감지 (비치명적)"""
