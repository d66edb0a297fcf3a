"""데이터 모델 패키지

  Train / TrainSummary - 열차와 좌석 점유 맵
  Ticket               - 불변 승차권 레코드
  Outcome / LoadReport - 엔진 연산 결과
  ReservationConfig    - 저장 경로, 예약 번호 형식
"""

from railway.models.config import DEFAULT_TRAINS, MAX_SEATS, ReservationConfig
from railway.models.errors import (
    LedgerInconsistency,
    NoSeatsAvailable,
    ReservationError,
    SeatOutOfRange,
    SourceUnavailable,
    TicketNotFound,
    TrainNotFound,
    ValidationError,
)
from railway.models.outcome import LoadReport, Outcome
from railway.models.ticket import BOOKING_TIME_FORMAT, Ticket
from railway.models.train import Train, TrainSummary

__all__ = [
    "DEFAULT_TRAINS",
    "MAX_SEATS",
    "ReservationConfig",
    "ReservationError",
    "ValidationError",
    "TrainNotFound",
    "SeatOutOfRange",
    "NoSeatsAvailable",
    "TicketNotFound",
    "SourceUnavailable",
    "LedgerInconsistency",
    "Outcome",
    "LoadReport",
    "BOOKING_TIME_FORMAT",
    "Ticket",
    "Train",
    "TrainSummary",
]
