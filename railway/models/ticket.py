"""승차권 레코드

생성 시 검증되는 불변 객체. 예약 시각은 생성 순간에 캡처되며
파일에서 적재할 때는 저장된 값을 그대로 유지한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from railway.models.errors import ValidationError

BOOKING_TIME_FORMAT = "%m/%d/%Y %H:%M:%S"


@dataclass(frozen=True, slots=True)
class Ticket:
    """불변 승차권"""

    booking_id: str
    train_id: int
    seat_number: int
    passenger_name: str
    booking_time: str

    def __post_init__(self) -> None:
        if not self.booking_id or not self.booking_id.strip():
            raise ValidationError("예약 번호가 비어 있습니다")
        if self.train_id <= 0:
            raise ValidationError("열차 ID는 양수여야 합니다")
        if self.seat_number <= 0:
            raise ValidationError("좌석 번호는 양수여야 합니다")
        if not self.passenger_name or not self.passenger_name.strip():
            raise ValidationError("승객 이름이 비어 있습니다")
        try:
            datetime.strptime(self.booking_time, BOOKING_TIME_FORMAT)
        except ValueError:
            raise ValidationError(
                f"예약 시각 형식이 올바르지 않습니다: '{self.booking_time}' "
                f"(MM/DD/YYYY HH:MM:SS)"
            ) from None

    @classmethod
    def issue(
        cls,
        booking_id: str,
        train_id: int,
        seat_number: int,
        passenger_name: str,
        issued_at: datetime,
    ) -> Ticket:
        """신규 예약용 생성자. issued_at을 예약 시각 문자열로 고정한다."""
        return cls(
            booking_id=booking_id,
            train_id=train_id,
            seat_number=seat_number,
            passenger_name=passenger_name,
            booking_time=issued_at.strftime(BOOKING_TIME_FORMAT),
        )

    def display(self) -> str:
        return (
            "\n========== 승차권 정보 ==========\n"
            f"  예약 번호: {self.booking_id}\n"
            f"  열차 ID:   {self.train_id}\n"
            f"  좌석 번호: {self.seat_number}\n"
            f"  승객 이름: {self.passenger_name}\n"
            f"  예약 시각: {self.booking_time}\n"
            "================================="
        )
