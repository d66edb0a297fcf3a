"""예약 원장 설정 모델"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# 열차 파일이 없을 때 사용하는 기본 열차 (ID, 이름, 좌석 수)
DEFAULT_TRAINS: tuple[tuple[int, str, int], ...] = (
    (1001, "Express Delhi", 100),
    (1002, "Mumbai Local", 100),
    (1003, "Chennai Mail", 100),
    (1004, "Kolkata Express", 100),
)

# 열차 한 대의 좌석 수 상한. 좌석 배열은 메모리에 통째로 잡힌다
MAX_SEATS = 10_000


@dataclass
class ReservationConfig:
    """예약 원장 설정 - 저장 경로와 예약 번호 형식"""

    # 저장 파일
    trains_file: Path = field(default_factory=lambda: Path("trains.csv"))
    tickets_file: Path = field(default_factory=lambda: Path("tickets.csv"))

    # 예약 번호: 접두어 + 영대문자/숫자 N자리
    booking_id_prefix: str = "BK"
    booking_id_length: int = 8
    seed: Optional[int] = None

    default_trains: tuple[tuple[int, str, int], ...] = DEFAULT_TRAINS

    def __post_init__(self) -> None:
        self.trains_file = Path(self.trains_file)
        self.tickets_file = Path(self.tickets_file)
        if self.booking_id_length < 1:
            raise ValueError("예약 번호 길이는 1 이상이어야 합니다")
