"""열차 및 좌석 점유 맵

좌석 번호는 1부터 시작하고, 내부 리스트의 인덱스 0이 좌석 1이다.
"""

from __future__ import annotations

from dataclasses import dataclass

from railway.models.config import MAX_SEATS
from railway.models.errors import NoSeatsAvailable, SeatOutOfRange, ValidationError


@dataclass(frozen=True, slots=True)
class TrainSummary:
    """열차 목록 조회용 불변 스냅샷"""

    train_id: int
    name: str
    total_seats: int
    available_seats: int

    @property
    def is_full(self) -> bool:
        return self.available_seats == 0

    def display(self) -> str:
        return (
            f"{self.train_id:<10}{self.name:<20}"
            f"{self.total_seats:<15}{self.available_seats:<15}"
        )


class Train:
    """고정 크기 좌석 풀을 가진 열차"""

    __slots__ = ("_train_id", "_name", "_total_seats", "_occupied")

    def __init__(self, train_id: int, name: str, total_seats: int) -> None:
        if train_id <= 0:
            raise ValidationError("열차 ID는 양수여야 합니다")
        if not name:
            raise ValidationError("열차 이름이 비어 있습니다")
        if total_seats <= 0:
            raise ValidationError("좌석 수는 양수여야 합니다")
        if total_seats > MAX_SEATS:
            raise ValidationError(f"좌석 수는 {MAX_SEATS}석 이하여야 합니다")

        self._train_id = train_id
        self._name = name
        self._total_seats = total_seats
        self._occupied = [False] * total_seats

    # ── Properties ──

    @property
    def train_id(self) -> int:
        return self._train_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def total_seats(self) -> int:
        return self._total_seats

    # ── Seat Map ──

    def _index(self, seat_number: int) -> int:
        if seat_number < 1 or seat_number > self._total_seats:
            raise SeatOutOfRange(self._train_id, seat_number, self._total_seats)
        return seat_number - 1

    def is_available(self, seat_number: int) -> bool:
        return not self._occupied[self._index(seat_number)]

    def available_count(self) -> int:
        return self._occupied.count(False)

    def occupied_count(self) -> int:
        return self._total_seats - self.available_count()

    def occupied_seats(self) -> tuple[int, ...]:
        return tuple(i + 1 for i, taken in enumerate(self._occupied) if taken)

    def book_next_available(self) -> int:
        """가장 낮은 번호의 빈 좌석을 점유하고 좌석 번호를 반환"""
        for i, taken in enumerate(self._occupied):
            if not taken:
                self._occupied[i] = True
                return i + 1
        raise NoSeatsAvailable(self._train_id)

    def book_specific(self, seat_number: int) -> bool:
        """지정 좌석 점유. 이미 점유된 좌석이면 False."""
        i = self._index(seat_number)
        if self._occupied[i]:
            return False
        self._occupied[i] = True
        return True

    def release(self, seat_number: int) -> bool:
        """좌석 해제. 이미 빈 좌석이면 False."""
        i = self._index(seat_number)
        if not self._occupied[i]:
            return False
        self._occupied[i] = False
        return True

    def summary(self) -> TrainSummary:
        return TrainSummary(
            train_id=self._train_id,
            name=self._name,
            total_seats=self._total_seats,
            available_seats=self.available_count(),
        )

    def __repr__(self) -> str:
        return (
            f"Train({self._train_id}, {self._name!r}, "
            f"{self.available_count()}/{self._total_seats})"
        )
