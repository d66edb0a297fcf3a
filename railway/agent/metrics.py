"""예약 세션 메트릭 수집"""

from __future__ import annotations

from collections import Counter
from time import monotonic


class ReservationMetrics:
    """세션 단위 연산 카운터"""

    __slots__ = (
        "bookings", "cancellations", "status_lookups",
        "rollbacks", "failed_rollbacks",
        "rows_loaded", "rows_skipped",
        "_failures", "_start_time",
    )

    def __init__(self) -> None:
        self.bookings: int = 0
        self.cancellations: int = 0
        self.status_lookups: int = 0
        self.rollbacks: int = 0
        self.failed_rollbacks: int = 0
        self.rows_loaded: int = 0
        self.rows_skipped: int = 0
        self._failures: Counter[str] = Counter()
        self._start_time: float = monotonic()

    @property
    def session_duration_s(self) -> float:
        return monotonic() - self._start_time

    @property
    def total_failures(self) -> int:
        return sum(self._failures.values())

    def failures(self, kind: str) -> int:
        return self._failures[kind]

    def record_booking(self) -> None:
        self.bookings += 1

    def record_cancellation(self) -> None:
        self.cancellations += 1

    def record_status_lookup(self) -> None:
        self.status_lookups += 1

    def record_failure(self, error: Exception) -> None:
        self._failures[type(error).__name__] += 1

    def record_rollback(self, released: bool) -> None:
        if released:
            self.rollbacks += 1
        else:
            self.failed_rollbacks += 1

    def record_load(self, loaded: int, skipped: int) -> None:
        self.rows_loaded += loaded
        self.rows_skipped += skipped

    def summary(self) -> str:
        failures = ", ".join(
            f"{name} {count}회" for name, count in sorted(self._failures.items())
        ) or "없음"
        return (
            f"=== 세션 요약 ===\n"
            f"  경과 시간: {self.session_duration_s / 60:.1f}분\n"
            f"  예약: {self.bookings}건 / 취소: {self.cancellations}건 "
            f"/ 조회: {self.status_lookups}건\n"
            f"  실패: {self.total_failures}회 ({failures})\n"
            f"  보상 롤백: {self.rollbacks}회 (실패 {self.failed_rollbacks}회)\n"
            f"  적재 행: {self.rows_loaded}건 (건너뜀 {self.rows_skipped}건)"
        )
