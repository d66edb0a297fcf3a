"""ReservationMetrics 단위 테스트"""

from __future__ import annotations

from railway.agent.metrics import ReservationMetrics
from railway.models.errors import NoSeatsAvailable, TrainNotFound


class TestReservationMetrics:
    def test_initial_state(self) -> None:
        m = ReservationMetrics()
        assert m.bookings == 0
        assert m.total_failures == 0
        assert m.session_duration_s >= 0.0

    def test_failures_grouped_by_type(self) -> None:
        m = ReservationMetrics()
        m.record_failure(TrainNotFound(1))
        m.record_failure(TrainNotFound(2))
        m.record_failure(NoSeatsAvailable(1))
        assert m.failures("TrainNotFound") == 2
        assert m.failures("NoSeatsAvailable") == 1
        assert m.failures("TicketNotFound") == 0
        assert m.total_failures == 3

    def test_rollback_split(self) -> None:
        m = ReservationMetrics()
        m.record_rollback(True)
        m.record_rollback(False)
        assert (m.rollbacks, m.failed_rollbacks) == (1, 1)

    def test_record_load_accumulates(self) -> None:
        m = ReservationMetrics()
        m.record_load(4, 1)
        m.record_load(2, 0)
        assert (m.rows_loaded, m.rows_skipped) == (6, 1)

    def test_summary(self) -> None:
        m = ReservationMetrics()
        m.record_booking()
        m.record_cancellation()
        m.record_failure(TrainNotFound(9))
        s = m.summary()
        assert "세션 요약" in s
        assert "예약: 1건" in s
        assert "TrainNotFound 1회" in s

    def test_summary_without_failures(self) -> None:
        assert "실패: 0회 (없음)" in ReservationMetrics().summary()
