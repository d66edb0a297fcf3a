"""예약 엔진 (ReservationEngine)

열차 레지스트리와 승차권 원장을 단독 소유하고,
호출자 연산(예약/취소/조회/목록/잔여석)과 적재/저장을 조율한다.

불변 조건:
  - 승차권이 존재하면 해당 (열차, 좌석)은 점유 상태다
  - 좌석 점유와 승차권 레코드는 함께 생기고 함께 사라진다
    (중간 단계 실패 시 보상 롤백으로 좌석을 되돌린다)

호출자 연산은 예외 대신 Outcome을 반환한다.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from railway.agent.metrics import ReservationMetrics
from railway.agent.state import TicketState, validate_transition
from railway.models.config import ReservationConfig
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
from railway.models.ticket import Ticket
from railway.models.train import Train, TrainSummary
from railway.skills.booking_id import BookingIdGenerator
from railway.skills.codec import CsvCodec
from railway.skills.validation import require_text

logger = logging.getLogger("railway.engine")


class ReservationEngine:
    """단일 사용자 예약 원장 엔진"""

    __slots__ = (
        "_config", "_trains", "_tickets", "_unowned",
        "_generator", "_codec", "_metrics", "_clock",
    )

    def __init__(
        self,
        config: Optional[ReservationConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._config = config or ReservationConfig()
        self._trains: dict[int, Train] = {}
        self._tickets: dict[str, Ticket] = {}
        # 열차 표의 잔여석 수로만 점유된 좌석 (소유 승차권 없음)
        self._unowned: dict[int, set[int]] = {}
        self._generator = BookingIdGenerator(
            prefix=self._config.booking_id_prefix,
            length=self._config.booking_id_length,
            seed=self._config.seed,
        )
        self._codec = CsvCodec()
        self._metrics = ReservationMetrics()
        self._clock = clock or datetime.now

    # ── Properties ──

    @property
    def config(self) -> ReservationConfig:
        return self._config

    @property
    def metrics(self) -> ReservationMetrics:
        return self._metrics

    @property
    def ticket_count(self) -> int:
        return len(self._tickets)

    def booking_ids(self) -> frozenset[str]:
        return frozenset(self._tickets)

    # ── Registry ──

    def register_train(
        self, train_id: int, name: str, total_seats: int,
    ) -> Outcome[TrainSummary]:
        """초기화 단계에서 열차 1편 등록"""
        op = "열차 등록"
        try:
            if train_id in self._trains:
                raise ValidationError(f"이미 등록된 열차입니다: {train_id}")
            train = Train(train_id, name, total_seats)
        except ReservationError as e:
            return self._fail(op, e)
        self._trains[train_id] = train
        logger.debug("열차 등록: %r", train)
        return Outcome.success(op, train.summary())

    def seed_default_trains(self) -> None:
        """설정의 기본 열차로 레지스트리 전체 교체 (원장도 비운다)"""
        self._trains = {
            train_id: Train(train_id, name, seats)
            for train_id, name, seats in self._config.default_trains
        }
        self._tickets = {}
        self._unowned = {}
        logger.info("기본 열차 %d편으로 초기화", len(self._trains))

    def _find_train(self, train_id: int) -> Train:
        train = self._trains.get(train_id)
        if train is None:
            raise TrainNotFound(train_id)
        return train

    def _find_ticket(self, booking_id: str) -> Ticket:
        ticket = self._tickets.get(booking_id)
        if ticket is None:
            raise TicketNotFound(booking_id)
        return ticket

    # ── Ticket State Machine ──

    def _ticket_state(self, booking_id: str) -> TicketState:
        if booking_id in self._tickets:
            return TicketState.BOOKED
        return TicketState.NONEXISTENT

    def _transition(self, booking_id: str, target: TicketState) -> None:
        current = self._ticket_state(booking_id)
        if not validate_transition(current, target):
            raise LedgerInconsistency(
                f"승차권 {booking_id} 상태 전이 불가: "
                f"{current.name} → {target.name}"
            )

    def _insert_ticket(self, ticket: Ticket) -> None:
        self._transition(ticket.booking_id, TicketState.BOOKED)
        self._tickets[ticket.booking_id] = ticket

    def _remove_ticket(self, booking_id: str) -> Ticket:
        self._transition(booking_id, TicketState.NONEXISTENT)
        return self._tickets.pop(booking_id)

    # ── Failure / Rollback ──

    def _fail(self, operation: str, error: ReservationError) -> Outcome:
        outcome: Outcome = Outcome.failure(operation, error)
        if isinstance(error, LedgerInconsistency):
            logger.error(outcome.message)
        else:
            logger.warning(outcome.message)
        self._metrics.record_failure(error)
        return outcome

    def _compensate(self, train: Train, seat_number: int) -> None:
        """방금 점유한 좌석을 되돌린다. 실패해도 자동 보정하지 않는다."""
        released = train.release(seat_number)
        self._metrics.record_rollback(released)
        if released:
            logger.info(
                "보상 롤백: 열차 %d 좌석 %d 해제", train.train_id, seat_number,
            )
        else:
            logger.error(
                "보상 롤백 실패: 열차 %d 좌석 %d이(가) 이미 비어 있음 "
                "(정합성 점검 필요)",
                train.train_id, seat_number,
            )

    # ── Caller Operations ──

    def list_trains(self) -> tuple[TrainSummary, ...]:
        return tuple(train.summary() for train in self._trains.values())

    def check_availability(self, train_id: int) -> Outcome[tuple[int, int]]:
        """(잔여석, 전체 좌석) 반환"""
        op = "잔여석 조회"
        try:
            train = self._find_train(train_id)
        except ReservationError as e:
            return self._fail(op, e)
        return Outcome.success(op, (train.available_count(), train.total_seats))

    def book_ticket(self, train_id: int, passenger_name: str) -> Outcome[str]:
        """가장 낮은 번호의 빈 좌석으로 예약하고 예약 번호를 반환"""
        op = "예약"
        try:
            require_text(passenger_name, "승객 이름")
            train = self._find_train(train_id)
            seat_number = train.book_next_available()
        except ReservationError as e:
            return self._fail(op, e)

        booking_id = self._generator.generate(self._tickets)
        try:
            ticket = Ticket.issue(
                booking_id, train_id, seat_number, passenger_name, self._clock(),
            )
            self._insert_ticket(ticket)
        except ReservationError as e:
            self._compensate(train, seat_number)
            return self._fail(op, e)

        self._metrics.record_booking()
        logger.info(
            "예약 완료: %s (열차 %d, 좌석 %d, %s)",
            booking_id, train_id, seat_number, passenger_name,
        )
        return Outcome.success(op, booking_id)

    def cancel_ticket(self, booking_id: str) -> Outcome[Ticket]:
        """좌석을 해제하고 원장에서 삭제. 취소된 승차권을 반환."""
        op = "취소"
        try:
            ticket = self._find_ticket(booking_id)
            train = self._find_train(ticket.train_id)
            released = train.release(ticket.seat_number)
        except ReservationError as e:
            return self._fail(op, e)

        if not released:
            return self._fail(op, LedgerInconsistency(
                f"승차권 {booking_id}의 좌석 {ticket.seat_number}"
                f"(열차 {ticket.train_id})이 이미 비어 있어 원장 항목을 유지합니다"
            ))

        self._remove_ticket(booking_id)
        self._metrics.record_cancellation()
        logger.info("취소 완료: %s (열차 %d, 좌석 %d)",
                    booking_id, ticket.train_id, ticket.seat_number)
        return Outcome.success(op, ticket)

    def check_status(self, booking_id: str) -> Outcome[Ticket]:
        op = "승차권 조회"
        try:
            ticket = self._find_ticket(booking_id)
        except ReservationError as e:
            return self._fail(op, e)
        self._metrics.record_status_lookup()
        return Outcome.success(op, ticket)

    def peek_ticket(self, booking_id: str) -> Optional[Ticket]:
        """원장 직접 조회. 조회 메트릭을 남기지 않는다."""
        return self._tickets.get(booking_id)

    # ── Consistency ──

    def verify_consistency(self) -> list[str]:
        """불변 조건 위반 목록. 정상이면 빈 리스트."""
        issues: list[str] = []
        per_train: Counter[int] = Counter()

        for ticket in self._tickets.values():
            train = self._trains.get(ticket.train_id)
            if train is None:
                issues.append(
                    f"승차권 {ticket.booking_id}: 없는 열차 {ticket.train_id} 참조"
                )
                continue
            try:
                if train.is_available(ticket.seat_number):
                    issues.append(
                        f"승차권 {ticket.booking_id}: 열차 {ticket.train_id} "
                        f"좌석 {ticket.seat_number}이(가) 점유되지 않음"
                    )
            except SeatOutOfRange as e:
                issues.append(f"승차권 {ticket.booking_id}: {e}")
                continue
            per_train[ticket.train_id] += 1

        for train_id, train in self._trains.items():
            occupied_seats = set(train.occupied_seats())
            unowned_seats = self._unowned.get(train_id, set())
            stray = sorted(unowned_seats - occupied_seats)
            if stray:
                issues.append(
                    f"열차 {train_id}: 표 기준 좌석 {stray}이(가) 점유되지 않음"
                )
            unowned = len(unowned_seats)
            expected = per_train[train_id] + unowned
            occupied = len(occupied_seats)
            if occupied != expected:
                issues.append(
                    f"열차 {train_id}: 점유 {occupied}석 ≠ "
                    f"승차권 {per_train[train_id]}건 + 표 기준 {unowned}석"
                )
        return issues

    # ── Persistence ──

    def _occupy_by_count(
        self, train: Train, count: int, warnings: list[str],
    ) -> set[int]:
        """낮은 번호부터 count석 점유. 점유한 좌석 번호 집합 반환."""
        seats: set[int] = set()
        if count < 0:
            note = (
                f"열차 {train.train_id}: 잔여석이 전체 좌석보다 많습니다 "
                f"(초과 {-count}석) - 모든 좌석을 비워 둡니다"
            )
            logger.warning(note)
            warnings.append(note)
            return seats
        for _ in range(count):
            try:
                seats.add(train.book_next_available())
            except NoSeatsAvailable:
                note = (
                    f"열차 {train.train_id}: 좌석 데이터 불일치 "
                    f"({count}석 중 {len(seats)}석만 점유)"
                )
                logger.warning(note)
                warnings.append(note)
                break
        return seats

    def load_trains(self, path: str | Path | None = None) -> Outcome[LoadReport]:
        """열차 표 적재. 레지스트리와 원장을 통째로 교체한다."""
        op = "열차 적재"
        source = Path(path) if path is not None else self._config.trains_file
        try:
            rows = self._codec.read_rows(source)
        except SourceUnavailable as e:
            return self._fail(op, e)

        trains: dict[int, Train] = {}
        unowned: dict[int, set[int]] = {}
        warnings: list[str] = []
        skipped = 0

        for line_no, line in rows:
            try:
                row = self._codec.parse_train_row(line)
                train = Train(row.train_id, row.name, row.total_seats)
                if train.train_id in trains:
                    raise ValidationError(f"중복된 열차 ID: {train.train_id}")
            except ValidationError as e:
                skipped += 1
                logger.warning("%s:%d 열차 행 건너뜀: %s | %r", source, line_no, e, line)
                continue

            booked = row.total_seats - row.available_seats
            unowned[train.train_id] = self._occupy_by_count(train, booked, warnings)
            trains[train.train_id] = train

        if self._tickets:
            logger.info("열차 표 교체 - 기존 승차권 %d건 폐기", len(self._tickets))
        self._trains = trains
        self._tickets = {}
        self._unowned = unowned

        report = LoadReport(str(source), len(trains), skipped, tuple(warnings))
        self._metrics.record_load(report.loaded, report.skipped)
        logger.info("열차 표 적재: %s", report.summary())
        return Outcome.success(op, report)

    def load_tickets(self, path: str | Path | None = None) -> Outcome[LoadReport]:
        """승차권 표 적재. 원장을 통째로 교체한다.

        열차 표의 잔여석 수로 채워 둔 좌석을 먼저 비우고, 명시된 좌석을
        배정한 뒤, 남는 수만큼 다시 낮은 번호부터 점유한다.
        """
        op = "승차권 적재"
        source = Path(path) if path is not None else self._config.tickets_file
        try:
            rows = self._codec.read_rows(source)
        except SourceUnavailable as e:
            return self._fail(op, e)

        # 기존 원장 좌석 해제
        for ticket in self._tickets.values():
            train = self._trains.get(ticket.train_id)
            if train is None or not train.release(ticket.seat_number):
                logger.error(
                    "원장 교체 중 좌석 해제 실패: %s (열차 %d, 좌석 %d)",
                    ticket.booking_id, ticket.train_id, ticket.seat_number,
                )
        self._tickets = {}

        # 표 기준 점유 해제 후 수만 기억
        pending: dict[int, int] = {}
        for train_id, seats in self._unowned.items():
            train = self._trains[train_id]
            for seat in seats:
                train.release(seat)
            pending[train_id] = len(seats)
        self._unowned = {}

        warnings: list[str] = []
        loaded_per_train: Counter[int] = Counter()
        skipped = 0

        for line_no, line in rows:
            try:
                row = self._codec.parse_ticket_row(line)
                train = self._find_train(row.train_id)
                booked = train.book_specific(row.seat_number)
            except ReservationError as e:
                skipped += 1
                logger.warning("%s:%d 승차권 행 건너뜀: %s | %r", source, line_no, e, line)
                continue

            if not booked:
                skipped += 1
                logger.warning(
                    "%s:%d 열차 %d 좌석 %d 이미 예약됨 - 승차권 %s 건너뜀",
                    source, line_no, row.train_id, row.seat_number, row.booking_id,
                )
                continue

            try:
                self._insert_ticket(Ticket(
                    booking_id=row.booking_id,
                    train_id=row.train_id,
                    seat_number=row.seat_number,
                    passenger_name=row.passenger_name,
                    booking_time=row.booking_time,
                ))
            except ReservationError as e:
                skipped += 1
                logger.warning("%s:%d 승차권 생성 실패: %s | %r", source, line_no, e, line)
                self._compensate(train, row.seat_number)
                continue
            loaded_per_train[row.train_id] += 1

        for train_id, count in pending.items():
            remaining = count - loaded_per_train[train_id]
            if remaining < 0:
                note = (
                    f"열차 {train_id}: 승차권 {loaded_per_train[train_id]}건이 "
                    f"열차 표의 예약 수 {count}석보다 많습니다"
                )
                logger.warning(note)
                warnings.append(note)
                remaining = 0
            self._unowned[train_id] = self._occupy_by_count(
                self._trains[train_id], remaining, warnings,
            )

        report = LoadReport(
            str(source), sum(loaded_per_train.values()), skipped, tuple(warnings),
        )
        self._metrics.record_load(report.loaded, report.skipped)
        logger.info("승차권 표 적재: %s", report.summary())
        return Outcome.success(op, report)

    def save_trains(self, path: str | Path | None = None) -> Outcome[int]:
        op = "열차 저장"
        target = Path(path) if path is not None else self._config.trains_file
        try:
            count = self._codec.write_trains(target, self.list_trains())
        except SourceUnavailable as e:
            return self._fail(op, e)
        logger.info("열차 %d편 저장: %s", count, target)
        return Outcome.success(op, count)

    def save_tickets(self, path: str | Path | None = None) -> Outcome[int]:
        op = "승차권 저장"
        target = Path(path) if path is not None else self._config.tickets_file
        try:
            count = self._codec.write_tickets(target, self._tickets.values())
        except SourceUnavailable as e:
            return self._fail(op, e)
        logger.info("승차권 %d건 저장: %s", count, target)
        return Outcome.success(op, count)

    # ── Lifecycle ──

    def startup(self) -> tuple[Outcome[LoadReport], Outcome[LoadReport]]:
        """열차 → 승차권 순서로 적재. 실패 시 기본 열차 / 빈 원장으로 시작."""
        trains = self.load_trains()
        if not trains.ok:
            logger.info("열차 파일을 읽을 수 없어 기본 열차를 사용합니다")
            self.seed_default_trains()

        tickets = self.load_tickets()
        if not tickets.ok:
            logger.info("승차권 파일을 읽을 수 없어 기존 예약 없이 시작합니다")

        for issue in self.verify_consistency():
            logger.warning("정합성 경고: %s", issue)
        return trains, tickets

    def shutdown(self) -> tuple[Outcome[int], Outcome[int]]:
        """열차/승차권 저장. 한쪽 실패가 다른 쪽 저장을 막지 않는다."""
        trains = self.save_trains()
        tickets = self.save_tickets()
        return trains, tickets
