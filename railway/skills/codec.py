"""저장 파일 코덱 스킬

열차 표와 승차권 표를 콤마 구분 텍스트로 읽고 쓴다.
따옴표/이스케이프는 지원하지 않는다. 이름에 콤마가 들어가면
그대로 기록하고 경고만 남긴다.

열차 표:   trainId,trainName,totalSeats,availableSeats
승차권 표: bookingId,trainId,seatNumber,passengerName,bookingTime
           (bookingTime은 네 번째 콤마 이후 나머지 전체)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from railway.models.config import MAX_SEATS
from railway.models.errors import SourceUnavailable, ValidationError
from railway.models.ticket import Ticket
from railway.models.train import TrainSummary

logger = logging.getLogger("railway.codec")

DELIMITER = ","
TRAIN_HEADER = "trainId,trainName,totalSeats,availableSeats"
TICKET_HEADER = "bookingId,trainId,seatNumber,passengerName,bookingTime"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class TrainRow:
    train_id: int
    name: str
    total_seats: int
    available_seats: int


@dataclass(frozen=True, slots=True)
class TicketRow:
    booking_id: str
    train_id: int
    seat_number: int
    passenger_name: str
    booking_time: str


def parse_int(token: str, field: str) -> int:
    """10진 정수 필드 파싱. 실패 시 ValidationError."""
    text = token.strip()
    if not _INT_PATTERN.fullmatch(text):
        raise ValidationError(f"{field} 값이 정수가 아닙니다: '{token}'")
    return int(text, 10)


class CsvCodec:
    """열차/승차권 표 코덱"""

    # ── Row 단위 ──

    @staticmethod
    def parse_train_row(line: str) -> TrainRow:
        fields = line.split(DELIMITER, 3)
        if len(fields) < 4:
            raise ValidationError(f"열차 행의 필드가 부족합니다 ({len(fields)}/4)")
        total_seats = parse_int(fields[2], "totalSeats")
        if total_seats > MAX_SEATS:
            raise ValidationError(
                f"totalSeats 값이 최대({MAX_SEATS})를 넘습니다: {total_seats}"
            )
        return TrainRow(
            train_id=parse_int(fields[0], "trainId"),
            name=fields[1],
            total_seats=total_seats,
            available_seats=parse_int(fields[3], "availableSeats"),
        )

    @staticmethod
    def parse_ticket_row(line: str) -> TicketRow:
        """bookingTime은 다시 분리하지 않는다. 필드가 4개뿐이면 빈 문자열."""
        fields = line.split(DELIMITER, 4)
        if len(fields) < 4:
            raise ValidationError(f"승차권 행의 필드가 부족합니다 ({len(fields)}/5)")
        return TicketRow(
            booking_id=fields[0],
            train_id=parse_int(fields[1], "trainId"),
            seat_number=parse_int(fields[2], "seatNumber"),
            passenger_name=fields[3],
            booking_time=fields[4] if len(fields) == 5 else "",
        )

    @staticmethod
    def format_train_row(summary: TrainSummary) -> str:
        if DELIMITER in summary.name:
            logger.warning(
                "열차 %d 이름에 구분자 포함 - 재적재 시 행이 손상됩니다: %r",
                summary.train_id, summary.name,
            )
        return DELIMITER.join((
            str(summary.train_id),
            summary.name,
            str(summary.total_seats),
            str(summary.available_seats),
        ))

    @staticmethod
    def format_ticket_row(ticket: Ticket) -> str:
        if DELIMITER in ticket.passenger_name:
            logger.warning(
                "승차권 %s 승객 이름에 구분자 포함 - 재적재 시 행이 손상됩니다: %r",
                ticket.booking_id, ticket.passenger_name,
            )
        return DELIMITER.join((
            ticket.booking_id,
            str(ticket.train_id),
            str(ticket.seat_number),
            ticket.passenger_name,
            ticket.booking_time,
        ))

    # ── 파일 단위 ──

    @staticmethod
    def read_rows(path: str | Path) -> list[tuple[int, str]]:
        """헤더를 제외한 (행 번호, 내용) 목록. 빈 줄은 생략."""
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                lines = f.read().split("\n")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(str(path), "열기", str(e)) from e

        return [
            (no, line)
            for no, line in enumerate(lines[1:], start=2)
            if line.strip()
        ]

    @staticmethod
    def write_table(path: str | Path, header: str, rows: Iterable[str]) -> int:
        """헤더 + 행 전체를 덮어쓴다. 기록한 행 수를 반환."""
        path = Path(path)
        body = list(rows)
        try:
            with path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(header + "\n")
                for row in body:
                    f.write(row + "\n")
        except OSError as e:
            raise SourceUnavailable(str(path), "쓰기", str(e)) from e
        return len(body)

    # ── 표 단위 ──

    def write_trains(self, path: str | Path, summaries: Iterable[TrainSummary]) -> int:
        return self.write_table(
            path, TRAIN_HEADER, (self.format_train_row(s) for s in summaries),
        )

    def write_tickets(self, path: str | Path, tickets: Iterable[Ticket]) -> int:
        return self.write_table(
            path, TICKET_HEADER, (self.format_ticket_row(t) for t in tickets),
        )
