"""철도 예약 시스템 - CLI 진입점

사용 예시:
    python -m railway.main
    python -m railway.main --trains-file data/trains.csv \
        --tickets-file data/tickets.csv --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Optional

from railway.agent.engine import ReservationEngine
from railway.models.config import ReservationConfig
from railway.models.errors import ValidationError
from railway.skills.validation import parse_menu_number, require_text
from railway.utils.logging_config import setup_logging

logger = logging.getLogger("railway.cli")

InputFn = Callable[[str], str]

BANNER = r"""
  ╔══════════════════════════════════════════════╗
  ║   철도 승차권 예약 시스템                    ║
  ║   Railway Reservation Ledger                 ║
  ╚══════════════════════════════════════════════╝
"""

MENU = """
  ====== 메뉴 ======
  1. 전체 열차 보기
  2. 잔여석 조회
  3. 승차권 예약
  4. 승차권 취소
  5. 승차권 조회
  0. 저장 후 종료
  =================="""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="철도 승차권 예약 원장",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "환경 변수:\n"
            "  RAILWAY_TRAINS_FILE   열차 파일 기본 경로\n"
            "  RAILWAY_TICKETS_FILE  승차권 파일 기본 경로"
        ),
    )
    p.add_argument(
        "--trains-file",
        default=os.environ.get("RAILWAY_TRAINS_FILE", "trains.csv"),
        help="열차 파일 경로 (기본: trains.csv)",
    )
    p.add_argument(
        "--tickets-file",
        default=os.environ.get("RAILWAY_TICKETS_FILE", "tickets.csv"),
        help="승차권 파일 경로 (기본: tickets.csv)",
    )
    p.add_argument("--seed", type=int, default=None, help="예약 번호 난수 시드")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    p.add_argument("--log-file", default=None, help="로그 파일 경로")
    return p


def prompt_number(prompt: str, input_fn: InputFn) -> Optional[int]:
    """숫자 입력. 잘못된 입력이면 안내 후 None."""
    raw = input_fn(prompt)
    try:
        return parse_menu_number(raw)
    except ValidationError as e:
        print(f"  [오류] {e}")
        return None


def prompt_text(prompt: str, field: str, input_fn: InputFn) -> Optional[str]:
    raw = input_fn(prompt)
    try:
        return require_text(raw, field)
    except ValidationError as e:
        print(f"  [오류] {e}")
        return None


# ── 메뉴 핸들러 ──

def show_trains(engine: ReservationEngine, input_fn: InputFn) -> None:
    trains = engine.list_trains()
    if not trains:
        print("  등록된 열차가 없습니다.")
        return
    print("\n  ========== 열차 목록 ==========")
    print(f"  {'열차 ID':<10}{'열차 이름':<20}{'전체 좌석':<15}{'잔여석':<15}")
    print("  " + "-" * 60)
    for summary in trains:
        suffix = " (매진)" if summary.is_full else ""
        print(f"  {summary.display()}{suffix}")


def show_availability(engine: ReservationEngine, input_fn: InputFn) -> None:
    train_id = prompt_number("  열차 ID: ", input_fn)
    if train_id is None:
        return
    outcome = engine.check_availability(train_id)
    if not outcome.ok:
        print(f"  [오류] {outcome.message}")
        return
    available, total = outcome.unwrap()
    print(f"  열차 {train_id}: 전체 {total}석 중 {available}석 예약 가능")
    if available == 0:
        print("  매진되었습니다.")


def book(engine: ReservationEngine, input_fn: InputFn) -> None:
    train_id = prompt_number("  열차 ID: ", input_fn)
    if train_id is None:
        return
    name = prompt_text("  승객 이름: ", "승객 이름", input_fn)
    if name is None:
        return
    outcome = engine.book_ticket(train_id, name)
    if not outcome.ok:
        print(f"  [오류] {outcome.message}")
        return
    print("  예약이 완료되었습니다!")
    ticket = engine.peek_ticket(outcome.unwrap())
    if ticket is not None:
        print(ticket.display())


def cancel(engine: ReservationEngine, input_fn: InputFn) -> None:
    booking_id = prompt_text("  예약 번호: ", "예약 번호", input_fn)
    if booking_id is None:
        return
    outcome = engine.cancel_ticket(booking_id)
    if not outcome.ok:
        print(f"  [오류] {outcome.message}")
        return
    print(f"  예약 번호 {booking_id} 취소 완료")


def status(engine: ReservationEngine, input_fn: InputFn) -> None:
    booking_id = prompt_text("  예약 번호: ", "예약 번호", input_fn)
    if booking_id is None:
        return
    outcome = engine.check_status(booking_id)
    if not outcome.ok:
        print(f"  [오류] {outcome.message}")
        return
    print(outcome.unwrap().display())


_HANDLERS: dict[int, Callable[[ReservationEngine, InputFn], None]] = {
    1: show_trains,
    2: show_availability,
    3: book,
    4: cancel,
    5: status,
}


def run_menu(engine: ReservationEngine, input_fn: Optional[InputFn] = None) -> None:
    """메뉴 루프. 0 선택 또는 입력 종료(EOF) 시 반환."""
    input_fn = input_fn or input
    while True:
        print(MENU)
        try:
            choice = prompt_number("  선택: ", input_fn)
            if choice is None:
                print("  다시 입력하세요.")
                continue
            if choice == 0:
                return
            handler = _HANDLERS.get(choice)
            if handler is None:
                print("  0~5 사이의 번호를 입력하세요.")
                continue
            handler(engine, input_fn)
        except EOFError:
            print()
            return


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    print(BANNER)
    try:
        config = ReservationConfig(
            trains_file=args.trains_file,
            tickets_file=args.tickets_file,
            seed=args.seed,
        )
        engine = ReservationEngine(config)
        engine.startup()

        try:
            run_menu(engine)
        except KeyboardInterrupt:
            print("\n\n  Ctrl+C 감지 - 저장 후 종료합니다")

        for outcome in engine.shutdown():
            if not outcome.ok:
                print(f"  [오류] {outcome.message} (데이터가 저장되지 않았습니다)")
        print(f"\n{engine.metrics.summary()}")
    except Exception as e:
        logger.critical("치명적 오류: %s", e, exc_info=True)
        print("  치명적 오류가 발생하여 프로그램을 종료합니다.")
        return 1

    print("  이용해 주셔서 감사합니다.")
    return 0


def cli_entry() -> None:
    """CLI 진입점 (pyproject.toml scripts에서 호출)"""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
