"""통합 테스트: CLI 메뉴 플로우

input()을 Mock으로 대체해 main() 전체 수명주기를 검증한다.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from railway import main as cli
from railway.agent.engine import ReservationEngine
from railway.skills.codec import TICKET_HEADER


def _argv(tmp_path: Path) -> list[str]:
    return [
        "--trains-file", str(tmp_path / "trains.csv"),
        "--tickets-file", str(tmp_path / "tickets.csv"),
        "--seed", "99",
    ]


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch.object(cli, "setup_logging"):
        yield


class TestMainLifecycle:
    def test_book_and_exit_persists(self, tmp_path: Path, capsys) -> None:
        inputs = ["1", "3", "1001", "Asha Rao", "2", "1001", "0"]
        with patch("builtins.input", side_effect=inputs):
            code = cli.main(_argv(tmp_path))

        assert code == 0
        out = capsys.readouterr().out
        assert "Express Delhi" in out
        assert "예약이 완료되었습니다" in out
        assert "전체 100석 중 99석 예약 가능" in out
        assert "세션 요약" in out

        tickets = (tmp_path / "tickets.csv").read_text(encoding="utf-8").splitlines()
        assert tickets[0] == TICKET_HEADER
        assert ",1001,1,Asha Rao," in tickets[1]
        trains = (tmp_path / "trains.csv").read_text(encoding="utf-8")
        assert "1001,Express Delhi,100,99" in trains

    def test_invalid_inputs_reprompt(self, tmp_path: Path, capsys) -> None:
        inputs = ["abc", "9", "3", "1001", "   ", "5", "BKNOTHERE", "0"]
        with patch("builtins.input", side_effect=inputs):
            code = cli.main(_argv(tmp_path))

        assert code == 0
        out = capsys.readouterr().out
        assert "다시 입력하세요" in out
        assert "0~5" in out
        assert "승객 이름이(가) 비어 있습니다" in out
        assert "BKNOTHERE" in out

    def test_zero_train_id_is_reported(self, tmp_path: Path, capsys) -> None:
        inputs = ["2", "0", "3", "0", "Ravi", "0"]
        with patch("builtins.input", side_effect=inputs):
            code = cli.main(_argv(tmp_path))

        assert code == 0
        out = capsys.readouterr().out
        assert out.count("열차 0을(를) 찾을 수 없습니다") == 2
        assert "잔여석 조회 실패" in out
        assert "예약 실패" in out

    def test_eof_saves_and_exits(self, tmp_path: Path) -> None:
        with patch("builtins.input", side_effect=["1", EOFError()]):
            code = cli.main(_argv(tmp_path))

        assert code == 0
        assert (tmp_path / "trains.csv").exists()

    def test_cancel_via_menu(self, tmp_path: Path, capsys) -> None:
        with patch("builtins.input", side_effect=["3", "1002", "Ravi", "0"]):
            cli.main(_argv(tmp_path))
        row = (tmp_path / "tickets.csv").read_text(encoding="utf-8").splitlines()[1]
        booking_id = row.split(",", 1)[0]
        capsys.readouterr()

        with patch("builtins.input", side_effect=["4", booking_id, "0"]):
            cli.main(_argv(tmp_path))

        assert f"예약 번호 {booking_id} 취소 완료" in capsys.readouterr().out
        assert (tmp_path / "tickets.csv").read_text(encoding="utf-8").splitlines() == [
            TICKET_HEADER,
        ]

    def test_unexpected_error_exits_non_zero(self, tmp_path: Path) -> None:
        with patch.object(
            ReservationEngine, "startup", side_effect=RuntimeError("boom"),
        ):
            code = cli.main(_argv(tmp_path))
        assert code == 1

    def test_save_failure_is_reported(self, tmp_path: Path, capsys) -> None:
        argv = ["--trains-file", str(tmp_path), "--tickets-file", str(tmp_path / "t.csv")]
        with patch("builtins.input", side_effect=["0"]):
            code = cli.main(argv)

        assert code == 0
        assert "열차 저장 실패" in capsys.readouterr().out


class TestHandlers:
    def test_book_shows_ticket_without_status_lookup(
        self, engine: ReservationEngine, capsys,
    ) -> None:
        answers = iter(["1001", "Ravi"])
        cli.book(engine, lambda _: next(answers))

        out = capsys.readouterr().out
        assert "예약이 완료되었습니다" in out
        assert "Ravi" in out
        assert engine.ticket_count == 1
        assert engine.metrics.bookings == 1
        assert engine.metrics.status_lookups == 0

    def test_full_train_is_marked(self, small_engine: ReservationEngine, capsys) -> None:
        small_engine.book_ticket(1001, "A")
        small_engine.book_ticket(1001, "B")
        cli.show_trains(small_engine, lambda _: "")

        assert "(매진)" in capsys.readouterr().out

    def test_open_train_is_not_marked(self, engine: ReservationEngine, capsys) -> None:
        cli.show_trains(engine, lambda _: "")
        assert "(매진)" not in capsys.readouterr().out


class TestBuildParser:
    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("RAILWAY_TRAINS_FILE", raising=False)
        monkeypatch.delenv("RAILWAY_TICKETS_FILE", raising=False)
        args = cli.build_parser().parse_args([])
        assert args.trains_file == "trains.csv"
        assert args.tickets_file == "tickets.csv"
        assert args.seed is None

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("RAILWAY_TRAINS_FILE", "/data/t.csv")
        args = cli.build_parser().parse_args([])
        assert args.trains_file == "/data/t.csv"
