"""pytest 공통 픽스처

모든 테스트에서 공유하는 설정, 고정 시계, 엔진 인스턴스를 제공한다.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

from railway.agent.engine import ReservationEngine
from railway.models.config import ReservationConfig
from railway.models.ticket import Ticket

FIXED_NOW = datetime(2026, 3, 1, 9, 30, 15)
FIXED_BOOKING_TIME = "03/01/2026 09:30:15"


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """항상 2026-03-01 09:30:15를 반환하는 시계"""
    return lambda: FIXED_NOW


@pytest.fixture
def sample_config(tmp_path: Path) -> ReservationConfig:
    """tmp_path 아래 저장 파일 + 고정 시드"""
    return ReservationConfig(
        trains_file=tmp_path / "trains.csv",
        tickets_file=tmp_path / "tickets.csv",
        seed=1234,
    )


@pytest.fixture
def engine(sample_config: ReservationConfig, fixed_clock) -> ReservationEngine:
    """기본 열차 4편 (1001~1004, 각 100석)"""
    e = ReservationEngine(sample_config, clock=fixed_clock)
    e.seed_default_trains()
    return e


@pytest.fixture
def small_engine(sample_config: ReservationConfig, fixed_clock) -> ReservationEngine:
    """좌석 2개짜리 열차 1001 한 편"""
    e = ReservationEngine(sample_config, clock=fixed_clock)
    e.register_train(1001, "Express Delhi", 2)
    return e


@pytest.fixture
def sample_ticket() -> Ticket:
    return Ticket(
        booking_id="BKTEST0001",
        train_id=1001,
        seat_number=1,
        passenger_name="Asha Rao",
        booking_time=FIXED_BOOKING_TIME,
    )
