"""예약 번호 생성 스킬

접두어 + 영대문자/숫자 무작위 문자열. 현재 원장과 충돌하면 다시 뽑는다.
"""

from __future__ import annotations

import logging
import random
import secrets
import string
from collections.abc import Container
from typing import Optional

logger = logging.getLogger("railway.booking_id")

ALPHABET = string.ascii_uppercase + string.digits


class BookingIdGenerator:
    """충돌 없는 예약 번호 생성기

    Args:
        prefix: 고정 접두어 (기본 "BK")
        length: 무작위 부분 길이 (기본 8, 36^8 가지)
        seed: 난수 시드. None이면 OS 난수로 시드를 정해 seed 속성에 남긴다.
    """

    __slots__ = ("_prefix", "_length", "_seed", "_rng")

    def __init__(
        self,
        prefix: str = "BK",
        length: int = 8,
        seed: Optional[int] = None,
    ) -> None:
        self._prefix = prefix
        self._length = length
        self._seed = seed if seed is not None else secrets.randbits(64)
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def candidate(self) -> str:
        """원장 확인 없이 후보 번호 1개 생성"""
        body = "".join(self._rng.choices(ALPHABET, k=self._length))
        return f"{self._prefix}{body}"

    def generate(self, taken: Container[str]) -> str:
        """taken에 없는 번호가 나올 때까지 반복"""
        attempts = 1
        while True:
            booking_id = self.candidate()
            if booking_id not in taken:
                if attempts > 1:
                    logger.debug("예약 번호 확정: %d회 시도", attempts)
                return booking_id
            logger.debug("예약 번호 충돌: %s (재시도)", booking_id)
            attempts += 1
