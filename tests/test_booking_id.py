"""예약 번호 생성 스킬 테스트"""

import re
from unittest.mock import patch

from railway.skills.booking_id import ALPHABET, BookingIdGenerator

_ID_PATTERN = re.compile(r"BK[A-Z0-9]{8}")


class TestBookingIdFormat:
    def test_default_format(self):
        gen = BookingIdGenerator(seed=1)
        for _ in range(50):
            assert _ID_PATTERN.fullmatch(gen.generate(set()))

    def test_custom_prefix_and_length(self):
        gen = BookingIdGenerator(prefix="RR", length=4, seed=1)
        booking_id = gen.candidate()
        assert booking_id.startswith("RR")
        assert len(booking_id) == 6

    def test_alphabet(self):
        assert len(ALPHABET) == 36


class TestBookingIdSeeding:
    def test_same_seed_same_sequence(self):
        a = BookingIdGenerator(seed=42)
        b = BookingIdGenerator(seed=42)
        assert [a.candidate() for _ in range(5)] == [b.candidate() for _ in range(5)]

    def test_seed_is_exposed_when_not_given(self):
        gen = BookingIdGenerator()
        replay = BookingIdGenerator(seed=gen.seed)
        assert gen.candidate() == replay.candidate()


class TestBookingIdCollision:
    def test_skips_preseeded_collision(self):
        """원장에 이미 있는 번호는 건너뛰고 다음 후보를 반환"""
        reference = BookingIdGenerator(seed=7)
        first, second = reference.candidate(), reference.candidate()

        gen = BookingIdGenerator(seed=7)
        assert gen.generate({first}) == second

    def test_retries_until_unique(self):
        gen = BookingIdGenerator(seed=1)
        taken = {"BKAAAAAAAA", "BKBBBBBBBB"}
        with patch.object(
            BookingIdGenerator, "candidate",
            side_effect=["BKAAAAAAAA", "BKBBBBBBBB", "BKAAAAAAAA", "BKCCCCCCCC"],
        ) as mock_candidate:
            assert gen.generate(taken) == "BKCCCCCCCC"
        assert mock_candidate.call_count == 4

    def test_consecutive_ids_unique_against_ledger(self):
        gen = BookingIdGenerator(seed=3)
        ledger: set[str] = set()
        for _ in range(500):
            ledger.add(gen.generate(ledger))
        assert len(ledger) == 500
