"""연산 결과 모델

엔진의 모든 호출자 대상 연산은 예외 대신 Outcome을 반환한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from railway.models.errors import ReservationError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """성공 값 또는 실패 원인을 담는 불변 결과"""

    operation: str
    value: Optional[T] = None
    error: Optional[ReservationError] = None

    @classmethod
    def success(cls, operation: str, value: T) -> Outcome[T]:
        return cls(operation=operation, value=value)

    @classmethod
    def failure(cls, operation: str, error: ReservationError) -> Outcome[T]:
        return cls(operation=operation, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        return f"{self.operation} 실패: {self.error}"

    def unwrap(self) -> T:
        """성공 값 반환. 실패 결과이면 원인 예외를 다시 발생시킨다."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class LoadReport:
    """테이블 적재 결과 요약"""

    source: str
    loaded: int
    skipped: int
    warnings: tuple[str, ...] = ()

    def summary(self) -> str:
        text = f"{self.source}: {self.loaded}건 적재"
        if self.skipped:
            text += f", {self.skipped}건 건너뜀"
        return text
