"""로깅 설정

콘솔(stderr)과 원장 감사 로그 파일을 구성한다.
메뉴 출력은 stdout을 쓰므로 로그는 stderr로만 보낸다.
콘솔이 터미널일 때만 레벨별 컬러를 입힌다.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s │ %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"

# 감사 로그: 날짜 포함, 호출 위치까지 남긴다 (행 건너뜀/롤백 추적용)
LEDGER_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s [%(module)s:%(lineno)d] %(message)s"
)
LEDGER_DATEFMT = "%Y-%m-%d %H:%M:%S"

_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    """레벨 이름만 칠하는 콘솔 포매터"""

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = _COLORS.get(original, "")
        record.levelname = f"{color}{original:<8}{_RESET}"
        try:
            return super().format(record)
        finally:
            # 같은 레코드를 파일 핸들러도 받는다
            record.levelname = original


def supports_color(stream: TextIO) -> bool:
    """컬러 출력 가능 여부. NO_COLOR가 있으면 끈다."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    # 구형 Windows 콘솔은 ANSI를 해석하지 못한다
    if sys.platform == "win32":
        return "WT_SESSION" in os.environ or "ANSICON" in os.environ
    return True


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    stream: Optional[TextIO] = None,
) -> None:
    """루트 로거 초기화

    Args:
        level: 콘솔 로그 레벨 (DEBUG, INFO, WARNING, ERROR)
        log_file: 감사 로그 파일 경로. 지정하면 레벨과 무관하게 INFO 이상을 기록
        stream: 콘솔 스트림 (기본 stderr)
    """
    console_level = getattr(logging, level.upper(), logging.INFO)
    stream = stream or sys.stderr

    root = logging.getLogger()
    root.handlers.clear()

    console = logging.StreamHandler(stream)
    console.setLevel(console_level)
    formatter_cls = ColorFormatter if supports_color(stream) else logging.Formatter
    console.setFormatter(formatter_cls(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    root.addHandler(console)

    root_level = console_level
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(min(console_level, logging.INFO))
        fh.setFormatter(logging.Formatter(fmt=LEDGER_FORMAT, datefmt=LEDGER_DATEFMT))
        root.addHandler(fh)
        root_level = min(root_level, logging.INFO)

    root.setLevel(root_level)
