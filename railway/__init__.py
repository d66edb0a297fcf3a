"""철도 승차권 예약 원장"""

__version__ = "1.0.0"
