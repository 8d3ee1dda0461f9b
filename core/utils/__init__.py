"""
유틸리티 패키지

타임스탬프/날짜 변환 등 공통 유틸리티
"""

from core.utils.timezone import (
    DB_TIMESTAMP_FORMAT,
    parse_db_timestamp,
    parse_iso_date,
    to_db_timestamp,
)

__all__ = [
    "DB_TIMESTAMP_FORMAT",
    "parse_db_timestamp",
    "parse_iso_date",
    "to_db_timestamp",
]
