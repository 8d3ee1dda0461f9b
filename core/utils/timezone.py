"""
시간 유틸리티

내부 저장: UTC 원칙. 날짜 입력(YYYY-MM-DD) 파싱과
SQLite 타임스탬프 문자열 변환 헬퍼.
"""

from datetime import date, datetime, timezone

# SQLite에 저장되는 타임스탬프 형식 (밀리초, UTC, 타임존 표기 없음)
DB_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def parse_db_timestamp(value: str) -> datetime:
    """DB 타임스탬프 문자열을 UTC datetime으로 변환

    'YYYY-MM-DD HH:MM:SS[.fff]' 및 ISO 8601 형식 모두 허용.
    타임존 표기가 없으면 UTC로 간주.

    Example:
        >>> parse_db_timestamp("2024-01-01 09:30:00.125")
        datetime(2024, 1, 1, 9, 30, 0, 125000, tzinfo=timezone.utc)
    """
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_db_timestamp(dt: datetime) -> str:
    """datetime을 DB 저장 형식 문자열로 변환 (UTC, 밀리초)"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc = dt.astimezone(timezone.utc)
    return utc.strftime(DB_TIMESTAMP_FORMAT)[:-3]


def parse_iso_date(value: date | str) -> date:
    """YYYY-MM-DD 문자열을 date로 변환

    다른 ISO 8601 표기(20240101, 2024-W01-1 등)와
    0을 생략한 월/일(2024-1-5)은 허용하지 않음.

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if len(text) != len("YYYY-MM-DD") or not text.isascii():
        raise ValueError(f"date must be YYYY-MM-DD: {value!r}")
    return datetime.strptime(text, "%Y-%m-%d").date()
