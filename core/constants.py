"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "0.0.0.0"
    WEB_PORT: int = 3000

    LOG_LEVEL: str = "INFO"
    TOKEN_ALGORITHM: str = "HS256"

    APP_VERSION: str = "1.0.0"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일
    DB: Path = DATA_DIR / "inventory.db"


class MovementLimits:
    """입출고 입력값 범위 (양 끝 포함)"""

    QUANTITY_MIN: int = 1
    QUANTITY_MAX: int = 10

    DESTINATION_MIN: int = 1
    DESTINATION_MAX: int = 5
