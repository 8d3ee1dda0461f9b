"""
설정 로더

secrets.yaml 로드 및 Web/DB 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths, PROJECT_ROOT


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    web_secret_key: str
    token_algorithm: str
    db_path: Path


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _resolve_db_path(raw: str | None) -> Path:
    """database.path 값을 절대 경로로 변환

    상대 경로는 프로젝트 루트 기준으로 해석.
    """
    if not raw:
        return Paths.DB

    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    # Web 토큰 검증 키
    web_config = data.get("web") or {}
    web_secret_key = web_config.get("secret_key", "")

    if not web_secret_key:
        raise SecretsLoadError(
            "secrets.yaml의 web 섹션에 'secret_key'가 없습니다"
        )

    token_algorithm = web_config.get("token_algorithm") or Defaults.TOKEN_ALGORITHM

    # DB 경로 (선택)
    db_config = data.get("database") or {}
    db_path = _resolve_db_path(db_config.get("path"))

    return Secrets(
        web_secret_key=web_secret_key,
        token_algorithm=token_algorithm,
        db_path=db_path,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def web_secret_key(self) -> str:
        """Web 토큰 검증 키"""
        assert self._secrets is not None
        return self._secrets.web_secret_key

    @property
    def token_algorithm(self) -> str:
        """토큰 서명 알고리즘"""
        assert self._secrets is not None
        return self._secrets.token_algorithm

    @property
    def db_path(self) -> Path:
        """Ledger DB 경로"""
        assert self._secrets is not None
        return self._secrets.db_path

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
