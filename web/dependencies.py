"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
DB 연결은 요청 단위로 열고 닫음 (전역 연결 풀 없음).
"""

import logging
from typing import AsyncGenerator

import aiosqlite
import jwt
from fastapi import Depends, Request

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.ledger.access import AGGREGATION_ROLES, RECORD_ROLES, authorize
from core.ledger.errors import AuthenticationError, StorageError
from core.ledger.store import LedgerStore
from core.types import Actor, WorkerRole

logger = logging.getLogger(__name__)


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def _open_db(settings: Settings, readonly: bool) -> SQLiteAdapter:
    """요청 단위 DB 연결 생성

    Raises:
        StorageError: DB 파일을 열 수 없는 경우
    """
    db = SQLiteAdapter(settings.db_path, readonly=readonly)
    try:
        await db.connect()
    except (aiosqlite.Error, OSError) as e:
        logger.error(
            "DB 연결 실패",
            extra={"db_path": str(settings.db_path), "readonly": readonly, "error": str(e)},
        )
        raise StorageError(f"failed to open ledger database: {e}") from e
    return db


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (읽기 전용)

    대시보드 집계 조회용.
    """
    db = await _open_db(settings, readonly=True)
    try:
        yield db
    finally:
        await db.close()


async def get_db_write(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)

    입출고 기록 시 사용.
    """
    db = await _open_db(settings, readonly=False)
    try:
        yield db
    finally:
        await db.close()


async def get_ledger_store(db: SQLiteAdapter = Depends(get_db)) -> LedgerStore:
    """읽기 전용 LedgerStore"""
    return LedgerStore(db)


async def get_ledger_store_write(db: SQLiteAdapter = Depends(get_db_write)) -> LedgerStore:
    """쓰기 가능 LedgerStore"""
    return LedgerStore(db)


# =========================================================================
# 현재 행위자 (Bearer 토큰)
# =========================================================================

def decode_actor(token: str, secret_key: str, algorithm: str) -> Actor | None:
    """Bearer 토큰에서 행위자 추출

    토큰 발급은 외부 인증 계층 책임. 여기서는 서명/만료 확인 후
    workerId, role 클레임만 읽음.

    Returns:
        Actor (서명 오류/만료/클레임 누락이면 None)
    """
    try:
        claims = jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.PyJWTError as e:
        logger.info(f"토큰 검증 실패: {e}")
        return None

    try:
        worker_id = int(claims["workerId"])
        role = WorkerRole(claims["role"])
    except (KeyError, TypeError, ValueError):
        logger.info("토큰 클레임 누락 또는 잘못된 값")
        return None

    return Actor(
        worker_id=worker_id,
        role=role,
        username=claims.get("username"),
        name=claims.get("name"),
    )


def get_current_actor(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Actor | None:
    """요청의 현재 행위자 (없으면 None)"""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")

    if scheme != "Bearer" or not token:
        return None

    return decode_actor(token.strip(), settings.web_secret_key, settings.token_algorithm)


def require_actor(actor: Actor | None = Depends(get_current_actor)) -> Actor:
    """인증된 행위자 필수

    Raises:
        AuthenticationError: 행위자 없음
    """
    if actor is None:
        raise AuthenticationError()
    return actor


def require_recorder(actor: Actor | None = Depends(get_current_actor)) -> Actor:
    """입출고 기록 권한 확인 (DB 연결 전에 호출)"""
    return authorize(actor, RECORD_ROLES)


def require_dashboard_viewer(actor: Actor | None = Depends(get_current_actor)) -> Actor:
    """집계 조회 권한 확인 (DB 연결 전에 호출)"""
    return authorize(actor, AGGREGATION_ROLES)
