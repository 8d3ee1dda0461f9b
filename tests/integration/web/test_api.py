"""
Web API 통합 테스트

임시 파일 DB + 테스트용 secrets.yaml로 FastAPI 앱 전체 경로 검증.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings, get_settings
from core.utils.timezone import to_db_timestamp
from web.app import app

TEST_SECRET_KEY = "test_jwt_secret_key_xyz"


def make_token(worker_id: int, role: str, **claims) -> str:
    payload = {"workerId": worker_id, "role": role, **claims}
    return jwt.encode(payload, TEST_SECRET_KEY, algorithm="HS256")


def auth(worker_id: int, role: str, **claims) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(worker_id, role, **claims)}"}


ADMIN = auth(1, "admin", username="boss", name="관리자")
DESKTOP = auth(2, "desktop")
SCANNER = auth(3, "scanner")


@pytest_asyncio.fixture
async def ledger_db(temp_secrets_file: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """설정이 가리키는 파일 DB (스키마 초기화 완료)

    테스트 동안 쓰기 연결을 열어 두어 읽기 전용 연결이 WAL 파일을 공유.
    """
    Settings.reset()
    settings = get_settings(temp_secrets_file)

    adapter = SQLiteAdapter(settings.db_path)
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()
    Settings.reset()


@pytest_asyncio.fixture
async def client(ledger_db: SQLiteAdapter) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def set_anchor(db: SQLiteAdapter, starting_qty: int, effective_time: datetime) -> None:
    await db.execute(
        "INSERT OR REPLACE INTO inventory_start_balance (id, starting_qty, effective_time) "
        "VALUES (1, ?, ?)",
        (starting_qty, to_db_timestamp(effective_time)),
    )
    await db.commit()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestMe:
    """GET /api/me"""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient) -> None:
        response = await client.get("/api/me", headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {
            "worker_id": 1,
            "role": "admin",
            "username": "boss",
            "name": "관리자",
        }

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": f"Token {make_token(1, 'admin')}"},
        {"Authorization": "Bearer " + jwt.encode({"workerId": 1, "role": "admin"}, "other", algorithm="HS256")},
        {"Authorization": "Bearer " + jwt.encode({"workerId": 1, "role": "forklift"}, TEST_SECRET_KEY, algorithm="HS256")},
        {"Authorization": "Bearer " + jwt.encode({"role": "admin"}, TEST_SECRET_KEY, algorithm="HS256")},
    ])
    async def test_rejected_tokens(self, client: AsyncClient, headers) -> None:
        response = await client.get("/api/me", headers=headers)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, client: AsyncClient) -> None:
        expired = datetime.now(timezone.utc) - timedelta(minutes=5)
        headers = auth(1, "admin", exp=expired)

        response = await client.get("/api/me", headers=headers)

        assert response.status_code == 401


class TestMovements:
    """POST /api/incoming, /api/outgoing"""

    @pytest.mark.asyncio
    async def test_incoming_created(self, client: AsyncClient) -> None:
        response = await client.post("/api/incoming", json={"quantity": 5}, headers=SCANNER)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "saved"
        assert body["movement"]["action"] == "incoming"
        assert body["movement"]["quantity"] == 5
        assert body["movement"]["worker_id"] == 3
        assert body["movement"]["destination"] is None

    @pytest.mark.asyncio
    async def test_incoming_ignores_destination(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/incoming",
            json={"quantity": "2", "destination": 4},
            headers=DESKTOP,
        )

        assert response.status_code == 201
        assert response.json()["movement"]["destination"] is None

    @pytest.mark.asyncio
    async def test_outgoing_created(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/outgoing",
            json={"quantity": 3, "destination": 2},
            headers=SCANNER,
        )

        assert response.status_code == 201
        assert response.json()["movement"]["destination"] == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path, body, detail", [
        ("/api/incoming", {"quantity": 0}, "invalid quantity"),
        ("/api/incoming", {"quantity": 11}, "invalid quantity"),
        ("/api/incoming", {}, "invalid quantity"),
        ("/api/incoming", {"quantity": 2.5}, "invalid quantity"),
        ("/api/outgoing", {"quantity": 3}, "destination must be an integer 1-5"),
        ("/api/outgoing", {"quantity": 3, "destination": 6}, "destination must be an integer 1-5"),
        ("/api/outgoing", {"quantity": 30, "destination": 1}, "invalid quantity"),
    ])
    async def test_invalid_input(
        self,
        client: AsyncClient,
        ledger_db: SQLiteAdapter,
        path: str,
        body: dict,
        detail: str,
    ) -> None:
        response = await client.post(path, json=body, headers=SCANNER)

        assert response.status_code == 400
        assert response.json() == {"detail": detail}

        row = await ledger_db.fetchone("SELECT COUNT(*) FROM inventory_movement")
        assert row[0] == 0

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient, ledger_db: SQLiteAdapter) -> None:
        response = await client.post("/api/incoming", json={"quantity": 1})

        assert response.status_code == 401

        row = await ledger_db.fetchone("SELECT COUNT(*) FROM inventory_movement")
        assert row[0] == 0


class TestDashboard:
    """GET /api/dashboard/*"""

    @pytest.mark.asyncio
    async def test_scanner_forbidden(self, client: AsyncClient) -> None:
        for path in (
            "/api/dashboard/daily?startDate=2024-01-01&endDate=2024-01-31",
            "/api/dashboard/destinations?startDate=2024-01-01&endDate=2024-01-31",
            "/api/dashboard/day-details?date=2024-01-01",
            "/api/dashboard/on-hand",
        ):
            response = await client.get(path, headers=SCANNER)
            assert response.status_code == 403, path

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/dashboard/on-hand")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_dates(self, client: AsyncClient) -> None:
        response = await client.get("/api/dashboard/daily", headers=DESKTOP)

        assert response.status_code == 400
        assert response.json() == {"detail": "startDate and endDate required"}

    @pytest.mark.asyncio
    async def test_invalid_date(self, client: AsyncClient) -> None:
        response = await client.get("/api/dashboard/day-details?date=yesterday", headers=ADMIN)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_on_hand_without_anchor(self, client: AsyncClient) -> None:
        await client.post("/api/incoming", json={"quantity": 5}, headers=SCANNER)

        response = await client.get("/api/dashboard/on-hand", headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {"onHand": 0}

    @pytest.mark.asyncio
    async def test_record_then_aggregate(
        self,
        client: AsyncClient,
        ledger_db: SQLiteAdapter,
    ) -> None:
        """기록 → 집계 전체 흐름"""
        await set_anchor(ledger_db, 100, datetime(2000, 1, 1, tzinfo=timezone.utc))

        incoming = await client.post("/api/incoming", json={"quantity": 10}, headers=SCANNER)
        outgoing = await client.post(
            "/api/outgoing",
            json={"quantity": 3, "destination": 2},
            headers=SCANNER,
        )
        assert incoming.status_code == outgoing.status_code == 201

        day = outgoing.json()["movement"]["movement_time"][:10]

        on_hand = await client.get("/api/dashboard/on-hand", headers=DESKTOP)
        assert on_hand.json() == {"onHand": 107}

        daily = await client.get(
            f"/api/dashboard/daily?startDate={day}&endDate={day}",
            headers=DESKTOP,
        )
        assert daily.status_code == 200
        assert daily.json()["data"] == [
            {"date": day, "action": "incoming", "total": 10},
            {"date": day, "action": "outgoing", "total": 3},
        ]

        destinations = await client.get(
            f"/api/dashboard/destinations?startDate={day}&endDate={day}",
            headers=ADMIN,
        )
        assert destinations.json()["data"] == [{"destination": 2, "total": 3, "count": 1}]

        details = await client.get(f"/api/dashboard/day-details?date={day}", headers=ADMIN)
        ids = [m["id"] for m in details.json()["data"]]
        assert ids == [outgoing.json()["movement"]["id"], incoming.json()["movement"]["id"]]


class TestStorageFailure:
    """저장소 오류 → 500 (드라이버 메시지 비노출)"""

    @pytest_asyncio.fixture
    async def broken_client(self, temp_dir: Path) -> AsyncGenerator[AsyncClient, None]:
        """열 수 없는 DB 경로를 가리키는 설정"""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        secrets_path = temp_dir / "broken_secrets.yaml"
        secrets_path.write_text(
            f'web:\n  secret_key: "{TEST_SECRET_KEY}"\n'
            f'database:\n  path: "{(blocker / "ledger.db").as_posix()}"\n',
            encoding="utf-8",
        )

        Settings.reset()
        get_settings(secrets_path)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
        Settings.reset()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method, path", [
        ("GET", "/api/dashboard/on-hand"),
        ("GET", "/api/dashboard/daily?startDate=2024-01-01&endDate=2024-01-01"),
        ("POST", "/api/incoming"),
    ])
    async def test_missing_identity_checked_before_store(
        self,
        broken_client: AsyncClient,
        method: str,
        path: str,
    ) -> None:
        """DB를 열 수 없어도 토큰 없는 요청은 401"""
        response = await broken_client.request(method, path, json={"quantity": 1})

        assert response.status_code == 401
        assert response.json() == {"detail": "authentication required"}

    @pytest.mark.asyncio
    async def test_scanner_checked_before_store(self, broken_client: AsyncClient) -> None:
        response = await broken_client.get("/api/dashboard/on-hand", headers=SCANNER)

        assert response.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method, path, headers", [
        ("GET", "/api/dashboard/on-hand", ADMIN),
        ("POST", "/api/incoming", SCANNER),
    ])
    async def test_unopenable_database(
        self,
        broken_client: AsyncClient,
        method: str,
        path: str,
        headers: dict[str, str],
    ) -> None:
        """DB 연결 실패 → 500 database error"""
        response = await broken_client.request(method, path, json={"quantity": 1}, headers=headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "database error"}

    @pytest.mark.asyncio
    async def test_query_failure(self, client: AsyncClient, ledger_db: SQLiteAdapter) -> None:
        """테이블 유실 시 기록/집계 모두 500"""
        await ledger_db.execute("DROP TABLE inventory_movement")
        await ledger_db.commit()

        recorded = await client.post("/api/incoming", json={"quantity": 1}, headers=SCANNER)
        daily = await client.get(
            "/api/dashboard/daily?startDate=2024-01-01&endDate=2024-01-01",
            headers=ADMIN,
        )

        for response in (recorded, daily):
            assert response.status_code == 500
            assert response.json() == {"detail": "database error"}
            assert "no such table" not in response.text
