"""
Ledger 예외

모든 예외는 호출자 경계에서 종료됨 (재시도/대체값 없음).
"""


class InventoryError(Exception):
    """Ledger 예외 기본 클래스"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(InventoryError):
    """입력값 오류

    수량/목적지/날짜/종류가 잘못된 경우.
    저장소 접근 전에 거부되며 부분 반영 없음.
    """
    pass


class AuthenticationError(InventoryError):
    """유효한 행위자 신원이 없음"""

    def __init__(self, message: str = "authentication required"):
        super().__init__(message)


class AuthorizationError(InventoryError):
    """역할 권한 부족"""

    def __init__(self, role: str, message: str | None = None):
        self.role = role
        super().__init__(message or f"role '{role}' is not allowed")


class StorageError(InventoryError):
    """저장소 쓰기/조회 실패

    실패한 쓰기는 롤백되어 어떤 행도 남기지 않음.
    """
    pass
