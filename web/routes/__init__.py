"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- me: 현재 작업자
- movements: 입고/출고 기록
- dashboard: 집계 조회 (일별, 목적지별, 일자 상세, 현재 재고)
"""
