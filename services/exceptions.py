"""
services/exceptions.py

- 저장소 계층에서 사용하는 예외 모음
- 입력값 검증 오류는 pydantic.ValidationError(스키마) / ValueError(콘솔 파서)를 그대로 사용
"""

from typing import List, Tuple


class StorageError(Exception):
    """DB 작업 실패 공통 부모 (메뉴로 복귀 가능한 오류)"""


class ConnectivityError(StorageError):
    """DB 서비스 접속 불가 / 연결 끊김"""


class QueryError(StorageError):
    """잘못된 쿼리 또는 제약조건 위반"""


class BootstrapConnectionError(Exception):
    """
    시작 시 모든 접속 후보에 실패한 경우 (치명적 오류)
    - attempts: [(후보 라벨, 에러 메시지), ...]
    """

    def __init__(self, attempts: List[Tuple[str, str]]):
        self.attempts = attempts
        tried = ", ".join(label for label, _ in attempts) or "(none)"
        super().__init__(f"Could not connect to any database candidate: {tried}")
