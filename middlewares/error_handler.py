import functools
import logging
import sys

from services.exceptions import ConnectivityError, StorageError

logger = logging.getLogger(__name__)


def handle_errors(action):
    """
    메뉴 작업 1개를 감싸는 경계 핸들러
    - StorageError(접속/쿼리 오류), ValueError(검증 오류, pydantic 포함)는 로그 + stderr 출력 후 None 반환
    - 그 외 예외는 그대로 전파
    """
    @functools.wraps(action)
    def wrapper(*args, **kwargs):
        try:
            return action(*args, **kwargs)
        except ConnectivityError as exc:
            logger.error(f"{action.__name__}: database unreachable: {exc}")
            print(f"MySQL connection error: {exc}", file=sys.stderr)
        except StorageError as exc:
            logger.error(f"{action.__name__}: query failed: {exc}")
            print(f"MySQL error: {exc}", file=sys.stderr)
        except ValueError as exc:
            logger.warning(f"{action.__name__}: invalid input: {exc}")
            print(f"Invalid input: {exc}", file=sys.stderr)
        return None

    return wrapper
