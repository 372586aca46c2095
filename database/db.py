import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, Tuple

from sqlalchemy import create_engine, text               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker  # 모델의 Base 클래스 / 세션 팩토리

from config.settings import DBTarget, Settings, settings   # ✅ 환경변수 설정 파일 불러오기
from services.exceptions import BootstrapConnectionError

logger = logging.getLogger(__name__)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()

# ✅ 세션 팩토리: 엔진은 부트스트랩에서 결정되므로 bind 없이 생성
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def make_engine(url: str, connect_timeout: int = 5, echo: bool = False) -> Engine:
    """URL로 엔진 생성. MySQL(pymysql)인 경우에만 connect_timeout 전달"""
    connect_args = {}
    if url.startswith("mysql"):
        connect_args["connect_timeout"] = connect_timeout
    return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def try_connect(target: DBTarget, connect_timeout: int = 5, echo: bool = False) -> Engine:
    """후보 1개에 SELECT 1 을 보내 응답하면 엔진 반환, 실패 시 SQLAlchemyError 전파"""
    engine = make_engine(target.url, connect_timeout=connect_timeout, echo=echo)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        engine.dispose()
        raise
    return engine


# ==========================================================
# [부트스트랩] 후보 목록을 순서대로 시도 → 첫 번째 성공 사용
# ==========================================================
def connect_first(
    targets: Iterable[DBTarget],
    connect_timeout: int = 5,
    echo: bool = False,
) -> Tuple[Engine, DBTarget]:
    attempts = []
    for target in targets:
        logger.info(f"Trying {target.label}...")
        try:
            engine = try_connect(target, connect_timeout=connect_timeout, echo=echo)
        except SQLAlchemyError as e:
            logger.warning(f"Connection failed on {target.label}: {e}")
            attempts.append((target.label, str(e)))
            continue
        logger.info(f"Connection test successful on {target.label}")
        return engine, target

    raise BootstrapConnectionError(attempts)


def init_schema(engine: Engine) -> None:
    """students 테이블이 없으면 생성 (CREATE TABLE IF NOT EXISTS 와 동일)"""
    import models.students  # noqa: F401  모델을 metadata에 등록

    Base.metadata.create_all(bind=engine)


# ==========================================================
# [공통] 저장소 수명 관리 (프로세스 시작 시 1회 연결 → 종료 시 반드시 해제)
# ==========================================================
@contextmanager
def open_store(config: Optional[Settings] = None) -> Iterator["StudentStore"]:
    from services.student_store import StudentStore

    config = config or settings
    engine, target = connect_first(
        config.DB_TARGETS,
        connect_timeout=config.DB_CONNECT_TIMEOUT,
        echo=config.DB_ECHO,
    )
    # 테이블 생성 실패(권한 없음, 읽기 전용 DB 등)도 부트스트랩 실패로 처리
    try:
        init_schema(engine)
        db = SessionLocal(bind=engine)
    except SQLAlchemyError as e:
        engine.dispose()
        logger.error(f"Schema setup failed on {target.label}: {e}")
        raise BootstrapConnectionError([(f"{target.label} (schema)", str(e))]) from e

    try:
        yield StudentStore(db)
    finally:
        db.close()
        engine.dispose()
        logger.info(f"Database connection closed ({target.label}).")
