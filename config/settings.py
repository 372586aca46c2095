"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- DB 접속 후보(DB_CANDIDATES)는 콤마로 구분된 "host:port" 목록이며,
  공통 계정 정보(DB_USER/DB_PASSWORD/DB_NAME)와 합쳐 DB_TARGETS(@computed_field)로 제공.
"""

from typing import Annotated, List, Literal

from pydantic import BaseModel, field_validator, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class DBTarget(BaseModel):
    """접속 후보 1개 (host/port/계정/스키마). url이 있으면 그대로 사용"""
    host: str = ""
    port: int = 0
    user: str = ""
    password: str = ""
    name: str = ""
    driver: str = "mysql+pymysql"
    raw_url: str = ""

    @property
    def url(self) -> str:
        """
        SQLAlchemy 접속 URL
        예: mysql+pymysql://root:@127.0.0.1:3306/grades_dashboard
        """
        if self.raw_url:
            return self.raw_url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"

    @property
    def label(self) -> str:
        # 로그/진단 출력용 (비밀번호 미노출)
        if self.raw_url:
            return self.raw_url.split("@")[-1]
        return f"{self.host}:{self.port}"


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "GRADE ANALYTICS DASHBOARD"

    # =========================
    # Database (MySQL)
    # =========================
    DB_DRIVER: str = "mysql+pymysql"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "grades_dashboard"
    DB_CONNECT_TIMEOUT: int = 5
    DB_ECHO: bool = False

    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱 (앞에서부터 순서대로 접속 시도)
    DB_CANDIDATES: Annotated[List[str], NoDecode] = [
        "127.0.0.1:3306",   # 기본 포트
        "127.0.0.1:3307",   # 대체 포트
        "localhost:3306",
        "127.0.0.1:3308",   # XAMPP 기본값
    ]

    @field_validator("DB_CANDIDATES", mode="before")
    @classmethod
    def _split_candidates(cls, v):
        if isinstance(v, str):
            # "a:3306, b:3307" → ["a:3306","b:3307"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @computed_field  # type: ignore[misc]
    @property
    def DB_TARGETS(self) -> List[DBTarget]:
        """
        DB_CANDIDATES를 DBTarget 목록으로 변환.
        - "://"가 포함된 항목은 완성된 SQLAlchemy URL로 간주 (예: sqlite:///grades.db)
        - 포트가 없으면 3306 사용
        """
        targets = []
        for candidate in self.DB_CANDIDATES:
            if "://" in candidate:
                targets.append(DBTarget(raw_url=candidate))
                continue
            host, _, port = candidate.partition(":")
            targets.append(DBTarget(
                host=host,
                port=int(port) if port else 3306,
                user=self.DB_USER,
                password=self.DB_PASSWORD,
                name=self.DB_NAME,
                driver=self.DB_DRIVER,
            ))
        return targets

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
