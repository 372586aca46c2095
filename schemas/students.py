from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.validators import MAX_GRADE, MIN_GRADE, is_valid_name

SECTION_PLACEHOLDER = "N/A"


def _validate_name(v: str) -> str:
    if not is_valid_name(v):
        raise ValueError("Please enter a proper name (letters and spaces only).")
    return v


# ✅ 입력용 (추가)
class StudentCreate(BaseModel):
    name: str                                           # 학생 이름 (알파벳/공백만)
    section: Optional[str] = None                       # 반 (공백이면 "N/A")
    math: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE)
    science: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE)
    english: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE)

    @field_validator("name")
    @classmethod
    def _name_format(cls, v):
        return _validate_name(v)

    @field_validator("section", mode="before")
    @classmethod
    def _default_section(cls, v):
        if v is None or not str(v).strip():
            return SECTION_PLACEHOLDER
        return str(v).strip()


# ✅ 입력용 (수정) - 이름/반이 비어있으면 기존 값 유지
class StudentUpdate(BaseModel):
    new_name: Optional[str] = None
    new_section: Optional[str] = None
    math: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE)
    science: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE)
    english: float = Field(..., ge=MIN_GRADE, le=MAX_GRADE)

    @field_validator("new_name", "new_section", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("new_name")
    @classmethod
    def _check_new_name(cls, v):
        return v if v is None else _validate_name(v)


# ✅ 전체 출력용 (조회)
class Student(BaseModel):
    id: int
    name: str
    section: Optional[str] = None
    math: float
    science: float
    english: float
    average: float
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("math", "science", "english", "average", mode="before")
    @classmethod
    def _null_score(cls, v):
        # NULL 점수는 0으로 표시
        return 0.0 if v is None else v

    model_config = ConfigDict(from_attributes=True)  # Pydantic v2 기준


class DeleteResult(str, Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"


class ScoreColumns(BaseModel):
    """분석용 전체 스캔 결과 (과목별 점수 목록)"""
    math: List[float] = []
    science: List[float] = []
    english: List[float] = []
    averages: List[float] = []
