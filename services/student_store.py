"""
services/student_store.py

- students 테이블 CRUD/검색 담당 (Record Store)
- 세션은 외부(database.db.open_store)에서 주입받아 사용 (전역 연결 없음)
- SQLAlchemy 오류는 ConnectivityError / QueryError 로 변환 후 rollback
- 이름이 같은 학생이 여러 명이면 id가 가장 작은 1명만 수정/삭제 대상 (first match wins)
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.students import Student as StudentModel
from schemas.students import DeleteResult, ScoreColumns, StudentCreate, StudentUpdate
from schemas.students import Student as StudentSchema
from services.exceptions import ConnectivityError, QueryError
from services.grade_calculator import calculate_average, calculate_remarks
from utils.validators import is_valid_name

logger = logging.getLogger(__name__)

_CONNECTIVITY_ERRORS = (OperationalError, InterfaceError, DisconnectionError)


class StudentStore:
    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # [공통] 오류 변환
    # ==========================================================
    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except _CONNECTIVITY_ERRORS as e:
            self.db.rollback()
            logger.error(f"{action} failed (connection): {e}")
            raise ConnectivityError(str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{action} failed (query): {e}")
            raise QueryError(str(e)) from e

    @staticmethod
    def _now() -> datetime:
        # DATETIME 컬럼은 초 단위까지만 저장
        return datetime.now().replace(microsecond=0)

    def _first_by_name(self, name: str) -> Optional[StudentModel]:
        return (
            self.db.query(StudentModel)
            .filter(func.lower(StudentModel.name) == name.lower())
            .order_by(StudentModel.id)
            .first()
        )

    # ==========================================================
    # [CREATE]
    # ==========================================================
    def create(self, name: str, section: Optional[str], math: float, science: float, english: float) -> StudentSchema:
        data = StudentCreate(name=name, section=section, math=math, science=science, english=english)
        average = calculate_average(data.math, data.science, data.english)
        now = self._now()

        db_student = StudentModel(
            **data.model_dump(),
            average=average,
            remarks=calculate_remarks(average),
            created_at=now,
            updated_at=now,
        )
        with self._guard("Create"):
            self.db.add(db_student)
            self.db.commit()
            self.db.refresh(db_student)

        logger.info(f"Student added: id={db_student.id}, name={db_student.name}")
        return StudentSchema.model_validate(db_student)

    # ==========================================================
    # [READ] 조회/검색
    # ==========================================================
    def list_all(self) -> List[StudentSchema]:
        with self._guard("List"):
            records = self.db.query(StudentModel).order_by(StudentModel.id).all()
        return [StudentSchema.model_validate(r) for r in records]

    def get(self, student_id: int) -> Optional[StudentSchema]:
        with self._guard("Get"):
            record = self.db.get(StudentModel, student_id)
        return StudentSchema.model_validate(record) if record else None

    def find_by_name(self, query: str) -> List[StudentSchema]:
        """이름 부분 일치 (대소문자 무시), 이름순"""
        if not is_valid_name(query):
            raise ValueError("Please enter a proper name (letters and spaces only).")
        with self._guard("Search by name"):
            records = (
                self.db.query(StudentModel)
                .filter(func.lower(StudentModel.name).like(f"%{query.lower()}%"))
                .order_by(StudentModel.name)
                .all()
            )
        return [StudentSchema.model_validate(r) for r in records]

    def find_by_section(self, section: str) -> List[StudentSchema]:
        """반 완전 일치 (대소문자 무시), 이름순"""
        with self._guard("Search by section"):
            records = (
                self.db.query(StudentModel)
                .filter(func.lower(StudentModel.section) == section.strip().lower())
                .order_by(StudentModel.name)
                .all()
            )
        return [StudentSchema.model_validate(r) for r in records]

    def find_exact_by_name(self, name: str) -> Optional[StudentSchema]:
        with self._guard("Find"):
            record = self._first_by_name(name)
        return StudentSchema.model_validate(record) if record else None

    def collect_scores(self) -> ScoreColumns:
        """분석용 전체 스캔 (매 호출마다 새로 조회)"""
        with self._guard("Analytics"):
            rows = self.db.query(
                StudentModel.math, StudentModel.science, StudentModel.english, StudentModel.average
            ).all()

        # NULL 점수는 0으로 취급
        columns = ScoreColumns()
        for m, s, e, a in rows:
            m, s, e, a = (0.0 if v is None else v for v in (m, s, e, a))
            columns.math.append(m)
            columns.science.append(s)
            columns.english.append(e)
            columns.averages.append(a)
        return columns

    # ==========================================================
    # [UPDATE]
    # ==========================================================
    def update(
        self,
        name: str,
        new_name: Optional[str],
        new_section: Optional[str],
        math: float,
        science: float,
        english: float,
    ) -> Optional[StudentSchema]:
        """이름으로 찾아 수정. 없으면 None"""
        data = StudentUpdate(
            new_name=new_name, new_section=new_section, math=math, science=science, english=english
        )
        with self._guard("Update"):
            record = self._first_by_name(name)
            if record is None:
                return None

            if data.new_name is not None:
                record.name = data.new_name
            if data.new_section is not None:
                record.section = data.new_section
            record.math = data.math
            record.science = data.science
            record.english = data.english
            record.average = calculate_average(data.math, data.science, data.english)
            record.remarks = calculate_remarks(record.average)
            record.updated_at = self._now()

            self.db.commit()
            self.db.refresh(record)

        logger.info(f"Student updated: id={record.id}, name={record.name}")
        return StudentSchema.model_validate(record)

    # ==========================================================
    # [DELETE]
    # ==========================================================
    def delete(self, name: str, confirmed: bool) -> DeleteResult:
        with self._guard("Delete"):
            record = self._first_by_name(name)
            if record is None:
                return DeleteResult.NOT_FOUND
            if not confirmed:
                return DeleteResult.CANCELLED

            student_id = record.id
            self.db.delete(record)
            self.db.commit()

        logger.info(f"Student deleted: id={student_id}, name={name}")
        return DeleteResult.DELETED
