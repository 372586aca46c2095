from sqlalchemy import Column, DateTime, Double, Integer, String, text
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 성적 테이블
    __table_args__ = {"sqlite_autoincrement": True}  # 삭제된 id 재사용 방지 (SQLite)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)  # 고유 학생 ID (Primary Key)
    name = Column(String(100), nullable=False)                              # 학생 이름
    section = Column(String(50))                                            # 반 (미입력 시 "N/A")
    math = Column(Double, default=0, server_default=text("0"))              # 수학 점수
    science = Column(Double, default=0, server_default=text("0"))           # 과학 점수
    english = Column(Double, default=0, server_default=text("0"))           # 영어 점수
    average = Column(Double, default=0, server_default=text("0"))           # 세 과목 평균 (자동 계산)
    remarks = Column(String(50))                                            # 평가 (Excellent / Good / Needs Improvement)
    created_at = Column(DateTime)                                           # 생성 시각
    updated_at = Column(DateTime)                                           # 마지막 수정 시각
