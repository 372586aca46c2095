"""
services/analytics.py

- 과목별 최고/최저/평균, 평가 구간별 인원 집계
- 저장소를 직접 다루지 않고 collect_scores() 결과(숫자 목록)만 사용
- 빈 목록의 mean/max/min 은 0 (데이터 없음과 실제 0점을 구분하지 않음)
"""

from typing import List

from pydantic import BaseModel

from services.grade_calculator import EXCELLENT_THRESHOLD, GOOD_THRESHOLD


def mean(values: List[float]) -> float:
    if not values:
        return 0
    return sum(values) / len(values)


def maximum(values: List[float]) -> float:
    if not values:
        return 0
    return max(values)


def minimum(values: List[float]) -> float:
    if not values:
        return 0
    return min(values)


class TierCounts(BaseModel):
    excellent: int = 0
    good: int = 0
    needs_improvement: int = 0

    @property
    def total(self) -> int:
        return self.excellent + self.good + self.needs_improvement


def tier_counts(averages: List[float]) -> TierCounts:
    counts = TierCounts()
    for avg in averages:
        if avg >= EXCELLENT_THRESHOLD:
            counts.excellent += 1
        elif avg >= GOOD_THRESHOLD:
            counts.good += 1
        else:
            counts.needs_improvement += 1
    return counts


class SubjectStats(BaseModel):
    highest: float = 0
    lowest: float = 0
    average: float = 0
    count: int = 0


def summarize(values: List[float]) -> SubjectStats:
    return SubjectStats(
        highest=maximum(values),
        lowest=minimum(values),
        average=mean(values),
        count=len(values),
    )


class AnalyticsReport(BaseModel):
    math: SubjectStats
    science: SubjectStats
    english: SubjectStats
    overall: SubjectStats
    distribution: TierCounts

    @property
    def is_empty(self) -> bool:
        return self.overall.count == 0


def build_report(store) -> AnalyticsReport:
    """store.collect_scores() 로 전체 스캔 후 리포트 생성 (캐시 없음)"""
    columns = store.collect_scores()
    return AnalyticsReport(
        math=summarize(columns.math),
        science=summarize(columns.science),
        english=summarize(columns.english),
        overall=summarize(columns.averages),
        distribution=tier_counts(columns.averages),
    )
