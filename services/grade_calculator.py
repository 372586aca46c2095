"""
services/grade_calculator.py

- 평균/평가(remarks) 파생 필드 계산 (순수 함수, I/O 없음)
- 구간 하한 포함: 90 → Excellent, 75 → Good
"""

EXCELLENT = "Excellent"
GOOD = "Good"
NEEDS_IMPROVEMENT = "Needs Improvement"

EXCELLENT_THRESHOLD = 90.0
GOOD_THRESHOLD = 75.0


def calculate_average(math: float, science: float, english: float) -> float:
    return (math + science + english) / 3.0


def calculate_remarks(average: float) -> str:
    if average >= EXCELLENT_THRESHOLD:
        return EXCELLENT
    if average >= GOOD_THRESHOLD:
        return GOOD
    return NEEDS_IMPROVEMENT
