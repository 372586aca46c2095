"""
utils/validators.py

- 콘솔 입력/스키마에서 공통으로 쓰는 검증 함수
"""

MIN_GRADE = 0.0
MAX_GRADE = 100.0


def is_valid_name(name: str) -> bool:
    """비어있지 않고, 모든 문자가 ASCII 알파벳 또는 공백이면 True"""
    if not name:
        return False
    return all((c.isascii() and c.isalpha()) or c.isspace() for c in name)


def is_valid_grade(value: float) -> bool:
    return MIN_GRADE <= value <= MAX_GRADE


def parse_grade(text: str) -> float:
    """'87.5' → 87.5 / 숫자가 아니거나 0~100 범위 밖이면 ValueError"""
    value = float(text.strip())
    if value != value or not is_valid_grade(value):  # NaN 포함
        raise ValueError(f"Grade must be between {MIN_GRADE:g} - {MAX_GRADE:g}")
    return value


def parse_menu_choice(text: str) -> int:
    """정수만 허용 (소수점, 부호, 빈 문자열 거부)"""
    text = text.strip()
    if "." in text:
        raise ValueError("Please enter a whole number (no decimals).")
    if not text or not text.isdigit():
        raise ValueError("Please enter a valid number.")
    return int(text)
