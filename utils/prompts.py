"""
utils/prompts.py

- 콘솔 입력 루프 (올바른 값이 들어올 때까지 재입력)
- read 인자로 입력 함수를 주입할 수 있음 (테스트용)
"""

from utils.validators import is_valid_name, parse_grade, parse_menu_choice


def prompt_name(label: str, read=input) -> str:
    name = read(f"{label}: ")
    while not is_valid_name(name):
        print("Please enter a proper name (letters and spaces only).")
        name = read(f"{label}: ")
    return name


def prompt_text(label: str, read=input) -> str:
    return read(f"{label}: ").strip()


def prompt_grade(subject: str, read=input) -> float:
    while True:
        try:
            return parse_grade(read(f"Enter {subject} Grade (0 - 100, decimals allowed): "))
        except ValueError:
            print("Invalid! Grade must be between 0 - 100")


def prompt_grades(read=input):
    """(math, science, english)"""
    return (
        prompt_grade("Math", read),
        prompt_grade("Science", read),
        prompt_grade("English", read),
    )


def prompt_choice(label: str, read=input) -> int:
    while True:
        try:
            return parse_menu_choice(read(label))
        except ValueError as e:
            print(f"Invalid! {e}")


def confirm(label: str, read=input) -> bool:
    return read(f"{label} (Y/N): ").strip().upper().startswith("Y")
