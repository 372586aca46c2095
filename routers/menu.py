from typing import List

from middlewares.error_handler import handle_errors
from schemas.students import DeleteResult, Student
from services.analytics import build_report
from services.student_store import StudentStore
from utils.prompts import confirm, prompt_choice, prompt_grades, prompt_name, prompt_text
from utils.validators import is_valid_name

MENU_ITEMS = [
    "Add Student",
    "View All Students",
    "Update Student",
    "Delete Student",
    "Search by Section",
    "Search Student",
    "View Analytics",
    "Exit",
]
EXIT_CHOICE = len(MENU_ITEMS)


# ==========================================================
# [공통] 출력
# ==========================================================
def print_students(records: List[Student], title: str = "STUDENT RECORDS") -> None:
    print(f"\n=== {title} ===")
    if not records:
        print("No students found.")
        return

    print("-" * 132)
    print(f"{'ID':<5}{'Name':<20}{'Section':<15}{'Math':<8}{'Science':<10}{'English':<10}"
          f"{'Average':<10}{'Remarks':<20}{'Created':<20}{'Updated':<20}")
    print("-" * 132)
    for r in records:
        created = r.created_at.strftime("%Y-%m-%d %H:%M:%S") if r.created_at else ""
        updated = r.updated_at.strftime("%Y-%m-%d %H:%M:%S") if r.updated_at else ""
        print(f"{r.id:<5}{r.name:<20}{r.section or '':<15}{r.math:<8.1f}{r.science:<10.1f}"
              f"{r.english:<10.1f}{r.average:<10.2f}{r.remarks or '':<20}{created:<20}{updated:<20}")
    print("-" * 132)


def print_student(r: Student, title: str) -> None:
    print(f"\n--- {title} ---")
    print(f"ID: {r.id}")
    print(f"Name: {r.name}")
    print(f"Section: {r.section}")
    print(f"Math: {r.math:g}")
    print(f"Science: {r.science:g}")
    print(f"English: {r.english:g}")
    print(f"Average: {r.average:.2f}")
    print(f"Remarks: {r.remarks}")


# ==========================================================
# [메뉴 작업] 각 작업의 DB 오류는 handle_errors 에서 처리 후 메뉴로 복귀
# ==========================================================

# ✅ [1] 학생 추가
@handle_errors
def add_student(store: StudentStore, read=input):
    print("\n=== ADD NEW STUDENT ===")
    name = prompt_name("Enter student name", read)
    section = prompt_text("Enter section", read)
    math, science, english = prompt_grades(read)

    student = store.create(name, section, math, science, english)
    print("✓ Student added successfully!")
    return student


# ✅ [2] 전체 조회
@handle_errors
def view_students(store: StudentStore, read=input):
    records = store.list_all()
    print_students(records)
    return records


# ✅ [3] 수정 (빈 입력 → 기존 이름/반 유지, 점수는 항상 새로 입력)
@handle_errors
def update_student(store: StudentStore, read=input):
    print("\n=== UPDATE STUDENT ===")
    name = prompt_name("Enter student name to update", read)
    current = store.find_exact_by_name(name)
    if current is None:
        print("Student not found.")
        return None
    print_student(current, "Current Record")

    print("\n--- Enter New Information ---")
    new_name = prompt_text("Enter new name (or press Enter to keep current)", read)
    while new_name and not is_valid_name(new_name):
        print("Please enter a proper name (letters and spaces only).")
        new_name = prompt_text("Enter new name (or press Enter to keep current)", read)
    new_section = prompt_text("Enter new section (or press Enter to keep current)", read)

    print("Current grades will be updated. Enter new grades:")
    math, science, english = prompt_grades(read)

    updated = store.update(
        name,
        new_name or current.name,
        new_section or current.section,
        math, science, english,
    )
    if updated is None:
        print("Student not found.")
        return None
    print("✓ Student updated successfully!")
    return updated


# ✅ [4] 삭제 (Y 확인 후에만 삭제)
@handle_errors
def delete_student(store: StudentStore, read=input):
    print("\n=== DELETE STUDENT ===")
    name = prompt_text("Enter student name to delete", read)
    current = store.find_exact_by_name(name)
    if current is None:
        print("Student not found.")
        return DeleteResult.NOT_FOUND
    print_student(current, "Student to be deleted")

    result = store.delete(name, confirmed=confirm("\nAre you sure you want to delete this student?", read))
    if result is DeleteResult.DELETED:
        print("✓ Student deleted successfully!")
    elif result is DeleteResult.CANCELLED:
        print("Delete operation cancelled.")
    else:
        print("Failed to delete student.")
    return result


# ✅ [5] 반으로 검색
@handle_errors
def search_section(store: StudentStore, read=input):
    section = prompt_text("Enter section to search", read)
    records = store.find_by_section(section)
    print_students(records, f"STUDENTS IN SECTION: {section}")
    return records


# ✅ [6] 이름으로 검색
@handle_errors
def search_student(store: StudentStore, read=input):
    query = prompt_name("Enter student name to search", read)
    records = store.find_by_name(query)
    print_students(records, "SEARCH RESULTS")
    return records


# ✅ [7] 성적 분석
@handle_errors
def view_analytics(store: StudentStore, read=input):
    report = build_report(store)
    print("\n=== GRADE ANALYTICS DASHBOARD ===")
    if report.is_empty:
        print("No student data available for analytics.")
        return report

    print("=" * 80)
    print(f"{'Subject':<12}{'Highest':<12}{'Lowest':<12}{'Average':<12}{'Students':<12}")
    print("-" * 80)
    rows = [("Math", report.math), ("Science", report.science), ("English", report.english)]
    for label, stats in rows:
        print(f"{label:<12}{stats.highest:<12.1f}{stats.lowest:<12.1f}{stats.average:<12.1f}{stats.count:<12}")
    print("-" * 80)
    overall = report.overall
    print(f"{'Overall':<12}{overall.highest:<12.1f}{overall.lowest:<12.1f}{overall.average:<12.1f}{overall.count:<12}")
    print("=" * 80)

    dist = report.distribution
    print("\n--- Performance Distribution ---")
    print(f"Excellent (90+): {dist.excellent} students")
    print(f"Good (75-89): {dist.good} students")
    print(f"Needs Improvement (<75): {dist.needs_improvement} students")
    return report


ACTIONS = {
    1: add_student,
    2: view_students,
    3: update_student,
    4: delete_student,
    5: search_section,
    6: search_student,
    7: view_analytics,
}


# ==========================================================
# [메인 루프] Exit 선택 전까지 메뉴 반복
# ==========================================================
def print_menu(title: str) -> None:
    print("\n" + "=" * 50)
    print(f"{title:^50}")
    print("=" * 50)
    for idx, label in enumerate(MENU_ITEMS, start=1):
        print(f"{idx}. {label}")
    print("=" * 50)


def run_menu(store: StudentStore, title: str = "GRADE ANALYTICS DASHBOARD", read=input) -> None:
    while True:
        print_menu(title)
        choice = prompt_choice(f"Enter your choice (1-{EXIT_CHOICE}): ", read)

        if choice == EXIT_CHOICE:
            print(f"\nExiting {title.title()}...")
            print("Thank you for using the system!")
            return

        action = ACTIONS.get(choice)
        if action is None:
            print(f"Invalid choice. Please select 1-{EXIT_CHOICE}.")
        else:
            action(store, read)

        read("\nPress Enter to continue...")
