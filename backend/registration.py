"""
Student registration logic.

Every function here operates on an in-memory list of student dicts (the
JSON-shaped records held by student_store) and mutates it in place. None of
them touch the disk; the caller decides whether to persist based on the
returned outcome:

  "existing"  - register() found the email already on file, nothing changed
  "created"   - a new record was appended
  "updated"   - an existing record was modified
  "unchanged" - an existing record matched but nothing was modified
  "deleted"   - a record was removed

Record shape: {"id": int, "name": str, "email": str, "selectedCourses": [course, ...]}
"""

from errors import NotFoundError
from normalizer import course_id, email_key, normalize_email, normalize_student_id
from validators import (
    optional_course_list,
    optional_text,
    require_course,
    require_course_list,
    require_text,
)

UNKNOWN_NAME = "Unknown"
STUDENT_NOT_FOUND = "Student not found"

MUTATING_OUTCOMES = frozenset({"created", "updated", "deleted"})


def next_student_id(students: list[dict]) -> int:
    """
    Next id to hand out: one past the larger of the record count and the
    highest live id. On a store that never saw a deletion this is count+1;
    after deletions it can no longer collide with a surviving record.
    """
    highest = 0
    for student in students:
        sid = normalize_student_id(student.get("id"))
        if sid is not None and sid > highest:
            highest = sid
    return max(len(students), highest) + 1


def merge_courses(existing: list[dict], incoming: list[dict]) -> list[dict]:
    """
    Returns the courses from incoming whose id is not yet present, in incoming
    order. Later same-id duplicates inside incoming are dropped too; the first
    copy of an id always wins and other fields are never reconciled.
    """
    seen = {course_id(c) for c in existing}
    added = []
    for course in incoming:
        cid = course_id(course)
        if cid in seen:
            continue
        seen.add(cid)
        added.append(course)
    return added


def _dedupe_courses(courses: list[dict]) -> list[dict]:
    return merge_courses([], courses)


def find_by_email(students: list[dict], email) -> dict | None:
    key = email_key(email)
    if key is None:
        return None
    for student in students:
        if email_key(student.get("email")) == key:
            return student
    return None


def _index_by_id(students: list[dict], student_id) -> int:
    wanted = normalize_student_id(student_id)
    if wanted is None:
        return -1
    for index, student in enumerate(students):
        if normalize_student_id(student.get("id")) == wanted:
            return index
    return -1


def find_by_id(students: list[dict], student_id) -> dict | None:
    index = _index_by_id(students, student_id)
    return students[index] if index >= 0 else None


def _new_student(students: list[dict], name: str, email: str, courses: list[dict]) -> dict:
    student = {
        "id": next_student_id(students),
        "name": name,
        "email": email,
        "selectedCourses": _dedupe_courses(courses),
    }
    students.append(student)
    return student


def register(students: list[dict], name, email) -> tuple[dict, str]:
    """Create a student with no courses, or return the one already holding this email."""
    name = require_text(name, "name")
    email = normalize_email(require_text(email, "email"))

    existing = find_by_email(students, email)
    if existing is not None:
        return existing, "existing"
    return _new_student(students, name, email, []), "created"


def complete_registration(students: list[dict], name, email, selected_courses) -> tuple[dict, str]:
    """
    Create a student with the given courses, or merge the courses into the
    existing record for this email. The name of an existing student is kept.
    """
    email = normalize_email(require_text(email, "email"))
    courses = require_course_list(selected_courses)
    name = optional_text(name, "name")

    existing = find_by_email(students, email)
    if existing is None:
        return _new_student(students, name or UNKNOWN_NAME, email, courses), "created"

    current = existing["selectedCourses"] = list(existing.get("selectedCourses") or [])
    added = merge_courses(current, courses)
    current.extend(added)
    return existing, ("updated" if added else "unchanged")


def register_course(students: list[dict], email, course) -> tuple[dict, str]:
    """
    Add a single course to the student holding this email, creating a
    placeholder student first when the email is unknown.
    """
    email = normalize_email(require_text(email, "email"))
    course = require_course(course)

    student = find_by_email(students, email)
    created = student is None
    if created:
        student = _new_student(students, UNKNOWN_NAME, email, [])

    current = student["selectedCourses"] = list(student.get("selectedCourses") or [])
    added = merge_courses(current, [course])
    current.extend(added)
    if created:
        return student, "created"
    return student, ("updated" if added else "unchanged")


def get_by_email(students: list[dict], email) -> dict:
    student = find_by_email(students, email)
    if student is None:
        raise NotFoundError(STUDENT_NOT_FOUND)
    return student


def get_by_id(students: list[dict], student_id) -> dict:
    student = find_by_id(students, student_id)
    if student is None:
        raise NotFoundError(STUDENT_NOT_FOUND)
    return student


def update_courses(students: list[dict], student_id, selected_courses) -> tuple[dict, str]:
    """
    Replace a student's course list wholesale. None leaves the list as it is;
    any list, including an empty one, replaces it.
    """
    student = get_by_id(students, student_id)
    courses = optional_course_list(selected_courses)
    if courses is None:
        return student, "unchanged"
    student["selectedCourses"] = _dedupe_courses(courses)
    return student, "updated"


def delete_student(students: list[dict], student_id) -> tuple[dict, str]:
    """Remove exactly one record and return it."""
    index = _index_by_id(students, student_id)
    if index < 0:
        raise NotFoundError(STUDENT_NOT_FOUND)
    return students.pop(index), "deleted"
