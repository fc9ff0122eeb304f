"""
Read-only access to the loaded course catalog (see data_loader.load_catalog).

Every function returns fresh lists/dicts so callers can annotate or serialize
them without touching the catalog held by the server.
"""

from errors import NotFoundError

MAJOR_NOT_FOUND = "Major not found"


def list_majors(catalog: dict) -> list[str]:
    return list(catalog["majors"])


def list_all_courses(catalog: dict) -> list[dict]:
    """All courses, majors in catalog order then courses within each major, tagged with their major."""
    all_courses = []
    for major, courses in catalog["courses_by_major"].items():
        for course in courses:
            all_courses.append({**course, "major": major})
    return all_courses


def list_courses_by_major(catalog: dict, major_name: str) -> list[dict]:
    courses = catalog["courses_by_major"].get(major_name)
    if courses is None:
        raise NotFoundError(MAJOR_NOT_FOUND)
    return [dict(course) for course in courses]
