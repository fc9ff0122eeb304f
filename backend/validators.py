"""
Pure input-validation helpers for the student endpoints.
No Flask or storage imports.

Each helper returns the cleaned value or raises ValidationError carrying the
message the HTTP layer sends back to the client.
"""

from typing import Any, List, Optional

from errors import ValidationError
from normalizer import course_id


def require_json_object(body) -> dict:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def require_text(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required!")
    return value.strip()


def optional_text(value, field: str) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string.")
    return value.strip()


def _has_scalar_id(course) -> bool:
    """Course ids are merge keys: strings or ints only (bool is not an int here)."""
    if not isinstance(course, dict):
        return False
    cid = course_id(course)
    return isinstance(cid, (str, int)) and not isinstance(cid, bool)


def require_course(value, field: str = "course") -> dict:
    """A course must be a JSON object whose id is a string or an integer."""
    if not value:
        raise ValidationError(f"{field} is required!")
    if not _has_scalar_id(value):
        raise ValidationError(f"{field} must be an object with a string or integer id.")
    return value


def require_course_list(value, field: str = "selectedCourses") -> List[dict]:
    """
    A list of course objects. Empty lists are accepted; every entry must carry
    a string or integer id, otherwise the whole list is rejected.
    """
    if not isinstance(value, list):
        raise ValidationError(f"{field} must be an array of courses.")
    for index, item in enumerate(value):
        if not _has_scalar_id(item):
            raise ValidationError(f"{field}[{index}] must be an object with a string or integer id.")
    return value


def optional_course_list(value: Any, field: str = "selectedCourses") -> Optional[List[dict]]:
    if value is None:
        return None
    return require_course_list(value, field)
