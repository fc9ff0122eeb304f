import re

# Base-10 integer, optionally signed, surrounding whitespace allowed.
_INT_RE = re.compile(r'^\s*[-+]?\d+\s*$')


def normalize_email(raw) -> str | None:
    """
    Trims an email address as supplied by the client.
    Returns None for blank or non-string input. Case is preserved for storage;
    use email_key() for comparisons.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    return raw.strip()


def email_key(raw) -> str | None:
    """Case-insensitive identity key: 'Ann@X.com ' and 'ann@x.com' match."""
    email = normalize_email(raw)
    return email.casefold() if email is not None else None


def normalize_student_id(raw) -> int | None:
    """
    Normalizes a student id from a URL segment or a stored record.
    Handles: 1, '1', ' 12 ', 3.0
    Returns None for anything that is not a whole number ('abc', 1.5, True, None).
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str) and _INT_RE.match(raw):
        return int(raw.strip())
    return None


def course_id(course):
    """Merge key of a course record. Only the id field takes part in de-duplication."""
    if isinstance(course, dict):
        return course.get("id")
    return None
