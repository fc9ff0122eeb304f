import pytest
from normalizer import course_id, email_key, normalize_email, normalize_student_id


class TestNormalizeEmail:
    def test_trims_whitespace(self):
        assert normalize_email("  ann@x.com ") == "ann@x.com"

    def test_preserves_case(self):
        assert normalize_email("Ann@X.com") == "Ann@X.com"

    def test_blank(self):
        assert normalize_email("   ") is None

    def test_none(self):
        assert normalize_email(None) is None

    def test_non_string(self):
        assert normalize_email(42) is None


class TestEmailKey:
    def test_case_insensitive(self):
        assert email_key("Ann@X.COM") == email_key("ann@x.com")

    def test_whitespace_insensitive(self):
        assert email_key(" ann@x.com") == "ann@x.com"

    def test_blank(self):
        assert email_key("") is None


class TestNormalizeStudentId:
    @pytest.mark.parametrize("raw, expected", [
        (1, 1),
        ("1", 1),
        (" 12 ", 12),
        (3.0, 3),
        ("-4", -4),
    ])
    def test_accepted(self, raw, expected):
        assert normalize_student_id(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, False, 1.5, "abc", "1.5", "", [], {}])
    def test_rejected(self, raw):
        assert normalize_student_id(raw) is None

    def test_string_and_int_match(self):
        assert normalize_student_id("7") == normalize_student_id(7)


class TestCourseId:
    def test_dict(self):
        assert course_id({"id": 3, "name": "Calculus I"}) == 3

    def test_missing_id(self):
        assert course_id({"name": "Calculus I"}) is None

    def test_non_dict(self):
        assert course_id("CS101") is None
