"""
Tests for the request-body validation helpers. Pure functions, no Flask app.
"""

import pytest

from errors import ValidationError
from validators import (
    optional_course_list,
    optional_text,
    require_course,
    require_course_list,
    require_json_object,
    require_text,
)


class TestRequireJsonObject:
    def test_dict_passes(self):
        body = {"name": "Ann"}
        assert require_json_object(body) is body

    @pytest.mark.parametrize("body", [None, [], "text", 3])
    def test_non_object_rejected(self, body):
        with pytest.raises(ValidationError) as exc:
            require_json_object(body)
        assert exc.value.status == 400


class TestRequireText:
    def test_trims(self):
        assert require_text("  Ann ", "name") == "Ann"

    @pytest.mark.parametrize("value", [None, "", "   ", 5])
    def test_missing(self, value):
        with pytest.raises(ValidationError, match="name is required"):
            require_text(value, "name")


class TestOptionalText:
    def test_none_and_blank(self):
        assert optional_text(None, "name") is None
        assert optional_text("  ", "name") is None

    def test_value(self):
        assert optional_text(" Bo ", "name") == "Bo"

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            optional_text(12, "name")


class TestRequireCourse:
    def test_valid(self):
        course = {"id": 1, "name": "Intro"}
        assert require_course(course) is course

    def test_missing(self):
        with pytest.raises(ValidationError, match="course is required"):
            require_course(None)

    def test_no_id(self):
        with pytest.raises(ValidationError, match="string or integer id"):
            require_course({"name": "Intro"})

    def test_not_object(self):
        with pytest.raises(ValidationError):
            require_course("CS101")

    @pytest.mark.parametrize("cid", [[1], {"k": 1}, True, False, 1.5])
    def test_non_scalar_id_rejected(self, cid):
        with pytest.raises(ValidationError, match="string or integer id"):
            require_course({"id": cid, "name": "Intro"})

    @pytest.mark.parametrize("cid", [7, "CS101"])
    def test_string_and_int_ids_accepted(self, cid):
        assert require_course({"id": cid})["id"] == cid


class TestCourseLists:
    def test_empty_list_allowed(self):
        assert require_course_list([]) == []

    def test_not_a_list(self):
        with pytest.raises(ValidationError, match="must be an array"):
            require_course_list({"id": 1})

    def test_bad_entry_reports_index(self):
        with pytest.raises(ValidationError, match=r"selectedCourses\[1\]"):
            require_course_list([{"id": 1}, {"name": "no id"}])

    def test_optional_none(self):
        assert optional_course_list(None) is None

    def test_optional_list(self):
        assert optional_course_list([{"id": 2}]) == [{"id": 2}]

    @pytest.mark.parametrize("cid", [[1], {"k": 1}, True])
    def test_list_with_non_scalar_id_rejected(self, cid):
        with pytest.raises(ValidationError, match=r"selectedCourses\[0\]"):
            require_course_list([{"id": cid}])
